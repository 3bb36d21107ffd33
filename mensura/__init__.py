"""
mensura
=======

The duration engine of a music notation toolkit.

A :class:`~mensura.duration.Duration` represents the length of a musical event
both symbolically, as a note value with dots and tuplets, and numerically, as
a *quarterLength* (1 = a quarter note). Changing one representation updates
the other.

mensura.duration
----------------

.. seealso:: :py:mod:`mensura.duration`

:class:`~mensura.duration.Duration` and :class:`~mensura.duration.Tuplet`.
A Tuplet describes "N notes in the time of M" and becomes immutable once
appended to a Duration.

mensura.definitions
-------------------

The note values, from *duplex-maxima* to *1024th*, and lookup functions.

Configuration
-------------

.. seealso:: :py:mod:`mensura.config`

Tolerances and limits used when converting a quarterLength to a note value
are kept in ``mensura.config``, a validated dictionary::

    >>> from mensura import config
    >>> config['maxTupletDenominator'] = 32

"""
from .common import F
from .config import config
from .definitions import *
from .duration import *
from . import mathutils
