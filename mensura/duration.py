"""
Durations and tuplets

A :class:`Duration` holds the length of a musical event in two synchronized
representations: a symbolic one (a note value, a number of dots and a
list of :class:`Tuplet`) and a numeric one, the *quarterLength*, where 1
is the length of a quarter note. Setting either representation updates
the other before returning.

Quarter-lengths are exact fractions. A quarter-length given as a float is
snapped to the nearest fraction (see ``config['maxDenominator']``), so that
``Duration(1/3)`` is an eighth note within a triplet.

.. code-block:: python

    >>> from mensura import Duration, Tuplet
    >>> d = Duration(1.5)
    >>> d.type, d.dots
    ('quarter', 1)
    >>> d = Duration('eighth')
    >>> d.appendTuplet(Tuplet(3, 2))
    >>> d.quarterLength
    Fraction(1, 3)
"""
from __future__ import annotations

from .common import F, F1, asF, getLogger
from .config import config
from . import definitions
from .definitions import DurationException, InvalidTypeError
from . import mathutils

from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from .common import time_t


logger = getLogger('mensura')


__all__ = (
    'Duration',
    'Tuplet',
    'DurationException',
    'InvalidTypeError',
    'ImmutableTupletError',
)


class ImmutableTupletError(DurationException):
    """A frozen tuplet (or one attached to a duration) is immutable"""


_dotNames = {
    1: 'Dotted',
    2: 'Double Dotted',
    3: 'Triple Dotted',
    4: 'Quadruple Dotted'
}


def _asQuarterLength(ql: time_t | None) -> F:
    if ql is None:
        return F1
    if isinstance(ql, (str, bool)):
        raise TypeError(f"Expected a number as quarterLength, got {ql!r}")
    ql = asF(ql, maxden=config['maxDenominator'])
    if ql < 0:
        raise ValueError(f"A quarterLength can't be negative, got {ql}")
    return ql


def _showQl(ql: F) -> str:
    if ql.denominator == 1:
        return str(ql.numerator)
    return f"{ql.numerator}/{ql.denominator}"


class Duration:
    """
    The duration of a musical event

    Args:
        value: either the name of a note value ('quarter', 'half', '16th', ...)
            or a quarter-length (1=quarter note). None is the same as 1

    Attributes:
        type: the note value ('quarter', 'eighth', ...)
        dots: the number of dots
        tuplets: the tuplets modifying this duration (read-only)
        quarterLength: the duration in quarter notes, as a fraction

    Example
    ~~~~~~~

        >>> d = Duration(2)
        >>> d.type
        'half'
        >>> d.dots = 1
        >>> d.quarterLength
        Fraction(3, 1)
        >>> d.quarterLength = 1.75
        >>> d.type, d.dots
        ('quarter', 2)
    """
    __slots__ = ('_quarterLength',
                 '_dots',
                 '_type',
                 '_tuplets',
                 '_inexpressible',
                 '_locked')

    def __init__(self, value: str | time_t | None = None):
        self._quarterLength: F = F1
        self._dots = 0
        self._type = 'quarter'
        self._tuplets: list[Tuplet] = []
        self._inexpressible = False
        self._locked = False

        if isinstance(value, str):
            self.type = value
        else:
            self.quarterLength = value

    def __repr__(self):
        parts = [repr(self._type)]
        if self._dots:
            parts.append(f"dots={self._dots}")
        if self._tuplets:
            ratios = ", ".join(f"{t.numberNotesActual}:{t.numberNotesNormal}" for t in self._tuplets)
            parts.append(f"tuplets=[{ratios}]")
        parts.append(f"quarterLength={_showQl(self._quarterLength)}")
        return f"Duration({', '.join(parts)})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return (self._type == other._type and
                self._dots == other._dots and
                self._quarterLength == other._quarterLength and
                self._tuplets == other._tuplets)

    def __copy__(self) -> Duration:
        return self.clone()

    def __deepcopy__(self, memo) -> Duration:
        return self.clone()

    def _checkUnlocked(self) -> None:
        if self._locked:
            raise ImmutableTupletError("This duration belongs to a frozen tuplet and "
                                       "can't be modified")

    @property
    def type(self) -> str:
        """
        The note value of this duration ('quarter', 'eighth', ...)

        Setting it keeps the dots and tuplets and updates the quarterLength

        Example
        ~~~~~~~

            >>> d = Duration(2)
            >>> d.type = 'breve'
            >>> d.quarterLength
            Fraction(8, 1)
            >>> d.dots = 1
            >>> d.type = 'quarter'
            >>> d.quarterLength
            Fraction(3, 2)
        """
        return self._type

    @type.setter
    def type(self, value: str) -> None:
        self._checkUnlocked()
        if not definitions.isValidType(value):
            logger.debug(f"invalid type {value}")
            raise InvalidTypeError(f"invalid type {value!r}")
        self._type = value
        self.updateQlFromFeatures()

    @property
    def dots(self) -> int:
        """The number of dots. Setting it updates the quarterLength"""
        return self._dots

    @dots.setter
    def dots(self, numDots: int) -> None:
        self._checkUnlocked()
        if not isinstance(numDots, int) or isinstance(numDots, bool) or numDots < 0:
            raise ValueError(f"dots should be a non-negative int, got {numDots!r}")
        self._dots = numDots
        self.updateQlFromFeatures()

    @property
    def quarterLength(self) -> F:
        """
        The duration in quarter notes

        Setting it discards any tuplets and recalculates type and dots,
        inferring a tuplet if needed
        """
        return self._quarterLength

    @quarterLength.setter
    def quarterLength(self, ql: time_t | None) -> None:
        self._checkUnlocked()
        ql = _asQuarterLength(ql)
        self._quarterLength = ql
        self.updateFeaturesFromQl()

    @property
    def tuplets(self) -> tuple[Tuplet, ...]:
        """
        The tuplets modifying this duration

        This is read-only, use :meth:`appendTuplet` to add a tuplet
        """
        return tuple(self._tuplets)

    @property
    def inexpressible(self) -> bool:
        """
        True if the quarterLength could not be expressed as a note value

        In this case the quarterLength is kept as given, without tuplets, and
        type and dots are only an approximation
        """
        return self._inexpressible

    @property
    def vexflowDuration(self) -> str | None:
        """
        The duration code used by the engraving backend

        One 'd' is added per dot. None if there is no code for this type

        Example
        ~~~~~~~

            >>> d = Duration(2)
            >>> d.vexflowDuration
            'h'
            >>> d.dots = 2
            >>> d.vexflowDuration
            'hdd'
        """
        if self._type == definitions.zeroType:
            return None
        code = definitions.vexflowDurationArray[definitions.typeIndex(self._type)]
        if code is None:
            return None
        return code + 'd' * self._dots

    @property
    def fullName(self) -> str:
        """
        A readable name for this duration

        Example
        ~~~~~~~

            >>> Duration(1.5).fullName
            'Dotted Quarter'
            >>> Duration(1/3).fullName
            'Eighth Triplet (1/3 QL)'
        """
        if self._inexpressible:
            return 'Inexpressible'
        if self._type == definitions.zeroType:
            return 'Zero Duration'
        parts = []
        if self._dots:
            parts.append(_dotNames.get(self._dots, f'{self._dots}-Dotted'))
        parts.append(self._type.capitalize())
        if self._tuplets:
            parts.extend(t.fullName for t in self._tuplets)
            parts.append(f"({_showQl(self._quarterLength)} QL)")
        return " ".join(parts)

    def tupletMultiplier(self) -> F:
        """The combined multiplier of all tuplets (1 if there are no tuplets)"""
        return mathutils.product(t.tupletMultiplier() for t in self._tuplets)

    def _findDots(self, ql: F) -> int:
        if ql == 0:
            return 0
        nominal = definitions.typeToQuarterLength(self._type)
        for dotsNum in range(config['maxDots'] + 1):
            if nominal * definitions.dottedMultiplier(dotsNum) == ql:
                return dotsNum
        logger.debug(f"No dots available for quarterLength {ql}, probably a tuplet")
        return 0

    def updateQlFromFeatures(self) -> None:
        """
        Calculate the quarterLength from type, dots and tuplets

        This never modifies type, dots or tuplets
        """
        undotted = definitions.typeToQuarterLength(self._type)
        ql = undotted * definitions.dottedMultiplier(self._dots)
        for tuplet in self._tuplets:
            ql *= tuplet.tupletMultiplier()
        self._quarterLength = ql
        self._inexpressible = False

    def updateFeaturesFromQl(self) -> None:
        """
        Calculate type, dots and possibly a tuplet from the quarterLength

        Any previous tuplets are discarded. If the quarterLength is not a
        dotted note value, the next longer note value is used together with
        a tuplet. If no tuplet ratio can be found the quarterLength is kept
        as is and the duration is marked as inexpressible
        """
        ql = self._quarterLength
        self._inexpressible = False
        self._tuplets = []
        if ql == 0:
            self._type = definitions.zeroType
            self._dots = 0
            return

        numTypes = len(definitions.ordinalTypeFromNum)
        typeNumber = definitions.quarterTypeIndex - mathutils.floorLog2(ql)
        # one past the shortest type is allowed: a tuplet of the shortest type
        if not 0 <= typeNumber <= numTypes:
            self._type = definitions.ordinalTypeFromNum[0 if typeNumber < 0 else numTypes - 1]
            self._dots = 0
            self._markInexpressible(ql, reason='out of the range of note values')
            return

        unTupletedQl = F(2) ** (definitions.quarterTypeIndex - typeNumber)
        if typeNumber < numTypes:
            self._type = definitions.ordinalTypeFromNum[typeNumber]
            self._dots = self._findDots(ql)
            unTupletedQl *= definitions.dottedMultiplier(self._dots)
            if unTupletedQl == ql:
                return
        else:
            self._dots = 0

        if typeNumber == 0:
            self._markInexpressible(ql, reason='no note value is long enough for a tuplet')
            return

        typeNumber -= 1
        self._type = definitions.ordinalTypeFromNum[typeNumber]
        unTupletedQl *= 2
        tupletRatio = ql / unTupletedQl
        ratio = mathutils.rationalize(tupletRatio,
                                      maxDenominator=config['maxTupletDenominator'],
                                      epsilon=0)
        if ratio is None:
            self._markInexpressible(ql, reason=f'tuplet ratio {tupletRatio} too complex')
            return
        logger.debug(f"Inferred a {ratio.denominator}:{ratio.numerator} tuplet "
                     f"for quarterLength {ql}")
        tuplet = Tuplet(ratio.denominator, ratio.numerator, Duration(unTupletedQl))
        self.appendTuplet(tuplet, skipUpdateQl=True)

    def _markInexpressible(self, ql: F, reason: str) -> None:
        self._inexpressible = True
        if config['warnInexpressible']:
            logger.warning(f"quarterLength {ql} is inexpressible ({reason}), "
                           f"using {self._type} as an approximation")

    def appendTuplet(self, newTuplet: Tuplet, skipUpdateQl=False) -> None:
        """
        Add a tuplet to this duration

        The tuplet is frozen and owned by this duration from now on.

        Args:
            newTuplet: the tuplet to add
            skipUpdateQl: if True, do not update the quarterLength afterwards
        """
        self._checkUnlocked()
        if not isinstance(newTuplet, Tuplet):
            raise TypeError(f"Expected a Tuplet, got {newTuplet!r}")
        if newTuplet.frozen:
            raise ImmutableTupletError(f"{newTuplet} is frozen and already belongs to a duration")
        newTuplet.freeze()
        self._tuplets.append(newTuplet)
        if not skipUpdateQl:
            self.updateQlFromFeatures()

    def clone(self) -> Duration:
        """
        A copy of this duration

        Each tuplet is cloned as well, so the copy does not share any
        tuplet with this duration
        """
        out = Duration.__new__(Duration)
        out._quarterLength = self._quarterLength
        out._dots = self._dots
        out._type = self._type
        out._tuplets = [t.clone() for t in self._tuplets]
        out._inexpressible = self._inexpressible
        out._locked = False
        return out


class Tuplet:
    """
    A tuplet: *numberNotesActual* notes in the time of *numberNotesNormal*

    A Tuplet can be modified until it is appended to a :class:`Duration`.
    From then on it is frozen and owned by that duration.

    Args:
        numberNotesActual: numerator of the tuplet
        numberNotesNormal: denominator of the tuplet
        durationActual: the note value of the actual notes, as a Duration,
            a quarter-length or a type name. Defaults to an eighth note
        durationNormal: the note value of the normal notes. Defaults to
            the same value as durationActual
        bracket: show a bracket
        placement: bracket placement, 'above' or 'below'
        tupletActualShow: what to show for the actual notes, 'number', 'type' or 'none'
        tupletNormalShow: what to show for the normal notes, None, 'ratio' or 'type'

    Example
    ~~~~~~~

        >>> t = Tuplet(5, 4)
        >>> t.tupletMultiplier()
        Fraction(4, 5)
        >>> t.fullName
        'Quintuplet'
    """
    __slots__ = ('_numberNotesActual',
                 '_numberNotesNormal',
                 '_durationActual',
                 '_durationNormal',
                 '_frozen',
                 'bracket',
                 'placement',
                 'tupletActualShow',
                 'tupletNormalShow',
                 'type')

    def __init__(self,
                 numberNotesActual=3,
                 numberNotesNormal=2,
                 durationActual: Duration | time_t | str | None = None,
                 durationNormal: Duration | time_t | str | None = None,
                 bracket=True,
                 placement='above',
                 tupletActualShow='number',
                 tupletNormalShow: str | None = None):
        self._frozen = False
        self._numberNotesActual, self._numberNotesNormal = _checkRatio(numberNotesActual,
                                                                      numberNotesNormal)
        self._durationActual = _asDuration(durationActual) if durationActual is not None else Duration(F(1, 2))
        self._durationNormal = (_asDuration(durationNormal) if durationNormal is not None
                                else self._durationActual.clone())

        self.bracket = bracket
        """Show a bracket above the tuplet"""

        self.placement = placement
        """Bracket placement, 'above' or 'below'"""

        self.tupletActualShow = tupletActualShow
        """What to show for the actual notes: 'number', 'type' or 'none'"""

        self.tupletNormalShow = tupletNormalShow
        """What to show for the normal notes: None, 'ratio' or 'type'"""

        self.type: str | None = None
        """'start' or 'stop' if this tuplet begins or ends a bracket"""

    def __repr__(self):
        frozen = ", frozen" if self._frozen else ""
        return (f"Tuplet({self._numberNotesActual}:{self._numberNotesNormal}, "
                f"{self._durationActual.type}{frozen})")

    def __eq__(self, other) -> bool:
        if not isinstance(other, Tuplet):
            return NotImplemented
        return (self._numberNotesActual == other._numberNotesActual and
                self._numberNotesNormal == other._numberNotesNormal and
                self._durationActual.quarterLength == other._durationActual.quarterLength and
                self._durationNormal.quarterLength == other._durationNormal.quarterLength)

    def __copy__(self) -> Tuplet:
        return self.clone()

    def __deepcopy__(self, memo) -> Tuplet:
        return self.clone()

    def _checkMutable(self) -> None:
        if self._frozen:
            raise ImmutableTupletError("A frozen tuplet (or one attached to a duration) "
                                       "is immutable")

    @property
    def frozen(self) -> bool:
        """A frozen tuplet can't be modified. Tuplets are frozen when appended to a Duration"""
        return self._frozen

    @property
    def numberNotesActual(self) -> int:
        return self._numberNotesActual

    @numberNotesActual.setter
    def numberNotesActual(self, value: int) -> None:
        self._checkMutable()
        self._numberNotesActual, _ = _checkRatio(value, self._numberNotesNormal)

    @property
    def numberNotesNormal(self) -> int:
        return self._numberNotesNormal

    @numberNotesNormal.setter
    def numberNotesNormal(self, value: int) -> None:
        self._checkMutable()
        _, self._numberNotesNormal = _checkRatio(self._numberNotesActual, value)

    @property
    def actualCount(self) -> int:
        """Alias of numberNotesActual"""
        return self._numberNotesActual

    @property
    def normalCount(self) -> int:
        """Alias of numberNotesNormal"""
        return self._numberNotesNormal

    @property
    def ratio(self) -> F:
        """numberNotesActual / numberNotesNormal, as a fraction"""
        return F(self._numberNotesActual, self._numberNotesNormal)

    @property
    def durationActual(self) -> Duration:
        return self._durationActual

    @durationActual.setter
    def durationActual(self, value: Duration | time_t | str) -> None:
        self._checkMutable()
        self._durationActual = _asDuration(value)

    @property
    def durationNormal(self) -> Duration:
        return self._durationNormal

    @durationNormal.setter
    def durationNormal(self, value: Duration | time_t | str) -> None:
        self._checkMutable()
        self._durationNormal = _asDuration(value)

    @property
    def fullName(self) -> str:
        """
        A readable name for this tuplet

        ========  ==================
        Ratio     Name
        ========  ==================
        3:2       Triplet
        5:4, 5:2  Quintuplet
        6:4       Sextuplet
        7:4       Tuplet of 7/4ths
        ========  ==================
        """
        numActual = self._numberNotesActual
        numNormal = self._numberNotesNormal
        if numActual == 3 and numNormal == 2:
            return 'Triplet'
        elif numActual == 5 and numNormal in (4, 2):
            return 'Quintuplet'
        elif numActual == 6 and numNormal == 4:
            return 'Sextuplet'
        ordStr = mathutils.ordinalAbbreviation(numNormal, plural=True)
        return f'Tuplet of {numActual}/{numNormal}{ordStr}'

    def freeze(self) -> None:
        """
        Make this tuplet immutable

        The durations of the tuplet are replaced by private copies which
        can't be modified either. Freezing can't be undone
        """
        if self._frozen:
            return
        self._durationActual = self._durationActual.clone()
        self._durationNormal = self._durationNormal.clone()
        self._durationActual._locked = True
        self._durationNormal._locked = True
        self._frozen = True

    def clone(self) -> Tuplet:
        """A copy of this tuplet, frozen if this tuplet is frozen"""
        out = Tuplet(self._numberNotesActual,
                     self._numberNotesNormal,
                     self._durationActual.clone(),
                     self._durationNormal.clone(),
                     bracket=self.bracket,
                     placement=self.placement,
                     tupletActualShow=self.tupletActualShow,
                     tupletNormalShow=self.tupletNormalShow)
        out.type = self.type
        if self._frozen:
            out.freeze()
        return out

    def setDurationType(self, type: str) -> Duration:
        """
        Set both durationActual and durationNormal

        Args:
            type: a note value, such as 'half', 'quarter'

        Returns:
            the new durationActual
        """
        self._checkMutable()
        self._durationActual = Duration(type)
        self._durationNormal = self._durationActual.clone()
        return self._durationActual

    def setRatio(self, actual=3, normal=2) -> None:
        """
        Set the tuplet ratio

        Args:
            actual: number of actual notes (e.g. 3)
            normal: number of normal notes (e.g. 2)
        """
        self._checkMutable()
        self._numberNotesActual, self._numberNotesNormal = _checkRatio(actual, normal)

    def totalTupletLength(self) -> F:
        """
        The quarterLength of the whole tuplet

        For a triplet of eighth notes this is 1, the length of the two normal
        eighth notes
        """
        return self._numberNotesNormal * self._durationNormal.quarterLength

    def tupletMultiplier(self) -> F:
        """
        The factor by which each actual note is multiplied

        For a normal triplet this is 2/3
        """
        lengthActual = self._durationActual.quarterLength
        return self.totalTupletLength() / (self._numberNotesActual * lengthActual)


def _asDuration(value: Duration | time_t | str) -> Duration:
    dur = value if isinstance(value, Duration) else Duration(value)
    if dur.quarterLength == 0:
        raise ValueError("The duration of a tuplet can't be 0")
    return dur


def _checkRatio(actual: int, normal: int) -> tuple[int, int]:
    for value in (actual, normal):
        if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
            raise ValueError(f"The number of notes in a tuplet should be a positive int, "
                             f"got {value!r}")
    return actual, normal
