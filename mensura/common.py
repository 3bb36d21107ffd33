"""
NB: this module cannot import anything from mensura itself
"""
from __future__ import annotations
import logging as _logging
import functools as _functools


import typing as _t
if _t.TYPE_CHECKING:
    from fractions import Fraction as F
else:
    from quicktions import Fraction as F


__all__ = (
    'getLogger',
    'F',
    'F0',
    'F1',
    'asF',
    'time_t',
)


time_t: _t.TypeAlias = _t.Union[int, float, F]


F0: F = F(0)
F1: F = F(1)


def asF(t: int | float | str | F, maxden: int = 0) -> F:
    """
    Convert ``t`` to a fraction if needed

    Args:
        t: the value to convert
        maxden: if given, floats are snapped to the nearest fraction whose
            denominator does not exceed this value (1/3 given as a float
            becomes exactly 1/3)

    Returns:
        the value as a fraction
    """
    if isinstance(t, F):
        return t
    elif isinstance(t, float):
        f = F(t)
        return f.limit_denominator(maxden) if maxden else f
    elif isinstance(t, (int, str)):
        return F(t)
    elif hasattr(t, 'numerator') and hasattr(t, 'denominator'):
        return F(t.numerator, t.denominator)
    else:
        raise TypeError(f"Could not convert {t} to a rational")


@_functools.cache
def getLogger(name: str,
              fmt='[%(name)s:%(filename)s:%(lineno)s:%(funcName)s:%(levelname)s] %(message)s',
              filelog: str = '',
              force=True
              ) -> _logging.Logger:
    """
    Construct a logger

    Args:
        name: the name of the logger
        fmt: the format used
        filelog: if given, logging info is **also** output to this file
        force: set own handlers, even if the logger already exists

    Returns:
        the logger
    """
    logger = _logging.getLogger(name)
    if logger.hasHandlers():
        if not force:
            return logger
        logger.handlers.clear()

    logger.propagate = False
    handler = _logging.StreamHandler()
    formatter = _logging.Formatter(fmt)
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    if filelog:
        filehandler = _logging.FileHandler(filelog)
        filehandler.setFormatter(formatter)
        logger.addHandler(filehandler)
    return logger
