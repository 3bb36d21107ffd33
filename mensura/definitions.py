"""
Note values and their lookup tables
"""
from __future__ import annotations
from functools import cache

from .common import F, F0, F1, getLogger


logger = getLogger('mensura')


__all__ = (
    'DurationException',
    'InvalidTypeError',
    'ordinalTypeFromNum',
    'quarterTypeIndex',
    'typeFromNumDict',
    'vexflowDurationArray',
    'isValidType',
    'typeIndex',
    'typeFromNumber',
    'typeToNumber',
    'nominalQuarterLength',
    'typeToQuarterLength',
    'dottedMultiplier',
)


class DurationException(Exception):
    """Base class for all errors raised by mensura"""


class InvalidTypeError(DurationException, ValueError):
    """A note value name (or number) which is not known"""


ordinalTypeFromNum = (
    'duplex-maxima',
    'maxima',
    'longa',
    'breve',
    'whole',
    'half',
    'quarter',
    'eighth',
    '16th',
    '32nd',
    '64th',
    '128th',
    '256th',
    '512th',
    '1024th'
)

quarterTypeIndex = 6
"""Index of the quarter note within ordinalTypeFromNum"""

zeroType = 'zero'
"""The type of a Duration with a quarterLength of 0"""


typeFromNumDict = {
    1: 'whole',
    2: 'half',
    4: 'quarter',
    8: 'eighth',
    16: '16th',
    32: '32nd',
    64: '64th',
    128: '128th',
    256: '256th',
    512: '512th',
    1024: '1024th',
    0: 'zero',
    F(1, 2): 'breve',
    F(1, 4): 'longa',
    F(1, 8): 'maxima',
    F(1, 16): 'duplex-maxima',
}


# Engraving codes, aligned with ordinalTypeFromNum
vexflowDurationArray = (
    None, None, None, None, 'w', 'h', 'q', '8', '16', '32',
    None, None, None, None, None
)


_typeToIndex = {name: idx for idx, name in enumerate(ordinalTypeFromNum)}

_typeToNum = {name: num for num, name in typeFromNumDict.items()}


def isValidType(name: str) -> bool:
    """Is *name* a known note value (including 'zero')?"""
    return name in _typeToIndex or name == zeroType


def typeIndex(name: str) -> int:
    """
    The ordinal index of the given note value

    Args:
        name: the name of the note value ('quarter', 'breve', '16th', ...)

    Returns:
        its index within :data:`ordinalTypeFromNum`. The quarter note has
        index :data:`quarterTypeIndex`
    """
    idx = _typeToIndex.get(name)
    if idx is None:
        logger.debug(f"invalid type {name}")
        raise InvalidTypeError(f"invalid type {name!r}, expected one of {ordinalTypeFromNum}")
    return idx


def typeFromNumber(num: int | F) -> str:
    """
    Convert the number of a note value to its name

    ======  =============
    Number  Name
    ======  =============
    1/16    duplex-maxima
    1/2     breve
    1       whole
    4       quarter
    16      16th
    0       zero
    ======  =============

    Args:
        num: the number of the note value (4=quarter, 8=eighth, ...)

    Returns:
        the name of the note value
    """
    name = typeFromNumDict.get(num)
    if name is None:
        raise InvalidTypeError(f"No note value for number {num}")
    return name


def typeToNumber(name: str) -> int | F:
    """The number of a note value, the inverse of :func:`typeFromNumber`"""
    num = _typeToNum.get(name)
    if num is None:
        raise InvalidTypeError(f"invalid type {name!r}")
    return num


@cache
def nominalQuarterLength(index: int) -> F:
    """
    The undotted quarter-length of the note value at the given ordinal index

    Args:
        index: an index into :data:`ordinalTypeFromNum`

    Returns:
        2 ** (quarterTypeIndex - index), as a fraction
    """
    if not 0 <= index < len(ordinalTypeFromNum):
        raise IndexError(f"Type index out of range: {index}")
    return F(2) ** (quarterTypeIndex - index)


def typeToQuarterLength(name: str) -> F:
    """The undotted quarter-length of a note value ('zero' has a length of 0)"""
    if name == zeroType:
        return F0
    return nominalQuarterLength(typeIndex(name))


@cache
def dottedMultiplier(dots: int) -> F:
    """
    The factor by which dots lengthen a note value

    One dot gives 3/2, two dots 7/4, three dots 15/8, etc.

    Args:
        dots: the number of dots

    Returns:
        1 + (2**dots - 1) / 2**dots
    """
    if dots < 0:
        raise ValueError(f"The number of dots can't be negative, got {dots}")
    if dots == 0:
        return F1
    power = 2 ** dots
    return F1 + F(power - 1, power)
