from __future__ import annotations
from mensura.common import F

import typing as _t


def floorLog2(x: F) -> int:
    """
    The exact floor of log2(x) for a positive rational

    Working on the numerator and denominator avoids the rounding errors
    of ``math.floor(math.log2(float(x)))`` at exact powers of two

    Args:
        x: a positive rational

    Returns:
        the largest integer n such that 2**n <= x

    Example::

        >>> floorLog2(F(1, 3))
        -2
        >>> floorLog2(F(6))
        2
    """
    if x <= 0:
        raise ValueError(f"Expected a positive value, got {x}")
    num, den = x.numerator, x.denominator
    n = num.bit_length() - den.bit_length()
    if n >= 0:
        if num < (den << n):
            n -= 1
    elif (num << -n) < den:
        n -= 1
    return n


def rationalize(x: F | float, maxDenominator=50, epsilon: F | float = 0.001
                ) -> F | None:
    """
    Find the fraction with the smallest denominator within epsilon of x

    Denominators from 1 to ``maxDenominator`` are tried in order and the
    first one for which ``x * den`` lies within ``epsilon`` of an integer
    wins. With ``epsilon=0`` only exact matches are accepted

    Args:
        x: the value to rationalize
        maxDenominator: the largest denominator to try
        epsilon: the accepted distance between ``x * den`` and the nearest integer

    Returns:
        the fraction, or None if x has no such approximation

    Example::

        >>> rationalize(0.3333333)
        Fraction(1, 3)
        >>> rationalize(F(2, 3), epsilon=0)
        Fraction(2, 3)
        >>> rationalize(F(1, 97), epsilon=0) is None
        True
    """
    for den in range(1, maxDenominator + 1):
        scaled = x * den
        num = round(scaled)
        if abs(scaled - num) <= epsilon:
            return F(num, den)
    return None


def ordinalAbbreviation(value: int, plural=False) -> str:
    """
    The suffix of an ordinal number

    Args:
        value: the number
        plural: append an 's' ('4ths' instead of '4th')

    Returns:
        the suffix: 'st', 'nd', 'rd' or 'th'

    ======  ======
    value   suffix
    ======  ======
    1       st
    2       nd
    3       rd
    4       th
    11      th
    22      nd
    ======  ======
    """
    if value % 100 in (11, 12, 13):
        post = 'th'
    else:
        post = {1: 'st', 2: 'nd', 3: 'rd'}.get(value % 10, 'th')
    if plural and value != 1:
        post += 's'
    return post


def product(values: _t.Iterable[F], start: F = F(1)) -> F:
    """The product of rational values, exact"""
    out = start
    for value in values:
        out *= value
    return out
