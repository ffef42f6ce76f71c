"""Exact Lagrange interpolation at the origin.

Interpolation over the integers (no modulus) only yields an integer constant
term when the points really lie on one polynomial of degree ``k - 1`` with
integer coefficients at zero. A fractional result is therefore an expected
outcome for a subset containing a corrupted share and is returned as a value
instead of being raised.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Union

from .errors import DuplicateAbscissa
from .rational import ZERO, Rational, add
from .shares import Share


@dataclass(frozen=True)
class Reconstructed:
    secret: int


@dataclass(frozen=True)
class NonIntegerResult:
    """The subset interpolates to a non-integer value at zero."""

    value: Rational


Interpolation = Union[Reconstructed, NonIntegerResult]


def lagrange_term(shares: Sequence[Share], i: int) -> Rational:
    """Return ``y_i * L_i(0)`` for the *i*-th share of *shares*."""

    xi = shares[i].x
    numerator = 1
    denominator = 1
    for j, other in enumerate(shares):
        if j == i:
            continue
        numerator *= -other.x
        denominator *= xi - other.x
    if denominator == 0:
        raise DuplicateAbscissa(xi)
    return Rational(shares[i].y * numerator, denominator)


def interpolate_at_zero(shares: Sequence[Share]) -> Interpolation:
    """Interpolate the constant term of the polynomial through *shares*."""

    total = ZERO
    for i in range(len(shares)):
        total = add(total, lagrange_term(shares, i))
    quotient, remainder = total.exact_quotient()
    if remainder:
        return NonIntegerResult(total)
    return Reconstructed(quotient)


__all__ = [
    "Interpolation",
    "NonIntegerResult",
    "Reconstructed",
    "interpolate_at_zero",
    "lagrange_term",
]
