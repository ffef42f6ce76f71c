"""Exact rational arithmetic over Python integers."""
from __future__ import annotations

from dataclasses import dataclass
from math import gcd


@dataclass(frozen=True)
class Rational:
    """A signed fraction kept in reduced form.

    The sign is not normalised: a negative denominator is allowed, only the
    common divisor of the absolute values is removed.
    """

    numerator: int
    denominator: int = 1

    def exact_quotient(self) -> tuple[int, int]:
        """Return ``(quotient, remainder)`` of numerator divided by denominator."""

        return divmod(self.numerator, self.denominator)

    def __str__(self) -> str:
        return f"{self.numerator}/{self.denominator}"


ZERO = Rational(0, 1)


def add(a: Rational, b: Rational) -> Rational:
    """Return ``a + b`` with the gcd of both components divided out."""

    numerator = a.numerator * b.denominator + b.numerator * a.denominator
    denominator = a.denominator * b.denominator
    common = gcd(abs(numerator), abs(denominator))
    if common:
        numerator //= common
        denominator //= common
    return Rational(numerator, denominator)


__all__ = ["Rational", "ZERO", "add"]
