from __future__ import annotations

import math
from fractions import Fraction
from typing import Iterator


class RationalAccumulator:
    """Exact fraction updated in place, one factor at a time.

    Numerator and denominator are Python ints, so intermediate products
    cannot wrap. A zero numerator is kept as ``0/1``; once zero, further
    multiplications leave it at zero.
    """

    __slots__ = ("numerator", "denominator")

    def __init__(self, numerator: int = 1, denominator: int = 1) -> None:
        self.numerator = int(numerator)
        self.denominator = int(denominator)
        if self.numerator == 0:
            self.denominator = 1

    @property
    def is_zero(self) -> bool:
        return self.numerator == 0

    def mul_numerator(self, k: int) -> None:
        if self.numerator == 0:
            return
        self.numerator *= int(k)
        if self.numerator == 0:
            self.denominator = 1

    def mul_denominator(self, k: int) -> None:
        if self.numerator == 0:
            return
        self.denominator *= int(k)

    def reduce(self) -> int:
        """Divide numerator and denominator by their gcd.

        Returns the divisor (0 for a zero fraction), mirroring ``gcd(x, 0) = x``
        for a zero denominator.
        """
        if self.numerator == 0:
            self.denominator = 1
            return 0
        div = math.gcd(self.numerator, self.denominator)
        self.numerator //= div
        self.denominator //= div
        return div

    def as_fraction(self) -> Fraction:
        """Return the value as a :class:`fractions.Fraction`."""
        return Fraction(self.numerator, self.denominator)

    def __iter__(self) -> Iterator[int]:
        yield self.numerator
        yield self.denominator

    def __eq__(self, other: object) -> bool:
        if isinstance(other, RationalAccumulator):
            return self.numerator * other.denominator == other.numerator * self.denominator
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"RationalAccumulator({self.numerator}, {self.denominator})"

    def __str__(self) -> str:
        return f"{self.numerator}/{self.denominator}"
