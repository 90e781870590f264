# app/math/fraction.py

from __future__ import annotations
from decimal import Decimal, localcontext
from functools import total_ordering
from fractions import Fraction
from typing import Union


# --------------------------
# Error pecahan
# --------------------------
class FractionError(ArithmeticError):
    """Induk semua kesalahan pecahan eksak."""


class InvalidFraction(FractionError, ValueError):
    """Pecahan dibuat dengan penyebut nol."""


class DivisionByZero(FractionError, ZeroDivisionError):
    """Pembagian dengan pecahan nol."""


class InvalidOperation(FractionError):
    """Pembagian pecahan dengan bilangan bulat 0."""


Number = Union["ExactFraction", int]


@total_ordering
class ExactFraction:
    """
    Pecahan eksak yang tidak bisa diubah, dibungkus di atas fractions.Fraction.

    - penyebut selalu > 0
    - nol selalu 0/1
    - gcd(|pembilang|, penyebut) == 1
    """

    __slots__ = ("_value",)

    def __init__(self, numerator: int, denominator: int = 1):
        if isinstance(numerator, bool) or isinstance(denominator, bool):
            raise TypeError("ExactFraction needs int numerator/denominator")
        if not isinstance(numerator, int) or not isinstance(denominator, int):
            raise TypeError("ExactFraction needs int numerator/denominator")
        if denominator == 0:
            raise InvalidFraction("Denominator cannot be zero.")
        object.__setattr__(self, "_value", Fraction(numerator, denominator))

    def __setattr__(self, name, value):
        raise AttributeError("ExactFraction is immutable")

    @classmethod
    def _wrap(cls, value: Fraction) -> "ExactFraction":
        return cls(value.numerator, value.denominator)

    @classmethod
    def parse(cls, text: str) -> "ExactFraction":
        """Buat pecahan dari ``"n/d"`` atau bilangan bulat dalam bentuk teks."""
        raw = (text or "").strip()
        if not raw:
            raise InvalidFraction("Empty fraction string.")
        if "/" in raw:
            num, den = raw.split("/", 1)
            try:
                return cls(int(num.strip()), int(den.strip()))
            except ValueError as e:
                if isinstance(e, InvalidFraction):
                    raise
                raise InvalidFraction(f"Not a fraction: {text!r}") from e
        try:
            return cls(int(raw), 1)
        except ValueError as e:
            raise InvalidFraction(f"Not a fraction: {text!r}") from e

    # --------------------------
    # Akses
    # --------------------------
    @property
    def numerator(self) -> int:
        return self._value.numerator

    @property
    def denominator(self) -> int:
        return self._value.denominator

    def is_zero(self) -> bool:
        return self._value == 0

    @staticmethod
    def _coerce(other):
        if isinstance(other, ExactFraction):
            return other._value
        if isinstance(other, int) and not isinstance(other, bool):
            return Fraction(other)
        return NotImplemented

    # --------------------------
    # Aritmetika
    # --------------------------
    def __add__(self, other: Number) -> "ExactFraction":
        o = self._coerce(other)
        if o is NotImplemented:
            return NotImplemented
        return self._wrap(self._value + o)

    __radd__ = __add__

    def __sub__(self, other: Number) -> "ExactFraction":
        o = self._coerce(other)
        if o is NotImplemented:
            return NotImplemented
        return self._wrap(self._value - o)

    def __rsub__(self, other: Number) -> "ExactFraction":
        o = self._coerce(other)
        if o is NotImplemented:
            return NotImplemented
        return self._wrap(o - self._value)

    def __mul__(self, other: Number) -> "ExactFraction":
        o = self._coerce(other)
        if o is NotImplemented:
            return NotImplemented
        return self._wrap(self._value * o)

    __rmul__ = __mul__

    def __truediv__(self, other: Number) -> "ExactFraction":
        o = self._coerce(other)
        if o is NotImplemented:
            return NotImplemented
        if o == 0:
            if isinstance(other, ExactFraction):
                raise DivisionByZero("Cannot divide by zero fraction.")
            raise InvalidOperation("Cannot divide by zero.")
        return self._wrap(self._value / o)

    def __rtruediv__(self, other: Number) -> "ExactFraction":
        o = self._coerce(other)
        if o is NotImplemented:
            return NotImplemented
        if self._value == 0:
            raise DivisionByZero("Cannot divide by zero fraction.")
        return self._wrap(o / self._value)

    def __neg__(self) -> "ExactFraction":
        return self._wrap(-self._value)

    def __abs__(self) -> "ExactFraction":
        return self._wrap(abs(self._value))

    # --------------------------
    # Perbandingan
    # --------------------------
    def __eq__(self, other) -> bool:
        o = self._coerce(other)
        if o is NotImplemented:
            return NotImplemented
        return self._value == o

    def __lt__(self, other) -> bool:
        o = self._coerce(other)
        if o is NotImplemented:
            return NotImplemented
        return self._value < o

    def __hash__(self) -> int:
        return hash(self._value)

    def __bool__(self) -> bool:
        return bool(self._value)

    # --------------------------
    # Proyeksi
    # --------------------------
    def to_fraction(self) -> Fraction:
        return self._value

    def to_decimal(self, precision: int = 28) -> Decimal:
        with localcontext() as ctx:
            ctx.prec = precision
            return Decimal(self.numerator) / Decimal(self.denominator)

    def to_percentage(self, precision: int = 28) -> Decimal:
        with localcontext() as ctx:
            ctx.prec = precision
            return Decimal(self.numerator) * 100 / Decimal(self.denominator)

    def to_mixed_number(self) -> str:
        num, den = self.numerator, self.denominator
        if abs(num) < den:
            return str(self)
        whole, remainder = divmod(abs(num), den)
        sign = "-" if num < 0 else ""
        if remainder == 0:
            return f"{sign}{whole}"
        return f"{sign}{whole} {remainder}/{den}"

    def __str__(self) -> str:
        return str(self._value)

    def __repr__(self) -> str:
        return f"ExactFraction({self.numerator}, {self.denominator})"

    def __reduce__(self):
        return (ExactFraction, (self.numerator, self.denominator))


# --------------------------
# Konstanta furudh (Qur'ani)
# --------------------------
ZERO = ExactFraction(0, 1)
ONE = ExactFraction(1, 1)
HALF = ExactFraction(1, 2)
THIRD = ExactFraction(1, 3)
QUARTER = ExactFraction(1, 4)
SIXTH = ExactFraction(1, 6)
EIGHTH = ExactFraction(1, 8)
TWO_THIRDS = ExactFraction(2, 3)
