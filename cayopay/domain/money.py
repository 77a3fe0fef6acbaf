"""Monetary amounts held as signed 32-bit counts of minor currency units."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1
_U64_MAX = 2**64 - 1


def _saturate(value: int) -> int:
    return max(_I32_MIN, min(_I32_MAX, value))


def _fits(value: int) -> bool:
    return _I32_MIN <= value <= _I32_MAX


@dataclass(frozen=True, order=True, repr=False)
class Money:
    """Money in minor units (cents); positive is credit, negative is debt.

    The value is limited to the signed 32-bit range. Operators saturate at
    the bounds; the ``checked_*`` methods return ``None`` on overflow.
    """

    _minor: int = 0

    ZERO: ClassVar["Money"]
    MAX: ClassVar["Money"]
    MIN: ClassVar["Money"]

    def __post_init__(self) -> None:
        if isinstance(self._minor, bool) or not isinstance(self._minor, int):
            raise TypeError(f"Money requires an int, got {type(self._minor).__name__}")
        if not _fits(self._minor):
            raise OverflowError(f"{self._minor} cents is outside the 32-bit range")

    @classmethod
    def from_minor(cls, cents: int) -> "Money":
        """Create Money from minor units (cents)."""
        return cls(cents)

    @classmethod
    def from_major(cls, euros: int) -> "Money":
        """Create Money from major units, saturating at the bounds."""
        if not _fits(euros):
            raise OverflowError(f"{euros} is outside the 32-bit range")
        return cls(_saturate(euros * 100))

    @classmethod
    def from_u64(cls, value: int) -> "Money":
        """Create Money from an unsigned amount; raise if it does not fit."""
        if value < 0 or value > _U64_MAX:
            raise ValueError(f"{value} is not an unsigned 64-bit value")
        if value > _I32_MAX:
            raise OverflowError(f"{value} cents does not fit in the 32-bit range")
        return cls(value)

    def as_minor(self) -> int:
        """The raw value in minor units."""
        return self._minor

    def as_major(self) -> int:
        """Whole major units, truncated toward zero and keeping the sign."""
        whole = abs(self._minor) // 100
        return -whole if self._minor < 0 else whole

    def cents(self) -> int:
        """The remaining cents after whole units, always non-negative."""
        return min(abs(self._minor), _I32_MAX) % 100

    def to_u64(self) -> int:
        """The value as an unsigned amount; debts become zero."""
        return max(self._minor, 0)

    def _body(self) -> str:
        if self._minor < 0:
            return f"-{min(abs(self.as_major()), _I32_MAX)}.{self.cents():02d}"
        return f"{self.as_major()}.{self.cents():02d}"

    def format_eur(self) -> str:
        """Format as a euro string such as ``€10.50`` or ``€-10.50``."""
        return f"€{self._body()}"

    def is_zero(self) -> bool:
        return self._minor == 0

    def is_positive(self) -> bool:
        return self._minor > 0

    def is_negative(self) -> bool:
        return self._minor < 0

    def abs(self) -> "Money":
        """The absolute value, saturating at the maximum."""
        return Money(_saturate(abs(self._minor)))

    def checked_add(self, other: "Money") -> Optional["Money"]:
        total = self._minor + other._minor
        return Money(total) if _fits(total) else None

    def checked_sub(self, other: "Money") -> Optional["Money"]:
        diff = self._minor - other._minor
        return Money(diff) if _fits(diff) else None

    def saturating_add(self, other: "Money") -> "Money":
        return Money(_saturate(self._minor + other._minor))

    def saturating_sub(self, other: "Money") -> "Money":
        return Money(_saturate(self._minor - other._minor))

    def checked_neg(self) -> Optional["Money"]:
        negated = -self._minor
        return Money(negated) if _fits(negated) else None

    def __add__(self, other: object) -> "Money":
        if not isinstance(other, Money):
            return NotImplemented
        return self.saturating_add(other)

    def __sub__(self, other: object) -> "Money":
        if not isinstance(other, Money):
            return NotImplemented
        return self.saturating_sub(other)

    def __neg__(self) -> "Money":
        return Money(_saturate(-self._minor))

    def __abs__(self) -> "Money":
        return self.abs()

    def __int__(self) -> int:
        return self._minor

    def __str__(self) -> str:
        return self._body()

    def __repr__(self) -> str:
        return f"Money({self._minor})"


Money.ZERO = Money(0)
Money.MAX = Money(_I32_MAX)
Money.MIN = Money(_I32_MIN)