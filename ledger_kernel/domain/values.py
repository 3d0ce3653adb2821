"""
Values -- Immutable, self-validating monetary value object.

Responsibility:
    Provides the single Money type used for every amount the kernel touches:
    account balances, journal line sides, payroll figures, payables and
    receivables. Conversion from user input (str, int, float, Decimal)
    happens once, in Money.of(), never per-operation.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    Imported by every other domain module. No outward dependencies except
    ledger_kernel.exceptions.

Invariants enforced:
    - All monetary amounts are Decimal (never float) once inside the kernel.
    - Rounding is explicit: callers use .round() to quantize to centavos.

Failure modes:
    - InvalidAmountError on non-numeric, NaN or infinite input.
    - InvalidAmountError from Money.non_negative() on a negative amount.

Non-goals:
    - Single currency only. There is no currency field; the institution books
      everything in one currency.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from ledger_kernel.exceptions import InvalidAmountError

CENTAVO = Decimal("0.01")


@dataclass(frozen=True, slots=True)
class Money:
    """
    Monetary amount value object.

    Guarantees:
        - Immutable and hashable (frozen dataclass with slots)
        - amount is always a finite Decimal
        - Arithmetic never silently drops to float
    """

    amount: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, "amount", _to_decimal(self.amount, "amount"))
        if not self.amount.is_finite():
            raise InvalidAmountError("amount", self.amount, "must be a finite number")

    @classmethod
    def of(cls, value: Money | Decimal | int | float | str, field: str = "amount") -> Money:
        """
        Boundary conversion into Money.

        Floats are converted through their shortest repr, so ``0.1`` becomes
        ``Decimal("0.1")``, not the binary expansion.

        Raises:
            InvalidAmountError: If value is not numeric.
        """
        if isinstance(value, Money):
            return value
        return cls(_to_decimal(value, field))

    @classmethod
    def non_negative(cls, value: Money | Decimal | int | float | str, field: str = "amount") -> Money:
        """Money.of() that additionally rejects negative amounts."""
        money = cls.of(value, field)
        if money.is_negative:
            raise InvalidAmountError(field, value, "must not be negative")
        return money

    @classmethod
    def zero(cls) -> Money:
        """Create a zero amount."""
        return cls(Decimal("0"))

    @classmethod
    def sum(cls, values) -> Money:
        """Sum an iterable of Money, starting from zero."""
        total = cls.zero()
        for value in values:
            total = total + value
        return total

    @property
    def is_zero(self) -> bool:
        return self.amount == 0

    @property
    def is_positive(self) -> bool:
        return self.amount > 0

    @property
    def is_negative(self) -> bool:
        return self.amount < 0

    def round(self, rounding: str = ROUND_HALF_UP) -> Money:
        """Return a new Money quantized to centavos."""
        return Money(self.amount.quantize(CENTAVO, rounding=rounding))

    def floor_at_zero(self) -> Money:
        """max(0, self)."""
        return self if self.amount > 0 else Money.zero()

    def __add__(self, other: Money) -> Money:
        if not isinstance(other, Money):
            return NotImplemented
        return Money(self.amount + other.amount)

    def __sub__(self, other: Money) -> Money:
        if not isinstance(other, Money):
            return NotImplemented
        return Money(self.amount - other.amount)

    def __neg__(self) -> Money:
        return Money(-self.amount)

    def __abs__(self) -> Money:
        return Money(abs(self.amount))

    def __mul__(self, factor: Decimal | int | str) -> Money:
        """Multiply by a scalar rate."""
        if isinstance(factor, (int, str)):
            factor = Decimal(str(factor))
        if not isinstance(factor, Decimal):
            return NotImplemented
        return Money(self.amount * factor)

    def __rmul__(self, factor: Decimal | int | str) -> Money:
        return self.__mul__(factor)

    def __lt__(self, other: Money) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.amount < other.amount

    def __le__(self, other: Money) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.amount <= other.amount

    def __gt__(self, other: Money) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.amount > other.amount

    def __ge__(self, other: Money) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.amount >= other.amount

    def __str__(self) -> str:
        return str(self.amount)

    def __repr__(self) -> str:
        return f"Money({str(self.amount)!r})"


def _to_decimal(value: object, field: str) -> Decimal:
    if isinstance(value, bool):
        raise InvalidAmountError(field, value, "must be numeric")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float, str)):
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, ValueError) as e:
            raise InvalidAmountError(field, value, "must be numeric") from e
    else:
        raise InvalidAmountError(field, value, "must be numeric")
    if not result.is_finite():
        raise InvalidAmountError(field, value, "must be a finite number")
    return result


# Maximum |debits - credits| still treated as balanced (exclusive).
POSTING_TOLERANCE = Money(CENTAVO)
