"""
Payroll Configuration Schema.

Defines the global deduction policy (rates applied to every DEFAULT-mode
slot) and the accounts a payroll disbursement posts to. Actual values are
loaded from the school configuration at runtime.
"""

from dataclasses import dataclass, fields
from decimal import Decimal, InvalidOperation
from typing import Self

from ledger_kernel.domain.values import Money
from ledger_kernel.exceptions import InvalidAmountError
from ledger_kernel.logging_config import get_logger

logger = get_logger("modules.payroll.config")

_RATE_FIELDS = ("sss_rate", "phil_health_rate", "w_tax_rate")
_AMOUNT_FIELDS = ("pag_ibig_flat", "w_tax_threshold")

_CAMEL_KEYS = {
    "sssRate": "sss_rate",
    "philHealthRate": "phil_health_rate",
    "pagIbigFlat": "pag_ibig_flat",
    "wTaxThreshold": "w_tax_threshold",
    "wTaxRate": "w_tax_rate",
}


def _rate(name: str, value) -> Decimal:
    if isinstance(value, bool):
        raise InvalidAmountError(name, value, "must be numeric")
    try:
        rate = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError) as e:
        raise InvalidAmountError(name, value, "must be numeric") from e
    if not rate.is_finite():
        raise InvalidAmountError(name, value, "must be a finite number")
    return rate


@dataclass(frozen=True)
class PayrollSettings:
    """
    Global payroll policy, one per process.

    Field defaults match the school's standing policy:

        settings = PayrollSettings.from_dict({"sss_rate": "0.05"})
    """

    sss_rate: Decimal = Decimal("0.045")
    phil_health_rate: Decimal = Decimal("0.02")
    pag_ibig_flat: Money = Money(Decimal("100"))
    w_tax_threshold: Money = Money(Decimal("20833"))
    w_tax_rate: Decimal = Decimal("0.15")

    def __post_init__(self):
        for name in _RATE_FIELDS:
            rate = _rate(name, getattr(self, name))
            if rate < 0:
                raise InvalidAmountError(name, rate, "rate cannot be negative")
            if rate > 1:
                raise InvalidAmountError(name, rate, "rate cannot exceed 1 (100%)")
            object.__setattr__(self, name, rate)

        for name in _AMOUNT_FIELDS:
            object.__setattr__(self, name, Money.non_negative(getattr(self, name), name))

        logger.debug(
            "payroll_settings_initialized",
            extra={
                "sss_rate": str(self.sss_rate),
                "phil_health_rate": str(self.phil_health_rate),
                "pag_ibig_flat": str(self.pag_ibig_flat),
                "w_tax_threshold": str(self.w_tax_threshold),
                "w_tax_rate": str(self.w_tax_rate),
            },
        )

    @classmethod
    def with_defaults(cls) -> Self:
        """Create settings with the standing school policy."""
        return cls()

    @classmethod
    def from_dict(cls, data: dict) -> Self:
        """Create settings from a dict (snake_case or camelCase keys)."""
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            name = _CAMEL_KEYS.get(key, key)
            if name in known:
                kwargs[name] = value
            else:
                logger.warning("payroll_settings_unknown_key", extra={"key": key})
        return cls(**kwargs)

    def updated(self, **changes) -> Self:
        """Validated copy with ``changes`` applied."""
        current = {f.name: getattr(self, f.name) for f in fields(self)}
        current.update({_CAMEL_KEYS.get(k, k): v for k, v in changes.items()})
        unknown = set(current) - {f.name for f in fields(self)}
        if unknown:
            raise ValueError(f"Unknown payroll settings: {sorted(unknown)}")
        return type(self)(**current)

    def as_dict(self) -> dict[str, str]:
        return {f.name: str(getattr(self, f.name)) for f in fields(self)}


@dataclass(frozen=True)
class PayrollAccounts:
    """Accounts a payroll disbursement posts to."""

    expense_account_id: str = "7"
    disbursement_account_id: str = "1"
    withholding_account_id: str = "9"
