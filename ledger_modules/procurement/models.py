"""
Procurement Domain Models (``ledger_modules.procurement.models``).

Suppliers and the account mapping for purchase postings. Frozen value
objects; payable changes produce a new ``Supplier`` through
``with_payable``.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from ledger_kernel.domain.values import Money


@dataclass(frozen=True)
class Supplier:
    """A vendor the school buys supplies or services from."""
    id: str
    name: str
    category: str = ""
    payable: Money = field(default_factory=Money.zero)

    def __post_init__(self):
        if not self.id:
            raise ValueError("Supplier id is required")
        object.__setattr__(self, "payable", Money.non_negative(self.payable, "payable"))

    def with_payable(self, payable) -> Supplier:
        return replace(self, payable=Money.non_negative(payable, "payable"))


@dataclass(frozen=True)
class ProcurementAccounts:
    """Accounts a purchase invoice and a supplier payment post to."""

    expense_account_id: str = "8"
    payable_account_id: str = "4"
    cash_account_id: str = "1"
