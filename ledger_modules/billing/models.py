"""
Billing Domain Models (``ledger_modules.billing.models``).

Students with a running receivable balance, the fee categories a school
assesses, and the accounts assessments and collections post to.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from ledger_kernel.domain.values import Money

DEFAULT_FEE_CATEGORIES: tuple[str, ...] = (
    "Tuition",
    "Miscellaneous",
    "Lab Fees",
    "Library Fees",
    "Sports Fee",
    "Uniform",
)


@dataclass(frozen=True)
class Student:
    """An enrolled student and the amount they still owe."""
    id: str
    name: str
    grade: str = ""
    balance: Money = field(default_factory=Money.zero)

    def __post_init__(self):
        if not self.id:
            raise ValueError("Student id is required")
        object.__setattr__(self, "balance", Money.non_negative(self.balance, "balance"))

    def with_balance(self, balance) -> Student:
        return replace(self, balance=Money.non_negative(balance, "balance"))


@dataclass(frozen=True)
class BillingAccounts:
    """Accounts an assessment and a collection post to."""

    receivable_account_id: str = "2"
    revenue_account_id: str = "6"
    cash_account_id: str = "1"
