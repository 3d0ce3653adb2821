"""
Module: ledger_kernel.domain.accounts
Responsibility: The Chart of Accounts -- the registry every journal line,
    balance and summary figure resolves its account through.
Architecture position: Kernel > Domain. Pure, zero I/O.

Invariants enforced:
    - Accounts are immutable once created (frozen dataclass).
    - Account ids are unique within a chart.
    - A reference to an unknown id raises AccountNotFoundError; it is never
      treated as a zero-balance account.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum

from ledger_kernel.domain.values import Money
from ledger_kernel.exceptions import AccountNotFoundError


class NormalBalance(str, Enum):
    """Normal balance side for an account."""

    DEBIT = "debit"
    CREDIT = "credit"


class AccountType(str, Enum):
    """Types of accounts in the chart of accounts."""

    ASSET = "Asset"
    LIABILITY = "Liability"
    EQUITY = "Equity"
    REVENUE = "Revenue"
    EXPENSE = "Expense"

    @property
    def normal_balance(self) -> NormalBalance:
        if self in (AccountType.ASSET, AccountType.EXPENSE):
            return NormalBalance.DEBIT
        return NormalBalance.CREDIT

    @classmethod
    def parse(cls, value: str | AccountType) -> AccountType:
        """Case-insensitive lookup by value or member name."""
        if isinstance(value, AccountType):
            return value
        for member in cls:
            if value.strip().lower() in (member.value.lower(), member.name.lower()):
                return member
        raise ValueError(f"Unknown account type: {value!r}")


@dataclass(frozen=True)
class Account:
    """A single node of the chart of accounts."""

    id: str
    code: str
    name: str
    type: AccountType
    initial_balance: Money = field(default_factory=Money.zero)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Account id is required")
        if not isinstance(self.initial_balance, Money):
            object.__setattr__(
                self, "initial_balance", Money.of(self.initial_balance, "initial_balance")
            )

    @property
    def is_debit_normal(self) -> bool:
        return self.type.normal_balance == NormalBalance.DEBIT

    @property
    def is_credit_normal(self) -> bool:
        return self.type.normal_balance == NormalBalance.CREDIT

    def __repr__(self) -> str:
        return f"<Account {self.code}: {self.name}>"


class ChartOfAccounts:
    """
    Read-only registry of accounts, in declaration order.

    Contract:
        find() is the only sanctioned way to turn an account id into an
        Account. Components never assume presence.
    """

    def __init__(self, accounts: Iterable[Account]):
        self._accounts: dict[str, Account] = {}
        for account in accounts:
            if account.id in self._accounts:
                raise ValueError(f"Duplicate account id: {account.id}")
            self._accounts[account.id] = account

    def find(self, account_id: str) -> Account:
        """Resolve an account id or raise AccountNotFoundError."""
        try:
            return self._accounts[account_id]
        except KeyError:
            raise AccountNotFoundError(account_id) from None

    def all(self) -> tuple[Account, ...]:
        return tuple(self._accounts.values())

    def of_type(self, account_type: AccountType) -> tuple[Account, ...]:
        return tuple(a for a in self._accounts.values() if a.type == account_type)

    def __contains__(self, account_id: object) -> bool:
        return account_id in self._accounts

    def __iter__(self) -> Iterator[Account]:
        return iter(self._accounts.values())

    def __len__(self) -> int:
        return len(self._accounts)
