"""
Pure domain layer.

This package contains immutable value objects and pure derivations with NO
dependencies on persistence, wall-clock time or I/O. Every balance and
summary figure is recomputable from (ChartOfAccounts, LedgerEntryStore).
"""

from ledger_kernel.domain.accounts import (
    Account,
    AccountType,
    ChartOfAccounts,
    NormalBalance,
)
from ledger_kernel.domain.balances import (
    BalanceCalculator,
    account_balance,
    account_balances,
)
from ledger_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from ledger_kernel.domain.entries import LedgerEntry, LedgerEntryStore, LedgerLine
from ledger_kernel.domain.summary import SummarySnapshot, summarize
from ledger_kernel.domain.values import POSTING_TOLERANCE, Money
from ledger_kernel.domain.workflow import Transition, Workflow

__all__ = [
    # Values
    "Money",
    "POSTING_TOLERANCE",
    # Accounts
    "Account",
    "AccountType",
    "ChartOfAccounts",
    "NormalBalance",
    # Entries
    "LedgerEntry",
    "LedgerEntryStore",
    "LedgerLine",
    # Derivations
    "BalanceCalculator",
    "account_balance",
    "account_balances",
    "SummarySnapshot",
    "summarize",
    # Clock
    "Clock",
    "SystemClock",
    "DeterministicClock",
    # Workflow
    "Transition",
    "Workflow",
]
