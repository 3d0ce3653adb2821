"""
Module: ledger_kernel.domain.balances
Responsibility: Derive account balances from the chart of accounts and the
    posted entries. There are no stored balances anywhere in the kernel.
Architecture position: Kernel > Domain. Pure functions plus one memoizing
    reader keyed by the store version.

Invariants enforced:
    - Debit-normal accounts (Asset, Expense) move by debit - credit.
    - Credit-normal accounts (Liability, Equity, Revenue) move by credit - debit.
    - A memoized balance is only served while the store version it was
      computed at is still current; any append invalidates it.
"""

from __future__ import annotations

from collections.abc import Iterable

from ledger_kernel.domain.accounts import Account, ChartOfAccounts
from ledger_kernel.domain.entries import LedgerEntry, LedgerEntryStore
from ledger_kernel.domain.values import Money
from ledger_kernel.logging_config import get_logger

logger = get_logger("domain.balances")


def signed_movement(account: Account, debit: Money, credit: Money) -> Money:
    """Change in ``account``'s balance caused by one debit/credit pair."""
    if account.is_debit_normal:
        return debit - credit
    return credit - debit


def account_balance(account: Account, entries: Iterable[LedgerEntry]) -> Money:
    """
    Full recompute of one account's balance.

    Starts from ``account.initial_balance`` and scans every line of every
    entry that targets the account.
    """
    balance = account.initial_balance
    for entry in entries:
        for line in entry.lines:
            if line.account_id == account.id:
                balance = balance + signed_movement(account, line.debit, line.credit)
    return balance


def account_balances(
    accounts: Iterable[Account],
    entries: Iterable[LedgerEntry],
) -> dict[str, Money]:
    """
    Balances for many accounts in a single pass over the entries.

    Lines that reference accounts outside ``accounts`` are ignored here;
    the poster guarantees they cannot exist in a store built on the same chart.
    """
    by_id = {a.id: a for a in accounts}
    balances = {a.id: a.initial_balance for a in by_id.values()}
    for entry in entries:
        for line in entry.lines:
            account = by_id.get(line.account_id)
            if account is not None:
                balances[account.id] = balances[account.id] + signed_movement(
                    account, line.debit, line.credit
                )
    return balances


class BalanceCalculator:
    """
    balance_of() over a live chart and store.

    Contract:
        Results are always equal to ``account_balance(chart.find(id), store.all())``.
        The memo is a pure optimisation and is discarded whenever
        ``store.version`` moves.
    """

    def __init__(self, chart: ChartOfAccounts, store: LedgerEntryStore):
        self._chart = chart
        self._store = store
        self._memo: dict[str, Money] = {}
        self._memo_version = -1

    def balance_of(self, account_id: str) -> Money:
        """
        Raises:
            AccountNotFoundError: If ``account_id`` does not resolve.
        """
        account = self._chart.find(account_id)
        if self._memo_version != self._store.version:
            self._memo.clear()
            self._memo_version = self._store.version
        cached = self._memo.get(account_id)
        if cached is not None:
            return cached
        balance = account_balance(account, self._store.all())
        self._memo[account_id] = balance
        logger.debug(
            "balance_computed",
            extra={
                "account_id": account_id,
                "balance": str(balance),
                "store_version": self._memo_version,
            },
        )
        return balance
