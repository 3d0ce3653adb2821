"""
Summary -- institution-wide totals derived from accounts and entries.

Responsibility:
    Pure derivation of the dashboard figures: per-type balance totals, the
    global debit/credit volumes, net income and total receivables.

Architecture position:
    Kernel > Domain -- pure functional core. Callers pass the current
    collections in; nothing is cached or subscribed to.

Invariants enforced:
    - net_income == total_revenue - total_expenses, always.
    - total_system_debit == total_system_credit whenever every entry in the
      store was accepted by the TransactionPoster.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from ledger_kernel.domain.accounts import Account, AccountType
from ledger_kernel.domain.balances import account_balances
from ledger_kernel.domain.entries import LedgerEntry
from ledger_kernel.domain.values import Money


@dataclass(frozen=True)
class SummarySnapshot:
    """Read-only composite of the summary figures."""

    total_assets: Money
    total_liabilities: Money
    total_equity: Money
    total_revenue: Money
    total_expenses: Money
    total_system_debit: Money
    total_system_credit: Money
    net_income: Money
    total_ar: Money

    @property
    def is_balanced(self) -> bool:
        return self.total_system_debit == self.total_system_credit

    def as_dict(self) -> dict[str, str]:
        return {
            "total_assets": str(self.total_assets),
            "total_liabilities": str(self.total_liabilities),
            "total_equity": str(self.total_equity),
            "total_revenue": str(self.total_revenue),
            "total_expenses": str(self.total_expenses),
            "total_system_debit": str(self.total_system_debit),
            "total_system_credit": str(self.total_system_credit),
            "net_income": str(self.net_income),
            "total_ar": str(self.total_ar),
        }


def summarize(
    accounts: Iterable[Account],
    entries: Iterable[LedgerEntry],
    receivables: Iterable[Money] = (),
) -> SummarySnapshot:
    """
    Compose the summary snapshot.

    Args:
        accounts: Every account of the chart.
        entries: Every posted entry, in store order.
        receivables: Outstanding per-student balances, supplied read-only by
            the billing registry.
    """
    accounts = tuple(accounts)
    entries = tuple(entries)
    balances = account_balances(accounts, entries)

    totals = {t: Money.zero() for t in AccountType}
    for account in accounts:
        totals[account.type] = totals[account.type] + balances[account.id]

    system_debit = Money.zero()
    system_credit = Money.zero()
    for entry in entries:
        for line in entry.lines:
            system_debit = system_debit + line.debit
            system_credit = system_credit + line.credit

    return SummarySnapshot(
        total_assets=totals[AccountType.ASSET],
        total_liabilities=totals[AccountType.LIABILITY],
        total_equity=totals[AccountType.EQUITY],
        total_revenue=totals[AccountType.REVENUE],
        total_expenses=totals[AccountType.EXPENSE],
        total_system_debit=system_debit,
        total_system_credit=system_credit,
        net_income=totals[AccountType.REVENUE] - totals[AccountType.EXPENSE],
        total_ar=Money.sum(Money.of(r) for r in receivables),
    )
