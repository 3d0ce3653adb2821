"""
Pure dashboard report functions.

These functions read (accounts, entries) and return frozen report objects.
ZERO I/O. ZERO side effects. No clock access: the caller passes the day.

The pulse figures are daily flows, not balances: revenue for a day is the
credit-minus-debit movement on revenue accounts in entries dated that day,
and expense is the debit-minus-credit movement on expense accounts.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, timedelta

from ledger_kernel.domain.accounts import Account, AccountType
from ledger_kernel.domain.entries import LedgerEntry
from ledger_kernel.domain.values import Money
from ledger_modules.reporting.models import (
    ActivityItem,
    DailyActivity,
    FinancialPulse,
    PulsePoint,
)


def daily_activity(entries: Iterable[LedgerEntry], day: date) -> DailyActivity:
    """Entries dated ``day``, most recent first."""
    items = [
        ActivityItem(
            entry_id=e.id,
            reference=e.reference,
            description=e.description,
            module=e.module,
            volume=e.volume,
        )
        for e in entries
        if e.date == day
    ]
    items.reverse()
    return DailyActivity(day=day, items=tuple(items))


def financial_pulse(
    accounts: Iterable[Account],
    entries: Iterable[LedgerEntry],
    end: date,
    days: int = 7,
) -> FinancialPulse:
    """
    Per-day revenue and expense for the ``days`` days ending on ``end``.

    Points are ordered oldest first. Days with no activity report zero.
    """
    if days < 1:
        raise ValueError("days must be at least 1")

    types = {a.id: a.type for a in accounts}
    start = end - timedelta(days=days - 1)
    revenue = {start + timedelta(days=i): Money.zero() for i in range(days)}
    expense = dict(revenue)

    for entry in entries:
        if entry.date not in revenue:
            continue
        for line in entry.lines:
            account_type = types.get(line.account_id)
            if account_type is AccountType.REVENUE:
                revenue[entry.date] = revenue[entry.date] + (line.credit - line.debit)
            elif account_type is AccountType.EXPENSE:
                expense[entry.date] = expense[entry.date] + (line.debit - line.credit)

    return FinancialPulse(
        points=tuple(
            PulsePoint(day=d, revenue=revenue[d], expense=expense[d])
            for d in sorted(revenue)
        )
    )
