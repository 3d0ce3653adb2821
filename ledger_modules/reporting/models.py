"""
Reporting models: frozen report rows for the dashboard views.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ledger_kernel.domain.values import Money


@dataclass(frozen=True)
class ActivityItem:
    """One entry as listed on the daily activity view."""
    entry_id: str
    reference: str
    description: str
    module: str
    volume: Money


@dataclass(frozen=True)
class DailyActivity:
    day: date
    items: tuple[ActivityItem, ...]

    @property
    def total_volume(self) -> Money:
        return Money.sum(i.volume for i in self.items)

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class PulsePoint:
    """Revenue and expense flow for a single day."""
    day: date
    revenue: Money
    expense: Money

    @property
    def net(self) -> Money:
        return self.revenue - self.expense


@dataclass(frozen=True)
class FinancialPulse:
    points: tuple[PulsePoint, ...]

    @property
    def total_revenue(self) -> Money:
        return Money.sum(p.revenue for p in self.points)

    @property
    def total_expense(self) -> Money:
        return Money.sum(p.expense for p in self.points)
