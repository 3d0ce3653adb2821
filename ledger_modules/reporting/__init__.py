"""
Reporting Module (``ledger_modules.reporting``).

Read-only dashboard views derived from the ledger: today's activity and the
seven-day revenue/expense pulse.
"""

from ledger_modules.reporting.models import (
    ActivityItem,
    DailyActivity,
    FinancialPulse,
    PulsePoint,
)
from ledger_modules.reporting.statements import daily_activity, financial_pulse

__all__ = [
    "ActivityItem",
    "DailyActivity",
    "FinancialPulse",
    "PulsePoint",
    "daily_activity",
    "financial_pulse",
]
