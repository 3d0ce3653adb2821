"""
Billing Module (``ledger_modules.billing``).

Student fee assessments and collections. Student balances are the source of
the ``total_ar`` summary figure.
"""

from ledger_modules.billing.models import (
    DEFAULT_FEE_CATEGORIES,
    BillingAccounts,
    Student,
)
from ledger_modules.billing.registry import StudentRegistry
from ledger_modules.billing.service import BillingService

__all__ = [
    "DEFAULT_FEE_CATEGORIES",
    "BillingAccounts",
    "BillingService",
    "Student",
    "StudentRegistry",
]
