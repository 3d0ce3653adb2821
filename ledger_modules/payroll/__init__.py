"""
Payroll Module (``ledger_modules.payroll``).

Responsibility
--------------
Staff payroll for the school: per-employee deduction profiles (SSS,
PhilHealth, Pag-IBIG, withholding tax, custom items) resolved against
global fallback rates, draft/posted payroll runs, and the immutable
payroll record history.

Architecture position
---------------------
**Modules layer** -- pure helpers for the arithmetic, a small workflow
declaration, and a service facade that delegates every journal write to
``ledger_kernel.services.poster.TransactionPoster``.
"""

from ledger_modules.payroll.config import PayrollAccounts, PayrollSettings
from ledger_modules.payroll.helpers import resolve_deductions
from ledger_modules.payroll.models import (
    CORE_SLOTS,
    CustomDeduction,
    DeductionMode,
    DeductionProfile,
    DeductionProfileDraft,
    DeductionSlot,
    PayrollRecord,
    PayrollRunStatus,
    ResolvedDeductions,
    Staff,
)
from ledger_modules.payroll.registry import PayrollRecordBook, StaffRegistry
from ledger_modules.payroll.service import PayrollRun, PayrollService
from ledger_modules.payroll.workflows import PAYROLL_RUN_WORKFLOW

__all__ = [
    "CORE_SLOTS",
    "CustomDeduction",
    "DeductionMode",
    "DeductionProfile",
    "DeductionProfileDraft",
    "DeductionSlot",
    "PAYROLL_RUN_WORKFLOW",
    "PayrollAccounts",
    "PayrollRecord",
    "PayrollRecordBook",
    "PayrollRun",
    "PayrollRunStatus",
    "PayrollService",
    "PayrollSettings",
    "ResolvedDeductions",
    "Staff",
    "StaffRegistry",
    "resolve_deductions",
]
