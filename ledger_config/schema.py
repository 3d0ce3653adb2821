"""
LedgerConfig schema.

The human-authored, reviewable description of one school's books: chart of
accounts, opening entries, the seed registers (staff, suppliers, students),
payroll settings and the account mappings each module posts to. YAML is
parsed into these types by the loader; ``SchoolLedger.from_config`` turns
them into live kernel objects.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from ledger_modules.billing.models import DEFAULT_FEE_CATEGORIES, BillingAccounts
from ledger_modules.payroll.config import PayrollAccounts, PayrollSettings
from ledger_modules.procurement.models import ProcurementAccounts

# ---------------------------------------------------------------------------
# Chart and opening entries
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AccountDef:
    """One account of the chart."""

    id: str
    code: str
    name: str
    type: str  # Asset, Liability, Equity, Revenue, Expense
    initial_balance: Decimal = Decimal("0")


@dataclass(frozen=True)
class LineDef:
    account_id: str
    debit: Decimal = Decimal("0")
    credit: Decimal = Decimal("0")


@dataclass(frozen=True)
class OpeningEntryDef:
    """An entry posted once when the ledger is built."""

    description: str
    reference: str
    lines: tuple[LineDef, ...]
    module: str = "System"
    meta: dict[str, Any] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Registers
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DeductionDef:
    """A MANUAL core deduction slot. Slots not listed stay DEFAULT."""

    slot: str
    value: Decimal


@dataclass(frozen=True)
class CustomDeductionDef:
    name: str
    value: Decimal


@dataclass(frozen=True)
class StaffDef:
    id: str
    name: str
    position: str = ""
    category: str = ""
    basic_pay: Decimal = Decimal("0")
    manual_deductions: tuple[DeductionDef, ...] = ()
    custom_deductions: tuple[CustomDeductionDef, ...] = ()


@dataclass(frozen=True)
class SupplierDef:
    id: str
    name: str
    category: str = ""
    payable: Decimal = Decimal("0")


@dataclass(frozen=True)
class StudentDef:
    id: str
    name: str
    grade: str = ""
    balance: Decimal = Decimal("0")


# ---------------------------------------------------------------------------
# Root
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LedgerConfig:
    """Everything needed to build one SchoolLedger.

    Attributes:
        config_id: Identifier of the configuration (e.g., "SCHOOL-DEFAULT")
        version: Configuration version number
        checksum: SHA-256 of the canonical source dict
        default_actor: User recorded on audit entries when none is given
    """

    config_id: str
    version: int
    checksum: str
    accounts: tuple[AccountDef, ...]

    default_actor: str = "Admin"
    opening_entries: tuple[OpeningEntryDef, ...] = ()
    staff: tuple[StaffDef, ...] = ()
    suppliers: tuple[SupplierDef, ...] = ()
    students: tuple[StudentDef, ...] = ()
    fee_categories: tuple[str, ...] = DEFAULT_FEE_CATEGORIES
    payroll_settings: PayrollSettings = field(default_factory=PayrollSettings.with_defaults)
    payroll_accounts: PayrollAccounts = field(default_factory=PayrollAccounts)
    procurement_accounts: ProcurementAccounts = field(default_factory=ProcurementAccounts)
    billing_accounts: BillingAccounts = field(default_factory=BillingAccounts)
