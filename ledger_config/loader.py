"""
Configuration Loader (``ledger_config.loader``).

Responsibility
--------------
Loads a school configuration YAML file and parses it into the typed
``ledger_config.schema`` dataclasses.

Architecture position
---------------------
**Config layer** -- infrastructure tooling. Called once at start-up by
``SchoolLedger.from_config`` / ``SchoolLedger.default``; nothing inside the
kernel reads files.

Invariants enforced
-------------------
* All parse errors raise ``ValueError`` or ``KeyError`` with descriptive
  messages; no silent defaults for required fields.
* Every parsed object is a frozen dataclass from ``schema.py``.
* ``compute_checksum`` produces a deterministic SHA-256 hash for
  configuration identity and change detection.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing required keys  -> ``KeyError`` propagates.
* Non-numeric amount  -> ``ValueError``.
* Out-of-range payroll rate  -> ``InvalidAmountError`` from ``PayrollSettings``.
"""

from __future__ import annotations

import hashlib
import json
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

import yaml

from ledger_config.schema import (
    AccountDef,
    CustomDeductionDef,
    DeductionDef,
    LedgerConfig,
    LineDef,
    OpeningEntryDef,
    StaffDef,
    StudentDef,
    SupplierDef,
)
from ledger_kernel.logging_config import get_logger
from ledger_modules.billing.models import DEFAULT_FEE_CATEGORIES, BillingAccounts
from ledger_modules.payroll.config import PayrollAccounts, PayrollSettings
from ledger_modules.procurement.models import ProcurementAccounts

logger = get_logger("config.loader")

DEFAULT_CONFIG_PATH = Path(__file__).parent / "defaults" / "school.yaml"


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path) as f:
        return yaml.safe_load(f) or {}


def parse_decimal(value: Any, field: str) -> Decimal:
    """Parse a YAML scalar (int, float or string) into a Decimal."""
    if isinstance(value, bool):
        raise ValueError(f"{field}: expected a number, got {value!r}")
    try:
        return Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"{field}: expected a number, got {value!r}") from None


def parse_account(data: dict[str, Any]) -> AccountDef:
    return AccountDef(
        id=str(data["id"]),
        code=str(data.get("code", data["id"])),
        name=data["name"],
        type=data["type"],
        initial_balance=parse_decimal(data.get("initial_balance", 0), "initial_balance"),
    )


def parse_line(data: dict[str, Any]) -> LineDef:
    return LineDef(
        account_id=str(data["account_id"]),
        debit=parse_decimal(data.get("debit", 0), "debit"),
        credit=parse_decimal(data.get("credit", 0), "credit"),
    )


def parse_opening_entry(data: dict[str, Any]) -> OpeningEntryDef:
    """
    Parse an ``OpeningEntryDef``.

    Raises:
        KeyError: if ``description`` or ``lines`` is missing.
    """
    lines = tuple(parse_line(line) for line in data["lines"])
    if not lines:
        raise ValueError(f"Opening entry {data['description']!r} has no lines")
    return OpeningEntryDef(
        description=data["description"],
        reference=str(data.get("reference", "")),
        lines=lines,
        module=data.get("module", "System"),
        meta=dict(data.get("meta", {})),
    )


def parse_staff(data: dict[str, Any]) -> StaffDef:
    manual = data.get("manual_deductions", {}) or {}
    return StaffDef(
        id=str(data["id"]),
        name=data["name"],
        position=data.get("position", ""),
        category=data.get("category", ""),
        basic_pay=parse_decimal(data.get("basic_pay", 0), "basic_pay"),
        manual_deductions=tuple(
            DeductionDef(slot=slot, value=parse_decimal(value, slot))
            for slot, value in manual.items()
        ),
        custom_deductions=tuple(
            CustomDeductionDef(name=c["name"], value=parse_decimal(c["value"], c["name"]))
            for c in data.get("custom_deductions", [])
        ),
    )


def parse_supplier(data: dict[str, Any]) -> SupplierDef:
    return SupplierDef(
        id=str(data["id"]),
        name=data["name"],
        category=data.get("category", ""),
        payable=parse_decimal(data.get("payable", 0), "payable"),
    )


def parse_student(data: dict[str, Any]) -> StudentDef:
    return StudentDef(
        id=str(data["id"]),
        name=data["name"],
        grade=str(data.get("grade", "")),
        balance=parse_decimal(data.get("balance", 0), "balance"),
    )


def parse_config(data: dict[str, Any]) -> LedgerConfig:
    """
    Parse a complete ``LedgerConfig`` from a dict.

    Preconditions:
        - ``data`` must contain ``config_id`` and a non-empty ``accounts`` list.
    Postconditions:
        - ``checksum`` is the SHA-256 of ``data`` as given.
    """
    accounts = tuple(parse_account(a) for a in data["accounts"])
    if not accounts:
        raise ValueError("Configuration declares no accounts")

    module_accounts = data.get("module_accounts", {}) or {}

    config = LedgerConfig(
        config_id=data["config_id"],
        version=int(data.get("version", 1)),
        checksum=compute_checksum(data),
        accounts=accounts,
        default_actor=data.get("default_actor", "Admin"),
        opening_entries=tuple(parse_opening_entry(e) for e in data.get("opening_entries", [])),
        staff=tuple(parse_staff(s) for s in data.get("staff", [])),
        suppliers=tuple(parse_supplier(s) for s in data.get("suppliers", [])),
        students=tuple(parse_student(s) for s in data.get("students", [])),
        fee_categories=tuple(data.get("fee_categories", DEFAULT_FEE_CATEGORIES)),
        payroll_settings=PayrollSettings.from_dict(data.get("payroll_settings", {}) or {}),
        payroll_accounts=PayrollAccounts(**module_accounts.get("payroll", {})),
        procurement_accounts=ProcurementAccounts(**module_accounts.get("procurement", {})),
        billing_accounts=BillingAccounts(**module_accounts.get("billing", {})),
    )

    logger.info(
        "config_parsed",
        extra={
            "config_id": config.config_id,
            "version": config.version,
            "checksum": config.checksum,
            "account_count": len(config.accounts),
            "opening_entry_count": len(config.opening_entries),
        },
    )
    return config


def load_config(path: Path | str | None = None) -> LedgerConfig:
    """Load and parse a configuration file; the bundled school by default."""
    return parse_config(load_yaml_file(Path(path) if path else DEFAULT_CONFIG_PATH))


def compute_checksum(data: dict[str, Any]) -> str:
    """
    Compute SHA-256 checksum of canonical JSON serialization.

    Identical ``data`` always produces identical checksums.
    """
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()
