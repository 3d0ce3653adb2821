"""
Pytest fixtures for the school ledger test suite.

Provides:
- Structured logging configured once per session
- A DeterministicClock and the bundled default configuration
- Bare kernel objects (chart, store, audit, poster) for kernel-level tests
- A fully wired SchoolLedger for module and service tests
"""

import json
import logging
from io import StringIO

import pytest

from ledger_config import load_config
from ledger_kernel.domain.accounts import Account, AccountType, ChartOfAccounts
from ledger_kernel.domain.clock import DeterministicClock
from ledger_kernel.domain.entries import LedgerEntryStore
from ledger_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)
from ledger_kernel.services.audit import AuditLogger
from ledger_kernel.services.poster import TransactionPoster
from ledger_services import SchoolLedger


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture ledger_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs, poster):
            poster.post(...)
            logs = captured_logs()
            assert any(r["message"] == "transaction_posted" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("ledger_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Kernel fixtures
# =============================================================================


SCHOOL_ACCOUNTS = (
    Account("1", "1010", "Cash in Bank", AccountType.ASSET),
    Account("2", "1200", "Tuition Receivable", AccountType.ASSET),
    Account("3", "1500", "School Equipment", AccountType.ASSET),
    Account("4", "2010", "Accounts Payable", AccountType.LIABILITY),
    Account("9", "2100", "Payroll Withholdings Payable", AccountType.LIABILITY),
    Account("5", "3000", "Fund Balance", AccountType.EQUITY),
    Account("6", "4000", "Tuition Revenue", AccountType.REVENUE),
    Account("7", "5000", "Salaries Expense", AccountType.EXPENSE),
    Account("8", "5100", "Supplies & Utilities Expense", AccountType.EXPENSE),
)


@pytest.fixture
def deterministic_clock():
    return DeterministicClock()


@pytest.fixture
def chart():
    return ChartOfAccounts(SCHOOL_ACCOUNTS)


@pytest.fixture
def store():
    return LedgerEntryStore()


@pytest.fixture
def audit(deterministic_clock):
    return AuditLogger(deterministic_clock)


@pytest.fixture
def poster(chart, store, audit, deterministic_clock):
    return TransactionPoster(chart, store, audit, deterministic_clock)


# =============================================================================
# Service fixtures
# =============================================================================


@pytest.fixture(scope="session")
def default_config():
    return load_config()


@pytest.fixture
def ledger(default_config, deterministic_clock):
    """The bundled default school, opening entries already posted."""
    return SchoolLedger.from_config(default_config, clock=deterministic_clock)
