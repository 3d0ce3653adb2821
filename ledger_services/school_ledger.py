"""
ledger_services.school_ledger -- the one object a process builds.

Responsibility:
    Turns a LedgerConfig into live kernel objects and wires every service
    exactly once: chart, entry store, audit log, poster, balance calculator,
    the three registers, and the payroll, procurement and billing module
    services. The presentation layer is handed this object and nothing else.

Architecture position:
    Services -- stateful composition over kernel + modules. The only place
    where kernel services and module services are constructed.

Invariants enforced:
    - Single-instance lifecycle: one poster, one store, one audit log per
      SchoolLedger; every module service shares them and the same Clock.
    - Every write path (module flows, manual journal, opening entries) goes
      through the single TransactionPoster.
    - Register saves and settings changes each append one audit record.

Usage:
    ledger = SchoolLedger.default()
    ledger.post_journal(
        [{"account_id": "3", "debit": "12000"}, {"account_id": "1", "credit": "12000"}],
        description="Projector purchase",
    )
    ledger.summary().total_assets
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from datetime import date
from typing import Any

from ledger_config.loader import load_config
from ledger_config.schema import LedgerConfig, StaffDef
from ledger_kernel.domain.accounts import Account, AccountType, ChartOfAccounts
from ledger_kernel.domain.balances import BalanceCalculator
from ledger_kernel.domain.clock import Clock, SystemClock
from ledger_kernel.domain.entries import LedgerEntry, LedgerEntryStore, LedgerLine
from ledger_kernel.domain.summary import SummarySnapshot, summarize
from ledger_kernel.domain.values import Money
from ledger_kernel.logging_config import get_logger
from ledger_kernel.services.audit import AuditLogger, AuditRecord
from ledger_kernel.services.poster import TransactionPoster
from ledger_modules.billing import BillingService, Student, StudentRegistry
from ledger_modules.payroll import (
    DeductionProfile,
    PayrollRecord,
    PayrollRecordBook,
    PayrollService,
    PayrollSettings,
    Staff,
    StaffRegistry,
)
from ledger_modules.procurement import ProcurementService, Supplier, SupplierRegistry
from ledger_modules.reporting import (
    DailyActivity,
    FinancialPulse,
    daily_activity,
    financial_pulse,
)

logger = get_logger("services.school_ledger")

JOURNAL_MODULE = "General Ledger"
DEFAULT_JOURNAL_DESCRIPTION = "Manual Journal Entry"


def _build_staff(definition: StaffDef) -> Staff:
    draft = DeductionProfile().edit()
    for deduction in definition.manual_deductions:
        draft.set_manual(deduction.slot, deduction.value)
    for custom in definition.custom_deductions:
        draft.add_custom(custom.name, custom.value)
    return Staff(
        id=definition.id,
        name=definition.name,
        position=definition.position,
        category=definition.category,
        basic_pay=Money.of(definition.basic_pay, "basic_pay"),
        deduction_profile=draft.build(),
    )


class RegisterView:
    """Read-only face of a register; writes go through the audited save_* methods."""

    def __init__(self, register):
        self._register = register

    def get(self, record_id: str):
        return self._register.get(record_id)

    def all(self) -> tuple:
        return self._register.all()

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._register

    def __iter__(self) -> Iterator:
        return iter(self._register)

    def __len__(self) -> int:
        return len(self._register)


class SchoolLedger:
    """Composition root for one school's books.

    Contract:
        Built from a LedgerConfig and an optional Clock. Constructs every
        service once, in dependency order, then posts the configured opening
        entries through the poster.

    Non-goals:
        - Does NOT persist anything; state lives for the life of the object.
    """

    def __init__(self, config: LedgerConfig, clock: Clock | None = None):
        self._config = config
        self._clock = clock or SystemClock()

        # Kernel
        self._chart = ChartOfAccounts(
            Account(
                id=a.id,
                code=a.code,
                name=a.name,
                type=AccountType.parse(a.type),
                initial_balance=Money.of(a.initial_balance, "initial_balance"),
            )
            for a in config.accounts
        )
        self._store = LedgerEntryStore()
        self._audit = AuditLogger(self._clock)
        self._poster = TransactionPoster(
            self._chart,
            self._store,
            self._audit,
            self._clock,
            default_actor=config.default_actor,
        )
        self._balances = BalanceCalculator(self._chart, self._store)

        # Registers
        self._staff = StaffRegistry(_build_staff(s) for s in config.staff)
        self._suppliers = SupplierRegistry(
            Supplier(id=s.id, name=s.name, category=s.category, payable=s.payable)
            for s in config.suppliers
        )
        self._students = StudentRegistry(
            Student(id=s.id, name=s.name, grade=s.grade, balance=s.balance)
            for s in config.students
        )
        self._payroll_records = PayrollRecordBook()

        # Module services
        self.payroll = PayrollService(
            self._poster,
            self._staff,
            self._payroll_records,
            self._audit,
            settings=config.payroll_settings,
            accounts=config.payroll_accounts,
            clock=self._clock,
        )
        self.procurement = ProcurementService(
            self._poster,
            self._suppliers,
            accounts=config.procurement_accounts,
            clock=self._clock,
        )
        self.billing = BillingService(
            self._poster,
            self._students,
            accounts=config.billing_accounts,
            fee_categories=config.fee_categories,
            clock=self._clock,
        )

        for opening in config.opening_entries:
            self._poster.post(
                opening.description,
                opening.reference,
                [
                    LedgerLine(account_id=line.account_id, debit=line.debit, credit=line.credit)
                    for line in opening.lines
                ],
                opening.module,
                opening.meta,
            )

        logger.info(
            "school_ledger_initialized",
            extra={
                "config_id": config.config_id,
                "config_checksum": config.checksum,
                "account_count": len(self._chart),
                "opening_entry_count": len(self._store),
                "staff_count": len(self._staff),
            },
        )

    @classmethod
    def from_config(cls, config: LedgerConfig, clock: Clock | None = None) -> SchoolLedger:
        return cls(config, clock)

    @classmethod
    def default(cls, clock: Clock | None = None) -> SchoolLedger:
        """Ledger for the bundled default school."""
        return cls(load_config(), clock)

    # =========================================================================
    # Posting
    # =========================================================================

    def post(
        self,
        description: str,
        reference: str,
        lines: Iterable[LedgerLine | Mapping[str, Any]],
        module: str,
        meta: Mapping[str, Any] | None = None,
        *,
        actor: str | None = None,
    ) -> LedgerEntry:
        return self._poster.post(description, reference, lines, module, meta, actor=actor)

    def post_journal(
        self,
        lines: Iterable[LedgerLine | Mapping[str, Any]],
        description: str = "",
        reference: str = "",
        *,
        actor: str | None = None,
    ) -> LedgerEntry:
        """Manual General Ledger entry, audited as ``Manually posted: ...``."""
        description = description.strip() or DEFAULT_JOURNAL_DESCRIPTION
        return self._poster.post(
            description,
            reference,
            lines,
            JOURNAL_MODULE,
            actor=actor,
            audit_action=f"Manually posted: {description}",
        )

    # =========================================================================
    # Queries
    # =========================================================================

    def balance_of(self, account_id: str) -> Money:
        return self._balances.balance_of(account_id)

    def summary(self) -> SummarySnapshot:
        return summarize(
            self._chart.all(),
            self._store.all(),
            self._students.outstanding_balances(),
        )

    def daily_activity(self, day: date | None = None) -> DailyActivity:
        return daily_activity(self._store.all(), day or self._clock.today())

    def financial_pulse(self, days: int = 7, end: date | None = None) -> FinancialPulse:
        return financial_pulse(
            self._chart.all(), self._store.all(), end or self._clock.today(), days
        )

    # =========================================================================
    # Audit
    # =========================================================================

    def log_action(self, user: str, action: str, module: str) -> AuditRecord:
        return self._audit.record(user, action, module)

    @property
    def audit_logs(self) -> tuple[AuditRecord, ...]:
        return self._audit.all()

    # =========================================================================
    # Collections
    # =========================================================================

    @property
    def config(self) -> LedgerConfig:
        return self._config

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def chart(self) -> ChartOfAccounts:
        return self._chart

    @property
    def accounts(self) -> tuple[Account, ...]:
        return self._chart.all()

    @property
    def entries(self) -> tuple[LedgerEntry, ...]:
        return self._store.all()

    @property
    def staff(self) -> RegisterView:
        return RegisterView(self._staff)

    @property
    def suppliers(self) -> RegisterView:
        return RegisterView(self._suppliers)

    @property
    def students(self) -> RegisterView:
        return RegisterView(self._students)

    @property
    def payroll_records(self) -> tuple[PayrollRecord, ...]:
        return self._payroll_records.all()

    @property
    def payroll_settings(self) -> PayrollSettings:
        return self.payroll.settings

    def update_payroll_settings(self, *, actor: str | None = None, **changes) -> PayrollSettings:
        return self.payroll.update_settings(actor=actor or self._config.default_actor, **changes)

    def save_staff(self, staff: Staff, *, actor: str | None = None) -> Staff:
        """Persist a staff record (e.g. a built deduction profile); audited."""
        is_new = staff.id not in self._staff
        self._staff.save(staff)
        self._audit.record(
            actor or self._config.default_actor,
            f"{'Added' if is_new else 'Updated'} staff record: {staff.name}",
            "Payroll",
        )
        return staff

    def save_supplier(self, supplier: Supplier, *, actor: str | None = None) -> Supplier:
        is_new = supplier.id not in self._suppliers
        self._suppliers.save(supplier)
        self._audit.record(
            actor or self._config.default_actor,
            f"{'Added' if is_new else 'Updated'} supplier: {supplier.name}",
            "Procurement",
        )
        return supplier

    def save_student(self, student: Student, *, actor: str | None = None) -> Student:
        is_new = student.id not in self._students
        self._students.save(student)
        self._audit.record(
            actor or self._config.default_actor,
            f"{'Added' if is_new else 'Updated'} student: {student.name}",
            "Billing",
        )
        return student
