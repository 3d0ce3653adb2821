"""
Payroll Module Service (``ledger_modules.payroll.service``).

Responsibility
--------------
Runs payroll disbursements: seeds a Draft run from the staff record and the
deduction resolver, lets the operator adjust it, and on commit posts the
journal entry through the kernel ``TransactionPoster`` and writes the
``PayrollRecord`` snapshot. Owns the global ``PayrollSettings``.

Architecture position
---------------------
**Modules layer** -- thin glue. Pure arithmetic lives in ``helpers.py``;
every journal write goes through ``ledger_kernel.services.poster``.

Invariants enforced
-------------------
* Deductions are resolved fresh at the start of every run; a settings
  change affects the next run of every DEFAULT-mode staff member and no
  past record.
* Run-level edits never write back to the staff profile.
* A POSTED run is terminal: further edits or commits raise
  ``PayrollRunPostedError``.
* The posted entry is balanced by construction: gross on the debit side,
  net pay plus withheld amount on the credit side.

Failure modes
-------------
* ``StaffNotFoundError`` -- unknown staff id on ``start_run``.
* ``InvalidAmountError`` -- negative inputs, or a zero-gross commit.
* Kernel posting errors propagate; no record is appended in that case.

Usage::

    run = payroll.start_run("ST2")
    run.set_allowance("1500")
    record = payroll.commit(run)
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any
from uuid import uuid4

from ledger_kernel.domain.clock import Clock, SystemClock
from ledger_kernel.domain.entries import LedgerLine
from ledger_kernel.domain.values import Money
from ledger_kernel.exceptions import InvalidAmountError, PayrollRunPostedError
from ledger_kernel.logging_config import LogContext, get_logger
from ledger_kernel.services.audit import AuditLogger
from ledger_kernel.services.poster import TransactionPoster
from ledger_modules.payroll.config import PayrollAccounts, PayrollSettings
from ledger_modules.payroll.helpers import (
    custom_total,
    gross_pay,
    net_pay,
    resolve_deductions,
)
from ledger_modules.payroll.models import (
    CORE_SLOTS,
    CustomDeduction,
    PayrollRecord,
    PayrollRunStatus,
    ResolvedDeductions,
    Staff,
)
from ledger_modules.payroll.registry import PayrollRecordBook, StaffRegistry
from ledger_modules.payroll.workflows import PAYROLL_RUN_WORKFLOW

logger = get_logger("modules.payroll.service")

MODULE_NAME = "Payroll"


class PayrollRun:
    """
    One disbursement for one staff member.

    Created in DRAFT by ``PayrollService.start_run``. All setters raise
    ``PayrollRunPostedError`` once the run is POSTED.
    """

    def __init__(
        self,
        staff: Staff,
        deductions: ResolvedDeductions,
        description: str | None = None,
    ):
        self.id = uuid4().hex[:12].upper()
        self.staff_id = staff.id
        self.staff_name = staff.name
        self.basic = staff.basic_pay
        self.allowance = Money.zero()
        self.overtime = Money.zero()
        self.deductions = deductions
        self.custom: tuple[CustomDeduction, ...] = staff.deduction_profile.custom
        self.description = description or f"Payroll Disbursement: {staff.name}"
        self.status = PayrollRunStatus.DRAFT
        self.record: PayrollRecord | None = None

    def _require_draft(self, operation: str) -> None:
        if self.status is not PayrollRunStatus.DRAFT:
            raise PayrollRunPostedError(self.id, operation)

    # -- draft edits ---------------------------------------------------------

    def set_basic(self, amount) -> PayrollRun:
        self._require_draft("edit")
        self.basic = Money.non_negative(amount, "basic")
        return self

    def set_allowance(self, amount) -> PayrollRun:
        self._require_draft("edit")
        self.allowance = Money.non_negative(amount, "allowance")
        return self

    def set_overtime(self, amount) -> PayrollRun:
        self._require_draft("edit")
        self.overtime = Money.non_negative(amount, "overtime")
        return self

    def set_description(self, description: str) -> PayrollRun:
        self._require_draft("edit")
        self.description = description
        return self

    def override_deduction(self, slot: str, amount) -> PayrollRun:
        """Override one core deduction for this run only."""
        self._require_draft("edit")
        self.deductions = self.deductions.with_override(slot, amount)
        return self

    def set_custom_deductions(
        self, custom: Iterable[CustomDeduction | tuple[str, Any]]
    ) -> PayrollRun:
        self._require_draft("edit")
        self.custom = tuple(
            c if isinstance(c, CustomDeduction) else CustomDeduction(name=c[0], value=c[1])
            for c in custom
        )
        return self

    # -- derived figures -----------------------------------------------------

    @property
    def gross(self) -> Money:
        return gross_pay(self.basic, self.allowance, self.overtime)

    @property
    def core_deductions_total(self) -> Money:
        return self.deductions.total

    @property
    def custom_deductions_total(self) -> Money:
        return custom_total(self.custom)

    @property
    def net_pay(self) -> Money:
        return net_pay(self.gross, self.deductions, self.custom)

    @property
    def withheld(self) -> Money:
        """Portion of gross not paid out: gross - net_pay."""
        return self.gross - self.net_pay

    @property
    def is_posted(self) -> bool:
        return self.status is PayrollRunStatus.POSTED

    def breakdown(self) -> dict[str, Any]:
        return {
            "basic": self.basic,
            "allowance": self.allowance,
            "overtime": self.overtime,
            **self.deductions.as_dict(),
            "custom": tuple((c.name, c.value) for c in self.custom),
            "core_total": self.core_deductions_total,
            "custom_total": self.custom_deductions_total,
            "gross": self.gross,
            "net": self.net_pay,
        }

    def _transition(self, action: str, record: PayrollRecord) -> None:
        transition = PAYROLL_RUN_WORKFLOW.find_transition(self.status.value, action)
        if transition is None:
            raise PayrollRunPostedError(self.id, action)
        self.status = PayrollRunStatus(transition.to_state)
        self.record = record


class PayrollService:
    """
    Orchestrates payroll runs through the resolver and the kernel poster.

    Contract
    --------
    * ``start_run`` never mutates anything.
    * ``commit`` either posts one entry, appends one record and marks the run
      POSTED, or raises with no change to the ledger, record book or run.
    """

    def __init__(
        self,
        poster: TransactionPoster,
        staff: StaffRegistry,
        records: PayrollRecordBook,
        audit: AuditLogger,
        settings: PayrollSettings | None = None,
        accounts: PayrollAccounts | None = None,
        clock: Clock | None = None,
    ):
        self._poster = poster
        self._staff = staff
        self._records = records
        self._audit = audit
        self._settings = settings or PayrollSettings.with_defaults()
        self._accounts = accounts or PayrollAccounts()
        self._clock = clock or SystemClock()

    # =========================================================================
    # Settings
    # =========================================================================

    @property
    def settings(self) -> PayrollSettings:
        return self._settings

    def update_settings(self, *, actor: str, **changes) -> PayrollSettings:
        """Validate and replace the global settings; audited."""
        new_settings = self._settings.updated(**changes)
        self._settings = new_settings
        self._audit.record(
            actor,
            f"Updated payroll settings: {', '.join(sorted(changes))}",
            MODULE_NAME,
        )
        logger.info("payroll_settings_updated", extra=new_settings.as_dict())
        return new_settings

    # =========================================================================
    # Runs
    # =========================================================================

    def preview_deductions(self, staff_id: str) -> ResolvedDeductions:
        staff = self._staff.get(staff_id)
        return resolve_deductions(staff.deduction_profile, staff.basic_pay, self._settings)

    def start_run(self, staff_id: str, description: str | None = None) -> PayrollRun:
        """Seed a DRAFT run from the staff record and the current settings."""
        staff = self._staff.get(staff_id)
        deductions = resolve_deductions(staff.deduction_profile, staff.basic_pay, self._settings)
        run = PayrollRun(staff, deductions, description)
        logger.info(
            "payroll_run_started",
            extra={
                "run_id": run.id,
                "staff_id": staff.id,
                "basic_pay": str(run.basic),
                "core_deductions": str(deductions.total),
            },
        )
        return run

    def commit(self, run: PayrollRun, *, actor: str | None = None) -> PayrollRecord:
        """Post the run's entry, record the snapshot, transition to POSTED."""
        run._require_draft("commit")

        with LogContext.bind(run_id=run.id):
            gross = run.gross
            if not gross.is_positive:
                raise InvalidAmountError("gross", gross, "payroll gross must be positive")

            net = run.net_pay
            withheld = run.withheld
            breakdown = run.breakdown()

            lines = [LedgerLine.debit_of(self._accounts.expense_account_id, gross)]
            if net.is_positive:
                lines.append(LedgerLine.credit_of(self._accounts.disbursement_account_id, net))
            if withheld.is_positive:
                lines.append(LedgerLine.credit_of(self._accounts.withholding_account_id, withheld))

            entry = self._poster.post(
                run.description,
                f"PRL-{str(self._clock.millis())[-4:]}",
                lines,
                MODULE_NAME,
                {"staff_id": run.staff_id, "run_id": run.id},
                actor=actor,
            )

            record = PayrollRecord(
                id=run.id,
                date=entry.date,
                staff_id=run.staff_id,
                name=run.staff_name,
                gross=gross,
                net=net,
                entry_id=entry.id,
                breakdown=breakdown,
            )
            self._records.append(record)
            run._transition("post", record)

            logger.info(
                "payroll_run_committed",
                extra={
                    "staff_id": run.staff_id,
                    "entry_id": entry.id,
                    "gross": str(gross),
                    "net": str(net),
                    "withheld": str(withheld),
                },
            )
            return record

    def quick_disbursement(
        self,
        staff_id: str,
        gross,
        tax,
        *,
        actor: str | None = None,
    ) -> PayrollRecord:
        """
        Single-form disbursement: a gross figure less one tax figure.

        Every core slot other than withholding tax is zeroed and custom
        deductions are dropped for this run.
        """
        run = self.start_run(staff_id)
        run.set_basic(gross)
        for slot in CORE_SLOTS:
            run.override_deduction(slot, tax if slot == "w_tax" else 0)
        run.set_custom_deductions(())
        return self.commit(run, actor=actor)

    @property
    def records(self) -> tuple[PayrollRecord, ...]:
        return self._records.all()
