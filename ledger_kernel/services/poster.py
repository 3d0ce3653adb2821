"""
TransactionPoster -- the sole write path into the ledger.

Responsibility:
    Validates a proposed transaction, stamps it with an id and the current
    date, appends it to the LedgerEntryStore and appends the correlated
    AuditRecord. Payroll, procurement, billing and manual journal postings
    all arrive here.

Architecture position:
    Kernel > Services -- imperative shell around the pure domain.

Invariants enforced:
    - Double-entry: |sum(debit) - sum(credit)| < POSTING_TOLERANCE, checked
      here and nowhere else. Lines are whole centavos, so an accepted entry
      balances exactly.
    - Every line's account resolves through the ChartOfAccounts.
    - Store append and audit append happen together. Both records are fully
      built before either collection is touched, so a validation failure
      leaves both untouched.

Failure modes:
    - InvalidAmountError: no lines, a negative/non-numeric side, or an entry
      with zero total value.
    - AccountNotFoundError: a line references an unknown account.
    - UnbalancedTransactionError: debit and credit totals differ.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any
from uuid import uuid4

from ledger_kernel.domain.accounts import ChartOfAccounts
from ledger_kernel.domain.clock import Clock, SystemClock
from ledger_kernel.domain.entries import LedgerEntry, LedgerEntryStore, LedgerLine
from ledger_kernel.domain.values import POSTING_TOLERANCE, Money
from ledger_kernel.exceptions import (
    InvalidAmountError,
    LedgerKernelError,
    UnbalancedTransactionError,
)
from ledger_kernel.logging_config import LogContext, get_logger
from ledger_kernel.services.audit import AuditLogger

logger = get_logger("services.poster")

DEFAULT_ACTOR = "Admin"


def new_entry_id(clock: Clock) -> str:
    """Time-based id plus a 48-bit random disambiguator."""
    return f"{clock.millis()}-{uuid4().hex[:12].upper()}"


def coerce_lines(lines: Iterable[LedgerLine | Mapping[str, Any]]) -> tuple[LedgerLine, ...]:
    """Convert caller-supplied lines to LedgerLine once, at the boundary."""
    result = []
    for line in lines:
        if isinstance(line, LedgerLine):
            result.append(line)
        elif isinstance(line, Mapping):
            result.append(LedgerLine.from_mapping(line))
        else:
            raise InvalidAmountError("line", line, "expected a LedgerLine or mapping")
    return tuple(result)


class TransactionPoster:
    """
    Validating poster over a chart, a store and an audit log.

    Contract:
        post() either returns the appended LedgerEntry, with exactly one new
        AuditRecord referencing it, or raises and changes nothing.
    """

    def __init__(
        self,
        chart: ChartOfAccounts,
        store: LedgerEntryStore,
        audit: AuditLogger,
        clock: Clock | None = None,
        default_actor: str = DEFAULT_ACTOR,
    ):
        self._chart = chart
        self._store = store
        self._audit = audit
        self._clock = clock or SystemClock()
        self._default_actor = default_actor

    def validate(self, lines: Iterable[LedgerLine | Mapping[str, Any]]) -> tuple[LedgerLine, ...]:
        """
        Run every posting check without touching the store.

        Returns:
            The coerced lines.
        """
        coerced = coerce_lines(lines)
        if not coerced:
            raise InvalidAmountError("lines", "[]", "a transaction needs at least one line")

        for line in coerced:
            self._chart.find(line.account_id)

        debits = Money.sum(line.debit for line in coerced)
        credits = Money.sum(line.credit for line in coerced)
        if abs(debits - credits) >= POSTING_TOLERANCE:
            raise UnbalancedTransactionError(str(debits), str(credits))
        if debits.is_zero:
            raise InvalidAmountError("lines", "0", "a transaction must move a non-zero amount")
        return coerced

    def post(
        self,
        description: str,
        reference: str,
        lines: Iterable[LedgerLine | Mapping[str, Any]],
        module: str,
        meta: Mapping[str, Any] | None = None,
        *,
        actor: str | None = None,
        audit_action: str | None = None,
    ) -> LedgerEntry:
        """
        Validate and append a transaction.

        Args:
            description: Human description; also the default audit action.
            reference: Document reference. Empty means ``REF-nnnn``.
            lines: LedgerLine objects or ``{account_id, debit, credit}`` maps.
            module: Originating module, e.g. "Payroll", "General Ledger".
            meta: Free-form metadata kept on the entry (e.g. student_id).
            actor: Acting user; defaults to the configured actor.
            audit_action: Overrides the audit text (manual journal postings).
        """
        actor = actor or self._default_actor
        correlation_id = None if "correlation_id" in LogContext.get_all() else uuid4().hex
        with LogContext.bind(correlation_id=correlation_id, actor=actor, module=module):
            try:
                coerced = self.validate(lines)
            except LedgerKernelError as exc:
                logger.warning(
                    "transaction_rejected",
                    extra={
                        "description": description,
                        "reference": reference,
                        "error_code": exc.code,
                    },
                )
                raise

            entry_id = new_entry_id(self._clock)
            entry = LedgerEntry(
                id=entry_id,
                date=self._clock.today(),
                reference=reference or f"REF-{entry_id.split('-')[0][-4:]}",
                description=description,
                lines=coerced,
                module=module,
                meta=meta or {},
            )
            audit_record = self._audit.build(
                actor, audit_action or description, module, entry_id=entry_id
            )

            with LogContext.bind(entry_id=entry_id):
                self._store.append(entry)
                self._audit.append(audit_record)

                logger.info(
                    "transaction_posted",
                    extra={
                        "reference": entry.reference,
                        "line_count": len(entry.lines),
                        "total_debit": str(entry.total_debit),
                        "store_version": self._store.version,
                    },
                )
            return entry
