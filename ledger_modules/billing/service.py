"""
Billing Module Service (``ledger_modules.billing.service``).

Responsibility
--------------
Assesses fees against students and records collections. Each operation
posts one balanced entry through the kernel ``TransactionPoster`` and then
moves the student's running balance, which feeds ``total_ar``.

Invariants enforced
-------------------
* The balance changes only after the post succeeds.
* A collection never exceeds the outstanding balance.
* Assessments carry ``student_id`` in the entry meta.

Failure modes
-------------
* ``StudentNotFoundError`` -- unknown student id.
* ``InvalidAmountError`` -- non-positive amount, or an overpayment.
* ``ValueError`` -- a fee category the school does not assess.
"""

from __future__ import annotations

from collections.abc import Iterable

from ledger_kernel.domain.clock import Clock, SystemClock
from ledger_kernel.domain.entries import LedgerEntry, LedgerLine
from ledger_kernel.domain.values import Money
from ledger_kernel.exceptions import InvalidAmountError
from ledger_kernel.logging_config import get_logger
from ledger_kernel.services.poster import TransactionPoster
from ledger_modules.billing.models import (
    DEFAULT_FEE_CATEGORIES,
    BillingAccounts,
    Student,
)
from ledger_modules.billing.registry import StudentRegistry

logger = get_logger("modules.billing.service")

MODULE_NAME = "Billing"


class BillingService:
    """Fee assessments and collections over the kernel poster."""

    def __init__(
        self,
        poster: TransactionPoster,
        students: StudentRegistry,
        accounts: BillingAccounts | None = None,
        fee_categories: Iterable[str] = DEFAULT_FEE_CATEGORIES,
        clock: Clock | None = None,
    ):
        self._poster = poster
        self._students = students
        self._accounts = accounts or BillingAccounts()
        self.fee_categories = tuple(fee_categories)
        self._clock = clock or SystemClock()

    def _reference(self, prefix: str) -> str:
        return f"{prefix}-{str(self._clock.millis())[-4:]}"

    @staticmethod
    def _positive(value) -> Money:
        amount = Money.of(value, "amount")
        if not amount.is_positive:
            raise InvalidAmountError("amount", amount, "must be greater than zero")
        return amount

    def assess(
        self,
        student_id: str,
        amount,
        category: str = "Tuition",
        *,
        actor: str | None = None,
    ) -> LedgerEntry:
        """Dr tuition receivable, Cr tuition revenue; raise the student balance."""
        student = self._students.get(student_id)
        amount = self._positive(amount)
        if category not in self.fee_categories:
            raise ValueError(f"Unknown fee category: {category!r}")

        entry = self._poster.post(
            f"{category} Assessment: {student.name}",
            self._reference("INV"),
            [
                LedgerLine.debit_of(self._accounts.receivable_account_id, amount),
                LedgerLine.credit_of(self._accounts.revenue_account_id, amount),
            ],
            MODULE_NAME,
            {"student_id": student.id, "category": category},
            actor=actor,
        )
        updated = self._students.save(student.with_balance(student.balance + amount))

        logger.info(
            "student_assessed",
            extra={
                "student_id": student.id,
                "entry_id": entry.id,
                "amount": str(amount),
                "category": category,
                "balance": str(updated.balance),
            },
        )
        return entry

    def collect(
        self,
        student_id: str,
        amount,
        *,
        actor: str | None = None,
    ) -> LedgerEntry:
        """Dr cash, Cr tuition receivable; lower the student balance."""
        student = self._students.get(student_id)
        amount = self._positive(amount)
        if amount > student.balance:
            raise InvalidAmountError(
                "amount", amount, f"exceeds outstanding balance {student.balance}"
            )

        entry = self._poster.post(
            f"Payment Received: {student.name}",
            self._reference("OR"),
            [
                LedgerLine.debit_of(self._accounts.cash_account_id, amount),
                LedgerLine.credit_of(self._accounts.receivable_account_id, amount),
            ],
            MODULE_NAME,
            {"student_id": student.id},
            actor=actor,
        )
        updated = self._students.save(student.with_balance(student.balance - amount))

        logger.info(
            "student_payment_collected",
            extra={
                "student_id": student.id,
                "entry_id": entry.id,
                "amount": str(amount),
                "balance": str(updated.balance),
            },
        )
        return entry

    def student(self, student_id: str) -> Student:
        return self._students.get(student_id)

    def total_receivable(self) -> Money:
        return Money.sum(self._students.outstanding_balances())
