"""
Procurement Module Service (``ledger_modules.procurement.service``).

Responsibility
--------------
Records supplier purchase invoices and supplier payments. Each operation
posts one balanced entry through the kernel ``TransactionPoster`` and then
moves the supplier's running payable.

Invariants enforced
-------------------
* The payable changes only after the post succeeds; a rejected post leaves
  the supplier untouched.
* A payment never exceeds the outstanding payable.

Failure modes
-------------
* ``SupplierNotFoundError`` -- unknown supplier id.
* ``InvalidAmountError`` -- non-positive amount, or an overpayment.
"""

from __future__ import annotations

from ledger_kernel.domain.clock import Clock, SystemClock
from ledger_kernel.domain.entries import LedgerEntry, LedgerLine
from ledger_kernel.domain.values import Money
from ledger_kernel.exceptions import InvalidAmountError
from ledger_kernel.logging_config import get_logger
from ledger_kernel.services.poster import TransactionPoster
from ledger_modules.procurement.models import ProcurementAccounts, Supplier
from ledger_modules.procurement.registry import SupplierRegistry

logger = get_logger("modules.procurement.service")

MODULE_NAME = "Procurement"


def _positive(value, field: str) -> Money:
    amount = Money.of(value, field)
    if not amount.is_positive:
        raise InvalidAmountError(field, amount, "must be greater than zero")
    return amount


class ProcurementService:
    """Purchase invoices and supplier payments over the kernel poster."""

    def __init__(
        self,
        poster: TransactionPoster,
        suppliers: SupplierRegistry,
        accounts: ProcurementAccounts | None = None,
        clock: Clock | None = None,
    ):
        self._poster = poster
        self._suppliers = suppliers
        self._accounts = accounts or ProcurementAccounts()
        self._clock = clock or SystemClock()

    def _reference(self, prefix: str) -> str:
        return f"{prefix}-{str(self._clock.millis())[-4:]}"

    def record_invoice(
        self,
        supplier_id: str,
        amount,
        description: str = "",
        *,
        actor: str | None = None,
    ) -> LedgerEntry:
        """Dr supplies expense, Cr accounts payable; raise the supplier payable."""
        supplier = self._suppliers.get(supplier_id)
        amount = _positive(amount, "amount")
        item = description.strip() or supplier.category or "Supplies"

        entry = self._poster.post(
            f"Purchase Invoice: {item} from {supplier.name}",
            self._reference("PUR"),
            [
                LedgerLine.debit_of(self._accounts.expense_account_id, amount),
                LedgerLine.credit_of(self._accounts.payable_account_id, amount),
            ],
            MODULE_NAME,
            {"supplier_id": supplier.id},
            actor=actor,
        )
        updated = self._suppliers.save(supplier.with_payable(supplier.payable + amount))

        logger.info(
            "purchase_invoice_recorded",
            extra={
                "supplier_id": supplier.id,
                "entry_id": entry.id,
                "amount": str(amount),
                "payable": str(updated.payable),
            },
        )
        return entry

    def pay_supplier(
        self,
        supplier_id: str,
        amount,
        *,
        actor: str | None = None,
    ) -> LedgerEntry:
        """Dr accounts payable, Cr cash; lower the supplier payable."""
        supplier = self._suppliers.get(supplier_id)
        amount = _positive(amount, "amount")
        if amount > supplier.payable:
            raise InvalidAmountError(
                "amount", amount, f"exceeds outstanding payable {supplier.payable}"
            )

        entry = self._poster.post(
            f"Supplier Payment: {supplier.name}",
            self._reference("PAY"),
            [
                LedgerLine.debit_of(self._accounts.payable_account_id, amount),
                LedgerLine.credit_of(self._accounts.cash_account_id, amount),
            ],
            MODULE_NAME,
            {"supplier_id": supplier.id},
            actor=actor,
        )
        updated = self._suppliers.save(supplier.with_payable(supplier.payable - amount))

        logger.info(
            "supplier_paid",
            extra={
                "supplier_id": supplier.id,
                "entry_id": entry.id,
                "amount": str(amount),
                "payable": str(updated.payable),
            },
        )
        return entry

    def supplier(self, supplier_id: str) -> Supplier:
        return self._suppliers.get(supplier_id)
