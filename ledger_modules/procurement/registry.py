"""Supplier repository."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from ledger_kernel.domain.values import Money
from ledger_kernel.exceptions import SupplierNotFoundError
from ledger_kernel.logging_config import get_logger
from ledger_modules.procurement.models import Supplier

logger = get_logger("modules.procurement.registry")


class SupplierRegistry:
    """Suppliers keyed by id, in insertion order."""

    def __init__(self, suppliers: Iterable[Supplier] = ()):
        self._suppliers: dict[str, Supplier] = {s.id: s for s in suppliers}

    def get(self, supplier_id: str) -> Supplier:
        try:
            return self._suppliers[supplier_id]
        except KeyError:
            raise SupplierNotFoundError(supplier_id) from None

    def all(self) -> tuple[Supplier, ...]:
        return tuple(self._suppliers.values())

    def save(self, supplier: Supplier) -> Supplier:
        is_new = supplier.id not in self._suppliers
        self._suppliers[supplier.id] = supplier
        logger.info(
            "supplier_saved",
            extra={
                "supplier_id": supplier.id,
                "is_new": is_new,
                "payable": str(supplier.payable),
            },
        )
        return supplier

    def total_payable(self) -> Money:
        return Money.sum(s.payable for s in self._suppliers.values())

    def __contains__(self, supplier_id: object) -> bool:
        return supplier_id in self._suppliers

    def __iter__(self) -> Iterator[Supplier]:
        return iter(self.all())

    def __len__(self) -> int:
        return len(self._suppliers)
