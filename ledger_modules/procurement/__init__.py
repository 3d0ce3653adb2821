"""
Procurement Module (``ledger_modules.procurement``).

Supplier purchases on account and their settlement. Every journal write goes
through ``ledger_kernel.services.poster.TransactionPoster``.
"""

from ledger_modules.procurement.models import ProcurementAccounts, Supplier
from ledger_modules.procurement.registry import SupplierRegistry
from ledger_modules.procurement.service import ProcurementService

__all__ = [
    "ProcurementAccounts",
    "ProcurementService",
    "Supplier",
    "SupplierRegistry",
]
