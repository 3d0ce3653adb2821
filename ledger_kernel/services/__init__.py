"""
Kernel services -- the imperative shell around the pure domain.

TransactionPoster is the only writer of the LedgerEntryStore; AuditLogger
is the only writer of the action log.
"""

from ledger_kernel.services.audit import AuditLogger, AuditRecord
from ledger_kernel.services.poster import TransactionPoster, new_entry_id

__all__ = [
    "AuditLogger",
    "AuditRecord",
    "TransactionPoster",
    "new_entry_id",
]
