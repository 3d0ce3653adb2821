"""
AuditLogger -- append-only record of who did what, from which module.

Responsibility:
    Keeps the action log shown to administrators. Every posting, staff
    save, settings change and payroll commit appends one AuditRecord.

Architecture position:
    Kernel > Services. Holds in-memory state; timestamps come from the
    injected Clock.

Invariants enforced:
    - Append-only: records are frozen and there is no remove operation.
    - Enumeration order is most-recent-first.

Non-goals:
    - Not tamper-evident. There is no hash chain; it is a plain record.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ledger_kernel.domain.clock import Clock, SystemClock
from ledger_kernel.logging_config import get_logger

logger = get_logger("services.audit")


@dataclass(frozen=True)
class AuditRecord:
    """A single logged action."""

    timestamp: datetime
    user: str
    action: str
    module: str
    entry_id: str | None = None


class AuditLogger:
    """Append-only action log, newest first."""

    def __init__(self, clock: Clock | None = None):
        self._clock = clock or SystemClock()
        self._records: list[AuditRecord] = []

    def build(
        self,
        user: str,
        action: str,
        module: str,
        *,
        entry_id: str | None = None,
    ) -> AuditRecord:
        """Create a record without appending it (see TransactionPoster)."""
        return AuditRecord(
            timestamp=self._clock.now(),
            user=user,
            action=action,
            module=module,
            entry_id=entry_id,
        )

    def append(self, record: AuditRecord) -> AuditRecord:
        self._records.insert(0, record)
        logger.info(
            "audit_recorded",
            extra={
                "user": record.user,
                "action": record.action,
                "audit_module": record.module,
                "audit_entry_id": record.entry_id,
            },
        )
        return record

    def record(
        self,
        user: str,
        action: str,
        module: str,
        *,
        entry_id: str | None = None,
    ) -> AuditRecord:
        return self.append(self.build(user, action, module, entry_id=entry_id))

    def all(self) -> tuple[AuditRecord, ...]:
        return tuple(self._records)

    def __len__(self) -> int:
        return len(self._records)
