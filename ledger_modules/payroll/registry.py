"""
Payroll repositories: staff members and payroll records.

StaffRegistry is read/write through an explicit save(). PayrollRecordBook is
append-only and is written only by PayrollService.commit().
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from ledger_kernel.exceptions import StaffNotFoundError
from ledger_kernel.logging_config import get_logger
from ledger_modules.payroll.models import PayrollRecord, Staff

logger = get_logger("modules.payroll.registry")


class StaffRegistry:
    """Staff members keyed by id, in insertion order."""

    def __init__(self, staff: Iterable[Staff] = ()):
        self._staff: dict[str, Staff] = {}
        for member in staff:
            self._staff[member.id] = member

    def get(self, staff_id: str) -> Staff:
        try:
            return self._staff[staff_id]
        except KeyError:
            raise StaffNotFoundError(staff_id) from None

    def all(self) -> tuple[Staff, ...]:
        return tuple(self._staff.values())

    def save(self, staff: Staff) -> Staff:
        """Insert or replace a staff record. Past payroll records are unaffected."""
        is_new = staff.id not in self._staff
        self._staff[staff.id] = staff
        logger.info(
            "staff_saved",
            extra={
                "staff_id": staff.id,
                "is_new": is_new,
                "basic_pay": str(staff.basic_pay),
            },
        )
        return staff

    def __contains__(self, staff_id: object) -> bool:
        return staff_id in self._staff

    def __iter__(self) -> Iterator[Staff]:
        return iter(self.all())

    def __len__(self) -> int:
        return len(self._staff)


class PayrollRecordBook:
    """Append-only payroll history, most recent first."""

    def __init__(self) -> None:
        self._records: list[PayrollRecord] = []

    def append(self, record: PayrollRecord) -> PayrollRecord:
        self._records.insert(0, record)
        return record

    def all(self) -> tuple[PayrollRecord, ...]:
        return tuple(self._records)

    def for_staff(self, staff_id: str) -> tuple[PayrollRecord, ...]:
        return tuple(r for r in self._records if r.staff_id == staff_id)

    def __len__(self) -> int:
        return len(self._records)
