"""Student repository. Supplies the outstanding balances behind total_ar."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from ledger_kernel.domain.values import Money
from ledger_kernel.exceptions import StudentNotFoundError
from ledger_kernel.logging_config import get_logger
from ledger_modules.billing.models import Student

logger = get_logger("modules.billing.registry")


class StudentRegistry:
    """Students keyed by id, in insertion order."""

    def __init__(self, students: Iterable[Student] = ()):
        self._students: dict[str, Student] = {s.id: s for s in students}

    def get(self, student_id: str) -> Student:
        try:
            return self._students[student_id]
        except KeyError:
            raise StudentNotFoundError(student_id) from None

    def all(self) -> tuple[Student, ...]:
        return tuple(self._students.values())

    def save(self, student: Student) -> Student:
        is_new = student.id not in self._students
        self._students[student.id] = student
        logger.info(
            "student_saved",
            extra={
                "student_id": student.id,
                "is_new": is_new,
                "balance": str(student.balance),
            },
        )
        return student

    def outstanding_balances(self) -> tuple[Money, ...]:
        return tuple(s.balance for s in self._students.values())

    def __contains__(self, student_id: object) -> bool:
        return student_id in self._students

    def __iter__(self) -> Iterator[Student]:
        return iter(self.all())

    def __len__(self) -> int:
        return len(self._students)
