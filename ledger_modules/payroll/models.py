"""
Payroll Domain Models (``ledger_modules.payroll.models``).

Responsibility
--------------
Frozen dataclass value objects for the nouns of payroll: staff members,
their deduction profiles, resolved deductions and the payroll records
written at disbursement time.

Architecture position
---------------------
**Modules layer** -- pure data definitions with ZERO I/O.

Invariants enforced
-------------------
* All models are ``frozen=True``. Profile edits go through
  ``DeductionProfileDraft`` and produce a new profile on ``build()``; the
  persisted profile is never aliased by an in-progress edit.
* All monetary fields are ``Money``.
* A ``PayrollRecord`` is a snapshot: later edits to staff or settings never
  alter it.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping
from uuid import uuid4

from ledger_kernel.domain.values import Money
from ledger_kernel.exceptions import InvalidAmountError, InvalidDeductionSlotError

CORE_SLOTS: tuple[str, ...] = ("sss", "phil_health", "pag_ibig", "w_tax")

_SLOT_ALIASES = {
    "sss": "sss",
    "philhealth": "phil_health",
    "phil_health": "phil_health",
    "pagibig": "pag_ibig",
    "pag_ibig": "pag_ibig",
    "wtax": "w_tax",
    "w_tax": "w_tax",
}


def normalize_slot(slot: str) -> str:
    """Map ``philHealth`` / ``phil_health`` / ``PHILHEALTH`` to the canonical slot."""
    key = _SLOT_ALIASES.get(slot.replace("-", "_").lower())
    if key is None:
        key = _SLOT_ALIASES.get(slot.replace("_", "").replace("-", "").lower())
    if key is None:
        raise InvalidDeductionSlotError(slot)
    return key


class DeductionMode(str, Enum):
    """How a core deduction slot gets its amount."""
    DEFAULT = "default"  # computed from PayrollSettings at run time
    MANUAL = "manual"  # stored value used verbatim


class PayrollRunStatus(Enum):
    """Payroll run lifecycle states."""
    DRAFT = "draft"
    POSTED = "posted"


@dataclass(frozen=True)
class DeductionSlot:
    mode: DeductionMode = DeductionMode.DEFAULT
    value: Money = field(default_factory=Money.zero)

    def __post_init__(self):
        if not isinstance(self.mode, DeductionMode):
            object.__setattr__(self, "mode", DeductionMode(str(self.mode).lower()))
        object.__setattr__(self, "value", Money.non_negative(self.value, "deduction value"))

    @classmethod
    def manual(cls, value) -> DeductionSlot:
        return cls(DeductionMode.MANUAL, Money.of(value, "deduction value"))

    @property
    def is_manual(self) -> bool:
        return self.mode == DeductionMode.MANUAL


@dataclass(frozen=True)
class CustomDeduction:
    """A named deduction always taken verbatim."""
    name: str
    value: Money
    id: str = field(default_factory=lambda: uuid4().hex[:8].upper())

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("Custom deduction name is required")
        object.__setattr__(self, "value", Money.non_negative(self.value, "custom deduction"))


@dataclass(frozen=True)
class DeductionProfile:
    """Per-employee deduction configuration."""
    sss: DeductionSlot = field(default_factory=DeductionSlot)
    phil_health: DeductionSlot = field(default_factory=DeductionSlot)
    pag_ibig: DeductionSlot = field(default_factory=DeductionSlot)
    w_tax: DeductionSlot = field(default_factory=DeductionSlot)
    custom: tuple[CustomDeduction, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "custom", tuple(self.custom))

    def slot(self, name: str) -> DeductionSlot:
        return getattr(self, normalize_slot(name))

    def edit(self) -> DeductionProfileDraft:
        """Start an isolated edit of this profile."""
        return DeductionProfileDraft(self)


class DeductionProfileDraft:
    """
    Builder for a new DeductionProfile.

    Edits accumulate on the draft only; the source profile stays untouched
    until the caller builds and saves the result.
    """

    def __init__(self, source: DeductionProfile):
        self._slots: dict[str, DeductionSlot] = {s: source.slot(s) for s in CORE_SLOTS}
        self._custom: list[CustomDeduction] = list(source.custom)

    def set_manual(self, slot: str, value) -> DeductionProfileDraft:
        self._slots[normalize_slot(slot)] = DeductionSlot.manual(value)
        return self

    def set_default(self, slot: str) -> DeductionProfileDraft:
        key = normalize_slot(slot)
        # Stored value is kept but ignored while in DEFAULT mode
        self._slots[key] = DeductionSlot(DeductionMode.DEFAULT, self._slots[key].value)
        return self

    def add_custom(self, name: str, value) -> CustomDeduction:
        deduction = CustomDeduction(name=name, value=Money.of(value, "custom deduction"))
        self._custom.append(deduction)
        return deduction

    def remove_custom(self, deduction_id: str) -> DeductionProfileDraft:
        self._custom = [c for c in self._custom if c.id != deduction_id]
        return self

    def build(self) -> DeductionProfile:
        return DeductionProfile(custom=tuple(self._custom), **self._slots)


@dataclass(frozen=True)
class Staff:
    """A staff member for payroll purposes."""
    id: str
    name: str
    position: str = ""
    category: str = ""
    basic_pay: Money = field(default_factory=Money.zero)
    deduction_profile: DeductionProfile = field(default_factory=DeductionProfile)

    def __post_init__(self):
        if not self.id:
            raise ValueError("Staff id is required")
        object.__setattr__(self, "basic_pay", Money.non_negative(self.basic_pay, "basic_pay"))

    def with_basic_pay(self, basic_pay) -> Staff:
        return replace(self, basic_pay=Money.of(basic_pay, "basic_pay"))

    def with_profile(self, profile: DeductionProfile) -> Staff:
        return replace(self, deduction_profile=profile)


@dataclass(frozen=True)
class ResolvedDeductions:
    """Core deductions for one payroll run, after mode resolution."""
    sss: Money
    phil_health: Money
    pag_ibig: Money
    w_tax: Money

    def get(self, slot: str) -> Money:
        return getattr(self, normalize_slot(slot))

    def with_override(self, slot: str, value) -> ResolvedDeductions:
        key = normalize_slot(slot)
        return replace(self, **{key: Money.non_negative(value, key)})

    @property
    def total(self) -> Money:
        return self.sss + self.phil_health + self.pag_ibig + self.w_tax

    def as_dict(self) -> dict[str, Money]:
        return {slot: self.get(slot) for slot in CORE_SLOTS}


@dataclass(frozen=True)
class PayrollRecord:
    """Historical receipt written when a run is committed."""
    id: str
    date: date
    staff_id: str
    name: str
    gross: Money
    net: Money
    entry_id: str
    breakdown: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.net.is_negative:
            raise InvalidAmountError("net", self.net, "net pay cannot be negative")
        object.__setattr__(self, "breakdown", MappingProxyType(dict(self.breakdown)))

    @property
    def total_deductions(self) -> Money:
        return self.gross - self.net
