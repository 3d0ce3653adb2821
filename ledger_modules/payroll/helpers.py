"""
Payroll Helpers (``ledger_modules.payroll.helpers``).

Responsibility
--------------
Pure calculation functions for Philippine statutory deductions (SSS,
PhilHealth, Pag-IBIG, withholding tax) under a per-employee profile with
global fallback rates, and the gross-to-net arithmetic of a run.

Architecture position
---------------------
**Modules layer** -- pure helper functions. No I/O, no clock, no registry
access. Called by ``PayrollService`` at the start of every run, and from
tests.

Invariants enforced
-------------------
* MANUAL slots return their stored value regardless of pay or settings.
* DEFAULT slots are recomputed from the settings passed in; nothing is
  cached on the staff record.
* Withholding tax is never negative.
* Results are quantized to centavos.
"""

from __future__ import annotations

from collections.abc import Iterable

from ledger_kernel.domain.values import Money
from ledger_modules.payroll.config import PayrollSettings
from ledger_modules.payroll.models import (
    CustomDeduction,
    DeductionProfile,
    DeductionSlot,
    ResolvedDeductions,
)


def _resolve_slot(slot: DeductionSlot, default: Money) -> Money:
    if slot.is_manual:
        return slot.value
    return default.round()


def default_withholding_tax(basic_pay: Money, settings: PayrollSettings) -> Money:
    """``max(0, (basic_pay - threshold) * rate)``."""
    taxable = (basic_pay - settings.w_tax_threshold).floor_at_zero()
    return (taxable * settings.w_tax_rate).round()


def resolve_deductions(
    profile: DeductionProfile,
    basic_pay: Money,
    settings: PayrollSettings,
) -> ResolvedDeductions:
    """
    Resolve each core slot independently.

    ========== ============== ==================================
    slot       MANUAL         DEFAULT
    ========== ============== ==================================
    sss        stored value   basic_pay * sss_rate
    phil_health stored value  basic_pay * phil_health_rate
    pag_ibig   stored value   pag_ibig_flat
    w_tax      stored value   max(0, (basic - threshold) * rate)
    ========== ============== ==================================
    """
    basic_pay = Money.of(basic_pay, "basic_pay")
    return ResolvedDeductions(
        sss=_resolve_slot(profile.sss, basic_pay * settings.sss_rate),
        phil_health=_resolve_slot(profile.phil_health, basic_pay * settings.phil_health_rate),
        pag_ibig=_resolve_slot(profile.pag_ibig, settings.pag_ibig_flat),
        w_tax=_resolve_slot(profile.w_tax, default_withholding_tax(basic_pay, settings)),
    )


def custom_total(custom: Iterable[CustomDeduction]) -> Money:
    return Money.sum(c.value for c in custom)


def gross_pay(basic: Money, allowance: Money, overtime: Money) -> Money:
    return basic + allowance + overtime


def net_pay(gross: Money, core: ResolvedDeductions, custom: Iterable[CustomDeduction]) -> Money:
    """``max(0, gross - core - custom)``; never negative."""
    return (gross - core.total - custom_total(custom)).floor_at_zero()
