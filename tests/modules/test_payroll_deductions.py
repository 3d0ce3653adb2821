"""
Tests for the deduction resolver and deduction profiles.

Each core slot resolves independently: MANUAL returns the stored value,
DEFAULT recomputes from the settings passed in.
"""

from decimal import Decimal

import pytest

from ledger_kernel.domain.values import Money
from ledger_kernel.exceptions import InvalidAmountError, InvalidDeductionSlotError
from ledger_modules.payroll.config import PayrollSettings
from ledger_modules.payroll.helpers import (
    default_withholding_tax,
    net_pay,
    resolve_deductions,
)
from ledger_modules.payroll.models import (
    CustomDeduction,
    DeductionMode,
    DeductionProfile,
    DeductionSlot,
    ResolvedDeductions,
    normalize_slot,
)

SETTINGS = PayrollSettings.with_defaults()


class TestResolveDeductions:

    def test_scenario_b_default_then_manual(self):
        """basic 35000 at 4.5% resolves SSS to 1575; MANUAL 200 resolves to 200."""
        profile = DeductionProfile()
        resolved = resolve_deductions(profile, Money.of("35000"), SETTINGS)
        assert resolved.sss == Money.of("1575")

        manual = profile.edit().set_manual("sss", "200").build()
        assert resolve_deductions(manual, Money.of("35000"), SETTINGS).sss == Money.of("200")

    def test_all_default_slots(self):
        resolved = resolve_deductions(DeductionProfile(), Money.of("22000"), SETTINGS)
        assert resolved.sss == Money.of("990")
        assert resolved.phil_health == Money.of("440")
        assert resolved.pag_ibig == Money.of("100")
        assert resolved.w_tax == Money.of("175.05")

    def test_slots_resolve_independently(self):
        profile = DeductionProfile().edit().set_manual("pag_ibig", "200").build()
        resolved = resolve_deductions(profile, Money.of("35000"), SETTINGS)
        assert resolved.pag_ibig == Money.of("200")
        assert resolved.sss == Money.of("1575")
        assert resolved.phil_health == Money.of("700")

    def test_manual_ignores_settings_change(self):
        profile = DeductionProfile().edit().set_manual("w_tax", "500").build()
        changed = SETTINGS.updated(w_tax_rate="0.30")
        assert resolve_deductions(profile, Money.of("22000"), changed).w_tax == Money.of("500")

    def test_default_follows_settings_change(self):
        changed = SETTINGS.updated(sss_rate="0.05")
        resolved = resolve_deductions(DeductionProfile(), Money.of("20000"), changed)
        assert resolved.sss == Money.of("1000")

    def test_manual_zero_is_kept(self):
        profile = DeductionProfile().edit().set_manual("phil_health", 0).build()
        resolved = resolve_deductions(profile, Money.of("30000"), SETTINGS)
        assert resolved.phil_health == Money.zero()

    def test_default_rounds_half_up_to_centavos(self):
        resolved = resolve_deductions(DeductionProfile(), Money.of("10000.10"), SETTINGS)
        # 10000.10 * 0.045 = 450.0045
        assert resolved.sss == Money.of("450.00")
        # 10000.10 * 0.02 = 200.002
        assert resolved.phil_health == Money.of("200.00")

    def test_custom_not_included_in_core(self):
        profile = DeductionProfile().edit()
        profile.add_custom("Faculty Assoc Fee", "150")
        resolved = resolve_deductions(profile.build(), Money.of("22000"), SETTINGS)
        assert resolved.total == Money.of("1705.05")


class TestWithholdingTax:

    @pytest.mark.parametrize(
        "basic,expected",
        [
            ("20833", "0"),
            ("15000", "0"),
            ("0", "0"),
            ("20834", "0.15"),
            ("35000", "2125.05"),
        ],
    )
    def test_threshold(self, basic, expected):
        assert default_withholding_tax(Money.of(basic), SETTINGS) == Money.of(expected)


class TestNetPay:

    def test_floor_at_zero(self):
        core = ResolvedDeductions(
            sss=Money.of("5000"),
            phil_health=Money.zero(),
            pag_ibig=Money.zero(),
            w_tax=Money.zero(),
        )
        assert net_pay(Money.of("1000"), core, ()) == Money.zero()

    def test_custom_subtracted(self):
        core = ResolvedDeductions(*(Money.zero() for _ in range(4)))
        custom = (CustomDeduction("Loan", Money.of("300")),)
        assert net_pay(Money.of("1000"), core, custom) == Money.of("700")


class TestDeductionProfileDraft:

    def test_edit_does_not_alias_source(self):
        source = DeductionProfile()
        draft = source.edit()
        draft.set_manual("sss", "200")
        draft.add_custom("Union dues", "50")
        assert source.sss.mode is DeductionMode.DEFAULT
        assert source.custom == ()

        built = draft.build()
        assert built.sss == DeductionSlot.manual("200")
        assert [c.name for c in built.custom] == ["Union dues"]

    def test_set_default_keeps_stored_value(self):
        profile = DeductionProfile().edit().set_manual("w_tax", "500").set_default("w_tax").build()
        assert profile.w_tax.mode is DeductionMode.DEFAULT
        assert profile.w_tax.value == Money.of("500")

    def test_remove_custom(self):
        draft = DeductionProfile().edit()
        keep = draft.add_custom("Keep", "10")
        drop = draft.add_custom("Drop", "20")
        profile = draft.remove_custom(drop.id).build()
        assert [c.id for c in profile.custom] == [keep.id]

    def test_custom_order_preserved(self):
        draft = DeductionProfile().edit()
        for name in ("A", "B", "C"):
            draft.add_custom(name, "1")
        assert [c.name for c in draft.build().custom] == ["A", "B", "C"]

    def test_negative_manual_rejected(self):
        with pytest.raises(InvalidAmountError):
            DeductionProfile().edit().set_manual("sss", "-1")

    def test_custom_requires_name(self):
        with pytest.raises(ValueError):
            CustomDeduction(" ", Money.of("1"))


class TestSlotNames:

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("philHealth", "phil_health"),
            ("phil_health", "phil_health"),
            ("PAGIBIG", "pag_ibig"),
            ("wTax", "w_tax"),
            ("w-tax", "w_tax"),
            ("sss", "sss"),
        ],
    )
    def test_aliases(self, raw, expected):
        assert normalize_slot(raw) == expected

    def test_unknown_slot(self):
        with pytest.raises(InvalidDeductionSlotError) as exc_info:
            normalize_slot("medicare")
        assert exc_info.value.code == "INVALID_DEDUCTION_SLOT"


class TestPayrollSettings:

    def test_defaults(self):
        assert SETTINGS.sss_rate == Decimal("0.045")
        assert SETTINGS.pag_ibig_flat == Money.of("100")
        assert SETTINGS.w_tax_threshold == Money.of("20833")

    def test_from_dict_accepts_camel_case(self):
        settings = PayrollSettings.from_dict({"sssRate": 0.05, "pagIbigFlat": 150})
        assert settings.sss_rate == Decimal("0.05")
        assert settings.pag_ibig_flat == Money.of("150")

    @pytest.mark.parametrize("rate", ["-0.01", "1.5", "abc"])
    def test_invalid_rate(self, rate):
        with pytest.raises(InvalidAmountError):
            PayrollSettings(sss_rate=rate)

    def test_negative_threshold(self):
        with pytest.raises(InvalidAmountError):
            PayrollSettings(w_tax_threshold="-1")

    def test_updated_rejects_unknown_key(self):
        with pytest.raises(ValueError):
            SETTINGS.updated(gsis_rate="0.09")

    def test_updated_returns_new_object(self):
        changed = SETTINGS.updated(w_tax_rate="0.2")
        assert changed.w_tax_rate == Decimal("0.2")
        assert SETTINGS.w_tax_rate == Decimal("0.15")
