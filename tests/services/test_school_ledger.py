"""
Tests for the SchoolLedger composition root.

Covers construction from configuration, the manual journal path, the audit
trail for register changes, and the global balance invariant across every
module flow.
"""

import pytest

from ledger_kernel.domain.values import Money
from ledger_kernel.exceptions import UnbalancedTransactionError
from ledger_modules.billing import Student
from ledger_modules.procurement import Supplier
from ledger_services import SchoolLedger


class TestConstruction:

    def test_opening_entries_posted(self, ledger):
        assert [e.reference for e in ledger.entries] == ["SYS-INIT", "INV-001"]
        assert ledger.balance_of("1") == Money.of("50000")
        assert ledger.balance_of("5") == Money.of("50000")
        assert ledger.balance_of("2") == Money.of("5000")

    def test_opening_entries_audited(self, ledger):
        actions = {r.action for r in ledger.audit_logs}
        assert {"Opening Balance Setup", "Initial Student Assessments"} <= actions

    def test_registers_seeded(self, ledger):
        assert [s.id for s in ledger.staff] == ["ST1", "ST2"]
        assert len(ledger.suppliers) == 2
        assert len(ledger.students) == 3
        assert ledger.payroll_records == ()

    def test_default_uses_bundled_config(self, deterministic_clock):
        ledger = SchoolLedger.default(clock=deterministic_clock)
        assert ledger.config.config_id == "SCHOOL-DEFAULT"
        assert len(ledger.accounts) == 9

    def test_independent_instances(self, default_config, deterministic_clock):
        a = SchoolLedger.from_config(default_config, clock=deterministic_clock)
        b = SchoolLedger.from_config(default_config, clock=deterministic_clock)
        a.procurement.record_invoice("V1", "100", "Paper")
        assert len(a.entries) == len(b.entries) + 1


class TestSummary:

    def test_opening_summary(self, ledger):
        snapshot = ledger.summary()
        assert snapshot.total_assets == Money.of("55000")
        assert snapshot.total_equity == Money.of("50000")
        assert snapshot.total_revenue == Money.of("5000")
        assert snapshot.net_income == Money.of("5000")
        assert snapshot.total_ar == Money.of("5000")
        assert snapshot.is_balanced

    def test_balanced_after_every_flow(self, ledger):
        ledger.procurement.record_invoice("V2", "3400", "Electricity")
        ledger.procurement.pay_supplier("V1", "1250")
        ledger.billing.assess("S2", "8000")
        ledger.billing.collect("S1", "5000")
        ledger.payroll.commit(ledger.payroll.start_run("ST1"))
        ledger.payroll.quick_disbursement("ST2", "22000", "500")
        ledger.post_journal(
            [{"account_id": "3", "debit": "12000"}, {"account_id": "1", "credit": "12000"}],
            "Projector",
        )

        snapshot = ledger.summary()
        assert snapshot.is_balanced
        assert snapshot.total_assets == (
            snapshot.total_liabilities + snapshot.total_equity + snapshot.net_income
        )


    def test_sub_centavo_postings_keep_system_balanced(self, ledger):
        for _ in range(3):
            ledger.post_journal(
                [{"account_id": "1", "debit": "100.004"}, {"account_id": "5", "credit": "100"}],
                "Rounding",
            )

        snapshot = ledger.summary()
        assert snapshot.total_system_debit == snapshot.total_system_credit
        assert snapshot.is_balanced
        assert ledger.balance_of("1") == Money.of("50300")


class TestManualJournal:

    def test_posts_under_general_ledger(self, ledger):
        entry = ledger.post_journal(
            [{"account_id": "3", "debit": "12000"}, {"account_id": "1", "credit": "12000"}],
            "Projector purchase",
            "JV-0001",
        )
        assert entry.module == "General Ledger"
        assert entry.reference == "JV-0001"
        latest = ledger.audit_logs[0]
        assert latest.action == "Manually posted: Projector purchase"
        assert latest.module == "General Ledger"

    def test_default_description(self, ledger):
        entry = ledger.post_journal(
            [{"account_id": "3", "debit": "1"}, {"account_id": "1", "credit": "1"}],
            "   ",
        )
        assert entry.description == "Manual Journal Entry"
        assert entry.reference.startswith("REF-")

    def test_unbalanced_rejected(self, ledger):
        before = len(ledger.entries)
        audit_before = len(ledger.audit_logs)
        with pytest.raises(UnbalancedTransactionError):
            ledger.post_journal(
                [{"account_id": "3", "debit": "100"}, {"account_id": "1", "credit": "99"}]
            )
        assert len(ledger.entries) == before
        assert len(ledger.audit_logs) == audit_before


class TestRegisters:

    def test_save_staff_audited(self, ledger):
        profile = ledger.staff.get("ST2").deduction_profile.edit().set_manual("sss", "800").build()
        ledger.save_staff(ledger.staff.get("ST2").with_profile(profile), actor="HR")

        latest = ledger.audit_logs[0]
        assert latest.user == "HR"
        assert latest.action == "Updated staff record: Elena Gomez"
        assert ledger.payroll.start_run("ST2").deductions.sss == Money.of("800")

    def test_save_supplier_and_student_audited(self, ledger):
        ledger.save_supplier(Supplier(id="V3", name="PLDT", category="Utilities"))
        assert ledger.audit_logs[0].action == "Added supplier: PLDT"
        ledger.save_student(Student(id="S4", name="Jose Rizal", grade="Grade 9"))
        assert ledger.audit_logs[0].action == "Added student: Jose Rizal"
        assert "S4" in ledger.students

    @pytest.mark.parametrize("register", ["staff", "suppliers", "students"])
    def test_registers_are_read_only(self, ledger, register):
        view = getattr(ledger, register)
        assert not hasattr(view, "save")
        assert len(view.all()) == len(view)

    def test_register_reads_see_audited_saves(self, ledger):
        audit_before = len(ledger.audit_logs)
        ledger.save_supplier(Supplier(id="V3", name="PLDT", category="Utilities"))
        assert ledger.suppliers.get("V3").name == "PLDT"
        assert "V3" in ledger.suppliers
        assert len(ledger.audit_logs) == audit_before + 1

    def test_log_action(self, ledger):
        record = ledger.log_action("Admin", "Exported trial balance", "Reports")
        assert ledger.audit_logs[0] is record
        assert record.entry_id is None
