"""Tests for supplier invoices and payments."""

import pytest

from ledger_kernel.domain.values import Money
from ledger_kernel.exceptions import InvalidAmountError, SupplierNotFoundError


class TestRecordInvoice:

    def test_posts_expense_against_payable(self, ledger):
        entry = ledger.procurement.record_invoice("V2", "3400", "June electricity")

        assert entry.module == "Procurement"
        assert entry.reference.startswith("PUR-")
        assert entry.description == "Purchase Invoice: June electricity from Meralco"
        assert entry.lines_for("8")[0].debit == Money.of("3400")
        assert entry.lines_for("4")[0].credit == Money.of("3400")
        assert entry.meta["supplier_id"] == "V2"

    def test_raises_supplier_payable(self, ledger):
        ledger.procurement.record_invoice("V1", "750", "Workbooks")
        assert ledger.suppliers.get("V1").payable == Money.of("2000")

    def test_balances_move(self, ledger):
        ledger.procurement.record_invoice("V1", "750", "Workbooks")
        assert ledger.balance_of("8") == Money.of("750")
        assert ledger.balance_of("4") == Money.of("750")

    def test_empty_description_falls_back_to_category(self, ledger):
        entry = ledger.procurement.record_invoice("V1", "10")
        assert entry.description == "Purchase Invoice: Supplies from National Book Store"

    @pytest.mark.parametrize("amount", ["0", "-5", "abc"])
    def test_invalid_amount_changes_nothing(self, ledger, amount):
        entries_before = len(ledger.entries)
        with pytest.raises(InvalidAmountError):
            ledger.procurement.record_invoice("V1", amount, "Paper")
        assert len(ledger.entries) == entries_before
        assert ledger.suppliers.get("V1").payable == Money.of("1250")

    def test_unknown_supplier(self, ledger):
        with pytest.raises(SupplierNotFoundError):
            ledger.procurement.record_invoice("V99", "10", "Paper")

    def test_audited(self, ledger):
        entry = ledger.procurement.record_invoice("V1", "100", "Chalk", actor="Clerk")
        latest = ledger.audit_logs[0]
        assert latest.entry_id == entry.id
        assert latest.user == "Clerk"
        assert latest.module == "Procurement"


class TestPaySupplier:

    def test_settles_payable_from_cash(self, ledger):
        cash_before = ledger.balance_of("1")
        entry = ledger.procurement.pay_supplier("V1", "1250")

        assert entry.reference.startswith("PAY-")
        assert ledger.suppliers.get("V1").payable == Money.zero()
        assert ledger.balance_of("1") == cash_before - Money.of("1250")

    def test_partial_payment(self, ledger):
        ledger.procurement.pay_supplier("V1", "250")
        assert ledger.suppliers.get("V1").payable == Money.of("1000")

    def test_overpayment_rejected(self, ledger):
        entries_before = len(ledger.entries)
        with pytest.raises(InvalidAmountError):
            ledger.procurement.pay_supplier("V1", "1250.01")
        assert len(ledger.entries) == entries_before
        assert ledger.suppliers.get("V1").payable == Money.of("1250")

    def test_nothing_owed(self, ledger):
        with pytest.raises(InvalidAmountError):
            ledger.procurement.pay_supplier("V2", "1")
