"""
Typed Exception Hierarchy for the Ledger Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Callers (a presentation layer, a test, an import script) must be able to tell
an unbalanced posting from a missing staff member without parsing messages.
Every error therefore has:
  1. Its own class (catch by type, not by message)
  2. A CODE class attribute (machine-readable, safe to show in an API)
  3. Structured attributes carrying the offending data

Example - WRONG way to handle errors:
    try:
        ledger.post(...)
    except Exception as e:
        if "unbalanced" in str(e):  # FRAGILE
            ...

Example - RIGHT way:
    try:
        ledger.post(...)
    except UnbalancedTransactionError as e:
        show_banner(f"Difference: {e.difference}")

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    LedgerKernelError (base)
    |
    +-- PostingError
    |   +-- UnbalancedTransactionError
    |   +-- DuplicateEntryError
    |
    +-- AccountError
    |   +-- AccountNotFoundError
    |
    +-- AmountError
    |   +-- InvalidAmountError
    |
    +-- EntityError
    |   +-- StaffNotFoundError
    |   +-- SupplierNotFoundError
    |   +-- StudentNotFoundError
    |
    +-- PayrollError
        +-- PayrollRunPostedError
        +-- InvalidDeductionSlotError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category   | Code                     | When Raised
-----------|--------------------------|------------------------------------------
Posting    | UNBALANCED_TRANSACTION   | Debits != Credits beyond 0.01
           | DUPLICATE_ENTRY          | Entry id already in the store
-----------|--------------------------|------------------------------------------
Account    | ACCOUNT_NOT_FOUND        | Account id doesn't resolve
-----------|--------------------------|------------------------------------------
Amount     | INVALID_AMOUNT           | Negative, non-numeric, or out of range
-----------|--------------------------|------------------------------------------
Entity     | STAFF_NOT_FOUND          | Staff id doesn't exist
           | SUPPLIER_NOT_FOUND       | Supplier id doesn't exist
           | STUDENT_NOT_FOUND        | Student id doesn't exist
-----------|--------------------------|------------------------------------------
Payroll    | PAYROLL_RUN_POSTED       | Editing or re-committing a posted run
           | INVALID_DEDUCTION_SLOT   | Unknown core deduction slot name

No operation that raises one of these leaves a partial state change behind.
===============================================================================
"""


class LedgerKernelError(Exception):
    """
    Base exception for all ledger kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "LEDGER_KERNEL_ERROR"


# Posting-related exceptions


class PostingError(LedgerKernelError):
    """Base exception for posting-related errors."""

    code: str = "POSTING_ERROR"


class UnbalancedTransactionError(PostingError):
    """Transaction debits do not equal credits within tolerance."""

    code: str = "UNBALANCED_TRANSACTION"

    def __init__(self, debits: str, credits: str):
        self.debits = debits
        self.credits = credits
        super().__init__(
            f"Unbalanced transaction: debits={debits}, credits={credits}"
        )


class DuplicateEntryError(PostingError):
    """An entry with the same id was already appended."""

    code: str = "DUPLICATE_ENTRY"

    def __init__(self, entry_id: str):
        self.entry_id = entry_id
        super().__init__(f"Entry already exists: {entry_id}")


# Account-related exceptions


class AccountError(LedgerKernelError):
    """Base exception for account-related errors."""

    code: str = "ACCOUNT_ERROR"


class AccountNotFoundError(AccountError):
    """Account was not found in the chart of accounts."""

    code: str = "ACCOUNT_NOT_FOUND"

    def __init__(self, account_id: str):
        self.account_id = account_id
        super().__init__(f"Account not found: {account_id}")


# Amount-related exceptions


class AmountError(LedgerKernelError):
    """Base exception for monetary input errors."""

    code: str = "AMOUNT_ERROR"


class InvalidAmountError(AmountError):
    """Monetary input is negative, non-numeric, or otherwise unusable."""

    code: str = "INVALID_AMOUNT"

    def __init__(self, field: str, value: object, reason: str = "invalid amount"):
        self.field = field
        self.value = str(value)
        self.reason = reason
        super().__init__(f"Invalid {field} ({value!r}): {reason}")


# Entity-related exceptions


class EntityError(LedgerKernelError):
    """Base exception for missing registry entities."""

    code: str = "ENTITY_ERROR"


class StaffNotFoundError(EntityError):
    """Staff member was not found."""

    code: str = "STAFF_NOT_FOUND"

    def __init__(self, staff_id: str):
        self.staff_id = staff_id
        super().__init__(f"Staff not found: {staff_id}")


class SupplierNotFoundError(EntityError):
    """Supplier was not found."""

    code: str = "SUPPLIER_NOT_FOUND"

    def __init__(self, supplier_id: str):
        self.supplier_id = supplier_id
        super().__init__(f"Supplier not found: {supplier_id}")


class StudentNotFoundError(EntityError):
    """Student was not found."""

    code: str = "STUDENT_NOT_FOUND"

    def __init__(self, student_id: str):
        self.student_id = student_id
        super().__init__(f"Student not found: {student_id}")


# Payroll-related exceptions


class PayrollError(LedgerKernelError):
    """Base exception for payroll errors."""

    code: str = "PAYROLL_ERROR"


class PayrollRunPostedError(PayrollError):
    """A posted payroll run cannot be edited or committed again."""

    code: str = "PAYROLL_RUN_POSTED"

    def __init__(self, run_id: str, operation: str):
        self.run_id = run_id
        self.operation = operation
        super().__init__(
            f"Cannot {operation} payroll run {run_id}: run is already posted"
        )


class InvalidDeductionSlotError(PayrollError):
    """Deduction slot name is not one of the core slots."""

    code: str = "INVALID_DEDUCTION_SLOT"

    def __init__(self, slot: str):
        self.slot = slot
        super().__init__(f"Unknown deduction slot: {slot}")
