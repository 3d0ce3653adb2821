"""
School ERP modules.

Each module is thin glue over the kernel: frozen models, a small registry,
and a service that posts every journal entry through
``ledger_kernel.services.poster.TransactionPoster``.

Modules:
    payroll      Staff deduction profiles, payroll runs and records
    procurement  Supplier invoices and payments
    billing      Student fee assessments and collections
    reporting    Daily activity and revenue/expense pulse
"""
