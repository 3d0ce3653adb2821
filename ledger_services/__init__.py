"""
Service layer: the composition root that wires kernel and modules.
"""

from ledger_services.school_ledger import RegisterView, SchoolLedger

__all__ = ["RegisterView", "SchoolLedger"]
