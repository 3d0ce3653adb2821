"""
Ledger Kernel

An in-memory, append-only double-entry bookkeeping core with:
- A single validated posting path
- Derived (never stored) account balances
- Institution-wide summary figures
- An append-only action log
"""

__version__ = "0.1.0"
