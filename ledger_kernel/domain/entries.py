"""
Entries -- journal lines, journal entries, and the append-only entry store.

Responsibility:
    Defines the immutable LedgerLine / LedgerEntry records and the
    LedgerEntryStore that owns them. Insertion order is chronological order.

Architecture position:
    Kernel > Domain -- pure, zero I/O. The store is written to only by
    ledger_kernel.services.poster.TransactionPoster.

Invariants enforced:
    - Line debit and credit are non-negative Money, rounded half-up to
      centavos on construction.
    - Entries are frozen; meta is a read-only mapping.
    - The store is append-only: there is no update or remove operation, and
      all() returns a tuple snapshot.
    - Entry ids are unique within a store.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from datetime import date
from types import MappingProxyType
from typing import Any

from ledger_kernel.domain.values import Money
from ledger_kernel.exceptions import DuplicateEntryError


@dataclass(frozen=True)
class LedgerLine:
    """
    One line of a journal entry.

    A line normally carries only one side, but a line with both sides set is
    accepted; the balance check runs on the entry totals.
    """

    account_id: str
    debit: Money = field(default_factory=Money.zero)
    credit: Money = field(default_factory=Money.zero)

    def __post_init__(self) -> None:
        object.__setattr__(self, "debit", Money.non_negative(self.debit, "debit").round())
        object.__setattr__(self, "credit", Money.non_negative(self.credit, "credit").round())

    @classmethod
    def debit_of(cls, account_id: str, amount: Money | Any) -> LedgerLine:
        return cls(account_id=account_id, debit=Money.of(amount, "debit"))

    @classmethod
    def credit_of(cls, account_id: str, amount: Money | Any) -> LedgerLine:
        return cls(account_id=account_id, credit=Money.of(amount, "credit"))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> LedgerLine:
        """Build a line from ``{account_id|accountId, debit, credit}``."""
        account_id = data.get("account_id", data.get("accountId"))
        return cls(
            account_id=str(account_id) if account_id is not None else "",
            debit=data.get("debit") or 0,
            credit=data.get("credit") or 0,
        )

    @property
    def net_debit(self) -> Money:
        return self.debit - self.credit


@dataclass(frozen=True)
class LedgerEntry:
    """A posted transaction. Immutable once constructed."""

    id: str
    date: date
    reference: str
    description: str
    lines: tuple[LedgerLine, ...]
    module: str = ""
    meta: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "lines", tuple(self.lines))
        object.__setattr__(self, "meta", MappingProxyType(dict(self.meta)))

    @property
    def total_debit(self) -> Money:
        return Money.sum(line.debit for line in self.lines)

    @property
    def total_credit(self) -> Money:
        return Money.sum(line.credit for line in self.lines)

    @property
    def volume(self) -> Money:
        """Total value moved by the entry (the debit side)."""
        return self.total_debit

    def lines_for(self, account_id: str) -> tuple[LedgerLine, ...]:
        return tuple(line for line in self.lines if line.account_id == account_id)


class LedgerEntryStore:
    """
    Append-only, ordered sequence of posted entries.

    Guarantees:
        - append() makes the entry visible to every subsequent read.
        - version increases by exactly one per append; readers key memos on it.
    """

    def __init__(self) -> None:
        self._entries: list[LedgerEntry] = []
        self._ids: set[str] = set()

    def append(self, entry: LedgerEntry) -> str:
        if entry.id in self._ids:
            raise DuplicateEntryError(entry.id)
        self._entries.append(entry)
        self._ids.add(entry.id)
        return entry.id

    def all(self) -> tuple[LedgerEntry, ...]:
        return tuple(self._entries)

    def contains(self, entry_id: str) -> bool:
        return entry_id in self._ids

    @property
    def version(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[LedgerEntry]:
        return iter(tuple(self._entries))

    def __len__(self) -> int:
        return len(self._entries)
