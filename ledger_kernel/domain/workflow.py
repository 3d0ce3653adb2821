"""
Canonical workflow types (``ledger_kernel.domain.workflow``).

Responsibility
--------------
Pure value objects for document state machines. Modules declare their
lifecycles (e.g. payroll ``draft -> posted``) as a ``Workflow`` so that the
allowed transitions are data, not scattered ``if`` checks.

Invariants enforced
-------------------
* Transitions reference only states in ``Workflow.states``.
* ``initial_state`` is a member of ``states``.
* Terminal states have no outgoing transitions.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Transition:
    """A valid state transition in a workflow.

    ``posts_entry=True`` indicates a journal-posting transition.
    """
    from_state: str
    to_state: str
    action: str
    posts_entry: bool = False


@dataclass(frozen=True)
class Workflow:
    """A state machine definition for a document lifecycle."""
    name: str
    description: str
    initial_state: str
    states: tuple[str, ...]
    transitions: tuple[Transition, ...]
    terminal_states: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.initial_state not in self.states:
            raise ValueError(
                f"initial_state '{self.initial_state}' not in states of {self.name}"
            )
        for t in self.transitions:
            if t.from_state not in self.states or t.to_state not in self.states:
                raise ValueError(
                    f"Transition {t.from_state}->{t.to_state} of {self.name} "
                    "references an unknown state"
                )
            if t.from_state in self.terminal_states:
                raise ValueError(
                    f"Terminal state '{t.from_state}' of {self.name} has an outgoing transition"
                )

    def find_transition(self, from_state: str, action: str) -> Transition | None:
        """Return the transition for ``action`` out of ``from_state``, if any."""
        for t in self.transitions:
            if t.from_state == from_state and t.action == action:
                return t
        return None

    def is_terminal(self, state: str) -> bool:
        return state in self.terminal_states
