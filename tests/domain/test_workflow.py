"""Tests for the Workflow value object and the payroll run workflow."""

import pytest

from ledger_kernel.domain.workflow import Transition, Workflow
from ledger_modules.payroll.workflows import PAYROLL_RUN_WORKFLOW


def test_unknown_initial_state_rejected():
    with pytest.raises(ValueError):
        Workflow("w", "", "missing", ("a",), ())


def test_transition_to_unknown_state_rejected():
    with pytest.raises(ValueError):
        Workflow("w", "", "a", ("a",), (Transition("a", "b", "go"),))


def test_terminal_state_cannot_have_outgoing_transition():
    with pytest.raises(ValueError):
        Workflow(
            "w",
            "",
            "a",
            ("a", "b"),
            (Transition("a", "b", "go"), Transition("b", "a", "back")),
            terminal_states=("b",),
        )


class TestPayrollRunWorkflow:

    def test_draft_posts_to_posted(self):
        transition = PAYROLL_RUN_WORKFLOW.find_transition("draft", "post")
        assert transition is not None
        assert transition.to_state == "posted"
        assert transition.posts_entry

    def test_posted_is_terminal(self):
        assert PAYROLL_RUN_WORKFLOW.is_terminal("posted")
        assert PAYROLL_RUN_WORKFLOW.find_transition("posted", "post") is None

    def test_initial_state(self):
        assert PAYROLL_RUN_WORKFLOW.initial_state == "draft"
