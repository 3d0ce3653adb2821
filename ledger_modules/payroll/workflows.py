"""Payroll Workflows.

State machine for payroll run processing.
"""

from ledger_kernel.domain.workflow import Transition, Workflow
from ledger_kernel.logging_config import get_logger

logger = get_logger("modules.payroll.workflows")


PAYROLL_RUN_WORKFLOW = Workflow(
    name="payroll_run",
    description="Payroll disbursement: editable draft, terminal posted",
    initial_state="draft",
    states=("draft", "posted"),
    transitions=(
        Transition("draft", "posted", action="post", posts_entry=True),
    ),
    terminal_states=("posted",),
)

logger.debug(
    "payroll_workflow_defined",
    extra={
        "workflow": PAYROLL_RUN_WORKFLOW.name,
        "states": list(PAYROLL_RUN_WORKFLOW.states),
        "transition_count": len(PAYROLL_RUN_WORKFLOW.transitions),
    },
)
