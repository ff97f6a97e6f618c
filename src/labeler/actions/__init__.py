"""GitHub Actions runtime integration.

Provides the explicit run context, step outputs, and the logging handler
that turns log records into workflow commands.
"""

from src.labeler.actions.commands import (
    ActionLogFormatter,
    WorkflowCommandHandler,
    configure_logging,
    set_failed,
    set_output,
)
from src.labeler.actions.context import ActionContext, load_action_context

__all__ = [
    "ActionContext",
    "ActionLogFormatter",
    "WorkflowCommandHandler",
    "configure_logging",
    "load_action_context",
    "set_failed",
    "set_output",
]
