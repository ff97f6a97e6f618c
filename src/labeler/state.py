"""Run state tracking for a labeling run.

This module defines the stages a single labeling run moves through and
the in-memory record of its transitions:
- RunStage: Enum of all run stages
- StageTransition: Record of a transition with timestamp and details
- RunState: Current stage, history, and failure message of the run
- VALID_TRANSITIONS: Map defining allowed stage transitions

Stage Flow:
    init → config_loaded → issue_read → labels_provisioned → classified
    → filtered → applied → done

Any non-terminal stage can transition to 'failed'. Both 'done' and
'failed' are absorbing; a run is never retried.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class RunStage(str, Enum):
    """Stages of a labeling run.

    Attributes:
        INIT: Process started, nothing loaded yet.
        CONFIG_LOADED: Inputs read and validated.
        ISSUE_READ: Triggering issue extracted from the event payload.
        LABELS_PROVISIONED: Catalog labels ensured in the repository.
        CLASSIFIED: Model returned a validated classification.
        FILTERED: Suggested labels reduced to catalog members.
        APPLIED: Labels and type written to the issue.
        DONE: Outputs published; run finished successfully.
        FAILED: A step raised; run finished unsuccessfully.
    """

    INIT = "init"
    CONFIG_LOADED = "config_loaded"
    ISSUE_READ = "issue_read"
    LABELS_PROVISIONED = "labels_provisioned"
    CLASSIFIED = "classified"
    FILTERED = "filtered"
    APPLIED = "applied"
    DONE = "done"
    FAILED = "failed"


_LINEAR_FLOW = [
    RunStage.INIT,
    RunStage.CONFIG_LOADED,
    RunStage.ISSUE_READ,
    RunStage.LABELS_PROVISIONED,
    RunStage.CLASSIFIED,
    RunStage.FILTERED,
    RunStage.APPLIED,
    RunStage.DONE,
]

# Each stage may advance to the next one or fail; DONE and FAILED are terminal.
VALID_TRANSITIONS: Dict[RunStage, List[RunStage]] = {
    stage: [following, RunStage.FAILED]
    for stage, following in zip(_LINEAR_FLOW, _LINEAR_FLOW[1:])
}
VALID_TRANSITIONS[RunStage.DONE] = []
VALID_TRANSITIONS[RunStage.FAILED] = []


def is_valid_transition(from_stage: RunStage, to_stage: RunStage) -> bool:
    """Check if a stage transition is valid.

    Example:
        >>> is_valid_transition(RunStage.INIT, RunStage.CONFIG_LOADED)
        True
        >>> is_valid_transition(RunStage.INIT, RunStage.CLASSIFIED)
        False
    """
    return to_stage in VALID_TRANSITIONS.get(from_stage, [])


def is_terminal_stage(stage: RunStage) -> bool:
    """Check if a stage has no outgoing transitions."""
    return len(VALID_TRANSITIONS.get(stage, [])) == 0


class InvalidTransitionError(Exception):
    """Raised when an invalid stage transition is attempted.

    Attributes:
        from_stage: The current stage.
        to_stage: The attempted target stage.
    """

    def __init__(self, from_stage: RunStage, to_stage: RunStage):
        self.from_stage = from_stage
        self.to_stage = to_stage
        super().__init__(
            f"Invalid transition from {from_stage.value} to {to_stage.value}"
        )


class StageTransition(BaseModel):
    """Record of a stage transition in the run.

    Attributes:
        from_stage: The stage before the transition.
        to_stage: The stage after the transition.
        timestamp: When the transition occurred (UTC).
        details: Optional metadata about the transition.
    """

    from_stage: RunStage
    to_stage: RunStage
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    details: Dict[str, Any] = Field(default_factory=dict)


class RunState(BaseModel):
    """State of a single labeling run.

    Attributes:
        current_stage: The current run stage.
        history: Ordered list of all stage transitions.
        error: Failure message, set only when the run failed.
    """

    current_stage: RunStage = RunStage.INIT
    history: List[StageTransition] = Field(default_factory=list)
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        """True once the run reached DONE."""
        return self.current_stage == RunStage.DONE

    @property
    def failed(self) -> bool:
        """True once the run reached FAILED."""
        return self.current_stage == RunStage.FAILED

    def transition(
        self,
        to_stage: RunStage,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Move the run to another stage.

        Args:
            to_stage: The target stage.
            details: Optional metadata recorded with the transition.

        Raises:
            InvalidTransitionError: If the transition is not allowed.
            ValueError: If transitioning to FAILED without an error message.
        """
        if not is_valid_transition(self.current_stage, to_stage):
            raise InvalidTransitionError(self.current_stage, to_stage)

        details = dict(details or {})
        if to_stage == RunStage.FAILED:
            if not details.get("error"):
                raise ValueError("Transition to failed requires an error message")
            self.error = str(details["error"])

        self.history.append(
            StageTransition(
                from_stage=self.current_stage,
                to_stage=to_stage,
                details=details,
            )
        )
        self.current_stage = to_stage

    def fail(self, error: str) -> None:
        """Move the run to FAILED, recording the error message.

        Does nothing if the run already reached a terminal stage.
        """
        if is_terminal_stage(self.current_stage):
            return
        self.transition(RunStage.FAILED, {"error": error})
