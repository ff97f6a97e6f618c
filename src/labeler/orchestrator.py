"""Labeling orchestrator connecting all steps of a run.

Drives the triggering issue through the labeling steps:
issue reader → label provisioner → classifier → label filter → applier
→ step outputs.

Steps run strictly one after another. The orchestrator does not catch
anything itself: any exception propagates to the single failure boundary in
main.run(), which moves the run to the failed stage. Non-fatal conditions
(provisioning failures, rejected suggestions) are absorbed inside the
component that detects them.

Source:
- src/labeler/github/reader.py (read_issue)
- src/labeler/labels/provisioner.py (LabelProvisioner)
- src/labeler/classifier/agent.py (IssueClassifier)
- src/labeler/labels/applier.py (ResultApplier)
- src/labeler/state.py (RunState)
"""

import logging
from typing import Iterable, Optional

from src.labeler.actions.commands import set_output
from src.labeler.actions.context import ActionContext
from src.labeler.classifier.agent import IssueClassifier
from src.labeler.github.client import GitHubClient
from src.labeler.github.reader import read_issue
from src.labeler.labels.applier import LabelingResult, ResultApplier
from src.labeler.labels.catalog import LabelCatalog, LabelDefinition
from src.labeler.labels.provisioner import LabelProvisioner
from src.labeler.state import RunStage, RunState


logger = logging.getLogger(__name__)


LABELS_APPLIED_OUTPUT = "labels-applied"
TYPE_APPLIED_OUTPUT = "type-applied"


class LabelingOrchestrator:
    """Orchestrates one labeling run for the triggering issue.

    Accepts all dependencies via constructor injection.

    Attributes:
        context: The run context carrying the event payload and repository.
        classifier: LLM-based issue classifier.
        provisioner: Creates catalog labels missing from the repository.
        applier: Filters suggestions and writes them to the issue.
        custom_labels: Custom label definitions from the action inputs.
        output_path: Step output file (GITHUB_OUTPUT), if any.
    """

    def __init__(
        self,
        context: ActionContext,
        github_client: GitHubClient,
        classifier: IssueClassifier,
        custom_labels: Iterable[LabelDefinition] = (),
        output_path: Optional[str] = None,
    ):
        self.context = context
        self.classifier = classifier
        self.provisioner = LabelProvisioner(github_client, context.owner, context.repo)
        self.applier = ResultApplier(github_client, context.owner, context.repo)
        self.custom_labels = tuple(custom_labels)
        self.output_path = output_path

    async def process_issue(self, state: RunState) -> LabelingResult:
        """Drive the triggering issue through every labeling step.

        Args:
            state: The run state, already past configuration loading.

        Returns:
            LabelingResult describing what was written to the issue.

        Raises:
            Exception: Whatever a fatal step raised; the caller records the
                failure.
        """
        issue = read_issue(self.context)
        state.transition(RunStage.ISSUE_READ, {"issue_number": issue.number})
        logger.info("Processing issue #%s: \"%s\"", issue.number, issue.title)

        catalog = LabelCatalog.build(self.custom_labels)
        created = await self.provisioner.ensure_labels(catalog)
        state.transition(RunStage.LABELS_PROVISIONED, {"created": created})
        logger.info("Required labels ensured in repository")

        classification = await self.classifier.classify(issue, catalog)
        state.transition(RunStage.CLASSIFIED, classification.to_dict())
        logger.info("Issue analysis completed")

        result = self.applier.select(classification, catalog)
        state.transition(
            RunStage.FILTERED,
            {"labels": result.labels_applied, "rejected": result.rejected_labels},
        )

        await self.applier.apply(issue, result)
        state.transition(RunStage.APPLIED)

        self._publish_outputs(result)
        state.transition(RunStage.DONE)

        logger.info("Issue labeling completed successfully!")
        logger.info("Applied labels: %s", ", ".join(result.labels_applied))
        logger.info("Applied type: %s", result.type_applied)
        logger.info("Reasoning: %s", result.reasoning)

        return result

    def _publish_outputs(self, result: LabelingResult) -> None:
        """Publish the applied labels and type as step outputs."""
        set_output(
            LABELS_APPLIED_OUTPUT,
            ",".join(result.labels_applied),
            output_path=self.output_path,
        )
        set_output(
            TYPE_APPLIED_OUTPUT,
            result.type_applied,
            output_path=self.output_path,
        )
