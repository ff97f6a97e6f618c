"""Entry point for the LLM issue labeler action.

Loads the configuration, wires the dependencies, and runs the
orchestrator inside the single failure boundary of the run.

Usage (from the action's composite step):
    python -m src.labeler.main
"""

import asyncio
import logging
import sys
from typing import Callable

from .actions.commands import configure_logging, set_failed
from .actions.context import load_action_context
from .classifier.agent import IssueClassifier
from .config import LabelerSettings, get_settings
from .github.client import GitHubClient
from .orchestrator import LabelingOrchestrator
from .state import RunStage, RunState

logger = logging.getLogger(__name__)


def _redact_secret(value: str, visible_chars: int = 4) -> str:
    """Redact a secret value, showing only the first few characters.

    Args:
        value: The secret value to redact.
        visible_chars: Number of characters to show at the start.

    Returns:
        Redacted string with asterisks replacing hidden characters.
    """
    if len(value) <= visible_chars:
        return "*" * len(value)
    return value[:visible_chars] + "*" * (len(value) - visible_chars)


def _log_configuration(settings: LabelerSettings) -> None:
    """Log configuration values with secrets redacted."""
    logger.debug("Labeler configuration:")
    logger.debug(f"  GitHub API URL: {settings.github_api_url}")
    logger.debug(f"  GitHub Token: {_redact_secret(settings.github_token)}")
    logger.debug(f"  Repository: {settings.github_repository}")
    logger.debug(f"  Event: {settings.github_event_name}")
    logger.debug(f"  OpenAI Endpoint: {settings.openai_endpoint}")
    logger.debug(f"  OpenAI Model: {settings.openai_model}")
    logger.debug(f"  OpenAI API Key: {_redact_secret(settings.openai_api_key)}")
    logger.debug(f"  Custom Labels: {len(settings.custom_labels)}")


def _build_orchestrator(
    cfg: LabelerSettings,
    gh_client: GitHubClient,
) -> LabelingOrchestrator:
    """Wire all run dependencies into a LabelingOrchestrator.

    Args:
        cfg: Validated labeler settings.
        gh_client: Authenticated GitHub API client.

    Returns:
        Fully wired LabelingOrchestrator.
    """
    context = load_action_context(
        repository=cfg.github_repository,
        event_path=cfg.github_event_path,
        event_name=cfg.github_event_name,
    )

    classifier = IssueClassifier(
        api_key=cfg.openai_api_key,
        endpoint=cfg.openai_endpoint,
        model_name=cfg.openai_model,
    )

    return LabelingOrchestrator(
        context=context,
        github_client=gh_client,
        classifier=classifier,
        custom_labels=cfg.custom_labels,
        output_path=cfg.github_output,
    )


async def run(
    settings_loader: Callable[[], LabelerSettings] = get_settings,
) -> RunState:
    """Run the labeler once.

    This is the only place errors are caught: any exception from any step
    moves the run to FAILED and is reported as the action's failure. No
    outputs are published for a failed run.

    Args:
        settings_loader: Callable returning validated settings.

    Returns:
        The final RunState (DONE or FAILED).
    """
    state = RunState()

    try:
        logger.info("Starting LLM Issue Labeler action...")

        settings = settings_loader()
        state.transition(RunStage.CONFIG_LOADED)
        _log_configuration(settings)
        logger.info("Action inputs validated successfully")

        async with GitHubClient(
            token=settings.github_token,
            base_url=settings.github_api_url,
        ) as gh_client:
            orchestrator = _build_orchestrator(settings, gh_client)
            await orchestrator.process_issue(state)

    except Exception as exc:
        error_message = str(exc) or type(exc).__name__
        logger.debug(
            "Run failed",
            exc_info=True,
            extra={"stage": state.current_stage.value},
        )
        state.fail(error_message)
        set_failed(f"Action failed: {error_message}")

    return state


def main() -> int:
    """Process entry point; returns the exit code."""
    configure_logging()

    try:
        state = asyncio.run(run())
    except Exception as exc:
        return set_failed(f"Unexpected error: {exc}")

    return 0 if state.succeeded else 1


if __name__ == "__main__":
    sys.exit(main())
