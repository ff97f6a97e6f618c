"""LLM-based issue classifier for the labeler.

This module implements the IssueClassifier that asks a language model to
pick labels and a type for a GitHub issue. The request uses OpenAI
structured outputs through LangChain's ChatOpenAI client, constrained by the
schema generated from IssueClassification, and the returned payload is
validated against the same model before it is used.

Any failure (transport error, missing structured payload, schema mismatch)
raises ClassificationError. The classifier never substitutes a default
classification.

Source:
- src/labeler/classifier/models.py (IssueClassification, schema)
- src/labeler/labels/catalog.py (LabelCatalog)
- src/labeler/config.py (openai_endpoint, openai_model, openai_api_key)
"""

import logging
from typing import Any, Optional

from langchain_core.messages import HumanMessage, SystemMessage
from langchain_core.runnables import Runnable
from langchain_openai import ChatOpenAI
from pydantic import ValidationError

from src.labeler.classifier.models import (
    IssueClassification,
    classification_json_schema,
)
from src.labeler.github.models import IssueRecord
from src.labeler.labels.catalog import LabelCatalog


logger = logging.getLogger(__name__)


NO_DESCRIPTION_PLACEHOLDER = "No description provided"

TYPE_DEFINITIONS = """- Bug: Issues reporting problems, errors, or unexpected behavior
- Feature: Requests for new functionality or enhancements
- Task: General tasks, maintenance, or process-related issues"""


def build_system_prompt(catalog: LabelCatalog) -> str:
    """Build the system prompt listing every catalog label and issue type.

    Args:
        catalog: The labels the model may choose from.

    Returns:
        System prompt string for the LLM.
    """
    label_lines = "\n".join(
        f"- {definition.label}: {definition.description}" for definition in catalog
    )

    return f"""You are an expert GitHub issue classifier. Your task is to analyze issue titles and descriptions to assign appropriate labels and determine the issue type.

Available Labels:
{label_lines}

Available Types:
{TYPE_DEFINITIONS}

Guidelines:
1. Assign multiple relevant labels based on the issue content
2. Assign exactly one type that best categorizes the issue
3. Consider both the title and description when making decisions
4. Be conservative but accurate in your classifications
5. Provide clear reasoning for your decisions

Return your classification with reasoning for the decisions made."""


def build_user_prompt(issue: IssueRecord) -> str:
    """Build the user prompt carrying the issue title and body."""
    body_content = issue.body if issue.body else NO_DESCRIPTION_PLACEHOLDER

    return f"""Please analyze this GitHub issue and classify it:

Title: {issue.title}

Description:
{body_content}

Please provide labels and type classification with reasoning."""


class ClassificationError(Exception):
    """Raised when issue classification fails.

    Attributes:
        message: Human-readable error description.
        cause: The underlying exception that caused the failure.
    """

    def __init__(self, message: str, cause: Optional[Exception] = None):
        self.message = message
        self.cause = cause
        super().__init__(message)


class IssueClassifier:
    """LLM-based classifier for GitHub issues.

    Connects to an OpenAI-compatible endpoint using LangChain's ChatOpenAI
    client and requests a structured response constrained to the
    IssueClassification schema.

    Attributes:
        api_key: API key for the model endpoint.
        endpoint: Base URL of the OpenAI-compatible API.
        model_name: Name of the model to use for inference.
        temperature: Sampling temperature, kept low for consistent results.

    Example:
        >>> classifier = IssueClassifier(
        ...     api_key="sk-xxx",
        ...     endpoint="https://api.openai.com/v1",
        ...     model_name="gpt-4o-mini",
        ... )
        >>> result = await classifier.classify(issue, LabelCatalog.build())
        >>> print(result.type)
        Bug
    """

    def __init__(
        self,
        api_key: str,
        endpoint: str,
        model_name: str,
        temperature: float = 0.1,
    ):
        self.api_key = api_key
        self.endpoint = endpoint
        self.model_name = model_name
        self.temperature = temperature
        self._llm: Optional[ChatOpenAI] = None
        self._structured_llm: Optional[Runnable] = None

    @property
    def llm(self) -> ChatOpenAI:
        """Get the chat model client, creating it if necessary."""
        if self._llm is None:
            self._llm = ChatOpenAI(
                base_url=self.endpoint,
                api_key=self.api_key,
                model=self.model_name,
                temperature=self.temperature,
                max_retries=0,
            )
        return self._llm

    @property
    def structured_llm(self) -> Runnable:
        """Get the chat model bound to the classification schema.

        `include_raw=True` makes parse failures come back in the result
        instead of raising, so a missing payload can be reported as such.
        """
        if self._structured_llm is None:
            self._structured_llm = self.llm.with_structured_output(
                classification_json_schema(),
                method="json_schema",
                strict=True,
                include_raw=True,
            )
        return self._structured_llm

    async def classify(
        self,
        issue: IssueRecord,
        catalog: LabelCatalog,
    ) -> IssueClassification:
        """Classify a GitHub issue using the LLM.

        Args:
            issue: The issue to classify.
            catalog: The labels the model may suggest.

        Returns:
            The validated IssueClassification.

        Raises:
            ClassificationError: If the model call fails, returns no
                structured payload, or returns a payload that does not
                match the schema.
        """
        messages = [
            SystemMessage(content=build_system_prompt(catalog)),
            HumanMessage(content=build_user_prompt(issue)),
        ]

        logger.info(
            "Sending request to the model for issue analysis",
            extra={
                "issue_number": issue.number,
                "model": self.model_name,
                "catalog_size": len(catalog),
            },
        )

        try:
            result = await self.structured_llm.ainvoke(messages)
        except Exception as e:
            logger.error(
                "Failed to analyze issue with the model",
                extra={"error": str(e), "error_type": type(e).__name__},
            )
            raise ClassificationError(f"Model request failed: {e}", cause=e)

        classification = _validate_response(result)

        logger.info(
            "Model analysis complete. Labels: %s, Type: %s",
            ", ".join(classification.labels),
            classification.type,
        )
        logger.info("Reasoning: %s", classification.reasoning)

        return classification


def _validate_response(result: Any) -> IssueClassification:
    """Extract and re-validate the structured payload from a model result.

    Args:
        result: The `include_raw` result dictionary with `raw`, `parsed`
            and `parsing_error` keys.

    Returns:
        The validated IssueClassification.

    Raises:
        ClassificationError: If there is no parsed payload or it does not
            match the schema.
    """
    parsed = result.get("parsed") if isinstance(result, dict) else None

    if not parsed:
        parsing_error = result.get("parsing_error") if isinstance(result, dict) else None
        if parsing_error is not None:
            logger.warning(
                "Model output could not be parsed",
                extra={"error": str(parsing_error)},
            )
        raise ClassificationError(
            "No response received from the model",
            cause=parsing_error,
        )

    if isinstance(parsed, IssueClassification):
        parsed = parsed.model_dump()

    try:
        return IssueClassification.model_validate(parsed)
    except ValidationError as e:
        raise ClassificationError(f"Response validation failed: {e}", cause=e)
