"""Labeler configuration using pydantic-settings.

This module defines the LabelerSettings class that reads the action inputs
and the GitHub Actions runtime variables from the environment.

The runner exposes each action input as INPUT_<NAME>, upper-cased with
hyphens preserved (e.g. `github-token` becomes INPUT_GITHUB-TOKEN). The
underscore spelling (INPUT_GITHUB_TOKEN) is accepted as well for shells
that cannot export hyphenated names.

Inputs:
- github-token (required): token for the GitHub API
- openai-api-key (required): key for the model endpoint
- openai-endpoint (optional): OpenAI-compatible base URL
- openai-model (optional): model identifier
- custom-labels (optional): JSON array of {"label", "description"} objects

Unset optional inputs arrive as empty strings and fall back to their
defaults. A malformed custom-labels value never fails the run: it degrades
to an empty list, and invalid entries are dropped one by one, each with a
warning.
"""

import json
import logging
from typing import Annotated, Any, List, Optional

from pydantic import AliasChoices, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from src.labeler.labels.catalog import LabelDefinition


logger = logging.getLogger(__name__)


DEFAULT_OPENAI_ENDPOINT = "https://api.openai.com/v1"
DEFAULT_OPENAI_MODEL = "gpt-4o-mini"
DEFAULT_GITHUB_API_URL = "https://api.github.com"

INPUT_NAMES = {
    "github_token": "github-token",
    "openai_api_key": "openai-api-key",
    "openai_endpoint": "openai-endpoint",
    "openai_model": "openai-model",
    "custom_labels": "custom-labels",
}

REQUIRED_INPUTS = ("github_token", "openai_api_key")


def _input_alias(name: str) -> AliasChoices:
    """Accept both the hyphenated and underscored INPUT_ variable."""
    upper = name.upper()
    return AliasChoices(f"INPUT_{upper}", f"INPUT_{upper.replace('-', '_')}")


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""


class LabelerSettings(BaseSettings):
    """Labeler configuration from environment variables.

    Immutable once loaded; one instance is created per run.
    """

    model_config = SettingsConfigDict(
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Action inputs
    # -------------------------------------------------------------------------
    github_token: str = Field(..., validation_alias=_input_alias("github-token"))

    openai_api_key: str = Field(..., validation_alias=_input_alias("openai-api-key"))

    openai_endpoint: str = Field(
        DEFAULT_OPENAI_ENDPOINT,
        validation_alias=_input_alias("openai-endpoint"),
    )

    openai_model: str = Field(
        DEFAULT_OPENAI_MODEL,
        validation_alias=_input_alias("openai-model"),
    )

    # NoDecode: the raw string reaches parse_custom_labels, which degrades
    # bad JSON to [] instead of failing settings construction.
    custom_labels: Annotated[List[LabelDefinition], NoDecode] = Field(
        default_factory=list,
        validation_alias=_input_alias("custom-labels"),
    )

    # -------------------------------------------------------------------------
    # GitHub Actions runtime
    # -------------------------------------------------------------------------
    github_repository: str = Field(..., validation_alias="GITHUB_REPOSITORY")

    github_event_name: str = Field("", validation_alias="GITHUB_EVENT_NAME")

    github_event_path: Optional[str] = Field(None, validation_alias="GITHUB_EVENT_PATH")

    github_api_url: str = Field(
        DEFAULT_GITHUB_API_URL,
        validation_alias="GITHUB_API_URL",
    )

    github_output: Optional[str] = Field(None, validation_alias="GITHUB_OUTPUT")

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("github_token", "openai_api_key")
    @classmethod
    def validate_required(cls, v: str) -> str:
        """Validate that a required input is not empty."""
        if not v or not v.strip():
            raise ValueError("value cannot be empty")
        return v.strip()

    @field_validator("openai_endpoint", mode="before")
    @classmethod
    def default_openai_endpoint(cls, v: Any) -> Any:
        """Fall back to the public OpenAI API when the input is blank."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return DEFAULT_OPENAI_ENDPOINT
        return v

    @field_validator("openai_model", mode="before")
    @classmethod
    def default_openai_model(cls, v: Any) -> Any:
        """Fall back to the default model when the input is blank."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return DEFAULT_OPENAI_MODEL
        return v

    @field_validator("github_api_url", mode="before")
    @classmethod
    def default_github_api_url(cls, v: Any) -> Any:
        """Fall back to github.com when no API URL is provided."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return DEFAULT_GITHUB_API_URL
        return v

    @field_validator("openai_endpoint")
    @classmethod
    def validate_openai_endpoint(cls, v: str) -> str:
        """Validate that the endpoint is an http(s) URL."""
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("openai-endpoint must start with http:// or https://")
        return v

    @field_validator("custom_labels", mode="before")
    @classmethod
    def validate_custom_labels(cls, v: Any) -> List[LabelDefinition]:
        """Parse the custom-labels input leniently."""
        return parse_custom_labels(v)


def parse_custom_labels(value: Any) -> List[LabelDefinition]:
    """Parse custom label definitions from the custom-labels input.

    Args:
        value: JSON string (as read from the environment) or an already
            decoded list.

    Returns:
        The valid label definitions, in input order. Empty when the input
        is blank or `null` (silently), or when it is not valid JSON or not
        an array (with a warning).
    """
    if value is None:
        return []

    if isinstance(value, str):
        if not value.strip():
            return []
        try:
            value = json.loads(value)
        except ValueError as e:
            logger.warning("Failed to parse custom labels: %s", e)
            return []
        if value is None:
            return []

    if not isinstance(value, list):
        logger.warning("Custom labels input is not an array, using empty array")
        return []

    labels: List[LabelDefinition] = []
    for item in value:
        if isinstance(item, LabelDefinition):
            labels.append(item)
            continue
        try:
            if not isinstance(item, dict):
                raise TypeError("entry is not an object")
            labels.append(
                LabelDefinition(label=item.get("label"), description=item.get("description"))
            )
        except (TypeError, ValidationError):
            logger.warning("Invalid custom label format: %s", json.dumps(item, default=str))
    return labels


def _field_for(loc: Any) -> str:
    """Map a validation error location (field name or alias) to a field name."""
    key = str(loc).lower()
    for name, info in LabelerSettings.model_fields.items():
        alias = info.validation_alias
        choices = alias.choices if isinstance(alias, AliasChoices) else [alias]
        if key == name or key in {str(c).lower() for c in choices if c}:
            return name
    return key


def get_settings() -> LabelerSettings:
    """Create and return a LabelerSettings instance.

    Returns:
        LabelerSettings: Configured settings instance.

    Raises:
        ConfigurationError: If a required input or runtime variable is
            missing, or a value is invalid.
    """
    try:
        return LabelerSettings()
    except ValidationError as e:
        messages = []
        for error in e.errors():
            name = _field_for(error["loc"][0]) if error["loc"] else ""
            if name in REQUIRED_INPUTS:
                messages.append(f"Input required and not supplied: {INPUT_NAMES[name]}")
            elif name in INPUT_NAMES:
                messages.append(f"Invalid input {INPUT_NAMES[name]}: {error['msg']}")
            elif error["type"] == "missing":
                messages.append(f"Environment variable not set: {name.upper()}")
            else:
                messages.append(f"Invalid {name.upper()}: {error['msg']}")
        raise ConfigurationError("; ".join(messages)) from e
