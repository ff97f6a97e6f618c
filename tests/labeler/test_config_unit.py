"""Tests for labeler configuration loading."""

import json
import logging

import pytest

from src.labeler.config import (
    DEFAULT_OPENAI_ENDPOINT,
    DEFAULT_OPENAI_MODEL,
    ConfigurationError,
    get_settings,
    parse_custom_labels,
)
from src.labeler.labels.catalog import LabelDefinition


class TestGetSettings:
    """Tests for get_settings."""

    def test_defaults_when_optional_inputs_unset(self, action_env):
        settings = get_settings()

        assert settings.github_token == "ghs_testtoken"
        assert settings.openai_api_key == "sk-testkey"
        assert settings.openai_endpoint == DEFAULT_OPENAI_ENDPOINT
        assert settings.openai_model == DEFAULT_OPENAI_MODEL
        assert settings.custom_labels == []
        assert settings.github_api_url == "https://api.github.com"

    def test_blank_optional_inputs_fall_back_to_defaults(self, action_env, monkeypatch):
        monkeypatch.setenv("INPUT_OPENAI-ENDPOINT", "")
        monkeypatch.setenv("INPUT_OPENAI-MODEL", "  ")
        monkeypatch.setenv("INPUT_CUSTOM-LABELS", "")

        settings = get_settings()

        assert settings.openai_endpoint == DEFAULT_OPENAI_ENDPOINT
        assert settings.openai_model == DEFAULT_OPENAI_MODEL
        assert settings.custom_labels == []

    def test_optional_inputs_from_env(self, action_env, monkeypatch):
        monkeypatch.setenv("INPUT_OPENAI-ENDPOINT", "https://llm.internal/v1")
        monkeypatch.setenv("INPUT_OPENAI-MODEL", "gpt-4o")
        monkeypatch.setenv(
            "INPUT_CUSTOM-LABELS",
            json.dumps([{"label": "area/ui", "description": "User interface"}]),
        )

        settings = get_settings()

        assert settings.openai_endpoint == "https://llm.internal/v1"
        assert settings.openai_model == "gpt-4o"
        assert settings.custom_labels == [
            LabelDefinition(label="area/ui", description="User interface")
        ]

    def test_underscore_input_names_accepted(self, action_env, monkeypatch):
        monkeypatch.delenv("INPUT_GITHUB-TOKEN")
        monkeypatch.setenv("INPUT_GITHUB_TOKEN", "ghs_underscore")

        assert get_settings().github_token == "ghs_underscore"

    @pytest.mark.parametrize(
        "env_name, input_name",
        [
            ("INPUT_GITHUB-TOKEN", "github-token"),
            ("INPUT_OPENAI-API-KEY", "openai-api-key"),
        ],
    )
    def test_missing_required_input_is_fatal(
        self, action_env, monkeypatch, env_name, input_name
    ):
        monkeypatch.delenv(env_name)

        with pytest.raises(ConfigurationError) as exc_info:
            get_settings()

        assert f"Input required and not supplied: {input_name}" in str(exc_info.value)

    def test_blank_required_input_is_fatal(self, action_env, monkeypatch):
        monkeypatch.setenv("INPUT_GITHUB-TOKEN", "   ")

        with pytest.raises(ConfigurationError, match="github-token"):
            get_settings()

    def test_missing_repository_is_fatal(self, action_env, monkeypatch):
        monkeypatch.delenv("GITHUB_REPOSITORY")

        with pytest.raises(ConfigurationError, match="GITHUB_REPOSITORY"):
            get_settings()

    def test_invalid_endpoint_is_fatal(self, action_env, monkeypatch):
        monkeypatch.setenv("INPUT_OPENAI-ENDPOINT", "ftp://example.com")

        with pytest.raises(ConfigurationError, match="openai-endpoint"):
            get_settings()

    def test_invalid_custom_labels_json_is_not_fatal(self, action_env, monkeypatch):
        monkeypatch.setenv("INPUT_CUSTOM-LABELS", "not-valid-json")

        assert get_settings().custom_labels == []

    def test_settings_are_immutable(self, action_env):
        settings = get_settings()

        with pytest.raises(Exception):
            settings.openai_model = "other"


class TestParseCustomLabels:
    """Tests for the lenient custom-labels parser."""

    def test_invalid_json_warns_and_returns_empty(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert parse_custom_labels("{oops") == []

        assert "Failed to parse custom labels" in caplog.text

    def test_non_array_warns_and_returns_empty(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert parse_custom_labels('{"label": "x", "description": "y"}') == []

        assert "not an array" in caplog.text

    def test_invalid_entries_dropped_individually(self, caplog):
        raw = json.dumps(
            [
                {"label": "area/api", "description": "API surface"},
                {"label": "no-description"},
                {"description": "no label"},
                {"label": "", "description": "empty label"},
                "just-a-string",
                {"label": "area/docs", "description": "Docs site"},
            ]
        )

        with caplog.at_level(logging.WARNING):
            labels = parse_custom_labels(raw)

        assert [label.label for label in labels] == ["area/api", "area/docs"]
        assert caplog.text.count("Invalid custom label format") == 4

    def test_none_and_blank_return_empty(self):
        assert parse_custom_labels(None) == []
        assert parse_custom_labels("   ") == []

    def test_json_null_returns_empty_without_warning(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert parse_custom_labels("null") == []

        assert caplog.text == ""
