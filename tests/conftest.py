"""Pytest configuration for all tests."""

import json
import os

import pytest


_RUNNER_PREFIXES = ("INPUT_", "GITHUB_")


@pytest.fixture(autouse=True)
def clean_action_env(monkeypatch):
    """Remove action inputs and runner variables inherited from the host.

    Tests that run inside a GitHub Actions job would otherwise pick up the
    job's own GITHUB_* variables.
    """
    for name in list(os.environ):
        if name.upper().startswith(_RUNNER_PREFIXES):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def issue_payload():
    """Webhook payload of an `issues.opened` event."""
    return {
        "action": "opened",
        "issue": {
            "number": 7,
            "title": "Crash on startup",
            "body": "App crashes immediately",
            "html_url": "https://github.com/octo/demo/issues/7",
        },
        "repository": {"name": "demo", "owner": {"login": "octo"}},
    }


@pytest.fixture
def event_file(tmp_path, issue_payload):
    """Write the issue payload to a file, as the runner does."""
    path = tmp_path / "event.json"
    path.write_text(json.dumps(issue_payload), encoding="utf-8")
    return path


@pytest.fixture
def action_env(monkeypatch, event_file, tmp_path):
    """Set the required inputs and runner variables for a run.

    Returns the path of the GITHUB_OUTPUT file.
    """
    output_file = tmp_path / "github_output"
    output_file.touch()
    monkeypatch.setenv("INPUT_GITHUB-TOKEN", "ghs_testtoken")
    monkeypatch.setenv("INPUT_OPENAI-API-KEY", "sk-testkey")
    monkeypatch.setenv("GITHUB_REPOSITORY", "octo/demo")
    monkeypatch.setenv("GITHUB_EVENT_NAME", "issues")
    monkeypatch.setenv("GITHUB_EVENT_PATH", str(event_file))
    monkeypatch.setenv("GITHUB_OUTPUT", str(output_file))
    return output_file
