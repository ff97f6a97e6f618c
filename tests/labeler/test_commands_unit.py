"""Unit tests for workflow commands and step outputs."""

import io
import logging

import pytest

from src.labeler.actions.commands import (
    ActionLogFormatter,
    WorkflowCommandHandler,
    configure_logging,
    escape_data,
    format_command,
    set_failed,
    set_output,
)


def _emit(level: int, message: str) -> str:
    stream = io.StringIO()
    handler = WorkflowCommandHandler(stream)
    handler.setFormatter(logging.Formatter("%(message)s"))
    record = logging.LogRecord("test", level, __file__, 1, message, None, None)
    handler.emit(record)
    return stream.getvalue()


class TestEscaping:

    def test_escapes_percent_and_newlines(self):
        assert escape_data("100%\r\ndone") == "100%25%0D%0Adone"

    def test_format_command(self):
        assert format_command("warning", "a\nb") == "::warning::a%0Ab"


class TestWorkflowCommandHandler:

    @pytest.mark.parametrize(
        "level, prefix",
        [
            (logging.DEBUG, "::debug::"),
            (logging.WARNING, "::warning::"),
            (logging.ERROR, "::error::"),
            (logging.CRITICAL, "::error::"),
        ],
    )
    def test_levels_map_to_commands(self, level, prefix):
        assert _emit(level, "message") == f"{prefix}message\n"

    def test_info_printed_plain(self):
        assert _emit(logging.INFO, "Processing issue #7") == "Processing issue #7\n"

    def test_multiline_message_kept_on_one_command_line(self):
        output = _emit(logging.ERROR, "first\nsecond")

        assert output == "::error::first%0Asecond\n"

    def test_configure_logging_installs_single_handler(self):
        root = logging.getLogger()
        previous = (root.handlers[:], root.level)
        try:
            configure_logging()
            configure_logging()

            assert len(root.handlers) == 1
            assert isinstance(root.handlers[0], WorkflowCommandHandler)
            assert logging.getLogger("httpx").level == logging.WARNING
        finally:
            root.handlers[:] = previous[0]
            root.setLevel(previous[1])


class TestActionLogFormatter:

    def _format(self, level: int, message: str, **extra) -> str:
        stream = io.StringIO()
        handler = WorkflowCommandHandler(stream)
        handler.setFormatter(ActionLogFormatter("%(message)s"))
        record = logging.LogRecord("test", level, __file__, 1, message, None, None)
        record.__dict__.update(extra)
        handler.emit(record)
        return stream.getvalue()

    def test_extra_fields_rendered_in_annotation(self):
        output = self._format(
            logging.ERROR,
            "GitHub API error",
            status_code=404,
            path="/repos/octo/demo/labels",
        )

        assert output == (
            "::error::GitHub API error (status_code=404, path=/repos/octo/demo/labels)\n"
        )

    def test_message_without_extra_unchanged(self):
        assert self._format(logging.WARNING, "plain") == "::warning::plain\n"

    def test_extra_rendered_through_logger(self, caplog):
        caplog.handler.setFormatter(ActionLogFormatter("%(message)s"))

        with caplog.at_level(logging.ERROR):
            logging.getLogger("test.extra").error(
                "Failed to analyze issue with the model",
                extra={"error_type": "TimeoutError"},
            )

        expected = "Failed to analyze issue with the model (error_type=TimeoutError)"
        assert expected in caplog.text

    def test_configure_logging_uses_formatter(self):
        root = logging.getLogger()
        previous = (root.handlers[:], root.level)
        try:
            configure_logging()

            assert isinstance(root.handlers[0].formatter, ActionLogFormatter)
        finally:
            root.handlers[:] = previous[0]
            root.setLevel(previous[1])


class TestSetOutput:

    def test_appends_delimited_output(self, tmp_path):
        path = tmp_path / "output"

        set_output("labels-applied", "bug,question", output_path=str(path))
        set_output("type-applied", "Bug", output_path=str(path))

        lines = path.read_text(encoding="utf-8").splitlines()
        assert len(lines) == 6
        name, delimiter = lines[0].split("<<")
        assert name == "labels-applied"
        assert delimiter.startswith("ghadelimiter_")
        assert lines[1:3] == ["bug,question", delimiter]
        assert lines[3].startswith("type-applied<<")
        assert lines[4] == "Bug"

    def test_empty_value(self, tmp_path):
        path = tmp_path / "output"

        set_output("labels-applied", "", output_path=str(path))

        lines = path.read_text(encoding="utf-8").splitlines()
        assert lines[1] == ""

    def test_falls_back_to_env_output_file(self, tmp_path, monkeypatch):
        path = tmp_path / "output"
        monkeypatch.setenv("GITHUB_OUTPUT", str(path))

        set_output("type-applied", "Task")

        assert "Task" in path.read_text(encoding="utf-8")

    def test_logs_output_without_output_file(self, caplog):
        with caplog.at_level(logging.INFO):
            set_output("type-applied", "Feature")

        assert "Output type-applied=Feature" in caplog.text


class TestSetFailed:

    def test_logs_error_and_returns_exit_code(self, caplog):
        with caplog.at_level(logging.ERROR):
            code = set_failed("Action failed: boom")

        assert code == 1
        assert "Action failed: boom" in caplog.text
