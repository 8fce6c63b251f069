"""Tests for console and file lint observers."""

import io

from rich.console import Console

from commitional.lint import CommitLinter
from commitional.observers import ConsoleLogObserver, FileLogObserver


def make_console():
    return Console(file=io.StringIO(), width=120, color_system=None)


def test_console_observer_prints_violations(default_engine):
    console = make_console()
    linter = CommitLinter(default_engine)
    linter.add_observer(ConsoleLogObserver(console))

    linter.lint_many([("message", "feat: add feature.", None)])
    output = console.file.getvalue()

    assert "feat: add feature." in output
    assert "- [subject:0] The subject must never end with a full stop" in output
    assert "1 of 1 commit message(s) failed linting" in output


def test_console_observer_is_quiet_for_valid_messages(default_engine):
    console = make_console()
    linter = CommitLinter(default_engine)
    linter.add_observer(ConsoleLogObserver(console))

    linter.lint_many([("message", "feat: Add feature", None)])

    assert console.file.getvalue().strip() == "1 commit message(s) passed linting"


def test_file_observer(tmp_path, default_engine):
    """Test that lint results are written to the log file."""
    log_file = tmp_path / "logs" / "lint.log"
    linter = CommitLinter(default_engine, styler=lambda text: f"\x1b[31m{text}\x1b[0m")
    linter.add_observer(FileLogObserver(str(log_file)))

    linter.lint_many([
        ("abc1234", "feat: add feature.", None),
        ("def5678", "fix: Handle null", None),
    ])
    lines = log_file.read_text().splitlines()

    assert lines[0].endswith(" - Failed abc1234: feat: add feature.")
    assert lines[1].endswith(" - " + "  error: [subject:0] The subject must never end with a full stop")
    assert any(line.endswith(" - Passed def5678: fix: Handle null") for line in lines)
    assert lines[-1].endswith(" - Linted 2 commit message(s), 1 failed")
