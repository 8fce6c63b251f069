"""Lint commit messages against a rules engine and report to observers."""
import re
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Tuple

from .commit_message import BREAKING_EMOJI, CommitMessage
from .engine import RulesEngine
from .models import GitContext, PartReport
from .observers import LintObserver

SCISSORS = re.compile(r"^# -+ >8 -+$", re.MULTILINE)


def strip_comments(message: str) -> str:
    """Drop git's ``#`` comment lines and everything below a scissors line."""
    scissors = SCISSORS.search(message)
    if scissors:
        message = message[: scissors.start()]
    return "\n".join(line for line in message.split("\n") if not line.startswith("#"))


@dataclass
class LintResult:
    source: str
    commit: CommitMessage
    valid: bool
    reports: List[PartReport] = field(default_factory=list)

    @property
    def errors(self) -> List[str]:
        return [error for report in self.reports for error in report.errors]

    @property
    def warnings(self) -> List[str]:
        return [warning for report in self.reports for warning in report.warnings]

    def summary(self, warnings: bool = False) -> str:
        """Violations grouped by commit part, one ``- message`` per line."""
        sections = []
        for report in self.reports:
            messages = report.warnings if warnings else report.errors
            if not messages:
                continue
            title = f"{report.type} ({report.filter})" if report.filter else report.type
            sections.append("\n".join([title] + [f"- {message}" for message in messages]))
        return "\n\n".join(sections)


class CommitLinter:
    """Parses, checks and optionally repairs commit messages."""

    def __init__(
        self,
        rules_engine: RulesEngine,
        scope_delimiter: str = ",",
        breaking_emoji: str = BREAKING_EMOJI,
        styler: Optional[Callable[[str], str]] = None,
    ):
        self.rules_engine = rules_engine
        self.scope_delimiter = scope_delimiter
        self.breaking_emoji = breaking_emoji
        self.styler = styler
        self.observers: List[LintObserver] = []

    def add_observer(self, observer: LintObserver) -> None:
        """Add an observer to be notified of lint results."""
        self.observers.append(observer)

    def remove_observer(self, observer: LintObserver) -> None:
        """Remove an observer from the notification list."""
        self.observers.remove(observer)

    def lint(
        self,
        message: str,
        source: str = "message",
        context: Optional[GitContext] = None,
        attempt_fix: bool = False,
    ) -> LintResult:
        commit = CommitMessage.from_string(strip_comments(message), self.scope_delimiter, self.breaking_emoji)
        processed, valid, reports = commit.process(self.rules_engine, attempt_fix, context)

        if self.styler:
            processed.set_style(self.styler)
            for report in reports:
                if report.errors:
                    processed.style(report.type, report.filter)

        result = LintResult(source=source, commit=processed, valid=valid, reports=reports)
        for observer in self.observers:
            observer.on_commit_linted(result)
        return result

    def lint_many(
        self,
        messages: Iterable[Tuple[str, str, Optional[GitContext]]],
        attempt_fix: bool = False,
    ) -> List[LintResult]:
        """Lint ``(source, message, context)`` items and notify observers once done."""
        results = [self.lint(message, source, context, attempt_fix) for source, message, context in messages]
        for observer in self.observers:
            observer.on_lint_completed(results)
        return results
