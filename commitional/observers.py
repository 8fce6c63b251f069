"""Observer pattern for lint results."""

from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional

from rich.console import Console
from rich.text import Text

if TYPE_CHECKING:
    from .lint import LintResult


class LintObserver(ABC):
    """Abstract base class for lint observers."""

    @abstractmethod
    def on_commit_linted(self, result: "LintResult") -> None:
        """Called after each commit message is linted."""
        pass

    @abstractmethod
    def on_lint_completed(self, results: List["LintResult"]) -> None:
        """Called once every message of a run has been linted."""
        pass


class ConsoleLogObserver(LintObserver):
    """Observer that logs lint results to the console."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def on_commit_linted(self, result: "LintResult") -> None:
        if not result.reports:
            return

        self.console.print("---", style="dim")
        self.console.print(Text.from_ansi(str(result.commit)))
        self.console.print()

        errors = result.summary()
        if errors:
            self.console.print(Text(errors, style="red"))
        warnings = result.summary(warnings=True)
        if warnings:
            self.console.print(Text(warnings, style="yellow"))

    def on_lint_completed(self, results: List["LintResult"]) -> None:
        failed = [result for result in results if not result.valid]
        if failed:
            self.console.print(f"[red]{len(failed)} of {len(results)} commit message(s) failed linting[/red]")
        else:
            self.console.print(f"[green]{len(results)} commit message(s) passed linting[/green]")


class FileLogObserver(LintObserver):
    """Observer that logs lint results to a file."""

    def __init__(self, log_file: str):
        self.log_file = Path(log_file)
        # Ensure the parent directory exists
        self.log_file.parent.mkdir(parents=True, exist_ok=True)

    def _log(self, message: str) -> None:
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        with self.log_file.open("a", encoding="utf-8") as f:
            f.write(f"{timestamp} - {message}\n")

    def on_commit_linted(self, result: "LintResult") -> None:
        status = "Passed" if result.valid else "Failed"
        header = Text.from_ansi(str(result.commit.header)).plain
        self._log(f"{status} {result.source}: {header}")
        for error in result.errors:
            self._log(f"  error: {error}")
        for warning in result.warnings:
            self._log(f"  warning: {warning}")

    def on_lint_completed(self, results: List["LintResult"]) -> None:
        failed = sum(1 for result in results if not result.valid)
        self._log(f"Linted {len(results)} commit message(s), {failed} failed")
