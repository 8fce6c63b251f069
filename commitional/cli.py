#!/usr/bin/env python3
import os
from pathlib import Path
from typing import Any, List, Optional

import click
from git.exc import InvalidGitRepositoryError, NoSuchPathError
from rich.console import Console
from rich.markdown import Markdown

from .config import DEFAULT_CONFIG_FILENAME, Config
from .context import GitContextProvider
from .engine import RulesEngine
from .lint import CommitLinter, LintResult
from .models import GitContext
from .observers import ConsoleLogObserver, FileLogObserver

console = Console()


def highlight(text: str) -> str:
    """Mark a failing part of a commit message for terminal output."""
    return click.style(text, fg="red", bold=True, underline=True)


def staged_context(repo_path: Path) -> Optional[GitContext]:
    """Staged files of the repository, or None outside a git repository."""
    try:
        return GitContextProvider(repo_path).staged()
    except (InvalidGitRepositoryError, NoSuchPathError):
        console.print("[yellow]Warning: Not a git repository, namespace alignment is not checked[/yellow]")
        return None


@click.group(invoke_without_command=True)
@click.option("--version", is_flag=True, help="Display version information and exit")
@click.pass_context
def main(ctx: click.Context, version: bool):
    """
    Lint and repair conventional commit messages.

    Rules are configured in .commitional.toml in the repository root,
    for example:

    \b
    [commitional.rules]
    "subject-max-length" = [2, "always", 60]
    """
    if version:
        from .version import display_version_info

        display_version_info()
        return

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@main.command()
@click.argument("target", required=False)
@click.option(
    "-p",
    "--path",
    default=".",
    help="Path to git repository (defaults to current directory)",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
)
@click.option(
    "--fix",
    is_flag=True,
    help="Repair what can be repaired and write the message back to the message file",
)
@click.option(
    "-l",
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Optional file to log lint results (overrides config setting)",
)
@click.option(
    "--no-context",
    is_flag=True,
    help="Don't read changed files from git (skips namespace alignment)",
)
@click.pass_context
def lint(
    ctx: click.Context,
    target: Optional[str],
    path: Path,
    fix: bool,
    log_file: Optional[Path],
    no_context: bool,
):
    """
    Lint a commit message file, a revision or a revision range.

    TARGET defaults to .git/COMMIT_EDITMSG, which makes this usable as a
    commit-msg hook. Anything that isn't an existing file is read as a
    revision (abc1234) or range (main..HEAD).
    """
    repo_path = path.absolute()
    results: List[LintResult] = []

    try:
        config = Config.load(repo_path)
        engine = RulesEngine.from_rules(config.resolved_rules(repo_path))

        linter = CommitLinter(
            engine,
            scope_delimiter=config.scope_delimiter,
            breaking_emoji=config.breaking_emoji,
            styler=highlight,
        )
        linter.add_observer(ConsoleLogObserver(console))

        log_file_path = log_file or config.get_log_file()
        if log_file_path:
            linter.add_observer(FileLogObserver(str(log_file_path)))

        message_file = Path(target) if target else repo_path / ".git" / "COMMIT_EDITMSG"

        if message_file.is_file():
            context = None if no_context else staged_context(repo_path)
            message = message_file.read_text(encoding="utf-8")
            results = linter.lint_many([(str(message_file), message, context)], attempt_fix=fix)

            if fix:
                repaired = results[0].commit.unstyle().to_string()
                message_file.write_text(f"{repaired}\n", encoding="utf-8")
                console.print(f"[green]Wrote repaired message to {message_file}[/green]")
        elif target:
            provider = GitContextProvider(repo_path)
            if fix:
                console.print("[yellow]--fix only applies to message files, revisions are linted as is[/yellow]")
            items = [
                (sha[:7], message, None if no_context else provider.for_commit(sha))
                for sha, message in provider.messages(target)
            ]
            results = linter.lint_many(items)
        else:
            console.print(f"[red]Error: No commit message file at {message_file}[/red]")
            raise click.Abort()
    except click.Abort:
        raise
    except Exception as e:
        console.print(f"[red]Error: {str(e)}[/red]")
        raise click.Abort()

    if not all(result.valid for result in results):
        ctx.exit(1)


@main.command()
@click.option(
    "-p",
    "--path",
    default=".",
    help="Path to git repository (defaults to current directory)",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
)
@click.option("--raw", is_flag=True, help="Print markdown source instead of rendering it")
def describe(path: Path, raw: bool):
    """Describe the commit message standard the configured rules enforce."""
    try:
        description = RulesEngine.from_config(path.absolute()).describe()
    except Exception as e:
        console.print(f"[red]Error: {str(e)}[/red]")
        raise click.Abort()

    if raw:
        click.echo(description)
    else:
        console.print(Markdown(description))


@main.command()
@click.option(
    "-p",
    "--path",
    default=".",
    help="Path to git repository (defaults to current directory)",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
)
@click.option("--list", "list_settings", is_flag=True, help="Display current configuration settings")
@click.option("--init", is_flag=True, help="Create a config file with default values")
def config(path: Path, list_settings: bool, init: bool):
    """Show or create the commitional configuration."""
    repo_path = path.absolute()
    config_path = repo_path / DEFAULT_CONFIG_FILENAME

    if init:
        if config_path.exists():
            console.print(f"[yellow]Config file already exists:[/yellow] {config_path}")
        else:
            Config().save(repo_path)
            console.print(f"[green]Created new config file with default values:[/green] {config_path}")
        return

    if not list_settings:
        console.print(f"[green]Config file location:[/green] {str(config_path).replace(os.sep, '/')}")
        return

    settings = Config.load(repo_path)
    source = "config" if config_path.exists() else "default"

    console.print("\n[bold]Current Configuration Settings:[/bold]")
    if config_path.exists():
        console.print(f"[dim]Config file: {str(config_path).replace(os.sep, '/')}[/dim]")
    else:
        console.print("[dim]Using default values (no config file found)[/dim]")

    console.print(f"\n{'Setting':<24} {'Value':<20} {'Source':<10}")
    console.print("-" * 54)

    def print_setting(name: str, value: Any):
        console.print(f"{name:<24} {str(value):<20} {source:<10}", markup=False)

    print_setting("enable_multiple_scopes", settings.enable_multiple_scopes)
    print_setting("scope_delimiter", settings.scope_delimiter)
    print_setting("breaking_emoji", settings.breaking_emoji)
    print_setting("always_log", settings.always_log)
    print_setting("log_file", settings.log_file or "None")

    console.print("\n[bold]Rules:[/bold]")
    for rule_id, entry in settings.resolved_rules(repo_path).items():
        console.print(f"{rule_id:<24} {entry}", markup=False)

    console.print(
        f"\nTo modify these settings, create or edit {DEFAULT_CONFIG_FILENAME} in your repository root"
    )


if __name__ == "__main__":
    main()
