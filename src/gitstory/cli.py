"""gitstory CLI: turn recent commits into platform-tailored summaries."""

from __future__ import annotations

import functools
import logging
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from . import __version__
from .analysis.diff_extractor import RootCommitPolicy
from .config import DEFAULT_BASE_BRANCH, DEFAULT_COMMIT_COUNT, GitStoryConfig
from .core.models import CommitRecord, Platform, SummaryResponse
from .errors import GitStoryError
from .llm.platforms import SUPPORTED_PLATFORMS
from .llm.providers import SUPPORTED_PROVIDERS
from .pipeline import Pipeline

console = Console()

PLATFORM_ICONS = {
    Platform.BLOG: "📝",
    Platform.TWITTER: "🐦",
    Platform.LINKEDIN: "💼",
    Platform.TECHNICAL: "🔧",
    Platform.NOTE: "📋",
}


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _handle_errors(func):
    """Report ``GitStoryError`` as a red line and exit with status 1."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except GitStoryError as exc:
            console.print(f"[bold red]❌ {escape(str(exc))}[/]")
            raise SystemExit(1)

    return wrapper


def _selection_options(func):
    """Options shared by every command that picks commits."""
    func = click.option(
        "--base",
        default=DEFAULT_BASE_BRANCH,
        show_default=True,
        help="Base branch for --unique ('auto' detects main/master).",
    )(func)
    func = click.option(
        "--unique",
        is_flag=True,
        default=False,
        help="Only commits on the current branch that are not on --base.",
    )(func)
    func = click.option(
        "-n", "--number",
        type=int,
        default=DEFAULT_COMMIT_COUNT,
        show_default=True,
        help="Number of commits (values below 1 fall back to 5).",
    )(func)
    return func


def _subject(commit: CommitRecord) -> str:
    return escape(commit.subject)


# ══════════════════════════════════════════════════════════════════════════
# Commands
# ══════════════════════════════════════════════════════════════════════════


@click.group()
@click.version_option(version=__version__, prog_name="gitstory")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
@click.option(
    "--repo",
    "repo_path",
    type=click.Path(file_okay=False, path_type=Path),
    default=".",
    help="Path inside the git repository (default: current directory).",
)
@click.pass_context
def main(ctx: click.Context, verbose: bool, repo_path: Path):
    """gitstory: summarize your git history for blogs, socials and notes."""
    _setup_logging(verbose)
    ctx.obj = {"repo_path": repo_path}


@main.command(name="list")
@_selection_options
@click.pass_context
@_handle_errors
def list_cmd(ctx: click.Context, number: int, unique: bool, base: str):
    """List recent commits."""
    config = GitStoryConfig(
        repo_path=ctx.obj["repo_path"], commit_count=number, unique=unique, base_branch=base,
    )
    commits = Pipeline(config).list_commits()

    table = Table(title=f"Showing last {len(commits)} commit(s)", show_lines=False)
    table.add_column("Hash", style="bold cyan")
    table.add_column("Author")
    table.add_column("Date", style="dim")
    table.add_column("Message")
    for c in commits:
        table.add_row(
            c.short_hash,
            escape(c.author_name),
            c.authored_at.strftime("%d %b %y %H:%M %z"),
            _subject(c),
        )
    console.print(table)


@main.command()
@_selection_options
@click.pass_context
@_handle_errors
def analyze(ctx: click.Context, number: int, unique: bool, base: str):
    """Show per-commit change statistics and a short digest."""
    config = GitStoryConfig(
        repo_path=ctx.obj["repo_path"], commit_count=number, unique=unique, base_branch=base,
    )
    pipeline = Pipeline(config)
    summaries, digest = pipeline.analyze()

    branch = pipeline.walker.current_branch() or "(detached HEAD)"
    console.print(
        f"\n[bold]🔎 {len(summaries)} commit(s) on branch '{escape(branch)}'[/bold]"
    )
    table = Table(show_lines=False)
    table.add_column("Hash", style="bold cyan")
    table.add_column("Files", justify="right")
    table.add_column("+", justify="right", style="green")
    table.add_column("-", justify="right", style="red")
    table.add_column("Primary language")
    table.add_column("Languages", style="dim")
    for s in summaries:
        table.add_row(
            s.hash,
            str(s.stats.total_files),
            str(s.stats.additions),
            str(s.stats.deletions),
            s.stats.primary_language or "-",
            ", ".join(s.stats.languages),
        )
    console.print(table)
    console.print(Text(digest))


@main.command()
@_selection_options
@click.option(
    "--provider",
    type=click.Choice(SUPPORTED_PROVIDERS, case_sensitive=False),
    default=None,
    help="LLM provider (default: first with an API key set).",
)
@click.option(
    "--platform",
    default="technical",
    show_default=True,
    help=f"Target platform ({', '.join(SUPPORTED_PLATFORMS)}, or x).",
)
@click.option("--context", "user_context", default="", help="Extra context for the summary.")
@click.option(
    "-o", "--output",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also save the summary as Markdown to this file.",
)
@click.option("--model", default=None, help="Model name (default: provider's default).")
@click.option(
    "--root-commit",
    "root_commit_policy",
    type=click.Choice([p.value for p in RootCommitPolicy]),
    default=RootCommitPolicy.EMPTY_TREE.value,
    show_default=True,
    help="How to diff a commit without a parent.",
)
@click.option("--timeout", type=float, default=60.0, show_default=True, help="API timeout in seconds.")
@click.pass_context
@_handle_errors
def summarize(
    ctx: click.Context,
    number: int,
    unique: bool,
    base: str,
    provider: str | None,
    platform: str,
    user_context: str,
    output_path: Path | None,
    model: str | None,
    root_commit_policy: str,
    timeout: float,
):
    """Generate an AI summary of recent commits."""
    config = GitStoryConfig(
        repo_path=ctx.obj["repo_path"],
        commit_count=number,
        unique=unique,
        base_branch=base,
        platform=platform,
        provider=provider,
        model=model,
        user_context=user_context,
        output_path=output_path,
        root_commit_policy=root_commit_policy,
        timeout=timeout,
    )
    result = Pipeline(config).summarize()
    if result is None:
        return
    _display_summary(result.response)


def _display_summary(response: SummaryResponse) -> None:
    icon = PLATFORM_ICONS.get(response.platform, "✨")
    title = f"{icon} {response.platform.value.title()} Summary"
    console.print()
    console.print(Panel(Text(response.summary), title=title, expand=False))
    console.print(f"📊 {response.stats_line()}")
    if not response.meets_requirements():
        console.print(
            f"[yellow]⚠️  Summary may not meet {response.platform.value} platform requirements[/]"
        )


@main.command()
@click.pass_context
@_handle_errors
def status(ctx: click.Context):
    """Show repository path, branch, remote and commit count."""
    info = Pipeline(GitStoryConfig(repo_path=ctx.obj["repo_path"])).status()
    if not info.is_git_repo:
        console.print("[bold red]❌ Not a Git repository[/]")
        console.print(f"   Path: {escape(info.path)}")
        console.print("\n💡 Navigate to a Git repository or initialize one with 'git init'")
        raise SystemExit(1)

    console.print("[bold green]✅ Git Repository Found[/]")
    console.print(f"   📁 Path: {escape(info.path)}")
    console.print(f"   🌿 Branch: {escape(info.current_branch or '(none)')}")
    console.print(f"   🔗 Remote: {escape(info.remote_url or '(no remote configured)')}")
    console.print(f"   📊 Commits: {info.commit_count}")


@main.command()
def version():
    """Print the gitstory version."""
    console.print(f"gitstory {__version__}")


if __name__ == "__main__":
    main()
