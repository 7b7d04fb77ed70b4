"""Orchestration pipeline: ties the history walker, diff extractor and providers together."""

from __future__ import annotations

import logging
import threading
from typing import Callable

from rich.console import Console
from rich.markup import escape

from .analysis.diff_extractor import DiffExtractor
from .analysis.digest import digest_commits
from .config import GitStoryConfig
from .core.models import (
    CommitRecord,
    CommitSummary,
    RepoInfo,
    SummarizeResult,
    SummaryRequest,
)
from .errors import NotAGitRepoError
from .generators.markdown_generator import MarkdownGenerator
from .git.backend import RepositoryBackend, open_repository
from .git.history import CommitHistoryWalker
from .llm.credentials import CredentialResolver, EnvironmentCredentialResolver
from .llm.providers import (
    CallContext,
    SummarizationProvider,
    create_provider,
    select_provider,
)

logger = logging.getLogger("gitstory.pipeline")

console = Console()

ProviderFactory = Callable[..., SummarizationProvider]


class Pipeline:
    """Commit history → summary pipeline.

    Usage::

        pipeline = Pipeline(GitStoryConfig(platform="blog", commit_count=3))
        result = pipeline.summarize()
        print(result.response.summary)

    The repository is opened on first use.  Pass *backend* to run
    against something other than the working copy at
    ``config.repo_path``, and *resolver* to supply credentials from
    somewhere other than the process environment.
    """

    def __init__(
        self,
        config: GitStoryConfig | None = None,
        *,
        backend: RepositoryBackend | None = None,
        resolver: CredentialResolver | None = None,
        provider_factory: ProviderFactory = create_provider,
        out: Console | None = None,
    ) -> None:
        self.config = config or GitStoryConfig()
        self.resolver = resolver or EnvironmentCredentialResolver()
        self.provider_factory = provider_factory
        self.console = out if out is not None else console
        self._backend = backend

    # ------------------------------------------------------------------
    # Repository
    # ------------------------------------------------------------------

    @property
    def backend(self) -> RepositoryBackend:
        if self._backend is None:
            self._backend = open_repository(self.config.repo_path)
        return self._backend

    @property
    def walker(self) -> CommitHistoryWalker:
        return CommitHistoryWalker(self.backend)

    def base_branch(self) -> str:
        """The configured base branch, or the detected one for ``auto``."""
        if self.config.detect_base_branch:
            detected = self.walker.detect_default_branch()
            logger.debug("Detected default branch '%s'", detected)
            return detected
        return self.config.base_branch

    def select_commits(self) -> list[CommitRecord]:
        """Newest-first commits chosen by ``commit_count`` / ``unique``."""
        n = self.config.count
        if self.config.unique:
            base = self.base_branch()
            self.console.print(
                f"[bold blue]🔍 Getting unique commits compared to[/] [bold]{escape(base)}[/bold]..."
            )
            return self.walker.list_unique_commits(base, n)
        self.console.print(f"[bold blue]🔍 Getting last {n} commit(s)...[/]")
        return self.walker.list_commits(n)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def list_commits(self) -> list[CommitRecord]:
        return self.select_commits()

    def analyze(self) -> tuple[list[CommitSummary], str]:
        """Per-commit summaries plus the plain-text digest of them."""
        commits = self.select_commits()
        summaries = self._extractor().summarize_commits(commits)
        return summaries, digest_commits(summaries)

    def status(self) -> RepoInfo:
        """Repository facts; a non-repository path is reported, not raised."""
        try:
            backend = self.backend
        except NotAGitRepoError as exc:
            logger.debug("Status check: %s", exc)
            return RepoInfo(path=str(self.config.repo_path), is_git_repo=False)
        return CommitHistoryWalker(backend).repo_info()

    def summarize(
        self, cancel_event: threading.Event | None = None,
    ) -> SummarizeResult | None:
        """Run the whole pipeline and return the result.

        Returns ``None`` when no commits match.  Any failure raises
        before anything is written; the Markdown file, if requested, is
        written only once a summary has been produced.
        """
        cfg = self.config
        platform = cfg.platform_enum

        commits = self.select_commits()
        if not commits:
            self.console.print("[dim]ℹ️  No commits found to summarize.[/]")
            return None

        summaries = self._extractor().summarize_commits(commits)
        self.console.print(f"[green]✓[/] Found {len(summaries)} commit(s) to summarize")

        provider_id = select_provider(cfg.provider, self.resolver)
        provider = self.provider_factory(
            provider_id,
            resolver=self.resolver,
            model=cfg.model,
            temperature=cfg.temperature,
        )
        self.console.print(
            f"[bold blue]🧠 Generating {platform.value} summary using[/] "
            f"[bold]{provider_id.value}[/bold] [dim]({provider.model})[/]"
        )

        request = SummaryRequest(
            commits=summaries,
            platform=platform,
            user_context=cfg.user_context,
        )
        context = CallContext(cancel_event=cancel_event, timeout=cfg.timeout)
        response = provider.summarize(context, request)

        if not response.meets_requirements():
            logger.warning(
                "Summary may not meet %s platform requirements (%s)",
                platform.value, response.stats_line(),
            )

        result = SummarizeResult(
            provider=provider_id,
            model=provider.model,
            commits=summaries,
            response=response,
        )
        if cfg.output_path is not None:
            result.output = MarkdownGenerator().generate(response, cfg.output_path)
            if result.output.success:
                self.console.print(f"[green]💾 Summary saved to[/] {result.output.output_path}")
            else:
                self.console.print(
                    f"[yellow]⚠️  Failed to save to file:[/] {result.output.error}"
                )
        return result

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _extractor(self) -> DiffExtractor:
        return DiffExtractor(self.backend, root_policy=self.config.root_policy)
