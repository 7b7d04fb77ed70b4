"""SummaryResponse → Markdown file."""

from __future__ import annotations

import logging
from pathlib import Path

from ..core.models import GenerationResult, SummaryResponse

logger = logging.getLogger("gitstory.generators.markdown")


def render_markdown(response: SummaryResponse) -> str:
    """Render *response* as a Markdown document with a stats footer."""
    title = response.platform.value.title()
    return (
        f"# {title} Summary\n\n"
        f"{response.summary}\n\n"
        "---\n"
        "Generated by GitStory\n"
        f"Platform: {response.platform.value}\n"
        f"Stats: {response.stats_line()}\n"
    )


class MarkdownGenerator:
    """Writes a generated summary to a ``.md`` file."""

    def generate(self, response: SummaryResponse, output_path: str | Path) -> GenerationResult:
        path = Path(output_path)
        try:
            self._ensure_dir(path.parent)
            path.write_text(render_markdown(response), encoding="utf-8")
            logger.debug("Wrote %s summary to %s", response.platform.value, path)
            return GenerationResult(output_path=path)
        except OSError as exc:
            return GenerationResult(output_path=path, success=False, error=str(exc))

    @staticmethod
    def default_filename(response: SummaryResponse) -> str:
        """``gitstory_<platform>.md``"""
        return f"gitstory_{response.platform.value}.md"

    @staticmethod
    def _ensure_dir(path: Path) -> Path:
        path.mkdir(parents=True, exist_ok=True)
        return path
