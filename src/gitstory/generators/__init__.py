"""Output generators for finished summaries."""

from .markdown_generator import MarkdownGenerator, render_markdown  # noqa: F401
