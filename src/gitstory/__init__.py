"""gitstory: turn commit history into platform-tailored summaries."""

__version__ = "0.1.0"
