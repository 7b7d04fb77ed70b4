"""Map file paths to language labels."""

from __future__ import annotations

import posixpath

_EXTENSIONS: dict[str, str] = {
    ".go": "Go",
    ".js": "JavaScript",
    ".ts": "TypeScript",
    ".py": "Python",
    ".java": "Java",
    ".c": "C",
    ".cpp": "C++",
    ".rs": "Rust",
    ".php": "PHP",
    ".rb": "Ruby",
    ".swift": "Swift",
    ".kt": "Kotlin",
    ".dart": "Dart",
    ".cs": "C#",
    ".scala": "Scala",
    ".clj": "Clojure",
    ".html": "HTML",
    ".css": "CSS",
    ".scss": "SCSS",
    ".sass": "Sass",
    ".sql": "SQL",
    ".sh": "Shell",
    ".yaml": "YAML",
    ".yml": "YAML",
    ".json": "JSON",
    ".xml": "XML",
    ".md": "Markdown",
    ".dockerfile": "Docker",
}

_FILENAMES: dict[str, str] = {
    "dockerfile": "Docker",
    "makefile": "Make",
}


def classify(path: str) -> str:
    """Return the language label for *path*, or ``""`` when unknown.

    The lower-cased extension is tried first, then the lower-cased base
    name for extension-less build files.
    """
    base = posixpath.basename(path.replace("\\", "/"))
    # A leading dot counts: ".go" has the extension ".go".
    ext = base[base.rfind("."):].lower() if "." in base else ""
    if ext in _EXTENSIONS:
        return _EXTENSIONS[ext]
    return _FILENAMES.get(base.lower(), "")
