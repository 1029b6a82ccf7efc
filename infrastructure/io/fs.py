"""Filesystem utility functions."""

from pathlib import Path


def ensure_exists(path: Path, what: str) -> None:
    """
    Check that a path exists, raise FileNotFoundError if not.

    Args:
        path: Path to check
        what: Description of what this path represents (for error message)
    """
    if not path.exists():
        raise FileNotFoundError(f"Missing {what} at: {path}")


def read_text(path: Path) -> str:
    """Read a UTF-8 prompt file, dropping surrounding whitespace and line breaks inside it."""
    text = path.read_text(encoding="utf-8").strip()
    return " ".join(line.strip() for line in text.splitlines() if line.strip())
