"""Text normalization for extracted CV content."""

import re

# Control characters except LF and CR; those are folded by the whitespace pass
_CONTROL_CHARS = re.compile(r"[\x00-\x09\x0b\x0c\x0e-\x1f\x7f]")
_WHITESPACE = re.compile(r"\s+")
_STORAGE_UNSAFE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")


def clean_text(text: str) -> str:
    """Replace control characters with spaces and collapse all whitespace runs."""
    if not text:
        return ""
    text = _CONTROL_CHARS.sub(" ", str(text))
    return _WHITESPACE.sub(" ", text).strip()


def word_count(text: str) -> int:
    """Number of whitespace-separated tokens."""
    if not text:
        return 0
    return len(text.split())


def sanitize_for_storage(text: str) -> str:
    """Drop NUL bytes and control characters PostgreSQL text columns reject."""
    if not text:
        return ""
    return _STORAGE_UNSAFE.sub("", text.replace("\x00", "")).strip()
