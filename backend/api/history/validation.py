from __future__ import annotations

from history.errors import ContentValidationError

MAX_CONTENT_LENGTH = 280


def validate_content(content: str | None) -> str:
    """
    Returns the content unchanged if it may be saved.

    Raises ContentValidationError if it is empty or longer than
    MAX_CONTENT_LENGTH characters (code points, not bytes).
    """
    if not content:
        raise ContentValidationError("Content cannot be empty")
    if len(content) > MAX_CONTENT_LENGTH:
        raise ContentValidationError(f"Content too long (max {MAX_CONTENT_LENGTH} chars)")
    return content
