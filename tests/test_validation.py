"""Tests for submitted content validation."""

import pytest

from history.errors import ContentValidationError
from history.validation import MAX_CONTENT_LENGTH, validate_content


def test_accepts_bounds():
    assert validate_content("x") == "x"
    assert validate_content("x" * MAX_CONTENT_LENGTH) == "x" * 280


def test_rejects_empty():
    with pytest.raises(ContentValidationError, match="Content cannot be empty"):
        validate_content("")


def test_rejects_none():
    with pytest.raises(ContentValidationError, match="Content cannot be empty"):
        validate_content(None)


def test_rejects_too_long():
    with pytest.raises(ContentValidationError) as exc:
        validate_content("x" * 281)
    assert str(exc.value) == "Content too long (max 280 chars)"


def test_counts_characters_not_bytes():
    """280 multi-byte characters are still 280 characters."""
    assert validate_content("é" * 280) == "é" * 280
    with pytest.raises(ContentValidationError):
        validate_content("☕" * 281)


def test_whitespace_is_content():
    assert validate_content(" ") == " "


def test_is_a_value_error():
    with pytest.raises(ValueError):
        validate_content("")
