"""Unit tests for upstream error classification."""

import pytest

from relaychat.agent.errors import (
    RateLimitError,
    UpstreamError,
    classify_upstream_error,
    parse_retry_delay,
)


class ProviderError(Exception):
    """Stand-in for a provider exception carrying a status code."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TestParseRetryDelay:
    """Tests for extracting retry hints from error text."""

    @pytest.mark.parametrize(
        ("message", "expected"),
        [
            ("You exceeded your current quota. Please retry in 23.418s.", 23.418),
            ("429 RESOURCE_EXHAUSTED {'retryDelay': '17s'}", 17.0),
            ('{"@type": "RetryInfo", "retryDelay": "5s"}', 5.0),
            ("Please retry in 2 s", 2.0),
        ],
    )
    def test_parses_known_formats(self, message: str, expected: float) -> None:
        """Both Gemini hint formats are recognized."""
        assert parse_retry_delay(message) == expected

    def test_no_hint(self) -> None:
        """Messages without a hint give None."""
        assert parse_retry_delay("Internal error") is None


class TestClassifyUpstreamError:
    """Tests for classify_upstream_error."""

    def test_status_429_is_rate_limit(self) -> None:
        """A 429 status code means rate limited."""
        error = classify_upstream_error(ProviderError("Too much", status_code=429))

        assert isinstance(error, RateLimitError)
        assert error.retry_after is None

    def test_resource_exhausted_message_is_rate_limit(self) -> None:
        """Quota wording in the message means rate limited, with its delay."""
        error = classify_upstream_error(
            RuntimeError("RESOURCE_EXHAUSTED: quota exceeded. Please retry in 9s.")
        )

        assert isinstance(error, RateLimitError)
        assert error.retry_after == 9.0

    def test_google_style_code_attribute(self) -> None:
        """Errors exposing the status as .code are recognized."""
        exc = RuntimeError("Resource has been exhausted")
        exc.code = 429

        assert isinstance(classify_upstream_error(exc), RateLimitError)

    def test_other_errors_are_upstream_errors(self) -> None:
        """Non-quota failures keep their status code."""
        error = classify_upstream_error(ProviderError("Bad gateway", status_code=502))

        assert type(error) is UpstreamError
        assert error.status_code == 502
        assert str(error) == "Bad gateway"

    def test_rate_limit_passes_through(self) -> None:
        """An already classified rate limit is returned as is."""
        original = RateLimitError("quota", retry_after=4.0)

        assert classify_upstream_error(original) is original

    def test_plain_upstream_error_is_reclassified(self) -> None:
        """An UpstreamError with quota wording becomes a RateLimitError."""
        error = classify_upstream_error(UpstreamError("429 Too Many Requests"))

        assert isinstance(error, RateLimitError)

    def test_plain_upstream_error_kept(self) -> None:
        """An UpstreamError without quota wording is returned unchanged."""
        original = UpstreamError("safety block")

        assert classify_upstream_error(original) is original

    def test_empty_message_uses_class_name(self) -> None:
        """Exceptions without text still produce a message."""
        error = classify_upstream_error(ValueError())

        assert str(error) == "ValueError"

    @pytest.mark.parametrize(
        "message",
        ["token 14290 exceeds context window", "request 4291 failed", "id=a429b"],
    )
    def test_429_inside_other_numbers_is_not_rate_limit(self, message: str) -> None:
        """Only a standalone 429 counts as a rate-limit status."""
        error = classify_upstream_error(RuntimeError(message))

        assert type(error) is UpstreamError

    def test_standalone_429_in_message_is_rate_limit(self) -> None:
        """A bare 429 status in the text still means rate limited."""
        error = classify_upstream_error(RuntimeError("HTTP 429: slow down"))

        assert isinstance(error, RateLimitError)
