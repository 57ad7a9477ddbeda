"""Upstream model error types and classification.

Gemini reports quota exhaustion as a 429 / RESOURCE_EXHAUSTED error whose
message text embeds the suggested wait, e.g. ``Please retry in 23.41s`` or
``'retryDelay': '23s'``. Everything else is a plain upstream failure.
"""

import re

_RETRY_IN_PATTERN = re.compile(r"retry in\s+(\d+(?:\.\d+)?)\s*s", re.IGNORECASE)
_RETRY_DELAY_PATTERN = re.compile(
    r"""["']?retryDelay["']?\s*[:=]\s*["']?(\d+(?:\.\d+)?)s""", re.IGNORECASE
)
_STATUS_429_PATTERN = re.compile(r"\b429\b")
_RATE_LIMIT_MARKERS = ("resource_exhausted", "quota", "rate limit", "too many requests")


class UpstreamError(Exception):
    """Raised when the upstream model call fails."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class RateLimitError(UpstreamError):
    """Raised when the upstream model rejects a call for rate or quota reasons."""

    def __init__(
        self,
        message: str,
        retry_after: float | None = None,
        status_code: int | None = 429,
    ) -> None:
        super().__init__(message, status_code=status_code)
        self.retry_after = retry_after


def parse_retry_delay(text: str) -> float | None:
    """Extract the server-suggested retry delay in seconds from an error message.

    Args:
        text: Error message text from the upstream API.

    Returns:
        Delay in seconds, or None if the message carries no hint.
    """
    for pattern in (_RETRY_IN_PATTERN, _RETRY_DELAY_PATTERN):
        match = pattern.search(text)
        if match:
            return float(match.group(1))
    return None


def is_rate_limit(message: str, status_code: int | None = None) -> bool:
    if status_code == 429:
        return True
    if _STATUS_429_PATTERN.search(message):
        return True
    lowered = message.lower()
    return any(marker in lowered for marker in _RATE_LIMIT_MARKERS)


def classify_upstream_error(exc: BaseException) -> UpstreamError:
    """Convert an arbitrary upstream exception into an UpstreamError.

    Args:
        exc: Exception raised by the model provider or the agent runtime.

    Returns:
        RateLimitError for quota/429 failures, UpstreamError otherwise.
    """
    if isinstance(exc, RateLimitError):
        return exc

    message = str(exc) or exc.__class__.__name__
    status_code = getattr(exc, "status_code", None) or getattr(exc, "code", None)
    if not isinstance(status_code, int):
        status_code = None

    if is_rate_limit(message, status_code):
        return RateLimitError(message, retry_after=parse_retry_delay(message))
    if isinstance(exc, UpstreamError):
        return exc
    return UpstreamError(message, status_code=status_code)
