"""
Error taxonomy for the analysis handler.

Every error carries the HTTP status and the public message sent back to the
client as ``{"error": message}``.
"""

from typing import Optional


class AnalysisError(Exception):
    """Base class for errors that terminate an analysis request."""

    status_code: int = 500
    message: str = "Failed to analyze content"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.message
        super().__init__(self.message)


class InvalidRequestError(AnalysisError):
    """Missing, non-text or blank input."""

    status_code = 400
    message = "Please provide text to analyze"


class ConfigurationError(AnalysisError):
    """The AI gateway credential is not configured."""

    status_code = 500
    message = "AI service is not configured"


class RateLimitError(AnalysisError):
    """Upstream answered 429."""

    status_code = 429
    message = "Rate limit exceeded. Please try again later."


class QuotaExceededError(AnalysisError):
    """Upstream answered 402."""

    status_code = 402
    message = "AI service quota exceeded. Please try again later."


class UpstreamError(AnalysisError):
    """Any other upstream failure: non-success status or transport error."""

    status_code = 500
    message = "Failed to analyze content"


class InvalidResponseError(AnalysisError):
    """Upstream succeeded but returned no usable message text."""

    status_code = 500
    message = "Invalid AI response"
