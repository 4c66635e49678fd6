"""Error taxonomy for the idea scoring flow.

Every failure is reported to the caller as ``{"error": message}`` with the
status code carried by the exception.
"""


class ScoringError(Exception):
    """Base exception for all scoring failures."""

    status_code: int = 500
    default_message: str = "Score failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidRequestError(ScoringError):
    """Idea missing or empty after trimming. No upstream call is made."""

    status_code = 400
    default_message = "Missing idea"


class UpstreamError(ScoringError):
    """Model service call failed; carries the upstream message verbatim."""


class EmptyOutputError(ScoringError):
    """Model replied without usable text."""

    default_message = "AI returned empty output"


class MalformedOutputError(ScoringError):
    """Model text is not valid JSON."""

    default_message = "AI returned invalid JSON"


class InvalidStructuredOutputError(ScoringError):
    """Parsed JSON is not an object."""

    default_message = "AI returned invalid structured output"


class IncompleteOutputError(ScoringError):
    """Summary or verdict empty after normalisation."""

    default_message = "AI returned incomplete structured output"
