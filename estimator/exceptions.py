"""
Domain exceptions. Routers translate these into HTTP responses.
"""


class EstimatorError(Exception):
    """Base class for estimator errors."""


class IncompleteConfigurationError(EstimatorError):
    """Raised when a draft still has unselected fields and cannot be estimated."""

    def __init__(self, missing: list[str]):
        self.missing = list(missing)
        super().__init__(
            f"Incomplete configuration — unselected fields: {', '.join(self.missing)}"
        )


class UnknownOptionError(EstimatorError, KeyError):
    """Raised when a lookup table has no entry for an option value."""

    def __init__(self, table: str, value):
        self.table = table
        self.value = value
        super().__init__(f"No {table} multiplier for option: {value!r}")

    def __str__(self):
        return self.args[0]


class UnsupportedDocumentError(EstimatorError, ValueError):
    """Raised for uploads whose extension we cannot read."""


class AIServiceError(EstimatorError):
    """Raised when the AI provider is unavailable or returns an error."""

    def __init__(self, message: str, status_code: int = 502):
        self.status_code = status_code
        super().__init__(message)


class AIRateLimitError(AIServiceError):
    """Raised when the AI provider rate-limits us (HTTP 429)."""

    def __init__(self, message: str = "Rate limit exceeded. Please try again later."):
        super().__init__(message, status_code=429)


class DocumentTooLargeError(EstimatorError, ValueError):
    """Raised for uploads over the MAX_UPLOAD_MB limit."""
