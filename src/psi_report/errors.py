"""Exception hierarchy for the report service.

Every error is terminal for its request; nothing is retried.
"""

from __future__ import annotations


class ReportServiceError(Exception):
    """Base class. ``status_code`` is the HTTP status the API responds with."""

    status_code = 500
    default_message = "Internal error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class AuthenticationError(ReportServiceError):
    status_code = 401
    default_message = "Unauthorized"


class MethodNotAllowedError(ReportServiceError):
    status_code = 405
    default_message = "Method not allowed"


class ReportValidationError(ReportServiceError):
    """The request body is missing ``psiData.lighthouseResult`` or is malformed."""

    status_code = 400
    default_message = "Invalid PageSpeed data"


class ProcessingError(ReportServiceError):
    """Anything that failed while classifying, normalizing or rendering.

    The public message stays generic; ``cause`` keeps the original exception
    for logs and non-production responses.
    """

    status_code = 500
    default_message = "Failed to generate report"

    def __init__(self, message: str | None = None, *, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause
