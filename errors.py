# errors.py

from typing import Optional


class DirectionsError(Exception):
    """Base class for failures that end a /directions request."""
    http_status = 500


class ValidationError(DirectionsError):
    http_status = 400


class GeminiError(RuntimeError):
    """Raised by GeminiAgent when the model call fails or returns no text."""


class ExtractionError(DirectionsError):
    pass


class FormattingError(DirectionsError):
    pass


class RouteFetchError(DirectionsError):
    NOT_FOUND_STATUSES = ("NOT_FOUND", "ZERO_RESULTS")

    def __init__(self, status: str, message: Optional[str] = None):
        self.status = status
        detail = f"Invalid response: {status}"
        if message:
            detail = f"{detail} ({message})"
        super().__init__(detail)

    @property
    def not_found(self) -> bool:
        return self.status in self.NOT_FOUND_STATUSES

    @property
    def http_status(self) -> int:
        return 404 if self.not_found else 500
