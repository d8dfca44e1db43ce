"""Error taxonomy for the resume service.

Validation and not-found errors short-circuit a request with 400/404.
RenderError is caught at each call site and degrades the response payload.
StoreError is the only fatal class and maps to 500.
"""

from typing import List, Optional


class ResumeValidationError(Exception):
    """Raised when a create request lacks required personal or objective fields."""

    def __init__(self, message: str, missing_fields: Optional[List[str]] = None):
        self.message = message
        self.missing_fields = missing_fields or []
        super().__init__(message)


class ResumeNotFoundError(Exception):
    """Raised when no resume exists for the requested id."""

    def __init__(self, resume_id: str, message: str = "Resume not found"):
        self.resume_id = resume_id
        self.message = message
        super().__init__(f"{message}: {resume_id}")


class RenderError(Exception):
    """
    Raised when the HTML template or the PDF rasterization fails.

    Attributes:
        message: Error description
        original_error: The underlying Jinja2 / browser / weasyprint error
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        self.message = message
        self.original_error = original_error

        parts = [message]
        if original_error is not None:
            parts.append(f"{type(original_error).__name__}: {original_error}")
        super().__init__("\n".join(parts))


class StoreError(Exception):
    """Raised when the persistence layer fails."""

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        self.message = message
        self.original_error = original_error
        super().__init__(message if original_error is None else f"{message}: {original_error}")
