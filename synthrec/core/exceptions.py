"""Custom exception hierarchy."""

from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from synthrec.services.validation.schema_validator import FieldError


class AppError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ConfigurationError(AppError):
    """Raised when the model endpoint configuration is invalid or missing.

    Always fatal: raised before any network call and never retried.
    """
    pass


class ModelInvocationError(AppError):
    """Base exception for failures talking to the chat-completion endpoint."""
    pass


class TransportError(ModelInvocationError):
    """Raised when the endpoint cannot be reached or answers with an HTTP error."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(message, original_error=original_error)
        self.status_code = status_code


class EmptyResponseError(ModelInvocationError):
    """Raised when the model returns no choices or blank content."""
    pass


class MalformedResponseError(ModelInvocationError):
    """Raised when the model content is not a single JSON object."""
    pass


class ExhaustedRetriesError(ModelInvocationError):
    """Raised after every attempt failed; wraps the last underlying error."""

    def __init__(self, attempts: int, original_error: Optional[Exception] = None):
        detail = f": {original_error}" if original_error else ""
        super().__init__(
            f"Model invocation failed after {attempts} attempts{detail}",
            original_error=original_error,
        )
        self.attempts = attempts


class ValidationError(AppError):
    """Raised when input validation fails."""
    pass


class DocumentValidationError(ValidationError):
    """Raised when model output does not conform to a document schema.

    Attributes:
        document_name: Human readable document name (e.g. "patient")
        errors: Ordered list of FieldError values reported by the validator
    """

    def __init__(self, document_name: str, errors: List["FieldError"]):
        super().__init__(
            f"AI generated invalid {document_name} data: "
            + ", ".join(f"{error.path}: {error.message}" for error in errors)
        )
        self.document_name = document_name
        self.errors = list(errors)


class GenerationError(AppError):
    """Raised when a single-document generation cannot produce a valid result."""

    def __init__(self, document_name: str, original_error: Exception):
        super().__init__(
            f"{document_name} data generation failed: {original_error}",
            original_error=original_error,
        )
        self.document_name = document_name
