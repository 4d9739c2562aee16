from synthrec.services.validation.schema_validator import (
    FieldError,
    ValidationFailure,
    ValidationOutcome,
    ValidationSuccess,
    format_validation_errors,
    response_format_for,
    validate_with_schema,
)

__all__ = [
    "FieldError",
    "ValidationFailure",
    "ValidationOutcome",
    "ValidationSuccess",
    "format_validation_errors",
    "response_format_for",
    "validate_with_schema",
]
