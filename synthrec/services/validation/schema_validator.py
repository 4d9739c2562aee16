"""Schema validation for raw model output.

Raw output is checked against a document schema in strict mode and never
mutated. Failures are reported as a list of ``FieldError`` entries whose paths
use wire names, e.g. ``address.state`` or ``serviceLines.0.charges``.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Sequence, Type, TypeVar, Union

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

T = TypeVar("T", bound=BaseModel)


@dataclass(frozen=True)
class FieldError:
    """One schema violation.

    Attributes:
        path: Dotted path to the offending field ("" for the document root)
        message: Human-readable description of the violation
    """

    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


@dataclass(frozen=True)
class ValidationSuccess(Generic[T]):
    value: T
    ok: bool = field(default=True, init=False)


@dataclass(frozen=True)
class ValidationFailure:
    errors: List[FieldError]
    ok: bool = field(default=False, init=False)


ValidationOutcome = Union[ValidationSuccess, ValidationFailure]


def _path_from_loc(loc: Sequence[Union[str, int]]) -> str:
    return ".".join(str(part) for part in loc)


def field_errors_from(error: PydanticValidationError) -> List[FieldError]:
    """Convert a pydantic ValidationError into FieldError entries."""
    return [
        FieldError(path=_path_from_loc(err.get("loc", ())), message=err.get("msg", "invalid value"))
        for err in error.errors(include_url=False)
    ]


def validate_with_schema(schema_model: Type[T], raw: Any) -> ValidationOutcome:
    """Validate raw model output against a document schema.

    Args:
        schema_model: Document schema class
        raw: Parsed JSON value (normally a dict keyed by wire names)

    Returns:
        ValidationSuccess carrying the typed document, or ValidationFailure
        listing every violated field
    """
    try:
        value = schema_model.model_validate(raw, strict=True)
    except PydanticValidationError as e:
        return ValidationFailure(errors=field_errors_from(e))
    return ValidationSuccess(value=value)


def format_validation_errors(errors: Sequence[FieldError]) -> List[str]:
    """Render FieldErrors as ``"path: message"`` strings."""
    return [str(error) for error in errors]


def response_format_for(schema_model: Type[BaseModel]) -> Dict[str, Any]:
    """Build a structured-output hint for a chat completion request.

    The hint is advisory; the returned document is still validated with
    ``validate_with_schema``.
    """
    return {
        "type": "json_schema",
        "json_schema": {
            "name": schema_model.__name__,
            "schema": schema_model.model_json_schema(by_alias=True),
            "strict": False,
        },
    }
