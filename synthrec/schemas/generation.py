"""Generation inputs: cache request identity and record options."""

from dataclasses import dataclass, field
from typing import Any, List, Literal, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from synthrec.schemas.documents import LabTestType

Complexity = Literal["low", "medium", "high"]


@dataclass(frozen=True)
class GenerationRequest:
    """Identity of one logical generation call.

    Only used to derive a cache key; never persisted on its own.

    Attributes:
        generator_name: Stable name of the generator (e.g. "generate_w2")
        parameters: Ordered identifying parameters
    """

    generator_name: str
    parameters: Tuple[Any, ...] = field(default_factory=tuple)


class RequestModel(BaseModel):
    """Base for camelCase API/option payloads."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GenerationOptions(RequestModel):
    """Options for generating one complete synthetic record."""

    complexity: Complexity = Field(default="medium", description="Medical complexity level")
    number_of_visits: int = Field(default=1, ge=1, description="Number of visits to generate")
    number_of_lab_tests: int = Field(default=2, ge=1, description="Number of lab tests to generate")
    include_secondary_insurance: bool = Field(
        default=False, description="Whether to include secondary insurance"
    )


class MedicalHistoryRequest(RequestModel):
    complexity: Complexity = Field(default="medium", description="Medical complexity level")


class LabReportsRequest(RequestModel):
    test_types: List[LabTestType] = Field(..., min_length=1, description="Lab test types to generate")
    ordering_physician: str = Field(..., min_length=1, description="Ordering physician name")


class VisitReportsRequest(RequestModel):
    number_of_visits: int = Field(default=1, ge=1, description="Number of visits to generate")
    provider_name: str = Field(..., min_length=1, description="Provider name")
