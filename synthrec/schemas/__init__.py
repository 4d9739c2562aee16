"""Document schemas and generation inputs."""

from synthrec.schemas.documents import (
    LAB_TEST_TYPES,
    ClaimInfo,
    GeneratedData,
    Individual,
    InsuranceInfo,
    LabReport,
    MedicalHistory,
    Passport,
    Provider,
    VisitReport,
    W2,
)
from synthrec.schemas.generation import Complexity, GenerationOptions, GenerationRequest

__all__ = [
    "LAB_TEST_TYPES",
    "ClaimInfo",
    "Complexity",
    "GeneratedData",
    "GenerationOptions",
    "GenerationRequest",
    "Individual",
    "InsuranceInfo",
    "LabReport",
    "MedicalHistory",
    "Passport",
    "Provider",
    "VisitReport",
    "W2",
]
