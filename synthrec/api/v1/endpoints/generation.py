from typing import Annotated, List, NoReturn

from fastapi import APIRouter, Depends, HTTPException, status

from synthrec.config import settings
from synthrec.core.exceptions import AppError, ConfigurationError, GenerationError
from synthrec.models.response import ErrorResponse
from synthrec.schemas.documents import GeneratedData, Individual, LabReport, MedicalHistory, VisitReport
from synthrec.schemas.generation import (
    GenerationOptions,
    LabReportsRequest,
    MedicalHistoryRequest,
    VisitReportsRequest,
)
from synthrec.services.generation.generation_service import GenerationService
from synthrec.utils.logging import get_logger

LOGGER = get_logger(__name__)

router = APIRouter()

ERROR_RESPONSES = {
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    status.HTTP_502_BAD_GATEWAY: {"model": ErrorResponse},
}


async def get_generation_service() -> GenerationService:
    return GenerationService.from_settings(settings)


def _raise_http_error(error: AppError) -> NoReturn:
    """Map a generation failure onto an HTTP error response."""
    cause = error.original_error if isinstance(error, GenerationError) else error
    if isinstance(cause, ConfigurationError) or isinstance(error, ConfigurationError):
        LOGGER.error(f"Generation is not configured: {error.message}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=error.message
        ) from error

    LOGGER.error(f"Generation failed: {error.message}", extra={"error_type": type(cause).__name__})
    raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=error.message) from error


@router.post(
    "/record",
    response_model=GeneratedData,
    responses=ERROR_RESPONSES,
    summary="Generate a complete synthetic record",
    operation_id="generate_record",
)
async def generate_record(
    options: GenerationOptions,
    service: Annotated[GenerationService, Depends(get_generation_service)],
) -> GeneratedData:
    """Generate every document for one synthetic individual."""
    try:
        return await service.generate_record(options)
    except AppError as e:
        _raise_http_error(e)


@router.post(
    "/individual",
    response_model=Individual,
    responses=ERROR_RESPONSES,
    summary="Generate patient demographics",
    operation_id="generate_individual",
)
async def generate_individual(
    service: Annotated[GenerationService, Depends(get_generation_service)],
) -> Individual:
    try:
        return await service.generate_individual()
    except AppError as e:
        _raise_http_error(e)


@router.post(
    "/medical-history",
    response_model=MedicalHistory,
    responses=ERROR_RESPONSES,
    summary="Generate a medical history",
    operation_id="generate_medical_history",
)
async def generate_medical_history(
    request: MedicalHistoryRequest,
    service: Annotated[GenerationService, Depends(get_generation_service)],
) -> MedicalHistory:
    try:
        return await service.generate_medical_history(request.complexity)
    except AppError as e:
        _raise_http_error(e)


@router.post(
    "/lab-reports",
    response_model=List[LabReport],
    responses=ERROR_RESPONSES,
    summary="Generate laboratory reports",
    operation_id="generate_lab_reports",
)
async def generate_lab_reports(
    request: LabReportsRequest,
    service: Annotated[GenerationService, Depends(get_generation_service)],
) -> List[LabReport]:
    """Generate one report per test type.

    Reports that fail are omitted, so the response may be shorter than
    the request.
    """
    try:
        return await service.generate_lab_reports(request.test_types, request.ordering_physician)
    except AppError as e:
        _raise_http_error(e)


@router.post(
    "/visit-reports",
    response_model=List[VisitReport],
    responses=ERROR_RESPONSES,
    summary="Generate visit reports",
    operation_id="generate_visit_reports",
)
async def generate_visit_reports(
    request: VisitReportsRequest,
    service: Annotated[GenerationService, Depends(get_generation_service)],
) -> List[VisitReport]:
    try:
        return await service.generate_visit_reports(request.number_of_visits, request.provider_name)
    except AppError as e:
        _raise_http_error(e)
