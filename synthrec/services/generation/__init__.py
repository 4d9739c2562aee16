from synthrec.services.generation.base_generator import BaseDocumentGenerator
from synthrec.services.generation.claim_generator import ClaimInfoGenerator
from synthrec.services.generation.generation_service import GenerationService
from synthrec.services.generation.individual_generator import IndividualGenerator
from synthrec.services.generation.insurance_generator import (
    SUBSCRIBER_OVERRIDE_PROBABILITY,
    InsuranceInfoGenerator,
)
from synthrec.services.generation.lab_report_generator import LabReportGenerator, LabReportsGenerator
from synthrec.services.generation.medical_history_generator import MedicalHistoryGenerator
from synthrec.services.generation.passport_generator import PassportGenerator
from synthrec.services.generation.provider_generator import ProviderGenerator
from synthrec.services.generation.record_generator import RecordGenerator
from synthrec.services.generation.visit_report_generator import (
    VisitReportGenerator,
    VisitReportsGenerator,
)
from synthrec.services.generation.w2_generator import W2Generator

__all__ = [
    "BaseDocumentGenerator",
    "ClaimInfoGenerator",
    "GenerationService",
    "IndividualGenerator",
    "InsuranceInfoGenerator",
    "LabReportGenerator",
    "LabReportsGenerator",
    "MedicalHistoryGenerator",
    "PassportGenerator",
    "ProviderGenerator",
    "RecordGenerator",
    "SUBSCRIBER_OVERRIDE_PROBABILITY",
    "VisitReportGenerator",
    "VisitReportsGenerator",
    "W2Generator",
]
