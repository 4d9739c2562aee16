"""Pytest configuration and shared fixtures."""

import json
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest
from fastapi.testclient import TestClient

from synthrec.core.llm_client import AzureOpenAIConfig, ChatCompletionClient
from synthrec.main import app
from synthrec.schemas.documents import Individual, InsuranceInfo, Provider
from synthrec.services.cache.cache_store import CacheConfig, CacheStore


@pytest.fixture
def test_client() -> TestClient:
    """Create FastAPI test client.

    Returns:
        TestClient: FastAPI test client instance
    """
    return TestClient(app)


@pytest.fixture(autouse=True)
def clear_dependency_overrides():
    """Ensure FastAPI dependency overrides are reset between tests."""
    app.dependency_overrides = {}
    yield
    app.dependency_overrides = {}


# =============================================================================
# Model endpoint stubs
# =============================================================================
class FakeClock:
    """Settable epoch-millisecond clock."""

    def __init__(self, now_ms: int = 1_700_000_000_000):
        self.now_ms = now_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, ms: int) -> None:
        self.now_ms += ms


class RecordingSleep:
    """Awaitable sleep replacement that records requested delays."""

    def __init__(self):
        self.delays: List[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


class ScriptedEndpoint:
    """httpx handler replaying scripted outcomes; the last one repeats.

    Each outcome is an httpx.Response, an exception to raise, a dict to send
    back as JSON message content, or a raw content string.
    """

    def __init__(self, outcomes: List[Any]):
        self.outcomes = list(outcomes)
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        index = min(len(self.requests) - 1, len(self.outcomes) - 1)
        outcome = self.outcomes[index]

        if isinstance(outcome, Exception):
            raise outcome
        if isinstance(outcome, httpx.Response):
            # Fresh copy so a repeated outcome is never read twice.
            return httpx.Response(
                outcome.status_code, headers=outcome.headers, content=outcome.content
            )
        return httpx.Response(200, json=chat_completion(outcome))


def chat_completion(content: Any) -> Dict[str, Any]:
    """Build a chat-completion body whose first message carries ``content``."""
    text = json.dumps(content) if isinstance(content, (dict, list)) else content
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "choices": [{"index": 0, "message": {"role": "assistant", "content": text}}],
    }


@pytest.fixture
def scripted_endpoint() -> Callable[[List[Any]], ScriptedEndpoint]:
    """Factory for ScriptedEndpoint handlers."""
    return ScriptedEndpoint


@pytest.fixture
def azure_config() -> AzureOpenAIConfig:
    return AzureOpenAIConfig(
        endpoint="https://synthrec-test.openai.azure.com/",
        api_key="test-api-key",
        deployment_name="gpt-test",
        api_version="2025-04-01-preview",
    )


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def make_llm_client(
    azure_config: AzureOpenAIConfig, recording_sleep: RecordingSleep
) -> Callable[..., ChatCompletionClient]:
    """Factory for a ChatCompletionClient backed by a ScriptedEndpoint."""

    def _make(endpoint: ScriptedEndpoint, config: Optional[AzureOpenAIConfig] = None, **kwargs):
        return ChatCompletionClient(
            config or azure_config,
            transport=httpx.MockTransport(endpoint),
            sleep=recording_sleep,
            **kwargs,
        )

    return _make


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache_store(tmp_path, clock: FakeClock) -> CacheStore:
    return CacheStore(CacheConfig(directory=tmp_path / "ai-data"), clock=clock)


# =============================================================================
# Document payloads (wire format, as the model returns them)
# =============================================================================
def _address(street: str = "12 Oak St", city: str = "Springfield", state: str = "IL") -> Dict[str, Any]:
    return {"street": street, "city": city, "state": state, "zipCode": "62701", "country": "USA"}


@pytest.fixture
def individual_payload() -> Dict[str, Any]:
    return {
        "id": "pt-0001",
        "firstName": "Jane",
        "lastName": "Doe",
        "middleInitial": "Q",
        "dateOfBirth": "04/12/1985",
        "age": 40,
        "gender": "Female",
        "address": _address(),
        "contact": {
            "phone": "(217) 555-0134",
            "email": "jane.doe@example.com",
            "emergencyContact": "John Doe (217) 555-0199",
        },
        "pharmacy": {
            "name": "Main Street Pharmacy",
            "address": "100 Main St, Springfield, IL 62701",
            "phone": "(217) 555-0100",
        },
        "medicalRecordNumber": "MRN-448812",
        "ssn": "123-45-6789",
        "accountNumber": "ACC-99812",
        "companyName": "Acme Widgets LLC",
        "employerEIN": "12-3456789",
        "employerAddress": {**_address("400 Factory Rd"), "country": None},
        "employerIndustry": "Manufacturing",
        "employerPhone": "(217) 555-0150",
    }


@pytest.fixture
def provider_payload() -> Dict[str, Any]:
    return {
        "name": "Dr. Alan Grant, MD",
        "npi": "1234567890",
        "specialty": "Family Medicine",
        "phone": "(217) 555-0200",
        "address": _address("1 Clinic Way"),
        "taxId": "98-7654321",
        "taxIdType": "EIN",
        "signature": "Alan Grant",
        "facilityName": "Springfield Family Clinic",
        "facilityAddress": _address("1 Clinic Way"),
        "facilityPhone": "(217) 555-0201",
        "facilityFax": "(217) 555-0202",
        "facilityNPI": "1098765432",
        "billingName": "Springfield Family Clinic Billing",
        "billingAddress": "1 Clinic Way, Springfield, IL 62701",
        "billingPhone": "(217) 555-0203",
        "billingNPI": "1098765433",
        "referringProvider": {"name": "Dr. Ellie Sattler", "qualifier": "DN", "npi": "1112223334"},
    }


@pytest.fixture
def insurance_payload() -> Dict[str, Any]:
    return {
        "primaryInsurance": {
            "provider": "Blue Cross Blue Shield",
            "policyNumber": "POL-55512",
            "groupNumber": "GRP-100",
            "effectiveDate": "2025-01-01",
            "memberId": "MEM-7781",
            "copay": "$20",
            "deductible": "$1000",
        },
        "secondaryInsurance": None,
        "subscriberFirstName": "Robert",
        "subscriberLastName": "Smith",
        "subscriberDOB": "09/30/1979",
        "subscriberGender": "Male",
        "insuranceType": "Group",
        "picaCode": None,
        "phone": "(312) 555-0777",
        "address": _address("77 Lake Shore Dr", "Chicago", "IL"),
        "secondaryInsured": None,
    }


@pytest.fixture
def claim_payload() -> Dict[str, Any]:
    return {
        "patientRelationship": "self",
        "signatureDate": "03/01/2025",
        "providerSignatureDate": "03/01/2025",
        "dateOfIllness": "02/20/2025",
        "serviceDate": "03/01/2025",
        "illnessQualifier": "431",
        "otherDate": "",
        "otherDateQualifier": "",
        "unableToWorkFrom": "",
        "unableToWorkTo": "",
        "hospitalizationFrom": "",
        "hospitalizationTo": "",
        "additionalInfo": "",
        "outsideLab": False,
        "outsideLabCharges": None,
        "diagnosisCodes": ["E11.9", "I10"],
        "resubmissionCode": None,
        "originalRefNo": None,
        "priorAuthNumber": None,
        "serviceLines": [
            {
                "dateFrom": "03/01/2025",
                "dateTo": "03/01/2025",
                "placeOfService": "11",
                "emg": "",
                "procedureCode": "99214",
                "modifier": "",
                "diagnosisPointer": "A",
                "charges": "150.00",
                "units": "1",
                "epsdt": "",
                "idQual": "NPI",
                "renderingProviderNPI": "1234567890",
            }
        ],
        "hasOtherHealthPlan": False,
        "otherClaimId": "",
        "acceptAssignment": True,
        "totalCharges": "150.00",
        "amountPaid": "0.00",
    }


@pytest.fixture
def medical_history_payload() -> Dict[str, Any]:
    return {
        "medications": {
            "current": [
                {
                    "name": "Metformin",
                    "strength": "500mg",
                    "dosage": "Take 1 tablet twice daily",
                    "purpose": "Type 2 diabetes",
                    "prescribedBy": "Dr. Alan Grant, MD",
                    "startDate": "06/15/2020",
                    "instructions": "Take with meals",
                }
            ],
            "discontinued": [
                {
                    "name": "Lisinopril",
                    "strength": "10mg",
                    "reason": "Persistent cough",
                    "discontinuedDate": "01/10/2022",
                    "prescribedBy": "Dr. Alan Grant, MD",
                }
            ],
        },
        "allergies": [
            {
                "allergen": "Penicillin",
                "reaction": "Rash",
                "severity": "Moderate",
                "dateIdentified": "05/02/2001",
            }
        ],
        "chronicConditions": [
            {
                "condition": "Type 2 Diabetes",
                "diagnosedDate": "06/15/2020",
                "status": "Controlled",
                "notes": "Managed with metformin",
            }
        ],
        "surgicalHistory": [],
        "familyHistory": [
            {
                "relation": "Mother",
                "conditions": ["Hypertension"],
                "ageAtDeath": "Living",
                "causeOfDeath": "N/A",
            }
        ],
    }


@pytest.fixture
def w2_payload() -> Dict[str, Any]:
    return {
        "taxYear": "2024",
        "wages": "68000.00",
        "federalIncomeTaxWithheld": "10200.00",
        "socialSecurityWages": "68000.00",
        "socialSecurityTaxWithheld": "4216.00",
        "medicareWages": "68000.00",
        "medicareTaxWithheld": "986.00",
        "socialSecurityTips": None,
        "allocatedTips": None,
        "dependentCareBenefits": None,
        "nonqualifiedPlans": None,
        "box12Codes": [{"code": "D", "amount": "3400.00"}],
        "statutoryEmployee": False,
        "retirementPlan": True,
        "thirdPartySickPay": False,
        "stateWages": "68000.00",
        "stateIncomeTax": "3366.00",
        "localWages": None,
        "localIncomeTax": None,
        "localityName": None,
        "controlNumber": None,
    }


@pytest.fixture
def passport_payload() -> Dict[str, Any]:
    return {
        "passportNumber": "561234567",
        "issuanceDate": "2019-05-14",
        "expiryDate": "2029-05-13",
        "authority": "United States Department of State",
        "mrzLine1": "P<USADOE<<JANE<<<<<<<<<<<<<<<<<<<<<<<<<<<<<<",
        "mrzLine2": "5612345671USA8504128F2905134<<<<<<<<<<<<<<06",
        "endorsements": None,
    }


@pytest.fixture
def lab_report_payload() -> Dict[str, Any]:
    return {
        "testType": "CBC",
        "testName": "Complete Blood Count",
        "specimenType": "Blood",
        "specimenCollectionDate": "03/02/2025",
        "specimenCollectionTime": "08:15",
        "specimenReceivedDate": "03/02/2025",
        "reportDate": "03/03/2025",
        "reportTime": "10:30",
        "orderingPhysician": "Dr. Alan Grant, MD",
        "performingLab": {
            "name": "Prairie Diagnostics",
            "address": _address("9 Lab Ln"),
            "phone": "(217) 555-0300",
            "cliaNumber": "14D0000000",
            "director": "Dr. Ian Malcolm",
        },
        "results": [
            {
                "parameter": "Hemoglobin",
                "value": "13.5",
                "unit": "g/dL",
                "referenceRange": "12.0-15.5",
                "flag": "Normal",
                "notes": None,
            }
        ],
        "interpretation": None,
        "comments": None,
        "criticalValues": None,
        "technologist": "R. Arnold",
        "pathologist": None,
    }


@pytest.fixture
def visit_report_payload() -> Dict[str, Any]:
    return {
        "visit": {
            "date": "02/01/2025",
            "type": "Follow-up",
            "chiefComplaint": "Diabetes follow-up",
            "assessment": ["Type 2 diabetes, controlled"],
            "plan": ["Continue metformin", "Recheck HbA1c in 3 months"],
            "provider": "Dr. Alan Grant, MD",
            "duration": "20 minutes",
            "vitals": {
                "bloodPressure": "128/82",
                "heartRate": 72.0,
                "temperature": 98.6,
                "weight": 165.0,
                "height": "5'6\"",
                "oxygenSaturation": 98.0,
            },
        },
        "vitalSigns": {
            "date": "02/01/2025",
            "time": "09:40",
            "bloodPressure": "128/82",
            "heartRate": "72",
            "temperature": "98.6",
            "weight": "165",
            "height": "5'6\"",
            "bmi": "26.6",
            "oxygenSaturation": "98",
            "respiratoryRate": "16",
        },
    }


@pytest.fixture
def individual(individual_payload) -> Individual:
    return Individual.model_validate(individual_payload)


@pytest.fixture
def provider(provider_payload) -> Provider:
    return Provider.model_validate(provider_payload)


@pytest.fixture
def insurance_info(insurance_payload) -> InsuranceInfo:
    return InsuranceInfo.model_validate(insurance_payload)


@pytest.fixture
def payloads_by_schema(
    individual_payload,
    provider_payload,
    insurance_payload,
    claim_payload,
    medical_history_payload,
    w2_payload,
    passport_payload,
    lab_report_payload,
    visit_report_payload,
) -> Dict[str, Dict[str, Any]]:
    """Valid payloads keyed by the schema name sent in the response format hint."""
    return {
        "Individual": individual_payload,
        "Provider": provider_payload,
        "InsuranceInfo": insurance_payload,
        "ClaimInfo": claim_payload,
        "MedicalHistory": medical_history_payload,
        "W2": w2_payload,
        "Passport": passport_payload,
        "LabReport": lab_report_payload,
        "VisitReport": visit_report_payload,
    }
