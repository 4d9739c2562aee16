"""Pydantic schemas for every generated document type.

These models are the contract between raw model output and everything
downstream. They serve three purposes:
1. Typed, immutable document values returned to callers
2. Strict runtime validation of model output (no silent coercion)
3. JSON Schema hints sent with each chat-completion request

Wire names are camelCase (aliases); Python attributes are snake_case.
"""

from typing import List, Literal, Optional, get_args

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class DocumentModel(BaseModel):
    """Base class for all document schemas."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        strict=True,
    )


# Enums
Gender = Literal["Male", "Female", "Other"]

InsuranceType = Literal["Medicare", "Medicaid", "TRICARE", "CHAMPVA", "Group", "FECA", "Other"]

TaxIdType = Literal["SSN", "EIN"]

ReferringQualifier = Literal["DN", "DK", "DQ"]

PatientRelationship = Literal["self", "spouse", "child", "other"]

ResultFlag = Literal["Normal", "High", "Low", "Critical", "Abnormal", ""]

LabTestType = Literal[
    "CBC",
    "BMP",
    "CMP",
    "Urinalysis",
    "Lipid",
    "LFT",
    "Thyroid",
    "HbA1c",
    "Coagulation",
    "Microbiology",
    "Pathology",
    "Hormone",
    "Infectious",
]

LAB_TEST_TYPES: List[str] = list(get_args(LabTestType))


# Basic building blocks
class Address(DocumentModel):
    street: str = Field(..., description="Street address")
    city: str = Field(..., description="City name")
    state: str = Field(
        ..., min_length=2, max_length=2, description="Two-letter state code (e.g., CA, NY)"
    )
    zip_code: str = Field(..., description="ZIP code")
    country: Optional[str] = Field(..., description="Country name (optional)")


class Contact(DocumentModel):
    phone: str = Field(..., description="Phone number in format (XXX) XXX-XXXX")
    email: str = Field(..., pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$", description="Email address")
    emergency_contact: str = Field(..., description="Emergency contact name and phone")


class Pharmacy(DocumentModel):
    name: str = Field(..., description="Pharmacy name")
    address: str = Field(..., description="Pharmacy address")
    phone: str = Field(..., description="Pharmacy phone number")


class Insurance(DocumentModel):
    provider: str = Field(..., description="Insurance provider name")
    policy_number: str = Field(..., description="Policy number")
    group_number: Optional[str] = Field(..., description="Group number")
    effective_date: str = Field(..., description="Effective date in YYYY-MM-DD format")
    member_id: Optional[str] = Field(..., description="Member ID")
    copay: Optional[str] = Field(..., description="Copay amount (e.g., $20)")
    deductible: Optional[str] = Field(..., description="Deductible amount (e.g., $1000)")


class Insured(DocumentModel):
    first_name: str = Field(..., description="Insured person first name")
    last_name: str = Field(..., description="Insured person last name")
    policy_number: str = Field(..., description="Insurance policy number")
    plan_name: str = Field(..., description="Insurance plan name")


# Individual
class Individual(DocumentModel):
    """Synthetic patient demographics, including employer details."""

    id: str = Field(..., description="Unique patient identifier")
    first_name: str = Field(..., description="First name")
    last_name: str = Field(..., description="Last name")
    middle_initial: Optional[str] = Field(..., description="Middle initial")
    date_of_birth: str = Field(..., description="Date of birth in MM/DD/YYYY format")
    age: int = Field(..., ge=1, description="Age in years")
    gender: Gender
    address: Address
    contact: Contact
    pharmacy: Pharmacy
    medical_record_number: str = Field(..., description="Medical record number (MRN)")
    ssn: str = Field(..., description="Social Security Number in XXX-XX-XXXX format")
    account_number: str = Field(..., description="Account number")

    company_name: str = Field(..., description="Employer/company name")
    employer_ein: str = Field(
        ..., alias="employerEIN", description="Employer Identification Number in XX-XXXXXXX format"
    )
    employer_address: Address = Field(..., description="Employer address")
    employer_industry: str = Field(..., description="Industry/business type")
    employer_phone: Optional[str] = Field(
        ..., description="Employer contact phone number (optional)"
    )


# Insurance information
class InsuranceInfo(DocumentModel):
    """Primary/secondary coverage plus the subscriber block of a claim form."""

    primary_insurance: Insurance
    secondary_insurance: Optional[Insurance]
    subscriber_first_name: str = Field(..., description="Subscriber first name if different from patient")
    subscriber_last_name: str = Field(..., description="Subscriber last name if different from patient")
    subscriber_dob: str = Field(..., alias="subscriberDOB", description="Subscriber date of birth")
    subscriber_gender: Gender
    insurance_type: InsuranceType = Field(
        ...,
        description="Type of insurance coverage, e.g., Medicare, Medicaid, TRICARE, CHAMPVA, Group, FECA, Other",
    )
    pica_code: Optional[str] = Field(..., description="PICA code")
    phone: str = Field(..., description="Subscriber phone")
    address: Address = Field(..., description="Subscriber address")
    secondary_insured: Optional[Insured] = Field(..., description="Secondary insured information")


# Provider information
class ReferringProvider(DocumentModel):
    name: str = Field(..., description="Referring provider full name")
    qualifier: ReferringQualifier = Field(
        ...,
        description="Qualifier code (DN: Doctor of Nursing, DK: Doctor of Kinesiology, DQ: Doctor of Osteopathy)",
    )
    npi: str = Field(..., description="Referring provider NPI")


class Provider(DocumentModel):
    """Rendering provider, facility and billing provider details."""

    name: str = Field(..., description="Provider full name (e.g., Dr. John Smith)")
    npi: str = Field(
        ..., min_length=10, max_length=10, description="National Provider Identifier (10 digits)"
    )
    specialty: str = Field(..., description="Medical specialty")
    phone: str = Field(..., description="Provider phone number")
    address: Address
    tax_id: str = Field(..., description="Tax ID number")
    tax_id_type: TaxIdType = Field(..., description="Tax ID type")
    signature: Optional[str] = Field(..., description="Provider signature")
    facility_name: str = Field(..., description="Facility name")
    facility_address: Address
    facility_phone: str = Field(..., description="Facility phone number")
    facility_fax: str = Field(..., description="Facility fax number")
    facility_npi: str = Field(..., alias="facilityNPI", description="Facility NPI")
    billing_name: str = Field(..., description="Billing provider name")
    billing_address: str = Field(..., description="Billing address")
    billing_phone: str = Field(..., description="Billing phone number")
    billing_npi: str = Field(..., alias="billingNPI", description="Billing NPI")
    referring_provider: Optional[ReferringProvider] = Field(
        ..., description="Referring provider information"
    )


# CMS-1500 claim
class ServiceLine(DocumentModel):
    date_from: str = Field(..., description="Service date from (MM/DD/YYYY)")
    date_to: str = Field(..., description="Service date to (MM/DD/YYYY)")
    place_of_service: str = Field(..., description="Place of service code")
    emg: str = Field(..., description="Emergency indicator")
    procedure_code: str = Field(..., description="CPT/HCPCS procedure code")
    modifier: str = Field(..., description="Procedure modifier")
    diagnosis_pointer: str = Field(..., description="Diagnosis pointer (e.g., A, B, C)")
    charges: str = Field(..., description="Charge amount")
    units: str = Field(..., description="Units of service")
    epsdt: str = Field(..., description="EPSDT indicator")
    id_qual: str = Field(..., description="ID qualifier")
    rendering_provider_npi: str = Field(
        ..., alias="renderingProviderNPI", description="Rendering provider NPI"
    )


class ClaimInfo(DocumentModel):
    """Claim-level fields of a CMS-1500 form with its service lines."""

    patient_relationship: PatientRelationship = Field(
        ..., description="Patient's relationship to subscriber"
    )
    signature_date: str = Field(..., description="Patient signature date")
    provider_signature_date: str = Field(..., description="Provider signature date")
    date_of_illness: str = Field(..., description="Date of current illness/injury")
    service_date: str = Field(..., description="Service date")
    illness_qualifier: str = Field(..., description="Illness qualifier code")
    other_date: str = Field(..., description="Other date")
    other_date_qualifier: str = Field(..., description="Other date qualifier")
    unable_to_work_from: str = Field(..., description="Unable to work from date")
    unable_to_work_to: str = Field(..., description="Unable to work to date")
    hospitalization_from: str = Field(..., description="Hospitalization from date")
    hospitalization_to: str = Field(..., description="Hospitalization to date")
    additional_info: str = Field(..., description="Additional claim information")
    outside_lab: Optional[bool] = Field(..., description="Outside lab used")
    outside_lab_charges: Optional[str] = Field(..., description="Outside lab charges")
    diagnosis_codes: List[str] = Field(..., description="ICD-10 diagnosis codes")
    resubmission_code: Optional[str] = Field(..., description="Resubmission code")
    original_ref_no: Optional[str] = Field(..., description="Original reference number")
    prior_auth_number: Optional[str] = Field(..., description="Prior authorization number")
    service_lines: List[ServiceLine] = Field(..., description="Service line items")
    has_other_health_plan: bool = Field(..., description="Has other health plan")
    other_claim_id: str = Field(..., description="Other claim ID")
    accept_assignment: bool = Field(..., description="Accept assignment")
    total_charges: str = Field(..., description="Total charges")
    amount_paid: str = Field(..., description="Amount paid")


# Visits and vital signs
class VisitVitals(DocumentModel):
    blood_pressure: str = Field(..., description="Blood pressure (e.g., 120/80)")
    heart_rate: float = Field(..., description="Heart rate in bpm")
    temperature: float = Field(..., description="Temperature in °F")
    weight: float = Field(..., description="Weight in lbs")
    height: str = Field(..., description="Height (e.g., 5'10\")")
    oxygen_saturation: float = Field(..., description="Oxygen saturation %")


class VitalSigns(DocumentModel):
    date: str = Field(..., description="Date in MM/DD/YYYY format")
    time: str = Field(..., description="Time in HH:MM format")
    blood_pressure: str = Field(..., description="Blood pressure (e.g., 120/80)")
    heart_rate: str = Field(..., description="Heart rate in bpm")
    temperature: str = Field(..., description="Temperature in °F")
    weight: str = Field(..., description="Weight in lbs")
    height: str = Field(..., description="Height in inches or format 5'10\"")
    bmi: str = Field(..., description="Body Mass Index")
    oxygen_saturation: str = Field(..., description="Oxygen saturation %")
    respiratory_rate: str = Field(..., description="Respiratory rate per minute")


class VisitNote(DocumentModel):
    date: str = Field(..., description="Visit date in MM/DD/YYYY format")
    type: str = Field(..., description="Visit type (e.g., Office Visit, Follow-up)")
    chief_complaint: str = Field(..., description="Chief complaint")
    assessment: List[str] = Field(..., description="Assessment findings")
    plan: List[str] = Field(..., description="Treatment plan")
    provider: str = Field(..., description="Provider name")
    duration: str = Field(..., description="Visit duration")
    vitals: VisitVitals


class VisitReport(DocumentModel):
    visit: VisitNote
    vital_signs: VitalSigns


# W-2 wage and tax statement
class Box12Code(DocumentModel):
    code: str = Field(..., description="Box 12 code (e.g., D, DD, W)")
    amount: str = Field(..., description="Amount for the code")


class W2(DocumentModel):
    """Wage and tax statement. Amounts are decimal strings (e.g. "12345.67")."""

    tax_year: str = Field(..., description="Tax year (YYYY format)")
    wages: str = Field(..., description="Wages, tips, other compensation (Box 1)")
    federal_income_tax_withheld: str = Field(..., description="Federal income tax withheld (Box 2)")
    social_security_wages: str = Field(..., description="Social security wages (Box 3)")
    social_security_tax_withheld: str = Field(..., description="Social security tax withheld (Box 4)")
    medicare_wages: str = Field(..., description="Medicare wages and tips (Box 5)")
    medicare_tax_withheld: str = Field(..., description="Medicare tax withheld (Box 6)")
    social_security_tips: Optional[str] = Field(..., description="Social security tips (Box 7)")
    allocated_tips: Optional[str] = Field(..., description="Allocated tips (Box 8)")
    dependent_care_benefits: Optional[str] = Field(..., description="Dependent care benefits (Box 10)")
    nonqualified_plans: Optional[str] = Field(..., description="Nonqualified plans (Box 11)")
    box12_codes: Optional[List[Box12Code]] = Field(..., description="Box 12 codes and amounts")
    statutory_employee: Optional[bool] = Field(..., description="Statutory employee checkbox (Box 13)")
    retirement_plan: Optional[bool] = Field(..., description="Retirement plan checkbox (Box 13)")
    third_party_sick_pay: Optional[bool] = Field(..., description="Third-party sick pay checkbox (Box 13)")

    state_wages: Optional[str] = Field(..., description="State wages, tips, etc. (Box 16)")
    state_income_tax: Optional[str] = Field(..., description="State income tax (Box 17)")
    local_wages: Optional[str] = Field(..., description="Local wages, tips, etc. (Box 18)")
    local_income_tax: Optional[str] = Field(..., description="Local income tax (Box 19)")
    locality_name: Optional[str] = Field(..., description="Locality name (Box 20)")

    control_number: Optional[str] = Field(..., description="Employer control number")


# Passport
class Passport(DocumentModel):
    passport_number: str = Field(
        ..., description="Passport number (9 digits, typically starting with 5-6)"
    )
    issuance_date: str = Field(..., description="Date of issue (ISO 8601 format: YYYY-MM-DD)")
    expiry_date: str = Field(..., description="Date of expiration (ISO 8601 format: YYYY-MM-DD)")
    authority: str = Field(
        ..., description='Issuing authority (typically "United States Department of State")'
    )
    mrz_line1: str = Field(..., description="First line of Machine Readable Zone")
    mrz_line2: str = Field(..., description="Second line of Machine Readable Zone")
    endorsements: Optional[str] = Field(..., description="Special endorsements or annotations")


# Medical history
class Allergy(DocumentModel):
    allergen: str = Field(..., description="Allergen name (e.g., Penicillin, Peanuts)")
    reaction: str = Field(..., description="Allergic reaction (e.g., Rash, Anaphylaxis)")
    severity: str = Field(..., description="Severity level (Mild, Moderate, Severe)")
    date_identified: str = Field(..., description="Date allergy was identified")


class ChronicCondition(DocumentModel):
    condition: str = Field(..., description="Condition name (e.g., Hypertension, Diabetes)")
    diagnosed_date: str = Field(..., description="Date of diagnosis")
    status: str = Field(..., description="Current status (Active, Controlled, Resolved)")
    notes: str = Field(..., description="Additional notes about the condition")


class SurgicalHistory(DocumentModel):
    procedure: str = Field(..., description="Surgical procedure name")
    date: str = Field(..., description="Date of surgery")
    hospital: str = Field(..., description="Hospital or facility name")
    surgeon: str = Field(..., description="Surgeon name")
    complications: str = Field(..., description='Any complications (or "None")')


class FamilyHistory(DocumentModel):
    relation: str = Field(..., description="Relationship to patient (e.g., Mother, Father, Sibling)")
    conditions: List[str] = Field(..., description="Medical conditions")
    age_at_death: str = Field(..., description='Age at death (if deceased) or "Living"')
    cause_of_death: str = Field(..., description='Cause of death (if applicable) or "N/A"')


class CurrentMedication(DocumentModel):
    name: str = Field(..., description="Medication name")
    strength: str = Field(..., description="Strength/dosage (e.g., 10mg)")
    dosage: str = Field(..., description="Dosage instructions (e.g., Take 1 tablet)")
    purpose: str = Field(..., description="Purpose/indication for medication")
    prescribed_by: str = Field(..., description="Prescribing provider")
    start_date: str = Field(..., description="Date started")
    instructions: str = Field(..., description="Special instructions")


class DiscontinuedMedication(DocumentModel):
    name: str = Field(..., description="Medication name")
    strength: str = Field(..., description="Strength/dosage (e.g., 10mg)")
    reason: str = Field(..., description="Reason for discontinuation")
    discontinued_date: str = Field(..., description="Date discontinued")
    prescribed_by: str = Field(..., description="Prescribing provider")


class Medications(DocumentModel):
    current: List[CurrentMedication] = Field(..., description="Current medications")
    discontinued: List[DiscontinuedMedication] = Field(..., description="Discontinued medications")


class MedicalHistory(DocumentModel):
    medications: Medications
    allergies: List[Allergy] = Field(..., description="List of allergies")
    chronic_conditions: List[ChronicCondition] = Field(..., description="List of chronic conditions")
    surgical_history: List[SurgicalHistory] = Field(..., description="Surgical history")
    family_history: List[FamilyHistory] = Field(..., description="Family medical history")


# Laboratory reports
class LabTestResult(DocumentModel):
    parameter: str = Field(..., description="Test parameter name")
    value: str = Field(..., description="Test result value")
    unit: str = Field(..., description="Unit of measurement")
    reference_range: str = Field(..., description="Normal reference range")
    flag: ResultFlag = Field(..., description="Result flag")
    notes: Optional[str] = Field(..., description="Additional notes")


class PerformingLab(DocumentModel):
    name: str = Field(..., description="Laboratory name")
    address: Address
    phone: str = Field(..., description="Lab phone number")
    clia_number: str = Field(..., description="CLIA number")
    director: str = Field(..., description="Lab director name")


class LabReport(DocumentModel):
    test_type: LabTestType = Field(..., description="Type of lab test")
    test_name: str = Field(..., description="Full test name")
    specimen_type: str = Field(..., description="Specimen type (e.g., Blood, Urine)")
    specimen_collection_date: str = Field(..., description="Date specimen collected")
    specimen_collection_time: str = Field(..., description="Time specimen collected")
    specimen_received_date: str = Field(..., description="Date specimen received by lab")
    report_date: str = Field(..., description="Date report generated")
    report_time: str = Field(..., description="Time report generated")
    ordering_physician: str = Field(..., description="Ordering physician name")
    performing_lab: PerformingLab = Field(..., description="Performing laboratory information")
    results: List[LabTestResult] = Field(..., description="Test results")
    interpretation: Optional[str] = Field(..., description="Clinical interpretation")
    comments: Optional[str] = Field(..., description="Additional comments")
    critical_values: Optional[List[str]] = Field(..., description="Critical values")
    technologist: Optional[str] = Field(..., description="Technologist name")
    pathologist: Optional[str] = Field(..., description="Pathologist name")


# Complete record
class GeneratedData(DocumentModel):
    """Every document generated for one synthetic individual."""

    individual: Individual
    provider: Provider
    insurance_info: InsuranceInfo
    medical_history: MedicalHistory
    visit_reports: List[VisitReport]
    lab_reports: List[LabReport]
    claim_info: ClaimInfo
    w2: W2
    passport: Passport
