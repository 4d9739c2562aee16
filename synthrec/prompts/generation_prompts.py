# Prompts for synthetic document generation.
# - Every generator sends one SYSTEM prompt (role + output rules) and one USER
#   prompt (document requirements, plus context from previously generated
#   documents where the document depends on them).
# - The model is always asked for a single JSON object. Field names and types
#   come from the JSON schema hint sent alongside the prompt, so the prompts
#   describe content, not structure.

from typing import Dict

from synthrec.schemas.documents import Address, Individual, InsuranceInfo, Provider

JSON_ONLY_RULE = "Always respond with ONLY valid JSON."


# =============================================================================
# SYSTEM PROMPTS
# =============================================================================
INDIVIDUAL_SYSTEM_PROMPT = (
    "You are an expert medical data generator creating synthetic, realistic patient "
    "demographics for educational purposes. Generate completely fictional yet realistic data."
)

PROVIDER_SYSTEM_PROMPT = (
    "You are an expert medical data generator creating synthetic provider and facility "
    "information for educational purposes. Generate completely fictional yet realistic data."
)

INSURANCE_SYSTEM_PROMPT = (
    "You are an expert medical data generator creating synthetic insurance information "
    "for educational purposes. Generate completely fictional yet realistic data."
)

CLAIM_SYSTEM_PROMPT = (
    "You are a medical billing expert specializing in CMS-1500 forms. "
    f"Generate realistic, compliant claims data. {JSON_ONLY_RULE}"
)

LAB_REPORT_SYSTEM_PROMPT = (
    "You are a clinical laboratory specialist. Generate realistic, clinically accurate "
    f"laboratory test results. {JSON_ONLY_RULE}"
)

VISIT_REPORT_SYSTEM_PROMPT = (
    "You are an experienced physician creating synthetic medical visit documentation "
    "for educational purposes. Generate realistic, clinically accurate visit reports."
)

MEDICAL_HISTORY_SYSTEM_PROMPT = (
    "You are an experienced physician creating comprehensive synthetic medical histories "
    "for educational purposes. Generate realistic, clinically coherent medical data."
)

W2_SYSTEM_PROMPT = (
    "You are an expert tax document generator creating synthetic W-2 forms for educational "
    "purposes. Generate completely fictional yet realistic tax data that follows IRS W-2 "
    "format requirements."
)

PASSPORT_SYSTEM_PROMPT = (
    "You are an expert passport document generator creating synthetic US passport data for "
    "educational purposes. Generate completely fictional yet realistic passport documents "
    "following US State Department standards."
)


# =============================================================================
# REFERENCE TABLES
# =============================================================================
LAB_TEST_DETAILS: Dict[str, str] = {
    "CBC": "Complete Blood Count (WBC, RBC, Hemoglobin, Hematocrit, Platelets, etc.)",
    "BMP": "Basic Metabolic Panel (Glucose, Calcium, Sodium, Potassium, CO2, Chloride, BUN, Creatinine)",
    "CMP": "Comprehensive Metabolic Panel (includes BMP + liver enzymes)",
    "Urinalysis": "Color, Clarity, pH, Specific Gravity, Protein, Glucose, Ketones, Blood, etc.",
    "Lipid": "Total Cholesterol, HDL, LDL, Triglycerides",
    "LFT": "Liver Function Tests (ALT, AST, ALP, Bilirubin, Albumin, Total Protein)",
    "Thyroid": "TSH, T3, T4",
    "HbA1c": "Hemoglobin A1c percentage",
    "Coagulation": "PT, PTT, INR",
    "Microbiology": "Culture results, organism identification, sensitivities",
    "Pathology": "Tissue examination, diagnosis",
    "Hormone": "Various hormone levels",
    "Infectious": "Disease markers, antibody tests",
}

COMPLEXITY_DETAILS: Dict[str, str] = {
    "low": "1-2 chronic conditions, 2-3 current medications, 1 allergy, minimal history",
    "medium": "2-4 chronic conditions, 4-6 current medications, 2-3 allergies, moderate history",
    "high": "4+ chronic conditions, 7+ current medications, 3+ allergies, extensive history",
}

VISIT_SPACING_DAYS = 60
FIRST_VISIT_DAYS_AGO = 30


def _format_address(address: Address) -> str:
    return f"{address.street}, {address.city}, {address.state} {address.zip_code}"


# =============================================================================
# USER PROMPTS
# =============================================================================
INDIVIDUAL_PROMPT = """Generate complete patient demographics for a synthetic medical record.

**Requirements:**
- Complete demographics with realistic US address, contact info
- Medical Record Number (MRN), Social Security Number (SSN format: XXX-XX-XXXX)
- Account number
- Age
- Gender, randomly selected from Male, Female and Other
- Employer: company name, EIN (XX-XXXXXXX), address, industry and phone
- All dates in MM/DD/YYYY format
- Pharmacy information with name, address, and phone
- All data must be completely synthetic and HIPAA-compliant

Generate realistic, clinically coherent data following US healthcare standards."""

PROVIDER_PROMPT = """Generate complete provider and facility information for a medical practice.

**Requirements:**
- Provider: Full name with credentials (Dr. First Last, MD)
- National Provider Identifier (NPI): 10 digits
- Medical specialty, choose appropriate specialty
- Provider phone, address (US format)
- Tax ID (EIN or SSN format) with type
- Provider signature (provider's name)
- Facility information:
  - Facility name
  - Facility address (US format)
  - Facility phone and fax numbers
  - Facility NPI (10 digits)
- Billing provider information
- All data must be completely synthetic

Generate realistic, professional provider and facility data."""


def build_insurance_prompt(
    individual: Individual, include_secondary: bool, use_individual_as_subscriber: bool
) -> str:
    secondary_rule = (
        "- Secondary insurance with similar details and different provider"
        if include_secondary
        else "- No secondary insurance (set to null)"
    )
    subscriber_rule = (
        "- IMPORTANT: Use the EXACT individual information above for subscriber "
        "(name, DOB, gender, address, phone)"
        if use_individual_as_subscriber
        else "- Generate DIFFERENT subscriber information (different person from individual)"
    )
    return f"""Generate complete insurance information for a medical record.

**Individual Information:**
- Name: {individual.first_name} {individual.last_name}
- DOB: {individual.date_of_birth}
- Gender: {individual.gender}
- Address: {_format_address(individual.address)}
- Phone: {individual.contact.phone}

**Requirements:**
- Primary insurance (required):
  - Provider name (major US insurer)
  - Policy number
  - Group number
  - Member ID
  - Effective date (current year)
  - Copay and deductible amounts
{secondary_rule}
- Subscriber information:
  {subscriber_rule}
- Insurance type: one of Medicare, Medicaid, TRICARE, CHAMPVA, Group, FECA, Other
- All data must be completely synthetic

Generate realistic insurance information following US healthcare standards."""


def build_claim_prompt(individual: Individual, insurance_info: InsuranceInfo, provider: Provider) -> str:
    return f"""Based on this individual data, generate realistic CMS-1500 insurance claim form data:

Individual: {individual.first_name} {individual.last_name}
DOB: {individual.date_of_birth}
Insurance: {insurance_info.primary_insurance.provider}
Provider: {provider.name}
Provider NPI: {provider.npi}

Generate comprehensive service lines (2-5 services) with:
- Date of service (within last 90 days)
- Place of service code (appropriate for service type)
- Procedure codes (CPT codes like 99213, 99214, 85025, etc.)
- Diagnosis pointers (linking to conditions)
- Charges (realistic amounts)
- Units and modifiers

Include claim information with:
- Patient relationship to subscriber
- Signature date
- Illness/injury date (if applicable)
- Diagnosis codes (ICD-10)
- Prior authorization number (if applicable)
- Total charges

Generate realistic, compliant claims data. All data must be completely synthetic."""


def build_lab_report_prompt(test_type: str, ordering_physician: str) -> str:
    test_detail = LAB_TEST_DETAILS.get(test_type, test_type)
    return f"""Generate a realistic laboratory test result:

Ordering Physician: {ordering_physician}

Generate a {test_type} laboratory report: {test_detail}

Include:
- Test name and type
- Date of collection and reporting (within last 30 days)
- Specimen type and collection method
- Individual test results with values, units, and reference ranges
- Flags for abnormal values (High/Low)
- Performing laboratory information
- Ordering provider

Make results clinically coherent with patient age and realistic for the test type."""


def visit_days_ago(visit_index: int) -> int:
    """Approximate age in days of the visit at ``visit_index`` (0-based)."""
    return FIRST_VISIT_DAYS_AGO + visit_index * VISIT_SPACING_DAYS


def build_visit_report_prompt(visit_index: int, number_of_visits: int, provider_name: str) -> str:
    return f"""Generate a realistic medical visit report:

Provider: {provider_name}
Visit Number: {visit_index + 1} of {number_of_visits}
Visit Date: approximately {visit_days_ago(visit_index)} days ago

Include:
- Visit date and time
- Visit type (Office Visit, Follow-up, Annual Physical, etc.)
- Chief complaint (realistic and age-appropriate)
- Vital signs (BP, HR, Temp, RR, O2 Sat, Height, Weight, BMI)
- Assessment and diagnosis
- Treatment plan
- Visit duration

Make the visit clinically coherent. All data must be completely synthetic."""


def build_medical_history_prompt(complexity: str) -> str:
    return f"""Generate a comprehensive medical history for a patient:

**Complexity Level: {complexity}** ({COMPLEXITY_DETAILS[complexity]})

Include:
- Current medications (with dosages, frequencies, start dates)
- Discontinued medications (with reasons)
- Chronic conditions (with diagnosis dates, status)
- Allergies (allergen, reaction, severity)
- Surgical history (procedures with dates)
- Family history (relatives, conditions, ages)

Make all conditions and medications clinically appropriate.
Ensure internal consistency across all medical history elements.
All data must be completely synthetic."""


def build_w2_prompt(individual: Individual) -> str:
    return f"""Generate a complete W-2 wage and tax statement for an employee.

**Employee Information:**
- Name: {individual.first_name} {individual.last_name}
- SSN: {individual.ssn}
- Address: {_format_address(individual.address)}

**Employer Information:**
- Company: {individual.company_name}
- EIN: {individual.employer_ein}
- Address: {_format_address(individual.employer_address)}

**Requirements:**
- Annual wages: $30,000 - $150,000 (realistic amount)
- Calculate realistic tax withholdings (federal ~15%, Social Security 6.2%, Medicare 1.45%, state ~5%)
- Include realistic Box 12 codes (e.g., D for 401k, DD for health coverage)
- All amounts formatted as decimal strings (e.g., "12345.67")
- Tax year: current year minus 1
- Include all wage and tax information
- All data must be consistent and realistic

Generate a complete, realistic W-2 statement."""


def build_passport_prompt(individual: Individual) -> str:
    return f"""Generate a complete US Passport document for an individual.

**Passport Holder Information:**
- Full Name: {individual.first_name} {individual.last_name}
- Date of Birth: {individual.date_of_birth}
- Gender: {individual.gender}
- Address: {_format_address(individual.address)}

**Requirements:**
- Passport Number: 9 digits starting with 5-6
- Issue Date: Within the last 10 years (ISO 8601 format: YYYY-MM-DD)
- Expiry Date: 10 years after issue date (ISO 8601 format: YYYY-MM-DD)
- Authority: "United States Department of State"
- Machine Readable Zone (MRZ) Line 1: Format P<USA + last name (padded with <) + first name (padded with <)
- Machine Readable Zone (MRZ) Line 2: Passport number + check digit + country code + birth date + gender + expiry date + check digit
- All dates in ISO 8601 format (YYYY-MM-DD)
- Endorsements: null or specific text if applicable

Generate realistic, properly formatted passport data."""
