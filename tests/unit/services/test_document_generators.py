"""Tests for single-document generators."""

import random
from unittest.mock import AsyncMock, MagicMock

import pytest

from synthrec.core.exceptions import (
    DocumentValidationError,
    ExhaustedRetriesError,
    GenerationError,
    MalformedResponseError,
    TransportError,
)
from synthrec.core.llm_client import ChatCompletionClient
from synthrec.schemas.documents import W2, ClaimInfo, Individual, InsuranceInfo, MedicalHistory, Passport
from synthrec.services.cache.cache_store import generate_cache_key
from synthrec.services.generation.claim_generator import ClaimInfoGenerator
from synthrec.services.generation.individual_generator import IndividualGenerator
from synthrec.services.generation.insurance_generator import (
    SUBSCRIBER_OVERRIDE_PROBABILITY,
    InsuranceInfoGenerator,
)
from synthrec.services.generation.medical_history_generator import MedicalHistoryGenerator
from synthrec.services.generation.passport_generator import PassportGenerator
from synthrec.services.generation.provider_generator import ProviderGenerator
from synthrec.services.generation.w2_generator import W2Generator


@pytest.fixture
def llm_client() -> AsyncMock:
    return AsyncMock(spec=ChatCompletionClient)


def _rng(draw: float) -> MagicMock:
    rng = MagicMock(spec=random.Random)
    rng.random.return_value = draw
    return rng


class TestIndividualGenerator:
    @pytest.mark.asyncio
    async def test_generates_and_caches(self, llm_client, cache_store, individual_payload):
        llm_client.invoke.return_value = individual_payload
        generator = IndividualGenerator(llm_client, cache_store)

        individual = await generator.generate()

        assert isinstance(individual, Individual)
        assert individual.id == "pt-0001"
        assert cache_store.get(generate_cache_key("generate_individual")) is not None

    @pytest.mark.asyncio
    async def test_second_call_is_served_from_cache(self, llm_client, cache_store, individual_payload):
        llm_client.invoke.return_value = individual_payload
        generator = IndividualGenerator(llm_client, cache_store)

        first = await generator.generate()
        second = await generator.generate()

        assert first == second
        llm_client.invoke.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_sends_schema_hint(self, llm_client, cache_store, individual_payload):
        llm_client.invoke.return_value = individual_payload

        await IndividualGenerator(llm_client, cache_store).generate()

        response_format = llm_client.invoke.call_args.kwargs["response_format"]
        assert response_format["json_schema"]["name"] == "Individual"

    @pytest.mark.asyncio
    async def test_invalid_output_is_rejected_and_not_cached(
        self, llm_client, cache_store, individual_payload
    ):
        individual_payload["address"]["state"] = "Illinois"
        llm_client.invoke.return_value = individual_payload
        generator = IndividualGenerator(llm_client, cache_store)

        with pytest.raises(GenerationError) as exc_info:
            await generator.generate()

        message = str(exc_info.value)
        assert message.startswith("Patient data generation failed: AI generated invalid patient data:")
        assert "address.state" in message
        assert isinstance(exc_info.value.original_error, DocumentValidationError)
        assert exc_info.value.original_error.errors[0].path == "address.state"
        assert cache_store.get(generate_cache_key("generate_individual")) is None

    @pytest.mark.asyncio
    async def test_exhausted_retries_are_wrapped(self, llm_client, cache_store):
        cause = ExhaustedRetriesError(3, original_error=MalformedResponseError("bad json"))
        llm_client.invoke.side_effect = cause

        with pytest.raises(GenerationError) as exc_info:
            await IndividualGenerator(llm_client, cache_store).generate()

        assert exc_info.value.original_error is cause
        assert exc_info.value.__cause__ is cause
        assert "after 3 attempts" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_fatal_transport_error_is_wrapped(self, llm_client, cache_store):
        llm_client.invoke.side_effect = TransportError("unauthorized", status_code=401)

        with pytest.raises(GenerationError, match="^Patient data generation failed: unauthorized$"):
            await IndividualGenerator(llm_client, cache_store).generate()

    @pytest.mark.asyncio
    async def test_stale_cache_entry_is_regenerated(self, llm_client, cache_store, individual_payload):
        cache_store.set(generate_cache_key("generate_individual"), {"id": "old-shape"})
        llm_client.invoke.return_value = individual_payload

        individual = await IndividualGenerator(llm_client, cache_store).generate()

        assert individual.id == "pt-0001"
        llm_client.invoke.assert_awaited_once()


class TestProviderGenerator:
    @pytest.mark.asyncio
    async def test_generates_provider(self, llm_client, cache_store, provider_payload):
        llm_client.invoke.return_value = provider_payload

        provider = await ProviderGenerator(llm_client, cache_store).generate()

        assert provider.npi == "1234567890"
        assert provider.facility_npi == "1098765432"
        assert provider.referring_provider.qualifier == "DN"

    @pytest.mark.asyncio
    async def test_short_npi_is_rejected(self, llm_client, cache_store, provider_payload):
        provider_payload["npi"] = "12345"
        llm_client.invoke.return_value = provider_payload

        with pytest.raises(GenerationError, match="Provider data generation failed: AI generated invalid provider data: npi"):
            await ProviderGenerator(llm_client, cache_store).generate()


class TestInsuranceInfoGenerator:
    def test_override_probability(self):
        assert SUBSCRIBER_OVERRIDE_PROBABILITY == 0.7

    @pytest.mark.asyncio
    async def test_override_copies_individual_atomically(
        self, llm_client, cache_store, insurance_payload, individual
    ):
        llm_client.invoke.return_value = insurance_payload
        generator = InsuranceInfoGenerator(llm_client, cache_store, rng=_rng(0.1))

        info = await generator.generate(individual, include_secondary=False)

        assert info.subscriber_first_name == individual.first_name
        assert info.subscriber_last_name == individual.last_name
        assert info.subscriber_dob == individual.date_of_birth
        assert info.subscriber_gender == individual.gender
        assert info.address == individual.address
        assert info.phone == individual.contact.phone
        # Everything else comes from the model.
        assert info.primary_insurance.provider == "Blue Cross Blue Shield"
        assert info.insurance_type == "Group"

        prompt = llm_client.invoke.call_args.args[1]
        assert "Use the EXACT individual information" in prompt

    @pytest.mark.asyncio
    async def test_no_override_passes_model_values_through(
        self, llm_client, cache_store, insurance_payload, individual
    ):
        llm_client.invoke.return_value = insurance_payload
        generator = InsuranceInfoGenerator(llm_client, cache_store, rng=_rng(0.95))

        info = await generator.generate(individual)

        assert info == InsuranceInfo.model_validate(insurance_payload)
        assert "Generate DIFFERENT subscriber information" in llm_client.invoke.call_args.args[1]

    @pytest.mark.asyncio
    async def test_cached_value_keeps_override(self, llm_client, cache_store, insurance_payload, individual):
        llm_client.invoke.return_value = insurance_payload
        rng = _rng(0.1)
        generator = InsuranceInfoGenerator(llm_client, cache_store, rng=rng)

        first = await generator.generate(individual)
        second = await generator.generate(individual)

        assert second == first
        assert second.subscriber_first_name == "Jane"
        # Cache hits do not consume randomness.
        assert rng.random.call_count == 1
        llm_client.invoke.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_secondary_flag_is_part_of_the_key(
        self, llm_client, cache_store, insurance_payload, individual
    ):
        llm_client.invoke.return_value = insurance_payload
        generator = InsuranceInfoGenerator(llm_client, cache_store, rng=_rng(0.95))

        await generator.generate(individual, include_secondary=False)
        await generator.generate(individual, include_secondary=True)

        assert llm_client.invoke.await_count == 2
        assert "No secondary insurance" in llm_client.invoke.call_args_list[0].args[1]
        assert "Secondary insurance with similar details" in llm_client.invoke.call_args_list[1].args[1]

    @pytest.mark.asyncio
    async def test_override_not_applied_to_invalid_output(
        self, llm_client, cache_store, insurance_payload, individual
    ):
        insurance_payload["subscriberGender"] = "M"
        llm_client.invoke.return_value = insurance_payload

        with pytest.raises(GenerationError, match="AI generated invalid insurance data: subscriberGender"):
            await InsuranceInfoGenerator(llm_client, cache_store, rng=_rng(0.1)).generate(individual)

    @pytest.mark.asyncio
    async def test_requires_individual(self, llm_client, cache_store):
        with pytest.raises(GenerationError, match="requires an individual"):
            await InsuranceInfoGenerator(llm_client, cache_store).generate(None)

        llm_client.invoke.assert_not_awaited()


class TestDependentDocuments:
    @pytest.mark.asyncio
    async def test_claim_is_keyed_by_individual_only(
        self, llm_client, cache_store, claim_payload, individual, insurance_info, provider
    ):
        llm_client.invoke.return_value = claim_payload
        generator = ClaimInfoGenerator(llm_client, cache_store)
        other_provider = provider.model_copy(update={"name": "Dr. Someone Else"})

        first = await generator.generate(individual, insurance_info, provider)
        second = await generator.generate(individual, insurance_info, other_provider)

        assert isinstance(first, ClaimInfo)
        assert second == first
        llm_client.invoke.assert_awaited_once()

        prompt = llm_client.invoke.call_args.args[1]
        assert "Individual: Jane Doe" in prompt
        assert "Insurance: Blue Cross Blue Shield" in prompt
        assert "Provider: Dr. Alan Grant, MD" in prompt

    @pytest.mark.asyncio
    async def test_claim_failure_message(self, llm_client, cache_store, claim_payload, individual, insurance_info, provider):
        claim_payload["patientRelationship"] = "cousin"
        llm_client.invoke.return_value = claim_payload

        with pytest.raises(GenerationError, match="^CMS-1500 data generation failed: AI generated invalid CMS-1500 claim data"):
            await ClaimInfoGenerator(llm_client, cache_store).generate(individual, insurance_info, provider)

    @pytest.mark.asyncio
    async def test_w2_uses_employer_details(self, llm_client, cache_store, w2_payload, individual):
        llm_client.invoke.return_value = w2_payload

        w2 = await W2Generator(llm_client, cache_store).generate(individual)

        assert isinstance(w2, W2)
        assert w2.box12_codes[0].code == "D"
        prompt = llm_client.invoke.call_args.args[1]
        assert "Company: Acme Widgets LLC" in prompt
        assert "EIN: 12-3456789" in prompt

    @pytest.mark.asyncio
    async def test_passport_per_individual(self, llm_client, cache_store, passport_payload, individual):
        llm_client.invoke.return_value = passport_payload
        generator = PassportGenerator(llm_client, cache_store)

        passport = await generator.generate(individual)
        other = individual.model_copy(update={"id": "pt-0002"})
        await generator.generate(other)

        assert isinstance(passport, Passport)
        assert passport.mrz_line1.startswith("P<USA")
        assert llm_client.invoke.await_count == 2


class TestMedicalHistoryGenerator:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("complexity", ["low", "medium", "high"])
    async def test_complexity_reaches_prompt(self, llm_client, cache_store, medical_history_payload, complexity):
        llm_client.invoke.return_value = medical_history_payload

        history = await MedicalHistoryGenerator(llm_client, cache_store).generate(complexity)

        assert isinstance(history, MedicalHistory)
        assert f"Complexity Level: {complexity}" in llm_client.invoke.call_args.args[1]

    @pytest.mark.asyncio
    async def test_cached_per_complexity(self, llm_client, cache_store, medical_history_payload):
        llm_client.invoke.return_value = medical_history_payload
        generator = MedicalHistoryGenerator(llm_client, cache_store)

        await generator.generate("low")
        await generator.generate("low")
        await generator.generate("high")

        assert llm_client.invoke.await_count == 2

    @pytest.mark.asyncio
    async def test_unknown_complexity_is_rejected(self, llm_client, cache_store):
        with pytest.raises(GenerationError, match="Unknown complexity"):
            await MedicalHistoryGenerator(llm_client, cache_store).generate("extreme")

        llm_client.invoke.assert_not_awaited()
