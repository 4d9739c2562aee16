from typing import Any, Dict, Optional

from synthrec.core.exceptions import ValidationError
from synthrec.prompts.generation_prompts import CLAIM_SYSTEM_PROMPT, build_claim_prompt
from synthrec.schemas.documents import ClaimInfo, Individual, InsuranceInfo, Provider
from synthrec.schemas.generation import GenerationRequest
from synthrec.services.generation.base_generator import BaseDocumentGenerator


class ClaimInfoGenerator(BaseDocumentGenerator[ClaimInfo]):
    """Generates CMS-1500 claim data with service lines.

    Cached per individual only; the insurance and provider used for the
    first generation are baked into the cached claim.
    """

    schema = ClaimInfo
    generator_name = "generate_claim_info"
    document_name = "CMS-1500 claim"
    display_name = "CMS-1500"
    system_prompt = CLAIM_SYSTEM_PROMPT

    async def generate(
        self, individual: Individual, insurance_info: InsuranceInfo, provider: Provider
    ) -> ClaimInfo:
        return await self._generate(
            individual=individual, insurance_info=insurance_info, provider=provider
        )

    def validate(
        self,
        individual: Optional[Individual] = None,
        insurance_info: Optional[InsuranceInfo] = None,
        provider: Optional[Provider] = None,
    ):
        if individual is None or insurance_info is None or provider is None:
            raise ValidationError(
                "Claim generation requires an individual, insurance information and a provider"
            )

    def cache_request(self, params: Dict[str, Any]) -> GenerationRequest:
        return GenerationRequest(self.generator_name, (params["individual"].id,))

    def build_user_prompt(self, params: Dict[str, Any]) -> str:
        return build_claim_prompt(params["individual"], params["insurance_info"], params["provider"])
