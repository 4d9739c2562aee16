"""Insurance information generator.

Most synthetic patients are their own subscriber. For each generation that
misses the cache, one draw decides whether the subscriber block must mirror
the individual; when it does, the model is asked to reuse the individual and
the validated result is then forced to match it exactly.
"""

import logging
import random
from typing import Any, Dict, Optional

from synthrec.core.exceptions import ValidationError
from synthrec.core.llm_client import ChatCompletionClient
from synthrec.prompts.generation_prompts import INSURANCE_SYSTEM_PROMPT, build_insurance_prompt
from synthrec.schemas.documents import Individual, InsuranceInfo
from synthrec.schemas.generation import GenerationRequest
from synthrec.services.cache.cache_store import CacheStore
from synthrec.services.generation.base_generator import BaseDocumentGenerator

SUBSCRIBER_OVERRIDE_PROBABILITY = 0.7

USE_INDIVIDUAL_AS_SUBSCRIBER = "use_individual_as_subscriber"


class InsuranceInfoGenerator(BaseDocumentGenerator[InsuranceInfo]):
    """Generates primary/secondary coverage and the subscriber block."""

    schema = InsuranceInfo
    generator_name = "generate_insurance_info"
    document_name = "insurance"
    display_name = "Insurance"
    system_prompt = INSURANCE_SYSTEM_PROMPT

    def __init__(
        self,
        client: ChatCompletionClient,
        cache: CacheStore,
        rng: Optional[random.Random] = None,
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__(client, cache, logger=logger)
        self.rng = rng or random.Random()

    async def generate(self, individual: Individual, include_secondary: bool = False) -> InsuranceInfo:
        return await self._generate(individual=individual, include_secondary=include_secondary)

    def validate(self, individual: Optional[Individual] = None, **params: Any):
        if individual is None:
            raise ValidationError("Insurance generation requires an individual")

    def cache_request(self, params: Dict[str, Any]) -> GenerationRequest:
        return GenerationRequest(
            self.generator_name,
            (params["individual"].id, params["include_secondary"]),
        )

    def prepare(self, params: Dict[str, Any]) -> Dict[str, Any]:
        use_individual = self.rng.random() < SUBSCRIBER_OVERRIDE_PROBABILITY
        self.logger.debug(
            "Subscriber selection drawn",
            extra={USE_INDIVIDUAL_AS_SUBSCRIBER: use_individual},
        )
        return {**params, USE_INDIVIDUAL_AS_SUBSCRIBER: use_individual}

    def build_user_prompt(self, params: Dict[str, Any]) -> str:
        return build_insurance_prompt(
            params["individual"],
            params["include_secondary"],
            params[USE_INDIVIDUAL_AS_SUBSCRIBER],
        )

    def apply_overrides(self, document: InsuranceInfo, params: Dict[str, Any]) -> InsuranceInfo:
        if not params[USE_INDIVIDUAL_AS_SUBSCRIBER]:
            return document

        individual: Individual = params["individual"]
        return document.model_copy(
            update={
                "subscriber_first_name": individual.first_name,
                "subscriber_last_name": individual.last_name,
                "subscriber_dob": individual.date_of_birth,
                "subscriber_gender": individual.gender,
                "address": individual.address,
                "phone": individual.contact.phone,
            }
        )
