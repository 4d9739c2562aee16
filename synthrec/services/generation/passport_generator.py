from typing import Any, Dict, Optional

from synthrec.core.exceptions import ValidationError
from synthrec.prompts.generation_prompts import PASSPORT_SYSTEM_PROMPT, build_passport_prompt
from synthrec.schemas.documents import Individual, Passport
from synthrec.schemas.generation import GenerationRequest
from synthrec.services.generation.base_generator import BaseDocumentGenerator


class PassportGenerator(BaseDocumentGenerator[Passport]):
    """Generates US passport data, including both MRZ lines."""

    schema = Passport
    generator_name = "generate_passport"
    document_name = "passport"
    display_name = "Passport"
    system_prompt = PASSPORT_SYSTEM_PROMPT

    async def generate(self, individual: Individual) -> Passport:
        return await self._generate(individual=individual)

    def validate(self, individual: Optional[Individual] = None):
        if individual is None:
            raise ValidationError("Passport generation requires an individual")

    def cache_request(self, params: Dict[str, Any]) -> GenerationRequest:
        return GenerationRequest(self.generator_name, (params["individual"].id,))

    def build_user_prompt(self, params: Dict[str, Any]) -> str:
        return build_passport_prompt(params["individual"])
