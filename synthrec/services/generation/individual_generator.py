from typing import Any, Dict

from synthrec.prompts.generation_prompts import INDIVIDUAL_PROMPT, INDIVIDUAL_SYSTEM_PROMPT
from synthrec.schemas.documents import Individual
from synthrec.schemas.generation import GenerationRequest
from synthrec.services.generation.base_generator import BaseDocumentGenerator


class IndividualGenerator(BaseDocumentGenerator[Individual]):
    """Generates patient demographics, including employer details."""

    schema = Individual
    generator_name = "generate_individual"
    document_name = "patient"
    display_name = "Patient"
    system_prompt = INDIVIDUAL_SYSTEM_PROMPT

    async def generate(self) -> Individual:
        return await self._generate()

    def cache_request(self, params: Dict[str, Any]) -> GenerationRequest:
        return GenerationRequest(self.generator_name)

    def build_user_prompt(self, params: Dict[str, Any]) -> str:
        return INDIVIDUAL_PROMPT
