from typing import Any, Dict, Optional

from synthrec.core.exceptions import ValidationError
from synthrec.prompts.generation_prompts import W2_SYSTEM_PROMPT, build_w2_prompt
from synthrec.schemas.documents import W2, Individual
from synthrec.schemas.generation import GenerationRequest
from synthrec.services.generation.base_generator import BaseDocumentGenerator


class W2Generator(BaseDocumentGenerator[W2]):
    """Generates a W-2 wage and tax statement for the individual's employer."""

    schema = W2
    generator_name = "generate_w2"
    document_name = "W-2"
    display_name = "W-2"
    system_prompt = W2_SYSTEM_PROMPT

    async def generate(self, individual: Individual) -> W2:
        return await self._generate(individual=individual)

    def validate(self, individual: Optional[Individual] = None):
        if individual is None:
            raise ValidationError("W-2 generation requires an individual")

    def cache_request(self, params: Dict[str, Any]) -> GenerationRequest:
        return GenerationRequest(self.generator_name, (params["individual"].id,))

    def build_user_prompt(self, params: Dict[str, Any]) -> str:
        return build_w2_prompt(params["individual"])
