from typing import Any, Dict

from synthrec.prompts.generation_prompts import PROVIDER_PROMPT, PROVIDER_SYSTEM_PROMPT
from synthrec.schemas.documents import Provider
from synthrec.schemas.generation import GenerationRequest
from synthrec.services.generation.base_generator import BaseDocumentGenerator


class ProviderGenerator(BaseDocumentGenerator[Provider]):
    """Generates rendering provider, facility and billing details."""

    schema = Provider
    generator_name = "generate_provider"
    document_name = "provider"
    display_name = "Provider"
    system_prompt = PROVIDER_SYSTEM_PROMPT

    async def generate(self) -> Provider:
        return await self._generate()

    def cache_request(self, params: Dict[str, Any]) -> GenerationRequest:
        return GenerationRequest(self.generator_name)

    def build_user_prompt(self, params: Dict[str, Any]) -> str:
        return PROVIDER_PROMPT
