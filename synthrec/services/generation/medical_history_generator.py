from typing import Any, Dict

from synthrec.core.exceptions import ValidationError
from synthrec.prompts.generation_prompts import (
    COMPLEXITY_DETAILS,
    MEDICAL_HISTORY_SYSTEM_PROMPT,
    build_medical_history_prompt,
)
from synthrec.schemas.documents import MedicalHistory
from synthrec.schemas.generation import Complexity, GenerationRequest
from synthrec.services.generation.base_generator import BaseDocumentGenerator


class MedicalHistoryGenerator(BaseDocumentGenerator[MedicalHistory]):
    """Generates medications, allergies, conditions, surgeries and family history."""

    schema = MedicalHistory
    generator_name = "generate_medical_history"
    document_name = "medical history"
    display_name = "Medical history"
    system_prompt = MEDICAL_HISTORY_SYSTEM_PROMPT

    async def generate(self, complexity: Complexity = "medium") -> MedicalHistory:
        return await self._generate(complexity=complexity)

    def validate(self, complexity: str = "medium"):
        if complexity not in COMPLEXITY_DETAILS:
            raise ValidationError(
                f"Unknown complexity {complexity!r}; expected one of {', '.join(COMPLEXITY_DETAILS)}"
            )

    def cache_request(self, params: Dict[str, Any]) -> GenerationRequest:
        return GenerationRequest(self.generator_name, (params["complexity"],))

    def build_user_prompt(self, params: Dict[str, Any]) -> str:
        return build_medical_history_prompt(params["complexity"])
