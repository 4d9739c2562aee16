"""Visit report generation.

Visits are generated one at a time, spaced roughly sixty days apart going
back from today. Failed visits are logged and dropped.
"""

import logging
from typing import Any, Dict, List, Optional

from synthrec.core.exceptions import AppError, ValidationError
from synthrec.core.llm_client import ChatCompletionClient
from synthrec.prompts.generation_prompts import VISIT_REPORT_SYSTEM_PROMPT, build_visit_report_prompt
from synthrec.schemas.documents import VisitReport
from synthrec.schemas.generation import GenerationRequest
from synthrec.services.cache.cache_store import CacheStore
from synthrec.services.generation.base_generator import BaseDocumentGenerator
from synthrec.utils.logging import get_logger

LOGGER = get_logger(__name__)


class VisitReportGenerator(BaseDocumentGenerator[VisitReport]):
    """Generates the visit note and vital signs for one visit."""

    schema = VisitReport
    generator_name = "generate_visit_report"
    document_name = "visit report"
    display_name = "Visit report"
    system_prompt = VISIT_REPORT_SYSTEM_PROMPT

    async def generate(self, visit_index: int, number_of_visits: int, provider_name: str) -> VisitReport:
        return await self._generate(
            visit_index=visit_index,
            number_of_visits=number_of_visits,
            provider_name=provider_name,
        )

    def validate(self, visit_index: int = 0, number_of_visits: int = 1, provider_name: str = ""):
        if not 0 <= visit_index < number_of_visits:
            raise ValidationError(
                f"Visit index {visit_index} out of range for {number_of_visits} visits"
            )
        if not provider_name:
            raise ValidationError("Visit report generation requires a provider name")

    def cache_request(self, params: Dict[str, Any]) -> GenerationRequest:
        # Total visit count is prompt context only and not part of the identity.
        return GenerationRequest(
            self.generator_name, (params["visit_index"], params["provider_name"])
        )

    def build_user_prompt(self, params: Dict[str, Any]) -> str:
        return build_visit_report_prompt(
            params["visit_index"], params["number_of_visits"], params["provider_name"]
        )


class VisitReportsGenerator:
    """Generates a sequence of visit reports, in visit order."""

    def __init__(
        self,
        client: ChatCompletionClient,
        cache: CacheStore,
        logger: Optional[logging.Logger] = None,
    ):
        self.logger = logger or LOGGER
        self.item_generator = VisitReportGenerator(client, cache, logger=self.logger)

    async def generate(self, number_of_visits: int, provider_name: str) -> List[VisitReport]:
        """Generate visit reports, skipping any that fail.

        Args:
            number_of_visits: Number of visits to request
            provider_name: Provider named on every visit

        Returns:
            Successfully generated reports in visit order; may be shorter
            than ``number_of_visits``
        """
        reports: List[VisitReport] = []

        self.logger.info(f"Generating {number_of_visits} visit reports")

        for visit_index in range(number_of_visits):
            step = f"{visit_index + 1}/{number_of_visits}"
            try:
                report = await self.item_generator.generate(
                    visit_index, number_of_visits, provider_name
                )
            except AppError as e:
                self.logger.error(
                    f"[{step}] Failed to generate visit {visit_index + 1}: {e}",
                    extra={"visit_index": visit_index, "step": step},
                )
                continue

            reports.append(report)
            self.logger.info(f"[{step}] Visit {visit_index + 1} generated successfully")

        self.logger.info(f"Generated {len(reports)}/{number_of_visits} visit reports")
        return reports
