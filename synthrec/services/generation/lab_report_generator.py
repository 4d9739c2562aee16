"""Laboratory report generation.

Each requested test type is generated and cached on its own. A failed item is
logged and dropped so one bad report does not cost the whole batch.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from synthrec.core.exceptions import AppError, ValidationError
from synthrec.core.llm_client import ChatCompletionClient
from synthrec.prompts.generation_prompts import LAB_REPORT_SYSTEM_PROMPT, build_lab_report_prompt
from synthrec.schemas.documents import LAB_TEST_TYPES, LabReport
from synthrec.schemas.generation import GenerationRequest
from synthrec.services.cache.cache_store import CacheStore
from synthrec.services.generation.base_generator import BaseDocumentGenerator
from synthrec.utils.logging import get_logger

LOGGER = get_logger(__name__)


class LabReportGenerator(BaseDocumentGenerator[LabReport]):
    """Generates a single laboratory report for one test type."""

    schema = LabReport
    generator_name = "generate_lab_report"
    document_name = "lab report"
    display_name = "Lab report"
    system_prompt = LAB_REPORT_SYSTEM_PROMPT

    async def generate(self, test_type: str, ordering_physician: str) -> LabReport:
        return await self._generate(test_type=test_type, ordering_physician=ordering_physician)

    def validate(self, test_type: str = "", ordering_physician: str = ""):
        if test_type not in LAB_TEST_TYPES:
            raise ValidationError(f"Unknown lab test type: {test_type!r}")
        if not ordering_physician:
            raise ValidationError("Lab report generation requires an ordering physician")

    def cache_request(self, params: Dict[str, Any]) -> GenerationRequest:
        return GenerationRequest(
            self.generator_name, (params["test_type"], params["ordering_physician"])
        )

    def build_user_prompt(self, params: Dict[str, Any]) -> str:
        return build_lab_report_prompt(params["test_type"], params["ordering_physician"])


class LabReportsGenerator:
    """Generates one report per requested test type, in request order."""

    def __init__(
        self,
        client: ChatCompletionClient,
        cache: CacheStore,
        logger: Optional[logging.Logger] = None,
    ):
        self.logger = logger or LOGGER
        self.item_generator = LabReportGenerator(client, cache, logger=self.logger)

    async def generate(self, test_types: Sequence[str], ordering_physician: str) -> List[LabReport]:
        """Generate lab reports, skipping any that fail.

        Args:
            test_types: Lab test types to generate, in order
            ordering_physician: Physician named on every report

        Returns:
            Successfully generated reports in request order; may be shorter
            than ``test_types``
        """
        total = len(test_types)
        reports: List[LabReport] = []

        self.logger.info(f"Generating {total} laboratory reports")

        for i, test_type in enumerate(test_types):
            step = f"{i + 1}/{total}"
            try:
                report = await self.item_generator.generate(test_type, ordering_physician)
            except AppError as e:
                self.logger.error(
                    f"[{step}] Failed to generate {test_type}: {e}",
                    extra={"test_type": test_type, "step": step},
                )
                continue

            reports.append(report)
            self.logger.info(f"[{step}] {test_type} generated successfully")

        self.logger.info(f"Generated {len(reports)}/{total} laboratory reports")
        return reports
