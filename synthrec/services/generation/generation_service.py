import logging
import random
from typing import List, Optional, Sequence

from synthrec.config.settings import Settings
from synthrec.core.llm_client import ChatCompletionClient
from synthrec.schemas.documents import GeneratedData, Individual, LabReport, MedicalHistory, VisitReport
from synthrec.schemas.generation import Complexity, GenerationOptions
from synthrec.services.cache.cache_store import CacheStore
from synthrec.services.generation.record_generator import RecordGenerator
from synthrec.utils.logging import get_logger

LOGGER = get_logger(__name__)


class GenerationService:
    """Entry point used by the API layer.

    Owns one model client and one cache store and exposes the generators
    that are reachable over HTTP.
    """

    def __init__(
        self,
        client: ChatCompletionClient,
        cache: CacheStore,
        rng: Optional[random.Random] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.client = client
        self.cache = cache
        self.logger = logger or LOGGER
        self.records = RecordGenerator(client, cache, rng=rng, logger=logger)

    @classmethod
    def from_settings(cls, settings: Settings) -> "GenerationService":
        """Build a service from application settings.

        Args:
            settings: Application settings

        Returns:
            GenerationService: Service wired to the configured endpoint and cache
        """
        client = ChatCompletionClient(
            settings.llm.to_azure_config(),
            max_attempts=settings.llm.max_attempts,
            base_delay=settings.llm.retry_base_delay,
            timeout=settings.llm.timeout,
            max_output_tokens=settings.llm.max_output_tokens,
        )
        cache = CacheStore(settings.cache.to_cache_config())
        return cls(client, cache)

    async def generate_record(self, options: Optional[GenerationOptions] = None) -> GeneratedData:
        return await self.records.generate(options)

    async def generate_individual(self) -> Individual:
        return await self.records.individual_generator.generate()

    async def generate_medical_history(self, complexity: Complexity = "medium") -> MedicalHistory:
        return await self.records.medical_history_generator.generate(complexity)

    async def generate_lab_reports(
        self, test_types: Sequence[str], ordering_physician: str
    ) -> List[LabReport]:
        return await self.records.lab_reports_generator.generate(test_types, ordering_physician)

    async def generate_visit_reports(self, number_of_visits: int, provider_name: str) -> List[VisitReport]:
        return await self.records.visit_reports_generator.generate(number_of_visits, provider_name)
