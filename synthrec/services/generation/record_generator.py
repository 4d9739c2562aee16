"""Record Generator - composes a complete synthetic record.

Documents are generated one after another, each depending on the ones
before it:
1. Individual and provider
2. Insurance for the individual
3. Medical history, visit reports and lab reports
4. Claim, W-2 and passport

A failure in any single-document step aborts the record. Visit and lab
batches degrade instead: the record may hold fewer reports than requested.
"""

import logging
import random
from typing import List, Optional

from synthrec.core.llm_client import ChatCompletionClient
from synthrec.schemas.documents import LAB_TEST_TYPES, GeneratedData
from synthrec.schemas.generation import GenerationOptions
from synthrec.services.cache.cache_store import CacheStore
from synthrec.services.generation.claim_generator import ClaimInfoGenerator
from synthrec.services.generation.individual_generator import IndividualGenerator
from synthrec.services.generation.insurance_generator import InsuranceInfoGenerator
from synthrec.services.generation.lab_report_generator import LabReportsGenerator
from synthrec.services.generation.medical_history_generator import MedicalHistoryGenerator
from synthrec.services.generation.passport_generator import PassportGenerator
from synthrec.services.generation.provider_generator import ProviderGenerator
from synthrec.services.generation.visit_report_generator import VisitReportsGenerator
from synthrec.services.generation.w2_generator import W2Generator
from synthrec.utils.logging import get_logger

LOGGER = get_logger(__name__)


class RecordGenerator:
    """Generates every document for one synthetic individual.

    Attributes:
        rng: Randomness source shared by subscriber selection and lab test
            selection; seed it for reproducible choices
    """

    def __init__(
        self,
        client: ChatCompletionClient,
        cache: CacheStore,
        rng: Optional[random.Random] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.logger = logger or LOGGER
        self.rng = rng or random.Random()

        self.individual_generator = IndividualGenerator(client, cache, logger=logger)
        self.provider_generator = ProviderGenerator(client, cache, logger=logger)
        self.insurance_generator = InsuranceInfoGenerator(client, cache, rng=self.rng, logger=logger)
        self.medical_history_generator = MedicalHistoryGenerator(client, cache, logger=logger)
        self.visit_reports_generator = VisitReportsGenerator(client, cache, logger=logger)
        self.lab_reports_generator = LabReportsGenerator(client, cache, logger=logger)
        self.claim_generator = ClaimInfoGenerator(client, cache, logger=logger)
        self.w2_generator = W2Generator(client, cache, logger=logger)
        self.passport_generator = PassportGenerator(client, cache, logger=logger)

    def select_lab_test_types(self, count: int) -> List[str]:
        """Pick ``count`` distinct lab test types at random."""
        test_types = list(LAB_TEST_TYPES)
        self.rng.shuffle(test_types)
        return test_types[:count]

    async def generate(self, options: Optional[GenerationOptions] = None) -> GeneratedData:
        """Generate a complete record.

        Args:
            options: Record options; defaults to ``GenerationOptions()``

        Returns:
            GeneratedData with every document type

        Raises:
            GenerationError: If any single-document step fails
        """
        options = options or GenerationOptions()
        self.logger.info(
            "Generating synthetic record",
            extra={
                "complexity": options.complexity,
                "number_of_visits": options.number_of_visits,
                "number_of_lab_tests": options.number_of_lab_tests,
                "include_secondary_insurance": options.include_secondary_insurance,
            },
        )

        individual = await self.individual_generator.generate()
        provider = await self.provider_generator.generate()
        insurance_info = await self.insurance_generator.generate(
            individual, options.include_secondary_insurance
        )
        medical_history = await self.medical_history_generator.generate(options.complexity)
        visit_reports = await self.visit_reports_generator.generate(
            options.number_of_visits, provider.name
        )
        lab_reports = await self.lab_reports_generator.generate(
            self.select_lab_test_types(options.number_of_lab_tests), provider.name
        )
        claim_info = await self.claim_generator.generate(individual, insurance_info, provider)
        w2 = await self.w2_generator.generate(individual)
        passport = await self.passport_generator.generate(individual)

        self.logger.info(
            "Synthetic record generated",
            extra={
                "individual_id": individual.id,
                "visit_reports": len(visit_reports),
                "lab_reports": len(lab_reports),
            },
        )

        return GeneratedData(
            individual=individual,
            provider=provider,
            insurance_info=insurance_info,
            medical_history=medical_history,
            visit_reports=visit_reports,
            lab_reports=lab_reports,
            claim_info=claim_info,
            w2=w2,
            passport=passport,
        )
