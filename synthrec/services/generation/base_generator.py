"""Base generator for single synthetic documents.

Every document type follows the same pipeline:

    cache lookup -> prompts -> model call -> schema validation
    -> overrides -> cache write -> return

Subclasses describe the document (schema, names, prompts, cache identity)
and optionally post-process the validated value. Nothing that fails
validation is returned or cached.
"""

import logging
from abc import abstractmethod
from typing import Any, Dict, Generic, Optional, Type, TypeVar

from pydantic import BaseModel

from synthrec.core.base_service import BaseService
from synthrec.core.exceptions import DocumentValidationError, GenerationError
from synthrec.core.llm_client import ChatCompletionClient
from synthrec.schemas.generation import GenerationRequest
from synthrec.services.cache.cache_store import CacheStore, derive_cache_key
from synthrec.services.validation.schema_validator import (
    format_validation_errors,
    response_format_for,
    validate_with_schema,
)
from synthrec.utils.logging import get_logger

LOGGER = get_logger(__name__)

T = TypeVar("T", bound=BaseModel)


class BaseDocumentGenerator(BaseService, Generic[T]):
    """Abstract generator for one document type.

    Attributes:
        schema: Document schema the model output must satisfy
        generator_name: Stable name used in cache keys
        document_name: Lower-case name used in validation messages
        display_name: Name used in generation failure messages
        system_prompt: System prompt sent with every request
        client: Chat completion client
        cache: Cache store for validated documents
    """

    schema: Type[T]
    generator_name: str
    document_name: str
    display_name: str
    system_prompt: str

    def __init__(
        self,
        client: ChatCompletionClient,
        cache: CacheStore,
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__(logger=logger or LOGGER)
        self.client = client
        self.cache = cache

    async def _generate(self, **params: Any) -> T:
        """Run the pipeline, converting every failure into GenerationError."""
        try:
            return await self.execute(**params)
        except Exception as e:
            self.logger.error(
                f"Failed to generate {self.document_name} data with AI: {e}",
                extra={"generator": self.generator_name, "error_type": type(e).__name__},
            )
            raise GenerationError(self.display_name, e) from e

    async def run(self, **params: Any) -> T:
        key = derive_cache_key(self.cache_request(params))

        cached = self._read_cache(key)
        if cached is not None:
            self.logger.info(f"{self.display_name} data retrieved from cache")
            return cached

        params = self.prepare(params)
        data = await self.client.invoke(
            self.system_prompt,
            self.build_user_prompt(params),
            response_format=response_format_for(self.schema),
        )

        outcome = validate_with_schema(self.schema, data)
        if not outcome.ok:
            self.logger.warning(
                f"{self.display_name} validation failed",
                extra={"errors": format_validation_errors(outcome.errors)},
            )
            raise DocumentValidationError(self.document_name, outcome.errors)

        document = self.apply_overrides(outcome.value, params)
        self.logger.info(f"{self.display_name} data validated successfully")

        self.cache.set(key, document)
        return document

    def _read_cache(self, key: str) -> Optional[T]:
        payload = self.cache.get(key)
        if payload is None:
            return None

        outcome = validate_with_schema(self.schema, payload)
        if not outcome.ok:
            self.logger.warning(
                "Discarding cached entry that no longer matches the schema",
                extra={"cache_key": key, "errors": format_validation_errors(outcome.errors)},
            )
            return None
        return outcome.value

    def prepare(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Hook run once per cache miss, before the prompt is built."""
        return params

    def apply_overrides(self, document: T, params: Dict[str, Any]) -> T:
        """Hook applied to a validated document before it is cached."""
        return document

    @abstractmethod
    def cache_request(self, params: Dict[str, Any]) -> GenerationRequest:
        """Identity of this call for caching purposes."""

    @abstractmethod
    def build_user_prompt(self, params: Dict[str, Any]) -> str:
        """Document-specific user prompt."""
