"""Chat-completion client for Azure OpenAI deployments.

Sends a system/user prompt pair, requires the reply to be a single JSON object
and retries recoverable failures with a linear backoff. Failures that cannot
succeed on retry (bad configuration, authentication, unknown deployment) are
raised immediately.
"""

import asyncio
import logging
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Optional
from urllib.parse import urlparse

import httpx
from pydantic import BaseModel, Field

from synthrec.core.exceptions import (
    ConfigurationError,
    EmptyResponseError,
    ExhaustedRetriesError,
    MalformedResponseError,
    TransportError,
)
from synthrec.utils.json_parser import parse_json_object
from synthrec.utils.logging import get_logger

LOGGER = get_logger(__name__)

DEFAULT_API_VERSION = "2025-04-01-preview"
DEFAULT_MAX_OUTPUT_TOKENS = 32768
DEFAULT_TEMPERATURE = 1.0

RETRYABLE_STATUS_CODES = frozenset({408, 409, 429})


class AzureOpenAIConfig(BaseModel):
    """Connection details for one Azure OpenAI deployment."""

    endpoint: str = Field(default="", description="Resource endpoint, e.g. https://x.openai.azure.com")
    api_key: str = Field(default="", description="Resource API key")
    deployment_name: str = Field(default="", description="Chat model deployment name")
    api_version: str = Field(default=DEFAULT_API_VERSION, description="REST API version")


def validate_azure_config(config: Optional[AzureOpenAIConfig]) -> AzureOpenAIConfig:
    """Check that the endpoint configuration is usable.

    Raises:
        ConfigurationError: If a required value is missing or the endpoint is
            not an absolute http(s) URL
    """
    if config is None:
        raise ConfigurationError("Azure OpenAI configuration is missing")

    missing = [
        env_name
        for env_name, value in (
            ("AZURE_OPENAI_ENDPOINT", config.endpoint),
            ("AZURE_OPENAI_API_KEY", config.api_key),
            ("AZURE_OPENAI_DEPLOYMENT_NAME", config.deployment_name),
            ("AZURE_OPENAI_API_VERSION", config.api_version),
        )
        if not value or not value.strip()
    ]
    if missing:
        raise ConfigurationError(
            f"Azure OpenAI configuration is incomplete. Missing: {', '.join(missing)}"
        )

    parsed = urlparse(config.endpoint)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigurationError(
            f"Azure OpenAI endpoint must be an absolute http(s) URL: {config.endpoint!r}"
        )

    return config


class ErrorClass(str, Enum):
    RETRYABLE = "retryable"
    FATAL = "fatal"


def classify_error(error: Exception) -> ErrorClass:
    """Decide whether a failed attempt is worth repeating."""
    if isinstance(error, ConfigurationError):
        return ErrorClass.FATAL
    if isinstance(error, (EmptyResponseError, MalformedResponseError)):
        return ErrorClass.RETRYABLE
    if isinstance(error, TransportError):
        status_code = error.status_code
        if status_code is None:
            return ErrorClass.RETRYABLE
        if status_code in RETRYABLE_STATUS_CODES or status_code >= 500:
            return ErrorClass.RETRYABLE
        return ErrorClass.FATAL
    return ErrorClass.FATAL


class ChatCompletionClient:
    """Client for JSON-object chat completions.

    Attributes:
        config: Validated endpoint configuration
        max_attempts: Total attempts per invocation (including the first)
        base_delay: Backoff unit in seconds; attempt i waits base_delay * (i + 1)
    """

    def __init__(
        self,
        config: AzureOpenAIConfig,
        max_attempts: int = 3,
        base_delay: float = 1.0,
        timeout: float = 120.0,
        max_output_tokens: int = DEFAULT_MAX_OUTPUT_TOKENS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize the client.

        Args:
            config: Endpoint configuration (validated on each invocation)
            max_attempts: Default attempt budget, at least 1
            base_delay: Backoff unit in seconds
            timeout: Per-request timeout in seconds
            max_output_tokens: Completion token ceiling sent with each request
            transport: Optional httpx transport, used to stub the endpoint
            sleep: Awaitable sleep used for backoff
            logger: Optional logger override
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

        self.config = config
        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self.timeout = timeout
        self.max_output_tokens = max_output_tokens
        self.transport = transport
        self.sleep = sleep
        self.logger = logger or LOGGER

    def _url(self) -> str:
        endpoint = self.config.endpoint.rstrip("/")
        return (
            f"{endpoint}/openai/deployments/{self.config.deployment_name}"
            f"/chat/completions?api-version={self.config.api_version}"
        )

    def _build_payload(
        self,
        system_prompt: str,
        user_prompt: str,
        response_format: Optional[Dict[str, Any]],
    ) -> Dict[str, Any]:
        return {
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "max_completion_tokens": self.max_output_tokens,
            "temperature": DEFAULT_TEMPERATURE,
            "response_format": response_format or {"type": "json_object"},
        }

    async def invoke(
        self,
        system_prompt: str,
        user_prompt: str,
        response_format: Optional[Dict[str, Any]] = None,
        max_attempts: Optional[int] = None,
    ) -> Dict[str, Any]:
        """Request a JSON object from the model.

        Args:
            system_prompt: Role and output rules
            user_prompt: Document-specific instructions
            response_format: Optional structured-output hint; defaults to
                plain JSON-object mode
            max_attempts: Per-call override of the attempt budget

        Returns:
            Parsed JSON object from the first successful attempt

        Raises:
            ConfigurationError: If the endpoint configuration is unusable
            TransportError: On a non-retryable HTTP failure (e.g. 401, 404)
            ExhaustedRetriesError: If every attempt failed with a retryable error
        """
        if max_attempts is None:
            attempts = self.max_attempts
        elif max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        else:
            attempts = max_attempts

        validate_azure_config(self.config)

        url = self._url()
        payload = self._build_payload(system_prompt, user_prompt, response_format)
        headers = {"api-key": self.config.api_key, "Content-Type": "application/json"}

        last_error: Optional[Exception] = None

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            for attempt in range(attempts):
                self.logger.debug(
                    f"Chat completion attempt {attempt + 1}/{attempts}",
                    extra={"deployment": self.config.deployment_name},
                )
                try:
                    return await self._attempt(client, url, headers, payload)
                except (TransportError, EmptyResponseError, MalformedResponseError) as e:
                    if classify_error(e) is ErrorClass.FATAL:
                        self.logger.error(
                            f"Chat completion failed with non-retryable error: {e}",
                            extra={"status_code": getattr(e, "status_code", None)},
                        )
                        raise
                    last_error = e
                    self.logger.warning(
                        f"Chat completion attempt {attempt + 1}/{attempts} failed: {e}",
                        extra={"error_type": type(e).__name__},
                    )

                if attempt < attempts - 1:
                    delay = self.base_delay * (attempt + 1)
                    self.logger.info(f"Retrying chat completion in {delay}s")
                    await self.sleep(delay)

        raise ExhaustedRetriesError(attempts, original_error=last_error)

    async def _attempt(
        self,
        client: httpx.AsyncClient,
        url: str,
        headers: Dict[str, str],
        payload: Dict[str, Any],
    ) -> Dict[str, Any]:
        try:
            response = await client.post(url, headers=headers, json=payload)
        except httpx.TimeoutException as e:
            raise TransportError(f"Request timed out: {e}", original_error=e) from e
        except httpx.HTTPError as e:
            raise TransportError(f"Request failed: {e}", original_error=e) from e

        if response.status_code >= 400:
            body = response.text[:500]
            raise TransportError(
                f"Azure OpenAI API error: {response.status_code} {body}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise MalformedResponseError(
                f"Response body is not JSON: {e}", original_error=e
            ) from e

        content = _first_message_content(data)
        return parse_json_object(content)


def _first_message_content(data: Any) -> Optional[str]:
    """Return the first choice's message content, or None if there is none.

    Raises:
        MalformedResponseError: If the completion envelope has an unexpected shape
    """
    if not isinstance(data, dict):
        raise MalformedResponseError(
            f"Unexpected completion envelope: expected object, got {type(data).__name__}"
        )

    choices = data.get("choices")
    if not choices:
        return None
    if not isinstance(choices, list) or not isinstance(choices[0], dict):
        raise MalformedResponseError("Unexpected completion envelope: malformed choices")

    message = choices[0].get("message")
    if message is None:
        return None
    if not isinstance(message, dict):
        raise MalformedResponseError("Unexpected completion envelope: malformed message")

    content = message.get("content")
    if content is not None and not isinstance(content, str):
        raise MalformedResponseError(
            f"Unexpected completion envelope: content is {type(content).__name__}"
        )
    return content
