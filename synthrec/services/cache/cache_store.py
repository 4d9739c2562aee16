"""Content-addressed file cache for validated generation results.

Each entry lives in its own JSON file named after its key. Expiry is evaluated
lazily on read; nothing sweeps the directory. Writes replace the file
atomically, but there is no cross-process locking: two processes writing the
same key race and the last write wins.
"""

import hashlib
import json
import logging
import os
import tempfile
import time
from pathlib import Path
from typing import Any, Callable, Optional

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError

from synthrec.schemas.generation import GenerationRequest
from synthrec.utils.logging import get_logger

LOGGER = get_logger(__name__)

DEFAULT_CACHE_DIRECTORY = Path(".cache/ai-data")
DEFAULT_CACHE_TTL_MS = 24 * 60 * 60 * 1000


class CacheConfig(BaseModel):
    """Cache settings supplied by the caller."""

    enabled: bool = Field(default=True, description="Disable to force every lookup to miss")
    directory: Path = Field(default=DEFAULT_CACHE_DIRECTORY, description="Persistence root")
    ttl_ms: int = Field(default=DEFAULT_CACHE_TTL_MS, ge=0, description="Entry lifetime in milliseconds")


class CacheEntry(BaseModel):
    """On-disk record for one cache key."""

    key: str
    payload: Any
    stored_at_ms: int = Field(..., alias="storedAtMs")

    model_config = {"populate_by_name": True}


def _to_jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if isinstance(value, Path):
        return str(value)
    raise TypeError(f"Unsupported cache key parameter: {type(value).__name__}")


def derive_cache_key(request: GenerationRequest) -> str:
    """Derive a deterministic key from a generation request.

    The key is the SHA-256 of the canonical JSON form of
    ``[generator_name, [parameters...]]``. Parameter order matters.
    """
    canonical = json.dumps(
        [request.generator_name, list(request.parameters)],
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=_to_jsonable,
    )
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def generate_cache_key(generator_name: str, *parameters: Any) -> str:
    """Shorthand for ``derive_cache_key(GenerationRequest(name, parameters))``."""
    return derive_cache_key(GenerationRequest(generator_name, tuple(parameters)))


def _now_ms() -> int:
    return int(time.time() * 1000)


class CacheStore:
    """File-backed key/value store with a global TTL.

    Attributes:
        config: Cache configuration
        clock: Callable returning the current epoch time in milliseconds
    """

    def __init__(
        self,
        config: Optional[CacheConfig] = None,
        clock: Optional[Callable[[], int]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.config = config or CacheConfig()
        self.clock = clock or _now_ms
        self.logger = logger or LOGGER

    @property
    def enabled(self) -> bool:
        return self.config.enabled

    def path_for(self, key: str) -> Path:
        return Path(self.config.directory) / f"{key}.json"

    def get(self, key: str) -> Optional[Any]:
        """Return the cached payload for ``key``, or None on miss or expiry."""
        if not self.config.enabled:
            return None

        path = self.path_for(key)
        if not path.exists():
            self.logger.debug("Cache miss", extra={"cache_key": key})
            return None

        try:
            entry = CacheEntry.model_validate_json(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, PydanticValidationError) as e:
            self.logger.warning(
                f"Ignoring unreadable cache entry: {e}",
                extra={"cache_key": key, "path": str(path)},
            )
            return None

        age_ms = self.clock() - entry.stored_at_ms
        if age_ms > self.config.ttl_ms:
            self.logger.debug(
                "Cache entry expired",
                extra={"cache_key": key, "age_ms": age_ms, "ttl_ms": self.config.ttl_ms},
            )
            return None

        self.logger.debug("Cache hit", extra={"cache_key": key, "age_ms": age_ms})
        return entry.payload

    def set(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``, fully replacing any previous entry."""
        if not self.config.enabled:
            return

        payload = _to_jsonable(value) if isinstance(value, BaseModel) else value
        entry = CacheEntry(key=key, payload=payload, stored_at_ms=self.clock())

        directory = Path(self.config.directory)
        directory.mkdir(parents=True, exist_ok=True)

        # Write to a sibling temp file, then rename over the entry.
        fd, tmp_name = tempfile.mkstemp(dir=directory, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(entry.model_dump_json(by_alias=True))
            os.replace(tmp_name, self.path_for(key))
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

        self.logger.debug("Cache write", extra={"cache_key": key, "path": str(self.path_for(key))})
