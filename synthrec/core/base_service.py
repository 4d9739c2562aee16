import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

from synthrec.core.exceptions import AppError
from synthrec.utils.logging import get_logger

LOGGER = get_logger(__name__)


class BaseService(ABC):
    """Base for units of work that check their inputs before doing anything.

    Document generators build on this: ``validate`` rejects missing or
    out-of-range generation inputs before the cache or the model is touched,
    and ``run`` carries out the generation itself.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or LOGGER

    async def execute(self, *args, **kwargs) -> Any:
        """Check inputs, then run.

        Application errors (configuration, model invocation, schema
        violations) pass through untouched so callers can tell them apart.
        Any other exception is a bug in the unit of work and is reported as
        a plain ``AppError`` chained to its cause.

        Raises:
            AppError: If input checks or the run fail
        """
        try:
            self.validate(*args, **kwargs)
            return await self.run(*args, **kwargs)
        except AppError:
            raise
        except Exception as e:
            self.logger.error(
                f"Unexpected failure in {self.__class__.__name__}: {e}",
                exc_info=True,
                extra={"service": self.__class__.__name__},
            )
            raise AppError(f"Service execution failed: {e}", original_error=e) from e

    def validate(self, *args, **kwargs):
        """Reject unusable inputs by raising ``ValidationError``.

        The default accepts everything; generators with required documents or
        bounded parameters override it.
        """

    @abstractmethod
    async def run(self, *args, **kwargs) -> Any:
        """Produce the result once the inputs are known to be usable."""
