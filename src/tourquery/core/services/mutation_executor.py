"""Mutation executor - runs writes and invalidates affected reads."""

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from tourquery.core.entities.results import MutationResult
from tourquery.core.services.query_client import QueryClient, unwrap_response
from tourquery.errors import DomainError, TransportError

logger = logging.getLogger(__name__)


class MutationExecutor:
    """Runs write operations against remote services.

    Each call runs its operation exactly once; there is no automatic
    retry. A successful write invalidates every cached read of the
    mutation's domain, so the next resolve of any of them refetches.
    Failures invalidate nothing and are returned, not raised.
    """

    def __init__(self, client: QueryClient) -> None:
        """Initialize the mutation executor.

        Args:
            client: The query client whose cache is invalidated on success.
        """
        self._client = client

    async def mutate(
        self,
        domain: str,
        operation: Callable[[], Awaitable[Any]],
        error_message: str | None = None,
    ) -> MutationResult:
        """Run a write operation and invalidate its domain on success.

        Args:
            domain: The domain whose cached reads the write affects.
            operation: Zero-argument coroutine function performing the write.
            error_message: Message used when the service reports failure
                without one.

        Returns:
            A MutationResult with the payload or a typed failure.
        """
        default_message = error_message or f"Failed to update {domain}"
        try:
            data = unwrap_response(await operation(), default_message)
        except DomainError as e:
            logger.info("Mutation in %s rejected: %s", domain, e.message)
            return MutationResult(domain=domain, ok=False, error=e)
        except Exception as e:
            logger.warning("Mutation in %s failed: %s", domain, e)
            error = TransportError()
            error.__cause__ = e
            return MutationResult(domain=domain, ok=False, error=error)

        invalidated = self._client.invalidate(lambda key: key.domain == domain)
        logger.info(
            "Mutation in %s succeeded, invalidated %d entries", domain, len(invalidated)
        )
        return MutationResult(
            domain=domain,
            ok=True,
            data=data,
            invalidated=len(invalidated),
        )
