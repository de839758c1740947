"""Deadline for persistence calls: the caller never waits longer than DB_TIMEOUT_MS."""

import asyncio
import logging
import time
from collections.abc import Awaitable
from typing import TypeVar

from app.core.config import get_settings
from app.core.errors import RequestTimeoutError

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def with_timeout(operation: Awaitable[T], timeout_ms: int | None = None) -> T:
    """
    Await operation under a deadline (default DB_TIMEOUT_MS).

    When the deadline passes first the operation is cancelled, so an async
    driver aborts the in-flight query, and RequestTimeoutError (408) is raised.
    """
    if timeout_ms is None:
        timeout_ms = get_settings().DB_TIMEOUT_MS
    start = time.perf_counter()
    try:
        async with asyncio.timeout(timeout_ms / 1000):
            return await operation
    except TimeoutError as e:
        logger.warning(
            "Operation exceeded deadline",
            extra={
                "timeout_ms": timeout_ms,
                "elapsed_seconds": time.perf_counter() - start,
            },
        )
        raise RequestTimeoutError(cause=e) from e
