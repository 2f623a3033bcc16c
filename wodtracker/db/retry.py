"""Retry with exponential backoff for connection-exhaustion errors."""

import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from wodtracker.core.config import get_settings
from wodtracker.db.errors import is_connection_exhausted

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def run_with_retry(
    operation: Callable[[], Awaitable[T]],
    attempts: int | None = None,
    initial_delay: float | None = None,
) -> T:
    """
    Await operation(), retrying only when the database is out of connections.
    Delay starts at initial_delay seconds and doubles per retry; after the last
    attempt the original error is re-raised for the 503 handler.
    """
    settings = get_settings()
    if attempts is None:
        attempts = settings.db_retry_attempts
    if initial_delay is None:
        initial_delay = settings.db_retry_initial_delay

    retrying = AsyncRetrying(
        retry=retry_if_exception(is_connection_exhausted),
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=initial_delay, exp_base=2, min=0),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
    async for attempt in retrying:
        with attempt:
            return await operation()
    raise RuntimeError("retry loop exited without a result")  # pragma: no cover


async def execute_with_retry(db: AsyncSession, statement: Any, params: dict | None = None):
    """db.execute(statement) wrapped in run_with_retry."""
    return await run_with_retry(lambda: db.execute(statement, params))
