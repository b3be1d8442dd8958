"""
Optional retry helpers with exponential backoff.

The client never retries on its own: every operation makes exactly one
attempt per upstream request. Callers that want retries wrap either a
raising coroutine (retry_async), e.g. a custom transport, or a client
operation returning an ApiResult (retry_result).

Backoff is base_delay * 2 ** attempt: 1s, 2s, 4s with the defaults.

Usage:
    result = await retry_result(lambda: client.search_songs("believer"))
"""

import asyncio
from typing import Awaitable, Callable, Iterable, TypeVar

import aiohttp

from saavn_client.catalog.models import ApiResult
from saavn_client.core.exceptions import ErrorKind, NetworkError
from saavn_client.core.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

DEFAULT_RETRIES = 3
DEFAULT_BASE_DELAY = 1.0

RETRYABLE_EXCEPTIONS: tuple[type[BaseException], ...] = (
    NetworkError,
    aiohttp.ClientConnectionError,
    asyncio.TimeoutError,
)


async def retry_async(
    func: Callable[[], Awaitable[T]],
    retries: int = DEFAULT_RETRIES,
    base_delay: float = DEFAULT_BASE_DELAY,
    retry_on: tuple[type[BaseException], ...] = RETRYABLE_EXCEPTIONS,
) -> T:
    """
    Await func(), retrying when it raises one of retry_on.

    Args:
        func: Zero-argument callable returning a fresh awaitable per call.
        retries: Number of retries after the first attempt.
        base_delay: Delay before the first retry, in seconds.
        retry_on: Exception types that trigger a retry. Others propagate
                  immediately.

    Returns:
        The first successful result.

    Raises:
        The last exception once all retries are exhausted.
    """
    for attempt in range(retries + 1):
        try:
            return await func()
        except retry_on as e:
            if attempt >= retries:
                logger.error(f"Giving up after {attempt + 1} attempts: {e}")
                raise
            delay = base_delay * 2 ** attempt
            logger.warning(
                f"Attempt {attempt + 1}/{retries + 1} failed ({e}), retrying in {delay:.1f}s"
            )
            await asyncio.sleep(delay)

    raise ValueError(f"retries must be >= 0, got {retries}")


async def retry_result(
    func: Callable[[], Awaitable[ApiResult]],
    retries: int = DEFAULT_RETRIES,
    base_delay: float = DEFAULT_BASE_DELAY,
    retry_codes: Iterable[str] = (ErrorKind.NETWORK.value,),
) -> ApiResult:
    """
    Await a client operation, retrying while it fails with a retryable code.

    Args:
        func: Zero-argument callable invoking a SaavnClient operation.
        retries: Number of retries after the first attempt.
        base_delay: Delay before the first retry, in seconds.
        retry_codes: Failure codes worth retrying. NETWORK only by default;
                     NOT_FOUND or VALIDATION will not change on retry.

    Returns:
        The first success, the first non-retryable failure, or the last
        failure once retries are exhausted.
    """
    codes = set(retry_codes)
    result = await func()
    for attempt in range(retries):
        if result.success or result.code not in codes:
            return result
        delay = base_delay * 2 ** attempt
        logger.warning(
            f"Operation failed with {result.code} ({result.message}), retrying in {delay:.1f}s"
        )
        await asyncio.sleep(delay)
        result = await func()
    return result
