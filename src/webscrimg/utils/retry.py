# ABOUTME: Retry logic for source fetches using the tenacity library
# ABOUTME: Converts httpx errors into the fetch error taxonomy and retries transient connection failures

from collections.abc import Callable

import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from webscrimg.extraction.base import (
    FetchConnectionError,
    FetchError,
    FetchStatusError,
    FetchTimeoutError,
)
from webscrimg.utils.logging import get_logger

logger = get_logger(__name__)


def _describe(e: Exception) -> str:
    return str(e) or type(e).__name__


def _convert_exception(e: httpx.HTTPError) -> FetchError:
    """Convert httpx exceptions to fetch-specific ones for better handling."""
    if isinstance(e, httpx.HTTPStatusError):
        status_code = e.response.status_code
        return FetchStatusError(f"HTTP {status_code} from {e.request.url}", status_code=status_code)
    elif isinstance(e, httpx.TimeoutException):
        return FetchTimeoutError(f"Request timeout: {_describe(e)}")
    elif isinstance(e, httpx.TransportError):
        return FetchConnectionError(f"Connection failed: {_describe(e)}")
    else:
        return FetchError(f"Fetch failed: {_describe(e)}")


def _log_retry(retry_state) -> None:
    exception = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        "Retrying fetch after transient failure",
        attempt=retry_state.attempt_number,
        error=str(exception) if exception else None,
    )


def fetch_retry(
    max_attempts: int = 2,
    min_wait: float = 0.5,
    max_wait: float = 4.0,
    multiplier: float = 2.0,
):
    """Fetch retry decorator using tenacity.

    Only connection failures are retried; HTTP status errors and timeouts are
    reported on the first occurrence.
    """

    def decorator(func: Callable):
        async def wrapper(*args, **kwargs):
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(max_attempts),
                wait=wait_exponential(multiplier=multiplier, min=min_wait, max=max_wait),
                retry=retry_if_exception_type(FetchConnectionError),
                before_sleep=_log_retry,
                reraise=True,
            ):
                with attempt:
                    try:
                        return await func(*args, **kwargs)
                    except httpx.HTTPError as e:
                        raise _convert_exception(e) from e

        return wrapper

    return decorator
