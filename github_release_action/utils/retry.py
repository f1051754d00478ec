"""Retry decorator for handling GitHub API rate limits.

Only rate limit responses are waited out. Every other failure is raised to the
caller immediately. The number of attempts defaults to the
``rate_limit_retries`` attribute of the decorated method's instance, which is
zero unless configured, so no call is retried by default.
"""

import asyncio
import functools
import time
from typing import Any, Callable, TypeVar

import structlog
from githubkit.exception import PrimaryRateLimitExceeded, RequestFailed, SecondaryRateLimitExceeded

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def _resolve_max_retries(max_retries: int | None, args: tuple[Any, ...]) -> int:
    if max_retries is not None:
        return max_retries
    if args:
        return int(getattr(args[0], "rate_limit_retries", 0) or 0)
    return 0


def _wait_time_from_headers(e: RequestFailed, delay: float, function_name: str) -> float:
    """Compute how long to wait based on the rate limit headers of a failed response."""
    wait_time = delay
    retry_after = e.response.headers.get("retry-after")
    if retry_after:
        try:
            wait_time = float(retry_after)
            logger.info("Using retry-after header value", retry_after=wait_time, function=function_name)
        except ValueError:
            logger.warning("Invalid retry-after header value", retry_after=retry_after, function=function_name)
        return wait_time

    rate_limit_reset = e.response.headers.get("x-ratelimit-reset")
    if rate_limit_reset:
        try:
            reset_timestamp = int(rate_limit_reset)
            current_timestamp = int(time.time())
            if reset_timestamp > current_timestamp:
                wait_time = reset_timestamp - current_timestamp + 1
                logger.info("Using x-ratelimit-reset header", wait_time=wait_time, function=function_name)
        except ValueError:
            logger.warning("Invalid x-ratelimit-reset header value", rate_limit_reset=rate_limit_reset, function=function_name)
    return wait_time


def retry_on_rate_limit(
    max_retries: int | None = None,
    initial_delay: float = 10.0,
    max_delay: float = 300.0,
    exponential_base: float = 2.0,
) -> Callable[[F], F]:
    """Decorator for retrying async functions when they encounter GitHub rate limits.

    This decorator handles:
    - GitHub primary and secondary rate limit exceptions
    - 403/429 responses, respecting retry-after and x-ratelimit-reset headers

    Args:
        max_retries: Maximum number of retry attempts. When None, the
            ``rate_limit_retries`` attribute of the bound instance is used.
        initial_delay: Initial delay in seconds between retries (default: 10.0)
        max_delay: Maximum delay in seconds between retries (default: 300.0)
        exponential_base: Base for exponential backoff calculation (default: 2.0)

    Returns:
        Decorated function with retry logic
    """

    def decorator(func: F) -> F:
        if not asyncio.iscoroutinefunction(func):
            raise TypeError(f"Function {func.__name__} decorated with @retry_on_rate_limit must be async.")

        @functools.wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            retries = _resolve_max_retries(max_retries, args)
            delay = initial_delay

            for attempt in range(retries + 1):
                try:
                    return await func(*args, **kwargs)
                except (PrimaryRateLimitExceeded, SecondaryRateLimitExceeded) as e:
                    if attempt == retries:
                        logger.error(
                            "Max retries reached for GitHub rate limit error",
                            function=func.__name__,
                            attempt=attempt + 1,
                            error_type=type(e).__name__,
                        )
                        raise

                    if getattr(e, "retry_after", None):
                        wait_time = min(e.retry_after.total_seconds(), max_delay)
                    else:
                        wait_time = min(delay, max_delay)

                    logger.warning(
                        f"GitHub rate limit exceeded, waiting {wait_time} seconds",
                        function=func.__name__,
                        rate_limit_type="primary" if isinstance(e, PrimaryRateLimitExceeded) else "secondary",
                        attempt=attempt + 1,
                        max_retries=retries,
                        wait_time=wait_time,
                    )
                    await asyncio.sleep(wait_time)
                    delay = min(delay * exponential_base, max_delay)

                except RequestFailed as e:
                    is_rate_limit = e.response.status_code == 429 or (e.response.status_code == 403 and "rate limit" in str(e).lower())
                    if not is_rate_limit:
                        raise

                    if attempt == retries:
                        logger.error(
                            "Max retries reached for rate limit error",
                            function=func.__name__,
                            attempt=attempt + 1,
                            status_code=e.response.status_code,
                            error=str(e),
                        )
                        raise

                    wait_time = min(_wait_time_from_headers(e, delay, func.__name__), max_delay)
                    logger.warning(
                        f"Rate limit hit, retrying in {wait_time} seconds",
                        function=func.__name__,
                        attempt=attempt + 1,
                        max_retries=retries,
                        wait_time=wait_time,
                        status_code=e.response.status_code,
                    )
                    await asyncio.sleep(wait_time)
                    delay = min(delay * exponential_base, max_delay)

        return async_wrapper  # type: ignore

    return decorator
