"""
Retrying HTTP fetch used for every off-chain call.

Each attempt is bounded by a hard timeout (the in-flight request is
cancelled when it expires). Failures are classified before deciding
whether to try again:

- HTTP 4xx -> ClientError, terminal, never retried
- HTTP 5xx -> ServerError, retried
- timeouts, connection errors, unreadable bodies -> NetworkError, retried

The fetcher never raises for network problems. It returns a Result whose
``status`` is the HTTP status on success or on a terminal 4xx, and 0 when
retries were exhausted without a usable answer.
"""

import asyncio
import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import httpx

from seas_toolkit.shared.exceptions import (
    ClientError,
    NetworkError,
    RetryableException,
    ServerError,
)
from seas_toolkit.shared.logging import get_logger
from seas_toolkit.shared.results import Result
from seas_toolkit.shared.retry import HTTP_RETRY_CONFIG, retry_async_operation
from seas_toolkit.shared.services.http_client import (
    DEFAULT_JSON_HEADERS,
    DEFAULT_TIMEOUT,
    get_async_client,
)

logger = get_logger(__name__)


@dataclass
class FetchOptions:
    """Per-call fetch settings. Durations are in seconds."""

    method: str = "GET"
    headers: Dict[str, str] = field(
        default_factory=lambda: dict(DEFAULT_JSON_HEADERS)
    )
    body: Any = None
    timeout: float = DEFAULT_TIMEOUT
    retries: int = HTTP_RETRY_CONFIG.max_attempts - 1
    retry_delay: float = HTTP_RETRY_CONFIG.base_delay
    exponential: bool = False
    jitter: bool = False


class RetryingFetcher:
    """Timeout + bounded retry wrapper around an httpx.AsyncClient."""

    def __init__(self, client: Optional[httpx.AsyncClient] = None):
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client or get_async_client()

    async def fetch(
        self, url: str, options: Optional[FetchOptions] = None
    ) -> Result[Any]:
        """
        Fetch ``url`` and parse the JSON body.

        Args:
            url: Absolute URL to request
            options: FetchOptions, defaults to GET with three retries

        Returns:
            Result with the parsed body on success, or the last error message
        """
        config = options or FetchOptions()
        total_attempts = config.retries + 1
        attempts: List[int] = []

        try:
            data, status = await retry_async_operation(
                self._attempt,
                url,
                config,
                attempts,
                max_attempts=total_attempts,
                base_delay=config.retry_delay,
                exponential=config.exponential,
                jitter=config.jitter,
                retryable_exceptions=(RetryableException,),
                operation_name=f"{config.method} {url}",
            )
        except ClientError as e:
            logger.error(f"Client error from {url} - not retrying: {e}")
            return Result.fail_with_message(
                source="fetch",
                message=e.message,
                context={"url": url, "attempts": len(attempts)},
                exception=e,
                status=e.status,
            )
        except RetryableException as e:
            logger.error(
                f"All {total_attempts} request attempts to {url} failed. "
                f"Last error: {e}"
            )
            return Result.fail_with_message(
                source="fetch",
                message=e.message or "Unknown error occurred",
                context={"url": url, "attempts": len(attempts)},
                exception=e,
                status=0,
            )

        logger.debug(f"Request to {url} succeeded on attempt {len(attempts)}")
        return Result.ok(data, status=status)

    async def get_json(self, url: str, **overrides: Any) -> Result[Any]:
        return await self.fetch(url, FetchOptions(method="GET", **overrides))

    async def post_json(
        self, url: str, body: Any, **overrides: Any
    ) -> Result[Any]:
        return await self.fetch(
            url, FetchOptions(method="POST", body=body, **overrides)
        )

    async def _attempt(
        self, url: str, config: FetchOptions, attempts: List[int]
    ) -> Any:
        attempts.append(len(attempts) + 1)
        logger.info(
            f"Request attempt {len(attempts)}/{config.retries + 1} "
            f"to: {url}"
        )

        content = None
        if config.method != "GET" and config.body is not None:
            content = (
                config.body
                if isinstance(config.body, str)
                else json.dumps(config.body)
            )

        try:
            response = await asyncio.wait_for(
                self.client.request(
                    config.method,
                    url,
                    headers=config.headers,
                    content=content,
                ),
                timeout=config.timeout,
            )
        except asyncio.TimeoutError:
            raise NetworkError(f"Request timeout after {config.timeout}s")
        except httpx.TimeoutException as e:
            raise NetworkError(f"Request timeout: {e}")
        except httpx.TransportError as e:
            raise NetworkError(f"Network error: {e}")
        except httpx.RequestError as e:
            raise NetworkError(f"Request failed: {e}")

        status = response.status_code
        if 400 <= status < 500:
            raise ClientError(
                f"HTTP error! status: {status} - {response.reason_phrase}",
                status,
            )
        if not response.is_success:
            raise ServerError(
                f"HTTP error! status: {status} - {response.reason_phrase}",
                status,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise NetworkError(f"Invalid JSON response: {e}")

        return data, status
