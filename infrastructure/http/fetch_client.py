import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime

import httpx
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_incrementing

from domain.exceptions.gold import FetchError

logger = logging.getLogger(__name__)


class FetchClient:
    """Single GET with a hard per-attempt timeout, bounded retries and linear backoff."""

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        timeout: float = 6.0,
        retries: int = 2,
        backoff_base: float = 0.3,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.timeout = timeout
        self.retries = retries
        self.backoff_base = backoff_base
        self._sleep = sleep
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            headers={"accept": "application/json"},
            follow_redirects=True,
            limits=httpx.Limits(max_keepalive_connections=5, max_connections=10),
        )

    @property
    def max_attempts(self) -> int:
        return self.retries + 1

    async def fetch(
        self, url: str, params: dict | None = None, headers: dict | None = None
    ) -> str:
        """Return the raw body of the first 2xx response, or raise FetchError."""
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            # backoff_base x attempt number: 0.3s, 0.6s, ...
            wait=wait_incrementing(start=self.backoff_base, increment=self.backoff_base),
            retry=retry_if_exception_type(FetchError),
            sleep=self._sleep,
            reraise=True,
        )

        body = ""
        try:
            async for attempt in retrying:
                with attempt:
                    body = await self._attempt(
                        url, params, headers, attempt.retry_state.attempt_number
                    )
        except FetchError as e:
            e.attempts = self.max_attempts
            logger.error(
                f"GET {url} failed after {e.attempts} attempts: {e.reason}",
                extra={"extra_data": {"url": url, "attempts": e.attempts, "status_code": e.status_code}},
            )
            raise

        return body

    async def _attempt(
        self, url: str, params: dict | None, headers: dict | None, attempt_number: int
    ) -> str:
        start_time = datetime.now()
        try:
            async with asyncio.timeout(self.timeout):
                response = await self._client.get(url, params=params, headers=headers)
        except TimeoutError as e:
            raise self._attempt_failed(
                url, attempt_number, start_time, f"Timeout after {self.timeout}s"
            ) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise self._attempt_failed(
                url, attempt_number, start_time, f"Request failed: {e.__class__.__name__}"
            ) from e

        if not response.is_success:
            raise self._attempt_failed(
                url,
                attempt_number,
                start_time,
                f"HTTP {response.status_code}: {response.text[:200]}",
                status_code=response.status_code,
            )

        return response.text

    def _attempt_failed(
        self,
        url: str,
        attempt_number: int,
        start_time: datetime,
        reason: str,
        status_code: int | None = None,
    ) -> FetchError:
        response_time_ms = int((datetime.now() - start_time).total_seconds() * 1000)
        logger.warning(
            f"GET {url} attempt {attempt_number}/{self.max_attempts} failed: {reason}",
            extra={
                "extra_data": {
                    "url": url,
                    "attempt": attempt_number,
                    "response_time_ms": response_time_ms,
                    "status_code": status_code,
                }
            },
        )
        return FetchError(url, reason, status_code=status_code, attempts=attempt_number)

    async def close(self) -> None:
        """Cleanly close the HTTP client."""
        await self._client.aclose()
