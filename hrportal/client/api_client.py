"""Async HTTP client for the HR portal API with single-flight token refresh.

Credentials travel in HTTP-only cookies, so the client never sees the tokens.
When a request fails with 401 (access token expired), the client performs
one POST to the refresh endpoint, which rotates both cookies, and replays the
request once.

Many requests can fail at the same moment when the access token expires. Only
the first one runs the refresh exchange; the others wait in a queue and are
replayed (or failed) when that exchange settles. The flag and the queue
belong to the client instance and are only touched between awaits on a
single event loop, so no lock is needed.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, List, Optional

import httpx

from hrportal.client.errors import ApiError, RefreshExchangeError

logger = logging.getLogger(__name__)

DEFAULT_REFRESH_PATH = "/auth/refresh"


class ApiClient:
    """Cookie-authenticated API client.

    Attributes:
        refresh_count: Number of refresh exchanges performed by this client.

    Example:
        >>> async with ApiClient("http://localhost:8000") as client:
        ...     response = await client.get("/auth/status")
    """

    def __init__(
        self,
        base_url: str,
        *,
        refresh_path: str = DEFAULT_REFRESH_PATH,
        refresh_timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 30.0,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: API root, e.g. "http://localhost:8000".
            refresh_path: Path of the refresh endpoint relative to base_url.
            refresh_timeout: Upper bound in seconds for one refresh exchange.
                None waits as long as the HTTP timeout allows.
            transport: Optional httpx transport (tests, ASGI apps).
            timeout: Per-request HTTP timeout in seconds.
        """
        self._client = httpx.AsyncClient(base_url=base_url, transport=transport, timeout=timeout)
        self._refresh_path = refresh_path
        self._refresh_timeout = refresh_timeout
        self._refreshing = False
        self._queue: List[asyncio.Future] = []
        self.refresh_count = 0

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    @property
    def cookies(self) -> httpx.Cookies:
        return self._client.cookies

    @property
    def is_refreshing(self) -> bool:
        return self._refreshing

    # ------------------------------------------------------------------ #
    # public request API
    # ------------------------------------------------------------------ #
    async def request(self, method: str, url: str, *, skip_refresh: bool = False, **kwargs: Any) -> httpx.Response:
        """Send a request, refreshing the session once on 401.

        Args:
            skip_refresh: Surface a 401 directly, as for an already retried
                request. Used by calls that present credentials themselves.

        Raises:
            ApiError: The response was not 2xx (after at most one retry).
            RefreshExchangeError: A refresh was needed and failed.
        """
        return await self._send(method, url, kwargs, retried=skip_refresh)

    async def get(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("GET", url, **kwargs)

    async def post(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("POST", url, **kwargs)

    async def put(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("PUT", url, **kwargs)

    async def delete(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("DELETE", url, **kwargs)

    # ------------------------------------------------------------------ #
    # refresh coordination
    # ------------------------------------------------------------------ #
    async def _send(self, method: str, url: str, kwargs: dict, *, retried: bool) -> httpx.Response:
        # rebuilt from arguments on every attempt so rotated cookies are picked up
        response = await self._client.request(method, url, **kwargs)
        if response.is_success:
            return response

        error = ApiError.from_response(response)
        if not error.is_auth_failure or retried or self._is_refresh_request(response):
            raise error

        if self._refreshing:
            waiter = asyncio.get_running_loop().create_future()
            self._queue.append(waiter)
            await waiter
            return await self._send(method, url, kwargs, retried=True)

        self._refreshing = True
        try:
            await self._exchange_refresh()
        except RefreshExchangeError as exc:
            self._settle_queue(exc)
            raise
        else:
            self._settle_queue(None)
        finally:
            self._refreshing = False
            # only non-empty if the exchange was cancelled
            self._settle_queue(RefreshExchangeError("Token refresh was interrupted."))

        return await self._send(method, url, kwargs, retried=True)

    async def _exchange_refresh(self) -> None:
        self.refresh_count += 1
        try:
            response = await asyncio.wait_for(
                self._client.post(self._refresh_path),
                timeout=self._refresh_timeout,
            )
        except asyncio.TimeoutError as exc:
            logger.error("Unable to refresh token: timed out after %ss", self._refresh_timeout)
            raise RefreshExchangeError("Token refresh timed out.") from exc
        except httpx.HTTPError as exc:
            logger.error("Unable to refresh token: %s", exc)
            raise RefreshExchangeError(f"Token refresh failed: {exc}") from exc

        if not response.is_success:
            failure = RefreshExchangeError.from_response(response)
            logger.error("Unable to refresh token: %s", failure.message)
            raise failure
        logger.debug("Session refreshed")

    def _settle_queue(self, error: Optional[RefreshExchangeError]) -> None:
        queue, self._queue = self._queue, []
        for waiter in queue:
            if waiter.done():
                continue
            if error is not None:
                waiter.set_exception(error.for_waiter())
            else:
                waiter.set_result(None)

    def _is_refresh_request(self, response: httpx.Response) -> bool:
        return response.request.url.path.rstrip("/").endswith(self._refresh_path.rstrip("/"))
