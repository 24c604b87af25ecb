from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Mapping

import httpx

from .errors import ProviderDecodeError, ProviderRequestError

logger = logging.getLogger(__name__)


@dataclass
class AsyncHttpClient:
    """
    HTTP client wrapper shared by every pipeline task of a run.

    - Uses a single underlying httpx.AsyncClient for connection pooling.
    - Bounds in-flight requests with a semaphore.
    - Provides consistent error handling.
    """

    base_url: str
    timeout_s: float = 30.0
    connect_timeout_s: float = 10.0
    max_concurrent_requests: int = 32

    transport: httpx.AsyncBaseTransport | None = None

    def __post_init__(self) -> None:
        self._client = httpx.AsyncClient(
            base_url=self.base_url.rstrip("/") + "/",
            timeout=httpx.Timeout(self.timeout_s, connect=self.connect_timeout_s),
            limits=httpx.Limits(max_connections=self.max_concurrent_requests),
            transport=self.transport,
        )
        self._semaphore = asyncio.Semaphore(self.max_concurrent_requests)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> AsyncHttpClient:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def get_json_value(
        self,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        """
        GET a path and return the parsed JSON body, whatever its shape.
        Raises ProviderRequestError on transport issues / non-2xx and
        ProviderDecodeError when the body is not JSON.
        """
        async with self._semaphore:
            try:
                resp = await self._client.get(path.lstrip("/"), params=params)
            except httpx.RequestError as e:
                raise ProviderRequestError(f"GET {path} failed: {e}") from e

        logger.debug("GET %s -> %s", resp.request.url, resp.status_code)

        try:
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ProviderRequestError(
                f"HTTP {resp.status_code} for GET {resp.request.url}"
            ) from e

        try:
            return resp.json()
        except ValueError as e:
            raise ProviderDecodeError(f"Response from {resp.request.url} was not valid JSON.") from e
