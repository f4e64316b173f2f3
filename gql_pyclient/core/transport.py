"""Transport executor: one HTTP round-trip per GraphQL request."""

import asyncio
import logging
from dataclasses import dataclass

import httpx

from .errors import ReadError, TransportError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RawResponse:
    """Undecoded response body and status code."""

    body: bytes
    status_code: int

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


class TransportExecutor:
    """Sends requests over an ``httpx.AsyncClient`` and reads the full body.

    The response is always closed, whether the body was read, the read failed,
    or the deadline expired midway.
    """

    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    async def execute(self, request: httpx.Request, timeout: float | None = None) -> RawResponse:
        """Send the request and read its body within ``timeout`` seconds.

        Raises:
            TransportError: If sending failed or the deadline expired
            ReadError: If the body could not be fully read
        """
        try:
            return await asyncio.wait_for(self._round_trip(request), timeout)
        except asyncio.TimeoutError as e:
            raise TransportError(f"request failed: deadline of {timeout}s exceeded") from e

    async def _round_trip(self, request: httpx.Request) -> RawResponse:
        logger.debug("POST %s", request.url)
        try:
            response = await self.client.send(request, stream=True)
        except httpx.HTTPError as e:
            raise TransportError(f"request failed: {type(e).__name__}: {e}") from e

        try:
            body = await response.aread()
        except httpx.HTTPError as e:
            raise ReadError(f"failed to read response body: {type(e).__name__}: {e}") from e
        finally:
            await response.aclose()

        logger.debug("Received HTTP %d (%d bytes) from %s", response.status_code, len(body), request.url)
        return RawResponse(body=body, status_code=response.status_code)
