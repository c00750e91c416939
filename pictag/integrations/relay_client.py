"""Async client for the pictag relay.

Used by the uploader pipeline and the command-line front end. HTTP errors
from the relay are raised as-is so callers decide how to degrade.
"""

import logging

import httpx

from pictag.config import get_settings
from pictag.models.schemas import ClassificationRequest, NormalizedResponse
from pictag.uploader.normalizer import normalize_response

logger = logging.getLogger(__name__)

COMPLETE_IMAGE_PATH = "/api/processimage/complete-image"


class RelayClient:
    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        settings = get_settings()
        self.base_url = base_url or settings.relay_base_url
        self.timeout = timeout if timeout is not None else settings.client_timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def start(self):
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport,
        )

    async def stop(self):
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "RelayClient":
        await self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.stop()

    async def complete_image(self, request: ClassificationRequest) -> NormalizedResponse:
        if self._client is None:
            await self.start()
        resp = await self._client.post(COMPLETE_IMAGE_PATH, json=request.to_upstream())
        resp.raise_for_status()
        data = resp.json()
        logger.debug("Relay response: %s", str(data)[:200])
        return normalize_response(data)
