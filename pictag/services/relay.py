import logging
import os

import httpx

from pictag.config import Settings, get_settings
from pictag.models.schemas import ClassificationRequest

logger = logging.getLogger(__name__)


class RelayError(Exception):
    """Base error for a relay call that cannot return the upstream body."""


class ClientInputError(RelayError):
    """Raised when the caller sent no request body."""


class UpstreamTransportError(RelayError):
    """Raised when the upstream could not be reached (DNS, connect, protocol)."""


class UpstreamTimeoutError(RelayError):
    """Raised when the upstream did not answer within the configured timeout."""


class UpstreamApplicationError(RelayError):
    def __init__(self, status_code: int, body: bytes, content_type: str | None = None) -> None:
        self.status_code = status_code
        self.body = body
        self.content_type = content_type
        super().__init__(f"Upstream returned status {status_code}")


def resolve_api_key(settings: Settings) -> str | None:
    """Frida:ApiKey from configuration, else the FRIDA_API_KEY environment variable."""
    for candidate in (settings.frida.api_key, os.getenv("FRIDA_API_KEY")):
        if candidate and candidate.strip():
            return candidate.strip()
    return None


class RelayService:
    def __init__(self, settings: Settings | None = None, transport: httpx.AsyncBaseTransport | None = None):
        self.settings = settings or get_settings()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def start(self):
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.settings.upstream_timeout),
            transport=self._transport,
        )

    async def stop(self):
        if self._client:
            await self._client.aclose()
            self._client = None

    def build_headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        api_key = resolve_api_key(self.settings)
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"
        else:
            logger.debug("No Frida API key configured, forwarding request unauthenticated")
        return headers

    async def forward(self, payload: ClassificationRequest | None) -> bytes:
        """Forward a classification request upstream and return the raw body."""
        if payload is None:
            raise ClientInputError("Request body is required.")
        if self._client is None:
            await self.start()

        body = payload.to_upstream()
        logger.info(
            "Forwarding completion request (model=%s, messages=%d)",
            payload.model, len(payload.messages or []),
        )
        try:
            resp = await self._client.post(
                self.settings.frida_completions_url,
                json=body,
                headers=self.build_headers(),
            )
        except httpx.TimeoutException as e:
            logger.error("Upstream request timed out: %s", e)
            raise UpstreamTimeoutError("Upstream request timed out.") from e
        except httpx.RequestError as e:
            logger.error("Upstream request failed: %s", e)
            raise UpstreamTransportError(f"Upstream request failed: {e}") from e

        if not resp.is_success:
            logger.warning("Upstream returned %d: %s", resp.status_code, resp.text[:200])
            raise UpstreamApplicationError(
                resp.status_code, resp.content, resp.headers.get("content-type")
            )
        return resp.content
