"""
HTTP Enrichment Provider — hosted detector services over HTTP.

Both services take `{"text": ...}` as a JSON POST body:
  - AI-authorship detector  → {"score": 0.0-1.0, ...diagnostics}
  - claim detector          → [{"text": "...", "score": 0.0-1.0}, ...]

The httpx client is created lazily so the app loads without any
service configured and only fails on an actual call. One attempt per
call; the gateway decides what a failure means.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from biasdetector.enrichment import EnrichmentProvider

logger = logging.getLogger("biasdetector.enrichment.service")


class HTTPEnrichmentProvider(EnrichmentProvider):
    """Calls the two detector services with a shared AsyncClient."""

    name = "http"

    def __init__(
        self,
        ai_detector_url: Optional[str] = None,
        claim_detector_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._ai_url = ai_detector_url or ""
        self._claim_url = claim_detector_url or ""
        self._api_key = api_key or ""
        self._timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            headers = {"Accept": "application/json"}
            if self._api_key:
                headers["Authorization"] = f"Bearer {self._api_key}"
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                headers=headers,
                transport=self._transport,
            )
        return self._client

    async def _post(self, url: str, text: str, service: str) -> Any:
        if not url:
            raise RuntimeError(
                f"No URL configured for the {service} service. Set "
                f"BIASDETECTOR_{service.upper()}_URL."
            )
        response = await self._get_client().post(url, json={"text": text})
        logger.debug("%s responded %d", service, response.status_code)
        response.raise_for_status()
        return response.json()

    async def detect_ai_authorship(self, text: str) -> Any:
        return await self._post(self._ai_url, text, "ai_detector")

    async def detect_claims(self, text: str) -> Any:
        return await self._post(self._claim_url, text, "claim_detector")

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
