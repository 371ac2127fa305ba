"""
Enrichment Provider — Abstract Interface

The two external detectors (AI authorship, check-worthy claims) are
reached through this interface. Swap backends by changing
BIASDETECTOR_ENRICHMENT_PROVIDER in env.

Providers return the raw service payload and raise on any failure.
Normalization and safe defaults live in `biasdetector.gateway`.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import Any


class EnrichmentProvider(ABC):
    """Abstract base for enrichment backends."""

    name: str = "abstract"

    @abstractmethod
    async def detect_ai_authorship(self, text: str) -> Any:
        """Return a payload shaped like {"score": float}."""
        ...

    @abstractmethod
    async def detect_claims(self, text: str) -> Any:
        """Return a payload shaped like [{"text": str, "score": float}, ...]."""
        ...

    async def aclose(self) -> None:
        """Release network resources. Default: nothing to release."""
        return None


def parse_json_payload(text: str) -> Any:
    """Parse a JSON body, tolerating ```json fences around it."""
    cleaned = text.strip()
    if cleaned.startswith("```"):
        cleaned = cleaned.split("\n", 1)[-1].rsplit("```", 1)[0].strip()
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ValueError(
            f"Service returned invalid JSON: {e}. Raw response: {text[:300]}"
        ) from e
