"""
Enrichment Gateway

Thin, independently failing wrappers around the two external detectors.

  - detect_ai_authorship:      {"score": s} → AIDetectionResult(s > 0.8, s)
  - detect_checkworthy_claims: [{"text", "score"}] → list[CheckworthyClaim]

Any transport error, timeout, non-2xx status or malformed payload is
logged and converted to the documented default:

  - AI authorship → AIDetectionResult(False, 0.0)
  - claims        → []

Nothing raised by a provider ever reaches the caller. One attempt per
call, no retries.
"""

from __future__ import annotations

import asyncio
import logging
import math
from dataclasses import dataclass
from typing import Any, Optional

from biasdetector.enrichment import EnrichmentProvider
from biasdetector.models import AIDetectionResult, CheckworthyClaim

logger = logging.getLogger(__name__)

AI_GENERATED_THRESHOLD = 0.8
DEFAULT_TIMEOUT = 10.0


def _unit_score(value: Any) -> float:
    """Validate a service score. Raises ValueError if not a float in [0, 1]."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"score is not a number: {value!r}")
    score = float(value)
    if math.isnan(score) or not 0.0 <= score <= 1.0:
        raise ValueError(f"score out of range: {score}")
    return score


@dataclass(frozen=True)
class EnrichmentOutcome:
    ai_detection: AIDetectionResult
    claims: list[CheckworthyClaim]
    degraded: bool = False  # a configured service failed and a default was used


def parse_ai_payload(payload: Any) -> AIDetectionResult:
    if not isinstance(payload, dict) or "score" not in payload:
        raise ValueError("AI detector response missing 'score'")
    score = _unit_score(payload["score"])
    return AIDetectionResult(
        is_ai_generated=score > AI_GENERATED_THRESHOLD,
        confidence=score,
    )


def parse_claims_payload(payload: Any) -> list[CheckworthyClaim]:
    if not isinstance(payload, list):
        raise ValueError("claim detector response is not a list")
    claims = []
    for item in payload:
        if not isinstance(item, dict) or not isinstance(item.get("text"), str):
            raise ValueError(f"malformed claim entry: {item!r}")
        claims.append(CheckworthyClaim(text=item["text"], score=_unit_score(item.get("score"))))
    return claims


class EnrichmentGateway:
    """
    Wraps an EnrichmentProvider with timeouts and safe defaults.

    `provider=None` models a deployment with no enrichment services:
    both calls return their defaults without logging a failure.
    """

    def __init__(
        self,
        provider: Optional[EnrichmentProvider] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.provider = provider
        self.timeout = timeout

    @property
    def provider_name(self) -> str:
        return self.provider.name if self.provider else "none"

    async def _ai_authorship(self, text: str) -> tuple[AIDetectionResult, bool]:
        """(result, fell_back)"""
        if self.provider is None:
            return AIDetectionResult(), False
        try:
            payload = await asyncio.wait_for(
                self.provider.detect_ai_authorship(text), timeout=self.timeout,
            )
            return parse_ai_payload(payload), False
        except Exception as e:
            logger.warning(
                "AI authorship detection failed: %s", e,
                extra={"service": "ai_detector", "provider": self.provider_name,
                       "error": str(e), "error_type": type(e).__name__},
            )
            return AIDetectionResult(), True

    async def _checkworthy_claims(self, text: str) -> tuple[list[CheckworthyClaim], bool]:
        """(claims, fell_back)"""
        if self.provider is None:
            return [], False
        try:
            payload = await asyncio.wait_for(
                self.provider.detect_claims(text), timeout=self.timeout,
            )
            return parse_claims_payload(payload), False
        except Exception as e:
            logger.warning(
                "Check-worthy claim detection failed: %s", e,
                extra={"service": "claim_detector", "provider": self.provider_name,
                       "error": str(e), "error_type": type(e).__name__},
            )
            return [], True

    async def detect_ai_authorship(self, text: str) -> AIDetectionResult:
        result, _ = await self._ai_authorship(text)
        return result

    async def detect_checkworthy_claims(self, text: str) -> list[CheckworthyClaim]:
        claims, _ = await self._checkworthy_claims(text)
        return claims

    async def enrich(self, text: str) -> tuple[AIDetectionResult, list[CheckworthyClaim]]:
        """Run both detectors concurrently. Each degrades on its own."""
        outcome = await self.enrich_with_status(text)
        return outcome.ai_detection, outcome.claims

    async def enrich_with_status(self, text: str) -> EnrichmentOutcome:
        """Like `enrich`, but also reports whether either call fell back to its default."""
        (ai_detection, ai_failed), (claims, claims_failed) = await asyncio.gather(
            self._ai_authorship(text),
            self._checkworthy_claims(text),
        )
        return EnrichmentOutcome(ai_detection, claims, degraded=ai_failed or claims_failed)

    async def aclose(self) -> None:
        if self.provider is not None:
            await self.provider.aclose()
