"""
Gemini Enrichment Provider — Google Gemini as the detector backend.

Uses the google.genai SDK to stand in for the two hosted detectors when
no dedicated services are deployed. The model is asked for the same
payload shapes the HTTP services return, so the gateway treats both
backends identically.

Client is lazily initialized: the app loads without an API key and only
fails on an actual call.

Features:
- Circuit breaker: after consecutive failures, fail fast for 60s so the
  engine degrades to text-only signals instead of waiting on timeouts.
"""

from __future__ import annotations

import logging
import os
import time
from typing import Any, Optional

from google import genai
from google.genai import types

from biasdetector.enrichment import EnrichmentProvider, parse_json_payload

logger = logging.getLogger("biasdetector.enrichment.gemini")

# Breaker opens after this many consecutive failures and stays open this long
BREAKER_FAILURES = 3
BREAKER_COOLDOWN_SECONDS = 60

# Keep prompts bounded; detectors only need a representative sample
_MAX_PROMPT_CHARS = 12_000


AI_AUTHORSHIP_PROMPT = """You are an AI-authorship detector for news articles.

Estimate the probability that the following article was written by a
language model rather than a human journalist.

## Article
{text}

Return ONLY valid JSON: {{"score": <float between 0.0 and 1.0>}}"""


CLAIM_DETECTION_PROMPT = """You are a check-worthy claim detector for news articles.

List the sentences from the article that contain verifiable factual
assertions worth checking, in the order they appear. Score each from
0.0 (not worth checking) to 1.0 (must be checked). Copy each sentence
verbatim.

## Article
{text}

Return ONLY a valid JSON array: [{{"text": "<sentence>", "score": <float>}}]"""


class CircuitBreaker:
    """
    Fail fast after repeated Gemini errors.

    States: "closed" (calls allowed), "open" (calls refused until the
    cooldown elapses), "half-open" (one trial call; success closes,
    failure re-opens).
    """

    def __init__(
        self,
        failure_threshold: int = BREAKER_FAILURES,
        recovery_timeout: float = BREAKER_COOLDOWN_SECONDS,
    ):
        self.failure_threshold = failure_threshold
        self.recovery_timeout = recovery_timeout
        self.consecutive_failures = 0
        self._opened_at: Optional[float] = None

    @property
    def state(self) -> str:
        if self._opened_at is None:
            return "closed"
        if time.monotonic() - self._opened_at >= self.recovery_timeout:
            return "half-open"
        return "open"

    @property
    def is_open(self) -> bool:
        return self.state == "open"

    def record_success(self) -> None:
        self.consecutive_failures = 0
        self._opened_at = None

    def record_failure(self) -> None:
        self.consecutive_failures += 1
        if self.consecutive_failures >= self.failure_threshold:
            self._opened_at = time.monotonic()
            logger.warning(
                "Gemini circuit open after %d consecutive failures; "
                "enrichment skipped for %ss",
                self.consecutive_failures, self.recovery_timeout,
            )


class CircuitOpenError(Exception):
    """A call was refused because the breaker is open."""


class GeminiEnrichmentProvider(EnrichmentProvider):
    """Google Gemini detector backend with a circuit breaker."""

    name = "gemini"

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        self._api_key = api_key or os.getenv("GEMINI_API_KEY", "")
        self._model = model or os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
        self._client: Optional[genai.Client] = None
        self.circuit_breaker = CircuitBreaker()

    def _get_client(self) -> genai.Client:
        if self._client is None:
            if not self._api_key:
                raise RuntimeError(
                    "GEMINI_API_KEY is not set; the gemini enrichment provider needs one."
                )
            self._client = genai.Client(api_key=self._api_key)
        return self._client

    async def _generate_json(self, prompt: str) -> Any:
        if self.circuit_breaker.is_open:
            raise CircuitOpenError(
                "Gemini enrichment suspended after repeated failures"
            )

        config = types.GenerateContentConfig(
            temperature=0.0,
            response_mime_type="application/json",
        )
        try:
            response = await self._get_client().aio.models.generate_content(
                model=self._model,
                contents=prompt,
                config=config,
            )
            payload = parse_json_payload(response.text or "")
        except Exception:
            self.circuit_breaker.record_failure()
            raise
        self.circuit_breaker.record_success()
        return payload

    async def detect_ai_authorship(self, text: str) -> Any:
        return await self._generate_json(
            AI_AUTHORSHIP_PROMPT.format(text=text[:_MAX_PROMPT_CHARS]),
        )

    async def detect_claims(self, text: str) -> Any:
        return await self._generate_json(
            CLAIM_DETECTION_PROMPT.format(text=text[:_MAX_PROMPT_CHARS]),
        )
