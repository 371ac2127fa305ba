from typing import Optional

from biasdetector.config import settings
from biasdetector.enrichment import EnrichmentProvider


def get_provider(provider_name: str = "http") -> Optional[EnrichmentProvider]:
    """Return the configured enrichment provider, or None for "none"."""
    if provider_name == "http":
        from biasdetector.enrichment.service import HTTPEnrichmentProvider
        return HTTPEnrichmentProvider(
            ai_detector_url=settings.AI_DETECTOR_URL,
            claim_detector_url=settings.CLAIM_DETECTOR_URL,
            api_key=settings.ENRICHMENT_API_KEY,
            timeout=settings.ENRICHMENT_TIMEOUT,
        )
    elif provider_name == "gemini":
        from biasdetector.enrichment.gemini import GeminiEnrichmentProvider
        return GeminiEnrichmentProvider(
            api_key=settings.GEMINI_API_KEY,
            model=settings.GEMINI_MODEL,
        )
    elif provider_name == "none":
        return None
    else:
        raise ValueError(f"Unknown enrichment provider: {provider_name}")
