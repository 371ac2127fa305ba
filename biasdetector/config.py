"""
BiasDetector Configuration

Central settings loaded from environment variables.
"""

import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Immutable application settings."""

    # --- Versioning ---
    VERSION: str = "1.0.0"

    # --- Enrichment services ---
    # "http" | "gemini" | "none"
    ENRICHMENT_PROVIDER: str = os.getenv("BIASDETECTOR_ENRICHMENT_PROVIDER", "http")
    AI_DETECTOR_URL: str = os.getenv("BIASDETECTOR_AI_DETECTOR_URL", "")
    CLAIM_DETECTOR_URL: str = os.getenv("BIASDETECTOR_CLAIM_DETECTOR_URL", "")
    ENRICHMENT_API_KEY: str = os.getenv("BIASDETECTOR_ENRICHMENT_API_KEY", "")
    ENRICHMENT_TIMEOUT: float = float(os.getenv("BIASDETECTOR_ENRICHMENT_TIMEOUT", "10"))

    # --- Gemini (alternative enrichment backend) ---
    GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")

    # --- Result cache ---
    CACHE_TTL: int = int(os.getenv("BIASDETECTOR_CACHE_TTL", "3600"))
    CACHE_MAX_ENTRIES: int = int(os.getenv("BIASDETECTOR_CACHE_MAX_ENTRIES", "500"))

    # --- Server ---
    HOST: str = os.getenv("BIASDETECTOR_HOST", "0.0.0.0")
    PORT: int = int(os.getenv("BIASDETECTOR_PORT", "8000"))

    # --- CORS ---
    CORS_ORIGINS: str = os.getenv("BIASDETECTOR_CORS_ORIGINS", "*")


settings = Settings()
