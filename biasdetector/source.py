"""
Source Reliability Classifier

Maps an optional source URL to a reliability verdict using the domain
patterns in the Lexicon. Categories are tested in a fixed order and the
first match wins:

  government (0.95) → international (0.95) → education (0.90)
  → news (0.85) → scientific (0.95)

Unmatched hosts fall through two heuristics:
  - host contains "news" / "times" / "daily" → unverified news-like (0.6)
  - anything else → not recognized (0.7)

Missing or malformed input is never an error; both return 0.5.
"""

from __future__ import annotations

import re
from typing import Optional
from urllib.parse import urlsplit

from biasdetector.lexicon import DEFAULT_LEXICON, Lexicon
from biasdetector.models import SourceAnalysis

NO_SOURCE_CONFIDENCE = 0.5
INVALID_SOURCE_CONFIDENCE = 0.5
NEWS_LIKE_CONFIDENCE = 0.6
UNRECOGNIZED_CONFIDENCE = 0.7

_HOSTNAME = re.compile(r"^(?=.{1,253}$)(?:[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?\.)+[a-z]{2,63}$")

CATEGORY_LABELS: dict[str, str] = {
    "government": "government",
    "international": "international organization",
    "education": "educational institution",
    "news": "established news organization",
    "scientific": "scientific publisher",
}


def extract_hostname(source_url: str) -> Optional[str]:
    """
    Return the lowercase hostname of `source_url`, or None if malformed.

    A value without a scheme ("www.who.int/news") is read as https.
    """
    raw = source_url.strip()
    if not raw or any(ch.isspace() for ch in raw):
        return None
    if "://" not in raw:
        raw = f"https://{raw}"

    try:
        parts = urlsplit(raw)
        hostname = parts.hostname
    except ValueError:
        return None

    if parts.scheme not in ("http", "https") or not hostname:
        return None
    if not _HOSTNAME.match(hostname):
        return None
    return hostname


class SourceReliabilityClassifier:
    """Deterministic domain classification over a Lexicon."""

    def __init__(self, lexicon: Lexicon = DEFAULT_LEXICON):
        self.lexicon = lexicon
        self._patterns: list[tuple[str, list[re.Pattern]]] = [
            (category, [re.compile(p) for p in lexicon.source_patterns[category]])
            for category in lexicon.source_categories
        ]

    def classify(self, source_url: Optional[str] = None) -> SourceAnalysis:
        if source_url is None or not source_url.strip():
            return SourceAnalysis(
                is_reliable=False,
                confidence=NO_SOURCE_CONFIDENCE,
                explanation="No source provided",
            )

        hostname = extract_hostname(source_url)
        if hostname is None:
            return SourceAnalysis(
                is_reliable=False,
                confidence=INVALID_SOURCE_CONFIDENCE,
                explanation="Invalid source format",
            )

        category = self.match_category(hostname)
        if category is not None:
            label = CATEGORY_LABELS.get(category, category)
            return SourceAnalysis(
                is_reliable=True,
                category=category,
                confidence=self.lexicon.source_confidence[category],
                explanation=f"{hostname} is a recognized {label} source.",
            )

        if any(token in hostname for token in self.lexicon.news_like_tokens):
            return SourceAnalysis(
                is_reliable=False,
                confidence=NEWS_LIKE_CONFIDENCE,
                explanation=(
                    f"{hostname} appears to be a news outlet but is not among "
                    f"recognized reliable sources."
                ),
            )

        return SourceAnalysis(
            is_reliable=False,
            confidence=UNRECOGNIZED_CONFIDENCE,
            explanation=f"{hostname} is not recognized as a reliable source.",
        )

    def match_category(self, hostname: str) -> Optional[str]:
        """First category whose patterns match `hostname`, in category order."""
        for category, patterns in self._patterns:
            if any(p.search(hostname) for p in patterns):
                return category
        return None

    def get_categories(self) -> list[dict]:
        """Expose the classification table (used by GET /sources)."""
        return [
            {
                "category": category,
                "confidence": self.lexicon.source_confidence[category],
                "patterns": list(self.lexicon.source_patterns[category]),
            }
            for category in self.lexicon.source_categories
        ]


# ============================================================
# SINGLETON
# ============================================================

source_classifier = SourceReliabilityClassifier()
