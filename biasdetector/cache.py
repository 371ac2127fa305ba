"""
Result Cache

Identical articles (every field equal) map to the same SHA-256 key, so a
re-submitted article is answered from memory instead of paying for two
more enrichment calls. Entries expire after `ttl_seconds`; when full,
the entry stored longest ago is dropped.

    cached = await result_cache.get(article)
    if cached is None:
        cached = await engine.score(article)
        if not cached.enrichment_degraded:
            await result_cache.put(article, cached)
"""

from __future__ import annotations

import asyncio
import hashlib
import time
from typing import Optional

from biasdetector.config import settings
from biasdetector.models import AnalysisResult, Article

_FIELD_SEPARATOR = "\x1f"


def article_key(article: Article) -> str:
    fields = (article.title, article.content, article.source, article.author, article.date)
    raw = _FIELD_SEPARATOR.join(f or "" for f in fields)
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()


class ResultCache:
    """TTL + size-bounded map from article key to AnalysisResult."""

    def __init__(self, ttl_seconds: int = 3600, max_entries: int = 500):
        self._ttl = ttl_seconds
        self._max_entries = max_entries
        self._entries: dict[str, tuple[float, AnalysisResult]] = {}
        self._lock = asyncio.Lock()
        self._hits = 0
        self._misses = 0

    def _expired(self, stored_at: float) -> bool:
        return time.monotonic() - stored_at > self._ttl

    async def get(self, article: Article) -> Optional[AnalysisResult]:
        key = article_key(article)
        async with self._lock:
            entry = self._entries.get(key)
            if entry is not None and self._expired(entry[0]):
                del self._entries[key]
                entry = None
            if entry is None:
                self._misses += 1
                return None
            self._hits += 1
            return entry[1]

    async def put(self, article: Article, result: AnalysisResult) -> None:
        key = article_key(article)
        async with self._lock:
            if key not in self._entries and len(self._entries) >= self._max_entries:
                oldest = min(self._entries.items(), key=lambda item: item[1][0])[0]
                del self._entries[oldest]
            self._entries[key] = (time.monotonic(), result)

    async def clear(self) -> None:
        async with self._lock:
            self._entries.clear()
            self._hits = self._misses = 0

    @property
    def stats(self) -> dict:
        lookups = self._hits + self._misses
        return {
            "entries": len(self._entries),
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": round(self._hits / lookups, 3) if lookups else 0.0,
        }


result_cache = ResultCache(
    ttl_seconds=settings.CACHE_TTL, max_entries=settings.CACHE_MAX_ENTRIES,
)
