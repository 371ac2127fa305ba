"""
Tests for logging, configuration, caching, provider wiring and the CLI.
"""

import asyncio
import dataclasses
import json
import logging
import time

import pytest

from biasdetector.models import AnalysisResult, Article, DetailedFactualScores


class TestLogging:
    """Structured logging tests."""

    def test_json_formatter(self):
        from biasdetector.logging import JSONFormatter

        formatter = JSONFormatter()
        record = logging.LogRecord(
            name="biasdetector.test",
            level=logging.INFO,
            pathname="test.py",
            lineno=1,
            msg="Test message",
            args=(),
            exc_info=None,
        )
        parsed = json.loads(formatter.format(record))
        assert parsed["level"] == "INFO"
        assert parsed["message"] == "Test message"
        assert parsed["logger"] == "biasdetector.test"
        assert "timestamp" in parsed

    def test_json_formatter_extra_fields(self):
        from biasdetector.logging import JSONFormatter

        formatter = JSONFormatter()
        record = logging.LogRecord(
            name="biasdetector.test",
            level=logging.WARNING,
            pathname="test.py",
            lineno=1,
            msg="Service failed",
            args=(),
            exc_info=None,
        )
        record.overall_bias_score = 0.42
        record.service = "ai_detector"
        record.unrelated = "dropped"
        parsed = json.loads(formatter.format(record))
        assert parsed["overall_bias_score"] == 0.42
        assert parsed["service"] == "ai_detector"
        assert "unrelated" not in parsed

    def test_get_logger(self):
        from biasdetector.logging import get_logger
        log = get_logger("engine")
        assert log.name == "biasdetector.engine"

    def test_setup_logging_text(self):
        from biasdetector.logging import TextFormatter, setup_logging

        root = setup_logging(fmt="text", level="debug")
        try:
            assert root.level == logging.DEBUG
            assert len(root.handlers) == 1
            assert isinstance(root.handlers[0].formatter, TextFormatter)
        finally:
            root.handlers.clear()


class TestSettings:
    def test_frozen(self):
        from biasdetector.config import settings

        with pytest.raises(dataclasses.FrozenInstanceError):
            settings.VERSION = "9.9.9"

    def test_defaults(self):
        from biasdetector.config import Settings

        s = Settings()
        assert s.ENRICHMENT_PROVIDER in ("http", "gemini", "none")
        assert s.ENRICHMENT_TIMEOUT > 0
        assert s.CACHE_TTL > 0


def _result(summary: str = "ok") -> AnalysisResult:
    return AnalysisResult(
        summary=summary,
        overall_bias_score=0.0,
        overall_factual_score=0.5,
        detailed_factual_scores=DetailedFactualScores(0.5, 0.0, 0.0, 0.0, 0.5),
    )


class TestResultCache:
    def test_hit_and_miss(self):
        from biasdetector.cache import ResultCache

        async def scenario():
            cache = ResultCache(ttl_seconds=60, max_entries=10)
            article = Article(title="T", content="C")
            assert await cache.get(article) is None
            await cache.put(article, _result())
            assert await cache.get(article) == _result()
            return cache.stats

        stats = asyncio.run(scenario())
        assert stats["hits"] == 1
        assert stats["misses"] == 1
        assert stats["entries"] == 1

    def test_every_field_is_part_of_the_key(self):
        from biasdetector.cache import ResultCache

        async def scenario():
            cache = ResultCache()
            await cache.put(Article(title="T", content="C", source="https://a.com"), _result())
            return await cache.get(Article(title="T", content="C", source="https://b.com"))

        assert asyncio.run(scenario()) is None

    def test_ttl_expiry(self):
        from biasdetector.cache import ResultCache

        async def scenario():
            cache = ResultCache(ttl_seconds=0)
            article = Article(title="T", content="C")
            await cache.put(article, _result())
            time.sleep(0.01)
            return await cache.get(article)

        assert asyncio.run(scenario()) is None

    def test_evicts_oldest(self):
        from biasdetector.cache import ResultCache

        async def scenario():
            cache = ResultCache(max_entries=2)
            first = Article(title="1", content="C")
            await cache.put(first, _result("1"))
            await cache.put(Article(title="2", content="C"), _result("2"))
            await cache.put(Article(title="3", content="C"), _result("3"))
            return await cache.get(first), cache.stats["entries"]

        evicted, entries = asyncio.run(scenario())
        assert evicted is None
        assert entries == 2


class TestProviderFactory:
    def test_none(self):
        from biasdetector.enrichment.factory import get_provider
        assert get_provider("none") is None

    def test_http(self):
        from biasdetector.enrichment.factory import get_provider
        from biasdetector.enrichment.service import HTTPEnrichmentProvider
        assert isinstance(get_provider("http"), HTTPEnrichmentProvider)

    def test_gemini(self):
        from biasdetector.enrichment.factory import get_provider
        from biasdetector.enrichment.gemini import GeminiEnrichmentProvider
        assert isinstance(get_provider("gemini"), GeminiEnrichmentProvider)

    def test_unknown(self):
        from biasdetector.enrichment.factory import get_provider
        with pytest.raises(ValueError):
            get_provider("bogus")


class TestGeminiProvider:
    @pytest.mark.asyncio
    async def test_missing_key_degrades_through_gateway(self):
        from biasdetector.enrichment.gemini import GeminiEnrichmentProvider
        from biasdetector.gateway import EnrichmentGateway
        from biasdetector.models import AIDetectionResult

        provider = GeminiEnrichmentProvider(api_key="")
        provider._api_key = ""
        gateway = EnrichmentGateway(provider, timeout=1)
        ai_detection, claims = await gateway.enrich("text")
        assert ai_detection == AIDetectionResult(False, 0.0)
        assert claims == []

    def test_circuit_breaker_transitions(self):
        from biasdetector.enrichment.gemini import CircuitBreaker

        breaker = CircuitBreaker(failure_threshold=2, recovery_timeout=0)
        assert breaker.state == "closed"
        breaker.record_failure()
        assert breaker.state == "closed"
        breaker.record_failure()
        # Zero recovery timeout moves straight to half-open on read
        assert breaker.state == "half-open"
        breaker.record_success()
        assert breaker.state == "closed"

    def test_circuit_breaker_stays_open(self):
        from biasdetector.enrichment.gemini import CircuitBreaker

        breaker = CircuitBreaker(failure_threshold=1, recovery_timeout=60)
        breaker.record_failure()
        assert breaker.is_open

    @pytest.mark.asyncio
    async def test_open_circuit_fails_fast(self):
        from biasdetector.enrichment.gemini import CircuitOpenError, GeminiEnrichmentProvider

        provider = GeminiEnrichmentProvider(api_key="unused")
        for _ in range(provider.circuit_breaker.failure_threshold):
            provider.circuit_breaker.record_failure()
        with pytest.raises(CircuitOpenError):
            await provider.detect_ai_authorship("text")


class TestCLI:
    @pytest.fixture(autouse=True)
    def reset_logging(self):
        yield
        logging.getLogger("biasdetector").handlers.clear()

    def test_example_json(self, capsys):
        from biasdetector.cli import main

        assert main(["--example", "--offline", "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert "overallBiasScore" in data
        assert data["aiDetection"]["isAIGenerated"] is False
        assert data["sourceReliability"]["explanation"] == "Invalid source format"

    def test_json_file(self, tmp_path, capsys):
        from biasdetector.cli import main

        path = tmp_path / "article.json"
        path.write_text(json.dumps({
            "title": "Council sets schedule",
            "content": "According to the census, the council met on Tuesday.",
            "source": "https://www.cdc.gov/report",
        }))
        assert main([str(path), "--offline"]) == 0
        out = capsys.readouterr().out
        assert "ARTICLE CREDIBILITY REPORT" in out
        assert "reliable government source" in out

    def test_content_file(self, tmp_path, capsys):
        from biasdetector.cli import main

        body = tmp_path / "body.txt"
        body.write_text("The bridge reopened today.")
        assert main(["--title", "Bridge", "--content-file", str(body), "--offline", "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["sourceReliability"]["isReliable"] is False

    def test_missing_input(self, capsys):
        from biasdetector.cli import main

        assert main(["--offline"]) == 1
        assert "Error:" in capsys.readouterr().err

    def test_unreadable_file(self, tmp_path):
        from biasdetector.cli import main

        assert main([str(tmp_path / "missing.json"), "--offline"]) == 1

    def test_file_without_content(self, tmp_path):
        from biasdetector.cli import main

        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"title": "only"}))
        assert main([str(path), "--offline"]) == 1

    def test_inline_content(self, capsys):
        from biasdetector.cli import main

        assert main(["--title", "T", "--content", "The bridge reopened.", "--offline"]) == 0
        assert "This article shows significant bias, most notably balance bias." in capsys.readouterr().out

    def test_empty_inline_content_is_scored(self, capsys):
        from biasdetector.cli import main

        assert main(["--title", "T", "--content", "", "--offline", "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert [b["category"] for b in data["biases"]] == ["balance"]
        assert data["sourceReliability"]["explanation"] == "No source provided"
