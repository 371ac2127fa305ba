"""
Scoring Engine Tests

End-to-end runs of the orchestrator with fake enrichment providers.
"""

import dataclasses

import pytest

from biasdetector.engine import ScoringEngine, analyze_article
from biasdetector.enrichment import EnrichmentProvider
from biasdetector.gateway import EnrichmentGateway
from biasdetector.models import AIDetectionResult, Article, example_article


class FakeProvider(EnrichmentProvider):
    name = "fake"

    def __init__(self, ai_score=0.3, claims=None, fail=False):
        self.ai_score = ai_score
        self.claims = claims or []
        self.fail = fail
        self.texts: list[str] = []

    async def detect_ai_authorship(self, text):
        self.texts.append(text)
        if self.fail:
            raise ConnectionError("service down")
        return {"score": self.ai_score}

    async def detect_claims(self, text):
        if self.fail:
            raise ConnectionError("service down")
        return self.claims


BIASED = Article(
    title="SHOCKING!!! Radical regime DESTROYS the economy",
    content=(
        "This terrible, disastrous regime should resign. Clearly the radical left "
        "has failed everyone. In my opinion the corrupt elites are lying!!"
    ),
    source="https://dailyplanet.com/story",
)

NEUTRAL = Article(
    title="Council sets meeting schedule",
    content=(
        "According to the city census, the council met on Tuesday. Data shows turnout rose. "
        "However, critics argue the schedule is tight. On the other hand, supporters say "
        "the timeline is realistic."
    ),
    source="https://www.who.int/news",
)


def _engine(**kwargs) -> ScoringEngine:
    return ScoringEngine(gateway=EnrichmentGateway(FakeProvider(**kwargs), timeout=1))


class TestScore:
    @pytest.mark.asyncio
    async def test_complete_result(self):
        claims = [{"text": "The economy shrank by half.", "score": 0.95}]
        result = await _engine(ai_score=0.92, claims=claims).score(BIASED)

        assert result.summary
        assert result.biases
        assert result.ai_detection == AIDetectionResult(True, 0.92)
        assert len(result.fact_check) == 3
        assert result.fact_check[2].is_factual is False
        assert result.source_reliability.confidence == 0.6
        assert result.summary.startswith("Warning: this article appears to be AI-generated")

    @pytest.mark.asyncio
    async def test_scores_in_unit_interval(self):
        result = await _engine().score(BIASED)
        assert 0.0 <= result.overall_bias_score <= 1.0
        assert 0.0 <= result.overall_factual_score <= 1.0
        for bias in result.biases:
            assert 0.0 <= bias.score <= 1.0

    @pytest.mark.asyncio
    async def test_overall_bias_is_mean_of_findings(self):
        result = await _engine().score(BIASED)
        scores = [b.score for b in result.biases]
        assert result.overall_bias_score == pytest.approx(sum(scores) / len(scores))

    @pytest.mark.asyncio
    async def test_neutral_article_from_who(self):
        result = await _engine().score(NEUTRAL)
        assert result.biases == []
        assert result.overall_bias_score == 0.0
        assert result.source_reliability.category == "international"
        assert result.detailed_factual_scores.source_reliability_score == 0.95
        assert "minimal bias" in result.summary

    @pytest.mark.asyncio
    async def test_content_is_sent_to_enrichment(self):
        provider = FakeProvider()
        await ScoringEngine(gateway=EnrichmentGateway(provider)).score(NEUTRAL)
        assert provider.texts == [NEUTRAL.content]

    @pytest.mark.asyncio
    async def test_idempotent(self):
        engine = _engine(claims=[{"text": "x", "score": 0.8}])
        first = await engine.score(BIASED)
        second = await engine.score(BIASED)
        assert first == second


class TestDegradation:
    @pytest.mark.asyncio
    async def test_total_outage_still_scores(self):
        result = await _engine(fail=True).score(BIASED)
        assert result.ai_detection == AIDetectionResult(False, 0.0)
        assert len(result.fact_check) == 2
        assert result.detailed_factual_scores.claim_score == 0.5
        assert result.summary

    @pytest.mark.asyncio
    async def test_outage_matches_no_provider(self):
        outage = await _engine(fail=True).score(NEUTRAL)
        offline = await ScoringEngine().score(NEUTRAL)
        assert outage.enrichment_degraded is True
        assert offline.enrichment_degraded is False
        assert dataclasses.replace(outage, enrichment_degraded=False) == offline

    @pytest.mark.asyncio
    async def test_healthy_services_are_not_degraded(self):
        result = await _engine().score(NEUTRAL)
        assert result.enrichment_degraded is False

    @pytest.mark.asyncio
    async def test_empty_content(self):
        result = await ScoringEngine().score(Article(title="", content=""))
        assert [b.category for b in result.biases] == ["balance"]
        assert result.source_reliability.explanation == "No source provided"


class TestAnalyzeArticle:
    @pytest.mark.asyncio
    async def test_example_article(self):
        result = await analyze_article(example_article())
        assert result.source_reliability.explanation == "Invalid source format"
        assert result.to_dict()["detailed_factual_scores"]["claim_score"] == 0.5

    @pytest.mark.asyncio
    async def test_with_gateway(self):
        gateway = EnrichmentGateway(FakeProvider(ai_score=0.99))
        result = await analyze_article(NEUTRAL, gateway=gateway)
        assert result.ai_detection.is_ai_generated is True
