"""
Factual Aggregator Tests
"""

import pytest

from biasdetector.factual import (
    FACTUAL_WEIGHTS,
    NEUTRAL_CLAIM_SCORE,
    aggregate_factual,
    factual_phrases_score,
    select_claims,
    weighted_factual_score,
)
from biasdetector.models import CheckworthyClaim, DetailedFactualScores, SourceAnalysis
from biasdetector.signals import (
    BalancedReporting,
    FactualSupport,
    TextAnalysis,
    text_analyzer,
)

EMPTY = TextAnalysis()
UNKNOWN_SOURCE = SourceAnalysis(False, 0.5, "No source provided")
WHO = SourceAnalysis(True, 0.95, "www.who.int is a recognized international source.", "international")


def _content(citation=0.0, balance=0.0, citations=(), phrase_count=0) -> TextAnalysis:
    return TextAnalysis(
        factual_support=FactualSupport(
            score=citation,
            citations=list(citations),
            citation_count=len(citations),
            factual_phrase_count=phrase_count,
        ),
        balanced_reporting=BalancedReporting(score=balance),
    )


class TestWeights:
    def test_weights_sum_to_one(self):
        assert sum(FACTUAL_WEIGHTS.values()) == pytest.approx(1.0)

    def test_weight_table(self):
        assert FACTUAL_WEIGHTS == {
            "source_reliability_score": 0.4,
            "citation_score": 0.1,
            "factual_phrases_score": 0.25,
            "balance_score": 0.15,
            "claim_score": 0.1,
        }

    def test_all_ones_is_one(self):
        scores = DetailedFactualScores(1.0, 1.0, 1.0, 1.0, 1.0)
        assert weighted_factual_score(scores) == pytest.approx(1.0)


class TestFactualPhrasesScore:
    def test_zero_phrases(self):
        assert factual_phrases_score(0) == 0.0

    @pytest.mark.parametrize("count", [1, 2, 5, 40])
    def test_any_phrase_saturates(self, count):
        assert factual_phrases_score(count) == 1.0


class TestClaimSelection:
    def test_first_three_above_floor_in_service_order(self):
        claims = [
            CheckworthyClaim("a", 0.95),
            CheckworthyClaim("b", 0.65),
            CheckworthyClaim("c", 0.75),
            CheckworthyClaim("d", 0.8),
            CheckworthyClaim("e", 0.99),
        ]
        assert [c.text for c in select_claims(claims)] == ["a", "c", "d"]

    def test_floor_is_strict(self):
        assert select_claims([CheckworthyClaim("x", 0.7)]) == []

    def test_claim_entries(self):
        claims = [
            CheckworthyClaim("Inflation doubled.", 0.95),
            CheckworthyClaim("Unemployment fell.", 0.75),
            CheckworthyClaim("Exactly ninety.", 0.9),
        ]
        _, detailed, fact_check = aggregate_factual(EMPTY, EMPTY, claims, UNKNOWN_SOURCE)
        entries = fact_check[2:]
        assert [e.is_factual for e in entries] == [False, True, False]
        assert [e.confidence for e in entries] == [0.95, 0.75, 0.9]
        assert "Inflation doubled." in entries[0].explanation
        assert detailed.claim_score == pytest.approx((0.95 + 0.75 + 0.9) / 3)

    def test_long_claim_is_shortened(self):
        claims = [CheckworthyClaim("word " * 60, 0.8)]
        _, _, fact_check = aggregate_factual(EMPTY, EMPTY, claims, UNKNOWN_SOURCE)
        assert "..." in fact_check[2].explanation
        assert len(fact_check[2].explanation) < 200


class TestAggregate:
    def test_no_claims_uses_neutral_score(self):
        _, detailed, fact_check = aggregate_factual(EMPTY, EMPTY, [], UNKNOWN_SOURCE)
        assert detailed.claim_score == NEUTRAL_CLAIM_SCORE
        assert len(fact_check) == 2

    def test_low_scoring_claims_are_dropped(self):
        claims = [CheckworthyClaim("x", 0.3), CheckworthyClaim("y", 0.69)]
        _, detailed, fact_check = aggregate_factual(EMPTY, EMPTY, claims, UNKNOWN_SOURCE)
        assert detailed.claim_score == NEUTRAL_CLAIM_SCORE
        assert len(fact_check) == 2

    def test_empty_article_unknown_source(self):
        overall, detailed, _ = aggregate_factual(EMPTY, EMPTY, [], UNKNOWN_SOURCE)
        assert detailed == DetailedFactualScores(0.5, 0.0, 0.0, 0.0, 0.5)
        # 0.4 * 0.5 + 0.1 * 0.5
        assert overall == pytest.approx(0.25)

    def test_sub_scores_feed_weighted_sum(self):
        content = _content(citation=0.5, balance=1.0, citations=["study"], phrase_count=2)
        claims = [CheckworthyClaim("c", 0.8)]
        overall, detailed, _ = aggregate_factual(EMPTY, content, claims, WHO)
        assert detailed == DetailedFactualScores(0.95, 0.5, 1.0, 1.0, 0.8)
        expected = 0.4 * 0.95 + 0.1 * 0.5 + 0.25 * 1.0 + 0.15 * 1.0 + 0.1 * 0.8
        assert overall == pytest.approx(expected)

    def test_overall_within_sub_score_range(self):
        content = text_analyzer.analyze(
            "According to the census, data shows unemployment fell. However, critics argue."
        )
        claims = [CheckworthyClaim("c", 0.92)]
        overall, detailed, _ = aggregate_factual(EMPTY, content, claims, WHO)
        values = [
            detailed.source_reliability_score,
            detailed.citation_score,
            detailed.factual_phrases_score,
            detailed.balance_score,
            detailed.claim_score,
        ]
        assert min(values) <= overall <= max(values)


class TestBaselineFindings:
    def test_no_citations(self):
        _, _, fact_check = aggregate_factual(EMPTY, EMPTY, [], UNKNOWN_SOURCE)
        citation = fact_check[0]
        assert citation.is_factual is False
        assert citation.confidence == 1.0
        assert citation.explanation == (
            "The article provides no citations or references to support its claims."
        )

    def test_sufficient_citations_quoted(self):
        content = _content(citation=0.75, citations=["according to", "census"])
        _, _, fact_check = aggregate_factual(EMPTY, content, [], UNKNOWN_SOURCE)
        assert fact_check[0].is_factual is True
        assert fact_check[0].confidence == 0.75
        assert '"census"' in fact_check[0].explanation

    def test_few_citations(self):
        content = _content(citation=0.25, citations=["study"])
        _, _, fact_check = aggregate_factual(EMPTY, content, [], UNKNOWN_SOURCE)
        assert fact_check[0].is_factual is False
        assert fact_check[0].confidence == pytest.approx(0.75)
        assert '"study"' in fact_check[0].explanation

    def test_balance_finding(self):
        _, _, one_sided = aggregate_factual(EMPTY, _content(balance=0.0), [], UNKNOWN_SOURCE)
        _, _, balanced = aggregate_factual(EMPTY, _content(balance=1.0), [], UNKNOWN_SOURCE)
        assert one_sided[1].is_factual is False
        assert "limited perspectives" in one_sided[1].explanation
        assert balanced[1].is_factual is True
        assert balanced[1].confidence == 1.0
