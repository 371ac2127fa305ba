"""
Factual Aggregator

Computes the composite factual score and the fact-check findings.

Score = weighted sum of five sub-scores, each in [0, 1]:

  source reliability   0.40   SourceAnalysis.confidence
  citations            0.10   content factual_support.score
  factual phrases      0.25   min(n / (max(n, 1) · 0.7), 1)
  balance              0.15   content balanced_reporting.score
  claims               0.10   mean claim confidence, 0.5 without claims

The weights sum to exactly 1.0, so the overall score is a convex
combination of the sub-scores.

Findings: two article-level entries (citation sufficiency, balance
quality) followed by at most three claim-level entries.
"""

from __future__ import annotations

from biasdetector.models import (
    CheckworthyClaim,
    DetailedFactualScores,
    FactCheckResult,
    SourceAnalysis,
)
from biasdetector.signals import TextAnalysis

FACTUAL_WEIGHTS: dict[str, float] = {
    "source_reliability_score": 0.4,
    "citation_score": 0.1,
    "factual_phrases_score": 0.25,
    "balance_score": 0.15,
    "claim_score": 0.1,
}

# Share of detected factual phrases assumed to be substantive
FACTUAL_PHRASE_RATIO = 0.7

# Claim selection
CLAIM_MIN_SCORE = 0.7        # strictly greater than
CLAIM_QUESTIONABLE_SCORE = 0.9  # greater than or equal
MAX_CLAIMS = 3
NEUTRAL_CLAIM_SCORE = 0.5

# Article-level verdict cut-off
SUFFICIENT_SCORE = 0.5

_MAX_CLAIM_CHARS = 120

assert abs(sum(FACTUAL_WEIGHTS.values()) - 1.0) < 1e-9, "factual weights must sum to 1"


def factual_phrases_score(count: int) -> float:
    return min(count / (max(count, 1) * FACTUAL_PHRASE_RATIO), 1.0)


def weighted_factual_score(scores: DetailedFactualScores) -> float:
    return sum(getattr(scores, name) * weight for name, weight in FACTUAL_WEIGHTS.items())


def _citation_finding(content: TextAnalysis, citation_score: float) -> FactCheckResult:
    support = content.factual_support
    sufficient = citation_score >= SUFFICIENT_SCORE
    if sufficient:
        quoted = ", ".join(f'"{c}"' for c in support.citations)
        explanation = f"The article supports its claims with citations and attributions ({quoted})."
    elif support.citations:
        quoted = ", ".join(f'"{c}"' for c in support.citations)
        explanation = (
            f"The article cites few sources ({quoted}); key claims may lack supporting evidence."
        )
    else:
        explanation = "The article provides no citations or references to support its claims."
    return FactCheckResult(
        is_factual=sufficient,
        confidence=citation_score if sufficient else 1 - citation_score,
        explanation=explanation,
    )


def _balance_finding(content: TextAnalysis, balance: float) -> FactCheckResult:
    balanced = balance >= SUFFICIENT_SCORE
    if balanced:
        explanation = "The article presents multiple viewpoints on the topic."
    else:
        explanation = "The article presents limited perspectives and may omit opposing views."
    return FactCheckResult(
        is_factual=balanced,
        confidence=balance if balanced else 1 - balance,
        explanation=explanation,
    )


def select_claims(claims: list[CheckworthyClaim]) -> list[CheckworthyClaim]:
    """Claims above the check-worthiness floor, first three in service order."""
    return [c for c in claims if c.score > CLAIM_MIN_SCORE][:MAX_CLAIMS]


def _claim_finding(claim: CheckworthyClaim) -> FactCheckResult:
    text = claim.text.strip()
    if len(text) > _MAX_CLAIM_CHARS:
        text = text[:_MAX_CLAIM_CHARS - 3].rstrip() + "..."
    if claim.score >= CLAIM_QUESTIONABLE_SCORE:
        return FactCheckResult(
            is_factual=False,
            confidence=claim.score,
            explanation=(
                f'Claim needs verification: "{text}" is highly check-worthy and '
                f"should be confirmed against primary sources."
            ),
        )
    return FactCheckResult(
        is_factual=True,
        confidence=claim.score,
        explanation=f'Check-worthy claim: "{text}".',
    )


def aggregate_factual(
    title: TextAnalysis,
    content: TextAnalysis,
    claims: list[CheckworthyClaim],
    source: SourceAnalysis,
) -> tuple[float, DetailedFactualScores, list[FactCheckResult]]:
    """Return (overall_factual_score, sub-scores, fact-check findings)."""
    citation = content.factual_support.score
    balance = content.balanced_reporting.score

    claim_results = [_claim_finding(c) for c in select_claims(claims)]
    if claim_results:
        claim_score = sum(r.confidence for r in claim_results) / len(claim_results)
    else:
        claim_score = NEUTRAL_CLAIM_SCORE

    detailed = DetailedFactualScores(
        source_reliability_score=source.confidence,
        citation_score=citation,
        factual_phrases_score=factual_phrases_score(content.factual_support.factual_phrase_count),
        balance_score=balance,
        claim_score=claim_score,
    )
    overall = weighted_factual_score(detailed)

    fact_check = [
        _citation_finding(content, citation),
        _balance_finding(content, balance),
        *claim_results,
    ]
    return overall, detailed, fact_check
