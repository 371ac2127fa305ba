"""
Summary Generator

Renders the scores and findings into a short, deterministic report.

The report has four blocks, in order:
  1. AI-authorship warning (only when flagged)
  2. source reliability
  3. bias level
  4. factual accuracy

Each block is an ordered table of (predicate, template) rules. The first
rule whose predicate holds renders the block; a block with no matching
rule is omitted. Thresholds live in the tables, not in branching code.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from biasdetector.bias import leading_bias
from biasdetector.models import (
    AIDetectionResult,
    BiasResult,
    FactCheckResult,
    SourceAnalysis,
)


@dataclass(frozen=True)
class SummaryContext:
    overall_bias_score: float
    overall_factual_score: float
    ai_detection: AIDetectionResult
    biases: list[BiasResult]
    fact_check: list[FactCheckResult]
    source: SourceAnalysis

    @property
    def leading_category(self) -> Optional[str]:
        lead = leading_bias(self.biases)
        return lead.category if lead else None

    @property
    def questionable_claims(self) -> int:
        # Entries after the two article-level findings are claim-derived
        return sum(1 for r in self.fact_check[2:] if not r.is_factual)


Rule = tuple[Callable[[SummaryContext], bool], Callable[[SummaryContext], str]]


def _bias_focus(ctx: SummaryContext) -> str:
    if ctx.leading_category:
        return f", most notably {ctx.leading_category} bias."
    return "."


def _questionable_note(ctx: SummaryContext) -> str:
    n = ctx.questionable_claims
    if not n:
        return ""
    noun = "claim warrants" if n == 1 else "claims warrant"
    return f" {n} highly check-worthy {noun} independent verification."


AI_RULES: list[Rule] = [
    (
        lambda c: c.ai_detection.is_ai_generated,
        lambda c: (
            f"Warning: this article appears to be AI-generated "
            f"({c.ai_detection.confidence:.0%} confidence)."
        ),
    ),
]

SOURCE_RULES: list[Rule] = [
    (
        lambda c: c.source.is_reliable,
        lambda c: (
            f"The source is recognized as a reliable {c.source.category or 'publisher'} source "
            f"({c.source.confidence:.0%} confidence)."
        ),
    ),
    (
        lambda c: c.source.confidence < 0.6,
        lambda c: "The source could not be verified; treat its claims with caution.",
    ),
    (
        lambda c: True,
        lambda c: (
            "The source is not among recognized reliable sources; "
            "cross-check its claims with established outlets."
        ),
    ),
]

BIAS_RULES: list[Rule] = [
    (
        lambda c: c.overall_bias_score > 0.7,
        lambda c: "This article shows significant bias" + _bias_focus(c),
    ),
    (
        lambda c: c.overall_bias_score > 0.4,
        lambda c: "This article shows moderate bias" + _bias_focus(c),
    ),
    (
        lambda c: True,
        lambda c: "This article shows minimal bias" + _bias_focus(c),
    ),
]

FACTUAL_RULES: list[Rule] = [
    (
        lambda c: c.overall_factual_score < 0.3,
        lambda c: (
            "The factual accuracy is very low, suggesting potential misinformation."
            + _questionable_note(c)
        ),
    ),
    (
        lambda c: c.overall_factual_score < 0.7,
        lambda c: (
            "The factual accuracy is questionable in some areas."
            + _questionable_note(c)
        ),
    ),
    (
        lambda c: True,
        lambda c: (
            "The factual accuracy appears to be generally reliable."
            + _questionable_note(c)
        ),
    ),
]

SUMMARY_BLOCKS: list[list[Rule]] = [AI_RULES, SOURCE_RULES, BIAS_RULES, FACTUAL_RULES]


def render_block(rules: list[Rule], ctx: SummaryContext) -> Optional[str]:
    for predicate, template in rules:
        if predicate(ctx):
            return template(ctx)
    return None


def render_summary(
    overall_bias_score: float,
    overall_factual_score: float,
    ai_detection: AIDetectionResult,
    biases: list[BiasResult],
    fact_check: list[FactCheckResult],
    source: SourceAnalysis,
) -> str:
    ctx = SummaryContext(
        overall_bias_score=overall_bias_score,
        overall_factual_score=overall_factual_score,
        ai_detection=ai_detection,
        biases=biases,
        fact_check=fact_check,
        source=source,
    )
    blocks = (render_block(rules, ctx) for rules in SUMMARY_BLOCKS)
    return "\n\n".join(b for b in blocks if b)
