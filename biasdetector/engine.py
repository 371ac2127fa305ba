"""
Scoring Engine — Analysis Orchestrator

Sequences one article through every component:

  1. Text signals    : title and content analyzed separately
  2. Source          : reliability of the source URL
  3. Enrichment      : AI authorship + check-worthy claims, concurrently
  4. Aggregation     : bias findings, factual score and findings
  5. Summary         : templated prose report

The engine holds no per-request state. Only the two enrichment calls
suspend; everything else is synchronous CPU work. Enrichment failures
degrade to text-only scoring, so any well-formed Article produces a
complete AnalysisResult.
"""

from __future__ import annotations

import logging
import time
from typing import Optional

from biasdetector.bias import aggregate_biases, overall_bias_score
from biasdetector.factual import aggregate_factual
from biasdetector.gateway import EnrichmentGateway
from biasdetector.lexicon import DEFAULT_LEXICON, Lexicon
from biasdetector.models import AnalysisResult, Article
from biasdetector.signals import TextSignalAnalyzer
from biasdetector.source import SourceReliabilityClassifier
from biasdetector.summary import render_summary

logger = logging.getLogger(__name__)


class ScoringEngine:
    """Turns an Article into an AnalysisResult."""

    def __init__(
        self,
        gateway: Optional[EnrichmentGateway] = None,
        lexicon: Lexicon = DEFAULT_LEXICON,
    ):
        self.gateway = gateway or EnrichmentGateway()
        self.lexicon = lexicon
        self.analyzer = TextSignalAnalyzer(lexicon)
        self.classifier = SourceReliabilityClassifier(lexicon)

    async def score(self, article: Article) -> AnalysisResult:
        start = time.monotonic()

        # Phase 1: Text signals
        title_analysis = self.analyzer.analyze(article.title)
        content_analysis = self.analyzer.analyze(article.content)

        # Phase 2: Source
        source_analysis = self.classifier.classify(article.source)

        # Phase 3: Enrichment (never raises)
        enrichment = await self.gateway.enrich_with_status(article.content)
        ai_detection, claims = enrichment.ai_detection, enrichment.claims

        # Phase 4: Aggregation
        biases = aggregate_biases(title_analysis, content_analysis)
        bias_score = overall_bias_score(biases)
        factual_score, detailed, fact_check = aggregate_factual(
            title_analysis, content_analysis, claims, source_analysis,
        )

        # Phase 5: Summary
        summary = render_summary(
            bias_score, factual_score, ai_detection, biases, fact_check, source_analysis,
        )

        result = AnalysisResult(
            summary=summary,
            overall_bias_score=bias_score,
            overall_factual_score=factual_score,
            detailed_factual_scores=detailed,
            biases=biases,
            fact_check=fact_check,
            ai_detection=ai_detection,
            source_reliability=source_analysis,
            enrichment_degraded=enrichment.degraded,
        )

        logger.info(
            "Analysis complete: bias=%.2f factual=%.2f", bias_score, factual_score,
            extra={
                "overall_bias_score": round(bias_score, 3),
                "overall_factual_score": round(factual_score, 3),
                "bias_count": len(biases),
                "claims_count": len(fact_check) - 2,
                "source_category": source_analysis.category,
                "ai_generated": ai_detection.is_ai_generated,
                "degraded": enrichment.degraded,
                "duration_ms": int((time.monotonic() - start) * 1000),
            },
        )
        return result

    async def aclose(self) -> None:
        await self.gateway.aclose()


async def analyze_article(
    article: Article,
    gateway: Optional[EnrichmentGateway] = None,
) -> AnalysisResult:
    """One-shot convenience wrapper around ScoringEngine.score."""
    return await ScoringEngine(gateway=gateway).score(article)
