"""
BiasDetector — Article Credibility Scoring Engine

Turns a pasted news article into bias findings, factual-accuracy scores,
an AI-authorship estimate and a source-reliability verdict, summarized
as a short report.

Public API:
  - ScoringEngine:               Orchestrates one analysis (async)
  - analyze_article:             One-shot convenience wrapper
  - TextSignalAnalyzer:          Deterministic text signal extraction
  - SourceReliabilityClassifier: Source URL → reliability verdict
  - EnrichmentGateway:           AI-authorship + claim detection with safe defaults
  - EnrichmentProvider:          Abstract detector backend for provider swapping
  - Lexicon / DEFAULT_LEXICON:   Read-only phrase and domain tables

Usage:
    from biasdetector import Article, ScoringEngine
    result = await ScoringEngine().score(Article(title="...", content="..."))
"""

__version__ = "1.0.0"

from biasdetector.lexicon import Lexicon, DEFAULT_LEXICON
from biasdetector.models import (
    Article,
    AnalysisResult,
    BiasResult,
    FactCheckResult,
    DetailedFactualScores,
    AIDetectionResult,
    CheckworthyClaim,
    SourceAnalysis,
    example_article,
)
from biasdetector.signals import TextSignalAnalyzer, TextAnalysis, text_analyzer
from biasdetector.source import SourceReliabilityClassifier, source_classifier
from biasdetector.enrichment import EnrichmentProvider
from biasdetector.enrichment.factory import get_provider
from biasdetector.gateway import EnrichmentGateway
from biasdetector.bias import aggregate_biases, overall_bias_score
from biasdetector.factual import aggregate_factual
from biasdetector.summary import render_summary
from biasdetector.engine import ScoringEngine, analyze_article

__all__ = [
    "Lexicon",
    "DEFAULT_LEXICON",
    "Article",
    "AnalysisResult",
    "BiasResult",
    "FactCheckResult",
    "DetailedFactualScores",
    "AIDetectionResult",
    "CheckworthyClaim",
    "SourceAnalysis",
    "example_article",
    "TextSignalAnalyzer",
    "TextAnalysis",
    "text_analyzer",
    "SourceReliabilityClassifier",
    "source_classifier",
    "EnrichmentProvider",
    "get_provider",
    "EnrichmentGateway",
    "aggregate_biases",
    "overall_bias_score",
    "aggregate_factual",
    "render_summary",
    "ScoringEngine",
    "analyze_article",
]
