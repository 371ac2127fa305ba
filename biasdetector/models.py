"""
Result Models

Plain dataclasses for everything that flows through one analysis.
All of them are created and discarded within a single `score()` call;
the terminal `AnalysisResult` is handed to the caller and never mutated.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class Article:
    """An article as pasted by the reader."""
    title: str
    content: str
    source: Optional[str] = None   # URL of the publishing site
    author: Optional[str] = None
    date: Optional[str] = None


@dataclass(frozen=True)
class SourceAnalysis:
    is_reliable: bool
    confidence: float
    explanation: str
    category: Optional[str] = None  # government | international | education | news | scientific


@dataclass(frozen=True)
class BiasResult:
    category: str       # political | emotional | balance | demographic | sensationalism
    score: float
    explanation: str


@dataclass(frozen=True)
class FactCheckResult:
    is_factual: bool
    confidence: float
    explanation: str


@dataclass(frozen=True)
class DetailedFactualScores:
    source_reliability_score: float
    citation_score: float
    factual_phrases_score: float
    balance_score: float
    claim_score: float


@dataclass(frozen=True)
class AIDetectionResult:
    is_ai_generated: bool = False
    confidence: float = 0.0


@dataclass(frozen=True)
class CheckworthyClaim:
    """A sentence the claim-detection service considers check-worthy."""
    text: str
    score: float


@dataclass(frozen=True)
class AnalysisResult:
    summary: str
    overall_bias_score: float
    overall_factual_score: float
    detailed_factual_scores: DetailedFactualScores
    biases: list[BiasResult] = field(default_factory=list)
    fact_check: list[FactCheckResult] = field(default_factory=list)
    ai_detection: AIDetectionResult = field(default_factory=AIDetectionResult)
    source_reliability: Optional[SourceAnalysis] = None
    # True when a configured enrichment service failed and its default was used
    enrichment_degraded: bool = False

    def to_dict(self) -> dict:
        return asdict(self)


def example_article() -> Article:
    """The sample article offered to first-time readers."""
    return Article(
        title="New Study Reveals Surprising Economic Trends",
        content=(
            "In a groundbreaking study released yesterday, economists have discovered "
            "that recent policy changes have had a dramatic impact on middle-class "
            "families. The controversial findings suggest that the current "
            "administration's approach has failed to address key concerns of everyday "
            "citizens.\n\n"
            "Dr. Jane Smith, lead researcher on the study, stated that \"the data clearly "
            "shows a pattern that many political leaders are choosing to ignore.\" "
            "Critics, however, have questioned the methodology of the study, pointing "
            "out potential flaws in data collection.\n\n"
            "Meanwhile, supporters of the current policies argue that the study fails "
            "to account for long-term benefits that will eventually reach all economic "
            "classes. \"This is just another example of biased research pushing a "
            "specific agenda,\" said government spokesperson John Davis.\n\n"
            "The study comes at a critical time as lawmakers debate the next phase of "
            "economic legislation, with billions of dollars at stake and millions of "
            "lives potentially affected by the outcome."
        ),
        source="Example News Network",
        author="Sample Author",
        date=date.today().isoformat(),
    )
