"""
API Schemas — Request and Response Models

Pydantic models for the BiasDetector API. Field names on the wire are
camelCase (`overallBiasScore`, `isAIGenerated`, ...); Python code uses
snake_case.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from biasdetector.models import AnalysisResult, Article


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================
# ANALYZE
# ============================================================

class ArticleRequest(CamelModel):
    """POST /analyze request body."""
    title: str = Field(..., max_length=1_000, description="Article headline.")
    content: str = Field(..., min_length=1, max_length=100_000,
                         description="Full article text (1-100,000 characters).")
    source: Optional[str] = Field(None, max_length=2_000,
                                  description="URL of the publishing site.")
    author: Optional[str] = Field(None, max_length=500)
    date: Optional[str] = Field(None, max_length=50)

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={"examples": [
            {
                "title": "Council approves new budget",
                "content": "According to the city report, spending rises 3 percent. "
                           "Critics argue the plan is too modest; however, supporters say it is prudent.",
                "source": "https://www.reuters.com/world/",
            },
        ]},
    )

    def to_article(self) -> Article:
        return Article(
            title=self.title,
            content=self.content,
            source=self.source,
            author=self.author,
            date=self.date,
        )


class ArticleBatchRequest(CamelModel):
    """POST /analyze/batch request body."""
    items: list[ArticleRequest] = Field(..., min_length=1, max_length=20)


class BiasResponse(CamelModel):
    category: str
    score: float
    explanation: str


class FactCheckResponse(CamelModel):
    is_factual: bool
    confidence: float
    explanation: str


class DetailedFactualScoresResponse(CamelModel):
    source_reliability_score: float
    citation_score: float
    factual_phrases_score: float
    balance_score: float
    claim_score: float


class AIDetectionResponse(CamelModel):
    is_ai_generated: bool = Field(..., alias="isAIGenerated")
    confidence: float


class SourceReliabilityResponse(CamelModel):
    is_reliable: bool
    confidence: float
    category: Optional[str] = None
    explanation: str


class AnalysisResponse(CamelModel):
    """POST /analyze response body."""
    summary: str
    overall_bias_score: float
    overall_factual_score: float
    detailed_factual_scores: DetailedFactualScoresResponse
    biases: list[BiasResponse]
    fact_check: list[FactCheckResponse]
    ai_detection: AIDetectionResponse
    source_reliability: SourceReliabilityResponse

    @classmethod
    def from_result(cls, result: AnalysisResult) -> "AnalysisResponse":
        return cls.model_validate(result.to_dict())


class AnalysisBatchItem(CamelModel):
    result: Optional[AnalysisResponse] = None
    error: Optional[str] = None


class AnalysisBatchResponse(CamelModel):
    """POST /analyze/batch response body."""
    results: list[AnalysisBatchItem]
    total: int
    analyzed: int


# ============================================================
# EXAMPLE / SOURCES / HEALTH
# ============================================================

class ExampleArticleResponse(CamelModel):
    title: str
    content: str
    source: Optional[str] = None
    author: Optional[str] = None
    date: Optional[str] = None


class SourceCategoryResponse(CamelModel):
    category: str
    confidence: float
    patterns: list[str]


class SourcesResponse(CamelModel):
    categories: list[SourceCategoryResponse]
    news_like_tokens: list[str]


class HealthResponse(CamelModel):
    status: str
    version: str
    enrichment_provider: str
    cache: dict
