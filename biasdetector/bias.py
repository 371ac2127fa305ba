"""
Bias Aggregator

Combines the title and content analyses into named bias findings.

  category        formula                                              emit when >
  political       mean(avg emotional, avg opinion,
                       1 - content balance, content ideological)        0.3
  emotional       (1.5·title emotional + content emotional
                   + content sensationalism) / 3                        0.3
  balance         1 - (title balance + 2·content balance) / 3          0.4
  demographic     content demographic                                  0.3
  sensationalism  content sensationalism                               0.4

Findings are emitted in the order above and never re-sorted.
"""

from __future__ import annotations

from biasdetector.models import BiasResult
from biasdetector.signals import TextAnalysis

BIAS_THRESHOLDS: dict[str, float] = {
    "political": 0.3,
    "emotional": 0.3,
    "balance": 0.4,
    "demographic": 0.3,
    "sensationalism": 0.4,
}

# Phrases quoted per explanation
MAX_QUOTED = 3

GENERIC_EXPLANATIONS: dict[str, str] = {
    "political": "The article's framing and word choice suggest a political slant.",
    "emotional": "The article relies on emotionally charged language.",
    "balance": "The article presents few alternative viewpoints or counterarguments.",
    "demographic": "The article contains generalizations about demographic groups.",
    "sensationalism": "The article uses sensational language to attract attention.",
}


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


def _quote(phrases: list[str]) -> str:
    return ", ".join(f'"{p}"' for p in phrases[:MAX_QUOTED])


def _dedupe(phrases: list[str]) -> list[str]:
    out: list[str] = []
    for p in phrases:
        if p not in out:
            out.append(p)
    return out


# ============================================================
# CATEGORY SCORES
# ============================================================

def political_score(title: TextAnalysis, content: TextAnalysis) -> float:
    emotional = (title.emotional_language.score + content.emotional_language.score) / 2
    opinion = (title.opinion_language.score + content.opinion_language.score) / 2
    imbalance = 1 - content.balanced_reporting.score
    ideological = content.ideological_bias.score
    return _clamp((emotional + opinion + imbalance + ideological) / 4)


def emotional_score(title: TextAnalysis, content: TextAnalysis) -> float:
    return _clamp((
        1.5 * title.emotional_language.score
        + content.emotional_language.score
        + content.sensationalism.score
    ) / 3)


def balance_score(title: TextAnalysis, content: TextAnalysis) -> float:
    return _clamp(1 - (
        title.balanced_reporting.score + 2 * content.balanced_reporting.score
    ) / 3)


def demographic_score(title: TextAnalysis, content: TextAnalysis) -> float:
    return _clamp(content.demographic_bias.score)


def sensationalism_score(title: TextAnalysis, content: TextAnalysis) -> float:
    return _clamp(content.sensationalism.score)


# ============================================================
# EXPLANATIONS
# ============================================================

def _explain_political(title: TextAnalysis, content: TextAnalysis) -> str:
    ideological = content.ideological_bias
    if ideological.dominant_bias:
        terms = getattr(ideological, ideological.dominant_bias)
        return (
            f"The article leans {ideological.dominant_bias}, using terms such as "
            f"{_quote(terms)}."
        )
    opinion = _dedupe(title.opinion_language.phrases + content.opinion_language.phrases)
    if opinion:
        return f"The article frames its subject through opinion language such as {_quote(opinion)}."
    return GENERIC_EXPLANATIONS["political"]


def _explain_emotional(title: TextAnalysis, content: TextAnalysis) -> str:
    phrases = []
    for analysis in (title, content):
        emotional = analysis.emotional_language
        phrases.extend(emotional.loaded + emotional.negative + emotional.positive)
    phrases = _dedupe(phrases)
    if phrases:
        return f"The article uses emotionally charged words such as {_quote(phrases)}."
    return GENERIC_EXPLANATIONS["emotional"]


def _explain_balance(title: TextAnalysis, content: TextAnalysis) -> str:
    phrases = content.balanced_reporting.phrases
    if phrases:
        return (
            f"Only limited alternative viewpoints are signalled ({_quote(phrases)}); "
            f"the article may present one side of the story."
        )
    return GENERIC_EXPLANATIONS["balance"]


def _explain_demographic(title: TextAnalysis, content: TextAnalysis) -> str:
    phrases = content.demographic_bias.phrases
    if phrases:
        return f"The article generalizes about demographic groups with phrases such as {_quote(phrases)}."
    return GENERIC_EXPLANATIONS["demographic"]


def _explain_sensationalism(title: TextAnalysis, content: TextAnalysis) -> str:
    phrases = content.sensationalism.phrases
    if phrases:
        return f"The article uses sensational language such as {_quote(phrases)}."
    return GENERIC_EXPLANATIONS["sensationalism"]


# Emission order is significant
BIAS_CATEGORIES = (
    ("political", political_score, _explain_political),
    ("emotional", emotional_score, _explain_emotional),
    ("balance", balance_score, _explain_balance),
    ("demographic", demographic_score, _explain_demographic),
    ("sensationalism", sensationalism_score, _explain_sensationalism),
)


# ============================================================
# AGGREGATION
# ============================================================

def aggregate_biases(title: TextAnalysis, content: TextAnalysis) -> list[BiasResult]:
    """Emit one finding per category whose score exceeds its threshold."""
    biases: list[BiasResult] = []
    for category, score_fn, explain_fn in BIAS_CATEGORIES:
        score = score_fn(title, content)
        if score > BIAS_THRESHOLDS[category]:
            biases.append(BiasResult(
                category=category,
                score=score,
                explanation=explain_fn(title, content),
            ))
    return biases


def overall_bias_score(biases: list[BiasResult]) -> float:
    """Mean score of the emitted findings; 0.0 when nothing was emitted."""
    if not biases:
        return 0.0
    return sum(b.score for b in biases) / len(biases)


def leading_bias(biases: list[BiasResult]) -> BiasResult | None:
    """Highest-scoring finding; the earliest one wins ties."""
    if not biases:
        return None
    return max(biases, key=lambda b: b.score)
