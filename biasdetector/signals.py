"""
Text Signal Analyzer

Scans one body of text (an article title or its content) and extracts a
fixed bundle of independent signals:

  - emotional language   (positive, negative and loaded words)
  - opinion language     (first-person and assertive framing)
  - ideological bias     (conservative vs liberal coded terms)
  - demographic bias     (gender, age, socioeconomic, cultural markers)
  - sensationalism       (clickbait vocabulary, repeated exclamation marks)
  - balanced reporting   (contrast markers, attributed quotes)
  - factual support      (citations and factual-support phrases)

Every signal score is min(weighted_matches / expected, 1), so scores are
bounded to [0, 1] and never decrease as matches are added.

The analyzer is deterministic and does no I/O. Empty text yields an
all-zero analysis.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, Optional

from biasdetector.lexicon import DEFAULT_LEXICON, Lexicon

# Evidence lists keep this many distinct phrases
EVIDENCE_CAP = 3

# Expected weighted match counts at which a signal saturates
EXPECTED_EMOTIONAL = 6
EXPECTED_OPINION = 4
EXPECTED_IDEOLOGICAL = 4
EXPECTED_DEMOGRAPHIC = 3
EXPECTED_SENSATIONAL = 3
EXPECTED_BALANCE = 3
EXPECTED_FACTUAL = 4

_OPEN_QUOTE = "\"“"
_CLOSE_QUOTE = "\"”"
_QUOTED = rf"[{_OPEN_QUOTE}][^{_OPEN_QUOTE}{_CLOSE_QUOTE}]{{3,}}[{_CLOSE_QUOTE}]"
_SPEECH_VERB = r"(?:said|says|stated|argued|added|told|according\s+to)"

# "..." said X  |  X said that "..."
ATTRIBUTED_QUOTE = re.compile(
    rf"{_QUOTED}\s*,?\s*{_SPEECH_VERB}\b"
    rf"|\b{_SPEECH_VERB}(?:\s+that)?\s*,?\s*:?\s*{_QUOTED}",
)

EXCLAMATION_RUN = re.compile(r"!{2,}")


# ============================================================
# DATA STRUCTURES
# ============================================================

@dataclass(frozen=True)
class EmotionalLanguage:
    score: float = 0.0
    positive: list[str] = field(default_factory=list)
    negative: list[str] = field(default_factory=list)
    loaded: list[str] = field(default_factory=list)
    matches: int = 0


@dataclass(frozen=True)
class OpinionLanguage:
    score: float = 0.0
    phrases: list[str] = field(default_factory=list)
    matches: int = 0


@dataclass(frozen=True)
class IdeologicalBias:
    score: float = 0.0
    conservative: list[str] = field(default_factory=list)
    liberal: list[str] = field(default_factory=list)
    dominant_bias: Optional[str] = None  # "conservative" | "liberal" | None
    conservative_count: int = 0
    liberal_count: int = 0


@dataclass(frozen=True)
class DemographicBias:
    score: float = 0.0
    gender: list[str] = field(default_factory=list)
    age: list[str] = field(default_factory=list)
    socioeconomic: list[str] = field(default_factory=list)
    cultural: list[str] = field(default_factory=list)
    matches: int = 0

    @property
    def phrases(self) -> list[str]:
        return self.gender + self.age + self.socioeconomic + self.cultural


@dataclass(frozen=True)
class Sensationalism:
    score: float = 0.0
    phrases: list[str] = field(default_factory=list)
    matches: int = 0


@dataclass(frozen=True)
class BalancedReporting:
    """Presence of multiple viewpoints. High score = more balance."""
    score: float = 0.0
    phrases: list[str] = field(default_factory=list)
    matches: int = 0
    attributed_quotes: int = 0


@dataclass(frozen=True)
class FactualSupport:
    score: float = 0.0
    citations: list[str] = field(default_factory=list)
    factual_phrases: list[str] = field(default_factory=list)
    citation_count: int = 0
    factual_phrase_count: int = 0


@dataclass(frozen=True)
class TextAnalysis:
    """All signals extracted from one body of text."""
    emotional_language: EmotionalLanguage = field(default_factory=EmotionalLanguage)
    opinion_language: OpinionLanguage = field(default_factory=OpinionLanguage)
    ideological_bias: IdeologicalBias = field(default_factory=IdeologicalBias)
    demographic_bias: DemographicBias = field(default_factory=DemographicBias)
    sensationalism: Sensationalism = field(default_factory=Sensationalism)
    balanced_reporting: BalancedReporting = field(default_factory=BalancedReporting)
    factual_support: FactualSupport = field(default_factory=FactualSupport)

    def scores(self) -> dict[str, float]:
        """Flat view of every signal score, keyed by signal name."""
        return {
            "emotional_language": self.emotional_language.score,
            "opinion_language": self.opinion_language.score,
            "ideological_bias": self.ideological_bias.score,
            "demographic_bias": self.demographic_bias.score,
            "sensationalism": self.sensationalism.score,
            "balanced_reporting": self.balanced_reporting.score,
            "factual_support": self.factual_support.score,
        }


# ============================================================
# MATCHING HELPERS
# ============================================================

class PhraseMatcher:
    """Finds every occurrence of a phrase list in case-folded text."""

    def __init__(self, phrases: Iterable[str]):
        # Longest first so "critics argue" wins over a shorter overlapping entry
        ordered = sorted({p.casefold() for p in phrases if p}, key=len, reverse=True)
        self._regex: Optional[re.Pattern] = None
        if ordered:
            alternation = "|".join(re.escape(p) for p in ordered)
            self._regex = re.compile(rf"(?<!\w)(?:{alternation})(?!\w)")

    def find_spans(self, folded_text: str) -> list[tuple[int, str]]:
        """(offset, match) for every non-overlapping match, in text order."""
        if self._regex is None or not folded_text:
            return []
        return [(m.start(), m.group(0)) for m in self._regex.finditer(folded_text)]

    def find(self, folded_text: str) -> list[str]:
        return [text for _, text in self.find_spans(folded_text)]


def _evidence(matches: list[str], cap: int = EVIDENCE_CAP) -> list[str]:
    """Distinct matches in order of first occurrence, capped."""
    seen: list[str] = []
    for m in matches:
        if m not in seen:
            seen.append(m)
            if len(seen) >= cap:
                break
    return seen


def _normalize(weighted_count: float, expected: float) -> float:
    return min(weighted_count / expected, 1.0)


# ============================================================
# THE ANALYZER
# ============================================================

class TextSignalAnalyzer:
    """
    Deterministic signal extraction over a Lexicon.

    Matchers are compiled once in the constructor; `analyze` holds no
    state between calls and is safe to share across tasks.
    """

    def __init__(self, lexicon: Lexicon = DEFAULT_LEXICON):
        self.lexicon = lexicon
        self._positive = PhraseMatcher(lexicon.positive)
        self._negative = PhraseMatcher(lexicon.negative)
        self._loaded = PhraseMatcher(lexicon.loaded)
        self._opinion = PhraseMatcher(lexicon.opinion)
        self._conservative = PhraseMatcher(lexicon.conservative)
        self._liberal = PhraseMatcher(lexicon.liberal)
        self._gender = PhraseMatcher(lexicon.gender)
        self._age = PhraseMatcher(lexicon.age)
        self._socioeconomic = PhraseMatcher(lexicon.socioeconomic)
        self._cultural = PhraseMatcher(lexicon.cultural)
        self._sensational = PhraseMatcher(lexicon.sensational)
        self._balance = PhraseMatcher(lexicon.balance)
        self._citations = PhraseMatcher(lexicon.citations)
        self._factual = PhraseMatcher(lexicon.factual)

    def analyze(self, text: str) -> TextAnalysis:
        """Extract every signal from `text`. Never raises on empty input."""
        folded = (text or "").casefold()
        if not folded.strip():
            return TextAnalysis()

        return TextAnalysis(
            emotional_language=self._emotional(folded),
            opinion_language=self._opinion_language(folded),
            ideological_bias=self._ideological(folded),
            demographic_bias=self._demographic(folded),
            sensationalism=self._sensationalism(folded),
            balanced_reporting=self._balanced(folded),
            factual_support=self._factual_support(folded),
        )

    def _emotional(self, folded: str) -> EmotionalLanguage:
        positive = self._positive.find(folded)
        negative = self._negative.find(folded)
        loaded = self._loaded.find(folded)
        weighted = len(positive) + len(negative) + 2 * len(loaded)
        return EmotionalLanguage(
            score=_normalize(weighted, EXPECTED_EMOTIONAL),
            positive=_evidence(positive),
            negative=_evidence(negative),
            loaded=_evidence(loaded),
            matches=len(positive) + len(negative) + len(loaded),
        )

    def _opinion_language(self, folded: str) -> OpinionLanguage:
        found = self._opinion.find(folded)
        return OpinionLanguage(
            score=_normalize(len(found), EXPECTED_OPINION),
            phrases=_evidence(found),
            matches=len(found),
        )

    def _ideological(self, folded: str) -> IdeologicalBias:
        conservative = self._conservative.find(folded)
        liberal = self._liberal.find(folded)

        dominant = None
        if len(conservative) > len(liberal):
            dominant = "conservative"
        elif len(liberal) > len(conservative):
            dominant = "liberal"

        return IdeologicalBias(
            score=_normalize(len(conservative) + len(liberal), EXPECTED_IDEOLOGICAL),
            conservative=_evidence(conservative),
            liberal=_evidence(liberal),
            dominant_bias=dominant,
            conservative_count=len(conservative),
            liberal_count=len(liberal),
        )

    def _demographic(self, folded: str) -> DemographicBias:
        gender = self._gender.find(folded)
        age = self._age.find(folded)
        socioeconomic = self._socioeconomic.find(folded)
        cultural = self._cultural.find(folded)
        total = len(gender) + len(age) + len(socioeconomic) + len(cultural)
        return DemographicBias(
            score=_normalize(total, EXPECTED_DEMOGRAPHIC),
            gender=_evidence(gender),
            age=_evidence(age),
            socioeconomic=_evidence(socioeconomic),
            cultural=_evidence(cultural),
            matches=total,
        )

    def _sensationalism(self, folded: str) -> Sensationalism:
        spans = self._sensational.find_spans(folded)
        spans.extend((m.start(), "!!") for m in EXCLAMATION_RUN.finditer(folded))
        found = [text for _, text in sorted(spans)]
        return Sensationalism(
            score=_normalize(len(found), EXPECTED_SENSATIONAL),
            phrases=_evidence(found),
            matches=len(found),
        )

    def _balanced(self, folded: str) -> BalancedReporting:
        found = self._balance.find(folded)
        quotes = len(ATTRIBUTED_QUOTE.findall(folded))
        # Each pair of attributed quotes counts as one more viewpoint marker
        quote_units = quotes // 2
        phrases = _evidence(found)
        if quote_units and len(phrases) < EVIDENCE_CAP:
            phrases.append("multiple attributed quotes")
        return BalancedReporting(
            score=_normalize(len(found) + quote_units, EXPECTED_BALANCE),
            phrases=phrases,
            matches=len(found),
            attributed_quotes=quotes,
        )

    def _factual_support(self, folded: str) -> FactualSupport:
        citations = self._citations.find(folded)
        factual = self._factual.find(folded)
        weighted = len(citations) + 0.5 * len(factual)
        return FactualSupport(
            score=_normalize(weighted, EXPECTED_FACTUAL),
            citations=_evidence(citations),
            factual_phrases=_evidence(factual),
            citation_count=len(citations),
            factual_phrase_count=len(factual),
        )


# ============================================================
# SINGLETON
# ============================================================

text_analyzer = TextSignalAnalyzer()
