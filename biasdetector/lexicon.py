"""
Lexicon — Read-Only Pattern Store

Static phrase tables used by the text signal analyzer and the reliable
source patterns used by the source classifier.

The tables are module-level tuples. They are bundled into a single
frozen `Lexicon` object that is built once at import time
(`DEFAULT_LEXICON`) and injected into the components that need it.
Nothing mutates a Lexicon after construction, so one instance can be
shared by any number of concurrent analyses.

Phrases are matched case-insensitively on word boundaries. Entries are
plain phrases, not regexes; regex-shaped markers live in
`biasdetector.signals`.
"""

from __future__ import annotations

from dataclasses import dataclass, field


# ============================================================
# EMOTIONAL LANGUAGE
# ============================================================

POSITIVE_WORDS: tuple[str, ...] = (
    "amazing", "brilliant", "triumph", "heroic", "remarkable", "wonderful",
    "extraordinary", "historic", "inspiring", "magnificent", "stunning",
    "incredible", "fantastic", "glorious", "groundbreaking", "miraculous",
)

NEGATIVE_WORDS: tuple[str, ...] = (
    "terrible", "horrible", "disastrous", "tragic", "appalling", "awful",
    "dreadful", "shameful", "disgraceful", "pathetic", "alarming",
    "devastating", "failed", "failure", "corrupt", "dangerous", "outrageous",
)

LOADED_WORDS: tuple[str, ...] = (
    "regime", "thugs", "extremist", "radical", "propaganda", "scheme",
    "cronies", "puppet", "witch hunt", "fake news", "elitist", "un-american",
    "agenda", "cover-up", "so-called", "brainwashed", "sheeple", "mob",
)


# ============================================================
# OPINION LANGUAGE
# ============================================================

OPINION_PHRASES: tuple[str, ...] = (
    "i think", "i believe", "i feel", "in my opinion", "in my view",
    "we believe", "it seems", "clearly", "obviously", "undoubtedly",
    "of course", "without a doubt", "should", "must", "ought to",
    "it is clear that", "needless to say", "arguably", "surely",
)


# ============================================================
# IDEOLOGICAL MARKERS
# ============================================================

CONSERVATIVE_TERMS: tuple[str, ...] = (
    "illegal aliens", "illegal immigrants", "pro-life", "tax relief",
    "radical left", "big government", "job creators", "death tax",
    "law and order", "traditional values", "religious freedom",
    "border security", "second amendment", "government overreach",
    "socialist", "woke", "family values", "free market",
)

LIBERAL_TERMS: tuple[str, ...] = (
    "undocumented immigrants", "pro-choice", "social justice",
    "climate crisis", "gun violence", "tax breaks for the wealthy",
    "income inequality", "systemic racism", "far right", "far-right",
    "corporate greed", "living wage", "reproductive rights",
    "marginalized communities", "white supremacy", "gun safety",
    "climate justice", "progressive",
)


# ============================================================
# DEMOGRAPHIC MARKERS
# ============================================================

GENDER_TERMS: tuple[str, ...] = (
    "women are", "men are", "like a girl", "man up", "manpower",
    "chairman", "female driver", "hysterical", "bossy", "emotional woman",
    "the weaker sex", "boys will be boys",
)

AGE_TERMS: tuple[str, ...] = (
    "millennials are", "boomers", "ok boomer", "too old", "senile",
    "young people are", "kids these days", "over the hill", "elderly people are",
    "entitled generation",
)

SOCIOECONOMIC_TERMS: tuple[str, ...] = (
    "welfare queen", "the poor are", "lower class", "ghetto", "trailer park",
    "white trash", "freeloaders", "handouts", "elites", "the rich are",
    "moochers",
)

CULTURAL_TERMS: tuple[str, ...] = (
    "those people", "illegals", "foreigners", "third world", "exotic",
    "uncivilized", "savages", "primitive", "invasion", "un-american values",
    "real americans",
)


# ============================================================
# SENSATIONALISM
# ============================================================

SENSATIONAL_PHRASES: tuple[str, ...] = (
    "shocking", "bombshell", "unbelievable", "you won't believe",
    "explosive", "breaking", "jaw-dropping", "mind-blowing", "catastrophic",
    "outrage", "slams", "destroys", "chaos", "nightmare", "stunning",
    "horrifying", "insane", "epic", "unprecedented", "scandal",
    "groundbreaking", "dramatic",
)


# ============================================================
# BALANCED REPORTING
# ============================================================

BALANCE_MARKERS: tuple[str, ...] = (
    "however", "on the other hand", "critics argue", "critics say",
    "critics, however", "supporters argue", "supporters say", "proponents",
    "opponents", "in contrast", "others argue", "while some", "some argue",
    "alternatively", "nevertheless", "although", "disagree", "disputed",
    "both sides", "counterargument", "meanwhile",
)


# ============================================================
# FACTUAL SUPPORT
# ============================================================

CITATION_MARKERS: tuple[str, ...] = (
    "according to", "published in", "data from", "study", "studies",
    "report", "survey", "researchers", "census", "peer-reviewed",
    "journal", "per cent", "percent", "cited", "spokesperson", "stated",
)

FACTUAL_PHRASES: tuple[str, ...] = (
    "data shows", "data show", "statistics", "evidence", "confirmed",
    "found that", "measured", "records show", "official figures",
    "documented", "verified", "analysis of", "the findings", "estimated",
)


# ============================================================
# RELIABLE SOURCE DOMAINS
# ============================================================

# Category order is significant: the first matching category wins.
SOURCE_CATEGORY_ORDER: tuple[str, ...] = (
    "government", "international", "education", "news", "scientific",
)

SOURCE_DOMAIN_PATTERNS: dict[str, tuple[str, ...]] = {
    "government": (
        r"\.gov$",
        r"(?:^|\.)gov\.[a-z]{2}$",
        r"\.mil$",
        r"(?:^|\.)gc\.ca$",
        r"(?:^|\.)gouv\.fr$",
        r"(?:^|\.)bund\.de$",
    ),
    "international": (
        r"\.int$",
        r"(?:^|\.)un\.org$",
        r"(?:^|\.)worldbank\.org$",
        r"(?:^|\.)imf\.org$",
        r"(?:^|\.)oecd\.org$",
        r"(?:^|\.)europa\.eu$",
        r"(?:^|\.)unicef\.org$",
        r"(?:^|\.)unesco\.org$",
    ),
    "education": (
        r"\.edu$",
        r"(?:^|\.)edu\.[a-z]{2}$",
        r"(?:^|\.)ac\.[a-z]{2}$",
    ),
    "news": (
        r"(?:^|\.)reuters\.com$",
        r"(?:^|\.)apnews\.com$",
        r"(?:^|\.)bbc\.co\.uk$",
        r"(?:^|\.)bbc\.com$",
        r"(?:^|\.)npr\.org$",
        r"(?:^|\.)pbs\.org$",
        r"(?:^|\.)nytimes\.com$",
        r"(?:^|\.)washingtonpost\.com$",
        r"(?:^|\.)wsj\.com$",
        r"(?:^|\.)theguardian\.com$",
        r"(?:^|\.)economist\.com$",
        r"(?:^|\.)bloomberg\.com$",
        r"(?:^|\.)ft\.com$",
        r"(?:^|\.)cbsnews\.com$",
        r"(?:^|\.)nbcnews\.com$",
    ),
    "scientific": (
        r"(?:^|\.)nature\.com$",
        r"(?:^|\.)science\.org$",
        r"(?:^|\.)sciencemag\.org$",
        r"(?:^|\.)thelancet\.com$",
        r"(?:^|\.)nejm\.org$",
        r"(?:^|\.)plos\.org$",
        r"(?:^|\.)cell\.com$",
        r"(?:^|\.)springer\.com$",
        r"(?:^|\.)arxiv\.org$",
        r"(?:^|\.)jamanetwork\.com$",
        r"(?:^|\.)bmj\.com$",
    ),
}

SOURCE_CATEGORY_CONFIDENCE: dict[str, float] = {
    "government": 0.95,
    "international": 0.95,
    "education": 0.90,
    "news": 0.85,
    "scientific": 0.95,
}

# Hostname fragments that look like a news outlet we do not recognize.
NEWS_LIKE_TOKENS: tuple[str, ...] = ("news", "times", "daily")


# ============================================================
# THE LEXICON
# ============================================================

@dataclass(frozen=True)
class Lexicon:
    """Immutable bundle of every phrase and domain table."""

    positive: tuple[str, ...] = POSITIVE_WORDS
    negative: tuple[str, ...] = NEGATIVE_WORDS
    loaded: tuple[str, ...] = LOADED_WORDS
    opinion: tuple[str, ...] = OPINION_PHRASES
    conservative: tuple[str, ...] = CONSERVATIVE_TERMS
    liberal: tuple[str, ...] = LIBERAL_TERMS
    gender: tuple[str, ...] = GENDER_TERMS
    age: tuple[str, ...] = AGE_TERMS
    socioeconomic: tuple[str, ...] = SOCIOECONOMIC_TERMS
    cultural: tuple[str, ...] = CULTURAL_TERMS
    sensational: tuple[str, ...] = SENSATIONAL_PHRASES
    balance: tuple[str, ...] = BALANCE_MARKERS
    citations: tuple[str, ...] = CITATION_MARKERS
    factual: tuple[str, ...] = FACTUAL_PHRASES
    source_categories: tuple[str, ...] = SOURCE_CATEGORY_ORDER
    source_patterns: dict[str, tuple[str, ...]] = field(
        default_factory=lambda: dict(SOURCE_DOMAIN_PATTERNS),
    )
    source_confidence: dict[str, float] = field(
        default_factory=lambda: dict(SOURCE_CATEGORY_CONFIDENCE),
    )
    news_like_tokens: tuple[str, ...] = NEWS_LIKE_TOKENS

    def __post_init__(self):
        missing = [
            c for c in self.source_categories
            if c not in self.source_patterns or c not in self.source_confidence
        ]
        if missing:
            raise ValueError(f"Source categories without patterns or confidence: {missing}")


# ============================================================
# SINGLETON
# ============================================================

DEFAULT_LEXICON = Lexicon()
