# Weighted lexicon scan with negation, intensifier, and softener handling.
#
# Turns free-form text into per-category running totals (motivated, stressed,
# curious, achievement, strategic, uncertainty, technical) plus the auxiliary
# counts the sentiment classifier needs.

from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from data_designer_signal_lab.hyperparameters import DEFAULT_HYPERPARAMETERS, Hyperparameters

# ---------------------------------------------------------------------------
# Lexicons
# ---------------------------------------------------------------------------

MOTIVATED_TERMS: Mapping[str, float] = MappingProxyType({
    "build": 1.0, "building": 1.0, "win": 1.1, "winning": 1.1, "excited": 1.3,
    "love": 1.2, "ship": 1.0, "shipping": 1.0, "ready": 0.9, "great": 0.9,
    "awesome": 1.1, "confident": 1.3, "progress": 1.0, "improve": 0.9,
    "improving": 0.9, "success": 1.1, "successful": 1.1, "motivated": 1.4,
    "thrilled": 1.4, "pumped": 1.2, "proud": 1.2, "happy": 1.1, "energized": 1.3,
    "inspired": 1.2, "determined": 1.2, "productive": 1.0, "momentum": 1.0,
    "grateful": 1.0, "enjoy": 0.9, "eager": 1.2,
})
STRESSED_TERMS: Mapping[str, float] = MappingProxyType({
    "stuck": 1.3, "tired": 1.1, "overwhelmed": 1.5, "anxious": 1.4,
    "frustrated": 1.4, "worried": 1.2, "stress": 1.2, "stressed": 1.4, "bad": 0.9,
    "worst": 1.5, "terrible": 1.4, "awful": 1.4, "hate": 1.3, "failing": 1.3,
    "failure": 1.2, "hopeless": 1.6, "angry": 1.2, "upset": 1.1, "exhausted": 1.3,
    "burnout": 1.5, "panic": 1.4, "scared": 1.2, "struggle": 1.2,
    "struggling": 1.3, "pressure": 1.0, "drained": 1.2, "lost": 0.9,
})
CURIOUS_TERMS: Mapping[str, float] = MappingProxyType({
    "how": 0.6, "why": 0.7, "what": 0.5, "learn": 1.0, "learning": 1.0,
    "explore": 1.1, "exploring": 1.1, "wonder": 1.1, "wondering": 1.1,
    "curious": 1.4, "discover": 1.0, "understand": 0.8, "research": 0.8,
    "experiment": 0.9, "question": 0.7, "fascinated": 1.2, "intrigued": 1.2,
})
ACHIEVEMENT_TERMS: Mapping[str, float] = MappingProxyType({
    "built": 1.0, "developed": 1.0, "implemented": 1.0, "designed": 0.9,
    "created": 0.9, "deployed": 1.1, "engineered": 1.0, "optimized": 1.0,
    "trained": 0.9, "launched": 1.1, "shipped": 1.1, "led": 1.0, "delivered": 1.0,
    "won": 1.2, "completed": 0.9, "published": 1.0, "achieved": 1.1,
    "scaled": 1.0, "automated": 0.9, "reduced": 0.8, "improved": 0.8,
    "increased": 0.8, "architected": 1.0,
})
STRATEGIC_TERMS: Mapping[str, float] = MappingProxyType({
    "plan": 1.0, "planning": 1.0, "roadmap": 1.2, "strategy": 1.2,
    "strategic": 1.2, "goal": 0.9, "milestone": 1.0, "prioritize": 1.0,
    "priority": 0.9, "scale": 0.8, "scalable": 0.9, "vision": 1.0,
    "architecture": 0.9, "timeline": 0.9, "objective": 0.9, "focus": 0.7,
})
UNCERTAINTY_TERMS: Mapping[str, float] = MappingProxyType({
    "maybe": 0.8, "unsure": 1.2, "perhaps": 0.7, "confused": 1.0,
    "uncertain": 1.2, "guess": 0.8, "probably": 0.6, "might": 0.5, "doubt": 1.1,
    "unclear": 1.0, "idk": 1.0, "hopefully": 0.6, "somehow": 0.6,
})
TECHNICAL_TERMS: Mapping[str, float] = MappingProxyType({
    "python": 1.0, "typescript": 1.0, "javascript": 1.0, "react": 1.0,
    "nextjs": 1.0, "pytorch": 1.2, "tensorflow": 1.2, "ml": 1.1, "ai": 1.0,
    "llm": 1.2, "nlp": 1.1, "backend": 0.9, "frontend": 0.9, "api": 0.8,
    "docker": 0.9, "kubernetes": 1.0, "aws": 0.9, "sql": 0.8, "algorithm": 1.0,
    "engineer": 1.0, "engineering": 1.0, "developer": 1.0, "model": 0.7,
    "cloud": 0.7, "transformer": 1.1, "rag": 1.0,
})

NEGATIONS = frozenset({
    "not", "no", "never", "dont", "didnt", "doesnt", "isnt", "wasnt", "arent",
    "werent", "cant", "cannot", "couldnt", "wont", "wouldnt", "shouldnt",
    "havent", "hasnt", "hadnt", "aint", "nothing", "hardly", "without", "nor",
})
INTENSIFIERS = frozenset({
    "very", "really", "so", "extremely", "super", "totally", "incredibly",
    "highly", "truly", "absolutely", "deeply", "insanely", "seriously", "completely",
})
SOFTENERS = frozenset({
    "slightly", "somewhat", "kinda", "sorta", "mildly", "barely", "little",
    "fairly", "bit", "partly", "marginally",
})

# (category, lexicon, signal prefix), in scan order
_CATEGORIES: tuple[tuple[str, Mapping[str, float], str], ...] = (
    ("motivated", MOTIVATED_TERMS, "+"),
    ("stressed", STRESSED_TERMS, "-"),
    ("curious", CURIOUS_TERMS, "?"),
    ("achievement", ACHIEVEMENT_TERMS, "achv:"),
    ("strategic", STRATEGIC_TERMS, "plan:"),
    ("uncertainty", UNCERTAINTY_TERMS, "unsure:"),
    ("technical", TECHNICAL_TERMS, "tech:"),
)

# ---------------------------------------------------------------------------
# Compiled patterns
# ---------------------------------------------------------------------------

_APOSTROPHE_RE = re.compile(r"['’]")
_NON_WORD_RE = re.compile(r"[^a-z0-9\s]")
_QUANTIFIED_RE = re.compile(
    r"\b\d+\+?\s*(?:projects?|models?|apps?|applications?|products?|systems?|features?"
    r"|hackathons?|users?|clients?|customers?|papers?|services?|repos?|repositories|certifications?)\b"
    r"|\b(?:completed|built|shipped|delivered|deployed|launched|trained|published)\s+(?:over\s+|more than\s+)?\d+"
)
_ACCOLADE_RE = re.compile(
    r"\b(hackathons?|winners?|won|awards?|awarded|champions?|championship|finalists?|scholarships?|cracked"
    r"|(?:got|landed) (?:an? |the )?(?:job|offer|internship)|placed at)\b"
)
_SELF_DIMINISHING_RE = re.compile(
    r"\b(?:nothing special|just only|only just|no big deal|not a big deal|nothing much"
    r"|nothing great|not that impressive|just lucky|got lucky)\b"
)
_STRONG_NEGATIVE_RE = re.compile(r"\b(?:i am|im|it is|its|this is)\s+(?:the\s+)?(?:worst|terrible|awful|hopeless)\b")

# ---------------------------------------------------------------------------
# Dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LexiconScores:
    motivated: float = 0.0
    stressed: float = 0.0
    curious: float = 0.0
    achievement: float = 0.0
    strategic: float = 0.0
    uncertainty: float = 0.0
    technical: float = 0.0
    question_marks: int = 0
    exclamations: int = 0
    token_count: int = 0
    evidence_hits: int = 0
    quantified_achievement: bool = False
    accolade: bool = False
    self_diminishing: bool = False
    strong_negative: bool = False
    ends_with_period: bool = False
    signals: tuple[str, ...] = ()

    @property
    def emotional_total(self) -> float:
        return self.motivated + self.stressed + self.curious

    @property
    def evidence_density(self) -> float:
        return self.evidence_hits / self.token_count if self.token_count else 0.0


@dataclass
class _Tally:
    totals: dict[str, float] = field(default_factory=lambda: {name: 0.0 for name, _, _ in _CATEGORIES})
    signals: list[str] = field(default_factory=list)
    hits: int = 0


EMPTY_SCORES = LexiconScores()

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _flatten(text: str) -> str:
    return _APOSTROPHE_RE.sub("", text.lower())


def tokenize(text: str) -> list[str]:
    """Lower-case, drop apostrophes, and split on anything that is not a letter or digit."""
    return _NON_WORD_RE.sub(" ", _flatten(text)).split()


def _stem(token: str) -> str:
    if token.endswith("ing") and len(token) > 5:
        return token[:-3]
    if token.endswith("ed") and len(token) > 4:
        return token[:-2]
    if token.endswith("s") and not token.endswith("ss") and len(token) > 3:
        return token[:-1]
    return token


def _lookup(token: str, lexicon: Mapping[str, float]) -> float | None:
    weight = lexicon.get(token)
    if weight is None:
        weight = lexicon.get(_stem(token))
    return weight


def _window_modifiers(window: list[str], hp: Hyperparameters) -> tuple[bool, float]:
    negated = False
    multiplier = 1.0
    for word in window:
        if word in NEGATIONS:
            negated = True
        elif word in INTENSIFIERS:
            multiplier *= hp.intensifier_multiplier
        elif word in SOFTENERS:
            multiplier *= hp.softener_multiplier
    return negated, multiplier


def _scan_tokens(tokens: list[str], hp: Hyperparameters) -> _Tally:
    tally = _Tally()
    for i, token in enumerate(tokens):
        window = tokens[max(0, i - hp.lookbehind_tokens) : i]
        negated, multiplier = _window_modifiers(window, hp)
        for category, lexicon, prefix in _CATEGORIES:
            weight = _lookup(token, lexicon)
            if weight is None:
                continue
            tally.hits += 1
            contribution = weight * multiplier
            if not negated:
                tally.totals[category] += contribution
                tally.signals.append(f"{prefix}{token}")
                continue
            tally.signals.append(f"negated-{token}")
            if category == "motivated":
                tally.totals["stressed"] += contribution * hp.negated_motivated_ratio
            elif category == "stressed":
                tally.totals["motivated"] += contribution * hp.negated_stressed_ratio
    return tally


def _deduplicate(items: list[str]) -> list[str]:
    seen: set[str] = set()
    out: list[str] = []
    for item in items:
        if item not in seen:
            seen.add(item)
            out.append(item)
    return out


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def score_lexicons(text: str, hyperparameters: Hyperparameters | None = None) -> LexiconScores:
    """Scan text against the category lexicons and apply the phrase heuristics.

    Args:
        text: Free-form user text.
        hyperparameters: Optional tuning overrides.

    Returns:
        LexiconScores with per-category totals, auxiliary counts, and at most
        ``signal_cap`` explainability tags in match order.
    """
    hp = hyperparameters or DEFAULT_HYPERPARAMETERS
    if not text or not text.strip():
        return EMPTY_SCORES

    flat = _flatten(text)
    tokens = tokenize(text)
    tally = _scan_tokens(tokens, hp)
    totals = tally.totals

    quantified = _QUANTIFIED_RE.search(flat) is not None
    if quantified:
        totals["achievement"] += hp.quantified_achievement_bump
        tally.signals.append("metric:quantified")
        tally.hits += 1

    accolade_match = _ACCOLADE_RE.search(flat)
    if accolade_match:
        totals["motivated"] += hp.accolade_motivated_bump
        totals["achievement"] += hp.accolade_achievement_bump
        tally.signals.append(f"accolade:{accolade_match.group(1)}")
        tally.hits += 1

    question_marks = text.count("?")
    exclamations = text.count("!")
    totals["curious"] += min(question_marks, hp.question_cap) * hp.question_weight
    boost = min(exclamations, hp.exclamation_cap) * hp.exclamation_weight
    if totals["motivated"] > 0:
        totals["motivated"] += boost
    if totals["stressed"] > 0:
        totals["stressed"] += boost

    strong_negative = _STRONG_NEGATIVE_RE.search(flat) is not None
    if strong_negative:
        totals["stressed"] += hp.strong_negative_bump
        tally.signals.append("override:strong-negative")
        tally.hits += 1

    return LexiconScores(
        motivated=totals["motivated"],
        stressed=totals["stressed"],
        curious=totals["curious"],
        achievement=totals["achievement"],
        strategic=totals["strategic"],
        uncertainty=totals["uncertainty"],
        technical=totals["technical"],
        question_marks=question_marks,
        exclamations=exclamations,
        token_count=len(tokens),
        evidence_hits=tally.hits,
        quantified_achievement=quantified,
        accolade=accolade_match is not None,
        self_diminishing=_SELF_DIMINISHING_RE.search(flat) is not None,
        strong_negative=strong_negative,
        ends_with_period=text.rstrip().endswith("."),
        signals=tuple(_deduplicate(tally.signals)[: hp.signal_cap]),
    )
