from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable

from data_designer_signal_lab.hyperparameters import DEFAULT_HYPERPARAMETERS, Hyperparameters
from data_designer_signal_lab.lexicon import LexiconScores, score_lexicons

MOTIVATED = "Motivated"
CURIOUS = "Curious"
NEUTRAL = "Neutral"
STRESSED = "Stressed"

PRESSURE = "Pressure/Strain"
EXPLORATORY = "Exploratory"
ACHIEVEMENT_ORIENTED = "Declarative/Achievement-Oriented"
STRATEGIC = "Strategic/Planning"
INFORMATIONAL = "Declarative/Informational"

EMPTY_REVIEW = "No text to analyze yet."

# ---------------------------------------------------------------------------
# Dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SentimentResult:
    label: str
    confidence: int
    score: int
    tone_type: str
    emotional_intensity: str
    professional_assertiveness: int
    review: str
    signals: tuple[str, ...]

    def to_payload(self) -> dict[str, object]:
        return {
            "label": self.label,
            "confidence": self.confidence,
            "score": self.score,
            "tone_type": self.tone_type,
            "emotional_intensity": self.emotional_intensity,
            "professional_assertiveness": self.professional_assertiveness,
            "review": self.review,
            "signals": list(self.signals),
        }


# ---------------------------------------------------------------------------
# Rule tables, evaluated in order, first match wins
# ---------------------------------------------------------------------------

_LabelPredicate = Callable[[LexiconScores, Hyperparameters], bool]
_TonePredicate = Callable[[str, LexiconScores], bool]
_ReviewPredicate = Callable[[str, str, LexiconScores], bool]


def _margin(s: LexiconScores) -> float:
    ranked = sorted((s.motivated, s.stressed, s.curious), reverse=True)
    return ranked[0] - ranked[1]


def _dominant_label(s: LexiconScores) -> str:
    return max(((MOTIVATED, s.motivated), (STRESSED, s.stressed), (CURIOUS, s.curious)), key=lambda pair: pair[1])[0]


LABEL_RULES: list[tuple[_LabelPredicate, str]] = [
    (lambda s, hp: s.emotional_total < hp.neutral_total_max, NEUTRAL),
    (
        lambda s, hp: s.stressed >= s.motivated * hp.stressed_over_motivated
        and s.stressed >= s.curious * hp.stressed_over_curious
        and s.stressed >= hp.stressed_min,
        STRESSED,
    ),
    (
        lambda s, hp: s.motivated >= s.stressed * hp.motivated_over_stressed
        and s.motivated >= s.curious
        and s.motivated >= hp.motivated_min,
        MOTIVATED,
    ),
    (lambda s, hp: s.curious >= max(s.motivated, s.stressed) and s.curious >= hp.curious_min, CURIOUS),
    (lambda s, hp: _margin(s) < hp.neutral_margin_max, NEUTRAL),
]

TONE_RULES: list[tuple[_TonePredicate, str]] = [
    (lambda label, s: label == STRESSED, PRESSURE),
    (lambda label, s: s.question_marks > 0 or label == CURIOUS, EXPLORATORY),
    (lambda label, s: s.achievement > 0, ACHIEVEMENT_ORIENTED),
    (lambda label, s: s.strategic > 0, STRATEGIC),
]

REVIEW_RULES: list[tuple[_ReviewPredicate, str]] = [
    (
        lambda label, tone, s: s.self_diminishing and s.accolade,
        'Your wins speak louder than the modest framing. Drop the "nothing special" tone and let the achievements lead.',
    ),
    (
        lambda label, tone, s: s.self_diminishing and s.quantified_achievement,
        "The numbers show real output, but the self-diminishing framing undersells them. State the results plainly.",
    ),
    (
        lambda label, tone, s: s.self_diminishing and s.achievement > 0,
        "Concrete work is visible here, yet the wording plays it down. Own the outcome in the first sentence.",
    ),
    (
        lambda label, tone, s: s.self_diminishing,
        "The framing sounds self-diminishing; naming one concrete result would balance it.",
    ),
    (
        lambda label, tone, s: label == STRESSED and s.strong_negative,
        "Strong distress language detected; consider stepping back before pushing further.",
    ),
    (
        lambda label, tone, s: label == STRESSED,
        "Reads as under pressure; narrowing to one next step usually restores momentum.",
    ),
    (
        lambda label, tone, s: label == MOTIVATED and tone == ACHIEVEMENT_ORIENTED,
        "Confident and results-driven; the achievements carry the message.",
    ),
    (lambda label, tone, s: label == MOTIVATED, "Energetic, forward-looking tone."),
    (lambda label, tone, s: label == CURIOUS, "Inquisitive tone; the questions signal active learning."),
    (
        lambda label, tone, s: label == NEUTRAL and tone == ACHIEVEMENT_ORIENTED,
        "Matter-of-fact delivery of concrete achievements; a quantified outcome would sharpen it.",
    ),
    (lambda label, tone, s: tone == STRATEGIC, "Measured, planning-focused tone."),
    (
        lambda label, tone, s: tone == EXPLORATORY,
        "Exploratory but low on emotional cues; the intent comes through as open questions.",
    ),
]
DEFAULT_REVIEW = "Neutral, informational tone with few emotional cues."


def classify_label(scores: LexiconScores, hyperparameters: Hyperparameters | None = None) -> str:
    hp = hyperparameters or DEFAULT_HYPERPARAMETERS
    for predicate, label in LABEL_RULES:
        if predicate(scores, hp):
            return label
    return _dominant_label(scores)


def classify_tone(label: str, scores: LexiconScores) -> str:
    for predicate, tone in TONE_RULES:
        if predicate(label, scores):
            return tone
    return INFORMATIONAL


def select_review(label: str, tone: str, scores: LexiconScores) -> str:
    for predicate, review in REVIEW_RULES:
        if predicate(label, tone, scores):
            return review
    return DEFAULT_REVIEW


# ---------------------------------------------------------------------------
# Numeric scores
# ---------------------------------------------------------------------------


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _saturate(raw: float, scale: float) -> int:
    return _round_half_up(raw * scale / (abs(raw) + scale))


def _confidence(s: LexiconScores, label: str, hp: Hyperparameters) -> int:
    total = s.emotional_total
    emotional = min(hp.emotional_margin_cap, _margin(s) / max(total, 1.0) * hp.emotional_margin_cap)
    emotional += min(hp.emotional_total_cap, total * hp.emotional_total_weight)

    intent = min(
        hp.intent_cap,
        s.achievement * hp.intent_achievement_weight
        + s.strategic * hp.intent_strategic_weight
        + s.technical * hp.intent_technical_weight,
    )
    intent -= s.uncertainty * hp.intent_uncertainty_penalty

    structure = hp.structure_period_bonus if s.ends_with_period else 0.0
    structure += min(hp.structure_question_cap, s.question_marks * hp.structure_question_weight)
    structure += min(hp.structure_exclamation_cap, s.exclamations * hp.structure_exclamation_weight)

    boost = 0.0
    if label == NEUTRAL and s.achievement + s.strategic + s.technical >= hp.neutral_intent_min:
        boost = hp.neutral_intent_boost

    confidence = _clamp(_round_half_up(hp.confidence_base + emotional + intent + structure + boost), hp.confidence_min, hp.confidence_max)
    if s.evidence_hits <= hp.sparse_evidence_hits:
        confidence = min(confidence, hp.sparse_evidence_cap)
    elif s.token_count >= hp.low_density_min_tokens and s.evidence_density < hp.low_density_threshold:
        confidence -= hp.low_density_penalty
    elif s.evidence_density >= hp.high_density_threshold:
        confidence += hp.high_density_boost
    return _clamp(confidence, hp.confidence_min, hp.confidence_max)


def _valence(s: LexiconScores, hp: Hyperparameters) -> int:
    raw = (s.motivated - s.stressed) * hp.valence_emotion_weight
    raw += s.achievement * hp.valence_achievement_weight + s.strategic * hp.valence_strategic_weight
    if s.quantified_achievement:
        raw += hp.valence_quantified_bonus
    if s.accolade:
        raw += hp.valence_accolade_bonus
    raw -= s.uncertainty * hp.valence_uncertainty_penalty
    return _clamp(_saturate(raw, hp.valence_saturation), -100, 100)


def _intensity(s: LexiconScores, hp: Hyperparameters) -> str:
    if s.emotional_total >= hp.intensity_high_min:
        return "High"
    if s.emotional_total >= hp.intensity_moderate_min:
        return "Moderate"
    return "Low"


def _assertiveness(s: LexiconScores, label: str, tone: str, hp: Hyperparameters) -> int:
    raw = (
        hp.assertiveness_base
        + s.achievement * hp.assertiveness_achievement_weight
        + s.strategic * hp.assertiveness_strategic_weight
        + s.technical * hp.assertiveness_technical_weight
        - s.uncertainty * hp.assertiveness_uncertainty_penalty
    )
    if s.quantified_achievement:
        raw += hp.assertiveness_quantified_bonus
    value = _saturate(max(0.0, raw), hp.assertiveness_saturation)
    if label == NEUTRAL and tone == ACHIEVEMENT_ORIENTED and s.uncertainty == 0:
        value = max(value, hp.assertiveness_achievement_floor)
    return _clamp(value, 0, 100)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def analyze_sentiment(text: str, hyperparameters: Hyperparameters | None = None) -> SentimentResult:
    """Classify the emotional and professional tone of free-form text.

    Args:
        text: The message to analyze. Empty or whitespace-only text is valid input.
        hyperparameters: Optional tuning overrides.

    Returns:
        SentimentResult with label, confidence (30-94, or 0 for empty text),
        signed valence score, tone type, emotional intensity, professional
        assertiveness, a one-sentence review, and up to seven signal tags.
    """
    hp = hyperparameters or DEFAULT_HYPERPARAMETERS
    if not text or not text.strip():
        return SentimentResult(
            label=NEUTRAL, confidence=0, score=0, tone_type=INFORMATIONAL,
            emotional_intensity="Low", professional_assertiveness=0,
            review=EMPTY_REVIEW, signals=(),
        )

    scores = score_lexicons(text, hp)
    label = classify_label(scores, hp)
    tone = classify_tone(label, scores)
    return SentimentResult(
        label=label,
        confidence=_confidence(scores, label, hp),
        score=_valence(scores, hp),
        tone_type=tone,
        emotional_intensity=_intensity(scores, hp),
        professional_assertiveness=_assertiveness(scores, label, tone, hp),
        review=select_review(label, tone, scores),
        signals=scores.signals,
    )


def detect_sentiment(text: str) -> str:
    """Return only the label for ``text``."""
    return analyze_sentiment(text).label
