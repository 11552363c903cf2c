from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable

from data_designer_signal_lab.hyperparameters import DEFAULT_HYPERPARAMETERS, Hyperparameters

_BULLET_RE = re.compile(r"^(?:[-*•▪◦·]|\d+[.)])\s+")
_ACTION_VERB_RE = re.compile(
    r"\b(?:built|developed|implemented|designed|created|deployed|engineered|optimized|trained|led|launched"
    r"|automated|architected|reduced|improved|increased|delivered|migrated|scaled|shipped|integrated"
    r"|refactored|analyzed|managed|mentored|streamlined|established|published)\b"
)
_METRIC_RE = re.compile(
    r"\d+(?:\.\d+)?\s*%|\b\d+(?:\.\d+)?x\b|[$€£₹]\s*\d|\b\d+(?:\.\d+)?\s*(?:k|m|million|billion)\b"
    r"|\b(?:accuracy|latency|throughput|f1|precision|recall|revenue|uptime|conversion|retention)\b"
)
_SECTION_RE = re.compile(r"\b(summary|experience|projects?|education|skills|certifications?)\b")
_SECTION_CANONICAL = {"project": "projects", "certification": "certifications"}
_SECTION_HEADER_MAX_WORDS = 4
_AI_KEYWORD_RE = re.compile(
    r"\b(?:machine learning|deep learning|artificial intelligence|generative ai|computer vision|neural networks?"
    r"|ai|ml|nlp|llms?|tensorflow|pytorch|scikit-learn|keras|transformers?|langchain|hugging ?face|rag)\b"
)

# (word count upper bound, bonus); anything longer gets the final bonus
_DEPTH_BANDS = ((80, 4), (160, 10), (420, 16))
_DEPTH_BONUS_LONG = 12


@dataclass(frozen=True)
class ResumeScore:
    score: int
    feedback: tuple[str, ...]

    def to_payload(self) -> dict[str, object]:
        return {"score": self.score, "feedback": list(self.feedback)}


@dataclass(frozen=True)
class ResumeCounts:
    bullets: int
    action_lines: int
    metric_lines: int
    sections: int
    ai_keywords: int
    word_count: int


_FeedbackPredicate = Callable[[ResumeCounts, Hyperparameters], bool]

STRENGTH_RULES: list[tuple[_FeedbackPredicate, str]] = [
    (
        lambda c, hp: c.action_lines >= hp.resume_strong_actions,
        "Strong action-oriented phrasing across project and experience bullets.",
    ),
    (lambda c, hp: c.metric_lines >= hp.resume_strong_metrics, "Good use of measurable outcomes."),
    (
        lambda c, hp: c.sections >= hp.resume_strong_sections,
        "Clear section structure makes the resume easy to scan.",
    ),
    (lambda c, hp: c.ai_keywords >= hp.resume_strong_keywords, "AI/ML identity is clearly visible."),
]
IMPROVEMENT_RULES: list[tuple[_FeedbackPredicate, str]] = [
    (lambda c, hp: c.metric_lines == 0, "Include measurable metrics (latency, accuracy, growth) to quantify impact."),
    (
        lambda c, hp: c.action_lines < hp.resume_few_actions,
        "Add 2-3 project bullets with action verbs (built/developed/deployed) and outcomes.",
    ),
    (lambda c, hp: c.sections < hp.resume_few_sections, "Add clear section headers such as Experience, Projects, and Skills."),
    (lambda c, hp: c.ai_keywords == 0, "Add AI-specific technical terms aligned to target roles."),
    (lambda c, hp: c.word_count < hp.resume_short_words, "Expand the resume; it is too short to show the depth of your work."),
]
FALLBACK_FEEDBACK = "Solid foundation; sharpen each bullet around one measurable result."
MAX_STRENGTHS = 2
MAX_IMPROVEMENTS = 3


def count_signals(text: str) -> ResumeCounts:
    normalized = text.lower()
    lines = [line.strip() for line in normalized.split("\n") if line.strip()]

    sections: set[str] = set()
    for line in lines:
        header = line.strip("#*:=-_ \t")
        if not header or len(header.split()) > _SECTION_HEADER_MAX_WORDS:
            continue
        for m in _SECTION_RE.finditer(header):
            sections.add(_SECTION_CANONICAL.get(m.group(1), m.group(1)))

    return ResumeCounts(
        bullets=sum(1 for line in lines if _BULLET_RE.match(line)),
        action_lines=sum(1 for line in lines if _ACTION_VERB_RE.search(line)),
        metric_lines=sum(1 for line in lines if _METRIC_RE.search(line)),
        sections=len(sections),
        ai_keywords=len(_AI_KEYWORD_RE.findall(normalized)),
        word_count=len(text.split()),
    )


def _depth_bonus(word_count: int) -> int:
    for upper, bonus in _DEPTH_BANDS:
        if word_count < upper:
            return bonus
    return _DEPTH_BONUS_LONG


def _raw_score(c: ResumeCounts, hp: Hyperparameters) -> int:
    score = hp.resume_base
    score += min(hp.resume_impact_cap, hp.resume_action_weight * c.action_lines + hp.resume_metric_weight * c.metric_lines)
    score += min(hp.resume_structure_cap, hp.resume_section_weight * c.sections + min(hp.resume_bullet_cap, c.bullets))
    score += min(hp.resume_keyword_cap, hp.resume_keyword_weight * c.ai_keywords)
    score += _depth_bonus(c.word_count)

    if c.word_count < hp.resume_short_words:
        score -= hp.resume_short_penalty
    if c.action_lines < hp.resume_few_actions:
        score -= hp.resume_few_actions_penalty
    if c.metric_lines == 0:
        score -= hp.resume_no_metrics_penalty
    if c.sections < hp.resume_few_sections:
        score -= hp.resume_few_sections_penalty
    if c.ai_keywords > hp.resume_stuffing_hits and c.metric_lines < hp.resume_stuffing_metric_lines:
        score -= hp.resume_stuffing_penalty
    return score


def _feedback(c: ResumeCounts, hp: Hyperparameters) -> list[str]:
    strengths = [message for predicate, message in STRENGTH_RULES if predicate(c, hp)][:MAX_STRENGTHS]
    improvements = [message for predicate, message in IMPROVEMENT_RULES if predicate(c, hp)][:MAX_IMPROVEMENTS]
    return strengths + improvements or [FALLBACK_FEEDBACK]


def score_resume(text: str, hyperparameters: Hyperparameters | None = None) -> ResumeScore:
    """Score resume text against heuristic quality signals.

    Args:
        text: Plain resume text, one bullet or heading per line.
        hyperparameters: Optional tuning overrides.

    Returns:
        ResumeScore with a score between 24 and 96 and up to five feedback
        strings, strengths first.
    """
    hp = hyperparameters or DEFAULT_HYPERPARAMETERS
    counts = count_signals(text)
    score = max(hp.resume_score_min, min(hp.resume_score_max, _raw_score(counts, hp)))
    return ResumeScore(score=score, feedback=tuple(_feedback(counts, hp)))
