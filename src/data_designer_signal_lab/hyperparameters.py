from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Hyperparameters:
    """Tunable weights, thresholds, and caps shared by the three analyzers."""

    # Lexicon scan
    lookbehind_tokens: int = 2
    negated_motivated_ratio: float = 0.7
    negated_stressed_ratio: float = 0.5
    intensifier_multiplier: float = 1.35
    softener_multiplier: float = 0.75
    signal_cap: int = 7

    # Post-scan heuristics
    question_weight: float = 0.6
    question_cap: int = 3
    exclamation_weight: float = 0.3
    exclamation_cap: int = 3
    quantified_achievement_bump: float = 1.0
    accolade_motivated_bump: float = 1.0
    accolade_achievement_bump: float = 1.0
    strong_negative_bump: float = 3.0

    # Label thresholds
    neutral_total_max: float = 1.6
    stressed_over_motivated: float = 1.15
    stressed_over_curious: float = 1.1
    stressed_min: float = 1.8
    motivated_over_stressed: float = 1.05
    motivated_min: float = 1.7
    curious_min: float = 1.5
    neutral_margin_max: float = 0.7

    # Confidence
    confidence_base: int = 32
    emotional_margin_cap: float = 34.0
    emotional_total_weight: float = 4.0
    emotional_total_cap: float = 22.0
    intent_achievement_weight: float = 4.0
    intent_strategic_weight: float = 3.0
    intent_technical_weight: float = 1.5
    intent_cap: float = 18.0
    intent_uncertainty_penalty: float = 6.0
    structure_period_bonus: float = 4.0
    structure_question_weight: float = 2.0
    structure_question_cap: float = 6.0
    structure_exclamation_weight: float = 2.0
    structure_exclamation_cap: float = 6.0
    neutral_intent_min: float = 2.0
    neutral_intent_boost: float = 8.0
    confidence_min: int = 30
    confidence_max: int = 94
    sparse_evidence_hits: int = 1
    sparse_evidence_cap: int = 58
    low_density_min_tokens: int = 4
    low_density_threshold: float = 0.12
    low_density_penalty: int = 8
    high_density_threshold: float = 0.35
    high_density_boost: int = 4

    # Valence and assertiveness
    valence_emotion_weight: float = 20.0
    valence_achievement_weight: float = 1.4
    valence_strategic_weight: float = 1.2
    valence_quantified_bonus: float = 4.0
    valence_accolade_bonus: float = 3.0
    valence_uncertainty_penalty: float = 5.0
    valence_saturation: float = 90.0
    assertiveness_base: float = 30.0
    assertiveness_achievement_weight: float = 14.0
    assertiveness_strategic_weight: float = 9.0
    assertiveness_technical_weight: float = 2.0
    assertiveness_quantified_bonus: float = 6.0
    assertiveness_uncertainty_penalty: float = 14.0
    assertiveness_saturation: float = 60.0
    assertiveness_achievement_floor: int = 52
    intensity_high_min: float = 5.4
    intensity_moderate_min: float = 2.2

    # Complexity confidence
    complexity_confidence_base: int = 65
    complexity_loop_bonus: int = 12
    complexity_sort_bonus: int = 10
    complexity_recursion_bonus: int = 8
    complexity_unknown_loop_penalty: int = 8
    complexity_confidence_min: int = 45
    complexity_confidence_max: int = 98

    # Resume
    resume_base: int = 20
    resume_action_weight: int = 4
    resume_metric_weight: int = 3
    resume_impact_cap: int = 24
    resume_section_weight: int = 3
    resume_bullet_cap: int = 6
    resume_structure_cap: int = 18
    resume_keyword_weight: int = 4
    resume_keyword_cap: int = 18
    resume_short_words: int = 70
    resume_short_penalty: int = 10
    resume_few_actions: int = 2
    resume_few_actions_penalty: int = 8
    resume_no_metrics_penalty: int = 10
    resume_few_sections: int = 3
    resume_few_sections_penalty: int = 7
    resume_stuffing_hits: int = 12
    resume_stuffing_metric_lines: int = 2
    resume_stuffing_penalty: int = 6
    resume_strong_actions: int = 3
    resume_strong_metrics: int = 2
    resume_strong_sections: int = 4
    resume_strong_keywords: int = 3
    resume_score_min: int = 24
    resume_score_max: int = 96


DEFAULT_HYPERPARAMETERS = Hyperparameters()
