from data_designer_signal_lab.hyperparameters import Hyperparameters
from data_designer_signal_lab.lexicon import LexiconScores
from data_designer_signal_lab.sentiment import (
    ACHIEVEMENT_ORIENTED,
    CURIOUS,
    DEFAULT_REVIEW,
    EMPTY_REVIEW,
    EXPLORATORY,
    INFORMATIONAL,
    MOTIVATED,
    NEUTRAL,
    PRESSURE,
    STRATEGIC,
    STRESSED,
    _round_half_up,
    _saturate,
    analyze_sentiment,
    classify_label,
    classify_tone,
    detect_sentiment,
)

MOTIVATED_TEXT = "I'm so excited and confident, we are shipping this week!"
STRESSED_TEXT = "I'm stuck, overwhelmed and worried about this bug."
CURIOUS_TEXT = "How does this work? Why does it fail?"
ACHIEVEMENT_TEXT = "Deployed the API on Friday."


class TestEmptyInput:
    def test_empty_string(self):
        result = analyze_sentiment("")
        assert result.label == NEUTRAL
        assert result.confidence == 0
        assert result.score == 0
        assert result.tone_type == INFORMATIONAL
        assert result.emotional_intensity == "Low"
        assert result.professional_assertiveness == 0
        assert result.review == EMPTY_REVIEW
        assert result.signals == ()

    def test_whitespace_only(self):
        assert analyze_sentiment("  \n ").confidence == 0

    def test_detect_sentiment_empty(self):
        assert detect_sentiment("") == NEUTRAL


class TestLabels:
    def test_motivated(self):
        result = analyze_sentiment(MOTIVATED_TEXT)
        assert result.label == MOTIVATED
        assert result.score > 0
        assert result.review == "Energetic, forward-looking tone."
        assert result.signals[0] == "+excited"

    def test_stressed(self):
        result = analyze_sentiment(STRESSED_TEXT)
        assert result.label == STRESSED
        assert result.tone_type == PRESSURE
        assert result.score < 0
        assert result.review.startswith("Reads as under pressure")

    def test_strong_negative_override(self):
        result = analyze_sentiment("This is the worst")
        assert result.label == STRESSED
        assert "override:strong-negative" in result.signals
        assert result.review.startswith("Strong distress language")

    def test_curious(self):
        result = analyze_sentiment(CURIOUS_TEXT)
        assert result.label == CURIOUS
        assert result.tone_type == EXPLORATORY

    def test_negated_positive_stays_neutral(self):
        result = analyze_sentiment("I am not excited about this")
        assert result.label == NEUTRAL
        assert "negated-excited" in result.signals
        assert result.score < 0

    def test_detect_sentiment_matches_full_analysis(self):
        assert detect_sentiment(STRESSED_TEXT) == analyze_sentiment(STRESSED_TEXT).label

    def test_fallback_to_dominant_category(self):
        scores = LexiconScores(motivated=1.6, curious=0.1)
        assert classify_label(scores) == MOTIVATED

    def test_close_margin_is_neutral(self):
        scores = LexiconScores(motivated=1.0, curious=0.9)
        assert classify_label(scores) == NEUTRAL


class TestToneAndReview:
    def test_neutral_achievement(self):
        result = analyze_sentiment(ACHIEVEMENT_TEXT)
        assert result.label == NEUTRAL
        assert result.tone_type == ACHIEVEMENT_ORIENTED
        assert result.professional_assertiveness == 52
        assert result.review.startswith("Matter-of-fact delivery")

    def test_uncertainty_removes_assertiveness_floor(self):
        result = analyze_sentiment("Maybe I deployed the api, not sure.")
        assert result.tone_type == ACHIEVEMENT_ORIENTED
        assert result.professional_assertiveness < 52

    def test_strategic(self):
        result = analyze_sentiment("Our roadmap and plan for next quarter.")
        assert result.tone_type == STRATEGIC
        assert result.review == "Measured, planning-focused tone."

    def test_informational_default(self):
        result = analyze_sentiment("The meeting is at noon.")
        assert result.label == NEUTRAL
        assert result.tone_type == INFORMATIONAL
        assert result.review == DEFAULT_REVIEW

    def test_question_mark_makes_tone_exploratory(self):
        assert classify_tone(NEUTRAL, LexiconScores(question_marks=1)) == EXPLORATORY

    def test_stressed_label_wins_tone(self):
        assert classify_tone(STRESSED, LexiconScores(question_marks=2, achievement=3.0)) == PRESSURE

    def test_self_diminishing_with_accolade(self):
        result = analyze_sentiment("Won the hackathon, nothing special.")
        assert result.review.startswith("Your wins speak louder")

    def test_self_diminishing_with_numbers(self):
        result = analyze_sentiment("Shipped 3 apps this year, nothing special.")
        assert result.review.startswith("The numbers show real output")


class TestNumericScores:
    def test_sparse_evidence_caps_confidence(self):
        assert analyze_sentiment("excited").confidence == 58

    def test_dense_evidence_boosts_confidence(self):
        assert analyze_sentiment(ACHIEVEMENT_TEXT).confidence == 46

    def test_confidence_range(self):
        for text in (MOTIVATED_TEXT, STRESSED_TEXT, CURIOUS_TEXT, ACHIEVEMENT_TEXT):
            assert 30 <= analyze_sentiment(text).confidence <= 94

    def test_score_saturates(self):
        text = "excited thrilled motivated proud happy energized inspired eager " * 5
        score = analyze_sentiment(text).score
        assert 80 < score < 90

    def test_intensity_bands(self):
        assert analyze_sentiment("excited").emotional_intensity == "Low"
        assert analyze_sentiment(MOTIVATED_TEXT).emotional_intensity == "Moderate"
        assert analyze_sentiment("excited thrilled motivated proud!").emotional_intensity == "High"

    def test_halves_round_up(self):
        assert _round_half_up(37.5) == 38
        assert _round_half_up(38.5) == 39
        assert _round_half_up(-2.5) == -2
        assert _saturate(30.0, 90.0) == 23

    def test_deterministic(self):
        assert analyze_sentiment(MOTIVATED_TEXT) == analyze_sentiment(MOTIVATED_TEXT)

    def test_custom_hyperparameters(self):
        hp = Hyperparameters(confidence_min=10, sparse_evidence_cap=20)
        assert analyze_sentiment("excited", hp).confidence == 20


class TestPayload:
    def test_payload_keys(self):
        payload = analyze_sentiment(MOTIVATED_TEXT).to_payload()
        assert set(payload) == {
            "label",
            "confidence",
            "score",
            "tone_type",
            "emotional_intensity",
            "professional_assertiveness",
            "review",
            "signals",
        }
        assert isinstance(payload["signals"], list)
