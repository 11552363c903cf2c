import pytest

from data_designer_signal_lab.hyperparameters import Hyperparameters
from data_designer_signal_lab.lexicon import MOTIVATED_TERMS, score_lexicons, tokenize


class TestTokenize:
    def test_strips_punctuation_and_apostrophes(self):
        assert tokenize("Don't STOP-believing!") == ["dont", "stop", "believing"]

    def test_empty_text(self):
        assert tokenize("") == []


class TestScoreLexicons:
    def test_empty_and_whitespace_short_circuit(self):
        for text in ("", "   \n\t"):
            scores = score_lexicons(text)
            assert scores.token_count == 0
            assert scores.emotional_total == 0
            assert scores.signals == ()

    def test_exact_match(self):
        scores = score_lexicons("excited")
        assert scores.motivated == pytest.approx(MOTIVATED_TERMS["excited"])
        assert scores.signals == ("+excited",)
        assert scores.evidence_hits == 1

    def test_crude_stem_match(self):
        scores = score_lexicons("she builds")
        assert scores.motivated == pytest.approx(MOTIVATED_TERMS["build"])

    def test_negated_motivated_goes_to_stressed(self):
        scores = score_lexicons("not excited")
        assert scores.motivated == 0
        assert scores.stressed == pytest.approx(1.3 * 0.7)
        assert scores.signals == ("negated-excited",)

    def test_negated_stressed_goes_to_motivated(self):
        scores = score_lexicons("not worried")
        assert scores.stressed == 0
        assert scores.motivated == pytest.approx(1.2 * 0.5)

    def test_negation_only_looks_two_tokens_back(self):
        scores = score_lexicons("not really that excited")
        assert scores.stressed == 0
        assert scores.motivated == pytest.approx(1.3 * 1.35)

    def test_negated_other_category_is_dropped(self):
        scores = score_lexicons("no doubt")
        assert scores.uncertainty == 0

    def test_intensifier_and_softener(self):
        assert score_lexicons("really excited").motivated == pytest.approx(1.3 * 1.35)
        assert score_lexicons("slightly worried").stressed == pytest.approx(1.2 * 0.75)

    def test_modifiers_compose(self):
        assert score_lexicons("very slightly worried").stressed == pytest.approx(1.2 * 1.35 * 0.75)

    def test_question_marks_add_curiosity_with_cap(self):
        assert score_lexicons("why?").curious == pytest.approx(0.7 + 0.6)
        assert score_lexicons("why?????").curious == pytest.approx(0.7 + 3 * 0.6)

    def test_exclamations_amplify_existing_emotion_only(self):
        assert score_lexicons("excited!").motivated == pytest.approx(1.3 + 0.3)
        assert score_lexicons("excited!!!!!!").motivated == pytest.approx(1.3 + 0.9)
        assert score_lexicons("hello!!!").motivated == 0

    def test_quantified_achievement(self):
        scores = score_lexicons("Completed 5 models this term")
        assert scores.quantified_achievement
        assert scores.achievement == pytest.approx(0.9 + 1.0)
        assert "metric:quantified" in scores.signals

    def test_accolade(self):
        scores = score_lexicons("Our team was a hackathon finalist")
        assert scores.accolade
        assert scores.motivated == pytest.approx(1.0)
        assert "accolade:hackathon" in scores.signals

    def test_self_diminishing(self):
        assert score_lexicons("It was nothing special").self_diminishing
        assert not score_lexicons("It was special").self_diminishing

    def test_strong_negative_override(self):
        scores = score_lexicons("I'm the worst at this")
        assert scores.strong_negative
        assert scores.stressed == pytest.approx(1.5 + 3.0)

    def test_signal_cap_keeps_earliest(self):
        scores = score_lexicons("excited confident proud happy thrilled motivated inspired eager")
        assert len(scores.signals) == 7
        assert scores.signals[0] == "+excited"
        assert "+eager" not in scores.signals

    def test_custom_hyperparameters(self):
        hp = Hyperparameters(intensifier_multiplier=2.0)
        assert score_lexicons("really excited", hp).motivated == pytest.approx(2.6)
