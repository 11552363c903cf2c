from types import SimpleNamespace

import pandas as pd
import pytest
from pydantic import ValidationError

from data_designer_signal_lab.config import SignalLabColumnConfig
from data_designer_signal_lab.generator import SignalLabColumnGenerator, build_row_output

NESTED_LOOPS = "for (int i = 0; i < n; i++) { for (int j = 0; j < n; j++) { x++; } }"


def _config(**overrides) -> SignalLabColumnConfig:
    return SignalLabColumnConfig(name="analysis", target_columns=["text"], **overrides)


class TestConfig:
    def test_defaults(self):
        config = _config()
        assert config.analyzer == "sentiment"
        assert config.min_confidence == 50
        assert config.include_signals
        assert not config.include_derivation
        assert config.column_type == "signal-lab"
        assert config.required_columns == ["text"]
        assert config.side_effect_columns == []

    def test_rejects_unknown_analyzer(self):
        with pytest.raises(ValidationError):
            _config(analyzer="bogus")

    def test_rejects_out_of_range_confidence(self):
        with pytest.raises(ValidationError):
            _config(min_confidence=150)


class TestBuildRowOutput:
    def test_sentiment(self):
        output = build_row_output("I'm so excited and confident, we are shipping this week!", _config())
        assert output["label"] == "Motivated"
        assert output["is_valid"] == (output["confidence"] >= 50)
        assert "signals" in output

    def test_sentiment_without_signals(self):
        output = build_row_output("excited", _config(include_signals=False))
        assert "signals" not in output
        assert output["is_valid"]

    def test_sentiment_empty_text_is_invalid(self):
        output = build_row_output("", _config())
        assert output["confidence"] == 0
        assert not output["is_valid"]

    def test_complexity(self):
        output = build_row_output(NESTED_LOOPS, _config(analyzer="complexity"))
        assert output["time_complexity"] == "O(n^2)"
        assert output["confidence"] == 77
        assert output["is_valid"]
        assert "reasoning" in output
        assert "derivation" not in output

    def test_complexity_with_derivation_only(self):
        config = _config(analyzer="complexity", include_signals=False, include_derivation=True)
        output = build_row_output(NESTED_LOOPS, config)
        assert "reasoning" not in output
        assert output["derivation"][-1] == "Final estimate: O(n^2)."

    def test_resume_threshold_uses_score(self):
        output = build_row_output("Looking for a job.", _config(analyzer="resume", min_confidence=20))
        assert output["resume_score"] == 24
        assert output["is_valid"]
        assert len(output["feedback"]) == 3


class TestGenerate:
    def test_adds_one_cell_per_row(self):
        config = SignalLabColumnConfig(name="tone", target_columns=["title", "body"])
        data = pd.DataFrame({"title": ["Update", "Help"], "body": ["Shipped 3 apps!", "I'm stuck and worried."]})
        stub = SimpleNamespace(config=config)

        result = SignalLabColumnGenerator.generate(stub, data)

        assert "tone" not in data.columns
        assert list(result.columns) == ["title", "body", "tone"]
        assert result["tone"].iloc[1]["label"] == "Stressed"
        assert all("is_valid" in cell for cell in result["tone"])
