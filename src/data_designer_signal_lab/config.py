from __future__ import annotations

from typing import Literal

from pydantic import Field

from data_designer.config.column_configs import SingleColumnConfig


class SignalLabColumnConfig(SingleColumnConfig):
    """Run one of the heuristic text analyzers over the text of other columns.

    ``sentiment`` labels tone and assertiveness, ``complexity`` estimates Big-O
    from code snippets, and ``resume`` scores resume text. All three are
    deterministic rule evaluation with no model calls.

    Attributes:
        target_columns: Columns whose text content will be concatenated and analyzed.
        analyzer: Which analyzer to run on each row.
        min_confidence: Threshold for ``is_valid=True``. Compared against the
            confidence for ``sentiment`` and ``complexity`` and against the
            score for ``resume``.
        include_signals: Include matched signal tags (sentiment) or reasoning
            lines (complexity) in output.
        include_derivation: Include the step-by-step derivation (complexity only).
    """

    target_columns: list[str]
    analyzer: Literal["sentiment", "complexity", "resume"] = "sentiment"
    min_confidence: int = Field(default=50, ge=0, le=100, description="Minimum confidence (or resume score) for is_valid=True")
    include_signals: bool = Field(default=True, description="Include signal tags or reasoning lines in output")
    include_derivation: bool = Field(default=False, description="Include the complexity derivation steps in output")
    column_type: Literal["signal-lab"] = "signal-lab"

    @staticmethod
    def get_column_emoji() -> str:
        return "\U0001f9ea"

    @property
    def required_columns(self) -> list[str]:
        return self.target_columns

    @property
    def side_effect_columns(self) -> list[str]:
        return []
