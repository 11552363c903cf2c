from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from data_designer.engine.column_generators.generators.base import ColumnGeneratorFullColumn

from data_designer_signal_lab.complexity import explain_complexity
from data_designer_signal_lab.config import SignalLabColumnConfig
from data_designer_signal_lab.resume import score_resume
from data_designer_signal_lab.sentiment import analyze_sentiment

if TYPE_CHECKING:
    import pandas as pd

logger = logging.getLogger(__name__)


def build_row_output(text: str, config: SignalLabColumnConfig) -> dict:
    """Analyze one row's text and shape the cell value for ``config``."""
    if config.analyzer == "complexity":
        report = explain_complexity(text)
        output: dict = {
            "is_valid": report.confidence >= config.min_confidence,
            "time_complexity": report.time_complexity,
            "space_complexity": report.space_complexity,
            "confidence": report.confidence,
        }
        if config.include_signals:
            output["reasoning"] = list(report.reasoning)
        if config.include_derivation:
            output["derivation"] = list(report.derivation)
        return output

    if config.analyzer == "resume":
        resume = score_resume(text)
        return {
            "is_valid": resume.score >= config.min_confidence,
            "resume_score": resume.score,
            "feedback": list(resume.feedback),
        }

    sentiment = analyze_sentiment(text)
    output = sentiment.to_payload()
    output["is_valid"] = sentiment.confidence >= config.min_confidence
    if not config.include_signals:
        output.pop("signals")
    return output


class SignalLabColumnGenerator(ColumnGeneratorFullColumn[SignalLabColumnConfig]):
    """Column generator that runs the heuristic sentiment, complexity, or resume analyzer."""

    def generate(self, data: pd.DataFrame) -> pd.DataFrame:
        logger.info(f"\U0001f9ea Running {self.config.analyzer!r} analysis for column {self.config.name!r}")
        logger.info(f"   target columns: {self.config.target_columns}")
        logger.info(f"   min_confidence: {self.config.min_confidence}")

        results = []
        for _, row in data[self.config.target_columns].iterrows():
            text = " ".join(str(v) for v in row.values if v is not None)
            results.append(build_row_output(text, self.config))

        data = data.copy()
        data[self.config.name] = results
        return data
