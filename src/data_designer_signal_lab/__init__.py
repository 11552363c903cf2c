# SPDX-License-Identifier: Apache-2.0
"""Signal Lab plugin for NeMo Data Designer.

Adds a ``signal-lab`` column type that runs deterministic, rule-based text
analyzers: lexicon-weighted sentiment and tone, Big-O estimation from code
text, and heuristic resume scoring. No LLM calls, no API dependencies.

Usage::

    from data_designer_signal_lab import SignalLabColumnConfig

    builder.add_column(SignalLabColumnConfig(
        name="tone",
        target_columns=["message"],
        analyzer="sentiment",
    ))

The analyzers are plain functions and can be called directly::

    from data_designer_signal_lab import analyze_sentiment, explain_complexity, score_resume

    explain_complexity("for (i = 0; i < n; i++) {}").time_complexity  # "O(n)"
"""

from data_designer_signal_lab.complexity import ComplexityResult, estimate_complexity, explain_complexity
from data_designer_signal_lab.config import SignalLabColumnConfig
from data_designer_signal_lab.hyperparameters import Hyperparameters
from data_designer_signal_lab.resume import ResumeScore, score_resume
from data_designer_signal_lab.sentiment import SentimentResult, analyze_sentiment, detect_sentiment
from data_designer_signal_lab.similarity import closest_match, levenshtein

__all__ = [
    "SignalLabColumnConfig",
    "Hyperparameters",
    "analyze_sentiment",
    "detect_sentiment",
    "SentimentResult",
    "explain_complexity",
    "estimate_complexity",
    "ComplexityResult",
    "score_resume",
    "ResumeScore",
    "levenshtein",
    "closest_match",
]
