from data_designer_signal_lab.hyperparameters import DEFAULT_HYPERPARAMETERS, Hyperparameters
from data_designer_signal_lab.resume import (
    FALLBACK_FEEDBACK,
    IMPROVEMENT_RULES,
    STRENGTH_RULES,
    ResumeCounts,
    _raw_score,
    count_signals,
    score_resume,
)

STRONG_RESUME = """Summary
Machine learning engineer focused on NLP and LLM systems.
Experience
- Built a RAG pipeline with PyTorch and LangChain that reduced latency by 40%.
- Deployed transformer models serving 2M requests per day.
- Led migration to Kubernetes, improving uptime to 99.9%.
Projects
- Developed a computer vision classifier with 94% accuracy.
- Automated data labeling with an LLM, saving $20k per quarter.
Skills
Python, PyTorch, TensorFlow, scikit-learn, SQL
Education
B.S. Computer Science
"""

MIDDLE_RESUME = """Experience
Built internal dashboards for the operations team using Python and SQL queries, working closely with managers across several regional offices to understand their daily reporting needs.
Developed reporting tools that improved turnaround by 20% for analysts in the finance group and documented the workflow for new hires.
Projects
Personal website and a small chatbot using an LLM API for answering common questions from visitors about my background and hobbies.
Skills
Python, SQL, JavaScript, HTML, CSS, Git
"""


def _message(rules, index):
    return rules[index][1]


class TestCountSignals:
    def test_bullets_actions_metrics_sections(self):
        counts = count_signals("- Built an API\n* Reduced latency by 30%\n1. Led a team\nSkills:\n## Projects ##")
        assert counts.bullets == 3
        assert counts.action_lines == 3
        assert counts.metric_lines == 1
        assert counts.sections == 2
        assert counts.ai_keywords == 0
        assert counts.word_count == 17

    def test_singular_and_plural_sections_count_once(self):
        assert count_signals("Project\nProjects").sections == 1

    def test_long_lines_are_not_headers(self):
        assert count_signals("I gained a lot of experience working on side projects").sections == 0

    def test_strong_resume(self):
        counts = count_signals(STRONG_RESUME)
        assert counts.bullets == 5
        assert counts.action_lines == 5
        assert counts.metric_lines == 5
        assert counts.sections == 5
        assert counts.ai_keywords == 12
        assert counts.word_count == 74


class TestScoreResume:
    def test_short_text_hits_floor(self):
        result = score_resume("Looking for a job.")
        assert result.score == 24
        assert result.feedback == (
            _message(IMPROVEMENT_RULES, 0),
            _message(IMPROVEMENT_RULES, 1),
            _message(IMPROVEMENT_RULES, 2),
        )
        assert result.feedback[0] == "Include measurable metrics (latency, accuracy, growth) to quantify impact."

    def test_empty_text(self):
        result = score_resume("")
        assert result.score == 24
        assert len(result.feedback) == 3

    def test_strong_resume(self):
        result = score_resume(STRONG_RESUME)
        assert result.score == 84
        assert result.feedback == (_message(STRENGTH_RULES, 0), _message(STRENGTH_RULES, 1))

    def test_middle_band_gets_fallback(self):
        result = score_resume(MIDDLE_RESUME)
        assert result.score == 48
        assert result.feedback == (FALLBACK_FEEDBACK,)

    def test_strength_gates_follow_hyperparameters(self):
        hp = Hyperparameters(resume_strong_actions=2)
        result = score_resume(MIDDLE_RESUME, hp)
        assert result.score == 48
        assert result.feedback == (_message(STRENGTH_RULES, 0),)

    def test_score_range(self):
        for text in ("", "Looking for a job.", STRONG_RESUME, MIDDLE_RESUME, STRONG_RESUME * 10):
            assert 24 <= score_resume(text).score <= 96

    def test_payload(self):
        payload = score_resume(MIDDLE_RESUME).to_payload()
        assert payload == {"score": 48, "feedback": [FALLBACK_FEEDBACK]}


class TestRawScore:
    def test_keyword_stuffing_penalty(self):
        base = ResumeCounts(bullets=0, action_lines=3, metric_lines=1, sections=3, ai_keywords=12, word_count=100)
        stuffed = ResumeCounts(bullets=0, action_lines=3, metric_lines=1, sections=3, ai_keywords=13, word_count=100)
        assert _raw_score(base, DEFAULT_HYPERPARAMETERS) == 72
        assert _raw_score(stuffed, DEFAULT_HYPERPARAMETERS) == 66

    def test_depth_bonus_bands(self):
        counts = dict(bullets=0, action_lines=2, metric_lines=1, sections=3, ai_keywords=1)
        scores = [
            _raw_score(ResumeCounts(word_count=words, **counts), DEFAULT_HYPERPARAMETERS)
            for words in (79, 80, 160, 420)
        ]
        assert scores == [48, 54, 60, 56]
