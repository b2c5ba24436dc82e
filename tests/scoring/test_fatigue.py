"""
Tests for FatigueRiskScorer: structural similarity, format reuse,
brand repetition, industry exhaustion and clamping.
"""

import pytest

from accs.core.models import BrandHistoryItem, ContentStructure, IndustryTrend, SimilarContentItem
from accs.scoring.fatigue import FatigueRiskScorer, format_key

QUESTION_TALKING_HEAD = ContentStructure(
    hook_type="question",
    visual_composition="talking_head",
    audio_trend="lofi_beat",
)


def _similar(similarity: float, **structure) -> SimilarContentItem:
    return SimilarContentItem(
        id=f"s-{similarity}-{len(structure)}",
        structure=ContentStructure(**structure),
        similarity=similarity,
    )


@pytest.fixture
def scorer():
    return FatigueRiskScorer()


class TestFatigueBaseline:
    def test_no_inputs(self, scorer):
        result = scorer.score()
        assert result.fatigue_risk_score == 0
        assert result.creative_originality_percentile == 100
        assert result.overused_format_warnings == []

    def test_format_key(self):
        assert format_key(QUESTION_TALKING_HEAD) == "question_talking_head"
        assert format_key(ContentStructure(hook_type="question")) is None


class TestStructuralSimilarity:
    @pytest.mark.parametrize("similarity,risk,warning", [
        (0.9, 30, "Very similar structure to recent content"),
        (0.7, 15, "Similar structure detected"),
    ])
    def test_similarity_bands(self, scorer, similarity, risk, warning):
        result = scorer.score(similar_content=[_similar(similarity), _similar(similarity)])
        assert result.fatigue_risk_score == risk
        assert result.overused_format_warnings == [warning]

    def test_boundary_is_exclusive(self, scorer):
        result = scorer.score(similar_content=[_similar(0.6)])
        assert result.fatigue_risk_score == 0


class TestFormatReuse:
    def test_hook_reuse(self, scorer):
        similar = [
            _similar(0.5, hook_type="question"),
            _similar(0.5, hook_type="question"),
            _similar(0.5, hook_type="story"),
        ]
        result = scorer.score(ContentStructure(hook_type="question"), similar)
        assert result.breakdown["hook_pattern_reuse_freq"] == pytest.approx(2 / 3)
        assert result.fatigue_risk_score == 20
        assert result.overused_format_warnings == ["Overused hook pattern"]

    def test_visual_overlap_threshold(self, scorer):
        similar = [
            _similar(0.5, visual_composition="talking_head"),
            _similar(0.5, visual_composition="talking_head"),
            _similar(0.5, visual_composition="talking_head"),
            _similar(0.5, visual_composition="b_roll"),
            _similar(0.5, visual_composition="b_roll"),
        ]
        # 3/5 = 0.6 is not above 0.6
        result = scorer.score(ContentStructure(visual_composition="talking_head"), similar)
        assert result.fatigue_risk_score == 0

        result = scorer.score(ContentStructure(visual_composition="talking_head"), similar[:4])
        assert result.fatigue_risk_score == 15
        assert result.overused_format_warnings == ["Repetitive visual composition"]

    def test_audio_trend(self, scorer):
        similar = [_similar(0.5, audio_trend="lofi_beat")] * 4
        result = scorer.score(ContentStructure(audio_trend="lofi_beat"), similar)
        assert result.fatigue_risk_score == 10
        assert result.overused_format_warnings == ["Overused audio trend"]

    def test_missing_field_is_not_compared(self, scorer):
        similar = [_similar(0.5)] * 3
        result = scorer.score(ContentStructure(), similar)
        assert result.breakdown["hook_pattern_reuse_freq"] == 0
        assert result.fatigue_risk_score == 0


class TestBrandRepetition:
    def test_same_format_for_brand(self, scorer):
        history = [
            BrandHistoryItem(content_id="b1", structure=QUESTION_TALKING_HEAD),
            BrandHistoryItem(content_id="b2", structure=QUESTION_TALKING_HEAD),
        ]
        result = scorer.score(QUESTION_TALKING_HEAD, brand_history=history)
        assert result.breakdown["brand_level_repetition"] == 1.0
        assert result.fatigue_risk_score == 25
        assert result.overused_format_warnings == ["Repetitive format for this brand"]

    def test_half_is_not_enough(self, scorer):
        history = [
            BrandHistoryItem(content_id="b1", structure=QUESTION_TALKING_HEAD),
            BrandHistoryItem(content_id="b2", structure=ContentStructure(hook_type="story")),
        ]
        result = scorer.score(QUESTION_TALKING_HEAD, brand_history=history)
        assert result.fatigue_risk_score == 0


class TestIndustryExhaustion:
    @pytest.mark.parametrize("frequency,exhaustion,risk", [
        (8000, 0.8, 15),
        (5000, 0.5, 0),
        (20000, 1.0, 15),
        (900, 0.0, 0),
    ])
    def test_trend_frequency(self, scorer, frequency, exhaustion, risk):
        trends = [IndustryTrend(format="question_talking_head", frequency=frequency)]
        result = scorer.score(QUESTION_TALKING_HEAD, industry_trends=trends)
        assert result.breakdown["industry_level_exhaustion"] == pytest.approx(exhaustion)
        assert result.fatigue_risk_score == risk

    def test_other_formats_ignored(self, scorer):
        trends = [IndustryTrend(format="story_b_roll", frequency=9000)]
        assert scorer.score(QUESTION_TALKING_HEAD, industry_trends=trends).fatigue_risk_score == 0


class TestFatigueClamp:
    def test_every_signal_clamps_to_100(self, scorer):
        similar = [
            _similar(0.9, hook_type="question", visual_composition="talking_head", audio_trend="lofi_beat")
        ] * 3
        history = [BrandHistoryItem(content_id="b1", structure=QUESTION_TALKING_HEAD)]
        trends = [IndustryTrend(format="question_talking_head", frequency=9000)]

        result = scorer.score(QUESTION_TALKING_HEAD, similar, history, trends)

        # 30 + 20 + 15 + 10 + 25 + 15 = 115
        assert result.fatigue_risk_score == 100
        assert result.creative_originality_percentile == 0
        assert len(result.overused_format_warnings) == 6
