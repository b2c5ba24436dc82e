"""
Tests for AuthenticityScorer: additive adjustments, phrase-reuse flag,
clamping and script likelihood.
"""

import pytest

from accs.core.models import CreatorHistory
from accs.scoring.authenticity import BASELINE_SCORE, AuthenticityScorer

# 12 distinct long words in one sentence: entropy ~0.76
NATURAL_TRANSCRIPT = (
    "morning coffee ritual changed after trying this wonderful "
    "oat creamer from somewhere"
)
SCRIPTED_TRANSCRIPT = "buy buy buy buy buy"


def _history(*promotions: str) -> CreatorHistory:
    return CreatorHistory(previous_promotions=list(promotions))


@pytest.fixture
def scorer():
    return AuthenticityScorer()


class TestAuthenticityConstants:
    def test_baseline(self):
        assert BASELINE_SCORE == 50

    def test_signal_band(self):
        assert AuthenticityScorer.HIGH_SIGNAL == 0.7
        assert AuthenticityScorer.LOW_SIGNAL == 0.3
        assert AuthenticityScorer.PHRASE_REUSE_LIMIT == 3


class TestAuthenticityBaseline:
    def test_no_inputs_is_neutral(self, scorer):
        result = scorer.score()
        assert result.score == 50
        assert result.script_likelihood == 50
        assert result.reused_hook_detected is False
        assert result.reasons == []

    def test_breakdown_defaults(self, scorer):
        breakdown = scorer.score().breakdown
        assert breakdown["transcript_entropy"] == 0.5
        assert breakdown["hook_originality"] == 0.5
        assert breakdown["brand_mention_timing"] == 0.5
        assert breakdown["visual_continuity"] == 0.5
        assert breakdown["natural_pacing_score"] == 0.5
        assert breakdown["phrase_reuse_count"] == 0


class TestTranscriptEntropy:
    def test_natural_speech_bonus(self, scorer):
        result = scorer.score(transcript=NATURAL_TRANSCRIPT)
        assert result.score == 65
        assert result.reasons == ["Natural speech patterns detected"]

    def test_scripted_speech_penalty(self, scorer):
        result = scorer.score(transcript=SCRIPTED_TRANSCRIPT)
        assert result.score == 30
        assert result.reasons == ["Scripted or templated speech detected"]

    def test_entropy_swing_is_35_points(self, scorer):
        low = scorer.score(transcript=SCRIPTED_TRANSCRIPT).score
        high = scorer.score(transcript=NATURAL_TRANSCRIPT).score
        assert high - low == 35


class TestPhraseReuse:
    TRANSCRIPT = "this serum changed my routine"
    PROMOS = [
        "wow this serum changed everything",
        "honestly this serum changed my mornings",
        "this serum changed the game",
        "why this serum changed my life",
    ]

    def test_four_reuses_penalize_15(self, scorer):
        without = scorer.score(transcript=self.TRANSCRIPT)
        with_history = scorer.score(transcript=self.TRANSCRIPT, creator_history=_history(*self.PROMOS))

        assert with_history.reused_hook_detected is True
        assert without.reused_hook_detected is False
        assert without.score - with_history.score == 15
        assert "Repeated promotional phrases detected" in with_history.reasons

    def test_three_reuses_is_not_enough(self, scorer):
        result = scorer.score(transcript=self.TRANSCRIPT, creator_history=_history(*self.PROMOS[:3]))
        assert result.reused_hook_detected is False
        assert result.breakdown["phrase_reuse_count"] == 3
        assert result.score == 50

    def test_falls_back_to_caption(self, scorer):
        result = scorer.score(caption=self.TRANSCRIPT, creator_history=_history(*self.PROMOS))
        assert result.reused_hook_detected is True
        assert result.score == 35


class TestHookOriginality:
    def test_reused_hook_penalty(self, scorer):
        result = scorer.score(hook_text="try this hack", creator_history=_history("try this hack now"))
        assert result.score == 40
        assert result.reasons == ["Generic or reused hook pattern"]

    def test_hook_without_history_is_original(self, scorer):
        result = scorer.score(hook_text="nobody tells you this")
        assert result.score == 60
        assert result.reasons == ["Original hook detected"]


class TestBrandTimingAndVisuals:
    @pytest.mark.parametrize("timing,expected", [
        (0.9, 60),
        (0.5, 50),
        (0.1, 35),
        (0.0, 35),
    ])
    def test_brand_mention_timing(self, scorer, timing, expected):
        assert scorer.score(brand_mention_timing=timing).score == expected

    @pytest.mark.parametrize("continuity,expected", [
        (0.8, 57),
        (0.7, 50),
        (0.3, 50),
        (0.2, 43),
    ])
    def test_visual_continuity(self, scorer, continuity, expected):
        assert scorer.score(visual_continuity=continuity).score == expected

    def test_reason_order_follows_signal_order(self, scorer):
        result = scorer.score(brand_mention_timing=0.9, visual_continuity=0.9)
        assert result.reasons == ["Natural brand integration", "Natural product interaction"]


class TestPacing:
    def test_flat_pacing_penalty(self, scorer):
        # Two equal-length sentences -> variance 0; entropy 0 as well
        result = scorer.score(transcript="buy buy buy. buy buy buy.")
        assert result.score == 50 - 20 - 8
        assert "Unnatural pacing detected" in result.reasons

    def test_varied_pacing_bonus(self, scorer):
        long_sentence = " ".join(f"word{i}" for i in range(25))
        result = scorer.score(transcript=f"Wow. {long_sentence}!")
        assert "Natural pacing and flow" in result.reasons


class TestClamping:
    def test_floor_and_script_likelihood(self, scorer):
        transcript = "buy buy buy. buy buy buy."
        promos = [transcript] * 4
        result = scorer.score(
            transcript=transcript,
            creator_history=_history(*promos),
            hook_text="buy buy buy",
            brand_mention_timing=0.0,
            visual_continuity=0.0,
        )
        # 50 - 20 - 15 - 10 - 15 - 8 - 7 = -25
        assert result.score == 0
        assert result.script_likelihood == 100
        assert result.reused_hook_detected is True
