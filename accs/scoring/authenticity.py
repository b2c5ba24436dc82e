"""AuthenticityScorer: estimates how genuine vs. scripted a content item is.

Starts from a neutral baseline and applies additive adjustments from
transcript entropy, phrase reuse against the creator's earlier promotions,
hook originality, brand mention timing, sentence pacing and visual
continuity. Every adjustment that fires records a reason.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..core.models import CreatorHistory
from .helpers import clamp
from .text_signals import entropy, hook_originality, natural_pacing, phrase_reuse_count

logger = logging.getLogger(__name__)

BASELINE_SCORE = 50.0
NEUTRAL_SIGNAL = 0.5


@dataclass
class AuthenticityResult:
    """Authenticity sub-score with the signals that produced it.

    Attributes:
        score: Clamped score in [0, 100].
        script_likelihood: 100 minus the unclamped score, clamped.
        reused_hook_detected: True when phrase reuse crossed the threshold.
        reasons: Human-readable reasons in the order they fired.
        breakdown: Raw signal values keyed by name.
    """
    score: float
    script_likelihood: float
    reused_hook_detected: bool = False
    reasons: List[str] = field(default_factory=list)
    breakdown: Dict[str, float] = field(default_factory=dict)


class AuthenticityScorer:
    """Additive authenticity model.

    Signals in [0, 1] adjust the score when they leave the neutral band
    (HIGH_SIGNAL, LOW_SIGNAL). Missing optional inputs default to 0.5,
    which sits inside the band and so never adjusts.
    """

    HIGH_SIGNAL = 0.7
    LOW_SIGNAL = 0.3
    PHRASE_REUSE_LIMIT = 3

    # (bonus above HIGH_SIGNAL, penalty below LOW_SIGNAL)
    ENTROPY_ADJUST = (15, -20)
    HOOK_ADJUST = (10, -10)
    BRAND_TIMING_ADJUST = (10, -15)
    PACING_ADJUST = (8, -8)
    VISUAL_ADJUST = (7, -7)
    PHRASE_REUSE_PENALTY = -15

    def score(
        self,
        transcript: Optional[str] = None,
        caption: Optional[str] = None,
        creator_history: Optional[CreatorHistory] = None,
        brand_mention_timing: Optional[float] = None,
        hook_text: Optional[str] = None,
        visual_continuity: Optional[float] = None,
    ) -> AuthenticityResult:
        """Score one content item.

        Args:
            transcript: Spoken transcript.
            caption: Post caption, used for phrase reuse when there is no transcript.
            creator_history: Creator's previous promotional texts.
            brand_mention_timing: 0-1, 1 = brand mentioned early and naturally.
            hook_text: Opening line of the item.
            visual_continuity: 0-1, 1 = natural product interaction on screen.

        Returns:
            AuthenticityResult.
        """
        score = BASELINE_SCORE
        reasons: List[str] = []
        previous_promotions = creator_history.previous_promotions if creator_history else []

        # 1. Transcript entropy
        transcript_entropy = entropy(transcript) if transcript else NEUTRAL_SIGNAL
        score += self._adjust(
            transcript_entropy, self.ENTROPY_ADJUST, reasons,
            "Natural speech patterns detected",
            "Scripted or templated speech detected",
        )

        # 2. Phrase reuse against earlier promotions
        reuse_count = 0
        reused_hook_detected = False
        if creator_history is not None:
            reuse_count = phrase_reuse_count(transcript or caption or "", previous_promotions)
            if reuse_count > self.PHRASE_REUSE_LIMIT:
                score += self.PHRASE_REUSE_PENALTY
                reused_hook_detected = True
                reasons.append("Repeated promotional phrases detected")

        # 3. Hook originality
        originality = hook_originality(hook_text, previous_promotions) if hook_text else NEUTRAL_SIGNAL
        score += self._adjust(
            originality, self.HOOK_ADJUST, reasons,
            "Original hook detected",
            "Generic or reused hook pattern",
        )

        # 4. Brand mention timing
        timing = NEUTRAL_SIGNAL if brand_mention_timing is None else brand_mention_timing
        score += self._adjust(
            timing, self.BRAND_TIMING_ADJUST, reasons,
            "Natural brand integration",
            "Forced or late brand mention",
        )

        # 5. Natural pacing
        pacing = natural_pacing(transcript)
        score += self._adjust(
            pacing, self.PACING_ADJUST, reasons,
            "Natural pacing and flow",
            "Unnatural pacing detected",
        )

        # 6. Visual continuity
        continuity = NEUTRAL_SIGNAL if visual_continuity is None else visual_continuity
        score += self._adjust(
            continuity, self.VISUAL_ADJUST, reasons,
            "Natural product interaction",
            "Staged or unnatural product placement",
        )

        script_likelihood = clamp(100 - score)
        final = clamp(score)

        logger.debug(
            f"Authenticity {final:.1f} (entropy={transcript_entropy:.2f}, "
            f"reuse={reuse_count}, hook={originality:.2f}, pacing={pacing:.2f})"
        )

        return AuthenticityResult(
            score=final,
            script_likelihood=script_likelihood,
            reused_hook_detected=reused_hook_detected,
            reasons=reasons,
            breakdown={
                "transcript_entropy": transcript_entropy,
                "phrase_reuse_count": reuse_count,
                "natural_pacing_score": pacing,
                "brand_mention_timing": timing,
                "hook_originality": originality,
                "visual_continuity": continuity,
            },
        )

    def _adjust(self, signal, adjustment, reasons, high_reason, low_reason) -> float:
        """Return the bonus/penalty for a signal and record its reason."""
        bonus, penalty = adjustment
        if signal > self.HIGH_SIGNAL:
            reasons.append(high_reason)
            return bonus
        if signal < self.LOW_SIGNAL:
            reasons.append(low_reason)
            return penalty
        return 0
