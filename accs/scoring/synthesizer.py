"""
ACCS Synthesizer: combines the four sub-models into one score.

Runs authenticity, audience trust, promotion saturation and fatigue risk
for one content item, blends them with fixed policy weights and derives the
performance tier, recommended placements, a confidence band and reasons.

Usage:
    from accs.scoring.synthesizer import compute_accs

    result = compute_accs({
        "contentItemId": "post-123",
        "transcript": "...",
        "engagementMetrics": {"views": 12000, "saves": 700},
    })
    result.score                    # 0-100
    result.model_dump(by_alias=True, mode="json")

The computation is pure: no I/O, no shared state. Items can be scored in
parallel by the caller.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from ..core.exceptions import InvalidInputError
from ..core.models import (
    ACCSInputs,
    ACCSScore,
    AudienceTrustLevel,
    AudienceTrustScore,
    AuthenticityLevel,
    AuthenticityScore,
    ConfidenceInterval,
    FatigueRiskScore,
    PerformanceTier,
    PromotionSaturationScore,
    ReasonAttribution,
    RecommendedUse,
    RiskLevel,
    parse_inputs,
)
from ..core.observability import get_logfire
from .audience_trust import AudienceTrustScorer
from .authenticity import AuthenticityScorer
from .fatigue import FatigueRiskScorer
from .helpers import clamp, round_half_up
from .promotion_saturation import PromotionSaturationScorer

logger = logging.getLogger(__name__)


# ============================================================================
# Policy Constants
# ============================================================================

WEIGHTS: Dict[str, float] = {
    "authenticity": 0.35,
    "audience_trust": 0.30,
    "promotion_saturation": 0.20,
    "fatigue": 0.15,
}

# Fixed placeholder spread; not derived from historical variance
CONFIDENCE_STDDEV = 10.0
CONFIDENCE_Z = 1.96

HIGH_TIER_MIN = 75
LOW_TIER_BELOW = 50

# (min final score, uses unlocked), cumulative
RECOMMENDED_USE_THRESHOLDS: List[Tuple[float, List[RecommendedUse]]] = [
    (70, [RecommendedUse.PAID_SOCIAL, RecommendedUse.HOMEPAGE]),
    (60, [RecommendedUse.EMAIL]),
    (50, [RecommendedUse.PRODUCT_PAGE]),
    (40, [RecommendedUse.RETARGETING]),
]

STRONG_SUBSCORE_MIN = 70
FRESH_FORMAT_RISK_BELOW = 30
STALE_FORMAT_RISK_MIN = 60


# ============================================================================
# Classification Helpers
# ============================================================================

def classify_tier(final_score: float) -> PerformanceTier:
    """75+ is high, below 50 is low, everything between medium."""
    if final_score >= HIGH_TIER_MIN:
        return PerformanceTier.HIGH
    if final_score < LOW_TIER_BELOW:
        return PerformanceTier.LOW
    return PerformanceTier.MEDIUM


def recommended_uses(final_score: float) -> List[RecommendedUse]:
    """Placements unlocked by the final score. Higher scores keep every lower unlock."""
    uses: List[RecommendedUse] = []
    for minimum, unlocked in RECOMMENDED_USE_THRESHOLDS:
        if final_score >= minimum:
            uses.extend(unlocked)
    return uses


def confidence_interval(final_score: float) -> ConfidenceInterval:
    """Fixed-width band of ±z·stddev around the score, clipped to [0, 100]."""
    spread = CONFIDENCE_Z * CONFIDENCE_STDDEV
    return ConfidenceInterval(
        lower=max(0.0, final_score - spread),
        upper=min(100.0, final_score + spread),
    )


def authenticity_level(score: float) -> AuthenticityLevel:
    if score >= 70:
        return AuthenticityLevel.HIGH
    if score < 50:
        return AuthenticityLevel.LOW
    return AuthenticityLevel.MEDIUM


def audience_trust_level(trust_index: float) -> AudienceTrustLevel:
    if trust_index >= 80:
        return AudienceTrustLevel.VERY_HIGH
    if trust_index >= 65:
        return AudienceTrustLevel.HIGH
    if trust_index < 40:
        return AudienceTrustLevel.LOW
    return AudienceTrustLevel.MEDIUM


def fatigue_level(fatigue_risk: float) -> RiskLevel:
    if fatigue_risk < FRESH_FORMAT_RISK_BELOW:
        return RiskLevel.LOW
    if fatigue_risk < STALE_FORMAT_RISK_MIN:
        return RiskLevel.MEDIUM
    return RiskLevel.HIGH


# ============================================================================
# Main Entry Point
# ============================================================================

def compute_accs(
    inputs: Union[ACCSInputs, Mapping[str, Any]],
    period_days: Optional[int] = None,
) -> ACCSScore:
    """
    Compute the Authenticity & Conversion Confidence Score for one item.

    Args:
        inputs: Validated ACCSInputs, or a raw mapping (validated here)
        period_days: Promotion lookback window override

    Returns:
        Fully populated ACCSScore

    Raises:
        InvalidInputError: If a raw mapping fails validation or period_days is not positive
    """
    if not isinstance(inputs, ACCSInputs):
        inputs = parse_inputs(inputs)

    saturation_scorer = PromotionSaturationScorer(period_days)

    lf = get_logfire()
    with lf.span("compute_accs", content_item_id=inputs.content_item_id):
        history = inputs.creator_history

        # 1. Authenticity
        authenticity = AuthenticityScorer().score(
            transcript=inputs.transcript,
            caption=inputs.caption,
            creator_history=history,
            brand_mention_timing=inputs.brand_mention_timing,
            hook_text=inputs.hook_text,
            visual_continuity=inputs.visual_continuity,
        )

        # 2. Audience trust
        audience_trust = AudienceTrustScorer().score(inputs.engagement_metrics)

        # 3. Promotion saturation (inverted)
        saturation = saturation_scorer.score(
            history.promotional_posts if history else [],
            as_of=inputs.as_of,
        )
        saturation_score = 100 - saturation.promotional_post_ratio * 100

        # 4. Fatigue risk (inverted)
        fatigue = FatigueRiskScorer().score(
            structure=inputs.content_structure,
            similar_content=inputs.similar_content or [],
            brand_history=inputs.brand_history,
            industry_trends=inputs.industry_trends,
        )
        fatigue_score = 100 - fatigue.fatigue_risk_score

        # 5. Weighted blend
        final_score = clamp(
            authenticity.score * WEIGHTS["authenticity"]
            + audience_trust.trust_index * WEIGHTS["audience_trust"]
            + saturation_score * WEIGHTS["promotion_saturation"]
            + fatigue_score * WEIGHTS["fatigue"]
        )

        tier = classify_tier(final_score)

        result = ACCSScore(
            score=round_half_up(final_score),
            authenticity=AuthenticityScore(
                score=round_half_up(authenticity.score),
                level=authenticity_level(authenticity.score),
                script_likelihood=round_half_up(authenticity.script_likelihood),
                reused_hook_detected=authenticity.reused_hook_detected,
                reasons=authenticity.reasons,
            ),
            audience_trust=AudienceTrustScore(
                score=round_half_up(audience_trust.trust_index),
                level=audience_trust_level(audience_trust.trust_index),
                engagement_quality_grade=audience_trust.engagement_quality_grade,
                purchase_intent_confidence=round_half_up(audience_trust.purchase_intent_confidence),
            ),
            promotion_saturation=PromotionSaturationScore(
                score=round_half_up(saturation_score),
                level=saturation.saturation_risk_level,
                density=round_half_up(saturation.promotional_post_ratio * 100),
                risk_level=saturation.saturation_risk_level,
            ),
            fatigue_risk=FatigueRiskScore(
                score=round_half_up(fatigue_score),
                level=fatigue_level(fatigue.fatigue_risk_score),
                originality_percentile=round_half_up(fatigue.creative_originality_percentile),
                warnings=fatigue.overused_format_warnings,
            ),
            predicted_performance_tier=tier,
            recommended_use=recommended_uses(final_score),
            confidence_interval=confidence_interval(final_score),
            reason_attribution=_build_reasons(
                authenticity.score,
                audience_trust.trust_index,
                saturation.saturation_risk_level,
                fatigue.fatigue_risk_score,
                fatigue.overused_format_warnings,
            ),
        )

        logger.info(f"ACCS {inputs.content_item_id}: {result.score} ({tier.value})")
        return result


def _build_reasons(
    authenticity_score: float,
    trust_index: float,
    saturation_level: RiskLevel,
    fatigue_risk: float,
    fatigue_warnings: List[str],
) -> ReasonAttribution:
    strengths: List[str] = []
    weaknesses: List[str] = []
    key_factors: List[str] = []

    if authenticity_score >= STRONG_SUBSCORE_MIN:
        strengths.append("High authenticity")
        key_factors.append("Genuine creator voice")
    else:
        weaknesses.append("Lower authenticity detected")

    if trust_index >= STRONG_SUBSCORE_MIN:
        strengths.append("Strong audience trust")
        key_factors.append("Engaged and trusting audience")
    else:
        weaknesses.append("Moderate audience trust")

    if saturation_level == RiskLevel.LOW:
        strengths.append("Low promotion saturation")
        key_factors.append("Creator not over-promoted")
    else:
        weaknesses.append("High promotion saturation")

    if fatigue_risk < FRESH_FORMAT_RISK_BELOW:
        strengths.append("Fresh creative format")
        key_factors.append("Original content structure")
    else:
        weaknesses.append("Creative fatigue risk")
        key_factors.extend(fatigue_warnings)

    return ReasonAttribution(
        strengths=strengths,
        weaknesses=weaknesses,
        key_factors=key_factors,
    )


# ============================================================================
# Batch Scoring
# ============================================================================

@dataclass
class BatchResult:
    """Outcome of scoring several items.

    Attributes:
        scored: (content_item_id, ACCSScore) pairs in input order.
        errors: One dict per rejected item: index, content_item_id, error.
    """
    scored: List[Tuple[str, ACCSScore]] = field(default_factory=list)
    errors: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def completed(self) -> int:
        return len(self.scored)

    @property
    def failed(self) -> int:
        return len(self.errors)


def score_batch(
    payloads: Iterable[Union[ACCSInputs, Mapping[str, Any]]],
    period_days: Optional[int] = None,
) -> BatchResult:
    """
    Score independent items, collecting validation failures per item.

    A rejected item never stops the batch; it lands in `errors` instead.

    Args:
        payloads: ACCSInputs or raw mappings
        period_days: Promotion lookback window override

    Returns:
        BatchResult
    """
    batch = BatchResult()

    for index, payload in enumerate(payloads):
        try:
            inputs = payload if isinstance(payload, ACCSInputs) else parse_inputs(payload)
            batch.scored.append((inputs.content_item_id, compute_accs(inputs, period_days)))
        except InvalidInputError as e:
            content_item_id = None
            if isinstance(payload, Mapping):
                content_item_id = payload.get("contentItemId") or payload.get("content_item_id")
            logger.warning(f"Skipping item {index} ({content_item_id}): {e}")
            batch.errors.append({
                "index": index,
                "content_item_id": content_item_id,
                "error": str(e),
            })

    return batch
