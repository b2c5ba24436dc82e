"""PromotionSaturationScorer: how over-promoted a creator currently is.

Looks at the creator's sponsored posts inside a lookback window and buckets
post volume, brand variety, clustering and spacing into a risk score,
then a low/medium/high level with a recommended cooldown.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional, Sequence

from ..core.config import Config
from ..core.exceptions import InvalidInputError
from ..core.models import PromotionalPost, RiskLevel

logger = logging.getLogger(__name__)

# No total post count is supplied, so density assumes this many posts per period
ASSUMED_POSTS_PER_PERIOD = 30

HIGH_RISK_MIN = 7
MEDIUM_RISK_MIN = 4

RECOMMENDED_COOLDOWN_DAYS: Dict[RiskLevel, int] = {
    RiskLevel.HIGH: 30,
    RiskLevel.MEDIUM: 14,
    RiskLevel.LOW: 7,
}

# (exclusive lower bound, points), checked top-down
RATIO_BUCKETS = [(0.5, 3), (0.3, 2), (0.15, 1)]
BRAND_BUCKETS = [(5, 3), (3, 2), (1, 1)]
CLUSTERING_BUCKETS = [(0.7, 2), (0.5, 1)]
# (exclusive upper bound in days, points)
SPACING_BUCKETS = [(3, 2), (7, 1)]

_DAY_SECONDS = 24 * 60 * 60


@dataclass
class PromotionSaturationResult:
    """Saturation metrics for one creator.

    Attributes:
        promotional_post_ratio: Recent sponsored posts / assumed period volume, capped at 1.
        competing_brands_count: Distinct brand names in the window.
        category_overlap_freq: Repeated-category share of categorized posts.
        promotion_clustering: 1 - mean gap / window length (0 with < 2 posts).
        sponsored_spacing_avg: Mean gap in days between posts (0 with < 2 posts).
        risk_score: Sum of bucket points.
        saturation_risk_level: Level derived from risk_score.
        recommended_cooldown: Days to wait before the next sponsored post.
    """
    promotional_post_ratio: float
    competing_brands_count: int
    category_overlap_freq: float
    promotion_clustering: float
    sponsored_spacing_avg: float
    risk_score: int
    saturation_risk_level: RiskLevel
    recommended_cooldown: int


def _bucket_points(value: float, buckets) -> int:
    for bound, points in buckets:
        if value > bound:
            return points
    return 0


def saturation_risk_score(
    promotional_post_ratio: float,
    competing_brands_count: int,
    promotion_clustering: float,
    sponsored_spacing_avg: float,
) -> int:
    """Sum the bucket points for each saturation signal."""
    spacing_points = 0
    for bound, points in SPACING_BUCKETS:
        if sponsored_spacing_avg < bound:
            spacing_points = points
            break

    return (
        _bucket_points(promotional_post_ratio, RATIO_BUCKETS)
        + _bucket_points(competing_brands_count, BRAND_BUCKETS)
        + _bucket_points(promotion_clustering, CLUSTERING_BUCKETS)
        + spacing_points
    )


def classify_saturation_risk(risk_score: int) -> RiskLevel:
    """7+ is high, 4-6 medium, anything lower low."""
    if risk_score >= HIGH_RISK_MIN:
        return RiskLevel.HIGH
    if risk_score >= MEDIUM_RISK_MIN:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


class PromotionSaturationScorer:
    """Scores a creator's recent promotional load.

    Args:
        period_days: Lookback window. Defaults to Config.SATURATION_PERIOD_DAYS.

    Raises:
        InvalidInputError: If period_days is not positive
    """

    def __init__(self, period_days: Optional[int] = None):
        if period_days is None:
            period_days = Config.SATURATION_PERIOD_DAYS
        if period_days <= 0:
            raise InvalidInputError(
                f"period_days must be positive, got {period_days}", errors=["periodDays"]
            )
        self.period_days = period_days

    def score(
        self,
        promotional_posts: Sequence[PromotionalPost],
        as_of: Optional[datetime] = None,
    ) -> PromotionSaturationResult:
        """Score the posts that fall inside the lookback window.

        Args:
            promotional_posts: Creator's sponsored posts (any order).
            as_of: End of the window, inclusive. Posts dated later are ignored.
                Defaults to now (UTC).

        Returns:
            PromotionSaturationResult.
        """
        as_of = as_of or datetime.now(timezone.utc)
        cutoff = as_of - timedelta(days=self.period_days)
        recent = [p for p in promotional_posts if cutoff <= p.date <= as_of]

        # 1. Promotional post ratio
        ratio = min(1.0, len(recent) / ASSUMED_POSTS_PER_PERIOD)

        # 2. Competing brands
        competing_brands = len({p.brand_name for p in recent if p.brand_name})

        # 3. Category overlap
        category_counts: Dict[str, int] = {}
        for post in recent:
            if post.category:
                category_counts[post.category] = category_counts.get(post.category, 0) + 1
        categorized = sum(category_counts.values())
        category_overlap = sum(c - 1 for c in category_counts.values()) / max(categorized, 1)

        # 4-5. Clustering and spacing from consecutive gaps
        clustering = 0.0
        spacing = 0.0
        if len(recent) > 1:
            gaps = self._gaps_in_seconds(recent)
            avg_gap = sum(gaps) / len(gaps)
            clustering = 1 - avg_gap / (self.period_days * _DAY_SECONDS)
            spacing = avg_gap / _DAY_SECONDS

        risk_score = saturation_risk_score(ratio, competing_brands, clustering, spacing)
        level = classify_saturation_risk(risk_score)

        logger.debug(
            f"Saturation risk {risk_score} ({level.value}): {len(recent)} recent posts, "
            f"{competing_brands} brands, clustering={clustering:.2f}, spacing={spacing:.1f}d"
        )

        return PromotionSaturationResult(
            promotional_post_ratio=ratio,
            competing_brands_count=competing_brands,
            category_overlap_freq=category_overlap,
            promotion_clustering=clustering,
            sponsored_spacing_avg=spacing,
            risk_score=risk_score,
            saturation_risk_level=level,
            recommended_cooldown=RECOMMENDED_COOLDOWN_DAYS[level],
        )

    @staticmethod
    def _gaps_in_seconds(posts: List[PromotionalPost]) -> List[float]:
        timestamps = sorted(p.date.timestamp() for p in posts)
        return [b - a for a, b in zip(timestamps, timestamps[1:])]
