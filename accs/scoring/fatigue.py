"""FatigueRiskScorer: creative exhaustion of a content format.

Compares a content item's structural signature (hook type, visual
composition, audio trend) against similar content, the brand's own history
and industry-wide format counts. Risk starts at 0 and only goes up.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from ..core.models import BrandHistoryItem, ContentStructure, IndustryTrend, SimilarContentItem
from .helpers import clamp

logger = logging.getLogger(__name__)

# Industry frequency that maps to full exhaustion
INDUSTRY_FREQUENCY_SCALE = 10000.0
INDUSTRY_FREQUENCY_FLOOR = 1000.0


@dataclass
class FatigueResult:
    """Fatigue risk for one content item.

    Attributes:
        fatigue_risk_score: Clamped risk in [0, 100]; higher is more fatigued.
        creative_originality_percentile: 100 - fatigue_risk_score.
        overused_format_warnings: One warning per triggered signal.
        breakdown: Raw signal values keyed by name.
    """
    fatigue_risk_score: float
    creative_originality_percentile: float
    overused_format_warnings: List[str] = field(default_factory=list)
    breakdown: Dict[str, float] = field(default_factory=dict)


def format_key(structure: ContentStructure) -> Optional[str]:
    """`hookType_visualComposition` key used by industry trend tables."""
    if not structure.hook_type or not structure.visual_composition:
        return None
    return f"{structure.hook_type}_{structure.visual_composition}"


class FatigueRiskScorer:
    """Additive fatigue model.

    Thresholds:
    - SIMILARITY_VERY_HIGH / SIMILARITY_HIGH: mean similarity (+30 / +15)
    - HOOK_REUSE: share of similar items with the same hook (+20)
    - VISUAL_OVERLAP: share with the same composition (+15)
    - AUDIO_SATURATION: share with the same audio trend (+10)
    - BRAND_REPETITION: share of brand history with the same hook and composition (+25)
    - INDUSTRY_EXHAUSTION: normalized industry frequency (+15)
    """

    SIMILARITY_VERY_HIGH = 0.8
    SIMILARITY_HIGH = 0.6
    HOOK_REUSE = 0.5
    VISUAL_OVERLAP = 0.6
    AUDIO_SATURATION = 0.7
    BRAND_REPETITION = 0.5
    INDUSTRY_EXHAUSTION = 0.7

    def score(
        self,
        structure: Optional[ContentStructure] = None,
        similar_content: Sequence[SimilarContentItem] = (),
        brand_history: Optional[Sequence[BrandHistoryItem]] = None,
        industry_trends: Optional[Sequence[IndustryTrend]] = None,
    ) -> FatigueResult:
        """Score one content item's format.

        Args:
            structure: Structural signature of the item being scored.
            similar_content: Neighbours with precomputed similarity in [0, 1].
            brand_history: Earlier content for the same brand.
            industry_trends: Industry format usage counts.

        Returns:
            FatigueResult.
        """
        structure = structure or ContentStructure()
        risk = 0.0
        warnings: List[str] = []
        neighbours = max(len(similar_content), 1)

        # 1. Structural similarity
        structural_similarity = 0.0
        if similar_content:
            structural_similarity = sum(i.similarity for i in similar_content) / len(similar_content)
            if structural_similarity > self.SIMILARITY_VERY_HIGH:
                risk += 30
                warnings.append("Very similar structure to recent content")
            elif structural_similarity > self.SIMILARITY_HIGH:
                risk += 15
                warnings.append("Similar structure detected")

        # 2. Hook pattern reuse
        hook_reuse = 0.0
        if structure.hook_type:
            same = sum(1 for i in similar_content if i.structure.hook_type == structure.hook_type)
            hook_reuse = same / neighbours
            if hook_reuse > self.HOOK_REUSE:
                risk += 20
                warnings.append("Overused hook pattern")

        # 3. Visual composition overlap
        visual_overlap = 0.0
        if structure.visual_composition:
            same = sum(
                1 for i in similar_content
                if i.structure.visual_composition == structure.visual_composition
            )
            visual_overlap = same / neighbours
            if visual_overlap > self.VISUAL_OVERLAP:
                risk += 15
                warnings.append("Repetitive visual composition")

        # 4. Audio trend saturation
        audio_saturation = 0.0
        if structure.audio_trend:
            same = sum(1 for i in similar_content if i.structure.audio_trend == structure.audio_trend)
            audio_saturation = same / neighbours
            if audio_saturation > self.AUDIO_SATURATION:
                risk += 10
                warnings.append("Overused audio trend")

        # 5. Brand-level repetition
        brand_repetition = 0.0
        if brand_history:
            same = sum(
                1 for item in brand_history
                if item.structure.hook_type == structure.hook_type
                and item.structure.visual_composition == structure.visual_composition
            )
            brand_repetition = same / len(brand_history)
            if brand_repetition > self.BRAND_REPETITION:
                risk += 25
                warnings.append("Repetitive format for this brand")

        # 6. Industry-level exhaustion
        industry_exhaustion = 0.0
        key = format_key(structure)
        if industry_trends and key:
            trend = next((t for t in industry_trends if t.format == key), None)
            if trend is not None and trend.frequency > INDUSTRY_FREQUENCY_FLOOR:
                industry_exhaustion = min(1.0, trend.frequency / INDUSTRY_FREQUENCY_SCALE)
                if industry_exhaustion > self.INDUSTRY_EXHAUSTION:
                    risk += 15
                    warnings.append("Industry-wide format saturation")

        risk = clamp(risk)

        logger.debug(f"Fatigue risk {risk:.0f} with {len(warnings)} warning(s)")

        return FatigueResult(
            fatigue_risk_score=risk,
            creative_originality_percentile=clamp(100 - risk),
            overused_format_warnings=warnings,
            breakdown={
                "structural_similarity": structural_similarity,
                "hook_pattern_reuse_freq": hook_reuse,
                "visual_composition_overlap": visual_overlap,
                "audio_trend_saturation": audio_saturation,
                "brand_level_repetition": brand_repetition,
                "industry_level_exhaustion": industry_exhaustion,
            },
        )
