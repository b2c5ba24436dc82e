"""
Pydantic models for ACCS scoring inputs and results

Input models validate caller-supplied data once at the boundary. Output
models are frozen value objects. Both use snake_case attributes with
camelCase aliases, so JSON payloads in the wire shape validate directly
and `model_dump(by_alias=True)` reproduces it.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from .exceptions import InvalidInputError


# ============================================================================
# Enums
# ============================================================================

class PerformanceTier(str, Enum):
    """Predicted paid-ad performance bucket"""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class RecommendedUse(str, Enum):
    """Placements a content item is fit for"""
    PAID_SOCIAL = "paid_social"
    HOMEPAGE = "homepage"
    EMAIL = "email"
    PRODUCT_PAGE = "product_page"
    RETARGETING = "retargeting"


class AuthenticityLevel(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class AudienceTrustLevel(str, Enum):
    VERY_HIGH = "very_high"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class RiskLevel(str, Enum):
    """Shared low/medium/high scale for saturation and fatigue"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# ============================================================================
# Input Models
# ============================================================================

def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes as UTC so window comparisons never mix kinds."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class _InputModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        allow_inf_nan=False,
    )


class EngagementMetrics(_InputModel):
    """Engagement snapshot for one content item"""
    likes: Optional[int] = Field(default=None, ge=0)
    comments: Optional[int] = Field(default=None, ge=0)
    shares: Optional[int] = Field(default=None, ge=0)
    saves: Optional[int] = Field(default=None, ge=0)
    views: Optional[int] = Field(default=None, ge=0)
    comment_texts: Optional[List[str]] = None


class PromotionalPost(_InputModel):
    """One sponsored post from the creator's history"""
    date: datetime
    brand_name: Optional[str] = None
    category: Optional[str] = None

    @field_validator('date')
    @classmethod
    def normalize_date(cls, v):
        return _as_utc(v)


class CreatorHistory(_InputModel):
    """Creator's prior promotional texts and posts"""
    previous_promotions: List[str] = Field(default_factory=list)
    script_patterns: List[str] = Field(default_factory=list)
    promotional_posts: List[PromotionalPost] = Field(default_factory=list)


class ContentStructure(_InputModel):
    """Structural signature of a content item's creative format"""
    hook_type: Optional[str] = None
    visual_composition: Optional[str] = None
    audio_trend: Optional[str] = None
    duration: Optional[float] = Field(default=None, ge=0)


class SimilarContentItem(_InputModel):
    """Neighbouring content item with a precomputed similarity"""
    id: str
    structure: ContentStructure = Field(default_factory=ContentStructure)
    similarity: float = Field(ge=0, le=1)


class BrandHistoryItem(_InputModel):
    """Prior content produced for the same brand"""
    content_id: str
    structure: ContentStructure = Field(default_factory=ContentStructure)


class IndustryTrend(_InputModel):
    """Industry-wide usage count for a `hookType_visualComposition` format"""
    format: str
    frequency: float = Field(ge=0)


class ACCSInputs(_InputModel):
    """Everything the scoring engine needs for one content item.

    All fields except `content_item_id` are optional; scorers treat a
    missing field as a neutral signal. `as_of` anchors the promotion
    lookback window and defaults to the current time when omitted.
    """
    content_item_id: str = Field(min_length=1)
    transcript: Optional[str] = None
    caption: Optional[str] = None
    engagement_metrics: Optional[EngagementMetrics] = None
    creator_history: Optional[CreatorHistory] = None
    similar_content: Optional[List[SimilarContentItem]] = None
    brand_history: Optional[List[BrandHistoryItem]] = None
    industry_trends: Optional[List[IndustryTrend]] = None
    brand_mention_timing: Optional[float] = Field(default=None, ge=0, le=1)
    hook_text: Optional[str] = None
    visual_continuity: Optional[float] = Field(default=None, ge=0, le=1)
    content_structure: Optional[ContentStructure] = None
    as_of: Optional[datetime] = None

    @field_validator('as_of')
    @classmethod
    def normalize_as_of(cls, v):
        return _as_utc(v)


def parse_inputs(payload: Mapping[str, Any]) -> ACCSInputs:
    """
    Validate a raw payload into ACCSInputs.

    Args:
        payload: Mapping using either camelCase or snake_case keys

    Returns:
        Validated ACCSInputs

    Raises:
        InvalidInputError: If any field is malformed (NaN, negative counts,
            out-of-range ratios, wrong types, missing content_item_id)
    """
    try:
        return ACCSInputs.model_validate(payload)
    except ValidationError as e:
        paths = [
            ".".join(str(part) for part in err["loc"]) or "<root>"
            for err in e.errors()
        ]
        details = "; ".join(
            f"{path}: {err['msg']}" for path, err in zip(paths, e.errors())
        )
        raise InvalidInputError(f"Invalid ACCS inputs: {details}", errors=paths) from e


# ============================================================================
# Output Models
# ============================================================================

class _OutputModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class AuthenticityScore(_OutputModel):
    score: int = Field(ge=0, le=100)
    level: AuthenticityLevel
    script_likelihood: int = Field(ge=0, le=100)
    reused_hook_detected: bool
    reasons: List[str]


class AudienceTrustScore(_OutputModel):
    score: int = Field(ge=0, le=100)
    level: AudienceTrustLevel
    engagement_quality_grade: str
    purchase_intent_confidence: int = Field(ge=0, le=100)


class PromotionSaturationScore(_OutputModel):
    """Inverted: a high score means low saturation."""
    score: int = Field(ge=0, le=100)
    level: RiskLevel
    density: int = Field(ge=0, le=100)
    risk_level: RiskLevel


class FatigueRiskScore(_OutputModel):
    """Inverted: a high score means low fatigue."""
    score: int = Field(ge=0, le=100)
    level: RiskLevel
    originality_percentile: int = Field(ge=0, le=100)
    warnings: List[str]


class ConfidenceInterval(_OutputModel):
    lower: float = Field(ge=0, le=100)
    upper: float = Field(ge=0, le=100)


class ReasonAttribution(_OutputModel):
    strengths: List[str]
    weaknesses: List[str]
    key_factors: List[str]


class ACCSScore(_OutputModel):
    """Authenticity & Conversion Confidence Score for one content item"""
    score: int = Field(ge=0, le=100)
    authenticity: AuthenticityScore
    audience_trust: AudienceTrustScore
    promotion_saturation: PromotionSaturationScore
    fatigue_risk: FatigueRiskScore
    predicted_performance_tier: PerformanceTier
    recommended_use: List[RecommendedUse]
    confidence_interval: ConfidenceInterval
    reason_attribution: ReasonAttribution
