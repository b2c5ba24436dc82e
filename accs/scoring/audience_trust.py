"""AudienceTrustScorer: engagement quality and purchase intent from comments.

Lexicon-based heuristics over comment texts plus save/view ratios. No model
inference; every signal is a count or ratio over the supplied metrics.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..core.models import EngagementMetrics
from .helpers import clamp

logger = logging.getLogger(__name__)

BASELINE_SCORE = 50.0

POSITIVE_WORDS = [
    "love", "amazing", "great", "best", "awesome",
    "perfect", "beautiful", "wow", "incredible",
]

NEGATIVE_WORDS = [
    "hate", "terrible", "awful", "bad", "worst",
    "disappointed", "fake", "scam",
]

PURCHASE_INTENT_KEYWORDS = [
    "where to buy", "link", "price", "purchase",
    "checkout", "add to cart", "available", "stock",
]

# Pictographs, emoticons and supplemental symbols
EMOJI_PATTERN = re.compile("[\U0001F300-\U0001F9FF]")

# (min score, grade), checked top-down
GRADE_THRESHOLDS = [(80, "A"), (65, "B"), (50, "C"), (35, "D")]


@dataclass
class AudienceTrustResult:
    """Audience trust sub-score.

    Attributes:
        trust_index: Clamped score in [0, 100].
        engagement_quality_grade: Letter grade A-F derived from trust_index.
        purchase_intent_confidence: 0-100 blend of intent keywords,
            question density and save ratio.
        breakdown: Raw signal values keyed by name.
    """
    trust_index: float
    engagement_quality_grade: str
    purchase_intent_confidence: float
    breakdown: Dict[str, float] = field(default_factory=dict)


def comment_sentiment(comments: List[str]) -> float:
    """
    Polarity in [-1, 1] from lexicon hits.

    Each lexicon word counts once per comment it appears in (substring match).

    Returns:
        (positive - negative) / total hits, or 0 with no hits
    """
    positive = 0
    negative = 0
    for comment in comments:
        lower = comment.lower()
        positive += sum(1 for word in POSITIVE_WORDS if word in lower)
        negative += sum(1 for word in NEGATIVE_WORDS if word in lower)

    total = positive + negative
    if total == 0:
        return 0.0
    return (positive - negative) / total


def engagement_grade(trust_index: float) -> str:
    """Map a trust index to A/B/C/D/F."""
    for minimum, grade in GRADE_THRESHOLDS:
        if trust_index >= minimum:
            return grade
    return "F"


class AudienceTrustScorer:
    """Additive audience trust model.

    Thresholds:
    - SENTIMENT_POSITIVE / SENTIMENT_NEGATIVE: polarity band (+15 / -20)
    - QUESTION_DENSITY: share of comments asking something (+12)
    - SAVE_RATIO_HIGH / SAVE_RATIO_LOW: saves per view (+10 / -5)
    - REPLY_DEPTH: thread proxy (+8)
    - EMOJI_RATIO: emoji per character (-5)
    """

    SENTIMENT_POSITIVE = 0.3
    SENTIMENT_NEGATIVE = -0.3
    QUESTION_DENSITY = 0.2
    SAVE_RATIO_HIGH = 0.05
    SAVE_RATIO_LOW = 0.01
    REPLY_DEPTH = 0.25
    EMOJI_RATIO = 0.1

    # Reply depth proxy until thread data is available
    BUSY_THREAD_COMMENTS = 10
    BUSY_THREAD_DEPTH = 0.3
    QUIET_THREAD_DEPTH = 0.1

    INTENT_POINTS_PER_COMMENT = 3
    INTENT_POINTS_CAP = 15

    def score(self, metrics: Optional[EngagementMetrics] = None) -> AudienceTrustResult:
        """Score engagement for one content item.

        Args:
            metrics: Engagement snapshot. Missing metrics skip their adjustment.

        Returns:
            AudienceTrustResult.
        """
        metrics = metrics or EngagementMetrics()
        comments = metrics.comment_texts
        trust_index = BASELINE_SCORE

        # 1. Comment sentiment
        sentiment = 0.0
        if comments:
            sentiment = comment_sentiment(comments)
            if sentiment > self.SENTIMENT_POSITIVE:
                trust_index += 15
            elif sentiment < self.SENTIMENT_NEGATIVE:
                trust_index -= 20

        # 2. Question density
        question_density = 0.0
        if metrics.comments and metrics.views:
            question_count = sum(1 for c in comments or [] if "?" in c)
            question_density = question_count / max(metrics.comments, 1)
            if question_density > self.QUESTION_DENSITY:
                trust_index += 12

        # 3. Purchase intent keywords
        intent_count = 0
        if comments is not None:
            intent_count = sum(
                1 for c in comments
                if any(keyword in c.lower() for keyword in PURCHASE_INTENT_KEYWORDS)
            )
            if intent_count > 0:
                trust_index += min(self.INTENT_POINTS_CAP, intent_count * self.INTENT_POINTS_PER_COMMENT)

        # 4. Save-to-view ratio
        save_ratio = 0.0
        if metrics.saves and metrics.views:
            save_ratio = metrics.saves / metrics.views
            if save_ratio > self.SAVE_RATIO_HIGH:
                trust_index += 10
            elif save_ratio < self.SAVE_RATIO_LOW:
                trust_index -= 5

        # 5. Reply depth
        reply_depth = 0.0
        if comments is not None:
            reply_depth = (
                self.BUSY_THREAD_DEPTH if len(comments) > self.BUSY_THREAD_COMMENTS
                else self.QUIET_THREAD_DEPTH
            )
            if reply_depth > self.REPLY_DEPTH:
                trust_index += 8

        # 6. Emoji-to-text ratio
        emoji_ratio = 0.0
        if comments is not None:
            emoji_count = sum(len(EMOJI_PATTERN.findall(c)) for c in comments)
            text_length = sum(len(c) for c in comments)
            emoji_ratio = emoji_count / max(text_length, 1)
            if emoji_ratio > self.EMOJI_RATIO:
                trust_index -= 5

        trust_index = clamp(trust_index)

        purchase_intent_confidence = clamp(
            (intent_count * 10 + question_density * 30 + save_ratio * 200) / 3
        )

        logger.debug(
            f"Audience trust {trust_index:.1f} (sentiment={sentiment:.2f}, "
            f"questions={question_density:.2f}, intent={intent_count}, saves={save_ratio:.3f})"
        )

        return AudienceTrustResult(
            trust_index=trust_index,
            engagement_quality_grade=engagement_grade(trust_index),
            purchase_intent_confidence=purchase_intent_confidence,
            breakdown={
                "comment_sentiment_polarity": sentiment,
                "question_density": question_density,
                "purchase_intent_keywords": intent_count,
                "save_to_view_ratio": save_ratio,
                "reply_depth_average": reply_depth,
                "emoji_to_text_ratio": emoji_ratio,
            },
        )
