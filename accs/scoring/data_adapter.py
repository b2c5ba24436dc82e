"""
Data Adapter for the ACCS engine

Converts plain storage records (dicts fetched by the caller) into validated
ACCSInputs. The adapter never talks to storage itself.
"""

import json
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from ..core.models import ACCSInputs, parse_inputs
from .brand_detection import BrandDictionary, detect_brand_mentions, primary_brand
from .text_signals import caption_similarity


logger = logging.getLogger(__name__)

METRIC_FIELDS = ("views", "likes", "comments", "shares", "saves")


def prepare_accs_inputs(
    content_item: Dict[str, Any],
    metrics_snapshot: Optional[Dict[str, Any]] = None,
    creator_posts: Sequence[Dict[str, Any]] = (),
    similar_items: Sequence[Dict[str, Any]] = (),
    brand_dictionaries: Optional[Sequence[BrandDictionary]] = None,
    as_of: Optional[datetime] = None,
) -> ACCSInputs:
    """
    Prepare ACCS inputs from content, metrics and creator records.

    Args:
        content_item: Content record (id, caption, transcript, hookText,
            structure, brandMentionTiming, visualContinuity)
        metrics_snapshot: Latest engagement snapshot for the item
        creator_posts: Creator's earlier posts (caption, publishedAt,
            brandName, category)
        similar_items: Other content from the creator (id, caption, structure)
        brand_dictionaries: Used to tag creator posts that have no brand name
        as_of: Reference instant for the promotion window

    Returns:
        Validated ACCSInputs

    Raises:
        InvalidInputError: If the assembled payload is malformed
    """
    content_id = _get(content_item, "id", "content_item_id")
    caption = _get(content_item, "caption")
    logger.info(f"Preparing ACCS inputs for content {content_id}")

    payload: Dict[str, Any] = {
        "contentItemId": str(content_id) if content_id is not None else "",
        "caption": caption or None,
        "transcript": _get(content_item, "transcript") or None,
        "hookText": _get(content_item, "hookText", "hook_text") or None,
        "brandMentionTiming": _get(content_item, "brandMentionTiming", "brand_mention_timing"),
        "visualContinuity": _get(content_item, "visualContinuity", "visual_continuity"),
        "contentStructure": _parse_json_field(_get(content_item, "structure")) or None,
        "engagementMetrics": _build_engagement(metrics_snapshot),
        "creatorHistory": _build_creator_history(creator_posts, brand_dictionaries),
        "similarContent": [
            {
                "id": _as_id(_get(item, "id")),
                "structure": _parse_json_field(_get(item, "structure")),
                "similarity": caption_similarity(caption, _get(item, "caption")),
            }
            for item in similar_items
        ],
        "asOf": as_of,
    }

    return parse_inputs(payload)


def _get(record: Dict[str, Any], *keys: str) -> Any:
    """First non-None value among `keys`."""
    for key in keys:
        value = record.get(key)
        if value is not None:
            return value
    return None


def _as_id(value: Any) -> Optional[str]:
    """Stringify record ids; a missing id stays None so validation rejects it."""
    return None if value is None else str(value)


def _parse_json_field(field_value: Any) -> Dict:
    """Parse JSON string field, return empty dict on error."""
    if not field_value:
        return {}

    if isinstance(field_value, dict):
        return field_value

    try:
        parsed = json.loads(field_value)
    except (json.JSONDecodeError, TypeError):
        return {}
    return parsed if isinstance(parsed, dict) else {}


def _build_engagement(snapshot: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Keep non-zero metrics only; zero means "not collected" in snapshots."""
    if not snapshot:
        return None

    metrics: Dict[str, Any] = {
        name: snapshot[name] for name in METRIC_FIELDS if snapshot.get(name)
    }
    comment_texts = _get(snapshot, "commentTexts", "comment_texts")
    if comment_texts is not None:
        metrics["commentTexts"] = comment_texts

    return metrics


def _build_creator_history(
    posts: Sequence[Dict[str, Any]],
    brand_dictionaries: Optional[Sequence[BrandDictionary]],
) -> Dict[str, Any]:
    """Build previous promotions and promotional posts from prior posts."""
    previous_promotions: List[str] = []
    promotional_posts: List[Dict[str, Any]] = []

    for post in posts:
        post_caption = post.get("caption") or ""
        if post_caption:
            previous_promotions.append(post_caption)

        published_at = _get(post, "publishedAt", "published_at", "date")
        if published_at is None:
            continue

        brand_name = _get(post, "brandName", "brand_name")
        if brand_name is None and brand_dictionaries and post_caption:
            brand_name = primary_brand(
                detect_brand_mentions(brand_dictionaries, caption=post_caption)
            )

        promotional_posts.append({
            "date": published_at,
            "brandName": brand_name,
            "category": post.get("category"),
        })

    return {
        "previousPromotions": previous_promotions,
        "scriptPatterns": [],
        "promotionalPosts": promotional_posts,
    }
