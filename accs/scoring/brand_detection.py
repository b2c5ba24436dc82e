"""Brand mention detection over caption, transcript and OCR text.

Keyword matching against caller-supplied brand dictionaries. Results are
returned to the caller; nothing is stored.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

logger = logging.getLogger(__name__)

KEYWORD_CONFIDENCE = 0.8
PRODUCT_NAME_CONFIDENCE = 0.95
CONTEXT_CHARS = 20


@dataclass
class BrandDictionary:
    """Terms that identify one brand."""
    id: str
    name: str
    keywords: List[str] = field(default_factory=list)
    product_names: List[str] = field(default_factory=list)


@dataclass
class BrandDetection:
    """A brand match in one text source.

    Attributes:
        brand_id: BrandDictionary.id that matched.
        brand_name: BrandDictionary.name that matched.
        method: "caption", "transcript" or "ocr".
        confidence: 0.8 for keyword hits, 0.95 once a product name hits.
        matched_keywords: Every keyword / product name found, in dictionary order.
        matched_text: Lowercased context around the last match.
    """
    brand_id: str
    brand_name: str
    method: str
    confidence: float
    matched_keywords: List[str] = field(default_factory=list)
    matched_text: Optional[str] = None


def _match_terms(text: str, dictionary: BrandDictionary) -> Optional[tuple]:
    """Return (confidence, matched terms, context) or None when nothing matched."""
    lower_text = text.lower()
    matched: List[str] = []
    confidence = 0.0
    context = None

    for terms, term_confidence in (
        (dictionary.keywords, KEYWORD_CONFIDENCE),
        (dictionary.product_names, PRODUCT_NAME_CONFIDENCE),
    ):
        for term in terms:
            lower_term = term.lower()
            if not lower_term:
                continue
            index = lower_text.find(lower_term)
            if index == -1:
                continue
            matched.append(term)
            context = lower_text[
                max(0, index - CONTEXT_CHARS):index + len(lower_term) + CONTEXT_CHARS
            ]
            confidence = max(confidence, term_confidence)

    if not matched:
        return None
    return confidence, matched, context


def detect_brand_mentions(
    dictionaries: Iterable[BrandDictionary],
    caption: Optional[str] = None,
    transcript: Optional[str] = None,
    ocr_texts: Sequence[str] = (),
) -> List[BrandDetection]:
    """
    Detect brand mentions across a content item's text sources.

    Caption and transcript yield at most one detection each per brand.
    OCR frames are scanned in order and stop at the first matching frame
    per brand.

    Args:
        dictionaries: Brands to look for
        caption: Post caption
        transcript: Spoken transcript
        ocr_texts: Text recognized in video frames

    Returns:
        List of BrandDetection, grouped by brand in dictionary order
    """
    detections: List[BrandDetection] = []

    for dictionary in dictionaries:
        sources = [("caption", caption), ("transcript", transcript)]
        sources += [("ocr", text) for text in ocr_texts]

        ocr_matched = False
        for method, text in sources:
            if not text or (method == "ocr" and ocr_matched):
                continue
            match = _match_terms(text, dictionary)
            if match is None:
                continue

            confidence, matched, context = match
            detections.append(BrandDetection(
                brand_id=dictionary.id,
                brand_name=dictionary.name,
                method=method,
                confidence=confidence,
                matched_keywords=matched,
                matched_text=context,
            ))
            if method == "ocr":
                ocr_matched = True

    logger.debug(f"Detected {len(detections)} brand mention(s)")
    return detections


def primary_brand(detections: Sequence[BrandDetection]) -> Optional[str]:
    """Name of the highest-confidence detection (first wins on ties)."""
    best: Optional[BrandDetection] = None
    for detection in detections:
        if best is None or detection.confidence > best.confidence:
            best = detection
    return best.brand_name if best else None
