"""
Text signal utilities shared by the scoring models.

Pure functions over strings: normalized word entropy, 3-word phrase reuse,
hook originality, caption overlap and sentence pacing. All comparisons are
case-insensitive and tokenize on whitespace.
"""

import re
from collections import Counter
from typing import Iterable, List, Optional

import numpy as np

# Empirical ceiling of Shannon entropy for English, in bits per word
MAX_ENGLISH_ENTROPY_BITS = 4.7

# Returned by caption_similarity when either side has nothing to compare
UNKNOWN_SIMILARITY = 0.5

PHRASE_WINDOW = 3
PACING_VARIANCE_SCALE = 100.0

_SENTENCE_SPLIT = re.compile(r"[.!?]+")


def tokenize(text: Optional[str]) -> List[str]:
    """Lowercase and split on whitespace."""
    if not text:
        return []
    return text.lower().split()


def entropy(text: Optional[str]) -> float:
    """
    Normalized Shannon entropy of the word distribution.

    Tokens of two characters or fewer are ignored. The entropy in bits is
    divided by MAX_ENGLISH_ENTROPY_BITS and capped at 1.0.

    Args:
        text: Transcript or caption text

    Returns:
        Float in [0, 1]; 0 for empty text
    """
    words = [w for w in tokenize(text) if len(w) > 2]
    if not words:
        return 0.0

    counts = np.array(list(Counter(words).values()), dtype=float)
    probabilities = counts / len(words)
    bits = float(-(probabilities * np.log2(probabilities)).sum())

    return max(0.0, min(1.0, bits / MAX_ENGLISH_ENTROPY_BITS))


def phrase_reuse_count(current: Optional[str], prior_texts: Iterable[str]) -> int:
    """
    Count prior texts that share at least one 3-word phrase with `current`.

    Each prior text contributes at most one match, so the result is the
    number of priors reused from, not the number of shared phrases.

    Args:
        current: Text of the item being scored
        prior_texts: Creator's previous promotional texts

    Returns:
        Number of prior texts containing a 3-word phrase from `current`
    """
    words = tokenize(current)
    phrases = [
        " ".join(words[i:i + PHRASE_WINDOW])
        for i in range(len(words) - PHRASE_WINDOW + 1)
    ]
    if not phrases:
        return 0

    reuse_count = 0
    for prior in prior_texts:
        haystack = " ".join(tokenize(prior))
        if any(phrase in haystack for phrase in phrases):
            reuse_count += 1

    return reuse_count


def hook_originality(hook: Optional[str], prior_texts: List[str]) -> float:
    """
    1 minus the average share of hook words found in each prior text.

    Args:
        hook: Opening line of the item
        prior_texts: Creator's previous promotional texts

    Returns:
        Float in [0, 1]; 1.0 when there is nothing to compare against
    """
    if not prior_texts:
        return 1.0

    hook_words = tokenize(hook)
    overlap_sum = 0.0
    for prior in prior_texts:
        prior_words = set(tokenize(prior))
        common = [w for w in hook_words if w in prior_words]
        overlap_sum += len(common) / max(len(hook_words), 1)

    return 1.0 - overlap_sum / len(prior_texts)


def caption_similarity(a: Optional[str], b: Optional[str]) -> float:
    """
    Word-set overlap between two captions.

    |A ∩ B| / max(|A|, |B|) over lowercase words longer than one character.
    Missing or empty captions yield UNKNOWN_SIMILARITY rather than a real
    similarity.

    Args:
        a: First caption
        b: Second caption

    Returns:
        Float in [0, 1]
    """
    words_a = {w for w in tokenize(a) if len(w) > 1}
    words_b = {w for w in tokenize(b) if len(w) > 1}

    if not words_a or not words_b:
        return UNKNOWN_SIMILARITY

    return len(words_a & words_b) / max(len(words_a), len(words_b))


def natural_pacing(transcript: Optional[str]) -> float:
    """
    Sentence-length variance as a proxy for unscripted delivery.

    Splits on sentence punctuation, takes the population variance of
    words per sentence and scales it by PACING_VARIANCE_SCALE.

    Returns:
        Float in [0, 1]; 0.5 when there are fewer than two sentences
    """
    if not transcript:
        return 0.5

    sentences = [s for s in _SENTENCE_SPLIT.split(transcript) if s.strip()]
    if len(sentences) < 2:
        return 0.5

    lengths = np.array([len(s.split()) for s in sentences], dtype=float)
    variance = float(np.var(lengths))

    return min(1.0, variance / PACING_VARIANCE_SCALE)
