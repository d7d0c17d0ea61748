"""Keyword classifier: deterministic local fallback when no API token is configured."""

from __future__ import annotations

import logging
import string

from review_api.schemas.review import ReviewType

from .base import SentimentClassifier
from .contracts import NEGATION_WORDS, NEGATIVE_WORDS, POSITIVE_WORDS

logger = logging.getLogger(__name__)


def _tokenize(text: str) -> list[str]:
    words = (token.strip(string.punctuation) for token in text.casefold().split())
    return [word for word in words if word]


def keyword_score(text: str) -> int:
    """Sum of +1/-1 word contributions; a negation flips the next word only."""
    score = 0
    negate_next = False
    for word in _tokenize(text):
        if word in NEGATION_WORDS:
            negate_next = True
            continue
        if word in POSITIVE_WORDS:
            score += -1 if negate_next else 1
        elif word in NEGATIVE_WORDS:
            score += 1 if negate_next else -1
        negate_next = False
    return score


class KeywordSentimentClassifier(SentimentClassifier):
    name = "keyword"

    async def classify(self, text: str) -> ReviewType:
        score = keyword_score(text)
        logger.debug("Keyword classifier score=%s", score)
        # Never NEUTRAL: ties count as positive.
        return ReviewType.POSITIVE if score >= 0 else ReviewType.NEGATIVE
