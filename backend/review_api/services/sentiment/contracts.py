"""Contracts for review sentiment classification."""

from __future__ import annotations

from dataclasses import dataclass

from review_api.schemas.review import ReviewType

MIN_STARS = 1
MAX_STARS = 5

NEGATION_WORDS = frozenset({"no", "not", "never", "none", "without"})

POSITIVE_WORDS = frozenset(
    {
        "good",
        "great",
        "excellent",
        "nice",
        "fine",
        "ok",
        "love",
        "loved",
        "happy",
        "satisfied",
        "perfect",
        "amazing",
        "awesome",
        "best",
        "recommend",
    }
)

NEGATIVE_WORDS = frozenset(
    {
        "bad",
        "poor",
        "awful",
        "terrible",
        "horrible",
        "worst",
        "hate",
        "hated",
        "unhappy",
        "disappointed",
        "disappointing",
        "broken",
        "useless",
        "rude",
        "slow",
    }
)


@dataclass(frozen=True)
class StarRating:
    """One (label, score) pair returned by the star-rating model."""

    label: str  # "1 star" .. "5 stars"
    score: float


def stars_to_review_type(stars: int) -> ReviewType:
    if stars <= 2:
        return ReviewType.NEGATIVE
    if stars == 3:
        return ReviewType.NEUTRAL
    return ReviewType.POSITIVE
