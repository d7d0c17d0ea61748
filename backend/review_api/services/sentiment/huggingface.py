"""Hugging Face inference API classifier (star-rating model)."""

from __future__ import annotations

import logging
import time
from typing import Any

import httpx

from review_api.core.errors import ExternalApiError
from review_api.schemas.review import ReviewType

from .base import SentimentClassifier
from .contracts import MAX_STARS, MIN_STARS, StarRating, stars_to_review_type

logger = logging.getLogger(__name__)


def parse_ratings(payload: Any) -> list[StarRating]:
    """Extract ``StarRating`` pairs from a decoded response body.

    The API answers a single-text request with ``[[{label, score}, ...]]``;
    a flat ``[{label, score}, ...]`` is accepted too. Anything else yields
    an empty list.
    """
    if not isinstance(payload, list):
        return []
    items = payload
    if items and isinstance(items[0], list):
        items = items[0]

    ratings: list[StarRating] = []
    for item in items:
        if not isinstance(item, dict):
            continue
        label = item.get("label")
        score = item.get("score")
        if not isinstance(label, str) or isinstance(score, bool) or not isinstance(score, (int, float)):
            continue
        ratings.append(StarRating(label=label, score=float(score)))
    return ratings


def parse_star_label(label: str) -> int | None:
    """``"4 stars"`` -> 4. None when the leading token is not a 1-5 integer."""
    parts = label.split()
    if not parts:
        return None
    try:
        stars = int(parts[0])
    except ValueError:
        return None
    if not MIN_STARS <= stars <= MAX_STARS:
        return None
    return stars


def ratings_to_review_type(ratings: list[StarRating]) -> ReviewType:
    if not ratings:
        return ReviewType.NEUTRAL
    # max() keeps the first of equal scores
    best = max(ratings, key=lambda r: r.score)
    stars = parse_star_label(best.label)
    if stars is None:
        logger.warning("Unrecognised star label %r, defaulting to NEUTRAL", best.label)
        return ReviewType.NEUTRAL
    return stars_to_review_type(stars)


class HuggingFaceSentimentClassifier(SentimentClassifier):
    name = "huggingface"

    def __init__(
        self,
        api_token: str,
        *,
        model_url: str,
        timeout_seconds: float = 8.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_token = api_token
        self._model_url = model_url
        self._timeout_seconds = timeout_seconds
        self._transport = transport

    async def classify(self, text: str) -> ReviewType:
        t0 = time.monotonic()
        try:
            async with httpx.AsyncClient(timeout=self._timeout_seconds, transport=self._transport) as client:
                resp = await client.post(
                    self._model_url,
                    headers={
                        "Authorization": f"Bearer {self._api_token}",
                        "Content-Type": "application/json",
                    },
                    json={"inputs": text},
                )
        except httpx.TimeoutException as exc:
            logger.warning("Sentiment API timed out after %.1fs", self._timeout_seconds)
            raise ExternalApiError(503, f"Sentiment model API timed out after {self._timeout_seconds}s") from exc
        except httpx.HTTPError as exc:
            logger.warning("Sentiment API unreachable: %s", exc)
            raise ExternalApiError(503, f"Error during communication with sentiment model API: {exc}") from exc

        if not resp.is_success:
            logger.warning("Sentiment API returned HTTP %s", resp.status_code)
            raise ExternalApiError(resp.status_code, resp.text)

        try:
            payload = resp.json()
        except ValueError as exc:
            raise ExternalApiError(502, "Sentiment model API returned a non-JSON body") from exc

        result = ratings_to_review_type(parse_ratings(payload))
        latency_ms = (time.monotonic() - t0) * 1000
        logger.debug("Sentiment API classified as %s in %.0fms", result.value, latency_ms)
        return result
