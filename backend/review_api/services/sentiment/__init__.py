"""Classifier factory: remote star-rating model, keyword fallback without a token."""

from __future__ import annotations

import logging

from review_api.core.config import Settings, get_settings

from .base import SentimentClassifier
from .keyword import KeywordSentimentClassifier

logger = logging.getLogger(__name__)

__all__ = ["build_sentiment_classifier", "SentimentClassifier", "KeywordSentimentClassifier"]


def build_sentiment_classifier(settings: Settings | None = None) -> SentimentClassifier:
    """Return the classifier matching the configured credentials.

    Without ``HUGGINGFACE_TOKEN`` we fall back to ``KeywordSentimentClassifier``.
    Remote failures are not masked by the fallback: they surface as
    ``ExternalApiError`` from ``classify``.
    """
    settings = settings or get_settings()

    if not settings.sentiment_api_enabled:
        logger.warning("HUGGINGFACE_TOKEN not set, falling back to keyword classifier")
        return KeywordSentimentClassifier()

    from .huggingface import HuggingFaceSentimentClassifier

    return HuggingFaceSentimentClassifier(
        api_token=settings.huggingface_token.strip(),
        model_url=settings.sentiment_model_url,
        timeout_seconds=settings.sentiment_timeout_seconds,
    )
