"""Abstract base for sentiment classifiers."""

from __future__ import annotations

import abc

from review_api.schemas.review import ReviewType


class SentimentClassifier(abc.ABC):
    """Contract every classifier implements: text in, 3-way sentiment out."""

    name: str = "base"

    @abc.abstractmethod
    async def classify(self, text: str) -> ReviewType:
        """Return the ``ReviewType`` for *text*."""
