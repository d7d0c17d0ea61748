from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from review_api.core.errors import EntityNotFoundError
from review_api.models.entities import Review
from review_api.schemas.review import ReviewType

logger = logging.getLogger(__name__)


def find(db: Session, review_type: Optional[ReviewType] = None) -> list[Review]:
    """All reviews, or only those of *review_type*. No ordering guarantee."""
    stmt = select(Review)
    if review_type is not None:
        stmt = stmt.where(Review.type == review_type.value)
    return list(db.execute(stmt).scalars().unique().all())


def delete(db: Session, review_id: int) -> None:
    review = db.get(Review, review_id)
    if review is None:
        raise EntityNotFoundError(f"No review found with the ID: {review_id}.")
    db.delete(review)
    db.flush()
    logger.info("Review %s deleted", review_id)
