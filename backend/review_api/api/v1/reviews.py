"""Review endpoints: ingestion, filtered listing, deletion."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from review_api.core.dependencies import get_db, get_sentiment_classifier
from review_api.models.entities import Review
from review_api.schemas.review import ReviewCreate, ReviewOut, ReviewType
from review_api.services import review_ingestion, review_query
from review_api.services.sentiment import SentimentClassifier

router = APIRouter()


def _commit_and_refresh(db: Session, review: Review) -> None:
    db.commit()
    db.refresh(review)


@router.post("/review", response_model=ReviewOut, status_code=201)
async def create_review(
    payload: ReviewCreate,
    db: Session = Depends(get_db),
    classifier: SentimentClassifier = Depends(get_sentiment_classifier),
):
    """Create a review; its sentiment type is always computed server-side."""
    review = await review_ingestion.create_review(db, payload, classifier)
    await run_in_threadpool(_commit_and_refresh, db, review)
    return review


@router.get("/review", response_model=list[ReviewOut])
def find_reviews(
    review_type: Optional[ReviewType] = Query(None, alias="type"),
    db: Session = Depends(get_db),
):
    return review_query.find(db, review_type)


@router.delete("/review/{review_id}", status_code=204, response_class=Response)
def delete_review(review_id: int, db: Session = Depends(get_db)):
    review_query.delete(db, review_id)
    db.commit()
    return Response(status_code=204)
