"""Review ingestion: validate, resolve the customer, classify, persist.

The pipeline is linear and single-attempt. Only reads happen before the
classifier call; the customer insert and the review insert run after it, so
no write transaction stays open while the remote model is awaited. Session
work runs in the threadpool to keep blocking I/O off the event loop. The
service flushes inside the caller's session and never commits.
"""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from review_api.core.errors import ArgumentInvalidError
from review_api.models.entities import Customer, Review
from review_api.schemas.customer import CustomerRef
from review_api.schemas.review import ReviewCreate, ReviewType
from review_api.services import customer_resolver
from review_api.services.sentiment import SentimentClassifier

logger = logging.getLogger(__name__)


def _check_customer(db: Session, ref: CustomerRef) -> None:
    # Known id: strict lookup, never upsert.
    if ref.id is not None:
        customer_resolver.get_by_id(db, ref.id)
        return

    if not (ref.email or "").strip():
        raise ArgumentInvalidError("Customer email is required to create a new review.")
    customer_resolver.validate_email(ref.email)


def _resolve_customer(db: Session, ref: CustomerRef) -> Customer:
    if ref.id is not None:
        return customer_resolver.get_by_id(db, ref.id)
    return customer_resolver.find_or_create(db, email=ref.email, phone=ref.phone)


def _persist(
    db: Session,
    ref: CustomerRef,
    text: str,
    review_type: ReviewType,
    classifier_name: str,
) -> Review:
    customer = _resolve_customer(db, ref)
    review = Review(text=text, type=review_type.value, customer=customer)
    db.add(review)
    db.flush()

    logger.info(
        "Review %s created for customer=%s type=%s classifier=%s",
        review.id,
        customer.id,
        review_type.value,
        classifier_name,
    )
    return review


async def create_review(
    db: Session,
    payload: ReviewCreate,
    classifier: SentimentClassifier,
) -> Review:
    text = payload.text
    if text is None or not text.strip():
        raise ArgumentInvalidError("Review text cannot be null or empty.")
    if payload.customer is None:
        raise ArgumentInvalidError("Customer information is required to create a review.")

    await run_in_threadpool(_check_customer, db, payload.customer)
    review_type = await classifier.classify(text)
    return await run_in_threadpool(_persist, db, payload.customer, text, review_type, classifier.name)
