"""Customer resolver: CRUD plus idempotent find-or-create by email.

Functions flush but never commit; the caller owns the unit of work. The
unique index on ``customer.email`` is the authoritative duplicate guard: a
violation on insert rolls the session back and the row is re-read.
"""

from __future__ import annotations

import logging
from typing import Optional

from email_validator import EmailNotValidError
from email_validator import validate_email as check_email_syntax
from sqlalchemy import exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from review_api.core.errors import ArgumentInvalidError, ConflictError, EntityNotFoundError
from review_api.models.entities import Customer, Review

logger = logging.getLogger(__name__)


def mask_email(email: str) -> str:
    email = (email or "").strip()
    if "@" not in email:
        return email
    local, domain = email.split("@", 1)
    if not local:
        return f"*@{domain}"
    if len(local) == 1:
        return f"{local}*@{domain}"
    return f"{local[0]}***@{domain}"


def validate_email(email: Optional[str]) -> str:
    value = (email or "").strip()
    if not value:
        raise ArgumentInvalidError("Customer email is required.")
    try:
        check_email_syntax(value, check_deliverability=False)
    except EmailNotValidError as exc:
        raise ArgumentInvalidError(f"Invalid email address: {value}. {exc}") from exc
    return value


def _duplicate_email_error(email: str) -> ConflictError:
    return ConflictError(f"A customer already exists with the email address: {email}")


def find_by_email(db: Session, email: str) -> Optional[Customer]:
    return db.execute(select(Customer).where(Customer.email == email)).scalar_one_or_none()


def get_by_id(db: Session, customer_id: int) -> Customer:
    customer = db.get(Customer, customer_id)
    if customer is None:
        raise EntityNotFoundError(f"No customer found with the ID: {customer_id}.")
    return customer


def list_all(db: Session) -> list[Customer]:
    return list(db.execute(select(Customer).order_by(Customer.id)).scalars().all())


def create(db: Session, *, email: Optional[str], phone: Optional[str] = None) -> Customer:
    email = validate_email(email)
    if find_by_email(db, email) is not None:
        raise _duplicate_email_error(email)

    customer = Customer(email=email, phone=phone)
    db.add(customer)
    try:
        db.flush()
    except IntegrityError as exc:
        db.rollback()
        raise _duplicate_email_error(email) from exc

    logger.info("Customer %s created for %s", customer.id, mask_email(email))
    return customer


def find_or_create(db: Session, *, email: Optional[str], phone: Optional[str] = None) -> Customer:
    """Return the customer owning *email*, creating it when absent.

    An existing record is returned unchanged; *phone* only seeds new rows.
    """
    email = validate_email(email)
    existing = find_by_email(db, email)
    if existing is not None:
        return existing

    customer = Customer(email=email, phone=phone)
    db.add(customer)
    try:
        db.flush()
    except IntegrityError as exc:
        # A concurrent request inserted the same email first. At this point
        # the unit of work holds only reads, so a full rollback is safe.
        db.rollback()
        existing = find_by_email(db, email)
        if existing is None:
            raise _duplicate_email_error(email) from exc
        logger.info("Customer race on %s resolved to id=%s", mask_email(email), existing.id)
        return existing

    logger.info("Customer %s created for %s", customer.id, mask_email(email))
    return customer


def update(
    db: Session,
    customer_id: int,
    *,
    patch_id: Optional[int],
    email: Optional[str],
    phone: Optional[str] = None,
) -> Customer:
    customer = get_by_id(db, customer_id)

    if patch_id != customer_id:
        raise ArgumentInvalidError(
            f"Customer ID mismatch: path ID = {customer_id}, request body ID = {patch_id}."
        )

    email = validate_email(email)
    owner = find_by_email(db, email)
    if owner is not None and owner.id != customer.id:
        raise _duplicate_email_error(email)

    customer.email = email
    customer.phone = phone
    try:
        db.flush()
    except IntegrityError as exc:
        db.rollback()
        raise _duplicate_email_error(email) from exc
    return customer


def delete(db: Session, customer_id: int) -> None:
    customer = get_by_id(db, customer_id)
    has_reviews = db.execute(select(exists().where(Review.customer_id == customer.id))).scalar()
    if has_reviews:
        raise ConflictError(f"Customer {customer_id} still has reviews and cannot be deleted.")
    db.delete(customer)
    db.flush()
    logger.info("Customer %s deleted", customer_id)
