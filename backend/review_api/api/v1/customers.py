"""Customer endpoints: thin router over customer_resolver."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from review_api.core.dependencies import get_db
from review_api.schemas.customer import CustomerCreate, CustomerOut, CustomerUpdate
from review_api.services import customer_resolver

router = APIRouter()


@router.post("/customer", response_model=CustomerOut, status_code=201)
def create_customer(
    payload: CustomerCreate,
    db: Session = Depends(get_db),
):
    customer = customer_resolver.create(db, email=payload.email, phone=payload.phone)
    db.commit()
    db.refresh(customer)
    return customer


@router.get("/customer", response_model=list[CustomerOut])
def list_customers(db: Session = Depends(get_db)):
    return customer_resolver.list_all(db)


@router.get("/customer/{customer_id}", response_model=CustomerOut)
def get_customer(customer_id: int, db: Session = Depends(get_db)):
    return customer_resolver.get_by_id(db, customer_id)


@router.put("/customer/{customer_id}", response_model=CustomerOut)
def update_customer(
    customer_id: int,
    payload: CustomerUpdate,
    db: Session = Depends(get_db),
):
    customer = customer_resolver.update(
        db,
        customer_id,
        patch_id=payload.id,
        email=payload.email,
        phone=payload.phone,
    )
    db.commit()
    db.refresh(customer)
    return customer


@router.delete("/customer/{customer_id}", status_code=204, response_class=Response)
def delete_customer(customer_id: int, db: Session = Depends(get_db)):
    customer_resolver.delete(db, customer_id)
    db.commit()
    return Response(status_code=204)
