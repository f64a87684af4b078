from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from credit_system.core.database import get_db
from credit_system.schemas.customer import CustomerDto, CustomerUpdateDto, CustomerView
from credit_system.services import customers as customer_service

router = APIRouter(prefix="/api/customers", tags=["customers"])


@router.post("", response_model=CustomerView, status_code=status.HTTP_201_CREATED)
def save_customer(payload: CustomerDto, db: Session = Depends(get_db)):
    customer = customer_service.register_customer(db, payload)
    return CustomerView.from_customer(customer)


@router.get("/{customer_id}", response_model=CustomerView)
def find_by_id(customer_id: int, db: Session = Depends(get_db)):
    customer = customer_service.find_customer(db, customer_id)
    return CustomerView.from_customer(customer)


@router.patch("", response_model=CustomerView)
def update_customer(
    payload: CustomerUpdateDto,
    customer_id: int = Query(alias="customerId"),
    db: Session = Depends(get_db),
):
    customer = customer_service.update_customer(db, customer_id, payload)
    return CustomerView.from_customer(customer)


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_customer(customer_id: int, db: Session = Depends(get_db)):
    customer_service.delete_customer(db, customer_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
