from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from credit_system.core.database import get_db
from credit_system.schemas.credit import CreditDto, CreditView, CreditViewList
from credit_system.services import credits as credit_service

router = APIRouter(prefix="/api/credits", tags=["credits"])


@router.post("", response_model=CreditView, status_code=status.HTTP_201_CREATED)
def save_credit(payload: CreditDto, db: Session = Depends(get_db)):
    credit = credit_service.create_credit(db, payload)
    return CreditView.from_credit(credit)


@router.get("", response_model=list[CreditViewList])
def find_all_by_customer_id(
    customer_id: int = Query(alias="customerId"),
    db: Session = Depends(get_db),
):
    credits = credit_service.find_all_by_customer(db, customer_id)
    return [CreditViewList.from_credit(credit) for credit in credits]


@router.get("/{credit_code}", response_model=CreditView)
def find_by_credit_code(
    credit_code: UUID,
    customer_id: int = Query(alias="customerId"),
    db: Session = Depends(get_db),
):
    credit = credit_service.find_by_credit_code(db, customer_id, credit_code)
    return CreditView.from_credit(credit)
