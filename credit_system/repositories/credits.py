from __future__ import annotations

from uuid import UUID

from sqlalchemy.orm import Session, joinedload

from credit_system.models.credit import Credit


def find_by_credit_code(db: Session, credit_code: UUID) -> Credit | None:
    return (
        db.query(Credit)
        .options(joinedload(Credit.customer))
        .filter(Credit.credit_code == credit_code)
        .first()
    )


def find_all_by_customer_id(db: Session, customer_id: int) -> list[Credit]:
    return (
        db.query(Credit)
        .filter(Credit.customer_id == customer_id)
        .order_by(Credit.id.asc())
        .all()
    )


def save(db: Session, credit: Credit) -> Credit:
    db.add(credit)
    db.commit()
    db.refresh(credit)
    return credit
