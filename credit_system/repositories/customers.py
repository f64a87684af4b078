from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from credit_system.core.errors import ConflictError
from credit_system.models.customer import Customer

logger = logging.getLogger(__name__)


def find_by_id(db: Session, customer_id: int) -> Customer | None:
    return db.get(Customer, customer_id)


def exists_by_cpf_or_email(db: Session, cpf: str, email: str) -> bool:
    return (
        db.query(Customer.id)
        .filter((Customer.cpf == cpf) | (Customer.email == email))
        .first()
        is not None
    )


def save(db: Session, customer: Customer) -> Customer:
    db.add(customer)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning("customer save rejected by unique constraint")
        raise ConflictError("CPF or e-mail already registered", field="customer") from exc
    db.refresh(customer)
    return customer


def delete(db: Session, customer: Customer) -> None:
    db.delete(customer)
    db.commit()
