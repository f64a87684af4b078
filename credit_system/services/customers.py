from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from credit_system.core.errors import ConflictError, NotFoundError
from credit_system.models.customer import Address, Customer
from credit_system.repositories import customers as customer_repository
from credit_system.schemas.customer import CustomerDto, CustomerUpdateDto
from credit_system.services.passwords import hash_password

logger = logging.getLogger(__name__)


def register_customer(db: Session, payload: CustomerDto) -> Customer:
    if customer_repository.exists_by_cpf_or_email(db, payload.cpf, payload.email):
        raise ConflictError("CPF or e-mail already registered", field="customer")

    customer = Customer(
        first_name=payload.first_name,
        last_name=payload.last_name,
        cpf=payload.cpf,
        email=payload.email,
        password=hash_password(payload.password),
        address=Address(zip_code=payload.zip_code, street=payload.street),
        income=payload.income,
    )
    customer = customer_repository.save(db, customer)
    logger.info("customer registered id=%s", customer.id)
    return customer


def find_customer(db: Session, customer_id: int) -> Customer:
    customer = customer_repository.find_by_id(db, customer_id)
    if customer is None:
        raise NotFoundError(f"Id {customer_id} not found", field="customerId")
    return customer


def update_customer(db: Session, customer_id: int, payload: CustomerUpdateDto) -> Customer:
    customer = find_customer(db, customer_id)
    customer.first_name = payload.first_name
    customer.last_name = payload.last_name
    customer.income = payload.income
    # composite não rastreia mutação in-place; atribuir um Address novo
    customer.address = Address(zip_code=payload.zip_code, street=payload.street)
    customer = customer_repository.save(db, customer)
    logger.info("customer updated id=%s", customer.id)
    return customer


def delete_customer(db: Session, customer_id: int) -> None:
    customer = find_customer(db, customer_id)
    customer_repository.delete(db, customer)
    logger.info("customer deleted id=%s", customer_id)
