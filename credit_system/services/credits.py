from __future__ import annotations

import calendar
import logging
from datetime import date
from uuid import UUID

from sqlalchemy.orm import Session

from credit_system.core.config import CREDIT_MAX_FIRST_INSTALLMENT_MONTHS
from credit_system.core.errors import BusinessError, NotFoundError
from credit_system.models.credit import Credit, CreditStatus
from credit_system.repositories import credits as credit_repository
from credit_system.schemas.credit import CreditDto
from credit_system.services.customers import find_customer

logger = logging.getLogger(__name__)


def add_months(value: date, months: int) -> date:
    """Soma meses de calendário, limitando o dia ao fim do mês (31/01 + 1 -> 28/02 ou 29/02)."""
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def latest_first_installment_allowed(today: date | None = None) -> date:
    return add_months(today or date.today(), CREDIT_MAX_FIRST_INSTALLMENT_MONTHS)


def create_credit(db: Session, payload: CreditDto, *, today: date | None = None) -> Credit:
    limit = latest_first_installment_allowed(today)
    if payload.day_first_of_installment >= limit:
        raise BusinessError(
            f"First installment must be before {limit.isoformat()}",
            field="dayFirstOfInstallment",
        )

    customer = find_customer(db, payload.customer_id)

    credit = Credit(
        credit_value=payload.credit_value,
        day_first_installment=payload.day_first_of_installment,
        number_of_installments=payload.number_of_installments,
        status=CreditStatus.IN_PROGRESS.value,
        customer=customer,
    )
    credit = credit_repository.save(db, credit)
    logger.info(
        "credit created credit_code=%s customer_id=%s installments=%s",
        credit.credit_code,
        customer.id,
        credit.number_of_installments,
    )
    return credit


def find_all_by_customer(db: Session, customer_id: int) -> list[Credit]:
    return credit_repository.find_all_by_customer_id(db, customer_id)


def find_by_credit_code(db: Session, customer_id: int, credit_code: UUID) -> Credit:
    credit = credit_repository.find_by_credit_code(db, credit_code)
    if credit is None:
        raise NotFoundError(f"Creditcode {credit_code} not found", field="creditCode")
    if int(credit.customer_id) != int(customer_id):
        logger.warning("credit ownership mismatch credit_code=%s customer_id=%s", credit_code, customer_id)
        raise NotFoundError(f"Creditcode {credit_code} not found", field="creditCode")
    return credit
