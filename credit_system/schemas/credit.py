from __future__ import annotations

from datetime import date
from decimal import Decimal
from uuid import UUID

from pydantic import Field, field_validator

from credit_system.core.config import CREDIT_MAX_INSTALLMENTS
from credit_system.models.credit import Credit, CreditStatus
from credit_system.schemas.base import CamelModel, Money


class CreditDto(CamelModel):
    credit_value: Decimal = Field(gt=0, max_digits=12, decimal_places=2)
    day_first_of_installment: date
    number_of_installments: int = Field(ge=1, le=CREDIT_MAX_INSTALLMENTS)
    customer_id: int

    @field_validator("day_first_of_installment")
    @classmethod
    def validate_future_date(cls, value: date) -> date:
        if value <= date.today():
            raise ValueError("A data da primeira parcela deve estar no futuro")
        return value


class CreditView(CamelModel):
    credit_code: UUID
    credit_value: Money
    number_of_installment: int
    status: CreditStatus
    email_customer: str | None = None
    income_customer: Money | None = None

    @classmethod
    def from_credit(cls, credit: Credit) -> "CreditView":
        customer = credit.customer
        return cls(
            credit_code=credit.credit_code,
            credit_value=credit.credit_value,
            number_of_installment=credit.number_of_installments,
            status=CreditStatus(credit.status),
            email_customer=customer.email if customer is not None else None,
            income_customer=customer.income if customer is not None else None,
        )


class CreditViewList(CamelModel):
    credit_code: UUID
    credit_value: Money
    number_of_installments: int

    @classmethod
    def from_credit(cls, credit: Credit) -> "CreditViewList":
        return cls(
            credit_code=credit.credit_code,
            credit_value=credit.credit_value,
            number_of_installments=credit.number_of_installments,
        )
