from __future__ import annotations

from decimal import Decimal

from pydantic import EmailStr, Field, field_validator

from credit_system.models.customer import Customer
from credit_system.schemas.base import CamelModel, Money
from credit_system.services.cpf import is_valid_cpf, normalize_cpf


def _require_text(value: str) -> str:
    candidate = value.strip()
    if not candidate:
        raise ValueError("Campo obrigatório")
    return candidate


class CustomerDto(CamelModel):
    first_name: str
    last_name: str
    cpf: str
    income: Decimal = Field(ge=0, max_digits=12, decimal_places=2)
    email: EmailStr
    password: str
    zip_code: str
    street: str

    @field_validator("first_name", "last_name", "zip_code", "street")
    @classmethod
    def validate_required(cls, value: str) -> str:
        return _require_text(value)

    @field_validator("cpf")
    @classmethod
    def validate_cpf(cls, value: str) -> str:
        if not is_valid_cpf(value):
            raise ValueError("CPF inválido")
        return normalize_cpf(value)

    @field_validator("email", mode="after")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.lower()

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        _require_text(value)
        return value


class CustomerUpdateDto(CamelModel):
    first_name: str
    last_name: str
    income: Decimal = Field(ge=0, max_digits=12, decimal_places=2)
    zip_code: str
    street: str

    @field_validator("first_name", "last_name", "zip_code", "street")
    @classmethod
    def validate_required(cls, value: str) -> str:
        return _require_text(value)


class CustomerView(CamelModel):
    id: int
    first_name: str
    last_name: str
    cpf: str
    income: Money
    email: str
    zip_code: str
    street: str

    @classmethod
    def from_customer(cls, customer: Customer) -> "CustomerView":
        return cls(
            id=customer.id,
            first_name=customer.first_name,
            last_name=customer.last_name,
            cpf=customer.cpf,
            income=customer.income,
            email=customer.email,
            zip_code=customer.address.zip_code,
            street=customer.address.street,
        )
