from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import Column, DateTime, Integer, Numeric, String, func
from sqlalchemy.orm import composite, relationship

from credit_system.core.database import Base


@dataclass
class Address:
    zip_code: str
    street: str


class Customer(Base):
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True)
    first_name = Column(String(120), nullable=False)
    last_name = Column(String(120), nullable=False)
    cpf = Column(String(11), nullable=False, unique=True)
    email = Column(String(255), nullable=False, unique=True)
    password = Column(String(255), nullable=False)  # hash passlib, nunca texto puro
    zip_code = Column(String(20), nullable=False)
    street = Column(String(255), nullable=False)
    income = Column(Numeric(12, 2), nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    address = composite(Address, zip_code, street)

    credits = relationship(
        "Credit",
        back_populates="customer",
        cascade="all, delete-orphan",
        order_by="Credit.id",
    )
