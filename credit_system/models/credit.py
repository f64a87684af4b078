from __future__ import annotations

import enum
import uuid

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, Numeric, String, Uuid, func
from sqlalchemy.orm import relationship

from credit_system.core.database import Base


class CreditStatus(str, enum.Enum):
    IN_PROGRESS = "IN_PROGRESS"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class Credit(Base):
    __tablename__ = "credits"

    id = Column(Integer, primary_key=True)
    credit_code = Column(Uuid, nullable=False, unique=True, default=uuid.uuid4)
    credit_value = Column(Numeric(12, 2), nullable=False)
    day_first_installment = Column(Date, nullable=False)
    number_of_installments = Column(Integer, nullable=False)
    status = Column(String(20), nullable=False, default=CreditStatus.IN_PROGRESS.value)  # IN_PROGRESS / APPROVED / REJECTED
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    customer = relationship("Customer", back_populates="credits")
