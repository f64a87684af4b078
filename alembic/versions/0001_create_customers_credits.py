from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


revision = "0001_create_customers_credits"
down_revision = None
branch_labels = None
depends_on = None


def _has_index(inspector, table_name: str, index_name: str) -> bool:
    return any(idx["name"] == index_name for idx in inspector.get_indexes(table_name))


def upgrade() -> None:
    bind = op.get_bind()
    inspector = inspect(bind)

    if "customers" not in inspector.get_table_names():
        op.create_table(
            "customers",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("first_name", sa.String(length=120), nullable=False),
            sa.Column("last_name", sa.String(length=120), nullable=False),
            sa.Column("cpf", sa.String(length=11), nullable=False),
            sa.Column("email", sa.String(length=255), nullable=False),
            sa.Column("password", sa.String(length=255), nullable=False),
            sa.Column("zip_code", sa.String(length=20), nullable=False),
            sa.Column("street", sa.String(length=255), nullable=False),
            sa.Column("income", sa.Numeric(12, 2), nullable=False),
            sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
            sa.UniqueConstraint("cpf", name="ux_customers_cpf"),
            sa.UniqueConstraint("email", name="ux_customers_email"),
        )

    inspector = inspect(bind)
    if "credits" not in inspector.get_table_names():
        op.create_table(
            "credits",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("credit_code", sa.Uuid(), nullable=False),
            sa.Column("credit_value", sa.Numeric(12, 2), nullable=False),
            sa.Column("day_first_installment", sa.Date(), nullable=False),
            sa.Column("number_of_installments", sa.Integer(), nullable=False),
            sa.Column("status", sa.String(length=20), nullable=False),
            sa.Column("customer_id", sa.Integer(), sa.ForeignKey("customers.id"), nullable=False),
            sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
            sa.UniqueConstraint("credit_code", name="ux_credits_credit_code"),
        )
        op.create_index("ix_credits_customer_id", "credits", ["customer_id"], unique=False)


def downgrade() -> None:
    bind = op.get_bind()
    inspector = inspect(bind)

    if "credits" in inspector.get_table_names():
        if _has_index(inspector, "credits", "ix_credits_customer_id"):
            op.drop_index("ix_credits_customer_id", table_name="credits")
        op.drop_table("credits")

    inspector = inspect(bind)
    if "customers" in inspector.get_table_names():
        op.drop_table("customers")
