from __future__ import annotations

from datetime import date, timedelta
from uuid import uuid4

from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import credit_system.models  # noqa: F401
from credit_system.core.database import Base, get_db
from credit_system.core.errors import register_exception_handlers
from credit_system.models.credit import Credit
from credit_system.routers.credits import router as credits_router
from credit_system.services.credits import add_months
from tests.fixtures_data import (
    BAD_REQUEST_TITLE,
    NOT_FOUND_TITLE,
    build_credit,
    build_credit_payload,
    build_customer,
)

URL = "/api/credits"


def _build_client() -> tuple[TestClient, Session]:
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()

    app = FastAPI()
    register_exception_handlers(app)
    app.include_router(credits_router)
    app.dependency_overrides[get_db] = lambda: db

    return TestClient(app), db


def _seed_customer(db: Session, **overrides):
    customer = build_customer(**overrides)
    db.add(customer)
    db.commit()
    db.refresh(customer)
    return customer


def test_create_credit_returns_201_with_customer_view():
    client, db = _build_client()
    customer = _seed_customer(db)

    response = client.post(URL, json=build_credit_payload(customer.id))

    assert response.status_code == 201
    body = response.json()
    assert body["creditCode"]
    assert body["creditValue"] == 1000.0
    assert body["numberOfInstallment"] == 5
    assert body["status"] == "IN_PROGRESS"
    assert body["emailCustomer"] == customer.email
    assert body["incomeCustomer"] == 1000.0

    stored = db.query(Credit).one()
    assert str(stored.credit_code) == body["creditCode"]
    assert stored.customer_id == customer.id


def test_create_credit_with_too_many_installments_returns_400():
    client, db = _build_client()
    customer = _seed_customer(db)

    response = client.post(URL, json=build_credit_payload(customer.id, numberOfInstallments=50))

    assert response.status_code == 400
    body = response.json()
    assert body["title"] == BAD_REQUEST_TITLE
    assert body["status"] == 400
    assert "numberOfInstallments" in body["details"]
    assert db.query(Credit).count() == 0


def test_create_credit_with_zero_installments_returns_400():
    client, db = _build_client()
    customer = _seed_customer(db)

    response = client.post(URL, json=build_credit_payload(customer.id, numberOfInstallments=0))

    assert response.status_code == 400
    assert response.json()["title"] == BAD_REQUEST_TITLE


def test_create_credit_with_non_positive_value_returns_400():
    client, db = _build_client()
    customer = _seed_customer(db)

    response = client.post(URL, json=build_credit_payload(customer.id, creditValue=0))

    assert response.status_code == 400
    assert "creditValue" in response.json()["details"]


def test_create_credit_with_past_first_installment_returns_400():
    client, db = _build_client()
    customer = _seed_customer(db)
    yesterday = (date.today() - timedelta(days=1)).isoformat()

    response = client.post(URL, json=build_credit_payload(customer.id, dayFirstOfInstallment=yesterday))

    assert response.status_code == 400
    assert "dayFirstOfInstallment" in response.json()["details"]


def test_create_credit_with_first_installment_too_far_returns_400():
    client, db = _build_client()
    customer = _seed_customer(db)
    too_far = add_months(date.today(), 3).isoformat()

    response = client.post(URL, json=build_credit_payload(customer.id, dayFirstOfInstallment=too_far))

    assert response.status_code == 400
    body = response.json()
    assert body["title"] == BAD_REQUEST_TITLE
    assert body["exception"] == "BusinessError"
    assert "dayFirstOfInstallment" in body["details"]
    assert db.query(Credit).count() == 0


def test_create_credit_for_unknown_customer_returns_404():
    client, _db = _build_client()

    response = client.post(URL, json=build_credit_payload(999))

    assert response.status_code == 404
    body = response.json()
    assert body["title"] == NOT_FOUND_TITLE
    assert body["exception"] == "NotFoundError"


def test_find_credits_by_customer_id_returns_light_views():
    client, db = _build_client()
    customer = _seed_customer(db)
    credit = build_credit(customer)
    db.add(credit)
    db.commit()

    response = client.get(URL, params={"customerId": customer.id})

    assert response.status_code == 200
    body = response.json()
    assert len(body) == 1
    assert body[0]["creditCode"] == str(credit.credit_code)
    assert body[0]["creditValue"] == 1000.0
    assert body[0]["numberOfInstallments"] == 5


def test_find_credits_by_customer_id_is_ordered_and_isolated():
    client, db = _build_client()
    customer = _seed_customer(db)
    other = _seed_customer(db, cpf="28475934625", email="camila@gmail.com")
    first = build_credit(customer, number_of_installments=3)
    second = build_credit(customer, number_of_installments=12)
    db.add_all([first, second, build_credit(other)])
    db.commit()

    response = client.get(URL, params={"customerId": customer.id})

    assert response.status_code == 200
    assert [item["creditCode"] for item in response.json()] == [
        str(first.credit_code),
        str(second.credit_code),
    ]


def test_find_credits_for_customer_without_credits_returns_empty_list():
    client, db = _build_client()
    customer = _seed_customer(db)

    response = client.get(URL, params={"customerId": customer.id})

    assert response.status_code == 200
    assert response.json() == []


def test_find_credits_without_customer_id_returns_400():
    client, _db = _build_client()

    response = client.get(URL)

    assert response.status_code == 400
    assert "customerId" in response.json()["details"]


def test_find_credit_by_code_returns_detailed_view():
    client, db = _build_client()
    customer = _seed_customer(db)
    credit_code = uuid4()
    db.add(build_credit(customer, credit_code=credit_code))
    db.commit()

    response = client.get(f"{URL}/{credit_code}", params={"customerId": customer.id})

    assert response.status_code == 200
    body = response.json()
    assert body["creditCode"] == str(credit_code)
    assert body["creditValue"] == 1000.0
    assert body["numberOfInstallment"] == 5
    assert body["status"] == "IN_PROGRESS"
    assert body["emailCustomer"] == customer.email
    assert body["incomeCustomer"] == 1000.0


def test_find_credit_by_code_of_another_customer_returns_404():
    client, db = _build_client()
    owner = _seed_customer(db)
    intruder = _seed_customer(db, cpf="28475934625", email="camila@gmail.com")
    credit_code = uuid4()
    db.add(build_credit(owner, credit_code=credit_code))
    db.commit()

    response = client.get(f"{URL}/{credit_code}", params={"customerId": intruder.id})

    assert response.status_code == 404
    body = response.json()
    assert body["title"] == NOT_FOUND_TITLE
    assert "creditValue" not in body


def test_find_credit_by_unknown_code_returns_404():
    client, db = _build_client()
    customer = _seed_customer(db)

    response = client.get(f"{URL}/{uuid4()}", params={"customerId": customer.id})

    assert response.status_code == 404
    assert "creditCode" in response.json()["details"]


def test_find_credit_by_malformed_code_returns_400():
    client, db = _build_client()
    customer = _seed_customer(db)

    response = client.get(f"{URL}/not-a-uuid", params={"customerId": customer.id})

    assert response.status_code == 400
    assert response.json()["title"] == BAD_REQUEST_TITLE


def test_create_credit_with_sub_cent_value_returns_400_and_persists_nothing():
    client, db = _build_client()
    customer = _seed_customer(db)

    response = client.post(URL, json=build_credit_payload(customer.id, creditValue=0.001))

    assert response.status_code == 400
    assert "creditValue" in response.json()["details"]
    assert db.query(Credit).count() == 0


def test_create_credit_with_more_than_two_decimal_places_returns_400():
    client, db = _build_client()
    customer = _seed_customer(db)

    response = client.post(URL, json=build_credit_payload(customer.id, creditValue="1000.555"))

    assert response.status_code == 400
    assert db.query(Credit).count() == 0


def test_create_credit_with_value_above_column_precision_returns_400():
    client, db = _build_client()
    customer = _seed_customer(db)

    response = client.post(URL, json=build_credit_payload(customer.id, creditValue="10000000000"))

    assert response.status_code == 400
    assert response.json()["title"] == BAD_REQUEST_TITLE
    assert db.query(Credit).count() == 0


def test_create_credit_echoes_cent_precision_value():
    client, db = _build_client()
    customer = _seed_customer(db)

    response = client.post(URL, json=build_credit_payload(customer.id, creditValue="1000.55"))

    assert response.status_code == 201
    assert response.json()["creditValue"] == 1000.55
