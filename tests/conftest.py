import os

# Must be set before dentalcare.config is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["RATE_LIMIT_PER_MINUTE"] = "10000"
os.environ["CLINIC_TIMEZONE"] = "UTC"
os.environ["SEED_ON_STARTUP"] = "true"

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session


@pytest.fixture
def client():
    from dentalcare.main import app
    from dentalcare.database import engine, drop_db_and_tables, create_db_and_tables, load_seed_data, seed_database

    drop_db_and_tables()
    create_db_and_tables()
    with Session(engine) as session:
        seed_database(session, load_seed_data())
    with TestClient(app) as c:
        yield c


def _login(client, email, password):
    resp = client.post("/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['token']}"}


@pytest.fixture
def patient_headers(client):
    return _login(client, "bob.doe@email.com", "patient123")


@pytest.fixture
def other_patient_headers(client):
    return _login(client, "alex.smith@email.com", "patient123")


@pytest.fixture
def doctor_headers(client):
    return _login(client, "doctor@dentalcare.com", "doctor123")
