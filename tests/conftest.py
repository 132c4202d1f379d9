import os

# must be set before apan.config is imported
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["MAIL_PROVIDER"] = "console"
os.environ["BCRYPT_ROUNDS"] = "4"

import pytest
from fastapi.testclient import TestClient

from apan.database import Base, SessionLocal, engine
from apan.mail.mail_service import MailService, MailServiceError, get_mail_service
from apan.main import app

API = "/api/users"


class RecordingMailService(MailService):
    """Keeps reset mails in memory instead of sending them."""

    def __init__(self):
        super().__init__(provider="console")
        self.sent = []
        self.fail = False

    def send_password_reset(self, to_email, name, token):
        if self.fail:
            raise MailServiceError("relay down")
        self.sent.append({"to": to_email, "name": name, "token": token})


@pytest.fixture(name="mail_service")
def mail_service_fixture():
    return RecordingMailService()


@pytest.fixture(name="client")
def client_fixture(mail_service):
    """Fresh tables for every test, dropped again afterwards."""
    Base.metadata.create_all(bind=engine)
    app.dependency_overrides[get_mail_service] = lambda: mail_service
    try:
        with TestClient(app) as client:
            yield client
    finally:
        app.dependency_overrides.clear()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(name="db")
def db_fixture(client):
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(name="make_user")
def make_user_fixture(client):
    """Register + login, returning (user_id, auth headers)."""

    def _make(name="Ana", email="ana@x.com", password="secret", role=None):
        body = {"name": name, "email": email, "password": password}
        if role:
            body["role"] = role
        created = client.post(API, json=body)
        assert created.status_code == 201, created.text

        login = client.post(f"{API}/login", json={"email": email, "password": password})
        assert login.status_code == 200, login.text
        token = login.json()["token"]
        return created.json()["id"], {"Authorization": f"Bearer {token}"}

    return _make


@pytest.fixture(name="make_project")
def make_project_fixture(client):
    def _make(headers, **fields):
        body = {"name": "Clean Park", "start_date": "2024-01-01", "end_date": "2024-06-01"}
        body.update(fields)
        response = client.post(f"{API}/projects", json=body, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _make
