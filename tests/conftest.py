"""
Pytest configuration: app com SQLite em memória e mailer falso.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from core.config import Settings
from db import Base
from main import create_app
from services.email_service import EmailDeliveryError
import models  # noqa: F401  (registra as tabelas no metadata)

FRONTEND_URL = "http://frontend.test"


class FakeMailer:
    """Guarda os emails em memória; pode ser configurado para falhar."""

    def __init__(self):
        self.sent = []
        self.fail = False

    async def send_password_reset(self, to_email, nome, reset_link):
        if self.fail:
            raise EmailDeliveryError("SMTP indisponível")
        self.sent.append({"to_email": to_email, "nome": nome, "reset_link": reset_link})


@pytest.fixture
def settings():
    return Settings(
        DATABASE_URL="sqlite://",
        JWT_SECRET_KEY="test-secret",
        BCRYPT_ROUNDS=4,
        FRONTEND_URL=FRONTEND_URL,
        EMAIL_BACKEND="console",
    )


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def mailer():
    return FakeMailer()


@pytest.fixture
def app(settings, session_factory, mailer):
    return create_app(settings, session_factory=session_factory, mailer=mailer)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def register_user(client):
    def _register(name="Maria Silva", email="maria@example.com", password="segredo123"):
        return client.post(
            "/api/auth/register",
            json={"name": name, "email": email, "password": password},
        )
    return _register
