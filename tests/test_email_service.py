"""
Testes do envio de email de redefinição
"""

import logging
from unittest.mock import AsyncMock, patch

import aiosmtplib
import pytest

from core.config import Settings
from services.email_service import (
    ConsoleMailer,
    EmailDeliveryError,
    SmtpMailer,
    build_mailer,
)

RESET_LINK = "http://localhost:4200/redefinir-senha/abc123"


@pytest.fixture
def smtp_settings():
    return Settings(
        SMTP_HOST="smtp.test",
        SMTP_PORT=2525,
        SMTP_USER="usuario",
        SMTP_PASSWORD="senha-smtp",
        SMTP_FROM_NAME="Auth API",
        SMTP_FROM_EMAIL="noreply@test",
        SMTP_USE_TLS=True,
    )


class TestSmtpMailer:
    @pytest.mark.asyncio
    async def test_send_password_reset(self, smtp_settings):
        with patch("services.email_service.aiosmtplib.send", new=AsyncMock()) as mock_send:
            await SmtpMailer(smtp_settings).send_password_reset("maria@example.com", "Maria", RESET_LINK)

        mock_send.assert_awaited_once()
        message = mock_send.await_args.args[0]
        kwargs = mock_send.await_args.kwargs

        assert message["To"] == "maria@example.com"
        assert message["From"] == "Auth API <noreply@test>"
        assert RESET_LINK in message.get_body(preferencelist=("plain",)).get_content()
        assert RESET_LINK in message.get_body(preferencelist=("html",)).get_content()

        assert kwargs["hostname"] == "smtp.test"
        assert kwargs["port"] == 2525
        assert kwargs["username"] == "usuario"
        assert kwargs["password"] == "senha-smtp"
        assert kwargs["start_tls"] is True
        assert kwargs["use_tls"] is False

    @pytest.mark.asyncio
    async def test_anonymous_relay(self):
        settings = Settings(SMTP_USER="", SMTP_PASSWORD="", SMTP_USE_TLS=False)
        with patch("services.email_service.aiosmtplib.send", new=AsyncMock()) as mock_send:
            await SmtpMailer(settings).send_password_reset("maria@example.com", "Maria", RESET_LINK)

        kwargs = mock_send.await_args.kwargs
        assert kwargs["username"] is None
        assert kwargs["password"] is None
        assert kwargs["start_tls"] is False

    @pytest.mark.asyncio
    async def test_transport_failure_is_wrapped(self, smtp_settings):
        failing = AsyncMock(side_effect=aiosmtplib.SMTPException("connection refused"))
        with patch("services.email_service.aiosmtplib.send", new=failing):
            with pytest.raises(EmailDeliveryError):
                await SmtpMailer(smtp_settings).send_password_reset("maria@example.com", "Maria", RESET_LINK)


class TestConsoleMailer:
    @pytest.mark.asyncio
    async def test_logs_link(self, caplog):
        with caplog.at_level(logging.WARNING, logger="services.email_service"):
            await ConsoleMailer().send_password_reset("maria@example.com", "Maria", RESET_LINK)
        assert RESET_LINK in caplog.text


def test_build_mailer():
    assert isinstance(build_mailer(Settings(EMAIL_BACKEND="console")), ConsoleMailer)
    assert isinstance(build_mailer(Settings(EMAIL_BACKEND="smtp")), SmtpMailer)
