"""
Serviço de Email - envio do link de redefinição de senha.
"""
import logging
from email.message import EmailMessage
from typing import Protocol

import aiosmtplib

from core.config import Settings

logger = logging.getLogger(__name__)


class EmailDeliveryError(Exception):
    """Falha no transporte de email."""
    pass


class Mailer(Protocol):
    async def send_password_reset(self, to_email: str, nome: str, reset_link: str) -> None: ...


def build_password_reset_message(
    from_address: str,
    to_email: str,
    nome: str,
    reset_link: str,
    expire_minutes: int,
) -> EmailMessage:
    """Monta o email (texto + HTML) com o link de redefinição."""
    msg = EmailMessage()
    msg["From"] = from_address
    msg["To"] = to_email
    msg["Subject"] = "Redefinição de senha"

    msg.set_content(
        f"Olá, {nome}!\n\n"
        "Recebemos uma solicitação para redefinir a senha da sua conta.\n"
        f"Acesse o link abaixo para criar uma nova senha:\n\n{reset_link}\n\n"
        f"Este link expira em {expire_minutes} minutos.\n"
        "Se você não solicitou esta alteração, ignore este email.\n"
    )
    msg.add_alternative(
        f"""
        <html>
        <body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333;">
            <p>Olá, {nome}!</p>
            <p>Recebemos uma solicitação para redefinir a senha da sua conta.</p>
            <p><a href="{reset_link}">Redefinir senha</a></p>
            <p><strong>Este link expira em {expire_minutes} minutos.</strong></p>
            <p>Se você não solicitou esta alteração, ignore este email.</p>
            <p style="font-size: 12px; color: #666;">
                Se o link não funcionar, copie e cole no navegador:<br>{reset_link}
            </p>
        </body>
        </html>
        """,
        subtype="html",
    )
    return msg


class SmtpMailer:
    """Envia emails via SMTP (aiosmtplib)."""

    def __init__(self, settings: Settings):
        self.settings = settings

    @property
    def from_address(self) -> str:
        return f"{self.settings.SMTP_FROM_NAME} <{self.settings.SMTP_FROM_EMAIL}>"

    async def send_password_reset(self, to_email: str, nome: str, reset_link: str) -> None:
        msg = build_password_reset_message(
            self.from_address,
            to_email,
            nome,
            reset_link,
            self.settings.RESET_TOKEN_EXPIRE_MINUTES,
        )

        try:
            await aiosmtplib.send(
                msg,
                hostname=self.settings.SMTP_HOST,
                port=self.settings.SMTP_PORT,
                username=self.settings.SMTP_USER or None,
                password=self.settings.SMTP_PASSWORD or None,
                use_tls=self.settings.SMTP_USE_SSL,
                start_tls=self.settings.SMTP_USE_TLS and not self.settings.SMTP_USE_SSL,
                timeout=self.settings.SMTP_TIMEOUT,
            )
        except (aiosmtplib.SMTPException, OSError) as e:
            logger.error("Falha ao enviar email de redefinição para %s: %s", to_email, e)
            raise EmailDeliveryError(str(e)) from e

        logger.info("Email de redefinição enviado para %s", to_email)


class ConsoleMailer:
    """Registra o link no log em vez de enviar (desenvolvimento local)."""

    async def send_password_reset(self, to_email: str, nome: str, reset_link: str) -> None:
        logger.warning("[EMAIL_BACKEND=console] Link de redefinição para %s: %s", to_email, reset_link)


def build_mailer(settings: Settings) -> Mailer:
    if settings.EMAIL_BACKEND == "console":
        return ConsoleMailer()
    return SmtpMailer(settings)
