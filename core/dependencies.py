# core/dependencies.py
"""
Dependencies do FastAPI para as capacidades montadas em create_app().

A configuração e as capacidades (hash, token, email) são construídas uma vez
no startup e ficam em app.state; os handlers as recebem por injeção.
"""
from fastapi import Request

from .config import Settings
from .security import PasswordHasher, TokenIssuer
from services.email_service import Mailer


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_hasher(request: Request) -> PasswordHasher:
    return request.app.state.hasher


def get_token_issuer(request: Request) -> TokenIssuer:
    return request.app.state.token_issuer


def get_mailer(request: Request) -> Mailer:
    return request.app.state.mailer
