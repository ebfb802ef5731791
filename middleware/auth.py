# middleware/auth.py
"""
Middleware de autenticação - Validação do JWT emitido no login.
"""
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from typing import Optional

from core.dependencies import get_token_issuer
from core.exceptions import AuthError
from core.security import TokenIssuer

# Security scheme para Swagger
security = HTTPBearer(auto_error=False)


class CurrentUser:
    """Contexto do usuário atual (claims do token)."""

    def __init__(self, user_id: int, email: str, tipo: str):
        self.user_id = user_id
        self.email = email
        self.tipo = tipo

    def __repr__(self):
        return f"<CurrentUser(id={self.user_id}, email='{self.email}', tipo='{self.tipo}')>"


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> CurrentUser:
    """
    Dependency que valida o token JWT e retorna o usuário atual.

    Raises:
        AuthError (401): Se token ausente, inválido ou expirado
    """
    if credentials is None:
        raise AuthError("Token de autenticação não fornecido")

    payload = issuer.decode(credentials.credentials)
    if payload is None or payload.get("sub") is None:
        raise AuthError("Token inválido ou expirado")

    return CurrentUser(
        user_id=int(payload["sub"]),
        email=payload.get("email"),
        tipo=payload.get("tipo"),
    )
