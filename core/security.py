# core/security.py
from datetime import datetime, timedelta, timezone
from typing import Optional, Protocol
import secrets

from jose import jwt, JWTError
from passlib.context import CryptContext

from .config import Settings


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...

    def verify(self, password: str, hashed_password: str) -> bool: ...

    def dummy_verify(self) -> None: ...


class TokenIssuer(Protocol):
    def issue(self, user_id: int, email: str, tipo_usuario: str) -> str: ...

    def decode(self, token: str) -> Optional[dict]: ...


class BcryptPasswordHasher:
    """Hash de senhas com bcrypt (custo fixo)."""

    def __init__(self, rounds: int = 10):
        self.pwd_context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )

    def hash(self, password: str) -> str:
        """Gera hash da senha usando bcrypt."""
        return self.pwd_context.hash(password)

    def verify(self, password: str, hashed_password: str) -> bool:
        """Verifica se a senha corresponde ao hash (comparação em tempo constante)."""
        try:
            return self.pwd_context.verify(password, hashed_password)
        except ValueError:
            # Senha que o bcrypt recusa (ex.: contém NUL) nunca corresponde
            return False

    def dummy_verify(self) -> None:
        """Consome o mesmo tempo de um verify real, para usuários inexistentes."""
        self.pwd_context.dummy_verify()


class JWTTokenIssuer:
    """Emissão e validação de tokens JWT de sessão."""

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_minutes: int = 60):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    def issue(self, user_id: int, email: str, tipo_usuario: str) -> str:
        """
        Cria token JWT de acesso.

        Args:
            user_id: ID do usuário
            email: Email do usuário
            tipo_usuario: Papel do usuário (ex.: "aluno")

        Returns:
            Token JWT codificado
        """
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "userId": user_id,
            "email": email,
            "tipo": tipo_usuario,
            "iat": now,
            "exp": now + timedelta(minutes=self.expire_minutes),
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def decode(self, token: str) -> Optional[dict]:
        """
        Decodifica e valida um token JWT.

        Returns:
            Payload do token ou None se inválido/expirado
        """
        try:
            return jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError:
            return None


def build_password_hasher(settings: Settings) -> BcryptPasswordHasher:
    return BcryptPasswordHasher(rounds=settings.BCRYPT_ROUNDS)


def build_token_issuer(settings: Settings) -> JWTTokenIssuer:
    return JWTTokenIssuer(
        secret_key=settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
        expire_minutes=settings.JWT_EXPIRE_MINUTES,
    )


def generate_reset_token() -> str:
    """Gera token opaco de reset de senha (256 bits, hexadecimal)."""
    return secrets.token_hex(32)


def build_reset_link(frontend_url: str, token: str) -> str:
    return f"{frontend_url.rstrip('/')}/redefinir-senha/{token}"
