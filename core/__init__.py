# core/__init__.py
from .config import Settings, get_settings
from .security import (
    BcryptPasswordHasher,
    JWTTokenIssuer,
    PasswordHasher,
    TokenIssuer,
    build_password_hasher,
    build_token_issuer,
    build_reset_link,
    generate_reset_token,
)
from .exceptions import (
    InvalidRequestError,
    ConflictError,
    AuthError,
    InvalidTokenError,
    InternalError,
)

__all__ = [
    "Settings",
    "get_settings",
    "BcryptPasswordHasher",
    "JWTTokenIssuer",
    "PasswordHasher",
    "TokenIssuer",
    "build_password_hasher",
    "build_token_issuer",
    "build_reset_link",
    "generate_reset_token",
    "InvalidRequestError",
    "ConflictError",
    "AuthError",
    "InvalidTokenError",
    "InternalError",
]
