# models/__init__.py
from db import Base

from .usuario import Usuario, TIPO_USUARIO_PADRAO

__all__ = [
    "Base",
    "Usuario",
    "TIPO_USUARIO_PADRAO",
]
