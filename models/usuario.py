# models/usuario.py
from sqlalchemy import Column, Integer, String, DateTime
from db import Base

TIPO_USUARIO_PADRAO = "aluno"


class Usuario(Base):
    """Modelo de Usuário do sistema."""

    __tablename__ = "usuarios"

    # Colunas principais
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    nome = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    senha_hash = Column(String(255), nullable=False)
    tipo_usuario = Column(String(50), nullable=False, default=TIPO_USUARIO_PADRAO)

    # Reset de senha (ambos nulos ou ambos preenchidos)
    reset_token = Column(String(64), nullable=True, index=True)
    reset_token_expires = Column(DateTime(timezone=True), nullable=True)

    def __repr__(self):
        return f"<Usuario(id={self.id}, email='{self.email}', nome='{self.nome}')>"

    @property
    def has_pending_reset(self) -> bool:
        """Verifica se existe um token de reset gravado (expirado ou não)."""
        return self.reset_token is not None and self.reset_token_expires is not None
