import logging

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

logger = logging.getLogger(__name__)

# Base para os modelos
Base = declarative_base()

# ============================================================
# CONFIGURAÇÃO DO SQLAlchemy
# ============================================================

def create_session_factory(database_url: str, echo: bool = False) -> sessionmaker:
    """Cria o engine do banco e a fábrica de sessões."""
    engine_kwargs = {"pool_pre_ping": True, "echo": echo}
    if not database_url.startswith("sqlite"):
        engine_kwargs.update(
            pool_size=10,     # Pool de conexões
            max_overflow=20,  # Conexões extras quando necessário
        )

    engine = create_engine(database_url, **engine_kwargs)
    logger.info("Engine do banco criado para %s", engine.url.render_as_string(hide_password=True))
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)

# ============================================================
# DEPENDENCY INJECTION para FastAPI
# ============================================================

def get_db(request: Request):
    """
    Cria uma sessão do banco de dados para cada requisição.
    Fecha automaticamente após o uso.
    """
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
