from typing import Optional
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import sessionmaker
from starlette.exceptions import HTTPException as StarletteHTTPException
from dotenv import load_dotenv

load_dotenv()
from core.config import Settings, get_settings
from core.exceptions import InvalidRequestError
from core.security import PasswordHasher, TokenIssuer, build_password_hasher, build_token_issuer
from db import create_session_factory
from routers.auth_router import router as auth_router
from services.email_service import Mailer, build_mailer

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    *,
    session_factory: Optional[sessionmaker] = None,
    hasher: Optional[PasswordHasher] = None,
    token_issuer: Optional[TokenIssuer] = None,
    mailer: Optional[Mailer] = None,
) -> FastAPI:
    """
    Monta a aplicação. A configuração é lida uma única vez e, junto com as
    capacidades (banco, hash, token, email), fica em app.state para os handlers.
    """
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = FastAPI(
        title=settings.APP_NAME,
        description="""
API de autenticação de usuários.

Fluxo:
1. Cadastro (register)
2. Login com emissão de token JWT
3. Esqueci minha senha (token por email)
4. Redefinição de senha
""",
        version=settings.APP_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    app.state.settings = settings
    app.state.session_factory = session_factory or create_session_factory(
        settings.DATABASE_URL, echo=settings.DEBUG
    )
    app.state.hasher = hasher or build_password_hasher(settings)
    app.state.token_issuer = token_issuer or build_token_issuer(settings)
    app.state.mailer = mailer or build_mailer(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = [
            {
                "field": ".".join(str(part) for part in err.get("loc", ())[1:]),
                "message": err.get("msg", ""),
            }
            for err in exc.errors()
        ]
        error = InvalidRequestError()
        return JSONResponse(
            status_code=error.status_code,
            content={"message": error.detail, "errors": errors},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Captura exceções não tratadas: detalhe só no log, mensagem genérica na resposta."""
        logger.exception("Erro não tratado em %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Erro interno no servidor."},
        )

    @app.get("/health")
    def health_check():
        return {"status": "ok"}

    app.include_router(auth_router, prefix="/api")
    return app


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.SERVER_PORT)
