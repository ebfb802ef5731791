import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Tuple

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from core.config import Settings
from core.exceptions import AuthError, ConflictError, InternalError, InvalidTokenError
from core.security import PasswordHasher, TokenIssuer, build_reset_link, generate_reset_token
from models import Usuario, TIPO_USUARIO_PADRAO
from services.email_service import EmailDeliveryError, Mailer

logger = logging.getLogger(__name__)

FORGOT_PASSWORD_MESSAGE = "Se o email estiver cadastrado, você receberá um link para redefinir sua senha."


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


def _user_info(user: Usuario) -> Dict[str, Any]:
    return {
        "id": user.id,
        "nome": user.nome,
        "tipo": user.tipo_usuario,
    }


def register(
    db: Session,
    hasher: PasswordHasher,
    nome: str,
    email: str,
    senha: str,
) -> Dict[str, Any]:
    user = Usuario(
        nome=nome,
        email=email,
        senha_hash=hasher.hash(senha),
        tipo_usuario=TIPO_USUARIO_PADRAO,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.info("Registro recusado: email já cadastrado (%s)", email)
        raise ConflictError()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Erro no registro")
        raise InternalError()

    logger.info("Usuário registrado: id=%s", user.id)
    return {"message": "Usuário registrado com sucesso!", "userId": user.id}


def login(
    db: Session,
    hasher: PasswordHasher,
    issuer: TokenIssuer,
    email: str,
    senha: str,
) -> Dict[str, Any]:
    try:
        user = db.query(Usuario).filter(Usuario.email == email).first()
    except SQLAlchemyError:
        logger.exception("Erro no login")
        raise InternalError()

    # Mesma resposta (e mesmo custo de bcrypt) para email inexistente e senha errada
    if user is None:
        hasher.dummy_verify()
        raise AuthError()

    if not hasher.verify(senha, user.senha_hash):
        raise AuthError()

    token = issuer.issue(user.id, user.email, user.tipo_usuario)
    logger.info("Login bem-sucedido: id=%s", user.id)

    return {
        "message": "Login bem-sucedido!",
        "token": token,
        "user": _user_info(user),
    }


def _store_reset_token(
    db: Session,
    email: str,
    expire_minutes: int,
) -> Optional[Tuple[str, str, str]]:
    """Grava um novo token (sobrescrevendo o anterior). Retorna (email, nome, token) ou None."""
    user = db.query(Usuario).filter(Usuario.email == email).first()
    if user is None:
        return None

    token = generate_reset_token()
    user.reset_token = token
    user.reset_token_expires = _now_utc() + timedelta(minutes=expire_minutes)
    db.commit()
    logger.info("Token de redefinição gerado: id=%s", user.id)
    return user.email, user.nome, token


async def request_password_reset(
    db: Session,
    settings: Settings,
    mailer: Mailer,
    email: str,
) -> Dict[str, Any]:
    try:
        stored = await run_in_threadpool(
            _store_reset_token, db, email, settings.RESET_TOKEN_EXPIRE_MINUTES
        )
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Erro ao gravar token de redefinição")
        raise InternalError()

    if stored is None:
        return {"message": FORGOT_PASSWORD_MESSAGE}

    user_email, nome, token = stored
    reset_link = build_reset_link(settings.FRONTEND_URL, token)
    try:
        await mailer.send_password_reset(user_email, nome, reset_link)
    except EmailDeliveryError:
        logger.exception("Erro ao enviar email de redefinição")
        raise InternalError()

    return {"message": FORGOT_PASSWORD_MESSAGE}


def reset_password(
    db: Session,
    hasher: PasswordHasher,
    token: str,
    nova_senha: str,
) -> Dict[str, Any]:
    nova_hash = hasher.hash(nova_senha)

    # Consome o token no próprio UPDATE: dois resets concorrentes não passam juntos
    try:
        updated = (
            db.query(Usuario)
            .filter(
                Usuario.reset_token == token,
                Usuario.reset_token_expires > _now_utc(),
            )
            .update(
                {
                    Usuario.senha_hash: nova_hash,
                    Usuario.reset_token: None,
                    Usuario.reset_token_expires: None,
                },
                synchronize_session=False,
            )
        )
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Erro ao redefinir senha")
        raise InternalError()

    if updated == 0:
        raise InvalidTokenError()

    logger.info("Senha redefinida via token")
    return {"message": "Senha redefinida com sucesso."}


def get_profile(db: Session, user_id: int) -> Dict[str, Any]:
    user = db.query(Usuario).filter(Usuario.id == user_id).first()
    if user is None:
        raise AuthError("Usuário não encontrado")

    return {
        "id": user.id,
        "nome": user.nome,
        "email": user.email,
        "tipo": user.tipo_usuario,
    }
