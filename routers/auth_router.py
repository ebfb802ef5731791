from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from db import get_db
from core.config import Settings
from core.dependencies import get_app_settings, get_hasher, get_mailer, get_token_issuer
from core.security import PasswordHasher, TokenIssuer
from middleware.auth import get_current_user, CurrentUser
from schemas.auth_schema import (
    RegisterRequest,
    RegisterResponse,
    LoginRequest,
    LoginResponse,
    ForgotPasswordRequest,
    ResetPasswordRequest,
    MessageResponse,
    UserMe,
)
from services.auth_service import (
    register,
    login,
    request_password_reset,
    reset_password,
    get_profile,
)
from services.email_service import Mailer


router = APIRouter(prefix="/auth", tags=["Auth"])


@router.get("/test", response_model=MessageResponse)
def auth_test():
    return {"message": "API de autenticação funcionando!"}


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def auth_register(
    payload: RegisterRequest,
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_hasher),
):
    return register(db, hasher, payload.nome, payload.email, payload.senha)


@router.post("/login", response_model=LoginResponse)
def auth_login(
    payload: LoginRequest,
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_hasher),
    issuer: TokenIssuer = Depends(get_token_issuer),
):
    return login(db, hasher, issuer, payload.email, payload.senha)


@router.post("/forgot-password", response_model=MessageResponse)
async def auth_forgot_password(
    payload: ForgotPasswordRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
    mailer: Mailer = Depends(get_mailer),
):
    return await request_password_reset(db, settings, mailer, payload.email)


@router.post("/reset-password", response_model=MessageResponse)
def auth_reset_password(
    payload: ResetPasswordRequest,
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_hasher),
):
    return reset_password(db, hasher, payload.token, payload.nova_senha)


@router.get("/me", response_model=UserMe)
def auth_me(
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return get_profile(db, current_user.user_id)
