# schemas/auth_schema.py
from pydantic import AliasChoices, BaseModel, EmailStr, Field, field_validator


def _validate_senha(v: str) -> str:
    # bcrypt não aceita NUL na senha
    if "\x00" in v:
        raise ValueError("Senha contém caracteres inválidos")
    return v


# ============================================================
# REGISTRO
# ============================================================

class RegisterRequest(BaseModel):
    """Schema para cadastro de usuário. Aceita os nomes em inglês e em português."""
    nome: str = Field(..., min_length=1, validation_alias=AliasChoices("name", "nome"))
    email: EmailStr
    senha: str = Field(..., min_length=1, validation_alias=AliasChoices("password", "senha"))

    @field_validator("nome")
    @classmethod
    def validate_nome(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Nome não pode ser vazio")
        return v

    @field_validator("senha")
    @classmethod
    def validate_senha(cls, v):
        return _validate_senha(v)


class RegisterResponse(BaseModel):
    message: str = "Usuário registrado com sucesso!"
    userId: int


# ============================================================
# LOGIN
# ============================================================

class LoginRequest(BaseModel):
    """Schema para requisição de login."""
    email: EmailStr
    senha: str = Field(..., min_length=1, validation_alias=AliasChoices("password", "senha"))

    @field_validator("senha")
    @classmethod
    def validate_senha(cls, v):
        return _validate_senha(v)


class UserInfo(BaseModel):
    """Perfil mínimo devolvido no login (nunca o hash)."""
    id: int
    nome: str
    tipo: str


class LoginResponse(BaseModel):
    """Schema para resposta de login."""
    message: str = "Login bem-sucedido!"
    token: str
    user: UserInfo


# ============================================================
# PASSWORD RESET
# ============================================================

class ForgotPasswordRequest(BaseModel):
    """Schema para solicitação de reset de senha."""
    email: EmailStr


class ResetPasswordRequest(BaseModel):
    """Schema para redefinição de senha."""
    token: str = Field(..., min_length=1)
    nova_senha: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("newPassword", "new_password", "novaSenha"),
    )

    @field_validator("nova_senha")
    @classmethod
    def validate_nova_senha(cls, v):
        return _validate_senha(v)


class MessageResponse(BaseModel):
    message: str


# ============================================================
# USER INFO
# ============================================================

class UserMe(BaseModel):
    """Informações do usuário autenticado."""
    id: int
    nome: str
    email: str
    tipo: str
