# core/exceptions.py
"""
Erros de domínio da API de autenticação.

Todos herdam de HTTPException para que o FastAPI os converta na resposta
correspondente; o handler em main.py renderiza {"message": detail}.
"""
from fastapi import HTTPException, status


class InvalidRequestError(HTTPException):
    def __init__(self, detail: str = "Campos obrigatórios ausentes ou inválidos."):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class ConflictError(HTTPException):
    def __init__(self, detail: str = "Este email já está cadastrado."):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class AuthError(HTTPException):
    def __init__(self, detail: str = "Credenciais inválidas."):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class InvalidTokenError(HTTPException):
    """Token de reset inexistente, já utilizado ou expirado."""

    def __init__(self, detail: str = "Token inválido ou expirado."):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class InternalError(HTTPException):
    def __init__(self, detail: str = "Erro interno no servidor."):
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)
