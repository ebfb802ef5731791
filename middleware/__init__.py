# middleware/__init__.py
from .auth import get_current_user, CurrentUser

__all__ = [
    "get_current_user",
    "CurrentUser",
]
