from .dto import UserPublicOut, UserRegisterIn, UserUpdateIn
from .service import IdentityService

__all__ = ["IdentityService", "UserPublicOut", "UserRegisterIn", "UserUpdateIn"]
