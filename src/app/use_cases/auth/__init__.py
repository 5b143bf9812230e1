"""Authentication use cases"""
from .sign_up import SignUp
from .sign_in import SignIn
from .sign_out import SignOut
from .get_current_session import GetCurrentSession
from .dtos import (
    SignUpCommandDTO,
    SignInCommandDTO,
    UserResponseDTO,
    SignOutResponseDTO,
)

__all__ = [
    "SignUp",
    "SignIn",
    "SignOut",
    "GetCurrentSession",
    "SignUpCommandDTO",
    "SignInCommandDTO",
    "UserResponseDTO",
    "SignOutResponseDTO",
]
