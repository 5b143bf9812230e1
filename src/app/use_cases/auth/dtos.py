"""Data Transfer Objects for Auth Use Cases"""

from datetime import datetime
from pydantic import BaseModel, Field


class SignUpCommandDTO(BaseModel):
    """
    Command DTO for creating an account

    Used as input to SignUp use case.
    """

    email: str = Field(..., description="Sign-in email")
    password: str = Field(..., description="Plain-text password (hashed before storage)")

    class Config:
        json_schema_extra = {
            "example": {
                "email": "name@example.com",
                "password": "correct horse battery staple"
            }
        }


class SignInCommandDTO(BaseModel):
    """Command DTO for signing in with email and password"""

    email: str = Field(..., description="Sign-in email")
    password: str = Field(..., description="Plain-text password")


class UserResponseDTO(BaseModel):
    """Response DTO for a created account"""

    user_id: int = Field(..., description="User ID")
    email: str = Field(..., description="Sign-in email")
    created_at: datetime = Field(..., description="Account creation timestamp")


class SignOutResponseDTO(BaseModel):
    signed_out: bool = Field(default=True)
