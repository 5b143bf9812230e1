"""Request schemas for Auth API"""

from pydantic import BaseModel, Field


class CredentialsRequestSchema(BaseModel):
    """
    Request schema for sign-up and sign-in

    Used for POST /auth/sign-up and POST /auth/sign-in endpoints.
    """

    email: str = Field(..., min_length=1, description="Email address")
    password: str = Field(..., min_length=1, description="Password")

    class Config:
        json_schema_extra = {
            "example": {
                "email": "name@example.com",
                "password": "s3cret-pass"
            }
        }
