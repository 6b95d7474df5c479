"""Pydantic schemas for signup and login.

Learn: These are the transient Credential shapes. The plaintext password
lives only in the request body; services hash or verify it and drop it.
"""

from pydantic import BaseModel, EmailStr, Field, field_validator

from warden.auth.password import MAX_PASSWORD_BYTES, password_fits


class SignupRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)

    @field_validator("password")
    @classmethod
    def password_within_bcrypt_limit(cls, v: str) -> str:
        if not password_fits(v):
            raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
        return v


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Token lifetime in seconds")

    model_config = {"from_attributes": True}
