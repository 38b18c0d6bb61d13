"""Schemas for authentication endpoints."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

BCRYPT_MAX_BYTES = 72


def _validate_password_length(v: str) -> str:
    """bcrypt only looks at the first 72 bytes; reject anything longer."""
    if len(v.encode("utf-8")) > BCRYPT_MAX_BYTES:
        raise ValueError(f"Password must be at most {BCRYPT_MAX_BYTES} bytes")
    return v


class UserRegister(BaseModel):
    """Schema for user registration."""

    username: str = Field(min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(min_length=8, max_length=BCRYPT_MAX_BYTES)

    @field_validator("password")
    @classmethod
    def validate_password_length(cls, v: str) -> str:
        return _validate_password_length(v)


class UserLogin(BaseModel):
    """Schema for user login."""

    email: EmailStr
    password: str = Field(min_length=1)


class UserResponse(BaseModel):
    """Public view of a user. Never includes the password hash."""

    id: int
    username: str
    email: str
    role: str

    model_config = ConfigDict(from_attributes=True)


class LoginResponse(BaseModel):
    """Schema for login response."""

    token: str
    user_id: int
    role: str


class ForgotPasswordRequest(BaseModel):
    """Schema for requesting password reset."""

    email: EmailStr


class ResetPasswordRequest(BaseModel):
    """Schema for resetting password; the token comes from the URL."""

    password: str = Field(min_length=8, max_length=BCRYPT_MAX_BYTES)

    @field_validator("password")
    @classmethod
    def validate_password_length(cls, v: str) -> str:
        return _validate_password_length(v)


class ResetPasswordWithTokenRequest(ResetPasswordRequest):
    """Schema for resetting password with the token in the body."""

    token: str = Field(min_length=1)


class MessageResponse(BaseModel):
    """Schema for simple message response."""

    message: str


class ProtectedResponse(BaseModel):
    """Identity echoed back by the protected diagnostic endpoint."""

    message: str
    user_id: int
    email: str
    role: str
