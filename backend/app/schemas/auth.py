from typing import Literal

from pydantic import BaseModel, EmailStr, field_validator

from app.utils.security import password_problems


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str
    first_name: str | None = None
    last_name: str | None = None
    role: Literal["business", "job_seeker"]

    @field_validator("password")
    @classmethod
    def _strong_password(cls, value: str) -> str:
        problems = password_problems(value)
        if problems:
            raise ValueError("; ".join(problems))
        return value


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class LoginResponse(BaseModel):
    token: str
    expires_in_seconds: int
    user_id: str


class ThrottleResponse(BaseModel):
    error: str
    retry_after_seconds: float


class UserResponse(BaseModel):
    id: str
    email: str
    first_name: str | None
    last_name: str | None
    role: str
