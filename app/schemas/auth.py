"""Authentication request, response and principal schemas."""

from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator

from app.configs.settings import MIN_PASSWORD_LENGTH


class Principal(BaseModel):
    """Identity carried by a verified bearer token. Lives for one request."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    user_id: int = Field(alias="userId")
    email: str
    role: str | None = None
    expires_at: int = Field(alias="exp")


def check_presence(data: Any) -> Any:  # noqa: ANN401
    """Reject a body missing either credential before the email format is checked."""
    if isinstance(data, dict) and (not data.get("email") or not data.get("password")):
        mssg = "Email and password are required"
        raise ValueError(mssg)
    return data


class LoginRequest(BaseModel):
    """Body of ``POST /api/auth/login``."""

    model_config = ConfigDict(
        json_schema_extra={"example": {"email": "admin@example.com", "password": "s3cret-pass"}},
    )

    email: EmailStr | None = None
    password: str | None = None

    @model_validator(mode="before")
    @classmethod
    def require_credentials(cls, data: Any) -> Any:  # noqa: ANN401
        return check_presence(data)


class RegisterRequest(BaseModel):
    """Body of ``POST /api/auth/register``."""

    email: EmailStr | None = None
    password: str | None = None

    @model_validator(mode="before")
    @classmethod
    def require_credentials(cls, data: Any) -> Any:  # noqa: ANN401
        return check_presence(data)

    @model_validator(mode="after")
    def check_password_length(self) -> "RegisterRequest":
        if len(self.password or "") < MIN_PASSWORD_LENGTH:
            mssg = f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
            raise ValueError(mssg)
        return self


class AuthUser(BaseModel):
    id: int
    email: str


class RegisteredUser(AuthUser):
    api_key: str


class LoginData(BaseModel):
    token: str
    user: AuthUser


class RegisterData(BaseModel):
    token: str
    user: RegisteredUser
