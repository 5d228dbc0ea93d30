"""Request/response schemas for auth endpoints."""

from enum import Enum
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, EmailStr, Field, field_validator


class RoleName(str, Enum):
    """Closed set of roles; ids match the rows seeded at startup."""

    USER = "user"
    MODERATOR = "moderator"
    ADMIN = "admin"

    @property
    def authority(self) -> str:
        """Authority string reported to the frontend, e.g. ROLE_ADMIN."""
        return f"ROLE_{self.value.upper()}"


# Fixed primary keys for the seeded role rows.
ROLE_IDS: dict[RoleName, int] = {
    RoleName.USER: 1,
    RoleName.MODERATOR: 2,
    RoleName.ADMIN: 3,
}

DEFAULT_ROLE = RoleName.USER


class SignupRequest(BaseModel):
    """Registration payload. Roles default to ['user'] when absent or empty."""

    username: str = Field(..., min_length=3, max_length=20, description="Username")
    email: Annotated[EmailStr, AfterValidator(str.lower)] = Field(..., description="Email address")
    password: str = Field(..., min_length=6, max_length=40, description="Password")
    roles: list[RoleName] | None = Field(
        default=None,
        description="Requested roles (user, moderator, admin).",
    )

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("username must be non-empty")
        return v


class LoginRequest(BaseModel):
    """Credentials for signin."""

    username: str = Field(..., min_length=1, max_length=255, description="Username")
    password: str = Field(..., min_length=1, max_length=128, description="Password")


class SigninResponse(BaseModel):
    """Identity and JWT access token returned after successful signin."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    username: str
    email: str
    roles: list[str] = Field(..., description="Authorities, e.g. ROLE_USER")
    access_token: str = Field(
        ...,
        alias="accessToken",
        description="JWT access token",
    )
    token_type: str = Field(
        default="bearer",
        alias="tokenType",
        description="Token type",
    )


class TokenClaims(BaseModel):
    """Validated JWT payload. Unknown role strings are rejected."""

    model_config = ConfigDict(extra="ignore")

    id: int = Field(..., gt=0)
    roles: list[RoleName] = Field(..., min_length=1)
    iat: int
    exp: int


class CurrentUser(BaseModel):
    """Authenticated identity taken from the bearer token, for dependency injection."""

    id: int
    roles: list[RoleName]

    def has_any_role(self, *allowed: RoleName) -> bool:
        return any(role in allowed for role in self.roles)


class MessageResponse(BaseModel):
    """Plain acknowledgement body."""

    message: str
