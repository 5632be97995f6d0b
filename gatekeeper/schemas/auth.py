"""Request/response schemas for auth endpoints."""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from gatekeeper.models.user import Role


class SignupRequest(BaseModel):
    """
    Account registration body.

    Fields are optional here so the service can report every invalid field
    at once instead of failing on the first missing one.
    """

    full_name: str | None = Field(
        default=None,
        validation_alias=AliasChoices("fullName", "fullname", "full_name"),
        description="Display name",
    )
    email: str | None = Field(default=None, description="Email address (unique)")
    password: str | None = Field(default=None, description="Password, at least 6 characters")
    role: str | None = Field(default=None, description="Admin or Regular")


class SignupResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str = "User created successfully"
    user_id: int = Field(..., serialization_alias="userId")


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str | None = Field(default=None, description="Email address")
    password: str | None = Field(default=None, description="Password")


class LoginUser(BaseModel):
    id: int
    role: Role


class LoginResponse(BaseModel):
    """Bearer token returned after successful login."""

    message: str = "Login successful"
    token: str = Field(..., description="JWT; send as Authorization: Bearer <token>")
    user: LoginUser


class FieldErrorItem(BaseModel):
    field: str
    message: str
