from typing import Optional

from pydantic import Field, model_validator

from airbrb_client.schemas.base import ApiModel


class Session(ApiModel):
    """
    Authenticated identity of the current user.

    A session without a token carries no identity; a session with a token
    always knows the user's email.
    """

    token: Optional[str] = Field(None, description="Opaque bearer token")
    email: Optional[str] = Field(None, description="Email the user signed in with")
    name: Optional[str] = Field(None, description="Display name")

    @model_validator(mode="after")
    def check_identity(self) -> "Session":
        if self.token is None and (self.email is not None or self.name is not None):
            raise ValueError("email and name must be absent when token is absent")
        if self.token is not None and not self.email:
            raise ValueError("email is required when token is present")
        return self

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None


class LoginPayload(ApiModel):
    email: str
    password: str


class RegisterPayload(ApiModel):
    email: str
    password: str
    name: str
    confirm_password: Optional[str] = Field(
        None, exclude=True, description="Checked locally, never sent to the backend"
    )


class AuthResponse(ApiModel):
    token: str
    name: Optional[str] = None
