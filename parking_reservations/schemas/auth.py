"""Admin session schemas."""

from pydantic import BaseModel


class LoginRequest(BaseModel):
    username: str
    password: str


class AdminSessionResponse(BaseModel):
    username: str
    authenticated: bool

    model_config = {"from_attributes": True}
