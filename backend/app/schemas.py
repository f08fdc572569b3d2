# backend/app/schemas.py

from typing import Optional

from pydantic import BaseModel, Field


class Credentials(BaseModel):
    """Body of /register and /login. Presence is checked by the handlers."""

    email: Optional[str] = Field(default=None, description="Email address")
    password: Optional[str] = Field(default=None, description="Plain-text password")


class MessageResponse(BaseModel):
    message: str


class TokenResponse(BaseModel):
    token: str
    access_token: str
    token_type: str = "Bearer"
    expires_in: int


class SearchRow(BaseModel):
    LGA: str
    total: int
    lat: Optional[float] = None
    lng: Optional[float] = None


class SearchResponse(BaseModel):
    query: dict[str, str | list[str]]
    result: list[SearchRow]


class AreaResponse(BaseModel):
    area: str
    lat: Optional[float] = None
    lng: Optional[float] = None
    offences: dict[str, int]
