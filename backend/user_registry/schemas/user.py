"""User Schemas: Pydantic models for the registry's HTTP boundary.

Invariants:
    - UserPayload.username: 1-100 chars, stripped, non-empty
    - UserResponse mirrors core.user.User field for field
    - PageResponse.users is None when navigation stepped out of range

Design Decisions:
    - Schemas convert to/from core dataclasses explicitly (to_user / from_user):
      core stays free of pydantic
"""

from pydantic import BaseModel, Field, field_validator

from user_registry.core.domain_types import Gender
from user_registry.core.user import User


class UserPayload(BaseModel):
    """Create/update body. Username must match the path parameter."""
    username: str = Field(min_length=1, max_length=100)
    name: str | None = Field(None, max_length=200)
    email: str | None = Field(None, max_length=320)
    gender: Gender | None = None
    picture: str | None = Field(None, max_length=2000)

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("username cannot be empty or whitespace")
        return v

    def to_user(self) -> User:
        return User(
            username=self.username,
            name=self.name,
            email=self.email,
            gender=self.gender,
            picture=self.picture,
        )


class UserResponse(BaseModel):
    """Public-facing user data."""
    username: str
    name: str | None = None
    email: str | None = None
    gender: Gender | None = None
    picture: str | None = None

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(
            username=user.username,
            name=user.name,
            email=user.email,
            gender=user.gender,
            picture=user.picture,
        )


class PageResponse(BaseModel):
    """One page of users plus where the cursor ended up."""
    users: list[UserResponse] | None
    cursor: int
    page_count: int
    total: int
