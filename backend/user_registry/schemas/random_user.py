"""Random User Schemas: validation of the randomuser.me response at the system boundary.

Invariants:
    - Only the fields the registry needs are modelled; everything else is ignored
    - login.username is required; a result without it fails validation
    - to_generated() is the only path from wire payload to core.GeneratedUser

Design Decisions:
    - Nested models mirror the upstream JSON (name.first, login.username,
      picture.medium) so validation errors name the exact upstream field
"""

from pydantic import BaseModel, Field

from user_registry.core.user import GeneratedUser


class RandomUserName(BaseModel):
    first: str = ""
    last: str = ""


class RandomUserLogin(BaseModel):
    username: str = Field(min_length=1)


class RandomUserPicture(BaseModel):
    medium: str | None = None


class RandomUserResult(BaseModel):
    """One element of the upstream `results` list."""
    gender: str | None = None
    name: RandomUserName = Field(default_factory=RandomUserName)
    email: str | None = None
    login: RandomUserLogin
    picture: RandomUserPicture = Field(default_factory=RandomUserPicture)

    def to_generated(self) -> GeneratedUser:
        return GeneratedUser(
            username=self.login.username,
            first_name=self.name.first,
            last_name=self.name.last,
            email=self.email,
            gender=self.gender,
            picture=self.picture.medium,
        )


class RandomUserResponse(BaseModel):
    """Upstream response envelope: {"results": [...], "info": {...}}."""
    results: list[RandomUserResult]
