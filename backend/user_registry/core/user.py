"""User Model: the registry's record type and the generator's read-only projection.

Invariants:
    - User.username is non-empty and never reassigned after construction
    - Two Users are equal (and hash equal) iff their usernames are equal
    - GeneratedUser is frozen: the registry never mutates upstream payloads

Design Decisions:
    - Plain dataclasses, no pydantic: core stays free of boundary validation
      (schemas/ owns wire parsing)
"""

from dataclasses import dataclass

from user_registry.core.domain_types import Gender
from user_registry.core.errors import InvalidInputError, UpstreamMalformedError


@dataclass(frozen=True)
class GeneratedUser:
    """Minimal projection of one random user generator result."""
    username: str | None
    first_name: str = ""
    last_name: str = ""
    email: str | None = None
    gender: str | None = None
    picture: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(eq=False)
class User:
    """Registry record, identified by username."""
    username: str
    name: str | None = None
    email: str | None = None
    gender: Gender | None = None
    picture: str | None = None

    def __post_init__(self):
        if not isinstance(self.username, str) or not self.username.strip():
            raise InvalidInputError(
                "Username must be a non-empty string.", "username",
            )

    @classmethod
    def from_generated(cls, generated: GeneratedUser) -> "User":
        """Build a User from a generator result."""
        if not generated.username:
            raise UpstreamMalformedError(
                "generated user has no username",
            )
        return cls(
            username=generated.username,
            name=generated.full_name,
            email=generated.email,
            gender=Gender.from_generator(generated.gender),
            picture=generated.picture,
        )

    def copy_details_from(self, other: "User") -> None:
        """Overwrite every mutable field with other's values. Username is kept."""
        self.name = other.name
        self.email = other.email
        self.gender = other.gender
        self.picture = other.picture

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return self.username == other.username

    def __hash__(self) -> int:
        return hash(self.username)

    def __str__(self) -> str:
        # grep-friendly, not pretty
        gender = self.gender.value if self.gender else None
        return (
            f"username: {self.username}; name: {self.name}; "
            f"email: {self.email}; gender: {gender}; picture: {self.picture}"
        )
