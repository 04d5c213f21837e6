"""Domain Types: enums and constants shared across the registry.

Invariants:
    - Gender has exactly three members; anything the generator sends besides
      "male"/"female" maps to OTHER
    - GENERATOR_BATCH_LIMIT is the upstream per-call cap (randomuser.me: 5000)

Design Decisions:
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum


DEFAULT_PAGE_SIZE = 10
GENERATOR_BATCH_LIMIT = 5000


class Gender(str, Enum):
    """User gender. Non-binary inclusive even though the generator is not."""
    MALE = "MALE"
    FEMALE = "FEMALE"
    OTHER = "OTHER"

    @classmethod
    def from_generator(cls, raw: str | None) -> "Gender":
        """Map the generator's raw gender string."""
        if raw == "male":
            return cls.MALE
        if raw == "female":
            return cls.FEMALE
        return cls.OTHER
