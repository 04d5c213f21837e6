"""Boundary Protocol: contract between the registry and the random user generator.

Invariants:
    - Core NEVER imports from infrastructure; dependency arrows point inward only
    - Callers guarantee 1 <= size <= GENERATOR_BATCH_LIMIT before calling
    - Implementations raise UpstreamUnavailableError for overload/transport
      failures and UpstreamMalformedError for unparseable payloads

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - Async because the only real implementation does network IO
"""

from typing import Protocol

from user_registry.core.user import GeneratedUser


class UserGenerator(Protocol):
    """Source of random users, one bounded batch per call."""
    async def fetch_batch(self, size: int) -> list[GeneratedUser]: ...
