"""Import Selection: pure helpers for the deduplicating bulk import.

Invariants:
    - batch_request_size() is always within [1, limit]
    - select_new_users() never returns more than `wanted` users
    - A candidate is accepted only if its username is in neither `registered`
      nor `accepted`; accepted usernames are added to `accepted` as they go,
      so duplicates inside one batch are rejected too

Design Decisions:
    - Pure functions, no IO: the registry owns the generator loop
      (ADR: functional core, imperative shell)
"""

from collections.abc import Iterable

from user_registry.core.user import GeneratedUser, User


def batch_request_size(remaining: int, limit: int) -> int:
    """Clamp the number of users still needed to what one generator call may return."""
    return max(1, min(remaining, limit))


def select_new_users(
    batch: Iterable[GeneratedUser],
    registered: set[str],
    accepted: set[str],
    wanted: int,
) -> list[User]:
    """Convert the unseen candidates of a batch into Users, up to `wanted` of them.

    Mutates `accepted` with every username it takes.
    """
    selected: list[User] = []
    for candidate in batch:
        if len(selected) >= wanted:
            break
        username = candidate.username
        if username in registered or username in accepted:
            continue
        selected.append(User.from_generated(candidate))
        accepted.add(username)
    return selected
