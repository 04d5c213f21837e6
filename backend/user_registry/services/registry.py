"""User Registry: CRUD over uniquely-keyed users, cursor navigation, and deduplicated bulk import.

Invariants:
    - One PagedCollection[User] per registry, never shared
    - Usernames are unique; more than one match means corrupted state (AmbiguousStateError)
    - update() mutates the stored record in place; username is never changed
    - import_random(n) returns exactly max(n, 0) users, none colliding with the
      registry or with each other, and appends them in one bulk extend
    - Generator failures propagate unchanged; the registry is untouched on failure

Design Decisions:
    - Registry methods are synchronous except import_random, which awaits the generator
      (ADR: pure selection logic lives in core/import_selection.py)
    - No internal locking: callers serialize access (api/routes/users.py holds the lock)
    - Module-level singleton set by init_registry() in the lifespan, read by get_registry()
"""

import logging
from collections.abc import Iterable

from user_registry.core.domain_types import DEFAULT_PAGE_SIZE, GENERATOR_BATCH_LIMIT
from user_registry.core.errors import (
    AmbiguousStateError,
    ErrorContext,
    UpstreamMalformedError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from user_registry.core.generator_protocol import UserGenerator
from user_registry.core.import_selection import batch_request_size, select_new_users
from user_registry.core.paged_collection import PagedCollection
from user_registry.core.user import User

logger = logging.getLogger(__name__)


class UserRegistry:
    """In-memory user store with paginated access."""

    def __init__(
        self,
        generator: UserGenerator,
        users: Iterable[User] = (),
        page_size: int = DEFAULT_PAGE_SIZE,
        batch_limit: int = GENERATOR_BATCH_LIMIT,
    ):
        self.generator = generator
        self.batch_limit = batch_limit
        self._users: PagedCollection[User] = PagedCollection(page_size, users)

    def __len__(self) -> int:
        return len(self._users)

    @property
    def users(self) -> PagedCollection[User]:
        return self._users

    # ─── Navigation ──────────────────────────────────────────────

    def current_page(self) -> list[User] | None:
        """Current page, then the cursor moves to the next one."""
        return self._users.current_page()

    def page_forward(self, offset: int) -> list[User] | None:
        """Skip `offset` pages forward, then step once more and return that page."""
        self._users.set_cursor(self._users.cursor + offset)
        return self._users.next_page()

    def page_backward(self, offset: int) -> list[User] | None:
        """Skip `offset` pages backward, then step once more and return that page."""
        self._users.set_cursor(self._users.cursor - offset)
        return self._users.prev_page()

    def page_of(self, username: str) -> list[User] | None:
        """Page holding the user (moves the cursor there), None if unknown."""
        user = self.find_by_username(username)
        if user is None:
            return None
        return self._users.page_containing(user)

    # ─── CRUD ────────────────────────────────────────────────────

    def find_by_username(self, username: str) -> User | None:
        matches = [u for u in self._users if u.username == username]
        if len(matches) > 1:
            logger.error(
                f"Registry holds {len(matches)} users named '{username}'",
                extra={"username": username},
            )
            raise AmbiguousStateError(username, len(matches))
        return matches[0] if matches else None

    def get(self, username: str) -> User:
        user = self.find_by_username(username)
        if user is None:
            raise UserNotFoundError(username)
        return user

    def create(self, user: User) -> User:
        if self.find_by_username(user.username) is not None:
            raise UserAlreadyExistsError(user.username)
        self._users.append(user)
        logger.info("User created", extra={"username": user.username})
        return user

    def update(self, user: User) -> User:
        stored = self.get(user.username)
        stored.copy_details_from(user)
        logger.info("User updated", extra={"username": user.username})
        return stored

    def delete(self, username: str) -> User:
        stored = self.get(username)
        self._users.remove(stored)
        logger.info("User deleted", extra={"username": username})
        return stored

    # ─── Bulk import ─────────────────────────────────────────────

    async def import_random(self, count: int) -> list[User]:
        """Pull exactly `count` new, unique users from the generator and register them.

        Loops because one call returns at most `batch_limit` users and
        candidates whose username is already known are discarded.
        """
        if count <= 0:
            return []

        accepted: list[User] = []
        accepted_names: set[str] = set()
        calls = 0
        while len(accepted) < count:
            remaining = count - len(accepted)
            size = batch_request_size(remaining, self.batch_limit)
            batch = await self.generator.fetch_batch(size)
            calls += 1
            if not batch:
                raise UpstreamMalformedError(
                    "generator returned an empty batch",
                    context=ErrorContext(requested_count=size),
                )
            # Snapshot after the await: the registry is the reference at accept time
            registered = {u.username for u in self._users}
            fresh = select_new_users(batch, registered, accepted_names, remaining)
            accepted.extend(fresh)
            logger.info(
                f"Import batch {calls}: accepted {len(fresh)} of {len(batch)}",
                extra={
                    "batch_size": size,
                    "accepted": len(fresh),
                    "requested_count": count,
                },
            )

        self._users.extend(accepted)
        logger.info(
            f"Imported {len(accepted)} random users in {calls} call(s)",
            extra={"requested_count": count},
        )
        return accepted


# Singleton (initialized on startup)
registry: UserRegistry | None = None


def init_registry(generator: UserGenerator, **kwargs) -> UserRegistry:
    global registry
    registry = UserRegistry(generator, **kwargs)
    return registry


def get_registry() -> UserRegistry:
    """FastAPI dependency for the process-wide registry."""
    if registry is None:
        raise RuntimeError("Registry not initialized")
    return registry
