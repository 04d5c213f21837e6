"""User Routes: paginated listing, CRUD by username, and random bulk import.

Invariants:
    - Page reads never 404: stepping out of range returns users=null
    - Path username and body username must agree (InvalidInputError -> 400)
    - Mutating routes are serialized through _mutation_lock
    - Negative navigation offsets are treated as 0
    - Bulk import above settings.max_import_count is rejected before the lock is taken

Design Decisions:
    - _mutation_lock as module-level asyncio.Lock: the registry itself is unguarded,
      and import_random awaits the generator between reads and the final bulk insert
      (ADR: single-process uvicorn, one event loop)
    - Fixed-segment routes (/next, /prev, /generate) declared before /{username}
"""

import asyncio
import logging

from fastapi import APIRouter, Depends, status

from user_registry.config import Settings, get_settings
from user_registry.core.errors import ErrorContext, InvalidInputError
from user_registry.core.user import User
from user_registry.schemas.user import PageResponse, UserPayload, UserResponse
from user_registry.services.registry import UserRegistry, get_registry

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/users", tags=["users"])

_mutation_lock = asyncio.Lock()


def _page_response(
    registry: UserRegistry, page: list[User] | None,
) -> PageResponse:
    return PageResponse(
        users=(
            [UserResponse.from_user(u) for u in page]
            if page is not None else None
        ),
        cursor=registry.users.cursor,
        page_count=registry.users.page_count,
        total=len(registry),
    )


def _check_same_username(path_username: str, body: UserPayload) -> None:
    if body.username != path_username:
        raise InvalidInputError(
            f"Body username '{body.username}' does not match path username "
            f"'{path_username}'",
            "username",
        )


# ─── Navigation ──────────────────────────────────────────────────

@router.get("", response_model=PageResponse)
async def current_page(registry: UserRegistry = Depends(get_registry)):
    """Current page of users; the cursor then moves to the next page."""
    return _page_response(registry, registry.current_page())


@router.get("/next/{n}", response_model=PageResponse)
async def next_page(n: int, registry: UserRegistry = Depends(get_registry)):
    """Skip n pages forward, then return the following page."""
    return _page_response(registry, registry.page_forward(max(n, 0)))


@router.get("/prev/{n}", response_model=PageResponse)
async def previous_page(n: int, registry: UserRegistry = Depends(get_registry)):
    """Skip n pages backward, then return the preceding page."""
    return _page_response(registry, registry.page_backward(max(n, 0)))


# ─── Bulk import ─────────────────────────────────────────────────

@router.post(
    "/generate/{count}", response_model=list[UserResponse],
    status_code=status.HTTP_201_CREATED,
)
async def generate_users(
    count: int,
    registry: UserRegistry = Depends(get_registry),
    settings: Settings = Depends(get_settings),
):
    """Import `count` random users; returns exactly the users added."""
    if count > settings.max_import_count:
        raise InvalidInputError(
            f"Cannot import {count} users at once "
            f"(limit {settings.max_import_count})",
            "count",
            context=ErrorContext(requested_count=count),
        )
    async with _mutation_lock:
        users = await registry.import_random(count)
    return [UserResponse.from_user(u) for u in users]


# ─── CRUD ────────────────────────────────────────────────────────

@router.get("/{username}", response_model=UserResponse)
async def get_user(username: str, registry: UserRegistry = Depends(get_registry)):
    return UserResponse.from_user(registry.get(username))


@router.get("/{username}/page", response_model=PageResponse)
async def page_of_user(
    username: str, registry: UserRegistry = Depends(get_registry),
):
    """Page holding the user; the cursor moves there."""
    registry.get(username)
    return _page_response(registry, registry.page_of(username))


@router.post(
    "/{username}", response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_user(
    username: str, body: UserPayload,
    registry: UserRegistry = Depends(get_registry),
):
    _check_same_username(username, body)
    async with _mutation_lock:
        user = registry.create(body.to_user())
    return UserResponse.from_user(user)


@router.put("/{username}", response_model=UserResponse)
async def update_user(
    username: str, body: UserPayload,
    registry: UserRegistry = Depends(get_registry),
):
    _check_same_username(username, body)
    async with _mutation_lock:
        user = registry.update(body.to_user())
    return UserResponse.from_user(user)


@router.delete("/{username}", response_model=UserResponse)
async def delete_user(
    username: str, registry: UserRegistry = Depends(get_registry),
):
    async with _mutation_lock:
        user = registry.delete(username)
    return UserResponse.from_user(user)
