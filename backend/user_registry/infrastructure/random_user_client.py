"""Random User Client: wraps httpx.AsyncClient around randomuser.me with error mapping.

Invariants:
    - Overload (429, 5xx), timeouts and connection errors -> UpstreamUnavailableError
    - Other non-2xx, non-JSON bodies, upstream "error" bodies, schema mismatches
      and empty result lists -> UpstreamMalformedError
    - No retry: the registry propagates failures to its caller, who may retry
    - fetch_batch() requests exactly `size` results; the caller enforces 1..5000

Design Decisions:
    - Wrapper over raw client: isolates transport and error mapping from the registry
    - inc= query parameter trims the payload to the projected fields
    - Client owns its httpx.AsyncClient unless one is injected (tests pass a MockTransport-backed one)
"""

import logging

import httpx
from pydantic import ValidationError

from user_registry.core.errors import (
    ErrorContext,
    UpstreamMalformedError,
    UpstreamUnavailableError,
)
from user_registry.core.user import GeneratedUser
from user_registry.schemas.random_user import RandomUserResponse

logger = logging.getLogger(__name__)

_TOO_MANY_REQUESTS = 429
_INCLUDED_FIELDS = "gender,name,email,login,picture"


def _is_overloaded(status_code: int) -> bool:
    """429 or any 5xx: the generator is up but refusing work."""
    return status_code == _TOO_MANY_REQUESTS or status_code >= 500


class RandomUserClient:
    """Fetches batches of random users from randomuser.me."""

    def __init__(
        self,
        base_url: str = "https://randomuser.me/api/",
        timeout_seconds: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ):
        self.base_url = base_url
        self.client = client or httpx.AsyncClient(timeout=timeout_seconds)

    async def aclose(self) -> None:
        await self.client.aclose()

    async def fetch_batch(self, size: int) -> list[GeneratedUser]:
        """Request `size` users and return their projections."""
        context = ErrorContext(requested_count=size)
        try:
            response = await self.client.get(
                self.base_url,
                params={"results": size, "inc": _INCLUDED_FIELDS},
            )
        except httpx.TimeoutException as e:
            logger.warning(f"Random user generator timed out: {e}")
            raise UpstreamUnavailableError("timeout", context=context)
        except httpx.TransportError as e:
            logger.warning(f"Random user generator unreachable: {e}")
            raise UpstreamUnavailableError(
                f"connection error: {e}", context=context,
            )

        if _is_overloaded(response.status_code):
            logger.warning(
                "Random user generator refused the request",
                extra={"status_code": response.status_code, "batch_size": size},
            )
            raise UpstreamUnavailableError(
                f"HTTP {response.status_code}",
                retry_after_ms=self._extract_retry_after(response),
                context=context,
            )
        if response.is_error:
            raise UpstreamMalformedError(
                f"unexpected HTTP {response.status_code}", context=context,
            )

        users = self._parse(response, context)
        logger.info(
            f"Random user batch fetched ({len(users)} results)",
            extra={"batch_size": size},
        )
        return users

    def _parse(
        self, response: httpx.Response, context: ErrorContext,
    ) -> list[GeneratedUser]:
        """Validate the JSON body and project each result."""
        try:
            body = response.json()
        except ValueError:
            logger.error(f"Non-JSON body from generator: {response.text[:200]}")
            raise UpstreamMalformedError("response is not JSON", context=context)

        if isinstance(body, dict) and "error" in body:
            raise UpstreamMalformedError(str(body["error"]), context=context)

        try:
            parsed = RandomUserResponse.model_validate(body)
        except ValidationError as e:
            logger.error(f"Generator payload failed validation: {e}")
            raise UpstreamMalformedError(
                "response does not match the expected shape", context=context,
            )

        if not parsed.results:
            raise UpstreamMalformedError("empty result list", context=context)
        return [result.to_generated() for result in parsed.results]

    def _extract_retry_after(self, response: httpx.Response) -> int | None:
        """Extract Retry-After header (returns milliseconds)."""
        val = response.headers.get("retry-after")
        if val and val.isdigit():
            return int(val) * 1000
        return None
