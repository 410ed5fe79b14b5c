"""Identity provider client."""

import logging
from typing import Optional

import httpx

from app.config import settings

logger = logging.getLogger(__name__)


class IdentityProvider:
    """
    Resolves a session token to a user id.

    The provider's verification endpoint receives the token as a bearer
    credential and answers 200 with ``{"userId": ...}`` (or ``{"sub": ...}``)
    for a live session, 401/403 otherwise.
    """

    def __init__(
        self,
        verify_url: Optional[str] = None,
        timeout: float = settings.http_timeout,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.verify_url = verify_url if verify_url is not None else settings.auth_verify_url
        self.timeout = timeout
        self.transport = transport

    async def authenticate(self, token: str) -> Optional[str]:
        """Return the user id for ``token``, or None when unauthenticated."""
        if not self.verify_url:
            logger.error("AUTH_VERIFY_URL is not configured; rejecting request")
            return None

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(
                    self.verify_url,
                    headers={"Authorization": f"Bearer {token}"},
                )
        except httpx.HTTPError as e:
            logger.error(f"Identity provider unreachable: {str(e)}")
            return None

        if response.status_code in (401, 403):
            return None
        if response.status_code != 200:
            logger.warning(
                "Identity provider returned unexpected status",
                extra={"status_code": response.status_code},
            )
            return None

        try:
            data = response.json()
        except ValueError:
            data = None
        if not isinstance(data, dict):
            logger.warning("Identity provider returned a body that is not a JSON object")
            return None

        user_id = data.get("userId") or data.get("sub")
        return str(user_id) if user_id else None


_identity_provider = IdentityProvider()


def get_identity_provider() -> IdentityProvider:
    return _identity_provider
