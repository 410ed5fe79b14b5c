"""Authentication dependency backed by the identity provider."""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.context import set_user_id
from app.services.identity import IdentityProvider, get_identity_provider
from app.utils.exceptions import AuthenticationError

security = HTTPBearer(auto_error=False)


async def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    identity: IdentityProvider = Depends(get_identity_provider),
) -> str:
    """
    Resolve the signed-in user for this request.

    Returns:
        The user identifier issued by the identity provider

    Raises:
        AuthenticationError: If no token was sent or the provider rejects it
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Missing bearer token")

    user_id = await identity.authenticate(credentials.credentials)
    if not user_id:
        raise AuthenticationError("Invalid or expired session")

    set_user_id(user_id)
    return user_id
