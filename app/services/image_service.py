"""Image hosting service (Cloudflare Images)."""

import hashlib
import hmac
import json
import logging
import time
from typing import Any, Dict, Optional
from urllib.parse import urlencode

import httpx

from app.config import settings
from app.utils.exceptions import ImageServiceError

logger = logging.getLogger(__name__)

API_BASE_URL = "https://api.cloudflare.com/client/v4"
DELIVERY_BASE_URL = "https://imagedelivery.net"
DEFAULT_VARIANT = "public"


def sign_delivery_path(path_and_query: str, key: str) -> str:
    """Hex HMAC-SHA256 of ``path?query`` with the account signing key."""
    return hmac.new(key.encode("utf-8"), path_and_query.encode("utf-8"), hashlib.sha256).hexdigest()


class ImageService:
    """Direct uploads and signed delivery URLs."""

    def __init__(
        self,
        account_id: Optional[str] = None,
        account_hash: Optional[str] = None,
        api_token: Optional[str] = None,
        signing_key: Optional[str] = None,
        ttl_seconds: int = settings.signed_url_ttl_seconds,
        timeout: float = settings.http_timeout,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.account_id = account_id or settings.cloudflare_account_id
        self.account_hash = account_hash or settings.cloudflare_account_hash
        self.api_token = api_token or settings.cloudflare_image_api_token
        self.signing_key = signing_key or settings.cloudflare_images_key
        self.ttl_seconds = ttl_seconds
        self.timeout = timeout
        self.transport = transport

    async def create_direct_upload(self, metadata: Dict[str, Any]) -> Dict[str, str]:
        """
        Request a one-time upload URL.

        Returns:
            ``{"uploadURL": ..., "imageId": ...}``

        Raises:
            ImageServiceError: If the service is not configured or refuses
        """
        if not self.account_id or not self.api_token:
            raise ImageServiceError("Image service is not configured")

        url = f"{API_BASE_URL}/accounts/{self.account_id}/images/v2/direct_upload"
        form = {
            "requireSignedURLs": "true",
            "metadata": json.dumps(metadata),
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    url,
                    headers={"Authorization": f"Bearer {self.api_token}"},
                    files={key: (None, value) for key, value in form.items()},
                )
        except httpx.HTTPError as e:
            logger.error(f"Direct upload request failed: {str(e)}", exc_info=True)
            raise ImageServiceError("Failed to get upload URL") from e

        if response.status_code >= 400:
            logger.error(
                "Direct upload request rejected",
                extra={"status_code": response.status_code, "body": response.text[:500]},
            )
            raise ImageServiceError("Failed to get upload URL")

        try:
            body = response.json()
        except ValueError:
            body = None
        result = (body.get("result") if isinstance(body, dict) else None) or {}
        if not result.get("id") or not result.get("uploadURL"):
            raise ImageServiceError("Image service returned an incomplete upload response")

        return {"uploadURL": result["uploadURL"], "imageId": result["id"]}

    def signed_url(self, image_id: Optional[str], variant: str = DEFAULT_VARIANT) -> str:
        """
        Time limited delivery URL for ``image_id``.

        Returns an empty string when the image id is missing or signing is not
        configured, so listings still render without a URL.
        """
        if not image_id or not self.account_hash or not self.signing_key:
            return ""

        expiry = int(time.time()) + self.ttl_seconds
        path = f"/{self.account_hash}/{image_id}/{variant}"
        query = urlencode({"exp": expiry})
        sig = sign_delivery_path(f"{path}?{query}", self.signing_key)
        return f"{DELIVERY_BASE_URL}{path}?{query}&{urlencode({'sig': sig})}"


_image_service = ImageService()


def get_image_service() -> ImageService:
    return _image_service
