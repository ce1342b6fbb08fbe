"""Document Asset Service Implementation

Loads the company logo from disk and signature images over HTTP or from
data: URLs. Every failure is logged and reported as None.
"""

import base64
import binascii
import logging
import os
from typing import Optional

import httpx

from src.app.services.asset_service import AssetService

logger = logging.getLogger(__name__)


class HttpAssetService(AssetService):
    """
    Asset loader backed by the local filesystem and httpx

    Args:
        logo_path: Path to the company logo image
        timeout: Request timeout in seconds for remote images
    """

    def __init__(self, logo_path: Optional[str], timeout: float = 10.0):
        self.logo_path = logo_path
        self.timeout = timeout

    async def fetch_logo(self) -> Optional[bytes]:
        if not self.logo_path:
            return None
        if not os.path.exists(self.logo_path):
            logger.warning(f"Logo not found at {self.logo_path}, rendering without it")
            return None
        try:
            with open(self.logo_path, "rb") as logo_file:
                return logo_file.read()
        except OSError as e:
            logger.warning(f"Failed to read logo {self.logo_path}: {e}")
            return None

    async def fetch_image(self, url: str) -> Optional[bytes]:
        if not url:
            return None
        if url.startswith("data:"):
            return self._decode_data_url(url)
        if not url.startswith(("http://", "https://")):
            logger.warning(f"Unsupported image URL scheme: {url[:32]}")
            return None

        try:
            async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
                response = await client.get(url)
                response.raise_for_status()
                return response.content
        except httpx.HTTPError as e:
            logger.warning(f"Failed to fetch image {url}: {e}")
            return None

    @staticmethod
    def _decode_data_url(url: str) -> Optional[bytes]:
        header, _, payload = url.partition(",")
        if not payload:
            logger.warning("Empty data URL for image")
            return None
        try:
            if header.endswith(";base64"):
                return base64.b64decode(payload, validate=False)
            return payload.encode("latin-1")
        except (binascii.Error, UnicodeEncodeError) as e:
            logger.warning(f"Undecodable data URL image: {e}")
            return None
