"""Asset Service Interface

Fetches images embedded in documents (company logo, signature image).
"""

from abc import ABC, abstractmethod
from typing import Optional


class AssetService(ABC):
    """
    Image loader for document rendering

    Both methods return None instead of raising; a missing image never
    blocks a document.
    """

    @abstractmethod
    async def fetch_logo(self) -> Optional[bytes]:
        """
        Load the company logo

        Returns:
            Image bytes, or None if unavailable
        """
        pass

    @abstractmethod
    async def fetch_image(self, url: str) -> Optional[bytes]:
        """
        Load an image by URL (http(s) or data: URL)

        Args:
            url: Image location

        Returns:
            Image bytes, or None if unavailable
        """
        pass
