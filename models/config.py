"""Configuration data model"""

from dataclasses import dataclass
from typing import Optional

DEFAULT_DELIVERY_HOST = "res.cloudinary.com"
DEFAULT_API_BASE = "https://api.cloudinary.com/v1_1"


@dataclass(frozen=True)
class CloudinaryConfig:
    """Account identity and Admin API credentials.

    Only ``cloud_name`` is needed to build delivery URLs; listing images
    additionally needs ``api_key`` and ``api_secret``.
    """
    cloud_name: Optional[str] = None
    api_key: Optional[str] = None
    api_secret: Optional[str] = None
    delivery_host: str = DEFAULT_DELIVERY_HOST
    api_base: str = DEFAULT_API_BASE

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_key and self.api_secret)
