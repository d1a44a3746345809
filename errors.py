"""Error types raised by the Cloudinary integration layer"""

from typing import Optional


class CloudinaryError(Exception):
    """Base class for all gallery/Cloudinary errors"""


class ConfigurationError(CloudinaryError):
    """Cloud name is missing, or the configuration itself is malformed"""


class CredentialsError(CloudinaryError):
    """API key/secret missing; only operations that hit the Admin API need them"""


class InventoryError(CloudinaryError):
    """Admin API returned a non-2xx status, a malformed body, or could not be reached"""

    def __init__(self, status_code: Optional[int], body: str, operation: str = "Cloudinary API request"):
        self.status_code = status_code
        self.body = body
        self.operation = operation
        if status_code is None:
            message = f"{operation} failed: {body}"
        else:
            message = f"{operation} failed: {status_code} {body}"
        super().__init__(message)
