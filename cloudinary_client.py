import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

from errors import ConfigurationError, CredentialsError, InventoryError
from models.asset import RemoteAssetRecord
from models.config import CloudinaryConfig

logger = logging.getLogger("Gallery_Server")

# Single page only; folders with more resources are truncated
MAX_RESULTS = 500
DEFAULT_TIMEOUT = 30


class CloudinaryClient:
    """Read-only client for the Cloudinary Admin API resource listing.

    Each call is independent: nothing is cached, nothing is retried, and no
    connection state is shared between calls (calls run on worker threads).
    """

    def __init__(self, config: CloudinaryConfig, timeout: float = DEFAULT_TIMEOUT):
        self.config = config
        self.timeout = timeout

    def _resources_url(self) -> str:
        if not self.config or not self.config.cloud_name:
            raise ConfigurationError("Cloudinary is not configured")
        if not self.config.has_credentials:
            raise CredentialsError(
                "Cloudinary API credentials are required to list images. "
                "Please set CLOUDINARY_API_KEY and CLOUDINARY_API_SECRET."
            )
        return f"{self.config.api_base}/{self.config.cloud_name}/resources/image/upload"

    def _get_json(self, url: str, operation: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        try:
            response = requests.get(
                url,
                params=params,
                auth=(self.config.api_key, self.config.api_secret),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise InventoryError(None, f"Cloudinary API error: {e}", operation) from e

        if not 200 <= response.status_code < 300:
            raise InventoryError(response.status_code, response.text, operation)
        try:
            data = response.json()
        except ValueError as e:
            raise InventoryError(response.status_code, f"Malformed JSON response: {e}", operation) from e
        if not isinstance(data, dict):
            raise InventoryError(response.status_code, f"Unexpected response payload: {type(data).__name__}", operation)
        return data

    def list_images(self, folder_path: str) -> List[RemoteAssetRecord]:
        """List all images whose public ID starts with folder_path.

        Args:
            folder_path: Folder like "galleries/trip" (trailing slash optional)

        Returns:
            Records in the API's default order; empty if nothing matches

        Raises:
            ConfigurationError: No cloud name configured
            CredentialsError: API key or secret missing (checked before any request)
            InventoryError: Non-2xx, malformed body, or transport failure
        """
        url = self._resources_url()
        prefix = folder_path if folder_path.endswith("/") else f"{folder_path}/"
        operation = f'Listing Cloudinary images under "{prefix}"'

        data = self._get_json(url, operation, params={"prefix": prefix, "max_results": MAX_RESULTS})
        resources = data.get("resources") or []
        if not isinstance(resources, list):
            raise InventoryError(200, f"Unexpected 'resources' value: {type(resources).__name__}", operation)
        try:
            records = [RemoteAssetRecord.from_api(resource) for resource in resources]
        except (KeyError, TypeError, AttributeError) as e:
            raise InventoryError(200, f"Malformed resource record: {e}", operation) from e

        if not records:
            logger.warning(
                f'No images found with prefix "{prefix}". This might indicate images were uploaded '
                "without the folder path in their public_id."
            )
        else:
            logger.info(f"Listed {len(records)} images under {prefix}")
        return records

    def get_image_metadata(self, public_id: str) -> RemoteAssetRecord:
        """Fetch a single resource (dimensions, format, size) by public ID"""
        url = f"{self._resources_url()}/{quote(public_id.lstrip('/'), safe='/')}"
        operation = f'Fetching Cloudinary resource "{public_id}"'
        data = self._get_json(url, operation)
        try:
            return RemoteAssetRecord.from_api(data)
        except KeyError as e:
            raise InventoryError(200, f"Malformed resource record: missing {e}", operation) from e
