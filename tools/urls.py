"""Delivery URL tools for the Cloudinary gallery server"""

import logging
from typing import Optional, Union

from mcp.server.fastmcp import FastMCP

from cloudinary_urls import (
    FULL_MAX_WIDTH,
    THUMBNAIL_WIDTH,
    build_full_url,
    build_original_url,
    build_thumbnail_url,
    build_url,
    extract_public_id,
)
from errors import ConfigurationError
from models.config import CloudinaryConfig
from models.transform import TransformSpec
from public_ids import to_grouping_path, to_public_id

logger = logging.getLogger("Gallery_Server")


def register_url_tools(
    mcp: FastMCP,
    config: CloudinaryConfig
):
    """Register URL building tools with the MCP server"""

    @mcp.tool()
    def build_image_url(
        public_id: str,
        width: Optional[int] = None,
        height: Optional[int] = None,
        crop: Optional[str] = None,
        gravity: Optional[str] = None,
        quality: Optional[Union[str, int]] = None,
        format: Optional[str] = None,
    ) -> dict:
        """Build a Cloudinary delivery URL with an arbitrary transformation.

        Args:
            public_id: Public ID including extension (e.g., "galleries/trip/a.jpg")
            width, height: Target size in pixels
            crop: fill | fit | scale | thumb | limit
            gravity: auto | face | center | north | south | east | west
            quality: "auto" or a number
            format: webp | jpg | png | avif ("auto" adds no token)
        """
        transform = TransformSpec(width=width, height=height, crop=crop, gravity=gravity, quality=quality, format=format)
        try:
            return {"url": build_url(config, public_id, transform)}
        except ConfigurationError as exc:
            return {"error": str(exc)}

    @mcp.tool()
    def thumbnail_url(public_id: str, width: int = THUMBNAIL_WIDTH, height: Optional[int] = None) -> dict:
        """Thumbnail URL bounded by width/height; aspect ratio is preserved."""
        try:
            return {"url": build_thumbnail_url(config, public_id, width, height)}
        except ConfigurationError as exc:
            return {"error": str(exc)}

    @mcp.tool()
    def full_url(public_id: str, max_width: int = FULL_MAX_WIDTH) -> dict:
        """Full-size viewing URL, limited to max_width, original format kept."""
        try:
            return {"url": build_full_url(config, public_id, max_width)}
        except ConfigurationError as exc:
            return {"error": str(exc)}

    @mcp.tool()
    def original_url(public_id: str) -> dict:
        """URL of the stored asset without any transformation."""
        try:
            return {"url": build_original_url(config, public_id)}
        except ConfigurationError as exc:
            return {"error": str(exc)}

    @mcp.tool()
    def local_path_to_public_id(local_path: str) -> dict:
        """Translate a local path (e.g., "content/galleries/trip/a.jpg") to its public ID and folder."""
        return {
            "public_id": to_public_id(local_path),
            "folder": to_grouping_path(local_path),
        }

    @mcp.tool()
    def public_id_from_url(url: str) -> dict:
        """Recover the public ID from a Cloudinary delivery URL (None for foreign URLs)."""
        return {"public_id": extract_public_id(url)}
