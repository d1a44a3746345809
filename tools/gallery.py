"""Gallery listing tools for the Cloudinary gallery server"""

import logging

from mcp.server.fastmcp import FastMCP

from errors import CloudinaryError
from managers.gallery_manager import GalleryManager

logger = logging.getLogger("Gallery_Server")


def register_gallery_tools(
    mcp: FastMCP,
    gallery_manager: GalleryManager
):
    """Register gallery tools with the MCP server"""

    @mcp.tool()
    async def list_galleries(skip_failed: bool = False) -> dict:
        """List all galleries with image count and cover URL, newest first.

        Args:
            skip_failed: If True, galleries whose Cloudinary listing fails are returned
                with image_count 0 instead of failing the whole call.

        Returns:
            Dict with galleries (slug, title, image_count, published, description,
            image, tags, location) and count, or an error message.
        """
        try:
            galleries = await gallery_manager.get_galleries(skip_failed=skip_failed)
        except CloudinaryError as exc:
            logger.exception("Listing galleries failed")
            return {"error": str(exc)}
        return {
            "galleries": [gallery.to_dict() for gallery in galleries],
            "count": len(galleries),
        }

    @mcp.tool()
    async def get_sorted_galleries_list(skip_failed: bool = False) -> dict:
        """Compact gallery list (slug, title, tags, published, location) for timeline views."""
        try:
            items = await gallery_manager.get_sorted_galleries_list(skip_failed=skip_failed)
        except CloudinaryError as exc:
            logger.exception("Listing galleries failed")
            return {"error": str(exc)}
        return {"galleries": [item.to_dict() for item in items], "count": len(items)}

    @mcp.tool()
    async def list_gallery_images(slug: str) -> dict:
        """List the Cloudinary images of one gallery, sorted by public ID.

        Only the first 500 images of a gallery are returned.

        Args:
            slug: Gallery folder name (e.g., "trip")
        """
        try:
            images = await gallery_manager.list_gallery_images(slug)
        except CloudinaryError as exc:
            logger.exception("Listing images for gallery '%s' failed", slug)
            return {"error": str(exc)}
        return {
            "slug": slug,
            "images": [image.to_dict() for image in images],
            "count": len(images),
        }
