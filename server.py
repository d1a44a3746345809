import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from mcp.server.fastmcp import FastMCP

from cloudinary_client import CloudinaryClient
from managers.config_manager import load_config
from managers.content_manager import DEFAULT_GALLERIES_DIR, ContentManager
from managers.gallery_manager import GalleryManager
from tools.gallery import register_gallery_tools
from tools.urls import register_url_tools

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("Gallery_Server")

GALLERIES_DIR = Path(os.environ.get("GALLERY_CONTENT_DIR", str(DEFAULT_GALLERIES_DIR)))

# Loaded once; read-only for the lifetime of the process
config = load_config()
cloudinary_client = CloudinaryClient(config)
content_manager = ContentManager(GALLERIES_DIR)
gallery_manager = GalleryManager(config, cloudinary_client, content_manager)


class AppContext:
    def __init__(self, gallery_manager: GalleryManager):
        self.gallery_manager = gallery_manager


@asynccontextmanager
async def app_lifespan(server: FastMCP) -> AsyncIterator[AppContext]:
    """Manage application lifecycle"""
    logger.info("Starting gallery server for %s", GALLERIES_DIR)
    try:
        yield AppContext(gallery_manager=gallery_manager)
    finally:
        logger.info("Shutting down gallery server")


mcp = FastMCP("Cloudinary_Gallery_Server", lifespan=app_lifespan)

register_gallery_tools(mcp, gallery_manager)
register_url_tools(mcp, config)

if __name__ == "__main__":
    mcp.run(transport="streamable-http")
