"""Manager classes for the Cloudinary gallery server"""

from managers.config_manager import load_config
from managers.content_manager import ContentManager
from managers.gallery_manager import GalleryManager

__all__ = ["ContentManager", "GalleryManager", "load_config"]
