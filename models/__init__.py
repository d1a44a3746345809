"""Data models for the Cloudinary gallery server"""

from models.asset import RemoteAssetRecord
from models.config import CloudinaryConfig
from models.gallery import GalleryEntry, GalleryListItem, GalleryView
from models.transform import TransformSpec

__all__ = [
    "CloudinaryConfig",
    "GalleryEntry",
    "GalleryListItem",
    "GalleryView",
    "RemoteAssetRecord",
    "TransformSpec",
]
