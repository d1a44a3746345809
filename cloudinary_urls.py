"""Delivery URL construction for Cloudinary-hosted gallery images.

URL format: https://{host}/{cloud_name}/image/upload/[{transformations}/]{public_id}

Nothing here touches the network; the only input besides the public ID is
the CloudinaryConfig, which must carry a cloud name.
"""

import re
from typing import Optional
from urllib.parse import urlsplit

from errors import ConfigurationError
from models.config import CloudinaryConfig
from models.transform import TransformSpec

THUMBNAIL_WIDTH = 400
PRESERVE_ASPECT_WIDTH = 800
FULL_MAX_WIDTH = 2400

# Prefixes of transformation parameters that may appear in a delivered URL
TRANSFORM_PARAM_KEYS = {
    "a", "ar", "b", "bo", "c", "co", "cs", "d", "dn", "dpr", "e", "f", "fl",
    "g", "h", "l", "o", "pg", "q", "r", "t", "u", "w", "x", "y", "z",
}
VERSION_REGEX = re.compile(r'^v\d+$')


def is_enabled(config: Optional[CloudinaryConfig]) -> bool:
    return bool(config and config.cloud_name)


def is_cloudinary_url(url: str) -> bool:
    return "cloudinary.com" in url


def _base_url(config: Optional[CloudinaryConfig]) -> str:
    if not is_enabled(config):
        raise ConfigurationError("Cloudinary is not configured")
    return f"https://{config.delivery_host}/{config.cloud_name}/image/upload"


def _clean_public_id(public_id: str) -> str:
    return public_id[1:] if public_id.startswith("/") else public_id


def build_url(
    config: Optional[CloudinaryConfig],
    public_id: str,
    transform: Optional[TransformSpec] = None
) -> str:
    """Build a delivery URL, optionally with a transformation segment.

    Raises:
        ConfigurationError: If no cloud name is configured
    """
    base = _base_url(config)
    segment = transform.segment() if transform else ""
    transform_str = f"{segment}/" if segment else ""
    return f"{base}/{transform_str}{_clean_public_id(public_id)}"


def build_thumbnail_url(
    config: Optional[CloudinaryConfig],
    public_id: str,
    width: int = THUMBNAIL_WIDTH,
    height: Optional[int] = None
) -> str:
    """Thumbnail bounded by width x height; "limit" never crops the image"""
    return build_url(config, public_id, TransformSpec(
        width=width,
        height=height,
        crop="limit",
        quality="auto",
        format="auto",
    ))


def build_thumbnail_url_preserve_aspect(
    config: Optional[CloudinaryConfig],
    public_id: str,
    max_width: int = PRESERVE_ASPECT_WIDTH,
    max_height: Optional[int] = None
) -> str:
    return build_thumbnail_url(config, public_id, max_width, max_height)


def build_full_url(
    config: Optional[CloudinaryConfig],
    public_id: str,
    max_width: int = FULL_MAX_WIDTH
) -> str:
    """Large view; no format token so the stored format is kept"""
    return build_url(config, public_id, TransformSpec(
        width=max_width,
        crop="limit",
        quality="auto",
    ))


def build_original_url(config: Optional[CloudinaryConfig], public_id: str) -> str:
    """The asset exactly as stored, extension intact"""
    return f"{_base_url(config)}/{_clean_public_id(public_id)}"


def _is_transform_segment(segment: str) -> bool:
    if VERSION_REGEX.match(segment):
        return True
    for token in segment.split(","):
        key, sep, value = token.partition("_")
        if not sep or not value or key not in TRANSFORM_PARAM_KEYS:
            return False
    return True


def extract_public_id(url: str) -> Optional[str]:
    """Recover the public ID from a delivery URL.

    Transformation and version segments directly after /upload/ are skipped.
    Returns None for URLs that are not upload delivery URLs.
    """
    path = urlsplit(url).path
    marker = "/upload/"
    index = path.find(marker)
    if index == -1:
        return None

    segments = path[index + len(marker):].split("/")
    while len(segments) > 1 and _is_transform_segment(segments[0]):
        segments = segments[1:]
    public_id = "/".join(segments)
    return public_id or None
