"""Mapping between local gallery paths and Cloudinary public IDs"""

import logging
import re

logger = logging.getLogger("Gallery_Server")

DEFAULT_NAMESPACE = "galleries"

# Prefixes stripped (in order) when the namespace root cannot be located
KNOWN_PREFIXES = ("./", "/", "src/", "content/")


def to_public_id(local_path: str, namespace: str = DEFAULT_NAMESPACE) -> str:
    """Convert a local image path to a Cloudinary public ID.

    Accepts "content/galleries/trip/a.jpg", "galleries/trip/a.jpg",
    "../../content/galleries/trip/a.jpg" or Windows-style paths. The extension
    is kept because uploaded public IDs include it.

    Never fails: a path without the namespace root is prefixed with it.
    """
    public_id = local_path.replace("\\", "/")

    match = re.search(rf"(?:^|/)({re.escape(namespace)}/.+)$", public_id)
    if match:
        return match.group(1)

    for prefix in KNOWN_PREFIXES:
        while public_id.startswith(prefix):
            public_id = public_id[len(prefix):]
    if not public_id.startswith(f"{namespace}/"):
        logger.debug(f"No '{namespace}/' segment in {local_path!r}; prefixing")
        public_id = f"{namespace}/{public_id}"
    return public_id


def to_grouping_path(local_path: str, namespace: str = DEFAULT_NAMESPACE) -> str:
    """Return the Cloudinary folder ("galleries/<slug>") a local path belongs to"""
    remainder = to_public_id(local_path, namespace)[len(namespace) + 1:]
    return f"{namespace}/{remainder.split('/')[0]}"


def grouping_for_slug(slug: str, namespace: str = DEFAULT_NAMESPACE) -> str:
    return f"{namespace}/{slug.strip('/')}"
