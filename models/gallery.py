"""Gallery data models"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class GalleryEntry:
    """Metadata for one gallery, as declared in its index.md front matter"""
    slug: str
    title: str
    published: datetime
    description: str = ""
    image: str = ""  # absolute URL or a filename relative to the gallery folder
    tags: List[str] = field(default_factory=list)
    location: str = ""
    camera: str = ""


@dataclass
class GalleryView:
    """Resolved gallery, ready for the page templates"""
    slug: str
    name: str
    title: str
    image_count: int
    published: datetime
    description: str
    image: str
    tags: List[str]
    location: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "slug": self.slug,
            "name": self.name,
            "title": self.title,
            "image_count": self.image_count,
            "published": self.published.isoformat(),
            "description": self.description,
            "image": self.image,
            "tags": list(self.tags),
            "location": self.location,
        }


@dataclass
class GalleryListItem:
    """Compact form used by the timeline list"""
    slug: str
    title: str
    tags: List[str]
    published: datetime
    location: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "slug": self.slug,
            "data": {
                "title": self.title,
                "tags": list(self.tags),
                "published": self.published.isoformat(),
                "location": self.location,
            },
        }
