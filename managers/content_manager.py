"""Gallery metadata loading from index.md front matter"""

import logging
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import frontmatter
import yaml

from models.gallery import GalleryEntry

logger = logging.getLogger("Gallery_Server")

DEFAULT_GALLERIES_DIR = Path("src") / "content" / "galleries"
INDEX_FILENAME = "index.md"


def _naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _coerce_published(value: Any) -> datetime:
    if isinstance(value, datetime):
        return _naive_utc(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str) and value.strip():
        return _naive_utc(datetime.fromisoformat(value.strip()))
    raise ValueError(f"invalid 'published' value: {value!r}")


def _coerce_tags(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [tag.strip() for tag in value.split(",") if tag.strip()]
    if isinstance(value, (list, tuple)):
        return [str(tag).strip() for tag in value if str(tag).strip()]
    raise ValueError(f"invalid 'tags' value: {value!r}")


def _text(value: Any) -> str:
    return "" if value is None else str(value).strip()


def entry_from_metadata(slug: str, metadata: Dict[str, Any]) -> GalleryEntry:
    """Validate front matter and build a GalleryEntry.

    Raises:
        ValueError: If title or published is missing or invalid
    """
    title = _text(metadata.get("title"))
    if not title:
        raise ValueError("missing required field 'title'")
    if metadata.get("published") is None:
        raise ValueError("missing required field 'published'")

    return GalleryEntry(
        slug=slug,
        title=title,
        published=_coerce_published(metadata["published"]),
        description=_text(metadata.get("description")),
        image=_text(metadata.get("image")),
        tags=_coerce_tags(metadata.get("tags")),
        location=_text(metadata.get("location")),
        camera=_text(metadata.get("camera")),
    )


class ContentManager:
    """Reads one index.md per gallery folder"""

    def __init__(self, galleries_dir: Union[str, Path] = DEFAULT_GALLERIES_DIR):
        self.galleries_dir = Path(galleries_dir)

    def _slug_for(self, index_path: Path) -> str:
        # "trip/index.md" -> "trip"
        return index_path.parent.relative_to(self.galleries_dir).as_posix()

    def load_entries(self) -> List[GalleryEntry]:
        entries: List[GalleryEntry] = []
        if not self.galleries_dir.exists():
            logger.info("Galleries directory %s does not exist yet", self.galleries_dir)
            return entries

        for index_path in sorted(self.galleries_dir.glob(f"**/{INDEX_FILENAME}")):
            slug = self._slug_for(index_path)
            if slug == ".":
                continue
            try:
                post = frontmatter.load(str(index_path))
                entries.append(entry_from_metadata(slug, post.metadata))
            except (ValueError, yaml.YAMLError, OSError) as exc:
                logger.error("Skipping gallery %s due to metadata error: %s", index_path, exc)
                continue

        logger.info("Loaded %s gallery entries from %s", len(entries), self.galleries_dir)
        return entries

    def get_entry(self, slug: str) -> Optional[GalleryEntry]:
        for entry in self.load_entries():
            if entry.slug == slug:
                return entry
        return None
