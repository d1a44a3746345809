"""Per-gallery resolution of image count, cover URL and listing"""

import asyncio
import logging
from typing import List, Optional, Sequence

from cloudinary_client import CloudinaryClient
from cloudinary_urls import build_thumbnail_url
from errors import CredentialsError, InventoryError
from managers.content_manager import ContentManager
from models.asset import RemoteAssetRecord
from models.config import CloudinaryConfig
from models.gallery import GalleryEntry, GalleryListItem, GalleryView
from public_ids import DEFAULT_NAMESPACE, grouping_for_slug, to_public_id

logger = logging.getLogger("Gallery_Server")

COVER_WIDTH = 600
COVER_HEIGHT = 400
DEFAULT_MAX_CONCURRENCY = 5


class GalleryManager:
    """Combines gallery metadata with the Cloudinary listing of each gallery folder.

    Listing failures propagate by default. Callers that prefer to render a
    gallery with zero images can pass ``skip_failed=True`` to get_galleries.
    """

    def __init__(
        self,
        config: CloudinaryConfig,
        client: Optional[CloudinaryClient] = None,
        content_manager: Optional[ContentManager] = None,
        namespace: str = DEFAULT_NAMESPACE,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
    ):
        self.config = config
        self.client = client or CloudinaryClient(config)
        self.content_manager = content_manager or ContentManager()
        self.namespace = namespace
        self.max_concurrency = max_concurrency

    @staticmethod
    def sort_images(images: Sequence[RemoteAssetRecord]) -> List[RemoteAssetRecord]:
        return sorted(images, key=lambda record: record.public_id)

    def resolve_cover_url(self, entry: GalleryEntry, images: Sequence[RemoteAssetRecord]) -> str:
        """Cover precedence: declared URL > declared filename > first listed image > ''"""
        if entry.image.startswith("http"):
            return entry.image
        if entry.image:
            public_id = to_public_id(f"{self.namespace}/{entry.slug}/{entry.image}", self.namespace)
            return build_thumbnail_url(self.config, public_id, COVER_WIDTH, COVER_HEIGHT)
        if images:
            first = self.sort_images(images)[0]
            return build_thumbnail_url(self.config, first.public_id, COVER_WIDTH, COVER_HEIGHT)
        return ""

    def build_gallery_view(self, entry: GalleryEntry, images: Sequence[RemoteAssetRecord]) -> GalleryView:
        return GalleryView(
            slug=entry.slug,
            name=entry.slug,
            title=entry.title,
            image_count=len(images),
            published=entry.published,
            description=entry.description,
            image=self.resolve_cover_url(entry, images),
            tags=list(entry.tags),
            location=entry.location,
        )

    async def _list(self, slug: str) -> List[RemoteAssetRecord]:
        # requests is blocking; keep the event loop free while it runs
        return await asyncio.to_thread(self.client.list_images, grouping_for_slug(slug, self.namespace))

    async def list_gallery_images(self, slug: str) -> List[RemoteAssetRecord]:
        """All images of one gallery, sorted by public ID"""
        return self.sort_images(await self._list(slug))

    async def resolve_gallery(self, entry: GalleryEntry) -> GalleryView:
        images = await self._list(entry.slug)
        return self.build_gallery_view(entry, images)

    async def get_galleries(
        self,
        entries: Optional[Sequence[GalleryEntry]] = None,
        skip_failed: bool = False
    ) -> List[GalleryView]:
        """Resolve every gallery, newest first.

        Args:
            entries: Gallery metadata (defaults to the content manager's entries)
            skip_failed: Render galleries whose listing failed with zero images
                instead of raising. ConfigurationError is always raised.

        Returns:
            GalleryView list sorted by published date, descending
        """
        if entries is None:
            entries = self.content_manager.load_entries()
        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def resolve(entry: GalleryEntry) -> GalleryView:
            async with semaphore:
                try:
                    images = await self._list(entry.slug)
                except (CredentialsError, InventoryError) as exc:
                    if not skip_failed:
                        raise
                    logger.warning(f"Listing failed for gallery '{entry.slug}', rendering without images: {exc}")
                    images = []
            return self.build_gallery_view(entry, images)

        # All listings complete before the first error is raised
        results = await asyncio.gather(*(resolve(entry) for entry in entries), return_exceptions=True)
        for result in results:
            if isinstance(result, BaseException):
                raise result
        return sorted(results, key=lambda view: view.published, reverse=True)

    async def get_sorted_galleries_list(
        self,
        entries: Optional[Sequence[GalleryEntry]] = None,
        skip_failed: bool = False
    ) -> List[GalleryListItem]:
        galleries = await self.get_galleries(entries, skip_failed=skip_failed)
        return [
            GalleryListItem(
                slug=gallery.slug,
                title=gallery.title,
                tags=gallery.tags,
                published=gallery.published,
                location=gallery.location or None,
            )
            for gallery in galleries
        ]
