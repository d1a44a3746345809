"""Tests for gallery resolution (cover precedence, counts, fan-out)

Run with pytest from project root:
    pytest tests/test_gallery_manager.py -v
"""

import asyncio
import threading
import time
from datetime import datetime

import pytest

from cloudinary_urls import build_thumbnail_url
from errors import ConfigurationError, CredentialsError, InventoryError
from managers.content_manager import ContentManager
from managers.gallery_manager import GalleryManager
from models.asset import RemoteAssetRecord
from models.config import CloudinaryConfig
from models.gallery import GalleryEntry

CONFIG = CloudinaryConfig(cloud_name="demo", api_key="key", api_secret="secret")


def record(public_id):
    return RemoteAssetRecord(
        public_id=public_id,
        width=800,
        height=600,
        format="jpg",
        bytes=1000,
        url=f"http://res.cloudinary.com/demo/image/upload/{public_id}",
        secure_url=f"https://res.cloudinary.com/demo/image/upload/{public_id}",
    )


def entry(slug, published=datetime(2024, 1, 1), **kwargs):
    return GalleryEntry(slug=slug, title=slug.title(), published=published, **kwargs)


class FakeClient:
    """Stands in for CloudinaryClient; keyed by folder path"""

    def __init__(self, listings=None, errors=None, delay=0.0):
        self.listings = listings or {}
        self.errors = errors or {}
        self.delay = delay
        self.calls = []
        self.in_flight = 0
        self.max_in_flight = 0
        self._lock = threading.Lock()

    def list_images(self, folder_path):
        with self._lock:
            self.calls.append(folder_path)
            self.in_flight += 1
            self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                time.sleep(self.delay)
            if folder_path in self.errors:
                raise self.errors[folder_path]
            return [record(public_id) for public_id in self.listings.get(folder_path, [])]
        finally:
            with self._lock:
                self.in_flight -= 1


def make_manager(client, **kwargs):
    return GalleryManager(CONFIG, client, ContentManager("does-not-exist"), **kwargs)


class TestCoverResolution:
    """Tests for cover URL precedence"""

    def test_declared_absolute_url(self):
        """Test an http(s) cover is used as-is"""
        manager = make_manager(FakeClient())
        gallery = entry("trip", image="https://example.com/cover.jpg")
        assert manager.resolve_cover_url(gallery, [record("galleries/trip/a.jpg")]) == "https://example.com/cover.jpg"

    def test_declared_filename(self):
        """Test a local cover filename becomes a 600x400 thumbnail of its public ID"""
        client = FakeClient(listings={"galleries/trip": ["galleries/trip/b.jpg", "galleries/trip/a.jpg"]})
        manager = make_manager(client)

        view = asyncio.run(manager.resolve_gallery(entry("trip", image="cover.jpg")))

        assert view.image == build_thumbnail_url(CONFIG, "galleries/trip/cover.jpg", 600, 400)
        assert view.image_count == 2

    def test_declared_cover_wins_over_listing(self):
        """Test a declared filename is preferred over the first listed image"""
        manager = make_manager(FakeClient())
        gallery = entry("trip", image="z.jpg")
        cover = manager.resolve_cover_url(gallery, [record("galleries/trip/a.jpg")])
        assert cover == build_thumbnail_url(CONFIG, "galleries/trip/z.jpg", 600, 400)

    def test_first_listed_image(self):
        """Test the lexicographically first image is the default cover"""
        client = FakeClient(listings={"galleries/trip": ["galleries/trip/b.jpg", "galleries/trip/a.jpg"]})
        manager = make_manager(client)

        view = asyncio.run(manager.resolve_gallery(entry("trip")))

        assert view.image == build_thumbnail_url(CONFIG, "galleries/trip/a.jpg", 600, 400)
        assert client.calls == ["galleries/trip"]

    def test_empty_gallery(self):
        """Test no images and no declared cover gives '' and a zero count"""
        manager = make_manager(FakeClient())

        view = asyncio.run(manager.resolve_gallery(entry("empty-trip")))

        assert view.image == ""
        assert view.image_count == 0

    def test_declared_cover_requires_configuration(self):
        """Test URL building without a cloud name raises ConfigurationError"""
        manager = GalleryManager(CloudinaryConfig(), FakeClient(), ContentManager("does-not-exist"))
        with pytest.raises(ConfigurationError):
            manager.resolve_cover_url(entry("trip", image="cover.jpg"), [])


class TestGalleryView:
    """Tests for the assembled view"""

    def test_fields(self):
        manager = make_manager(FakeClient())
        gallery = entry(
            "trip",
            published=datetime(2024, 5, 1),
            description="Sea",
            tags=["sea"],
            location="Hanoi",
            camera="X100",
        )

        view = manager.build_gallery_view(gallery, [record("galleries/trip/a.jpg")])

        assert view.slug == view.name == "trip"
        assert view.title == "Trip"
        assert view.description == "Sea"
        assert view.tags == ["sea"]
        assert view.location == "Hanoi"
        assert view.to_dict()["published"] == "2024-05-01T00:00:00"

    def test_list_gallery_images_sorted(self):
        client = FakeClient(listings={"galleries/trip": ["galleries/trip/c.jpg", "galleries/trip/a.jpg", "galleries/trip/b.jpg"]})
        images = asyncio.run(make_manager(client).list_gallery_images("trip"))
        assert [image.public_id for image in images] == [
            "galleries/trip/a.jpg",
            "galleries/trip/b.jpg",
            "galleries/trip/c.jpg",
        ]


class TestGetGalleries:
    """Tests for get_galleries fan-out"""

    def test_sorted_newest_first(self):
        """Test results are ordered by published date, descending"""
        entries = [
            entry("old", published=datetime(2020, 1, 1)),
            entry("new", published=datetime(2024, 1, 1)),
            entry("mid", published=datetime(2022, 1, 1)),
        ]
        galleries = asyncio.run(make_manager(FakeClient()).get_galleries(entries))
        assert [gallery.slug for gallery in galleries] == ["new", "mid", "old"]

    def test_bounded_concurrency(self):
        """Test no more than max_concurrency listings run at once"""
        client = FakeClient(delay=0.05)
        entries = [entry(f"g{i}") for i in range(8)]

        galleries = asyncio.run(make_manager(client, max_concurrency=2).get_galleries(entries))

        assert len(galleries) == 8
        assert len(client.calls) == 8
        assert client.max_in_flight <= 2

    def test_errors_propagate_by_default(self):
        """Test a failing listing fails the whole call"""
        client = FakeClient(errors={"galleries/bad": InventoryError(500, "boom")})
        with pytest.raises(InventoryError):
            asyncio.run(make_manager(client).get_galleries([entry("ok"), entry("bad")]))

    def test_failure_waits_for_siblings(self):
        """Test a failing listing is raised only after every sibling listing has finished"""
        client = FakeClient(
            errors={
                "galleries/bad": InventoryError(500, "boom"),
                "galleries/worse": InventoryError(502, "Bad Gateway"),
            },
            delay=0.05,
        )
        entries = [entry("bad"), entry("worse"), entry("ok1"), entry("ok2"), entry("ok3")]

        with pytest.raises(InventoryError) as exc_info:
            asyncio.run(make_manager(client, max_concurrency=2).get_galleries(entries))

        assert exc_info.value.status_code == 500
        assert sorted(client.calls) == sorted(f"galleries/{e.slug}" for e in entries)
        assert client.in_flight == 0

    def test_skip_failed(self):
        """Test skip_failed renders failing galleries with zero images"""
        client = FakeClient(
            listings={"galleries/ok": ["galleries/ok/a.jpg"]},
            errors={
                "galleries/bad": InventoryError(420, "Rate Limit Exceeded"),
                "galleries/nocreds": CredentialsError("no credentials"),
            },
        )
        entries = [
            entry("ok", published=datetime(2024, 1, 3)),
            entry("bad", published=datetime(2024, 1, 2)),
            entry("nocreds", published=datetime(2024, 1, 1), image="cover.jpg"),
        ]

        galleries = asyncio.run(make_manager(client).get_galleries(entries, skip_failed=True))

        counts = {gallery.slug: gallery.image_count for gallery in galleries}
        assert counts == {"ok": 1, "bad": 0, "nocreds": 0}
        assert galleries[1].image == ""
        assert galleries[2].image == build_thumbnail_url(CONFIG, "galleries/nocreds/cover.jpg", 600, 400)

    def test_configuration_error_always_propagates(self):
        """Test skip_failed does not hide a missing cloud name"""
        client = FakeClient(errors={"galleries/trip": ConfigurationError("Cloudinary is not configured")})
        with pytest.raises(ConfigurationError):
            asyncio.run(make_manager(client).get_galleries([entry("trip")], skip_failed=True))

    def test_entries_from_content_manager(self, tmp_path):
        """Test entries default to the content manager's galleries"""
        gallery_dir = tmp_path / "trip"
        gallery_dir.mkdir()
        (gallery_dir / "index.md").write_text("---\ntitle: Trip\npublished: 2024-05-01\n---\n", encoding="utf-8")
        client = FakeClient(listings={"galleries/trip": ["galleries/trip/a.jpg"]})
        manager = GalleryManager(CONFIG, client, ContentManager(tmp_path))

        galleries = asyncio.run(manager.get_galleries())

        assert [(g.slug, g.image_count) for g in galleries] == [("trip", 1)]

    def test_sorted_galleries_list(self):
        """Test the compact list keeps order and maps empty location to None"""
        entries = [
            entry("a", published=datetime(2020, 1, 1), location="Hue"),
            entry("b", published=datetime(2021, 1, 1), tags=["x"]),
        ]

        items = asyncio.run(make_manager(FakeClient()).get_sorted_galleries_list(entries))

        assert [item.slug for item in items] == ["b", "a"]
        assert items[0].location is None
        assert items[1].to_dict()["data"]["location"] == "Hue"
        assert items[0].to_dict()["data"]["tags"] == ["x"]
