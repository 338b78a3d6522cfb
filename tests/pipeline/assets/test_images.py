"""Tests for image attachment downloads."""

import asyncio
import logging

import aiohttp
import pytest

from src.exceptions import ExternalServiceError
from src.pipeline.assets.images import (
    ImageDownloadStats,
    attachment_extension,
    download_all_images,
    download_image,
    slugify,
    unique_filename,
)


class FakeResponse:
    def __init__(self, status: int, body: bytes = b""):
        self.status = status
        self._body = body

    async def read(self):
        return self._body

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False


class RoutingSession:
    """Maps URLs to responses or exceptions; unknown URLs answer 404."""

    def __init__(self, routes):
        self.routes = routes
        self.requested = []

    def get(self, url, params=None, headers=None, timeout=None):
        self.requested.append(url)
        item = self.routes.get(url, FakeResponse(404))
        if isinstance(item, BaseException):
            raise item
        return item


@pytest.mark.parametrize(
    "name,expected",
    [
        ("Acme Widgets, Inc.", "acme-widgets-inc"),
        ("  Jon Davis ", "jon-davis"),
        ("Café & Co", "caf-co"),
        ("", "untitled"),
        (None, "untitled"),
        ("!!!", "untitled"),
    ],
)
def test_slugify(name, expected):
    assert slugify(name) == expected


@pytest.mark.parametrize(
    "mime,expected",
    [
        ("image/png", "png"),
        ("image/JPEG", "jpeg"),
        ("image/svg+xml", "svg"),
        (None, "jpeg"),
        ("", "jpeg"),
        ("image/", "jpg"),
        ("garbage", "jpg"),
    ],
)
def test_attachment_extension(mime, expected):
    assert attachment_extension(mime) == expected


def test_stats_add():
    total = ImageDownloadStats(1, 2, 3) + ImageDownloadStats(4, 5, 6)
    assert total == ImageDownloadStats(5, 7, 9)


@pytest.mark.asyncio
async def test_download_image_writes_bytes(tmp_path):
    session = RoutingSession({"https://cdn/x.png": FakeResponse(200, b"PNGDATA")})
    dest = tmp_path / "x.png"
    await download_image(session, "https://cdn/x.png", dest)
    assert dest.read_bytes() == b"PNGDATA"


@pytest.mark.asyncio
async def test_download_image_non_200_raises(tmp_path):
    session = RoutingSession({"https://cdn/x.png": FakeResponse(403)})
    with pytest.raises(ExternalServiceError) as excinfo:
        await download_image(session, "https://cdn/x.png", tmp_path / "x.png")
    assert excinfo.value.message == "Failed to download image: 403"
    assert not (tmp_path / "x.png").exists()


@pytest.mark.asyncio
async def test_download_all_images_sets_local_path_on_success(tmp_path):
    records = [
        {
            "Name": "Acme Widgets",
            "Logo": [{"url": "https://cdn/acme", "type": "image/png"}],
        },
        {"Name": "No Logo Co"},
        {"Name": "Empty Logo", "Logo": []},
    ]
    session = RoutingSession({"https://cdn/acme": FakeResponse(200, b"logo")})

    stats = await download_all_images(session, records, "Logo", "logos", tmp_path)

    assert stats == ImageDownloadStats(downloaded=1, failed=0, skipped=2)
    attachment = records[0]["Logo"][0]
    assert attachment["local_path"] == "images/logos/acme-widgets.png"
    assert attachment["url"] == "https://cdn/acme"
    assert (tmp_path / "images" / "logos" / "acme-widgets.png").read_bytes() == b"logo"
    assert session.requested == ["https://cdn/acme"]


@pytest.mark.asyncio
async def test_download_all_images_only_first_attachment(tmp_path):
    records = [
        {
            "Name": "Pat",
            "Image": [
                {"url": "https://cdn/one", "type": "image/jpeg"},
                {"url": "https://cdn/two", "type": "image/jpeg"},
            ],
        }
    ]
    session = RoutingSession({"https://cdn/one": FakeResponse(200, b"1")})
    stats = await download_all_images(session, records, "Image", "people", tmp_path)
    assert stats.downloaded == 1
    assert session.requested == ["https://cdn/one"]
    assert "local_path" not in records[0]["Image"][1]


@pytest.mark.asyncio
async def test_failed_download_keeps_remote_url_and_logs_warning(tmp_path, caplog):
    records = [
        {"Name": "Broken", "Logo": [{"url": "https://cdn/broken", "type": "image/png"}]},
        {"Name": "Slow", "Logo": [{"url": "https://cdn/slow"}]},
        {"Name": "Refused", "Logo": [{"url": "https://cdn/refused"}]},
        {"Name": "Fine", "Logo": [{"url": "https://cdn/fine", "type": "image/png"}]},
    ]
    session = RoutingSession(
        {
            "https://cdn/broken": FakeResponse(500),
            "https://cdn/slow": asyncio.TimeoutError(),
            "https://cdn/refused": aiohttp.ClientConnectionError("refused"),
            "https://cdn/fine": FakeResponse(200, b"ok"),
        }
    )

    with caplog.at_level(logging.WARNING, logger="src.pipeline.assets.images"):
        stats = await download_all_images(
            session, records, "Logo", "logos", tmp_path, semaphore=asyncio.Semaphore(2)
        )

    assert stats == ImageDownloadStats(downloaded=1, failed=3, skipped=0)
    for record in records[:3]:
        assert "local_path" not in record["Logo"][0]
    assert records[3]["Logo"][0]["local_path"] == "images/logos/fine.png"
    assert 'Could not download image for "Broken"' in caplog.text
    assert 'Could not download image for "Slow"' in caplog.text


@pytest.mark.asyncio
async def test_attachment_without_url_counts_as_failed(tmp_path):
    records = [{"Name": "Odd", "Logo": [{"type": "image/png"}]}]
    stats = await download_all_images(RoutingSession({}), records, "Logo", "logos", tmp_path)
    assert stats.failed == 1
    assert "local_path" not in records[0]["Logo"][0]


@pytest.mark.asyncio
async def test_image_directory_created_even_without_records(tmp_path):
    stats = await download_all_images(RoutingSession({}), [], "Image", "people", tmp_path)
    assert stats == ImageDownloadStats()
    assert (tmp_path / "images" / "people").is_dir()


def test_unique_filename_suffixes_collisions():
    used = {"acme-2.png"}
    names = [unique_filename("acme", "png", used) for _ in range(3)]
    assert names == ["acme.png", "acme-3.png", "acme-4.png"]
    assert unique_filename("acme", "jpg", used) == "acme.jpg"


@pytest.mark.asyncio
async def test_records_sharing_a_slug_get_distinct_files(tmp_path):
    records = [
        {"Name": "李明", "Image": [{"url": "https://cdn/li", "type": "image/png"}]},
        {"Name": "王芳", "Image": [{"url": "https://cdn/wang", "type": "image/png"}]},
        {"Name": "Pat Lee", "Image": [{"url": "https://cdn/pat1", "type": "image/png"}]},
        {"Name": "Pat Lee!", "Image": [{"url": "https://cdn/pat2", "type": "image/png"}]},
    ]
    session = RoutingSession(
        {
            "https://cdn/li": FakeResponse(200, b"li"),
            "https://cdn/wang": FakeResponse(200, b"wang"),
            "https://cdn/pat1": FakeResponse(200, b"pat1"),
            "https://cdn/pat2": FakeResponse(200, b"pat2"),
        }
    )

    stats = await download_all_images(session, records, "Image", "people", tmp_path)

    assert stats.downloaded == 4
    paths = [r["Image"][0]["local_path"] for r in records]
    assert paths == [
        "images/people/untitled.png",
        "images/people/untitled-2.png",
        "images/people/pat-lee.png",
        "images/people/pat-lee-2.png",
    ]
    for record, body in zip(records, [b"li", b"wang", b"pat1", b"pat2"]):
        assert (tmp_path / record["Image"][0]["local_path"]).read_bytes() == body
