"""
conftest.py

Test configuration for bingwall tests.

Defines Pytest fixtures for supplying test data to tests across the entire test suite.
Fixtures used within only a single module are defined directly in that module. No test
touches the network or the real desktop: requests.get is patched in every test that
would make a request, and wallpaper setters are replaced with RecordingSetter.
"""

import io
import json
import unittest.mock
from pathlib import Path

import pytest
from PIL import Image

from bingwall.config import BingwallConfig
from bingwall.cli_utils.reporter import Reporter
from bingwall.wallpaper_handler import WallpaperSetter

ARCHIVE_PATH = BingwallConfig.ARCHIVE_PATH


class RecordingReporter(Reporter):
    """Reporter that keeps every message instead of printing it."""

    def __init__(self):
        self.messages = []

    def info(self, msg):
        self.messages.append(("info", msg))

    def warn(self, msg):
        self.messages.append(("warn", msg))

    def success(self, msg):
        self.messages.append(("success", msg))

    def error(self, msg):
        self.messages.append(("error", msg))

    def of(self, kind):
        return [msg for level, msg in self.messages if level == kind]


class RecordingSetter(WallpaperSetter):
    """WallpaperSetter that records the paths it was asked to apply."""

    name = "test"

    def __init__(self, result: bool = True):
        self.result = result
        self.applied = []

    def apply(self, img_path: Path) -> bool:
        self.applied.append(Path(img_path))
        return self.result


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def setter() -> RecordingSetter:
    return RecordingSetter()


@pytest.fixture
def test_config(tmp_path) -> BingwallConfig:
    """Default configuration, but downloads land in the pytest tmp_path."""

    return BingwallConfig(DOWNLOAD_DIR=tmp_path)


@pytest.fixture(scope="session")
def jpeg_bytes() -> bytes:
    """A tiny but valid JPEG image generated with Pillow."""

    buffer = io.BytesIO()
    Image.new("RGB", (16, 9), color=(30, 90, 160)).save(buffer, format="JPEG")
    return buffer.getvalue()


@pytest.fixture
def archive_entry() -> dict:
    return {
        "url": "/th?id=X",
        "startdate": "20240101",
        "title": "A B?C",
        "copyright": "ignored (c) somebody",
    }


@pytest.fixture
def archive_response(archive_entry) -> str:
    """JSON body of an image archive response with a single image."""

    return json.dumps({"images": [archive_entry], "tooltips": {"loading": "..."}})


@pytest.fixture
def fake_get(archive_response, jpeg_bytes):
    """
    Build a side effect for requests.get that serves the archive response for metadata
    requests and jpeg_bytes for everything else. Both handlers share the one requests
    module, so a single patch of requests.get sees every request a run makes.
    """

    def factory(metadata=archive_response, image=jpeg_bytes):
        def get(url, *args, **kwargs):
            response = unittest.mock.MagicMock()
            response.status_code = 200
            response.url = url
            if ARCHIVE_PATH in url:
                response.text = metadata
            else:
                response.iter_content.return_value = iter([image])
            return response

        return get

    return factory


def metadata_urls(mock_get) -> list:
    """Urls of the archive metadata requests recorded by a patched requests.get."""

    return [call.args[0] for call in mock_get.call_args_list if ARCHIVE_PATH in call.args[0]]


def image_urls(mock_get) -> list:
    """Urls of every other request recorded by a patched requests.get."""

    return [call.args[0] for call in mock_get.call_args_list if ARCHIVE_PATH not in call.args[0]]
