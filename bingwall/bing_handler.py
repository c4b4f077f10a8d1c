"""
Bing Image Archive - Metadata Handler

This module is a wrapper around the public, unauthenticated Bing image archive endpoint
(HPImageArchive.aspx). It builds the request url, performs the single GET that retrieves
picture-of-the-day metadata, and parses the JSON payload into an ImageMetadata.

Downloading the image itself is the job of the image handler; this module only turns
"N days ago" into a url, a date, and a title.

A typical response looks like:

    {
        "images": [
            {"url": "/th?id=OHR.Example_EN-US123_UHD.jpg&rs=1", "startdate": "20240101", "title": "Example", ...}
        ],
        "tooltips": {...}
    }

Only the first entry of "images" is used.
"""

import json
import logging
from dataclasses import dataclass
from urllib.parse import urlencode, urljoin

import requests

from bingwall.config import BingwallConfig, config as default_config
from bingwall.errors import MalformedResponseError, NetworkError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImageMetadata:
    """
    The fields bingwall needs from one archive entry. Missing fields are empty strings.
    """

    relative_url: str = ""
    start_date: str = ""  # YYYYMMDD
    title: str = ""


def archive_url(days_back: int, config: BingwallConfig = None) -> str:
    """
    Build the archive request url for a picture days_back days before today. Only the
    'idx' parameter varies, the rest are fixed by configuration.
    """

    config = config or default_config

    query = urlencode(
        {
            "format": "js",
            "idx": days_back,
            "n": 1,
            "mkt": config.MARKET,
            "uhd": 1,
            "uhdwidth": config.UHD_WIDTH,
            "uhdheight": config.UHD_HEIGHT,
        }
    )

    return f"{config.API_HOST}{config.ARCHIVE_PATH}?{query}"


def image_url(relative_url: str, config: BingwallConfig = None) -> str:
    """
    Resolve the relative url found in metadata against the archive host, e.g.
    '/th?id=X' -> 'https://www.bing.com/th?id=X'.
    """

    config = config or default_config

    return urljoin(config.API_HOST, relative_url)


def fetch_metadata(days_back: int, config: BingwallConfig = None) -> str:
    """
    Perform the metadata GET request and return the raw response body. Raise NetworkError
    on any transport failure or non-2xx status. There is no retry.
    """

    url = archive_url(days_back, config=config)
    logger.debug(f"requesting image metadata from {url}")

    # requests imposes no timeout by default, which is what we want here
    try:
        r = requests.get(url)

    except requests.exceptions.RequestException as error:
        raise NetworkError(f"could not reach the image archive: {error}")

    try:
        r.raise_for_status()
    except requests.exceptions.HTTPError:
        raise NetworkError(
            f"the image archive answered {url} with status code {r.status_code}"
        )

    return r.text


def parse_metadata(text: str) -> ImageMetadata:
    """
    Deserialize the archive response and return metadata for the first image. Unknown
    fields are ignored and missing ones default to "". Raise MalformedResponseError
    when the payload is not JSON or carries no image entries.
    """

    try:
        payload = json.loads(text)

    except (TypeError, json.JSONDecodeError) as error:
        raise MalformedResponseError(f"Bing API response is not valid JSON: {error}")

    images = payload.get("images") if isinstance(payload, dict) else None

    if not isinstance(images, list) or not images:
        raise MalformedResponseError("No image data found in Bing API response.")

    first = images[0]
    if not isinstance(first, dict):
        raise MalformedResponseError("No image data found in Bing API response.")

    def field(name: str) -> str:
        value = first.get(name)
        return "" if value is None else str(value)

    metadata = ImageMetadata(
        relative_url=field("url"),
        start_date=field("startdate"),
        title=field("title"),
    )
    logger.debug(f"parsed image metadata: {metadata}")

    return metadata
