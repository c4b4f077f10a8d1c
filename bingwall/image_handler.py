"""
Image Handler

Utilities for naming, downloading, and checking the picture of the day.

Naming: the local filename is derived from the archive metadata as
'{startdate}-{title}.jpg', with the title cleaned so that the name is valid on every
desktop filesystem bingwall supports. The '.jpg' extension is fixed regardless of what
the server actually sends.

Downloading: a single streamed GET writes the image into the download directory,
overwriting any earlier copy with the same name. The file is checked for existence
afterwards before anything tries to use it as a wallpaper.
"""

import re
import logging
from dataclasses import dataclass
from pathlib import Path

import requests
from PIL import Image, UnidentifiedImageError

from bingwall.bing_handler import ImageMetadata, image_url
from bingwall.config import BingwallConfig, config as default_config
from bingwall.errors import DownloadVerificationError, NetworkError

logger = logging.getLogger(__name__)

# characters Windows refuses in file names. this is a superset of what POSIX
# filesystems reject ('/' and NUL), so it is applied on every platform.
INVALID_FILENAME_CHARS = frozenset('"<>|:*?\\/') | frozenset(
    chr(code) for code in range(32)
)

MAX_TITLE_LENGTH = 150
FILE_EXTENSION = ".jpg"
CHUNK_SIZE = 64 * 1024


@dataclass(frozen=True)
class ResolvedImage:
    """Where an archive image comes from and where it will be saved."""

    absolute_url: str
    local_filename: str
    local_path: Path


def sanitize_title(title: str) -> str:
    """
    Turn a picture title into a filename-safe fragment: whitespace becomes '-', characters
    invalid in file names are dropped, and leading/trailing hyphens are trimmed.
    Applying it to its own output returns the same string.

        >>> sanitize_title("A B?C")
        'A-BC'
    """

    title = re.sub(r"\s", "-", title)
    title = "".join(char for char in title if char not in INVALID_FILENAME_CHARS)
    title = title.strip("-")

    # very long titles would exceed filesystem name limits
    return title[:MAX_TITLE_LENGTH].strip("-")


def make_filename(metadata: ImageMetadata) -> str:
    """
    Build '{startdate}-{title}.jpg'. Empty components are left out rather than producing
    a dangling hyphen; if both are empty the file is simply 'wallpaper.jpg'.
    """

    parts = [
        part
        for part in (sanitize_title(metadata.start_date), sanitize_title(metadata.title))
        if part
    ]

    return f"{'-'.join(parts) or 'wallpaper'}{FILE_EXTENSION}"


def resolve_image(metadata: ImageMetadata, config: BingwallConfig = None) -> ResolvedImage:
    """Derive download url and local destination from archive metadata."""

    config = config or default_config

    file_name = make_filename(metadata)

    return ResolvedImage(
        absolute_url=image_url(metadata.relative_url, config=config),
        local_filename=file_name,
        local_path=Path(config.DOWNLOAD_DIR) / file_name,
    )


def download_image(url: str, file_path: Path) -> Path:
    """
    Download the image at url and stream it to file_path, overwriting any existing file.
    The parent directory is created if needed. Returns the absolute destination path.

    Raise NetworkError if the request fails or the server answers with an error status.
    """

    destination_path = Path(file_path).expanduser().resolve()

    if destination_path.is_dir():
        raise DownloadVerificationError(
            f"Destination file {destination_path} is a directory."
        )

    destination_path.parent.mkdir(parents=True, exist_ok=True)

    logger.debug(f"downloading {url} to {destination_path}")

    try:
        r = requests.get(url, stream=True)
    except requests.exceptions.RequestException as error:
        raise NetworkError(f"could not download the image: {error}")

    try:
        try:
            r.raise_for_status()
        except requests.exceptions.HTTPError:
            raise NetworkError(
                f"Download error: something went wrong trying to access {url} (status code {r.status_code})"
            )

        # a broken connection mid-body surfaces as a RequestException from iter_content
        try:
            with open(destination_path, "wb") as file:
                for chunk in r.iter_content(chunk_size=CHUNK_SIZE):
                    if chunk:
                        file.write(chunk)
        except requests.exceptions.RequestException as error:
            raise NetworkError(f"download of {url} was interrupted: {error}")

    finally:
        r.close()

    return destination_path


def verify_download(file_path: Path) -> Path:
    """
    Make sure the downloaded file is actually on disk. Raise DownloadVerificationError
    otherwise.
    """

    file_path = Path(file_path)

    if not file_path.is_file():
        raise DownloadVerificationError("Failed to download wallpaper.")

    return file_path


def sniff_format(file_path: Path):
    """
    Return the image format Pillow detects for file_path (e.g. 'JPEG'), or None when the
    file is not a recognizable image. Pillow only reads the header here.
    """

    try:
        with Image.open(file_path) as image:
            return image.format

    except (UnidentifiedImageError, FileNotFoundError):
        return None
