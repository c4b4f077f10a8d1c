"""
bingwall Configuration Management

Settings for the archive request and the download location. Defaults match the public
Bing image archive (en-US market, 4K UHD images) and the system temp directory.

bingwall keeps no configuration file. Any value can be overridden for a single run
through environment variables:

    BINGWALL_MARKET         market code passed as 'mkt' (default: en-US)
    BINGWALL_UHD_WIDTH      requested image width (default: 3840)
    BINGWALL_UHD_HEIGHT     requested image height (default: 2160)
    BINGWALL_DOWNLOAD_DIR   directory the image is written to (default: system temp dir)

Raise a BingwallConfigError for any issues that arise in processing these values.
"""

import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

from bingwall.cli_utils.console import warn


class BingwallConfigError(Exception):
    """Raise when an issue occurs with handling bingwall configuration."""

    pass


@dataclass
class BingwallConfig:
    """
    Dataclass to represent configuration variables for bingwall. Application code references
    these identifiers instead of hardcoding hosts, query parameters, or filesystem paths.
    """

    API_HOST: str = "https://www.bing.com"
    ARCHIVE_PATH: str = "/HPImageArchive.aspx"
    MARKET: str = "en-US"
    UHD_WIDTH: int = 3840
    UHD_HEIGHT: int = 2160
    MAX_DAYS_BACK: int = 7
    DOWNLOAD_DIR: Path = field(default_factory=lambda: Path(tempfile.gettempdir()))

    def __post_init__(self):
        """
        Values read from the environment arrive as strings, coerce them to the types
        the rest of the application expects.
        """

        self.DOWNLOAD_DIR = Path(self.DOWNLOAD_DIR).expanduser()

        try:
            self.UHD_WIDTH = int(self.UHD_WIDTH)
            self.UHD_HEIGHT = int(self.UHD_HEIGHT)
        except (TypeError, ValueError) as error:
            raise BingwallConfigError(f"Image dimensions must be integers: {error}")

        if self.UHD_WIDTH <= 0 or self.UHD_HEIGHT <= 0:
            raise BingwallConfigError(
                f"Image dimensions must be positive, got {self.UHD_WIDTH}x{self.UHD_HEIGHT}."
            )

        if not self.MARKET:
            raise BingwallConfigError("Market code must not be empty.")


# environment variable -> BingwallConfig field
ENVIRONMENT_OVERRIDES = {
    "BINGWALL_MARKET": "MARKET",
    "BINGWALL_UHD_WIDTH": "UHD_WIDTH",
    "BINGWALL_UHD_HEIGHT": "UHD_HEIGHT",
    "BINGWALL_DOWNLOAD_DIR": "DOWNLOAD_DIR",
}


def load_config(environ=None) -> BingwallConfig:
    """
    Build a BingwallConfig from defaults plus any overrides found in environ
    (default: os.environ). Raise BingwallConfigError for invalid values.
    """

    if environ is None:
        environ = os.environ

    overrides = {
        name: environ[variable]
        for variable, name in ENVIRONMENT_OVERRIDES.items()
        if environ.get(variable)
    }

    return BingwallConfig(**overrides)


def init() -> BingwallConfig:
    """initialize bingwall configuration, falling back to defaults on bad overrides"""

    try:
        return load_config()

    except BingwallConfigError as error:
        warn(f"ignoring environment overrides: {error}")
        return BingwallConfig()


config = init()
