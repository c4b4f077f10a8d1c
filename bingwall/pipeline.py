"""
bingwall Pipeline

The whole program is one linear sequence of stages:

    START -> ARGS_PARSED -> METADATA_FETCHED -> METADATA_PARSED -> IMAGE_DOWNLOADED
          -> WALLPAPER_SET -> SUCCESS

Any stage that raises moves the pipeline straight to FAILED and the error propagates to the
caller. Nothing is retried and there is no partial success. How progress and problems are
shown to the user is up to the Reporter passed in, which is the only difference between the
headless and dialog commands.
"""

import logging
from enum import Enum
from pathlib import Path

from bingwall import bing_handler, image_handler, wallpaper_handler
from bingwall.cli_utils.reporter import Reporter
from bingwall.cli_utils.utils import clamp_days_back
from bingwall.config import BingwallConfig, config as default_config
from bingwall.errors import BingwallError, UnhandledError

logger = logging.getLogger(__name__)


class Stage(Enum):
    START = "start"
    ARGS_PARSED = "args parsed"
    METADATA_FETCHED = "metadata fetched"
    METADATA_PARSED = "metadata parsed"
    IMAGE_DOWNLOADED = "image downloaded"
    WALLPAPER_SET = "wallpaper set"
    SUCCESS = "success"
    FAILED = "failed"


class WallpaperPipeline:
    """
    Fetch the archive metadata, download the picture, and set it as wallpaper.

    'stage' holds the last stage reached; after a failure it is FAILED and 'failed_after'
    holds the last stage that completed.
    """

    def __init__(
        self,
        reporter: Reporter = None,
        setter: wallpaper_handler.WallpaperSetter = None,
        config: BingwallConfig = None,
    ):
        self.reporter = reporter or Reporter()
        self.setter = setter
        self.config = config or default_config
        self.stage = Stage.START
        self.failed_after = None

    def _advance(self, stage: Stage):
        logger.debug(f"pipeline: {self.stage.value} -> {stage.value}")
        self.stage = stage

    def run(self, days_back: int) -> Path:
        """
        Run every stage for the picture days_back days ago and return the path of the
        image that was set as wallpaper.
        """

        try:
            return self._run(days_back)

        except BingwallError:
            self._fail()
            raise

        except Exception as error:
            self._fail()
            raise UnhandledError(str(error)) from error

    def _fail(self):
        self.failed_after = self.stage
        self._advance(Stage.FAILED)

    def _run(self, days_back: int) -> Path:
        days_back = clamp_days_back(days_back, upper=self.config.MAX_DAYS_BACK)
        self._advance(Stage.ARGS_PARSED)

        self.reporter.info(
            f"Changing wallpaper to Bing's Picture from {days_back} day(s) ago..."
        )

        text = bing_handler.fetch_metadata(days_back, config=self.config)
        self._advance(Stage.METADATA_FETCHED)

        metadata = bing_handler.parse_metadata(text)
        self._advance(Stage.METADATA_PARSED)

        resolved = image_handler.resolve_image(metadata, config=self.config)
        file_path = image_handler.download_image(
            resolved.absolute_url, file_path=resolved.local_path
        )
        file_path = image_handler.verify_download(file_path)
        self._advance(Stage.IMAGE_DOWNLOADED)

        image_format = image_handler.sniff_format(file_path)
        # Pillow reports multi-picture JPEGs as MPO
        if image_format not in ("JPEG", "MPO"):
            self.reporter.warn(
                f"'{file_path.name}' does not look like a JPEG image (detected: {image_format or 'unknown'})."
            )

        setter = self.setter or wallpaper_handler.get_wallpaper_setter()
        if not setter.apply(file_path):
            self.reporter.warn(
                f"the {setter.name} desktop did not confirm the wallpaper change."
            )
        self._advance(Stage.WALLPAPER_SET)

        self.reporter.success("Wallpaper set successfully!")
        self._advance(Stage.SUCCESS)

        return file_path


def run(
    days_back: int,
    reporter: Reporter = None,
    setter: wallpaper_handler.WallpaperSetter = None,
    config: BingwallConfig = None,
) -> Path:
    """Convenience wrapper: run a fresh WallpaperPipeline once."""

    return WallpaperPipeline(reporter=reporter, setter=setter, config=config).run(days_back)
