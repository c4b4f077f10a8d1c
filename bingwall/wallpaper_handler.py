"""
Desktop Wallpaper Handler

This module applies an image file as the desktop background. Each supported desktop has a
WallpaperSetter implementation and get_wallpaper_setter() picks one for the running platform.

- Windows: user32 SystemParametersInfoW with SPI_SETDESKWALLPAPER. The flags ask Windows to
  write the change to the user profile and to broadcast it to running applications.
  https://learn.microsoft.com/en-us/windows/win32/api/winuser/nf-winuser-systemparametersinfow
- Gnome: the gsettings CLI, updating the picture-uri keys of org.gnome.desktop.background.
  gsettings persists to dconf and running shells pick the change up immediately.
- macOS: osascript asking System Events to set the picture of every desktop.

apply() returns False when the desktop reports that it refused the change. Errors that
prevent the call from being made at all (missing library or binary) propagate.
"""

import sys
import logging
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path

from bingwall.errors import UnhandledError

logger = logging.getLogger(__name__)


class WallpaperSetter(ABC):
    """Capability to set the desktop background to a local image file."""

    name = "wallpaper"

    @abstractmethod
    def apply(self, img_path: Path) -> bool:
        """Set img_path as the desktop background. Return True if the desktop accepted it."""

        raise NotImplementedError


class WindowsWallpaperSetter(WallpaperSetter):

    name = "windows"

    SPI_SETDESKWALLPAPER = 0x0014
    SPIF_UPDATEINIFILE = 0x01
    SPIF_SENDWININICHANGE = 0x02

    def apply(self, img_path: Path) -> bool:
        # imported here so the module stays importable on other platforms
        import ctypes

        wallpaper_location = str(Path(img_path).absolute())
        logger.debug(f"SystemParametersInfoW(SPI_SETDESKWALLPAPER, {wallpaper_location})")

        result = ctypes.windll.user32.SystemParametersInfoW(
            self.SPI_SETDESKWALLPAPER,
            0,
            wallpaper_location,
            self.SPIF_UPDATEINIFILE | self.SPIF_SENDWININICHANGE,
        )

        return bool(result)


class GnomeWallpaperSetter(WallpaperSetter):

    name = "gnome"

    SCHEMA = "org.gnome.desktop.background"
    # newer Gnome releases read picture-uri-dark when the dark style is active
    KEYS = ("picture-uri", "picture-uri-dark")

    def apply(self, img_path: Path) -> bool:
        uri = Path(img_path).absolute().as_uri()

        # picture-uri-dark does not exist before Gnome 42, so only the first key decides success
        results = [self._gsettings_set(key, uri) for key in self.KEYS]

        return results[0]

    def _gsettings_set(self, key: str, value: str) -> bool:
        command = ["gsettings", "set", self.SCHEMA, key, value]
        logger.debug(" ".join(command))

        result = subprocess.run(
            command,
            text=True,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )

        if result.returncode != 0:
            logger.debug(f"gsettings exited with {result.returncode}: {result.stderr.strip()}")

        return result.returncode == 0


class MacWallpaperSetter(WallpaperSetter):

    name = "macos"

    SCRIPT = 'tell application "System Events" to tell every desktop to set picture to "{path}"'

    def apply(self, img_path: Path) -> bool:
        path = str(Path(img_path).absolute()).replace("\\", "\\\\").replace('"', '\\"')
        command = ["osascript", "-e", self.SCRIPT.format(path=path)]
        logger.debug(" ".join(command))

        result = subprocess.run(
            command,
            text=True,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )

        if result.returncode != 0:
            logger.debug(f"osascript exited with {result.returncode}: {result.stderr.strip()}")

        return result.returncode == 0


def get_wallpaper_setter(platform: str = None) -> WallpaperSetter:
    """
    Pick the WallpaperSetter for platform (default: sys.platform). Raise UnhandledError
    for platforms bingwall cannot set a wallpaper on.
    """

    platform = platform or sys.platform

    if platform == "win32":
        return WindowsWallpaperSetter()

    if platform == "darwin":
        return MacWallpaperSetter()

    if platform.startswith("linux"):
        return GnomeWallpaperSetter()

    raise UnhandledError(f"setting the wallpaper is not supported on '{platform}'.")
