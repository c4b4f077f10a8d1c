"""
bingwall Errors

Every failure in the wallpaper pipeline is terminal. The exceptions here let the
command line entry point tell the user what went wrong before exiting with status 1.
"""


class BingwallError(Exception):
    """Base class for all errors raised by bingwall."""

    pass


class NetworkError(BingwallError):
    """Raised when an HTTP request to the image archive or image host fails."""

    pass


class MalformedResponseError(BingwallError):
    """Raised when the image archive response contains no usable image data."""

    pass


class DownloadVerificationError(BingwallError):
    """Raised when the downloaded image cannot be found on disk after a download."""

    pass


class UnhandledError(BingwallError):
    """Wraps any other exception raised while running the pipeline."""

    pass
