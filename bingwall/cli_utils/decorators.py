"""
bingwall Decorators

catch_errors turns any exception escaping the wrapped function into a formatted failure
message and exit status 1. If the wrapped function is called with a 'reporter' keyword
argument, that reporter surfaces the error so headless and dialog runs fail the same way.
"""

from sys import exit
from functools import wraps

from bingwall.cli_utils.console import logger
from bingwall.cli_utils.reporter import Reporter
from bingwall.errors import (
    BingwallError,
    DownloadVerificationError,
    MalformedResponseError,
    UnhandledError,
)


def catch_errors(func):
    """
    Catch and report errors, then gracefully exit the application with an error code.
    Exceptions that are not BingwallErrors are wrapped in UnhandledError first.
    """

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)

        except BingwallError as error:
            report_failure(kwargs.get("reporter"), error)

        except Exception as error:
            logger.debug("unexpected error", exc_info=True)
            report_failure(kwargs.get("reporter"), UnhandledError(str(error)))

        exit(1)

    return wrapper


def report_failure(reporter: Reporter, error: BingwallError):
    """Report error through reporter (default: console)."""

    reporter = reporter or Reporter()

    # these already carry a complete, user facing sentence
    if isinstance(error, (MalformedResponseError, DownloadVerificationError)):
        reporter.error(str(error))
    else:
        reporter.error(f"An error occurred: {error}")
