"""
bingwall

Set the Bing picture of the day as your desktop wallpaper.

This module defines the entry points to the bingwall CLI. Both commands share one click
command and one pipeline; they differ only in the Reporter placed on the click context:

    bingwall          report to the terminal only
    bingwall-dialog   also show a message box with the outcome (for shortcuts/scheduled tasks)

The single optional argument is how many days back to go (0-7). Anything that is not an
integer means today. Arguments are taken unprocessed so that values like '-3' are clamped
instead of being rejected as unknown options.
"""

import click

from bingwall import pipeline
from bingwall.cli_utils.console import setup_logging
from bingwall.cli_utils.decorators import catch_errors
from bingwall.cli_utils.reporter import ConsoleReporter, DialogReporter, Reporter
from bingwall.cli_utils.utils import parse_days_back
from bingwall.config import config


@click.command(
    name="bingwall",
    context_settings={"ignore_unknown_options": True},
)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_obj
def cli(obj, args):
    """
    Set Bing's picture from DAYS day(s) ago (default 0, at most 7) as your desktop wallpaper.

    \b
        $ bingwall        today's picture
        $ bingwall 3      the picture from three days ago
    """

    reporter = obj if isinstance(obj, Reporter) else Reporter()
    change_wallpaper(args, reporter=reporter)


@catch_errors
def change_wallpaper(args, reporter: Reporter = None):
    """Parse the days-back argument and run the wallpaper pipeline."""

    days_back = parse_days_back(args, upper=config.MAX_DAYS_BACK)
    return pipeline.run(days_back, reporter=reporter, config=config)


def main():
    setup_logging()
    cli(obj=ConsoleReporter())


def main_dialog():
    setup_logging()
    cli(obj=DialogReporter(), prog_name="bingwall-dialog")


if __name__ == "__main__":
    main()
