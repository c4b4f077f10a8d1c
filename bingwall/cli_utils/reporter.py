"""
bingwall Reporters

A Reporter is how the pipeline talks to the user. The headless variant only writes to the
console; the dialog variant also pops up a message box for the final outcome of a run, which
is handy when bingwall is started from a scheduled task or a desktop shortcut where there is
no terminal to read.
"""

import sys
import html
import shutil
import subprocess

from rich.markup import escape

from bingwall.cli_utils.console import confirm_success, describe, fail, logger, warn

DIALOG_TITLE = "bingwall"


class Reporter:
    """Console reporter used by the headless 'bingwall' command."""

    def info(self, msg: str):
        describe(escape(msg))

    def warn(self, msg: str):
        warn(escape(msg))

    def success(self, msg: str):
        confirm_success(f":white_check_mark-emoji: {escape(msg)}")

    def error(self, msg: str):
        fail(escape(msg))


ConsoleReporter = Reporter


class DialogReporter(Reporter):
    """
    Reports to the console and additionally shows a modal dialog for success and error
    messages. A dialog that cannot be shown is downgraded to a console warning.
    """

    def success(self, msg: str):
        super().success(msg)
        self._dialog(msg, is_error=False)

    def error(self, msg: str):
        super().error(msg)
        self._dialog(msg, is_error=True)

    def _dialog(self, msg: str, is_error: bool):
        try:
            shown = show_dialog(msg, is_error=is_error)

        except (OSError, AttributeError) as error:
            logger.debug(f"dialog failed: {error}")
            shown = False

        if not shown:
            warn("could not show a dialog on this desktop.")


def show_dialog(msg: str, is_error: bool = False, platform: str = None) -> bool:
    """
    Show a modal message box and block until it is dismissed. Returns False when no
    dialog mechanism is available on platform (default: sys.platform).
    """

    platform = platform or sys.platform

    if platform == "win32":
        import ctypes

        MB_ICONERROR = 0x10
        MB_ICONINFORMATION = 0x40
        ctypes.windll.user32.MessageBoxW(
            0, msg, DIALOG_TITLE, MB_ICONERROR if is_error else MB_ICONINFORMATION
        )
        return True

    if platform == "darwin":
        script = 'display dialog "{msg}" with title "{title}" buttons {{"OK"}} with icon {icon}'.format(
            msg=msg.replace("\\", "\\\\").replace('"', '\\"'),
            title=DIALOG_TITLE,
            icon="stop" if is_error else "note",
        )
        command = ["osascript", "-e", script]

    elif shutil.which("zenity"):
        command = [
            "zenity",
            "--error" if is_error else "--info",
            f"--title={DIALOG_TITLE}",
            f"--text={html.escape(msg)}",
        ]

    else:
        return False

    subprocess.run(
        command, stdin=subprocess.DEVNULL, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL
    )
    return True
