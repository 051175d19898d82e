"""Hand the shopping list to the system clipboard and mail client."""

from __future__ import annotations

import shutil
import subprocess
import webbrowser

from .errors import ClipboardUnavailable, MailClientUnavailable

# Clipboard writers in order of preference; each reads the text on stdin
_CLIPBOARD_COMMANDS: list[list[str]] = [
    ["pbcopy"],
    ["wl-copy"],
    ["xclip", "-selection", "clipboard"],
    ["xsel", "--clipboard", "--input"],
    ["clip"],
]


class Clipboard:
    """Write text to the clipboard using whichever platform tool is installed."""

    @staticmethod
    def find_command() -> list[str] | None:
        for cmd in _CLIPBOARD_COMMANDS:
            if shutil.which(cmd[0]) is not None:
                return cmd
        return None

    @staticmethod
    def copy(text: str) -> None:
        """Copy ``text`` to the system clipboard.

        Raises:
            ClipboardUnavailable: If no clipboard tool is installed or the
                tool fails.
        """
        cmd = Clipboard.find_command()
        if cmd is None:
            raise ClipboardUnavailable(
                "No clipboard command found. Install one of:\n"
                "  Linux (X11):     sudo apt install xclip\n"
                "  Linux (Wayland): sudo apt install wl-clipboard"
            )

        try:
            result = subprocess.run(
                cmd,
                input=text,
                capture_output=True,
                text=True,
                timeout=10,
            )
        except subprocess.TimeoutExpired:
            raise ClipboardUnavailable(f"{cmd[0]} timed out.")
        except OSError as e:
            raise ClipboardUnavailable(f"Could not run {cmd[0]}: {e}") from e

        if result.returncode != 0:
            raise ClipboardUnavailable(
                f"Copy failed: {result.stderr.strip() or cmd[0]}"
            )


def open_mail_client(url: str) -> None:
    """Open a ``mailto:`` URL in the default mail composer.

    Raises:
        MailClientUnavailable: If no handler accepted the URL.
    """
    try:
        opened = webbrowser.open(url)
    except webbrowser.Error as e:
        raise MailClientUnavailable(f"Could not open mail client: {e}") from e
    if not opened:
        raise MailClientUnavailable("No mail client is available to open the list.")
