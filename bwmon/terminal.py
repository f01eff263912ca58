"""Terminal surface: alternate screen, non-blocking keys, frame drawing."""

from __future__ import annotations

import os
import select
import shutil
import sys
import termios

from bwmon.errors import TerminalInitError

ENTER = "\033[?1049h\033[?25l\033[2J"   # alt screen, hide cursor, clear
LEAVE = "\033[?25h\033[?1049l"


class Terminal:
    """Context manager owning the screen for the duration of the dashboard.

    Input is switched to non-canonical, no-echo mode so single key presses
    arrive without Enter; ISIG stays on so Ctrl+C still raises
    KeyboardInterrupt.
    """

    def __init__(self, stdin=None, stdout=None):
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.fd: int | None = None
        self._old_settings = None

    def __enter__(self) -> "Terminal":
        if not self.stdin.isatty():
            raise TerminalInitError("stdin is not a terminal (use --static for piped output)")
        try:
            self.fd = self.stdin.fileno()
            self._old_settings = termios.tcgetattr(self.fd)
            new_settings = termios.tcgetattr(self.fd)
            new_settings[3] = new_settings[3] & ~(termios.ICANON | termios.ECHO)
            new_settings[6][termios.VMIN] = 0
            new_settings[6][termios.VTIME] = 0
            termios.tcsetattr(self.fd, termios.TCSADRAIN, new_settings)
        except (termios.error, OSError) as e:
            raise TerminalInitError(f"Failed to initialize terminal: {e}") from e
        self.stdout.write(ENTER)
        self.stdout.flush()
        return self

    def __exit__(self, *exc) -> None:
        if self._old_settings is not None and self.fd is not None:
            termios.tcsetattr(self.fd, termios.TCSADRAIN, self._old_settings)
            self._old_settings = None
        self.stdout.write(LEAVE)
        self.stdout.flush()

    def size(self) -> tuple[int, int]:
        cols, rows = shutil.get_terminal_size()
        return cols, rows

    def poll_key(self, timeout: float) -> str | None:
        """Wait up to `timeout` seconds for one key press.

        Escape sequences (arrow keys and the like) come back whole, so a bare
        "\\x1b" means the Esc key itself.
        """
        ready, _, _ = select.select([self.fd], [], [], max(0.0, timeout))
        if not ready:
            return None
        ch = os.read(self.fd, 1)
        if ch == b"\x1b":
            while select.select([self.fd], [], [], 0)[0]:
                more = os.read(self.fd, 16)
                if not more:
                    break
                ch += more
        return ch.decode(errors="ignore") or None

    def draw(self, lines: list[str]) -> None:
        """Repaint in place: cursor home, each line cleared to EOL, clear below."""
        _, rows = self.size()
        body = "\033[K\n".join(lines[:rows])
        self.stdout.write("\033[H" + body + "\033[K\033[J")
        self.stdout.flush()
