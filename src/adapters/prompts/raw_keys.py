"""Single key presses from the terminal.

`raw_keyboard()` puts stdin in cbreak mode (POSIX) and always restores the
saved attributes on exit, whether the caller returns, quits or raises.
Ctrl-C still raises `KeyboardInterrupt` in cbreak mode.
"""

from __future__ import annotations

import os
import select
import sys
from contextlib import contextmanager
from enum import Enum
from typing import Callable, Iterator, TextIO

from core.errors import TerminalUnavailableError


class Key(Enum):
    UP = "up"
    DOWN = "down"
    TOGGLE = "toggle"
    CONFIRM = "confirm"
    QUIT = "quit"
    OTHER = "other"


_KEYMAP: dict[str, Key] = {
    "\x1b[A": Key.UP,
    "\x1bOA": Key.UP,
    "\xe0H": Key.UP,
    "\x00H": Key.UP,
    "\x1b[B": Key.DOWN,
    "\x1bOB": Key.DOWN,
    "\xe0P": Key.DOWN,
    "\x00P": Key.DOWN,
    " ": Key.TOGGLE,
    "\r": Key.CONFIRM,
    "\n": Key.CONFIRM,
    "q": Key.QUIT,
    "Q": Key.QUIT,
    "\x03": Key.QUIT,
}


_NOT_A_TTY = (
    "The keyboard menu needs an interactive terminal (stdin is not a TTY). "
    "Run avd-runner from a terminal, or use --list to only list the AVDs."
)
_ESCAPE_TIMEOUT = 0.05


def decode_key(data: str) -> Key:
    return _KEYMAP.get(data, Key.OTHER)


def read_posix_key(fd: int) -> str:
    """Read one key from `fd`; only an escape byte pulls in the rest of its sequence."""

    first = os.read(fd, 1)
    if first != b"\x1b":
        return first.decode("utf-8", errors="ignore")

    # A lone Esc has nothing queued behind it.
    ready, _, _ = select.select([fd], [], [], _ESCAPE_TIMEOUT)
    if not ready:
        return "\x1b"
    return (first + os.read(fd, 2)).decode("utf-8", errors="ignore")


@contextmanager
def raw_keyboard(stream: TextIO | None = None) -> Iterator[Callable[[], str]]:
    """Yield a blocking `read_key()` returning one key (escape sequences included).

    Raises `TerminalUnavailableError` when `stream` (stdin by default) is not
    an interactive terminal.
    """

    stream = sys.stdin if stream is None else stream
    if stream is None or not stream.isatty():
        raise TerminalUnavailableError(_NOT_A_TTY)

    if os.name == "nt":
        import msvcrt

        def read_key() -> str:
            ch = msvcrt.getwch()
            if ch in ("\x00", "\xe0"):
                ch += msvcrt.getwch()
            return ch

        yield read_key
        return

    import termios
    import tty

    fd = stream.fileno()
    try:
        old = termios.tcgetattr(fd)
    except termios.error as exc:
        raise TerminalUnavailableError(_NOT_A_TTY) from exc
    try:
        tty.setcbreak(fd)
        yield lambda: read_posix_key(fd)
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)
