"""Single-keypress reader for the terminal frontend.

Arrow keys and WASD move the cursor, the remaining keys map to game
actions. Works on macOS / Linux (tty+termios) and Windows (msvcrt).
"""

from __future__ import annotations

import os
import sys


# -- low-level character readers -----------------------------------------------


def _getch_unix() -> str:
    import termios
    import tty

    fd = sys.stdin.fileno()
    old = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        ch = sys.stdin.read(1)
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)
    return ch


def _getch_windows() -> str:
    import msvcrt  # type: ignore[import-not-found]

    return msvcrt.getch().decode("utf-8", errors="ignore")


_getch = _getch_windows if os.name == "nt" else _getch_unix


# -- key mapping ---------------------------------------------------------------

_KEY_MAP: dict[str, str] = {
    "w": "up",
    "s": "down",
    "a": "left",
    "d": "right",
    " ": "tap",
    "\r": "tap",
    "\n": "tap",
    "p": "pause",
    "n": "hint",
    "r": "restart",
    "u": "unlock",
    "c": "continue",
    "q": "quit",
    "\x03": "quit",  # Ctrl-C
}

_ARROW_MAP: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
}


def resolve(ch: str) -> str:
    """Map a raw character to its action string."""
    action = _KEY_MAP.get(ch) or _KEY_MAP.get(ch.lower())
    if action:
        return action
    return ch if ch.isprintable() else ""


# -- public API ----------------------------------------------------------------


def get_key() -> str:
    """Block for one keypress and return its action string.

    Possible return values:
        "up", "down", "left", "right"  — cursor movement
        "tap"                          — space / Enter
        "pause", "hint", "restart"     — p / n / r
        "unlock", "continue"           — u / c
        "quit"                         — q / Ctrl-C / Escape
        "<char>"                       — unmapped printable char (digits pick levels)
        ""                             — unrecognised key
    """
    ch = _getch()

    # Arrow keys (Unix escape sequences: ESC [ A/B/C/D)
    if ch == "\x1b":
        if _getch() == "[":
            return _ARROW_MAP.get(_getch(), "")
        return "quit"

    return resolve(ch)


def get_key_timeout(timeout: float) -> str | None:
    """Like :func:`get_key`, but return ``None`` after *timeout* seconds."""
    if os.name == "nt":
        import msvcrt  # type: ignore[import-not-found]
        import time as _time

        end = _time.monotonic() + timeout
        while _time.monotonic() < end:
            if msvcrt.kbhit():
                return get_key()
            _time.sleep(0.02)
        return None

    import select
    import termios
    import tty

    fd = sys.stdin.fileno()
    old = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        ready, _, _ = select.select([fd], [], [], timeout)
        if not ready:
            return None

        # os.read keeps the remaining escape-sequence bytes visible to select().
        ch = os.read(fd, 1).decode("utf-8", errors="ignore")
        if ch != "\x1b":
            return resolve(ch)

        # Arrow keys: ESC [ A/B/C/D; a lone ESC quits.
        r2, _, _ = select.select([fd], [], [], 0.1)
        if not r2:
            return "quit"
        ch2 = os.read(fd, 1).decode("utf-8", errors="ignore")
        if ch2 != "[":
            return "quit"
        r3, _, _ = select.select([fd], [], [], 0.1)
        if not r3:
            return ""
        ch3 = os.read(fd, 1).decode("utf-8", errors="ignore")
        return _ARROW_MAP.get(ch3, "")
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)
