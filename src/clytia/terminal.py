"""Terminal adapter: rich for output, readchar for keys."""

import logging
import sys
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import IO, Any, Protocol

import readchar
from rich.console import Console
from rich.control import Control, ControlType

from clytia.errors import Cancelled, TerminalError

if sys.platform == "win32":
    _IO_ERRORS: tuple[type[Exception], ...] = (OSError,)
else:
    import termios

    _IO_ERRORS = (OSError, termios.error)

logger = logging.getLogger("clytia.terminal")

DEFAULT_TERMINAL_WIDTH = 80
DEFAULT_TERMINAL_HEIGHT = 24

CLEAR_LINE = Control(ControlType.CARRIAGE_RETURN, (ControlType.ERASE_IN_LINE, 2))


class LineOwner(Protocol):
    """Something that keeps a live status line at the bottom of the output."""

    def clear(self) -> None:
        """Erase the status line(s), leaving the cursor at column 0."""
        ...

    def redraw(self) -> None:
        """Draw the status line(s) again after host output."""
        ...


class _LineProxy:
    """Stands in for sys.stdout, printing complete lines through a Terminal.

    rich consoles follow ``rich_proxied_file`` back to the real stream, so the
    terminal's own writes never loop through the proxy.
    """

    def __init__(self, terminal: "Terminal", original: IO[str]):
        self._terminal = terminal
        self._original = original
        self._buffer: list[str] = []

    @property
    def rich_proxied_file(self) -> IO[str]:
        return self._original

    def __getattr__(self, name: str) -> Any:
        return getattr(self._original, name)

    def write(self, text: str) -> int:
        with self._terminal.lock:
            self._buffer.append(text)
            *lines, tail = "".join(self._buffer).split("\n")
            self._buffer = [tail] if tail else []
            for line in lines:
                self._terminal.print(line)
        return len(text)

    def flush(self) -> None:
        with self._terminal.lock:
            if self._buffer:
                self._terminal.print("".join(self._buffer))
                self._buffer = []


class Terminal:
    """Shared terminal handle.

    All writes go through ``lock`` so a background renderer and the prompt
    code never interleave escape sequences. Key and line readers are
    injectable for tests.
    """

    def __init__(
        self,
        console: Console | None = None,
        read_key: Callable[[], str] | None = None,
        read_line: Callable[[], str] | None = None,
    ):
        self.console = console or Console(highlight=False)
        self._read_key = read_key or readchar.readkey
        self._read_line = read_line or self._input
        self.lock = threading.RLock()
        self._line_owner: LineOwner | None = None

    @property
    def width(self) -> int:
        return self.console.width or DEFAULT_TERMINAL_WIDTH

    @property
    def height(self) -> int:
        return self.console.height or DEFAULT_TERMINAL_HEIGHT

    def _input(self) -> str:
        return self.console.input()

    @contextmanager
    def _io_guard(self, what: str) -> Iterator[None]:
        try:
            yield
        except _IO_ERRORS as e:
            raise TerminalError(f"could not {what} terminal: {e}") from e

    # --- input ---

    def read_key(self) -> str:
        """Block until a key arrives. Ctrl+C raises Cancelled."""
        try:
            with self._io_guard("read from"):
                return self._read_key()
        except KeyboardInterrupt:
            logger.debug("key read interrupted")
            raise Cancelled() from None

    def read_line(self) -> str:
        """Read one line in cooked mode. Ctrl+C or Ctrl+D raise Cancelled."""
        try:
            with self._io_guard("read from"):
                return self._read_line()
        except (KeyboardInterrupt, EOFError):
            logger.debug("line read interrupted")
            self.newline()
            raise Cancelled() from None

    # --- output ---

    def write(self, *objects: Any, style: str | None = None) -> None:
        """Write without a trailing newline."""
        with self.lock, self._io_guard("write to"):
            self.console.print(*objects, style=style, end="", markup=False, soft_wrap=True)

    def newline(self) -> None:
        with self.lock, self._io_guard("write to"):
            self.console.line()

    def print(self, *objects: Any, style: str | None = None) -> None:
        """Print a full line, keeping any claimed status line below it."""
        with self.lock, self._io_guard("write to"):
            owner = self._line_owner
            if owner is not None:
                owner.clear()
            self.console.print(*objects, style=style, markup=False, soft_wrap=True)
            if owner is not None:
                owner.redraw()

    def clear_line(self) -> None:
        with self.lock, self._io_guard("write to"):
            self.console.control(CLEAR_LINE)

    def cursor_up(self, count: int = 1) -> None:
        if count <= 0:
            return
        with self.lock, self._io_guard("write to"):
            self.console.control(Control((ControlType.CURSOR_UP, count)))

    def flush(self) -> None:
        with self.lock, self._io_guard("write to"):
            self.console.file.flush()

    # --- status line ownership ---

    def claim_line(self, owner: LineOwner) -> None:
        with self.lock:
            if self._line_owner is not None and self._line_owner is not owner:
                logger.warning("status line already claimed, replacing previous owner")
            self._line_owner = owner

    def release_line(self, owner: LineOwner) -> None:
        with self.lock:
            if self._line_owner is owner:
                self._line_owner = None

    def set_cursor_visible(self, visible: bool) -> None:
        with self.lock, self._io_guard("write to"):
            self.console.show_cursor(visible)

    @contextmanager
    def session(self) -> Iterator["Terminal"]:
        """Hide the cursor for an interactive prompt.

        The cursor is shown again on every exit path. readchar switches to
        raw mode per key read and restores cooked mode before returning.
        """
        self.set_cursor_visible(False)
        try:
            yield self
        finally:
            self.set_cursor_visible(True)

    @contextmanager
    def redirect_stdout(self) -> Iterator[None]:
        """Route ``print()`` from the host program through ``print``.

        Used while a status line is live so host output lands above it.
        """
        original = sys.stdout
        proxy = _LineProxy(self, original)
        sys.stdout = proxy
        try:
            yield
        finally:
            proxy.flush()
            if sys.stdout is proxy:
                sys.stdout = original
