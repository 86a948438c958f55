"""Background animations: the renderer thread and the braille spinner."""

import logging
import threading
from collections.abc import Callable, Sequence
from contextlib import ExitStack
from types import TracebackType
from typing import Any

from rich.text import Text

from clytia.config import Styles
from clytia.terminal import Terminal

logger = logging.getLogger("clytia.spinner")

SPINNER_SYMBOLS = ("⠹", "⢸", "⣰", "⣤", "⣆", "⡇", "⠏", "⠛")
SUCCESS_MARK = "✔"
FAILURE_MARK = "❌"
DEFAULT_TICK_INTERVAL = 0.05


class BackgroundRenderer:
    """Redraws a status line on a daemon thread until stopped.

    Every frame is drawn while holding ``terminal.lock`` and only after
    checking the stop flag under that lock. ``redraw()`` does nothing once
    the flag is set, so after ``stop()`` is called no further frame reaches
    the terminal. ``stop()`` joins the thread before returning.

    Subclasses implement ``_draw``, ``clear`` and ``finish``.
    """

    thread_name = "clytia-renderer"

    def __init__(
        self,
        terminal: Terminal,
        interval: float = DEFAULT_TICK_INTERVAL,
        styles: Styles | None = None,
        redirect_stdout: bool = True,
    ):
        self.terminal = terminal
        self.interval = interval
        self.styles = styles or Styles()
        self.redirect_stdout = redirect_stdout
        self._exit_stack = ExitStack()
        self.frame = 0
        self.render_count = 0
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._error: Exception | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and not self._stop_event.is_set()

    @property
    def thread(self) -> threading.Thread | None:
        return self._thread

    def start(self) -> None:
        if self._thread is not None:
            return
        # Undone in reverse order by stop(): stdout, cursor, status line
        self.terminal.claim_line(self)
        self._exit_stack.callback(self.terminal.release_line, self)
        self.terminal.set_cursor_visible(False)
        self._exit_stack.callback(self.terminal.set_cursor_visible, True)
        if self.redirect_stdout:
            self._exit_stack.enter_context(self.terminal.redirect_stdout())
        self._thread = threading.Thread(target=self._run, name=self.thread_name, daemon=True)
        self._thread.start()
        logger.debug("%s started (interval=%.3fs)", self.thread_name, self.interval)

    def _run(self) -> None:
        try:
            while True:
                with self.terminal.lock:
                    if self._stop_event.is_set():
                        return
                    self.redraw()
                    self.terminal.flush()
                self.frame += 1
                if self._stop_event.wait(self.interval):
                    return
        except Exception as e:
            # Re-raised from stop() on the caller's thread
            self._error = e

    def redraw(self) -> None:
        if self._stop_event.is_set():
            return
        self._draw()
        self.render_count += 1

    def _draw(self) -> None:
        raise NotImplementedError

    def clear(self) -> None:
        raise NotImplementedError

    def finish(self, success: bool | None) -> None:
        raise NotImplementedError

    def stop(self, success: bool | None = None) -> None:
        """Stop animating, wait for the thread, then write the final line.

        Args:
            success: True writes a success line, False a failure line,
                None just clears the status line.
        """
        with self.terminal.lock:
            already_stopped = self._stop_event.is_set()
            self._stop_event.set()
        if already_stopped:
            return

        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join()

        with self.terminal.lock:
            try:
                self.clear()
                # Host output left in the stdout proxy lands on the cleared line
                self._exit_stack.close()
                self.finish(success)
            finally:
                self._exit_stack.close()
                self.terminal.flush()
        logger.debug(
            "%s stopped after %d frames (success=%s)",
            self.thread_name,
            self.render_count,
            success,
        )

        if self._error is not None:
            error, self._error = self._error, None
            raise error

    def __enter__(self) -> "BackgroundRenderer":
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if exc_type is None:
            self.stop(success=True)
            return
        stop_quietly(self)


def stop_quietly(renderer: BackgroundRenderer) -> None:
    """Stop with a failure line while another exception is propagating.

    Errors raised while stopping are logged instead, so they never replace
    the exception that ended the task.
    """
    try:
        renderer.stop(success=False)
    except Exception:
        logger.warning("%s did not stop cleanly", renderer.thread_name, exc_info=True)


class Spinner(BackgroundRenderer):
    """Braille spinner next to a static or dynamic text.

    Starts animating as soon as it is constructed.

    Example:
        with Spinner(terminal, "Downloading") as spinner:
            download()
            spinner.print("half way there")
    """

    thread_name = "clytia-spinner"

    def __init__(
        self,
        terminal: Terminal,
        text: Any | Callable[[], Any],
        interval: float = DEFAULT_TICK_INTERVAL,
        styles: Styles | None = None,
        symbols: Sequence[str] = SPINNER_SYMBOLS,
        start: bool = True,
        redirect_stdout: bool = True,
    ):
        super().__init__(terminal, interval, styles, redirect_stdout)
        self.text = text
        self.symbols = symbols
        if start:
            self.start()

    def current_text(self) -> str:
        return str(self.text() if callable(self.text) else self.text)

    def _draw(self) -> None:
        line = Text(self.symbols[self.frame % len(self.symbols)], style=self.styles.prompt)
        line.append(f" {self.current_text()}")
        self.terminal.clear_line()
        self.terminal.write(line)

    def clear(self) -> None:
        self.terminal.clear_line()

    def finish(self, success: bool | None) -> None:
        if success is None:
            return
        if success:
            line = Text(f"{SUCCESS_MARK} {self.current_text()}", style=self.styles.success)
        else:
            line = Text(f"{FAILURE_MARK} {self.current_text()}", style=self.styles.error)
        self.terminal.print(line)

    def print(self, *objects: Any, style: str | None = None) -> None:
        """Print a line above the spinner without corrupting it."""
        self.terminal.print(*objects, style=style)
