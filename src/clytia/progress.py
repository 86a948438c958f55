"""Two-line progress bar drawn by a background renderer."""

from collections.abc import Callable
from typing import Any

from rich.text import Text

from clytia.config import Styles
from clytia.spinner import (
    DEFAULT_TICK_INTERVAL,
    FAILURE_MARK,
    SUCCESS_MARK,
    BackgroundRenderer,
)
from clytia.terminal import Terminal

# "[" + head + "| " + "042" + "%]"
BAR_CHROME_WIDTH = 9


def clamp_progress(value: Any) -> int:
    return max(0, min(int(value), 100))


def render_bar(progress: int, width: int, failed: bool = False) -> str:
    """Render ``[====>      | 042%]`` filling ``width`` columns.

    A failed bar swaps the head for a cross, which is two columns wide.
    """
    progress = clamp_progress(progress)
    bar_max = max(1, width - BAR_CHROME_WIDTH - (1 if failed else 0))

    if progress >= 100 and not failed:
        return f"[{'=' * bar_max}=| {progress:03d}%]"

    filled = int(bar_max / 100 * progress)
    head = FAILURE_MARK if failed else ">"
    return f"[{'=' * filled}{head}{' ' * (bar_max - filled)}| {progress:03d}%]"


class ProgressBar(BackgroundRenderer):
    """Prompt line plus a percentage bar, refreshed on every tick.

    ``progress_func`` is polled each frame and should return 0-100;
    values outside that range are clamped.
    """

    thread_name = "clytia-progress"

    def __init__(
        self,
        terminal: Terminal,
        prompt: Any,
        progress_func: Callable[[], Any],
        interval: float = DEFAULT_TICK_INTERVAL,
        styles: Styles | None = None,
        start: bool = True,
        redirect_stdout: bool = True,
    ):
        super().__init__(terminal, interval, styles, redirect_stdout)
        self.prompt = prompt
        self.progress_func = progress_func
        self._drawn = False
        if start:
            self.start()

    def progress(self) -> int:
        return clamp_progress(self.progress_func())

    def _draw(self) -> None:
        self.clear()
        self.terminal.write(Text(str(self.prompt)))
        self.terminal.newline()
        bar = render_bar(self.progress(), self.terminal.width)
        self.terminal.write(Text(bar, style=self.styles.prompt))
        self._drawn = True

    def clear(self) -> None:
        if not self._drawn:
            return
        self.terminal.clear_line()
        self.terminal.cursor_up(1)
        self.terminal.clear_line()
        self._drawn = False

    def finish(self, success: bool | None) -> None:
        if success is None:
            return
        if success:
            self.terminal.print(Text(f"{SUCCESS_MARK} {self.prompt}", style=self.styles.success))
            return
        self.terminal.print(Text(f"{FAILURE_MARK} {self.prompt}", style=self.styles.error))
        bar = render_bar(self.progress(), self.terminal.width, failed=True)
        self.terminal.print(Text(bar, style=self.styles.error))
