"""Clytia facade - one terminal and config shared by every prompt."""

import logging
from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from clytia.config import Config
from clytia.progress import ProgressBar
from clytia.prompt import parsed_input, validated_input
from clytia.selector import CursorPolicy, MultiChoice, OptionsMenu, confirm
from clytia.spinner import BackgroundRenderer, Spinner, stop_quietly
from clytia.terminal import Terminal
from clytia.validation import Validator

logger = logging.getLogger("clytia.core")

T = TypeVar("T")
R = TypeVar("R")


class Clytia:
    """Interactive prompts, menus and spinners on one terminal.

    Example:
        cli = Clytia()
        n = cli.validated_input("Pick a number", in_range(1, 10), requirements="1-10")
        pets = cli.multichoice(["cats", "dogs", "birds"])
        cli.static_background_spinner("Thinking", lambda: time.sleep(2))
    """

    def __init__(self, terminal: Terminal | None = None, config: Config | None = None):
        self.config = config or Config.load()
        self.terminal = terminal or Terminal()
        self.styles = self.config.styles

    @property
    def cursor_policy(self) -> CursorPolicy:
        try:
            return CursorPolicy(self.config.cursor_policy)
        except ValueError:
            logger.warning("unknown cursor_policy %r, using wrap", self.config.cursor_policy)
            return CursorPolicy.WRAP

    # --- line input ---

    def parsed_input(
        self,
        prompt: str,
        parse: Callable[[str], T] = str,
        default: T | None = None,
    ) -> T:
        """Ask once. See ``clytia.prompt.parsed_input``."""
        return parsed_input(self.terminal, prompt, parse, default, styles=self.styles)

    def validated_input(
        self,
        prompt: str,
        validator: Validator,
        requirements: str | None = None,
        default: Any = None,
        max_attempts: int | None = None,
    ) -> Any:
        """Ask until ``validator`` accepts. See ``clytia.prompt.validated_input``."""
        return validated_input(
            self.terminal,
            prompt,
            validator,
            requirements=requirements,
            default=default,
            max_attempts=max_attempts,
            retry_delay=self.config.retry_delay,
            styles=self.styles,
        )

    # --- menus ---

    def options_menu(self, options: Sequence[T], title: str | None = None) -> T:
        menu = OptionsMenu(
            self.terminal, options, policy=self.cursor_policy, styles=self.styles, title=title
        )
        return menu.show()

    def multichoice(
        self,
        options: Sequence[T],
        selected: Sequence[bool] | None = None,
        title: str | None = None,
    ) -> list[T]:
        menu = MultiChoice(
            self.terminal,
            options,
            selected=selected,
            policy=self.cursor_policy,
            styles=self.styles,
            title=title,
        )
        return menu.show()

    def confirm(self, message: str, default: bool = False) -> bool:
        return confirm(self.terminal, message, default=default, styles=self.styles)

    # --- background feedback ---

    def spinner(self, text: Any | Callable[[], Any]) -> Spinner:
        """Start a spinner. Stop it, or use it as a context manager."""
        return Spinner(self.terminal, text, interval=self.config.tick_interval, styles=self.styles)

    def static_background_spinner(self, text: Any, task: Callable[[], R]) -> R:
        """Run ``task`` with a spinner showing fixed ``text``.

        Finishes with a tick on success; on error with a cross, then the
        exception propagates.
        """
        return self._run_under(self.spinner(text), task)

    def dynamic_background_spinner(self, text_func: Callable[[], Any], task: Callable[[], R]) -> R:
        """Like ``static_background_spinner``, re-evaluating ``text_func`` each frame."""
        return self._run_under(self.spinner(text_func), task)

    def progress_bar(
        self,
        prompt: Any,
        progress_func: Callable[[], Any],
        task: Callable[[], R],
    ) -> R:
        """Run ``task`` while drawing a bar from ``progress_func`` (0-100)."""
        bar = ProgressBar(
            self.terminal,
            prompt,
            progress_func,
            interval=self.config.tick_interval,
            styles=self.styles,
        )
        return self._run_under(bar, task)

    @staticmethod
    def _run_under(renderer: BackgroundRenderer, task: Callable[[], R]) -> R:
        try:
            result = task()
        except BaseException:
            stop_quietly(renderer)
            raise
        renderer.stop(success=True)
        return result
