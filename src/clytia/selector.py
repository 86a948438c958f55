"""Keyboard driven option menus built on rich.Live and readchar."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Generic, TypeVar

from rich.console import Group
from rich.live import Live
from rich.text import Text

from clytia.config import Styles
from clytia.errors import Cancelled, NoOptionsError
from clytia.keys import Action, action_for_key
from clytia.terminal import Terminal
from clytia.viewport import calculate_visible_range, format_scroll_indicator

logger = logging.getLogger("clytia.selector")

T = TypeVar("T")

# Lines kept free around the list: title, two scroll indicators, the live cursor line
RESERVED_LINES = 4


class CursorPolicy(Enum):
    """What the cursor does when moved past either end of the list."""

    WRAP = "wrap"  # last <-> first
    CLAMP = "clamp"  # stays on the edge item


@dataclass
class Choice(Generic[T]):
    """One option of a menu."""

    value: T
    label: str
    selected: bool = False

    @classmethod
    def of(cls, option: Any, selected: bool = False) -> "Choice":
        if isinstance(option, Choice):
            # Menus toggle a copy, never the caller's object
            return replace(option, selected=option.selected or selected)
        return cls(value=option, label=str(option), selected=selected)


class SelectorState(Generic[T]):
    """Cursor and selection flags for a list of choices.

    The cursor is always within ``[0, len(choices))`` for a non-empty list.
    """

    def __init__(
        self,
        choices: list[Choice[T]],
        policy: CursorPolicy = CursorPolicy.WRAP,
        cursor: int = 0,
    ):
        self.choices = choices
        self.policy = policy
        self.cursor = max(0, min(cursor, len(choices) - 1)) if choices else 0

    def __len__(self) -> int:
        return len(self.choices)

    @property
    def current(self) -> Choice[T] | None:
        if self.choices:
            return self.choices[self.cursor]
        return None

    def move(self, delta: int) -> None:
        if not self.choices:
            return
        target = self.cursor + delta
        if self.policy is CursorPolicy.WRAP:
            self.cursor = target % len(self.choices)
        else:
            self.cursor = max(0, min(target, len(self.choices) - 1))

    def move_up(self) -> None:
        self.move(-1)

    def move_down(self) -> None:
        self.move(1)

    def home(self) -> None:
        self.cursor = 0

    def end(self) -> None:
        self.cursor = max(0, len(self.choices) - 1)

    def toggle(self) -> None:
        choice = self.current
        if choice is not None:
            choice.selected = not choice.selected

    def toggle_all(self) -> None:
        """Select everything, or clear everything if all are already selected."""
        target = not all(c.selected for c in self.choices)
        for choice in self.choices:
            choice.selected = target

    def selected_values(self) -> list[T]:
        """Selected values in list order."""
        return [c.value for c in self.choices if c.selected]

    def apply(self, action: Action) -> None:
        """Apply a navigation or selection action. Confirm/cancel are the caller's."""
        if action is Action.UP:
            self.move_up()
        elif action is Action.DOWN:
            self.move_down()
        elif action is Action.HOME:
            self.home()
        elif action is Action.END:
            self.end()
        elif action is Action.TOGGLE:
            self.toggle()
        elif action is Action.TOGGLE_ALL:
            self.toggle_all()


class _Menu(Generic[T]):
    """Shared render/key loop for single and multi choice menus."""

    # Actions the menu reacts to besides confirm/cancel
    ACTIONS: frozenset[Action] = frozenset({Action.UP, Action.DOWN, Action.HOME, Action.END})

    def __init__(
        self,
        terminal: Terminal,
        options: Sequence[T | Choice[T]],
        selected: Sequence[bool] | None = None,
        policy: CursorPolicy = CursorPolicy.WRAP,
        styles: Styles | None = None,
        title: str | None = None,
        cursor: int = 0,
    ):
        if selected is not None and len(selected) != len(options):
            raise ValueError("selected must have one flag per option")
        flags = list(selected) if selected is not None else [False] * len(options)
        choices = [Choice.of(option, bool(flag)) for option, flag in zip(options, flags)]
        self.state: SelectorState[T] = SelectorState(choices, policy, cursor)
        self.terminal = terminal
        self.styles = styles or Styles()
        self.title = title
        self._scroll_offset = 0

    def _render_choice(self, choice: Choice[T], highlighted: bool) -> Text:
        raise NotImplementedError

    def render(self) -> Group:
        lines: list[Text] = []
        if self.title:
            lines.append(Text(self.title, style="bold"))

        total = len(self.state)
        max_visible = self.terminal.height - RESERVED_LINES
        self._scroll_offset, start, end = calculate_visible_range(
            self.state.cursor, total, max_visible, self._scroll_offset
        )
        above, below = format_scroll_indicator(start, total - end)

        if above:
            lines.append(Text(above, style="dim"))
        for i in range(start, end):
            lines.append(self._render_choice(self.state.choices[i], i == self.state.cursor))
        if below:
            lines.append(Text(below, style="dim"))
        return Group(*lines)

    def _run(self) -> None:
        """Read keys until confirm. Raises Cancelled on cancel."""
        with self.terminal.session(), self.terminal.lock:
            with Live(
                self.render(),
                console=self.terminal.console,
                auto_refresh=False,
                transient=True,
            ) as live:
                while True:
                    action = action_for_key(self.terminal.read_key())
                    if action is Action.CONFIRM:
                        return
                    if action is Action.CANCEL:
                        logger.debug("menu cancelled at cursor %d", self.state.cursor)
                        raise Cancelled()
                    if action in self.ACTIONS:
                        self.state.apply(action)
                        live.update(self.render(), refresh=True)


class MultiChoice(_Menu[T]):
    """Pick any number of options.

    Up/Down (or k/j) move the highlight, Space toggles the highlighted
    option, ``a`` toggles all, Enter confirms, Esc/q/Ctrl+C cancel.

    Example:
        menu = MultiChoice(terminal, ["cats", "dogs", "birds"])
        animals = menu.show()  # e.g. ["cats", "birds"]
    """

    ACTIONS = _Menu.ACTIONS | {Action.TOGGLE, Action.TOGGLE_ALL}

    def _render_choice(self, choice: Choice[T], highlighted: bool) -> Text:
        mark = "[X]" if choice.selected else "[ ]"
        return Text(f"{mark} {choice.label}", style=self.styles.highlight if highlighted else "")

    def show(self) -> list[T]:
        """Run the menu and return the selected values in list order."""
        if not self.state.choices:
            return []
        self._run()
        for choice in self.state.choices:
            if choice.selected:
                self.terminal.print(Text(f"[X] {choice.label}", style=self.styles.success))
        return self.state.selected_values()


class OptionsMenu(_Menu[T]):
    """Pick exactly one option with Up/Down and Enter."""

    def _render_choice(self, choice: Choice[T], highlighted: bool) -> Text:
        if highlighted:
            return Text(f"=> {choice.label}", style=self.styles.highlight)
        return Text(f"   {choice.label}")

    def show(self) -> T:
        if not self.state.choices:
            raise NoOptionsError()
        self._run()
        choice = self.state.choices[self.state.cursor]
        self.terminal.print(Text(f"=> {choice.label}", style=self.styles.success))
        return choice.value


def confirm(
    terminal: Terminal,
    message: str,
    default: bool = False,
    styles: Styles | None = None,
) -> bool:
    """Yes/No menu. Returns True for Yes."""
    menu: OptionsMenu[str] = OptionsMenu(
        terminal,
        ["Yes", "No"],
        styles=styles,
        title=message,
        cursor=0 if default else 1,
    )
    return menu.show() == "Yes"
