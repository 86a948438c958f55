"""Key to menu action mapping."""

from enum import Enum

import readchar


class Action(Enum):
    """Navigation actions understood by the menus."""

    UP = "up"
    DOWN = "down"
    HOME = "home"
    END = "end"
    TOGGLE = "toggle"
    TOGGLE_ALL = "toggle_all"
    CONFIRM = "confirm"
    CANCEL = "cancel"


# Up moves toward index 0, Down toward the end of the list.
KEYMAP: dict[str, Action] = {
    readchar.key.UP: Action.UP,
    "k": Action.UP,
    readchar.key.DOWN: Action.DOWN,
    "j": Action.DOWN,
    "\t": Action.DOWN,
    readchar.key.HOME: Action.HOME,
    "g": Action.HOME,
    readchar.key.END: Action.END,
    "G": Action.END,
    readchar.key.SPACE: Action.TOGGLE,
    "a": Action.TOGGLE_ALL,
    readchar.key.ENTER: Action.CONFIRM,
    "\r": Action.CONFIRM,
    "\n": Action.CONFIRM,
    readchar.key.ESC: Action.CANCEL,
    readchar.key.CTRL_C: Action.CANCEL,
    "q": Action.CANCEL,
}


def action_for_key(key: str) -> Action | None:
    """Return the action bound to ``key``, or None if it is unbound."""
    return KEYMAP.get(key)
