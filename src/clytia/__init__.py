"""Colorful interactive command-line prompts, menus and spinners."""

from clytia.base import Prompter
from clytia.config import Config, Styles
from clytia.core import Clytia
from clytia.errors import (
    Cancelled,
    ClytiaError,
    NoOptionsError,
    NonOptionalInputError,
    ParseError,
    TerminalError,
    ValidationExhausted,
)
from clytia.progress import ProgressBar
from clytia.selector import Choice, CursorPolicy, MultiChoice, OptionsMenu, SelectorState
from clytia.spinner import Spinner
from clytia.terminal import Terminal
from clytia.validation import (
    Invalid,
    Valid,
    chain,
    in_range,
    non_empty,
    one_of,
    parsed,
    predicate,
)

__version__ = "0.3.0"

__all__ = [
    "Cancelled",
    "Choice",
    "Clytia",
    "ClytiaError",
    "Config",
    "CursorPolicy",
    "Invalid",
    "MultiChoice",
    "NoOptionsError",
    "NonOptionalInputError",
    "OptionsMenu",
    "ParseError",
    "ProgressBar",
    "Prompter",
    "SelectorState",
    "Spinner",
    "Styles",
    "Terminal",
    "TerminalError",
    "Valid",
    "ValidationExhausted",
    "chain",
    "in_range",
    "non_empty",
    "one_of",
    "parsed",
    "predicate",
]
