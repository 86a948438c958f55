"""Prompt protocol for swappable prompt implementations."""

from collections.abc import Callable, Sequence
from typing import Any, Protocol

from clytia.validation import Validator


class Prompter(Protocol):
    """Protocol for swappable prompt implementations."""

    def parsed_input(
        self, prompt: str, parse: Callable[[str], Any] = str, default: Any = None
    ) -> Any:
        """Ask once, convert with parse. Raises on blank/unparseable input."""
        ...

    def validated_input(
        self,
        prompt: str,
        validator: Validator,
        requirements: str | None = None,
        default: Any = None,
    ) -> Any:
        """Ask until validator accepts. Raises Cancelled if the user gives up."""
        ...

    def options_menu(self, options: Sequence[Any], title: str | None = None) -> Any:
        """Show selection menu, return the chosen option."""
        ...

    def multichoice(
        self,
        options: Sequence[Any],
        selected: Sequence[bool] | None = None,
        title: str | None = None,
    ) -> list[Any]:
        """Checkboxes, return selected options."""
        ...

    def confirm(self, message: str, default: bool = False) -> bool:
        """Yes/no prompt."""
        ...
