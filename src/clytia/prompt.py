"""Line prompts: validated input that loops, parsed input that doesn't."""

import logging
import time
from collections.abc import Callable
from typing import Any, TypeVar

from rich.text import Text

from clytia.config import Styles
from clytia.errors import NonOptionalInputError, ParseError, ValidationExhausted
from clytia.terminal import Terminal
from clytia.validation import Invalid, Validator

logger = logging.getLogger("clytia.prompt")

T = TypeVar("T")


def format_prompt(
    prompt: Any,
    styles: Styles,
    requirements: Any = None,
    default: Any = None,
    failed: bool = False,
) -> Text:
    """Build the ``prompt (requirements: ..) (default: ..) => `` line."""
    style = styles.error if failed else styles.prompt
    text = Text(str(prompt), style=style)
    if requirements is not None:
        text.append(f" (requirements: {requirements})", style=styles.requirements)
    if default is not None:
        text.append(f" (default: {default})", style=styles.requirements)
    text.append(" => ", style=style)
    return text


def validated_input(
    terminal: Terminal,
    prompt: Any,
    validator: Validator,
    *,
    requirements: Any = None,
    default: Any = None,
    max_attempts: int | None = None,
    retry_delay: float = 0.0,
    styles: Styles | None = None,
) -> Any:
    """Ask until ``validator`` accepts the input.

    Args:
        terminal: Terminal to prompt on
        prompt: Question shown before the input
        validator: Function(text) -> Valid | Invalid, applied to every attempt
        requirements: Optional hint shown next to the prompt
        default: Returned as-is when the input is blank
        max_attempts: Give up after this many rejections (None = never)
        retry_delay: Pause after a rejection so the reason can be read
        styles: Colors for prompt, hints and errors

    Returns:
        The value carried by the accepted ``Valid`` result

    Raises:
        Cancelled: Ctrl+C or end of input
        ValidationExhausted: max_attempts rejections in a row
        TerminalError: The terminal could not be read or written
    """
    styles = styles or Styles()
    attempts = 0
    failed = False

    while True:
        terminal.write(format_prompt(prompt, styles, requirements, default, failed))
        terminal.flush()
        text = terminal.read_line().strip()
        attempts += 1

        if not text and default is not None:
            return default

        result = validator(text)
        if not isinstance(result, Invalid):
            return result.value

        logger.debug("input rejected (attempt %d): %s", attempts, result.reason)
        terminal.print(Text(f"✗ {result.reason}", style=styles.error))
        if max_attempts is not None and attempts >= max_attempts:
            raise ValidationExhausted(result.reason, attempts)

        failed = True
        if retry_delay > 0:
            time.sleep(retry_delay)


def parsed_input(
    terminal: Terminal,
    prompt: Any,
    parse: Callable[[str], T] = str,
    default: T | None = None,
    styles: Styles | None = None,
) -> T:
    """Ask once and convert the answer with ``parse``.

    Raises:
        NonOptionalInputError: Blank input and no default
        ParseError: ``parse`` raised ValueError/TypeError
        Cancelled: Ctrl+C or end of input
    """
    styles = styles or Styles()
    terminal.write(format_prompt(prompt, styles, default=default))
    terminal.flush()
    text = terminal.read_line().strip()

    if not text:
        if default is not None:
            return default
        raise NonOptionalInputError()

    try:
        return parse(text)
    except (ValueError, TypeError) as e:
        raise ParseError(text) from e
