"""Custom exceptions for clytia.

This module defines a hierarchy of exceptions for the ways a prompt can end
without a value:
- ClytiaError: Base exception for all clytia errors
- Cancelled: The user interrupted or escaped the prompt
- NonOptionalInputError: Nothing was entered and there is no default
- ParseError: The input could not be converted to the requested type
- ValidationExhausted: The attempt limit of a validated prompt was reached
- NoOptionsError: A single choice menu was given nothing to choose from
- TerminalError: Reading from or writing to the terminal failed
"""


class ClytiaError(Exception):
    """Base exception for all clytia errors.

    All clytia-specific exceptions inherit from this class, allowing
    callers to catch all clytia errors with a single except clause.
    """

    pass


class Cancelled(ClytiaError):
    """The user cancelled the prompt.

    Raised on Ctrl+C, Escape/q in menus, or end of input (Ctrl+D).
    The terminal is already restored when this reaches the caller.
    """

    def __init__(self, message: str = "cancelled by user"):
        super().__init__(message)


class NonOptionalInputError(ClytiaError):
    """No input was given, but input was required."""

    def __init__(self, message: str = "non optional input, but no input given"):
        super().__init__(message)


class ParseError(ClytiaError):
    """Input could not be parsed.

    Attributes:
        text: The raw (trimmed) input that failed to parse
    """

    def __init__(self, text: str):
        super().__init__(f"Could not parse: {text}")
        self.text = text


class ValidationExhausted(ClytiaError):
    """A validated prompt ran out of attempts.

    Attributes:
        reason: Rejection reason of the last attempt
        attempts: Number of attempts made
    """

    def __init__(self, reason: str, attempts: int):
        super().__init__(f"no valid input after {attempts} attempts: {reason}")
        self.reason = reason
        self.attempts = attempts


class NoOptionsError(ClytiaError):
    """A single choice menu was given an empty option list."""

    def __init__(self, message: str = "options menu needs at least one option"):
        super().__init__(message)


class TerminalError(ClytiaError):
    """Terminal I/O failed.

    Fatal: a broken terminal cannot be safely retried against.
    """

    pass
