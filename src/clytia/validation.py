"""Validation results and validator combinators.

A validator is a pure function taking the trimmed input text and returning
either ``Valid(value)`` or ``Invalid(reason)``. The prompt loop applies it
to every attempt and only ever returns values wrapped in ``Valid``.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Valid(Generic[T]):
    """Accepted input, already converted to its final value."""

    value: T


@dataclass(frozen=True)
class Invalid:
    """Rejected input with a human-readable reason."""

    reason: str


ValidationResult = Union[Valid[T], Invalid]
Validator = Callable[[Any], ValidationResult]


def non_empty(reason: str = "input must not be empty") -> Validator:
    """Reject blank input."""

    def validate(text: str) -> ValidationResult:
        if not text.strip():
            return Invalid(reason)
        return Valid(text)

    return validate


def parsed(parse: Callable[[str], T], reason: str | None = None) -> Validator:
    """Convert input with ``parse``; ValueError/TypeError become rejections."""

    def validate(text: str) -> ValidationResult:
        try:
            return Valid(parse(text))
        except (ValueError, TypeError):
            return Invalid(reason or f"could not parse '{text}'")

    return validate


def predicate(
    check: Callable[[T], bool],
    requirements: str,
    parse: Callable[[str], T] = str,
) -> Validator:
    """Parse the input, then accept it only if ``check`` holds.

    Example:
        predicate(lambda n: 1 <= n <= 10, "1-10", parse=int)
    """
    parse_step = parsed(parse)

    def validate(text: str) -> ValidationResult:
        result = parse_step(text)
        if isinstance(result, Invalid):
            return result
        if not check(result.value):
            return Invalid(f"'{text}' does not meet requirements: {requirements}")
        return result

    return validate


def in_range(low: float, high: float, parse: Callable[[str], Any] = int) -> Validator:
    """Accept numbers within ``[low, high]``."""
    return predicate(lambda n: low <= n <= high, f"{low}-{high}", parse=parse)


def one_of(options: Iterable[str], case_sensitive: bool = False) -> Validator:
    """Accept only one of the given strings, returning the canonical spelling."""
    choices = list(options)
    lookup = {c if case_sensitive else c.lower(): c for c in choices}

    def validate(text: str) -> ValidationResult:
        key = text if case_sensitive else text.lower()
        if key in lookup:
            return Valid(lookup[key])
        return Invalid(f"must be one of: {', '.join(choices)}")

    return validate


def chain(*validators: Validator) -> Validator:
    """Run validators in order, feeding each accepted value to the next."""

    def validate(value: Any) -> ValidationResult:
        result: ValidationResult = Valid(value)
        for step in validators:
            result = step(result.value)
            if isinstance(result, Invalid):
                return result
        return result

    return validate
