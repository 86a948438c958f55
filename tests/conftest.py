"""Pytest fixtures for clytia tests."""

from collections.abc import Callable, Iterable
from io import StringIO

import pytest
from rich.console import Console

from clytia.terminal import Terminal


@pytest.fixture(autouse=True)
def clear_caches(tmp_path, monkeypatch):
    """Isolate config and clear module-level caches around each test."""
    from clytia.config import clear_config_cache

    monkeypatch.setenv("CLYTIA_CONFIG_DIR", str(tmp_path / "clytia-config"))
    monkeypatch.setenv("CLYTIA_RETRY_DELAY", "0")
    clear_config_cache()

    yield

    clear_config_cache()


def _reader(values: Iterable[str]) -> Callable[[], str]:
    """Return a callable yielding one value per call; exceptions are raised."""
    it = iter(values)

    def read() -> str:
        value = next(it)
        if isinstance(value, BaseException) or (
            isinstance(value, type) and issubclass(value, BaseException)
        ):
            raise value
        return value

    return read


@pytest.fixture
def make_terminal():
    """Build a Terminal writing to a buffer, fed from scripted keys/lines.

    Returns (terminal, output_buffer).
    """

    def factory(
        keys: Iterable[str] = (),
        lines: Iterable[str] = (),
        width: int = 80,
        height: int = 24,
    ) -> tuple[Terminal, StringIO]:
        buf = StringIO()
        console = Console(
            file=buf,
            force_terminal=True,
            width=width,
            height=height,
            color_system="truecolor",
            highlight=False,
        )
        terminal = Terminal(console=console, read_key=_reader(keys), read_line=_reader(lines))
        return terminal, buf

    return factory
