"""Configuration for prompt timing and colors."""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

# Module-level cache for singleton pattern
_config_cache: "Config | None" = None


def clear_config_cache() -> None:
    """Clear the config cache. Useful for testing or config reload."""
    global _config_cache
    _config_cache = None


def get_default_config_dir() -> Path:
    """Get default config directory, respecting CLYTIA_CONFIG_DIR env var."""
    config_dir = os.environ.get("CLYTIA_CONFIG_DIR")
    if config_dir:
        return Path(config_dir)
    return Path.home() / ".config" / "clytia"


@dataclass(frozen=True)
class Styles:
    """Rich style names used by every prompt primitive."""

    prompt: str = "blue"
    requirements: str = "magenta"
    error: str = "red"
    success: str = "green"
    highlight: str = "blue"


class ConfigMeta:
    """Schema definition - separate from runtime state."""

    SETTINGS: dict[str, str] = {
        "tick_interval": "Seconds between spinner/progress frames",
        "retry_delay": "Pause after a rejected input, in seconds",
        "cursor_policy": "Menu cursor at list edges (wrap|clamp)",
        "prompt_style": "Style for prompt text",
        "requirements_style": "Style for requirements/default hints",
        "error_style": "Style for rejections and failures",
        "success_style": "Style for confirmed answers",
        "highlight_style": "Style for the highlighted menu line",
    }


class Config:
    """Runtime configuration with env override support."""

    DEFAULTS: dict[str, Any] = {
        "tick_interval": 0.05,
        "retry_delay": 0.5,
        "cursor_policy": "wrap",
        "prompt_style": "blue",
        "requirements_style": "magenta",
        "error_style": "red",
        "success_style": "green",
        "highlight_style": "blue",
    }

    def __init__(self, config_dir: Path | None = None):
        self._config_dir = config_dir or get_default_config_dir()
        self._config_file = self._config_dir / "config.json"
        self._data: dict[str, Any] = {}

    @property
    def config_dir(self) -> Path:
        return self._config_dir

    @classmethod
    def load(cls, config_dir: Path | None = None) -> "Config":
        """Factory method - explicit loading with caching."""
        global _config_cache

        if _config_cache is not None and config_dir is None:
            return _config_cache

        config = cls(config_dir)
        config._load_from_file()
        config._apply_env_overrides()

        if config_dir is None:
            _config_cache = config

        return config

    def __getattr__(self, name: str) -> Any:
        """Access config values as attributes."""
        if name.startswith("_"):
            raise AttributeError(name)
        if name in self._data:
            return self._data[name]
        if name in self.DEFAULTS:
            return self.DEFAULTS[name]
        raise AttributeError(f"Config has no attribute '{name}'")

    @property
    def styles(self) -> Styles:
        return Styles(
            prompt=self.prompt_style,
            requirements=self.requirements_style,
            error=self.error_style,
            success=self.success_style,
            highlight=self.highlight_style,
        )

    def get_settings(self) -> list[tuple[str, str, Any]]:
        """Return (key, description, value) for display."""
        return [(name, desc, getattr(self, name)) for name, desc in ConfigMeta.SETTINGS.items()]

    def set(self, key: str, value: Any) -> None:
        """Set value and persist."""
        if key not in self.DEFAULTS:
            raise KeyError(f"Unknown config key '{key}'")
        self._data[key] = value
        self._save()

    def set_from_string(self, key: str, value: str) -> Any:
        """Coerce a CLI string to the key's type, set and persist it."""
        if key not in self.DEFAULTS:
            raise KeyError(f"Unknown config key '{key}'")
        coerced = self._coerce(value, type(self.DEFAULTS[key]))
        self.set(key, coerced)
        return coerced

    def _load_from_file(self) -> None:
        if self._config_file.exists():
            try:
                content = self._config_file.read_text()
                if content.strip():
                    self._data = json.loads(content)
            except json.JSONDecodeError:
                # Corrupted config - use defaults, will be fixed on next save
                self._data = {}

    def _save(self) -> None:
        self._config_dir.mkdir(parents=True, exist_ok=True)
        self._config_file.write_text(json.dumps(self._data, indent=2))

    def _apply_env_overrides(self) -> None:
        """Apply CLYTIA_* env vars (highest priority)."""
        for key, default in self.DEFAULTS.items():
            env_key = f"CLYTIA_{key.upper()}"
            if env_key in os.environ:
                self._data[key] = self._coerce(os.environ[env_key], type(default))

    @staticmethod
    def _coerce(value: str, target_type: type) -> Any:
        """Coerce string env value to target type."""
        if target_type is bool:
            return value.lower() in ("true", "1", "yes")
        if target_type is int:
            return int(value)
        if target_type is float:
            return float(value)
        return value
