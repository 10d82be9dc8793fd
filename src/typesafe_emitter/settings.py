from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .errors import InvalidMaxListeners, SettingsError

logger = logging.getLogger(__name__)

_LEVEL_NAMES = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET")


def check_max_listeners(value: Any) -> int:
    """Return ``value`` if it is a usable listener limit, else raise InvalidMaxListeners."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidMaxListeners(f"max_listeners must be an int, got {value!r}")
    if value < 0:
        raise InvalidMaxListeners(f"max_listeners must be >= 0, got {value}")
    return value


@dataclass
class EmitterSettings:
    """Tunables shared by emitters.

    - max_listeners: listener count per event above which a possible leak is
      logged. 0 disables the warning.
    - log_level: level applied by :func:`typesafe_emitter.configure_logging`.
    """

    max_listeners: int = 10
    log_level: str = "WARNING"

    def validate(self) -> "EmitterSettings":
        try:
            check_max_listeners(self.max_listeners)
        except InvalidMaxListeners as exc:
            raise SettingsError(str(exc)) from exc
        if not isinstance(self.log_level, str) or self.log_level.upper() not in _LEVEL_NAMES:
            raise SettingsError(f"Unknown log level: {self.log_level!r}")
        self.log_level = self.log_level.upper()
        return self

    @staticmethod
    def _load_yaml(path: Path) -> Dict[str, Any]:
        try:
            with path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as exc:
            raise SettingsError(f"Could not read settings from {path}: {exc}") from exc
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise SettingsError(f"Settings in {path} must be a mapping, got {type(data).__name__}")
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EmitterSettings":
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning("Ignoring unknown emitter settings: %s", ", ".join(map(str, unknown)))
        return cls(**{k: v for k, v in data.items() if k in known}).validate()

    @classmethod
    def load(cls, user_path: Optional[Path] = None) -> "EmitterSettings":
        """Load packaged defaults, overlaid with ``user_path`` when it exists."""
        try:
            with resources.files("typesafe_emitter").joinpath("default_settings.yaml").open(
                "r", encoding="utf-8"
            ) as f:
                data = yaml.safe_load(f) or {}
        except FileNotFoundError:
            logger.warning("Default emitter settings not found; falling back to dataclass defaults.")
            data = dataclasses.asdict(cls())

        if user_path is not None:
            if user_path.exists():
                data = {**data, **cls._load_yaml(user_path)}
                logger.info("Loaded emitter settings from %s", user_path)
            else:
                logger.warning("Emitter settings file not found: %s", user_path)

        settings = cls.from_dict(data)
        logger.debug("Emitter settings: %s", settings)
        return settings

    def save(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.safe_dump(dataclasses.asdict(self), f, sort_keys=False)
        logger.info("Saved emitter settings to %s", path)
