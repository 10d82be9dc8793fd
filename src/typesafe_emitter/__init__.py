"""
Synchronous publish/subscribe event emitters.

- NodeEventEmitter: untyped emitter keyed by strings, Symbols or any hashable
- EventEmitter: facade whose events and listener signatures are checked by
  static type checkers through Event declarations
"""
import logging
from importlib.metadata import PackageNotFoundError, version

from .emitter import NodeEventEmitter
from .errors import EmitterError, InvalidMaxListeners, SettingsError
from .keys import EventKey, Symbol
from .logging_config import configure_logging
from .settings import EmitterSettings
from .typed import Event, EventEmitter

try:
    __version__ = version("typesafe-emitter")
except PackageNotFoundError:  # pragma: no cover - during tests without packaging
    __version__ = "0.0.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "NodeEventEmitter",
    "EventEmitter",
    "Event",
    "EventKey",
    "Symbol",
    "EmitterSettings",
    "configure_logging",
    "EmitterError",
    "SettingsError",
    "InvalidMaxListeners",
    "__version__",
]
