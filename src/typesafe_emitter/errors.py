class EmitterError(Exception):
    """Base error for typesafe_emitter exceptions."""


class SettingsError(EmitterError):
    """Raised when emitter settings cannot be loaded or hold invalid values."""


class InvalidMaxListeners(EmitterError, ValueError):
    """Raised when a maximum listener count is negative or not an integer."""
