import logging
import os
import sys
from typing import Optional, Union

from .settings import EmitterSettings

LOG_LEVEL_ENV = "TYPESAFE_EMITTER_LOG_LEVEL"

_HANDLER_NAME = "typesafe_emitter"


def configure_logging(level: Optional[Union[int, str]] = None) -> logging.Logger:
    """Attach a stream handler to the ``typesafe_emitter`` logger.

    The level comes from the TYPESAFE_EMITTER_LOG_LEVEL env var if present,
    then ``level``, then the packaged settings. Calling it again replaces the
    handler instead of adding a second one.
    """
    resolved: Union[int, str] = level if level is not None else EmitterSettings.load().log_level
    level_name = os.getenv(LOG_LEVEL_ENV)
    if level_name:
        resolved = getattr(logging, level_name.upper(), resolved)
    if isinstance(resolved, str):
        resolved = resolved.upper()

    handler = logging.StreamHandler(stream=sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        logging.Formatter(
            fmt="[%(asctime)s] [%(levelname)s] %(name)s: %(message)s",
        )
    )

    logger = logging.getLogger("typesafe_emitter")
    logger.setLevel(resolved)
    for h in list(logger.handlers):
        if h.get_name() == _HANDLER_NAME:
            logger.removeHandler(h)
    logger.addHandler(handler)
    return logger
