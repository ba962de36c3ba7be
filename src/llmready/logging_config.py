import logging
import sys
from typing import Optional, TextIO

from .models.config import LlmReadyConfig

LOGGER_NAME = "llmready"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Set on handlers installed here so a later call can find and replace them
_HANDLER_MARKER = "_llmready_handler"


def setup_logging(
    config: Optional[LlmReadyConfig] = None,
    stream: Optional[TextIO] = None,
    format_string: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """
    Configure the ``llmready`` logger from ``log_level`` and ``log_file``.

    Calling it again (the CLI does once per command) swaps the handlers an
    earlier call installed; handlers attached by the host application are
    left in place.

    Args:
        config: Settings to read the level and log file from (defaults otherwise)
        stream: Console stream, stderr unless given, so stdout can carry documents
        format_string: Format for both console and file output

    Returns:
        Configured logger instance
    """
    if config is None:
        config = LlmReadyConfig()

    level = getattr(logging, config.log_level)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    for handler in [h for h in logger.handlers if getattr(h, _HANDLER_MARKER, False)]:
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(format_string)
    handlers: list[logging.Handler] = [logging.StreamHandler(stream if stream is not None else sys.stderr)]

    if config.log_file is not None:
        config.log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(config.log_file, encoding="utf-8"))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        setattr(handler, _HANDLER_MARKER, True)
        logger.addHandler(handler)

    logger.propagate = False

    return logger
