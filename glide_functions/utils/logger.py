# -----------------------------------------------------------------------------
# glide_functions/utils/logger.py — Shared application logger
# -----------------------------------------------------------------------------
# Events are short snake_case messages; structured fields go in `extra=` and
# are appended to the line as key=value pairs.
# -----------------------------------------------------------------------------

import logging
import sys

from glide_functions.core.config import get_settings

LOGGER_NAME = "glide_functions"

# Attributes present on every LogRecord; anything else came from `extra=`.
_RESERVED = set(logging.LogRecord("", 0, "", 0, "", (), None).__dict__) | {"message", "asctime"}


class ExtraFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extras = {k: v for k, v in record.__dict__.items() if k not in _RESERVED}
        if extras:
            line += " " + " ".join(f"{k}={v}" for k, v in sorted(extras.items()))
        return line


def setup_logger() -> logging.Logger:
    log = logging.getLogger(LOGGER_NAME)
    if not log.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            ExtraFormatter("%(asctime)s | %(levelname)-8s | %(name)s - %(message)s")
        )
        log.addHandler(handler)
    log.setLevel(get_settings().log_level.upper())
    return log


logger = setup_logger()
