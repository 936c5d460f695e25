"""Log output for processes hosting the cache (scripts, the client shell)."""

import logging
import sys

from herbbuddy.core.config import Settings, get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Client libraries stay at WARNING unless debugging.
QUIET_LOGGERS = ("redis", "aiofiles", "opentelemetry")


def setup_logging(settings: Settings | None = None) -> None:
    """Send logs to stdout.

    With settings.debug the herbbuddy loggers also emit the per-key cache
    HIT / MISS / SET / DELETE lines, and client libraries log at DEBUG.
    """
    settings = settings or get_settings()
    level = logging.DEBUG if settings.debug else logging.INFO
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logging.getLogger("herbbuddy").setLevel(level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(level if settings.debug else logging.WARNING)
