import logging
from logging.handlers import RotatingFileHandler
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"

_installed: list[logging.Handler] = []


def configure_logging(level: str = "INFO", log_file: Optional[str] = "pi_clock.log") -> None:
    """Console plus optional rotating file logging on the root logger.

    Calling again replaces the handlers installed by the previous call.
    """
    root = logging.getLogger()
    root.setLevel(level.upper())

    for handler in _installed:
        root.removeHandler(handler)
        handler.close()
    _installed.clear()

    fmt = logging.Formatter(LOG_FORMAT)

    ch = logging.StreamHandler()
    _installed.append(ch)

    # Rotating file (avoid filling SD card)
    if log_file:
        _installed.append(RotatingFileHandler(log_file, maxBytes=2_000_000, backupCount=5))

    for handler in _installed:
        handler.setFormatter(fmt)
        root.addHandler(handler)

    # A poll every minute adds up
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
