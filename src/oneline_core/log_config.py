# --- src/oneline_core/log_config.py ---
import logging
import sys
from typing import Union

LOG_FORMAT = "%(asctime)s [%(levelname)-5.5s] [%(name)s] %(message)s"


def setup_logging(level: Union[int, str] = logging.INFO):
    """Routes all package logging to stdout through a single root handler."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level name: {level}")

    root_logger = logging.getLogger()

    # Replace whatever handlers an earlier call (or the host application) left behind.
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)
    logging.getLogger(__name__).debug("Logging configured at level %s.", logging.getLevelName(level))


def set_package_level(level: Union[int, str]):
    """Adjusts only the `oneline_core` logger hierarchy, leaving the root handler alone."""
    if isinstance(level, str):
        level = level.upper()
    logging.getLogger("oneline_core").setLevel(level)
