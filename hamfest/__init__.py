import logging
import sys

from hamfest.settings import get_settings


def _configure_logging() -> None:
    settings = get_settings()
    hamfest_root_logger = logging.getLogger(__name__)
    hamfest_root_logger.propagate = False
    stdout_handler = logging.StreamHandler(sys.stdout)
    formatter = logging.Formatter(settings.log_format, settings.log_date_format)
    stdout_handler.setFormatter(formatter)
    hamfest_root_logger.addHandler(stdout_handler)
    hamfest_root_logger.setLevel(settings.log_level)


_configure_logging()
