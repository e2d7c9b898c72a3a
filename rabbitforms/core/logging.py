"""Logging configuration for the API process and the operator scripts."""

import logging
import sys

from rabbitforms.core.config import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging() -> None:
    """Configure root logging once per process.

    DEBUG when settings.debug is set, INFO otherwise, written to stdout.
    SQL statement logging follows database_echo so that debug mode alone
    does not flood the output with queries.
    """
    settings = get_settings()
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.database_echo else logging.WARNING
    )
