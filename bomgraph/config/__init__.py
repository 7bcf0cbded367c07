"""
Configuration for the BOM graph engine.

``settings`` is selected by the BOMGRAPH_ENV environment variable.
"""

import logging.config

from . import settings


def configure_logging() -> None:
    """Apply the LOGGING dictConfig of the active settings module."""
    logging.config.dictConfig(settings.LOGGING)
