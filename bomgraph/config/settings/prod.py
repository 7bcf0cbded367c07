"""
Production settings for the BOM graph engine.
"""

from .base import *

DEBUG = False

# =============================================================================
# LOGGING - Production
# =============================================================================
LOGGING['formatters']['verbose']['format'] = '{levelname} {asctime} {name} {process:d} {message}'
LOGGING['loggers']['bomgraph']['level'] = config('BOMGRAPH_LOG_LEVEL', default='WARNING')
