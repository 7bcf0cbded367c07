"""
Development settings for the BOM graph engine.
"""

from .base import *

DEBUG = True

# =============================================================================
# LOGGING - Development
# =============================================================================
LOGGING['loggers']['bomgraph']['level'] = config('BOMGRAPH_LOG_LEVEL', default='DEBUG')
