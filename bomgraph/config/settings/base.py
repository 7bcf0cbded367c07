"""
Base settings for the BOM graph engine.

Values come from environment variables or a .env file via python-decouple.
"""

from decouple import config

# =============================================================================
# LAYOUT
# =============================================================================
# Canvas units between neighbouring leaf slots and between depth levels
LAYOUT_H_SPACING = config('BOMGRAPH_H_SPACING', default=200.0, cast=float)
LAYOUT_V_SPACING = config('BOMGRAPH_V_SPACING', default=120.0, cast=float)

# =============================================================================
# LOGGING
# =============================================================================
LOG_LEVEL = config('BOMGRAPH_LOG_LEVEL', default='INFO')

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '{levelname} {asctime} {name} {message}',
            'style': '{',
        },
        'simple': {
            'format': '{levelname} {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': 'WARNING',
    },
    'loggers': {
        'bomgraph': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': False,
        },
    },
}
