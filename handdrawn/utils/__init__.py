"""Cross-cutting utilities (lowest dependency layer).

    - YAML file helpers (fs)
    - Logging setup and contextual fields (logging_config)

No module in utils/ may import from the rest of the package.
"""

from . import fs
from . import logging_config

from .logging_config import get_logger, log_context, push_context, setup_logging

__all__ = [
    'fs',
    'logging_config',
    'get_logger',
    'log_context',
    'push_context',
    'setup_logging',
]
