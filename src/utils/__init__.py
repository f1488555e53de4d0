"""Cross-cutting utilities (lowest dependency layer).

This package provides shared primitives for:
    - Atomic image/YAML I/O (fs)
    - Unified logging (logging_config)
    - Config validation (validators)

Only fs and logging_config are imported eagerly; validators depends on the
painter package and is imported explicitly where configs are loaded.

Convenience imports:
    from src.utils import fs
    from src.utils.logging_config import setup_logging, get_logger
    from src.utils import validators
"""

from . import fs
from . import logging_config

from .logging_config import get_logger, push_context, setup_logging

__all__ = [
    'fs',
    'logging_config',
    'setup_logging',
    'get_logger',
    'push_context',
]
