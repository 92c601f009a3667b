# vexgen_cli/handlers/__init__.py

import logging

# Common logger for all handlers
logger = logging.getLogger("vexgen-cli")

# Import handlers
from .generate import handle_generate
from .sbom import handle_sbom

__all__ = [
    'handle_generate',
    'handle_sbom',
]
