"""
Utilities package for the VEX generator CLI.

This package contains error handling helpers and document writers.
"""

from .error_handling import format_and_print_error, handler_error_wrapper
from .vex_writer import render, write_document, SUPPORTED_FORMATS

__all__ = [
    # Error handling
    'format_and_print_error',
    'handler_error_wrapper',
    # Output
    'render',
    'write_document',
    'SUPPORTED_FORMATS',
]
