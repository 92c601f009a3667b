"""
Error handling utilities for the VEX generator CLI.

This module contains functions for standardized error handling and formatting
across all CLI handlers.
"""

import logging
import argparse
import functools
from typing import Callable

from ..exceptions import (
    VexGenError,
    ConfigurationError,
    ValidationError,
    FileSystemError,
    SerializationError,
    HashingError,
    MergeError,
    SBOMReadError,
    SBOMParseError,
    ProductURLParseError,
)

logger = logging.getLogger("vexgen-cli")


def format_and_print_error(error: Exception, handler_name: str, params: argparse.Namespace):
    """
    Formats and prints a standardized error message for CLI users.

    Args:
        error: The exception that occurred
        handler_name: Name of the handler where the error occurred
        params: Command line parameters
    """
    command = getattr(params, 'command', 'unknown')
    error_message = getattr(error, 'message', str(error))
    error_code = getattr(error, 'code', None)
    error_details = getattr(error, 'details', {})

    if isinstance(error, (SBOMReadError, SBOMParseError)):
        print(f"\n❌ Unable to read SBOM")
        print(f"   {error_message}")
        print(f"\n💡 Please check:")
        print(f"   • The SBOM path is correct: {getattr(params, 'sbom', '<not specified>')}")
        print(f"   • The file is an SPDX document (JSON, YAML, XML, RDF or tag-value)")

    elif isinstance(error, ProductURLParseError):
        print(f"\n❌ Malformed package URL in SBOM")
        print(f"   {error_message}")
        print(f"\n💡 No document was generated, since skipping the package would narrow its statements")

    elif isinstance(error, (SerializationError, HashingError)):
        print(f"\n❌ Unable to compute the document ID")
        print(f"   {error_message}")
        print(f"\n💡 Check that every build configuration contains only plain YAML data")

    elif isinstance(error, MergeError):
        print(f"\n❌ Merging the per-package documents failed")
        print(f"   {error_message}")

    elif isinstance(error, FileSystemError):
        print(f"\n❌ File system error")
        print(f"   {error_message}")
        print(f"\n💡 Please check:")
        print(f"   • File permissions are correct")
        print(f"   • All specified paths exist")
        if getattr(params, 'config', None):
            print(f"   • Configurations specified: {', '.join(params.config)}")

    elif isinstance(error, ValidationError):
        print(f"\n❌ Invalid input")
        print(f"   {error_message}")
        print(f"\n💡 Please check your build configurations and input files")

    elif isinstance(error, ConfigurationError):
        print(f"\n❌ Configuration error")
        print(f"   {error_message}")
        print(f"\n💡 Please check your command-line arguments and VEX_* environment variables")

    else:
        print(f"\n❌ Error executing '{command}' command: {error_message}")

    if error_code:
        print(f"\nError code: {error_code}")

    if getattr(params, 'log', 'INFO') == 'DEBUG' and error_details:
        print("\nDetailed error information:")
        for key, value in error_details.items():
            print(f"  • {key}: {value}")
    else:
        print(f"\nFor more details, run with --log DEBUG for verbose output")


def handler_error_wrapper(handler_func: Callable) -> Callable:
    """
    A decorator that wraps handler functions with standardized error handling.

    Expected errors are printed and re-raised unchanged so main() can pick the
    exit code; anything else is wrapped in a VexGenError.

    Example:
        @handler_error_wrapper
        def handle_generate(vex_config, params):
            ...
    """
    @functools.wraps(handler_func)
    def wrapper(vex_config, params):
        try:
            command_name = getattr(params, 'command', 'unknown')
            logger.debug(f"Starting {handler_func.__name__} for command '{command_name}'")
            return handler_func(vex_config, params)

        except VexGenError as e:
            logger.debug(f"Expected error in {handler_func.__name__}: {type(e).__name__}: {e.message}")
            format_and_print_error(e, handler_func.__name__, params)
            raise

        except Exception as e:
            logger.error(f"Unexpected error in {handler_func.__name__}: {e}", exc_info=True)
            cli_error = VexGenError(
                f"Failed to execute {getattr(params, 'command', 'command')}: {str(e)}",
                details={"error": str(e), "handler": handler_func.__name__}
            )
            format_and_print_error(cli_error, handler_func.__name__, params)
            raise cli_error from e

    return wrapper
