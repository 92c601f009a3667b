# vexgen_cli/handlers/generate.py

import sys
import logging
import argparse

from ..build_config import load_configurations
from ..config import VexConfig
from ..exceptions import ValidationError
from ..generator import from_package_configuration
from ..utilities.error_handling import handler_error_wrapper
from ..utilities.vex_writer import write_document

logger = logging.getLogger("vexgen-cli")


def write_output(document, params: argparse.Namespace) -> None:
    """Writes the document to --output, or stdout when no path was given."""
    output_format = getattr(params, 'format', 'openvex')
    if params.output:
        write_document(document, params.output, output_format)
        print(f"\nVEX document {document.id} saved to: {params.output}", file=sys.stderr)
    else:
        write_document(document, sys.stdout, output_format)


@handler_error_wrapper
def handle_generate(vex_config: VexConfig, params: argparse.Namespace) -> bool:
    """
    Handler for the 'generate' command. Builds one merged VEX document from
    the given package build configurations.

    Args:
        vex_config: Distro, author and author role for the document
        params: Command line parameters

    Returns:
        bool: True if the document was generated and written
    """
    configs = load_configurations(params.config)
    if not configs:
        raise ValidationError("No build configurations were found in the given paths")

    logger.info(f"Generating VEX document for {len(configs)} package configurations")
    document = from_package_configuration(vex_config, *configs)

    write_output(document, params)
    return True
