# vexgen_cli/handlers/sbom.py

import logging
import argparse

from ..build_config import load_configurations
from ..config import VexConfig
from ..exceptions import ValidationError
from ..generator import from_sbom
from ..utilities.error_handling import handler_error_wrapper
from .generate import write_output

logger = logging.getLogger("vexgen-cli")


@handler_error_wrapper
def handle_sbom(vex_config: VexConfig, params: argparse.Namespace) -> bool:
    """
    Handler for the 'sbom' command. Builds a VEX document for the distro
    packages listed in an SPDX SBOM, using their build configurations.

    Returns:
        bool: True if the document was generated and written
    """
    configs = load_configurations(params.config)
    if not configs:
        raise ValidationError("No build configurations were found in the given paths")

    logger.info(f"Generating VEX document for '{vex_config.distro}' packages in {params.sbom}")
    document = from_sbom(vex_config, params.sbom, configs)

    write_output(document, params)
    return True
