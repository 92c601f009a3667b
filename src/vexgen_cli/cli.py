# vexgen_cli/cli.py

import argparse
import os
import logging
from argparse import RawTextHelpFormatter

from .config import DEFAULT_AUTHOR, DEFAULT_AUTHOR_ROLE, DEFAULT_DISTRO
from .utilities.vex_writer import SUPPORTED_FORMATS

logger = logging.getLogger(__name__)


# --- Helper functions for common arguments ---
def add_common_output_options(subparser):
    output_args = subparser.add_argument_group("Output Options")
    output_args.add_argument("--output", "-o", help="Write the VEX document to this file instead of stdout.", metavar="PATH")
    output_args.add_argument(
        "--format",
        help="Output format (Default: openvex):\n"
             "  'openvex'   - OpenVEX JSON document\n"
             "  'cyclonedx' - CycloneDX 1.6 JSON with vulnerability analysis",
        choices=list(SUPPORTED_FORMATS),
        default="openvex",
    )


def add_config_option(subparser):
    subparser.add_argument(
        "--config", "-c",
        help="Package build configuration file(s) or directories of them.",
        nargs="+",
        required=True,
        metavar="PATH",
    )


# --- Main Parsing Function ---
def parse_cmdline_args(argv=None):
    """
    Parse command line arguments.

    Args:
        argv: Argument list to parse instead of sys.argv[1:]

    Returns:
        argparse.Namespace: Parsed command line arguments
    """
    parser = argparse.ArgumentParser(
        prog="vexgen-cli",
        description="Generate VEX documents from package build configurations.",
        formatter_class=RawTextHelpFormatter,
        epilog="""
Environment Variables:
  VEX_DISTRO       : Distribution namespace for product identifiers (Default: wolfi)
  VEX_AUTHOR       : Document author
  VEX_AUTHOR_ROLE  : Document author role

Example Usage:
  # Generate one VEX document for a set of packages
  vexgen-cli generate --config openssl.yaml curl.yaml --output vex.json

  # Generate for every configuration in a directory, as CycloneDX
  vexgen-cli --author "Security Team" generate --config ./packages/ --format cyclonedx -o vex.cdx.json

  # Generate for the distro packages found in an image SBOM
  vexgen-cli sbom --sbom image.spdx.json --config ./packages/ --output image.vex.json
"""
    )

    # --- Global Arguments (apply to all subcommands) ---
    global_args = parser.add_argument_group("Global Arguments")
    global_args.add_argument(
        "--distro",
        help="Distribution namespace for product identifiers. Overrides VEX_DISTRO env var.",
        default=os.getenv("VEX_DISTRO", DEFAULT_DISTRO),
        metavar="NAME"
    )
    global_args.add_argument(
        "--author",
        help="Author of the generated document. Overrides VEX_AUTHOR env var.",
        default=os.getenv("VEX_AUTHOR", DEFAULT_AUTHOR),
        metavar="NAME"
    )
    global_args.add_argument(
        "--author-role",
        help="Role of the document author. Overrides VEX_AUTHOR_ROLE env var.",
        default=os.getenv("VEX_AUTHOR_ROLE", DEFAULT_AUTHOR_ROLE),
        metavar="ROLE"
    )
    global_args.add_argument(
        "--log",
        help="Logging level (Default: INFO)",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
    )

    # --- Subparsers ---
    subparsers = parser.add_subparsers(dest='command', help='Available commands', required=True, metavar='COMMAND')

    # --- 'generate' Subcommand ---
    generate_parser = subparsers.add_parser(
        'generate',
        help='Generate a VEX document from build configurations.',
        description='Generate one merged VEX document from the secfixes and advisories of package build configurations.',
        formatter_class=RawTextHelpFormatter
    )
    add_config_option(generate_parser)
    add_common_output_options(generate_parser)

    # --- 'sbom' Subcommand ---
    sbom_parser = subparsers.add_parser(
        'sbom',
        help='Generate a VEX document for the packages listed in an SBOM.',
        description='Generate a VEX document for the distribution packages found in an SPDX SBOM.',
        formatter_class=RawTextHelpFormatter
    )
    sbom_parser.add_argument("--sbom", help="Path to the SPDX SBOM file.", required=True, metavar="PATH")
    add_config_option(sbom_parser)
    add_common_output_options(sbom_parser)

    args = parser.parse_args(argv)
    logger.debug("Parsed arguments: %s", args)
    return args
