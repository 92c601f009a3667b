# vexgen_cli/sbom.py

import os
import logging

from .exceptions import SBOMReadError, SBOMParseError

logger = logging.getLogger("vexgen-cli")


def parse_sbom(sbom_path: str):
    """
    Reads an SPDX SBOM (JSON, YAML, XML, RDF or tag-value) and returns the
    parsed spdx-tools Document.

    Raises:
        SBOMReadError: If the file does not exist or cannot be opened
        SBOMParseError: If the file content is not a parseable SPDX document
    """
    try:
        from spdx_tools.spdx.parser.parse_anything import parse_file
        from spdx_tools.spdx.parser.error import SPDXParsingError
    except ImportError as e:
        raise SBOMParseError("SPDX tools library not available. Please install spdx-tools.") from e

    if not os.path.isfile(sbom_path):
        raise SBOMReadError(f"opening SBOM file: {sbom_path}: no such file")

    logger.debug(f"Parsing SBOM file: {sbom_path}")
    try:
        document = parse_file(sbom_path)
    except OSError as e:
        raise SBOMReadError(f"opening SBOM file: {sbom_path}: {e}") from e
    except SPDXParsingError as e:
        messages = "; ".join(e.get_messages()[:5])
        raise SBOMParseError(f"unmarshaling SBOM data: {messages}") from e
    except ValueError as e:
        # Invalid JSON and unknown file extensions surface as ValueError subclasses
        raise SBOMParseError(f"unmarshaling SBOM data: {e}") from e

    logger.debug(f"SBOM contains {len(document.packages)} packages")
    return document
