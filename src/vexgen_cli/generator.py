# vexgen_cli/generator.py

"""
Assembly of VEX documents from package build configurations.

Every configuration becomes its own sub-document with its own timestamp;
the sub-documents are then handed to a merge routine together with a
document ID derived from the configurations' content.
"""

import logging
from typing import Dict, List, Optional, Sequence

from .config import VexConfig
from .document_id import generate_document_id
from .exceptions import MergeError, ValidationError, VexGenError
from .merge import Merger, MergeOptions, merge_documents
from .models import PackageConfiguration, VexDocument
from .products import SBOMPurl, extract_products, extract_sbom_purls
from .sbom import parse_sbom
from .statements import statements_from_configuration

logger = logging.getLogger("vexgen-cli")


def build_subdocument(config: PackageConfiguration, purls: List[str]) -> VexDocument:
    subdoc = VexDocument.new()
    subdoc.statements = statements_from_configuration(config, subdoc.timestamp, purls)
    return subdoc


def _merge(
    vex_config: VexConfig,
    document_id: str,
    subdocs: List[VexDocument],
    merger: Merger,
) -> VexDocument:
    options = MergeOptions(
        document_id=document_id,
        author=vex_config.author,
        author_role=vex_config.author_role,
    )
    try:
        return merger(options, subdocs)
    except MergeError as e:
        raise MergeError(f"merging vex documents: {e.message}", details=e.details) from e
    except VexGenError:
        raise
    except Exception as e:
        raise MergeError(f"merging vex documents: {e}") from e


def _document_id(configs: Sequence[PackageConfiguration]) -> str:
    try:
        return generate_document_id(configs)
    except VexGenError as e:
        raise type(e)(f"generating doc ID: {e.message}", code=e.code, details=e.details) from e


def from_package_configuration(
    vex_config: VexConfig,
    *configs: PackageConfiguration,
    merger: Optional[Merger] = None,
) -> VexDocument:
    """
    Generates one merged VEX document for the packages described by *configs*.

    Args:
        vex_config: Distro, author and author role for the document
        configs: Package build configurations
        merger: Merge routine to combine the per-package documents;
            defaults to merge_documents

    Raises:
        SerializationError, HashingError: If the document ID cannot be computed
        MergeError: If merging the per-package documents fails
    """
    document_id = _document_id(configs)

    subdocs = []
    for config in configs:
        purls = extract_products(config, vex_config.distro)
        subdocs.append(build_subdocument(config, purls))

    doc = _merge(vex_config, document_id, subdocs, merger or merge_documents)
    logger.info(f"Generated VEX document {doc.id} with {len(doc.statements)} statements")
    return doc


def match_sbom_products(
    purls: Sequence[SBOMPurl],
    configs: Sequence[PackageConfiguration],
) -> Dict[str, List[str]]:
    """
    Maps configuration names to the SBOM locators of packages they build.

    A purl belongs to a configuration when its name is the origin package or
    one of its subpackages. Locators are returned exactly as the SBOM wrote
    them. Configurations with no matching purl are absent from the result.
    """
    matches: Dict[str, List[str]] = {}
    for config in configs:
        names = set(config.package_names())
        found: List[str] = []
        for locator, purl in purls:
            if purl.name in names and locator not in found:
                found.append(locator)
        if found:
            matches[config.name] = found
        else:
            logger.debug(f"No SBOM packages built by {config.name}, skipping")
    return matches


def from_sbom(
    vex_config: VexConfig,
    sbom_path: str,
    configs: Sequence[PackageConfiguration],
    merger: Optional[Merger] = None,
) -> VexDocument:
    """
    Generates a VEX document covering the distro packages listed in an SBOM.

    Products of each statement are the purls exactly as they appear in the
    SBOM rather than those computed from the configuration.

    Raises:
        SBOMReadError, SBOMParseError: If the SBOM cannot be read
        ProductURLParseError: If the SBOM contains a malformed purl
        ValidationError: If no configuration builds any package in the SBOM
        SerializationError, HashingError, MergeError: As for from_package_configuration
    """
    sbom = parse_sbom(sbom_path)
    purls = extract_sbom_purls(vex_config, sbom)
    matches = match_sbom_products(purls, configs)

    matched_configs = [c for c in configs if c.name in matches]
    if not matched_configs:
        raise ValidationError(
            f"None of the {len(configs)} build configurations produce a '{vex_config.distro}' package listed in {sbom_path}"
        )

    document_id = _document_id(matched_configs)
    subdocs = [build_subdocument(c, matches[c.name]) for c in matched_configs]

    doc = _merge(vex_config, document_id, subdocs, merger or merge_documents)
    logger.info(f"Generated VEX document {doc.id} for {len(matched_configs)} packages found in SBOM")
    return doc
