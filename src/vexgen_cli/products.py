# vexgen_cli/products.py

import logging
from typing import Any, List, NamedTuple

from packageurl import PackageURL

from .config import VexConfig
from .exceptions import ProductURLParseError
from .models import PackageConfiguration

logger = logging.getLogger("vexgen-cli")

PURL_REFERENCE_TYPE = "purl"


class SBOMPurl(NamedTuple):
    """A purl reference from an SBOM: the locator as written and its parsed form."""
    locator: str
    purl: PackageURL


def extract_products(config: PackageConfiguration, distro: str) -> List[str]:
    """Returns the product identifiers every statement of *config* refers to."""
    return config.package_urls(distro)


def extract_sbom_purls(vex_config: VexConfig, sbom: Any) -> List[SBOMPurl]:
    """
    Returns the purls in an SPDX document that identify packages of the
    configured distribution, each paired with its locator string unchanged.

    Only external references of type ``purl`` are considered. A malformed
    locator aborts the whole extraction, since dropping it would silently
    narrow the scope of every statement about that package.

    Raises:
        ProductURLParseError: If a purl locator cannot be parsed
    """
    purls: List[SBOMPurl] = []
    for package in sbom.packages or []:
        for ref in package.external_references or []:
            if ref.reference_type != PURL_REFERENCE_TYPE:
                continue

            try:
                purl = PackageURL.from_string(ref.locator)
            except ValueError as e:
                raise ProductURLParseError(
                    f"parsing purl: {ref.locator}: {e}",
                    details={"locator": ref.locator, "package": getattr(package, "name", None)},
                ) from e

            if purl.namespace == vex_config.distro:
                purls.append(SBOMPurl(ref.locator, purl))

    logger.debug(f"Found {len(purls)} '{vex_config.distro}' purls in SBOM")
    return purls
