# vexgen_cli/statements.py

"""
Derivation and reconciliation of VEX statements for a single package.

Two record sources feed a package's statements:

- ``secfixes``: the legacy mapping of package version to the vulnerabilities
  fixed in it. Version ``"0"`` marks vulnerabilities the package was never
  affected by. Status is derived, never stored.
- ``advisories``: the richer mapping of vulnerability ID to a history of
  explicitly statused and timestamped entries, carried through verbatim.

Mappings are always walked in sorted key order so output never depends on
how the mappings happened to be built.
"""

import logging
from datetime import datetime
from typing import Dict, List, Set

from .models import (
    NOT_AFFECTED_VERSION,
    AdvisoryContent,
    PackageConfiguration,
    Statement,
    Status,
    parse_timestamp,
)

logger = logging.getLogger("vexgen-cli")


def determine_status(package_version: str) -> Status:
    if package_version == NOT_AFFECTED_VERSION:
        return Status.NOT_AFFECTED
    return Status.FIXED


def statement_from_secfixes_item(package_version: str, vulnerability: str, purls: List[str]) -> Statement:
    return Statement(
        vulnerability=vulnerability,
        status=determine_status(package_version),
        products=list(purls),
    )


def statements_from_secfixes(secfixes: Dict[str, List[str]], purls: List[str]) -> List[Statement]:
    """One statement per (version, vulnerability) pair. Repeats across versions are kept."""
    statements = []
    for package_version in sorted(secfixes):
        for vulnerability in secfixes[package_version]:
            statements.append(statement_from_secfixes_item(package_version, vulnerability, purls))
    return statements


def statement_from_advisory_content(content: AdvisoryContent, vulnerability: str, purls: List[str]) -> Statement:
    return Statement(
        vulnerability=vulnerability,
        status=content.status,
        justification=content.justification,
        action_statement=content.action_statement,
        impact_statement=content.impact_statement,
        products=list(purls),
        timestamp=content.timestamp,
    )


def statements_from_advisories(advisories: Dict[str, List[AdvisoryContent]], purls: List[str]) -> List[Statement]:
    """One statement per advisory entry, so a vulnerability's whole history is kept."""
    statements = []
    for vulnerability in sorted(advisories):
        for content in advisories[vulnerability]:
            statements.append(statement_from_advisory_content(content, vulnerability, purls))
    return statements


def not_affected_vulnerabilities(statements: List[Statement]) -> Set[str]:
    return {s.vulnerability for s in statements if s.status == Status.NOT_AFFECTED}


def suppress_obviated_secfixes(
    secfixes_statements: List[Statement],
    advisory_statements: List[Statement],
) -> List[Statement]:
    """
    Drops secfixes statements for vulnerabilities that an advisory already
    declares ``not_affected``.

    Advisories are the curated source: once one says not_affected for a
    vulnerability, the legacy claim for it is redundant. Advisory statements
    themselves are never dropped.
    """
    suppressed = not_affected_vulnerabilities(advisory_statements)
    kept = [s for s in secfixes_statements if s.vulnerability not in suppressed]
    dropped = len(secfixes_statements) - len(kept)
    if dropped:
        logger.debug(f"Suppressed {dropped} secfixes statements obviated by advisories: {sorted(suppressed)}")
    return kept


def sort_statements(statements: List[Statement], document_timestamp: datetime) -> None:
    """
    Sorts statements in place by vulnerability ID, then by timestamp.

    Statements without their own timestamp sort as if made at
    *document_timestamp*. Naive timestamps compare as UTC. The sort is
    stable, so equal keys keep their relative input order.
    """
    statements.sort(key=lambda s: (s.vulnerability, parse_timestamp(s.timestamp or document_timestamp)))


def statements_from_configuration(
    config: PackageConfiguration,
    document_timestamp: datetime,
    purls: List[str],
) -> List[Statement]:
    """
    Returns the reconciled, ordered statements for one package.

    Exact duplicate "fixed" statements arising from the same vulnerability
    listed under several secfixes versions are not collapsed here.
    """
    advisory_statements = statements_from_advisories(config.advisories, purls)
    secfixes_statements = statements_from_secfixes(config.secfixes, purls)

    statements = suppress_obviated_secfixes(secfixes_statements, advisory_statements)
    statements.extend(advisory_statements)

    sort_statements(statements, document_timestamp)
    logger.debug(f"Built {len(statements)} statements for {config.name}-{config.full_version}")
    return statements
