"""
Serialization of generated VEX documents.

Two output formats are supported:
- OpenVEX JSON, the native form of the generated document
- CycloneDX 1.6 JSON, where each statement becomes a vulnerability with an
  impact analysis attached to the affected product components
"""

import json
import os
import logging
import uuid
from typing import IO, Dict, List, Optional, Union

from cyclonedx.model import Property
from cyclonedx.model.bom import Bom
from cyclonedx.model.component import Component, ComponentType
from cyclonedx.model.contact import OrganizationalContact
from cyclonedx.model.vulnerability import (
    BomTarget,
    ImpactAnalysisJustification,
    ImpactAnalysisResponse,
    ImpactAnalysisState,
    Vulnerability,
    VulnerabilityAnalysis,
)
from cyclonedx.output.json import JsonV1Dot6
from packageurl import PackageURL

from ..document_id import DOCUMENT_ID_PREFIX
from ..exceptions import FileSystemError
from ..models import Justification, Status, VexDocument

logger = logging.getLogger("vexgen-cli")

SUPPORTED_FORMATS = ("openvex", "cyclonedx")

STATUS_TO_CYCLONEDX_STATE = {
    Status.NOT_AFFECTED: ImpactAnalysisState.NOT_AFFECTED,
    Status.AFFECTED: ImpactAnalysisState.EXPLOITABLE,
    Status.FIXED: ImpactAnalysisState.RESOLVED,
    Status.UNDER_INVESTIGATION: ImpactAnalysisState.IN_TRIAGE,
}

JUSTIFICATION_TO_CYCLONEDX = {
    Justification.COMPONENT_NOT_PRESENT: ImpactAnalysisJustification.CODE_NOT_PRESENT,
    Justification.VULNERABLE_CODE_NOT_PRESENT: ImpactAnalysisJustification.CODE_NOT_PRESENT,
    Justification.VULNERABLE_CODE_NOT_IN_EXECUTE_PATH: ImpactAnalysisJustification.CODE_NOT_REACHABLE,
    Justification.VULNERABLE_CODE_CANNOT_BE_CONTROLLED_BY_ADVERSARY: ImpactAnalysisJustification.REQUIRES_ENVIRONMENT,
    Justification.INLINE_MITIGATIONS_ALREADY_EXIST: ImpactAnalysisJustification.PROTECTED_BY_MITIGATING_CONTROL,
}

DOCUMENT_ID_PROPERTY = "vexgen:document-id"


def openvex_json(document: VexDocument) -> str:
    return json.dumps(document.to_dict(), ensure_ascii=False, indent=2)


def _map_justification(value: str) -> Optional[ImpactAnalysisJustification]:
    try:
        return JUSTIFICATION_TO_CYCLONEDX[Justification(value)]
    except ValueError:
        logger.debug(f"No CycloneDX equivalent for justification '{value}'")
        return None


def _serial_number(document_id: str) -> Optional[uuid.UUID]:
    # The content-derived ID is reused so regenerated BOMs keep their serial number
    if not document_id.startswith(DOCUMENT_ID_PREFIX):
        return None
    digest = document_id[len(DOCUMENT_ID_PREFIX):]
    try:
        return uuid.UUID(hex=digest[:32])
    except ValueError:
        return None


def build_cyclonedx_bom(document: VexDocument) -> Bom:
    """Converts a VEX document into a CycloneDX BOM carrying vulnerability analyses."""
    bom = Bom()
    serial = _serial_number(document.id)
    if serial is not None:
        bom.serial_number = serial
    if document.timestamp is not None:
        bom.metadata.timestamp = document.timestamp
    if document.author:
        bom.metadata.authors.add(OrganizationalContact(name=document.author))
    bom.metadata.properties.add(Property(name=DOCUMENT_ID_PROPERTY, value=document.id))

    components: Dict[str, Component] = {}
    for statement in document.statements:
        for product in statement.products:
            if product in components:
                continue
            purl = PackageURL.from_string(product)
            component = Component(
                name=purl.name,
                version=purl.version,
                type=ComponentType.LIBRARY,
                purl=purl,
                bom_ref=product,
            )
            components[product] = component
            bom.components.add(component)

    for index, statement in enumerate(document.statements):
        responses: List[ImpactAnalysisResponse] = []
        if statement.status == Status.FIXED:
            responses.append(ImpactAnalysisResponse.UPDATE)

        analysis = VulnerabilityAnalysis(
            state=STATUS_TO_CYCLONEDX_STATE[statement.status],
            justification=_map_justification(statement.justification) if statement.justification else None,
            responses=responses or None,
            detail=statement.impact_statement or None,
            last_updated=statement.timestamp,
        )
        vulnerability = Vulnerability(
            bom_ref=f"{statement.vulnerability}-{index}",
            id=statement.vulnerability,
            recommendation=statement.action_statement or None,
            analysis=analysis,
            affects=[BomTarget(ref=p) for p in statement.products],
        )
        bom.vulnerabilities.add(vulnerability)

    logger.debug(f"Built CycloneDX BOM with {len(components)} components and {len(document.statements)} vulnerabilities")
    return bom


def cyclonedx_json(document: VexDocument) -> str:
    serializer = JsonV1Dot6(build_cyclonedx_bom(document))
    return serializer.output_as_string(indent=2)


def render(document: VexDocument, output_format: str = "openvex") -> str:
    if output_format == "openvex":
        return openvex_json(document)
    if output_format == "cyclonedx":
        return cyclonedx_json(document)
    raise ValueError(f"Unsupported output format '{output_format}'. Supported formats: {', '.join(SUPPORTED_FORMATS)}")


def write_document(document: VexDocument, output: Union[str, IO[str]], output_format: str = "openvex") -> None:
    """
    Writes *document* to a file path or an open text stream.

    Raises:
        FileSystemError: If the output file cannot be written
    """
    content = render(document, output_format)

    if not isinstance(output, str):
        output.write(content)
        output.write("\n")
        return

    output_dir = os.path.dirname(output) or "."
    try:
        os.makedirs(output_dir, exist_ok=True)
        with open(output, "w", encoding="utf-8") as f:
            f.write(content)
            f.write("\n")
    except OSError as e:
        raise FileSystemError(f"Failed to write VEX document to {output}: {e}") from e
    logger.info(f"VEX document written to {output}")
