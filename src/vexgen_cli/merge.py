# vexgen_cli/merge.py

import copy
import logging
from dataclasses import dataclass
from typing import Callable, List

from .exceptions import MergeError
from .models import Statement, Status, VexDocument
from .statements import sort_statements

logger = logging.getLogger("vexgen-cli")


@dataclass(frozen=True)
class MergeOptions:
    document_id: str
    author: str = ""
    author_role: str = ""


# Signature of a merge routine: takes options and sub-documents, returns the merged document
Merger = Callable[[MergeOptions, List[VexDocument]], VexDocument]


def _check_statement(statement: Statement, index: int) -> None:
    if not statement.vulnerability:
        raise MergeError(f"sub-document {index} has a statement without a vulnerability")
    if not isinstance(statement.status, Status):
        raise MergeError(
            f"sub-document {index} has an invalid status '{statement.status}' for {statement.vulnerability}"
        )


def merge_documents(options: MergeOptions, documents: List[VexDocument]) -> VexDocument:
    """
    Combines the statements of several VEX documents into a new one.

    Statements without a timestamp inherit the timestamp of the document
    they came from, and the combined list is sorted against the new
    document's timestamp. The input documents are not modified.

    Raises:
        MergeError: If a sub-document has no timestamp or carries a malformed statement
    """
    merged = VexDocument.new(
        id=options.document_id,
        author=options.author,
        author_role=options.author_role,
    )

    statements: List[Statement] = []
    for index, doc in enumerate(documents):
        if doc.timestamp is None:
            raise MergeError(f"sub-document {index} has no timestamp")
        for statement in doc.statements:
            _check_statement(statement, index)
            s = copy.copy(statement)
            if s.timestamp is None:
                s.timestamp = doc.timestamp
            statements.append(s)

    sort_statements(statements, merged.timestamp)
    merged.statements = statements
    logger.debug(f"Merged {len(documents)} documents into {merged.id} with {len(statements)} statements")
    return merged
