# vexgen_cli/document_id.py

import hashlib
import logging
from typing import List, Sequence

import yaml

from .exceptions import HashingError, SerializationError
from .models import PackageConfiguration

logger = logging.getLogger("vexgen-cli")

DOCUMENT_ID_PREFIX = "vex-"
HASH_DELIMITER = ":"


def canonical_serialization(config: PackageConfiguration) -> bytes:
    """
    Serializes a configuration to YAML with sorted keys.

    Raises:
        SerializationError: If the configuration holds values YAML cannot represent
    """
    try:
        return yaml.safe_dump(config.to_dict(), sort_keys=True, allow_unicode=True).encode("utf-8")
    except (yaml.YAMLError, TypeError, ValueError) as e:
        raise SerializationError(
            f"marshaling build configuration '{config.name}': {e}",
            details={"package": config.name},
        ) from e


def _sha256_hex(data: bytes) -> str:
    try:
        h = hashlib.sha256()
        h.update(data)
        return h.hexdigest()
    except (TypeError, ValueError) as e:
        raise HashingError(f"hashing configuration data: {e}") from e


def generate_document_id(configs: Sequence[PackageConfiguration]) -> str:
    """
    Computes a document ID from the content of *configs*.

    Each configuration is hashed on its own and the sorted digests are
    hashed again, so the result does not depend on the order of *configs*.

    Raises:
        SerializationError: If any configuration cannot be serialized
        HashingError: If digest computation fails
    """
    hashes: List[str] = [_sha256_hex(canonical_serialization(c)) for c in configs]
    hashes.sort()

    document_id = DOCUMENT_ID_PREFIX + _sha256_hex(HASH_DELIMITER.join(hashes).encode("utf-8"))
    logger.debug(f"Generated document ID {document_id} from {len(hashes)} configurations")
    return document_id
