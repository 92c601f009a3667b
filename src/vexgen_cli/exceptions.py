# vexgen_cli/exceptions.py

from typing import Any, Dict, Optional


class VexGenError(Exception):
    """Base class for all errors raised by the VEX generator."""

    def __init__(self, message: str, code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}


# --- Input / setup errors ---

class ConfigurationError(VexGenError):
    """Invalid or missing run configuration (distro, author, ...)."""


class ValidationError(VexGenError):
    """Input data (build configuration, advisory record) is malformed."""


class FileSystemError(VexGenError):
    """A required file or directory is missing or unreadable."""


# --- Document identity ---

class SerializationError(VexGenError):
    """A build configuration cannot be canonically serialized."""


class HashingError(VexGenError):
    """Digest computation over serialized configuration data failed."""


# --- Merging ---

class MergeError(VexGenError):
    """The merge routine rejected the sub-documents it was given."""


# --- SBOM handling ---

class SBOMReadError(VexGenError):
    """The SBOM file could not be read."""


class SBOMParseError(VexGenError):
    """The SBOM file could not be parsed as an SPDX document."""


class ProductURLParseError(VexGenError):
    """A package URL locator found in an SBOM is malformed."""
