# vexgen_cli/models.py

"""
Data model for VEX generation.

Build configurations are read-only inputs; statements and documents are
created fresh for every run and never persisted by this package.
"""

import copy
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from packageurl import PackageURL

from .exceptions import ValidationError

OPENVEX_CONTEXT = "https://openvex.dev/ns/v0.2.0"
PURL_TYPE = "apk"

# Version key in secfixes meaning "this package was never affected"
NOT_AFFECTED_VERSION = "0"


class Status(str, Enum):
    NOT_AFFECTED = "not_affected"
    AFFECTED = "affected"
    FIXED = "fixed"
    UNDER_INVESTIGATION = "under_investigation"

    @classmethod
    def from_value(cls, value: Any) -> "Status":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip())
        except ValueError:
            valid = ", ".join(s.value for s in cls)
            raise ValidationError(f"Invalid VEX status '{value}'. Valid statuses: {valid}")


class Justification(str, Enum):
    COMPONENT_NOT_PRESENT = "component_not_present"
    VULNERABLE_CODE_NOT_PRESENT = "vulnerable_code_not_present"
    VULNERABLE_CODE_NOT_IN_EXECUTE_PATH = "vulnerable_code_not_in_execute_path"
    VULNERABLE_CODE_CANNOT_BE_CONTROLLED_BY_ADVERSARY = "vulnerable_code_cannot_be_controlled_by_adversary"
    INLINE_MITIGATIONS_ALREADY_EXIST = "inline_mitigations_already_exist"


def utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(microsecond=0)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Normalizes a timestamp read from YAML into an aware UTC datetime.

    PyYAML already turns ISO 8601 scalars into datetime objects, but quoted
    values arrive as strings. Naive datetimes are taken to be UTC.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        ts = value
    elif isinstance(value, str):
        try:
            ts = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError as e:
            raise ValidationError(f"Invalid timestamp '{value}': {e}") from e
    else:
        raise ValidationError(f"Invalid timestamp '{value}' of type {type(value).__name__}")

    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


def format_timestamp(ts: datetime) -> str:
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


@dataclass
class AdvisoryContent:
    """One entry in a package's advisory history for a vulnerability."""
    timestamp: Optional[datetime]
    status: Status
    justification: str = ""
    action_statement: str = ""
    impact_statement: str = ""

    def __post_init__(self):
        self.timestamp = parse_timestamp(self.timestamp)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AdvisoryContent":
        if not isinstance(data, dict):
            raise ValidationError(f"Advisory entry must be a mapping, got {type(data).__name__}")
        return cls(
            timestamp=parse_timestamp(data.get("timestamp")),
            status=Status.from_value(data.get("status")),
            justification=data.get("justification") or "",
            action_statement=data.get("action") or data.get("action-statement") or "",
            impact_statement=data.get("impact") or data.get("impact-statement") or "",
        )

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"status": self.status.value}
        if self.timestamp is not None:
            result["timestamp"] = format_timestamp(self.timestamp)
        if self.justification:
            result["justification"] = self.justification
        if self.action_statement:
            result["action"] = self.action_statement
        if self.impact_statement:
            result["impact"] = self.impact_statement
        return result


@dataclass
class PackageConfiguration:
    """
    A package's build configuration as far as VEX generation is concerned.

    ``source`` keeps the complete mapping the configuration was loaded from
    so that the document identity reflects every byte of the original, not
    only the fields modelled here.
    """
    name: str
    version: str
    epoch: int = 0
    subpackages: List[str] = field(default_factory=list)
    secfixes: Dict[str, List[str]] = field(default_factory=dict)
    advisories: Dict[str, List[AdvisoryContent]] = field(default_factory=dict)
    source: Optional[Dict[str, Any]] = None

    @property
    def full_version(self) -> str:
        return f"{self.version}-r{self.epoch}"

    def package_names(self) -> List[str]:
        """Origin package first, then subpackages in declared order."""
        return [self.name] + [s for s in self.subpackages if s != self.name]

    def package_urls(self, distro: str) -> List[str]:
        """Returns the purls of every package this configuration builds for *distro*."""
        return [
            PackageURL(type=PURL_TYPE, namespace=distro, name=name, version=self.full_version).to_string()
            for name in self.package_names()
        ]

    def to_dict(self) -> Dict[str, Any]:
        """Structured form used for canonical serialization."""
        if self.source is not None:
            return copy.deepcopy(self.source)
        return {
            "package": {
                "name": self.name,
                "version": self.version,
                "epoch": self.epoch,
            },
            "subpackages": [{"name": s} for s in self.subpackages],
            "secfixes": {k: list(v) for k, v in self.secfixes.items()},
            "advisories": {k: [e.to_dict() for e in v] for k, v in self.advisories.items()},
        }


@dataclass
class Statement:
    vulnerability: str
    status: Status
    products: List[str] = field(default_factory=list)
    justification: str = ""
    action_statement: str = ""
    impact_statement: str = ""
    timestamp: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "vulnerability": {"name": self.vulnerability},
            "products": [{"@id": p} for p in self.products],
            "status": self.status.value,
        }
        if self.timestamp is not None:
            result["timestamp"] = format_timestamp(self.timestamp)
        if self.justification:
            result["justification"] = self.justification
        if self.impact_statement:
            result["impact_statement"] = self.impact_statement
        if self.action_statement:
            result["action_statement"] = self.action_statement
        return result


@dataclass
class VexDocument:
    id: str = ""
    author: str = ""
    author_role: str = ""
    timestamp: Optional[datetime] = None
    version: int = 1
    statements: List[Statement] = field(default_factory=list)

    @classmethod
    def new(cls, **kwargs) -> "VexDocument":
        """Creates an empty document stamped with the current time."""
        kwargs.setdefault("timestamp", utc_now())
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "@context": OPENVEX_CONTEXT,
            "@id": self.id,
            "author": self.author,
        }
        if self.author_role:
            result["role"] = self.author_role
        if self.timestamp is not None:
            result["timestamp"] = format_timestamp(self.timestamp)
        result["version"] = self.version
        result["statements"] = [s.to_dict() for s in self.statements]
        return result
