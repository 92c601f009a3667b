# vexgen_cli/config.py

import argparse
from dataclasses import dataclass

from .exceptions import ConfigurationError

DEFAULT_DISTRO = "wolfi"
DEFAULT_AUTHOR = "Wolfi Release Bot"
DEFAULT_AUTHOR_ROLE = "Document Creator"


@dataclass(frozen=True)
class VexConfig:
    """
    Options applied to every document produced in one run.

    Attributes:
        distro: Namespace used for product identifiers; SBOM purls from other
            namespaces are not considered products of this distribution.
        author: Name attributed as the merged document's author.
        author_role: Role of the author.
    """
    distro: str = DEFAULT_DISTRO
    author: str = DEFAULT_AUTHOR
    author_role: str = DEFAULT_AUTHOR_ROLE

    def __post_init__(self):
        if not self.distro:
            raise ConfigurationError("A distribution name is required to scope product identifiers")

    @classmethod
    def from_params(cls, params: argparse.Namespace) -> "VexConfig":
        """Builds the config from parsed command line arguments."""
        return cls(
            distro=getattr(params, "distro", None) or "",
            author=getattr(params, "author", None) or DEFAULT_AUTHOR,
            author_role=getattr(params, "author_role", None) or DEFAULT_AUTHOR_ROLE,
        )
