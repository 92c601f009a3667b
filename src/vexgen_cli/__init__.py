# vexgen_cli/__init__.py
"""
VEX document generator for package build configurations
"""

from .config import VexConfig
from .generator import from_package_configuration, from_sbom
from .models import Statement, Status, VexDocument

__all__ = [
    'VexConfig',
    'from_package_configuration',
    'from_sbom',
    'Statement',
    'Status',
    'VexDocument',
]
