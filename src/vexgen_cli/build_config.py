# vexgen_cli/build_config.py

"""
Loading of melange-style package build configurations.

Only the parts relevant to VEX generation are modelled (package identity,
subpackages, secfixes and advisories); the full mapping is kept on the
resulting PackageConfiguration for document identity purposes.
"""

import os
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List

import yaml

from .exceptions import FileSystemError, ValidationError
from .models import AdvisoryContent, PackageConfiguration

logger = logging.getLogger("vexgen-cli")

CONFIG_EXTENSIONS = {".yaml", ".yml"}


def parse_configuration(data: Any, origin: str = "<memory>") -> PackageConfiguration:
    """
    Builds a PackageConfiguration from an already-parsed YAML mapping.

    Raises:
        ValidationError: If the mapping is missing package identity fields or
            carries malformed secfixes/advisories sections.
    """
    if not isinstance(data, dict):
        raise ValidationError(f"{origin}: build configuration must be a mapping")

    package = data.get("package")
    if not isinstance(package, dict):
        raise ValidationError(f"{origin}: missing 'package' section")

    name = package.get("name")
    version = package.get("version")
    if not name or version is None or version == "":
        raise ValidationError(f"{origin}: 'package.name' and 'package.version' are required")

    try:
        epoch = int(package.get("epoch") or 0)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{origin}: invalid epoch '{package.get('epoch')}'") from e

    subpackages = []
    for sub in data.get("subpackages") or []:
        if not isinstance(sub, dict) or not sub.get("name"):
            raise ValidationError(f"{origin}: every subpackage needs a name")
        subpackages.append(str(sub["name"]))

    return PackageConfiguration(
        name=str(name),
        version=str(version),
        epoch=epoch,
        subpackages=subpackages,
        secfixes=_parse_secfixes(data.get("secfixes"), origin),
        advisories=_parse_advisories(data.get("advisories"), origin),
        source=data,
    )


def _parse_secfixes(raw: Any, origin: str) -> Dict[str, List[str]]:
    if not raw:
        return {}
    if not isinstance(raw, dict):
        raise ValidationError(f"{origin}: 'secfixes' must map package versions to vulnerability lists")

    secfixes: Dict[str, List[str]] = {}
    for version, vulns in raw.items():
        # YAML may hand back unquoted versions such as 0 as integers
        key = str(version)
        if vulns is None:
            vulns = []
        if not isinstance(vulns, list):
            raise ValidationError(f"{origin}: secfixes entry '{key}' must be a list")
        secfixes[key] = [str(v) for v in vulns]
    return secfixes


def _parse_advisories(raw: Any, origin: str) -> Dict[str, List[AdvisoryContent]]:
    if not raw:
        return {}
    if not isinstance(raw, dict):
        raise ValidationError(f"{origin}: 'advisories' must map vulnerability IDs to entry lists")

    advisories: Dict[str, List[AdvisoryContent]] = {}
    for vuln, entries in raw.items():
        if not isinstance(entries, list):
            raise ValidationError(f"{origin}: advisories for '{vuln}' must be a list")
        try:
            advisories[str(vuln)] = [AdvisoryContent.from_dict(e) for e in entries]
        except ValidationError as e:
            raise ValidationError(f"{origin}: advisory for '{vuln}': {e.message}") from e
    return advisories


def load_configuration(path: str) -> PackageConfiguration:
    """
    Reads and parses a single build configuration file.

    Raises:
        FileSystemError: If the file does not exist or cannot be read
        ValidationError: If the file is not valid YAML or lacks required fields
    """
    if not os.path.isfile(path):
        raise FileSystemError(f"Build configuration does not exist: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValidationError(f"Invalid YAML in build configuration '{path}': {e}") from e
    except OSError as e:
        raise FileSystemError(f"Unable to read build configuration '{path}': {e}") from e

    config = parse_configuration(data, origin=path)
    logger.debug(f"Loaded configuration {config.name}-{config.full_version} from {path}")
    return config


def load_configurations(paths: Iterable[str]) -> List[PackageConfiguration]:
    """
    Loads configurations from files and directories.

    Directories contribute every YAML file directly inside them, in sorted
    order; files are loaded in the order given.
    """
    configs: List[PackageConfiguration] = []
    for path in paths:
        if os.path.isdir(path):
            entries = sorted(
                p for p in Path(path).iterdir()
                if p.is_file() and p.suffix.lower() in CONFIG_EXTENSIONS
            )
            if not entries:
                logger.warning(f"No build configurations found in directory: {path}")
            configs.extend(load_configuration(str(p)) for p in entries)
        else:
            configs.append(load_configuration(path))
    return configs
