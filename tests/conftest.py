import os
import argparse
from datetime import datetime, timezone

import pytest
from unittest.mock import MagicMock

from vexgen_cli.config import VexConfig
from vexgen_cli.models import AdvisoryContent, PackageConfiguration, Status

FIXTURES_DIR = os.path.join(os.path.dirname(__file__), 'fixtures')


def ts(day: int, hour: int = 0) -> datetime:
    """Shorthand for an aware timestamp in January 2024."""
    return datetime(2024, 1, day, hour, tzinfo=timezone.utc)


@pytest.fixture
def fixtures_dir():
    return FIXTURES_DIR


@pytest.fixture
def openssl_config_path():
    return os.path.join(FIXTURES_DIR, 'openssl.yaml')


@pytest.fixture
def curl_config_path():
    return os.path.join(FIXTURES_DIR, 'curl.yaml')


@pytest.fixture
def spdx_sbom_path():
    return os.path.join(FIXTURES_DIR, 'image.spdx.json')


@pytest.fixture
def vex_config():
    return VexConfig(distro="wolfi", author="Test Author", author_role="Test Role")


@pytest.fixture
def make_config():
    """Factory for in-memory package configurations."""
    def _make(name="pkg", version="1.0.0", epoch=0, subpackages=None, secfixes=None, advisories=None):
        return PackageConfiguration(
            name=name,
            version=version,
            epoch=epoch,
            subpackages=subpackages or [],
            secfixes=secfixes or {},
            advisories=advisories or {},
        )
    return _make


@pytest.fixture
def advisory():
    """Factory for advisory entries."""
    def _advisory(status, timestamp=None, **kwargs):
        return AdvisoryContent(
            timestamp=timestamp or ts(1),
            status=Status(status),
            **kwargs,
        )
    return _advisory


@pytest.fixture
def mock_params(mocker):
    """Provides a mocked argparse.Namespace object for handler tests."""
    params = mocker.MagicMock(spec=argparse.Namespace)
    params.command = None  # Set specifically in tests needing it
    params.config = [os.path.join(FIXTURES_DIR, 'openssl.yaml')]
    params.sbom = os.path.join(FIXTURES_DIR, 'image.spdx.json')
    params.output = None
    params.format = "openvex"
    params.log = "INFO"
    params.distro = "wolfi"
    params.author = "Test Author"
    params.author_role = "Test Role"
    return params
