# tests/unit/test_build_config.py

import os
from datetime import datetime, timezone

import pytest

from vexgen_cli.build_config import (
    load_configuration,
    load_configurations,
    parse_configuration,
)
from vexgen_cli.exceptions import FileSystemError, ValidationError
from vexgen_cli.models import Status


class TestLoadConfiguration:

    def test_load_openssl_fixture(self, openssl_config_path):
        config = load_configuration(openssl_config_path)

        assert config.name == "openssl"
        assert config.version == "3.1.4"
        assert config.epoch == 2
        assert config.full_version == "3.1.4-r2"
        assert config.subpackages == ["openssl-dev", "libssl3", "libcrypto3"]
        assert config.secfixes == {
            "0": ["CVE-2023-0001", "CVE-2023-0002"],
            "3.1.2-r0": ["CVE-2023-2650"],
            "3.1.4-r0": ["CVE-2023-5363"],
        }

    def test_advisories_parsed(self, openssl_config_path):
        config = load_configuration(openssl_config_path)

        history = config.advisories["CVE-2023-0001"]
        assert [e.status for e in history] == [Status.UNDER_INVESTIGATION, Status.NOT_AFFECTED]
        assert history[1].timestamp == datetime(2023, 6, 10, 8, 30, tzinfo=timezone.utc)
        assert history[1].justification == "vulnerable_code_not_present"
        assert history[1].impact_statement.startswith("The vulnerable code was removed")
        assert config.advisories["CVE-2023-6129"][0].action_statement == "Upgrade to 3.1.5 once available."

    def test_source_keeps_unmodelled_sections(self, openssl_config_path):
        config = load_configuration(openssl_config_path)

        assert "pipeline" in config.source

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileSystemError, match="does not exist"):
            load_configuration(str(tmp_path / "missing.yaml"))

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("package: [unclosed\n")

        with pytest.raises(ValidationError, match="Invalid YAML"):
            load_configuration(str(path))


class TestLoadConfigurations:

    def test_directory_loads_yaml_files_sorted(self, fixtures_dir):
        configs = load_configurations([fixtures_dir])

        assert [c.name for c in configs] == ["curl", "openssl"]

    def test_files_in_given_order(self, openssl_config_path, curl_config_path):
        configs = load_configurations([openssl_config_path, curl_config_path])

        assert [c.name for c in configs] == ["openssl", "curl"]

    def test_empty_directory(self, tmp_path):
        assert load_configurations([str(tmp_path)]) == []


class TestParseConfiguration:

    def test_unquoted_zero_version_key_becomes_string(self):
        config = parse_configuration({
            "package": {"name": "foo", "version": "1.0"},
            "secfixes": {0: ["CVE-1"]},
        })

        assert config.secfixes == {"0": ["CVE-1"]}

    def test_missing_package_section(self):
        with pytest.raises(ValidationError, match="missing 'package' section"):
            parse_configuration({"secfixes": {}})

    def test_missing_version(self):
        with pytest.raises(ValidationError, match="'package.name' and 'package.version' are required"):
            parse_configuration({"package": {"name": "foo"}})

    def test_not_a_mapping(self):
        with pytest.raises(ValidationError, match="must be a mapping"):
            parse_configuration(["package"])

    def test_invalid_advisory_status(self):
        data = {
            "package": {"name": "foo", "version": "1.0"},
            "advisories": {"CVE-1": [{"timestamp": "2024-01-01T00:00:00Z", "status": "maybe"}]},
        }

        with pytest.raises(ValidationError, match="advisory for 'CVE-1': Invalid VEX status 'maybe'"):
            parse_configuration(data)

    def test_string_timestamp_parsed(self):
        data = {
            "package": {"name": "foo", "version": "1.0"},
            "advisories": {"CVE-1": [{"timestamp": "2024-01-01T10:00:00Z", "status": "fixed"}]},
        }

        config = parse_configuration(data)

        assert config.advisories["CVE-1"][0].timestamp == datetime(2024, 1, 1, 10, tzinfo=timezone.utc)

    def test_secfixes_must_be_mapping(self):
        with pytest.raises(ValidationError, match="'secfixes' must map"):
            parse_configuration({"package": {"name": "foo", "version": "1"}, "secfixes": ["CVE-1"]})

    def test_subpackage_without_name(self):
        with pytest.raises(ValidationError, match="every subpackage needs a name"):
            parse_configuration({"package": {"name": "foo", "version": "1"}, "subpackages": [{"pipeline": []}]})
