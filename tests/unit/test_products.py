# tests/unit/test_products.py

from types import SimpleNamespace

import pytest
from packageurl import PackageURL

from vexgen_cli.config import VexConfig
from vexgen_cli.exceptions import ProductURLParseError
from vexgen_cli.products import SBOMPurl, extract_products, extract_sbom_purls


def _ref(reference_type, locator):
    return SimpleNamespace(reference_type=reference_type, locator=locator)


def _sbom(*packages):
    return SimpleNamespace(packages=[
        SimpleNamespace(name=f"pkg-{i}", external_references=refs) for i, refs in enumerate(packages)
    ])


class TestExtractProducts:

    def test_origin_package_first_then_subpackages(self, make_config):
        config = make_config(name="openssl", version="3.1.4", epoch=2, subpackages=["openssl-dev", "libssl3"])

        assert extract_products(config, "wolfi") == [
            "pkg:apk/wolfi/openssl@3.1.4-r2",
            "pkg:apk/wolfi/openssl-dev@3.1.4-r2",
            "pkg:apk/wolfi/libssl3@3.1.4-r2",
        ]

    def test_scoped_to_distro(self, make_config):
        assert extract_products(make_config(name="curl", version="8.4.0"), "chainguard") == [
            "pkg:apk/chainguard/curl@8.4.0-r0",
        ]

    def test_deterministic(self, make_config):
        config = make_config(subpackages=["b", "a"])

        assert extract_products(config, "wolfi") == extract_products(config, "wolfi")


class TestExtractSBOMPurls:

    def test_non_purl_references_are_ignored(self):
        sbom = _sbom([
            _ref("cpe23Type", "cpe:2.3:a:openssl:openssl:3.1.4:*:*:*:*:*:*:*"),
            _ref("purl", "pkg:apk/wolfi/openssl@3.1.4-r2"),
        ])

        purls = extract_sbom_purls(VexConfig(distro="wolfi"), sbom)

        assert purls == [SBOMPurl("pkg:apk/wolfi/openssl@3.1.4-r2", PackageURL.from_string("pkg:apk/wolfi/openssl@3.1.4-r2"))]

    def test_non_purl_reference_with_unparseable_locator_is_ignored(self):
        sbom = _sbom([_ref("swid", "not a purl at all")])

        assert extract_sbom_purls(VexConfig(distro="wolfi"), sbom) == []

    def test_other_namespaces_are_excluded(self):
        sbom = _sbom(
            [_ref("purl", "pkg:apk/alpine/busybox@1.36.1-r5")],
            [_ref("purl", "pkg:apk/wolfi/busybox@1.36.1-r6")],
            [_ref("purl", "pkg:pypi/requests@2.31.0")],
        )

        purls = extract_sbom_purls(VexConfig(distro="wolfi"), sbom)

        assert [p.locator for p in purls] == ["pkg:apk/wolfi/busybox@1.36.1-r6"]

    def test_locator_kept_as_written(self):
        locator = "pkg:apk/wolfi/libssl3@3.1.4-r2?distro=wolfi-20230201&arch=x86_64"
        sbom = _sbom([_ref("purl", locator)])

        [found] = extract_sbom_purls(VexConfig(distro="wolfi"), sbom)

        assert found.locator == locator
        assert found.purl.qualifiers == {"arch": "x86_64", "distro": "wolfi-20230201"}

    def test_malformed_purl_aborts_extraction(self):
        sbom = _sbom(
            [_ref("purl", "pkg:apk/wolfi/good@1.0-r0")],
            [_ref("purl", "definitely-not-a-purl")],
        )

        with pytest.raises(ProductURLParseError, match="parsing purl: definitely-not-a-purl") as exc_info:
            extract_sbom_purls(VexConfig(distro="wolfi"), sbom)

        assert exc_info.value.details["locator"] == "definitely-not-a-purl"

    def test_packages_without_references(self):
        sbom = SimpleNamespace(packages=[SimpleNamespace(name="x", external_references=[])])

        assert extract_sbom_purls(VexConfig(distro="wolfi"), sbom) == []
