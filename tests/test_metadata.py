"""
Tests for storeupdate.metadata module.

Tests local metadata sources including:
- Static values
- Installed distributions (importlib.metadata)
- YAML manifests and their failure modes
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from unittest.mock import patch

import pytest

from storeupdate.metadata import (
    AppMetadata,
    DistributionMetadata,
    ManifestMetadata,
    StaticMetadata,
)


class TestStaticMetadata:
    """Tests for StaticMetadata."""

    def test_values_are_returned(self):
        """Test that host-supplied values are passed through."""
        meta = StaticMetadata("com.example.app", "1.2.3").read()
        assert meta == AppMetadata("com.example.app", "1.2.3")
        assert meta.complete

    def test_blank_values_become_none(self):
        """Test that blank strings are treated as missing."""
        meta = StaticMetadata("  ", "").read()
        assert meta == AppMetadata(None, None)
        assert not meta.complete


class TestDistributionMetadata:
    """Tests for DistributionMetadata."""

    def test_installed_distribution(self):
        """Test reading the installed version of a distribution."""
        with patch("storeupdate.metadata.version", return_value="5.6.7") as mock_version:
            meta = DistributionMetadata("my-app", identifier="com.example.app").read()

        mock_version.assert_called_once_with("my-app")
        assert meta == AppMetadata("com.example.app", "5.6.7")

    def test_identifier_defaults_to_distribution_name(self):
        """Test the identifier fallback."""
        with patch("storeupdate.metadata.version", return_value="1.0"):
            meta = DistributionMetadata("my-app").read()
        assert meta.identifier == "my-app"

    def test_missing_distribution(self, recording_logger):
        """Test that an unknown distribution yields no version."""
        with patch(
            "storeupdate.metadata.version", side_effect=PackageNotFoundError("my-app")
        ):
            meta = DistributionMetadata("my-app", logger=recording_logger).read()

        assert meta.current_version is None
        assert recording_logger.messages("verbose")


class TestManifestMetadata:
    """Tests for ManifestMetadata."""

    def test_reads_manifest(self, create_yaml_file):
        """Test reading identifier and version from YAML."""
        path = create_yaml_file(
            "app_manifest.yaml", {"identifier": "com.example.app", "version": "2.4.1"}
        )
        assert ManifestMetadata(path).read() == AppMetadata("com.example.app", "2.4.1")

    def test_custom_keys(self, create_yaml_file):
        """Test reading from differently named keys."""
        path = create_yaml_file(
            "manifest.yaml", {"CFBundleIdentifier": "com.x", "CFBundleShortVersionString": "3.0"}
        )
        meta = ManifestMetadata(
            path,
            identifier_key="CFBundleIdentifier",
            version_key="CFBundleShortVersionString",
        ).read()
        assert meta == AppMetadata("com.x", "3.0")

    @pytest.mark.parametrize(
        "written, expected",
        [("2.5", "2.5"), ("1.10", "1.10"), ("2.0", "2.0"), ("3", "3"), ("010", "010")],
    )
    def test_unquoted_version_keeps_literal_text(self, tmp_test_dir, written, expected):
        """Test that unquoted versions are read as written, not as numbers."""
        path = tmp_test_dir / "app_manifest.yaml"
        path.write_text(f"identifier: com.example.app\nversion: {written}\n")
        assert ManifestMetadata(path).read().current_version == expected

    def test_missing_file(self, tmp_test_dir):
        """Test that a missing manifest yields empty metadata."""
        assert ManifestMetadata(tmp_test_dir / "nope.yaml").read() == AppMetadata()

    def test_invalid_yaml(self, tmp_test_dir, recording_logger):
        """Test that an unparsable manifest yields empty metadata."""
        path = tmp_test_dir / "app_manifest.yaml"
        path.write_text("identifier: [oops\n")
        meta = ManifestMetadata(path, logger=recording_logger).read()
        assert meta == AppMetadata()
        assert recording_logger.messages("verbose")

    def test_non_mapping(self, create_yaml_file):
        """Test that a list document yields empty metadata."""
        path = create_yaml_file("app_manifest.yaml", ["com.example.app", "1.0"])
        assert ManifestMetadata(path).read() == AppMetadata()

    def test_wrong_value_types(self, create_yaml_file):
        """Test that non-scalar values are treated as missing."""
        path = create_yaml_file(
            "app_manifest.yaml", {"identifier": ["a"], "version": {"major": 1}}
        )
        assert ManifestMetadata(path).read() == AppMetadata(None, None)

    def test_manifest_is_reread(self, create_yaml_file):
        """Test that each read sees the current file contents."""
        path = create_yaml_file("app_manifest.yaml", {"identifier": "a", "version": "1.0"})
        source = ManifestMetadata(path)
        assert source.read().current_version == "1.0"

        create_yaml_file("app_manifest.yaml", {"identifier": "a", "version": "1.1"})
        assert source.read().current_version == "1.1"
