"""
Tests for cloudhatch.manifest
=============================

Test Organization
-----------------
- TestReadManifest: Tests for parsing and error handling
- TestUpdateManifest: Tests for the description update
"""

import json
import pytest
from pathlib import Path

from cloudhatch.errors import ManifestError
from cloudhatch.manifest import read_manifest, update_manifest
from cloudhatch.models import ProjectConfig


@pytest.fixture
def manifest_path(tmp_path: Path) -> Path:
    """Write a package.json with several fields."""
    path = tmp_path / "package.json"
    data = {
        "name": "sample",
        "version": "0.1.0",
        "description": "",
        "private": True,
        "dependencies": {"react": "^18.2.0", "react-dom": "^18.2.0"},
        "devDependencies": {"@vht/react-scripts": "^3.0.0"},
        "browserslist": [">0.2%", "not dead"],
    }
    path.write_text(json.dumps(data, indent=2))
    return path


# =============================================================================
# Read Tests
# =============================================================================

class TestReadManifest:
    """Tests for read_manifest."""

    def test_reads_object(self, manifest_path: Path) -> None:
        assert read_manifest(manifest_path)["name"] == "sample"

    def test_missing_manifest_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ManifestError, match="No package.json"):
            read_manifest(tmp_path / "package.json")

    def test_malformed_manifest_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "package.json"
        path.write_text('{"name": "sample",')

        with pytest.raises(ManifestError, match="Invalid package.json"):
            read_manifest(path)

    def test_non_object_manifest_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "package.json"
        path.write_text('["not", "an", "object"]')

        with pytest.raises(ManifestError, match="JSON object"):
            read_manifest(path)


# =============================================================================
# Update Tests
# =============================================================================

class TestUpdateManifest:
    """Tests for update_manifest."""

    def test_description_is_set(self, manifest_path: Path, sample_config: ProjectConfig) -> None:
        update_manifest(sample_config, manifest_path)

        data = json.loads(manifest_path.read_text())
        assert data["description"] == "demo"

    def test_other_fields_unchanged(self, manifest_path: Path, sample_config: ProjectConfig) -> None:
        before = json.loads(manifest_path.read_text())

        update_manifest(sample_config, manifest_path)

        after = json.loads(manifest_path.read_text())
        before.pop("description")
        after.pop("description")
        assert after == before
        assert list(after) == list(before)

    def test_other_fields_keep_values_not_spelling(
        self, tmp_path: Path, sample_config: ProjectConfig
    ) -> None:
        path = tmp_path / "package.json"
        path.write_text('{"author": "Ren\\u00e9", "limit": 1e5, "description": ""}')

        update_manifest(sample_config, path)

        text = path.read_text(encoding="utf-8")
        assert json.loads(text) == {"author": "Ren\u00e9", "limit": 1e5, "description": "demo"}
        assert '"author": "Ren\u00e9"' in text
        assert '"limit": 100000.0' in text

    def test_description_whitespace_preserved(self, manifest_path: Path) -> None:
        config = ProjectConfig(name="sample", description="  Ops dashboard\t")

        update_manifest(config, manifest_path)

        assert json.loads(manifest_path.read_text())["description"] == "  Ops dashboard\t"

    def test_two_space_indentation(self, manifest_path: Path, sample_config: ProjectConfig) -> None:
        update_manifest(sample_config, manifest_path)

        lines = manifest_path.read_text().splitlines()
        assert lines[1] == '  "name": "sample",'
        assert manifest_path.read_text().endswith("}\n")

    def test_description_added_when_absent(self, tmp_path: Path, sample_config: ProjectConfig) -> None:
        path = tmp_path / "package.json"
        path.write_text('{"name": "sample"}')

        data = update_manifest(sample_config, path)

        assert data == {"name": "sample", "description": "demo"}

    def test_non_ascii_description_kept(self, manifest_path: Path) -> None:
        config = ProjectConfig(name="sample", description="Übersicht für Betrieb")

        update_manifest(config, manifest_path)

        assert "Übersicht für Betrieb" in manifest_path.read_text(encoding="utf-8")
