"""Unit tests for the installation manifest."""

import json

import pytest
from pydantic import ValidationError

from agentkit.errors import InvalidManifest
from agentkit.manifest import (
    FileMapping,
    default_manifest,
    load_manifest,
    resolve_manifest,
)
from agentkit.types import ArtifactKind, CopyPolicy


class TestDefaultManifest:
    def test_layout(self):
        manifest = default_manifest()
        assert manifest.directories == [
            ".github/agents",
            "docs/skills/_template",
            "docs/skills/quality-standards",
            "examples",
        ]
        destinations = {m.destination: m.policy for m in manifest.files}
        assert destinations == {
            ".github/copilot-instructions.md": CopyPolicy.ALWAYS,
            ".github/agents": CopyPolicy.ALWAYS,
            "docs/skills/_template/SKILL.md": CopyPolicy.ALWAYS,
            "examples": CopyPolicy.BEST_EFFORT,
            "docs/WRITING_SKILLS.md": CopyPolicy.IF_ABSENT,
            "docs/ISSUES.md": CopyPolicy.IF_ABSENT,
        }

    def test_required_sources(self):
        required = [m.source for m in default_manifest().files if m.required]
        assert required == [
            ".github/copilot-instructions.md",
            "docs/skills/_template/SKILL.md",
        ]

    def test_mappings_keep_order(self):
        kinds = [m.kind for m in default_manifest().mappings(CopyPolicy.ALWAYS)]
        assert kinds == [
            ArtifactKind.INSTRUCTIONS,
            ArtifactKind.AGENT,
            ArtifactKind.SKILL_TEMPLATE,
        ]


class TestFileMapping:
    @pytest.mark.parametrize("path", ["/etc/passwd", "../outside.md", "docs/../../x"])
    def test_rejects_paths_outside_root(self, path):
        with pytest.raises(ValidationError):
            FileMapping(kind=ArtifactKind.DOC, source=path, destination="docs/x.md")

    def test_normalizes_path(self):
        mapping = FileMapping(
            kind=ArtifactKind.DOC, source="./docs//a.md", destination="docs/a.md"
        )
        assert mapping.source == "docs/a.md"


class TestLoadManifest:
    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_manifest(tmp_path / "nope.json")

    def test_directory_without_manifest(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_manifest(tmp_path)

    def test_loads_from_directory(self, tmp_path):
        (tmp_path / "agentkit.json").write_text(
            json.dumps(
                {
                    "name": "custom",
                    "version": "0.1.0",
                    "directories": ["notes"],
                    "files": [
                        {
                            "kind": "doc",
                            "source": "README.md",
                            "destination": "notes/README.md",
                            "policy": "if_absent",
                        }
                    ],
                }
            ),
            encoding="utf-8",
        )
        manifest = load_manifest(tmp_path)
        assert manifest.name == "custom"
        assert manifest.files[0].policy == CopyPolicy.IF_ABSENT


class TestResolveManifest:
    def test_falls_back_to_default(self, tmp_path):
        assert resolve_manifest(tmp_path) == default_manifest()

    def test_invalid_manifest(self, tmp_path):
        (tmp_path / "agentkit.json").write_text('{"name": "broken"}', encoding="utf-8")
        with pytest.raises(InvalidManifest) as exc_info:
            resolve_manifest(tmp_path)
        assert exc_info.value.exit_code == 5
