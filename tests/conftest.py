"""
Shared fixtures: a throwaway source bundle and target directory.
"""

from pathlib import Path

import pytest

BUNDLE_FILES = {
    ".github/copilot-instructions.md": "# Instructions\n",
    ".github/agents/orchestrator.md": "# Orchestrator\n",
    ".github/agents/qa-lead.md": "# QA Lead\n",
    ".github/agents/notes.txt": "not an agent\n",
    "docs/skills/_template/SKILL.md": "# Skill template\n",
    "docs/WRITING_SKILLS.md": "# Writing skills\n",
    "examples/python-api/SKILL.md": "# Python API\n",
    "examples/README.md": "# Examples\n",
}


def write_files(root: Path, files: dict) -> None:
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


def snapshot(root: Path) -> dict:
    """Relative path -> bytes for files, None for directories."""
    return {
        p.relative_to(root).as_posix(): (p.read_bytes() if p.is_file() else None)
        for p in sorted(root.rglob("*"))
    }


@pytest.fixture
def bundle(tmp_path) -> Path:
    root = tmp_path / "bundle"
    write_files(root, BUNDLE_FILES)
    return root


@pytest.fixture
def target(tmp_path) -> Path:
    root = tmp_path / "project"
    root.mkdir()
    return root
