from __future__ import annotations

from pathlib import Path, PurePosixPath

from pydantic import BaseModel, Field, ValidationError, field_validator

from agentkit.errors import InvalidManifest
from agentkit.types import ArtifactKind, CopyPolicy

MANIFEST_FILENAME = "agentkit.json"

INSTRUCTIONS_PATH = ".github/copilot-instructions.md"
AGENTS_DIR = ".github/agents"
SKILLS_DIR = "docs/skills"
SKILL_TEMPLATE_PATH = "docs/skills/_template/SKILL.md"
BACKLOG_PATH = "docs/ISSUES.md"


class FileMapping(BaseModel):
    kind: ArtifactKind
    source: str
    destination: str
    policy: CopyPolicy = CopyPolicy.ALWAYS
    required: bool = False
    # When set, source and destination are directories and every matching
    # file directly under source is copied.
    glob: str | None = None

    @field_validator("source", "destination")
    @classmethod
    def _relative_posix(cls, value: str) -> str:
        path = PurePosixPath(value)
        if path.is_absolute() or ".." in path.parts:
            raise ValueError(f"path must be relative to its root: {value!r}")
        return path.as_posix()

    def source_path(self, bundle: Path) -> Path:
        return bundle / self.source

    def destination_path(self, target: Path) -> Path:
        return target / self.destination


class Manifest(BaseModel):
    name: str
    version: str
    description: str | None = None
    author: str | None = None
    repository: str | None = None
    directories: list[str] = Field(default_factory=list)
    files: list[FileMapping] = Field(default_factory=list)

    def mappings(self, policy: CopyPolicy) -> list[FileMapping]:
        return [m for m in self.files if m.policy == policy]


def default_manifest() -> Manifest:
    return Manifest(
        name="agent-starter-kit",
        version="1.0.0",
        description="Agent personas, skill templates and a project backlog",
        repository="https://github.com/oviney/team-agent-starter",
        directories=[
            AGENTS_DIR,
            "docs/skills/_template",
            "docs/skills/quality-standards",
            "examples",
        ],
        files=[
            FileMapping(
                kind=ArtifactKind.INSTRUCTIONS,
                source=INSTRUCTIONS_PATH,
                destination=INSTRUCTIONS_PATH,
                required=True,
            ),
            FileMapping(
                kind=ArtifactKind.AGENT,
                source=AGENTS_DIR,
                destination=AGENTS_DIR,
                glob="*.md",
            ),
            FileMapping(
                kind=ArtifactKind.SKILL_TEMPLATE,
                source=SKILL_TEMPLATE_PATH,
                destination=SKILL_TEMPLATE_PATH,
                required=True,
            ),
            FileMapping(
                kind=ArtifactKind.EXAMPLES,
                source="examples",
                destination="examples",
                policy=CopyPolicy.BEST_EFFORT,
            ),
            FileMapping(
                kind=ArtifactKind.DOC,
                source="docs/WRITING_SKILLS.md",
                destination="docs/WRITING_SKILLS.md",
                policy=CopyPolicy.IF_ABSENT,
            ),
            FileMapping(
                kind=ArtifactKind.BACKLOG,
                source=BACKLOG_PATH,
                destination=BACKLOG_PATH,
                policy=CopyPolicy.IF_ABSENT,
            ),
        ],
    )


def load_manifest(path: Path) -> Manifest:
    if not path.exists():
        raise FileNotFoundError(f"Manifest file not found at {path}")

    if path.is_dir():
        path = path / MANIFEST_FILENAME
        if not path.exists():
            raise FileNotFoundError(f"Manifest file not found at {path}")

    return Manifest.model_validate_json(path.read_text(encoding="utf-8"))


def resolve_manifest(bundle: Path) -> Manifest:
    """Use the manifest shipped with the bundle, or the built-in one."""
    path = bundle / MANIFEST_FILENAME
    if not path.is_file():
        return default_manifest()
    try:
        return load_manifest(path)
    except (ValidationError, UnicodeDecodeError, OSError) as exc:
        raise InvalidManifest(path, exc) from exc
