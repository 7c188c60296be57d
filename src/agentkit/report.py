from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

from agentkit.copying import TreeCopyResult
from agentkit.types import ArtifactKind


class ArtifactAction(str, Enum):
    INSTALLED = "installed"
    SKIPPED = "skipped"
    CREATED = "created"
    FAILED = "failed"


class InstalledArtifact(BaseModel):
    path: str
    kind: ArtifactKind
    action: ArtifactAction
    detail: str | None = None


class InstallReport(BaseModel):
    target: Path
    artifacts: list[InstalledArtifact] = Field(default_factory=list)
    examples: TreeCopyResult | None = None

    def add(
        self,
        path: str,
        kind: ArtifactKind,
        action: ArtifactAction,
        detail: str | None = None,
    ) -> InstalledArtifact:
        artifact = InstalledArtifact(path=path, kind=kind, action=action, detail=detail)
        self.artifacts.append(artifact)
        return artifact

    @property
    def installed(self) -> list[str]:
        return [
            a.path
            for a in self.artifacts
            if a.action in (ArtifactAction.INSTALLED, ArtifactAction.CREATED)
        ]

    @property
    def skipped(self) -> list[str]:
        return [a.path for a in self.artifacts if a.action == ArtifactAction.SKIPPED]

    @property
    def warnings(self) -> list[InstalledArtifact]:
        return [a for a in self.artifacts if a.action == ArtifactAction.FAILED]


NEXT_STEPS = """\
Next Steps:

1. Restart VS Code to activate the agent system
   Press Cmd+Shift+P -> 'Developer: Reload Window'

2. Customize your agents:
   - Edit .github/copilot-instructions.md to add domain-specific agents
   - Replace [INSERT_DOMAIN_X] placeholders with your domains

3. Read the documentation:
   - docs/WRITING_SKILLS.md - How to create skills
   - examples/python-api/SKILL.md - Example skill reference

4. Test the system:
   - Open GitHub Copilot Chat
   - Ask: "What's in the backlog?"
   - The Orchestrator agent should respond!

5. Start building:
   - Check docs/ISSUES.md for your initial tasks
   - Create your first skill in docs/skills/your-domain/

Resources:
  Documentation: https://github.com/oviney/team-agent-starter
  Get help: Open an issue on GitHub
"""


def render_summary(report: InstallReport) -> str:
    lines = ["Installation Complete!", "", f"Installed to: {report.target}", ""]
    for artifact in report.artifacts:
        suffix = f" ({artifact.detail})" if artifact.detail else ""
        lines.append(f"  [{artifact.action.value}] {artifact.path}{suffix}")
    lines += ["", NEXT_STEPS]
    return "\n".join(lines)
