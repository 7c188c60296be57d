from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from agentkit.report import InstallReport


@runtime_checkable
class ArtifactInstaller(Protocol):
    name: str

    def get_target_dir(self, project_root: Path | None = None) -> Path: ...
    def install(self, project_root: Path | None = None) -> InstallReport: ...
