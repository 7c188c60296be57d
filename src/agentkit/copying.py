from __future__ import annotations

import shutil
from pathlib import Path, PurePosixPath

from pydantic import BaseModel, Field

from agentkit.errors import BestEffortCopyFailure, PermissionChangeFailure
from agentkit.types import CopyStatus


class FileOutcome(BaseModel):
    path: str
    status: CopyStatus
    error: str | None = None


class TreeCopyResult(BaseModel):
    """Per-entry outcomes of a recursive copy, in traversal order."""

    source: Path
    destination: Path
    outcomes: list[FileOutcome] = Field(default_factory=list)

    def _with_status(self, status: CopyStatus) -> list[FileOutcome]:
        return [o for o in self.outcomes if o.status == status]

    @property
    def succeeded(self) -> list[FileOutcome]:
        return self._with_status(CopyStatus.SUCCEEDED)

    @property
    def skipped(self) -> list[FileOutcome]:
        return self._with_status(CopyStatus.SKIPPED)

    @property
    def failed(self) -> list[FileOutcome]:
        return self._with_status(CopyStatus.FAILED)

    @property
    def ok(self) -> bool:
        return not self.failed

    def record(
        self, path: PurePosixPath, status: CopyStatus, error: str | None = None
    ) -> None:
        self.outcomes.append(FileOutcome(path=path.as_posix(), status=status, error=error))


def copy_file(source: Path, destination: Path) -> Path:
    destination.parent.mkdir(parents=True, exist_ok=True)
    shutil.copy2(source, destination)
    return destination


def copy_if_absent(source: Path, destination: Path) -> CopyStatus:
    if destination.exists():
        return CopyStatus.SKIPPED
    copy_file(source, destination)
    return CopyStatus.SUCCEEDED


def copy_tree(source: Path, destination: Path) -> TreeCopyResult:
    """Merge ``source`` into ``destination`` without deleting anything.

    Failures are recorded per entry and never interrupt the traversal.
    Symlinks and special files are skipped.
    """
    result = TreeCopyResult(source=source, destination=destination)
    _copy_dir(source, destination, PurePosixPath("."), result)
    return result


def _copy_dir(
    source: Path, destination: Path, relative: PurePosixPath, result: TreeCopyResult
) -> None:
    try:
        destination.mkdir(parents=True, exist_ok=True)
        entries = sorted(source.iterdir(), key=lambda p: p.name)
    except OSError as exc:
        result.record(relative, CopyStatus.FAILED, str(BestEffortCopyFailure(source, exc)))
        return

    for entry in entries:
        entry_relative = relative / entry.name
        if entry.is_symlink():
            result.record(entry_relative, CopyStatus.SKIPPED, "symbolic link")
        elif entry.is_dir():
            _copy_dir(entry, destination / entry.name, entry_relative, result)
        elif entry.is_file():
            try:
                _copy_one(entry, destination / entry.name)
            except BestEffortCopyFailure as exc:
                result.record(entry_relative, CopyStatus.FAILED, str(exc))
            else:
                result.record(entry_relative, CopyStatus.SUCCEEDED)
        else:
            result.record(entry_relative, CopyStatus.SKIPPED, "not a regular file")


def _copy_one(source: Path, destination: Path) -> None:
    try:
        shutil.copy2(source, destination)
    except OSError as exc:
        raise BestEffortCopyFailure(source, exc) from exc


def make_executable(path: Path) -> None:
    # grant execute wherever read is already granted
    try:
        mode = path.stat().st_mode
        path.chmod(mode | ((mode & 0o444) >> 2))
    except OSError as exc:
        raise PermissionChangeFailure(path, exc) from exc


def is_non_empty_dir(path: Path) -> bool:
    return path.is_dir() and any(path.iterdir())
