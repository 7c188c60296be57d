from __future__ import annotations

from pathlib import Path


class InstallerError(Exception):
    """Fatal installer condition, reported as one line plus an exit code."""

    exit_code = 1


class DirectoryNotFound(InstallerError):
    exit_code = 2

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Target directory does not exist: {path}")


class UserCancelled(InstallerError):
    exit_code = 3

    def __init__(self, reason: str = "Installation cancelled by user"):
        super().__init__(reason)


class SourceMissing(InstallerError):
    exit_code = 4

    def __init__(self, relative_path: str):
        self.relative_path = relative_path
        super().__init__(f"Source file not found: {relative_path}")


class InvalidManifest(InstallerError):
    exit_code = 5

    def __init__(self, path: Path, error: Exception):
        self.path = path
        super().__init__(f"Invalid manifest {path}: {_first_line(error)}")


class InstallFailed(InstallerError):
    exit_code = 6

    def __init__(self, path: Path, error: OSError):
        self.path = path
        self.error = error
        super().__init__(f"Could not write {path}: {error.strerror or error}")


class InvalidSettings(InstallerError):
    exit_code = 7

    def __init__(self, error: Exception):
        super().__init__(f"Invalid AGENTKIT_* settings: {_first_line(error)}")


def _first_line(error: Exception) -> str:
    # pydantic validation errors span several lines
    text = str(error).strip()
    return text.splitlines()[0] if text else type(error).__name__


class BestEffortCopyFailure(Exception):
    def __init__(self, path: Path, error: OSError):
        self.path = path
        self.error = error
        super().__init__(f"Could not copy {path}: {error.strerror or error}")


class PermissionChangeFailure(Exception):
    def __init__(self, path: Path, error: OSError):
        self.path = path
        self.error = error
        super().__init__(f"Could not mark {path} executable: {error.strerror or error}")
