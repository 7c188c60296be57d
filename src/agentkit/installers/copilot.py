from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path, PurePosixPath

from agentkit.backlog import write_default_backlog
from agentkit.copying import (
    copy_file,
    copy_if_absent,
    copy_tree,
    is_non_empty_dir,
    make_executable,
)
from agentkit.errors import (
    BestEffortCopyFailure,
    DirectoryNotFound,
    InstallFailed,
    PermissionChangeFailure,
    SourceMissing,
    UserCancelled,
)
from agentkit.manifest import (
    BACKLOG_PATH,
    INSTRUCTIONS_PATH,
    SKILLS_DIR,
    FileMapping,
    Manifest,
    default_manifest,
)
from agentkit.prompts import Confirm
from agentkit.report import ArtifactAction, InstallReport
from agentkit.types import ArtifactKind, CopyPolicy, CopyStatus, PromptId

logger = logging.getLogger(__name__)


def _step(number: int, title: str) -> None:
    logger.info("Step %d: %s", number, title, extra={"step": True})


@contextmanager
def _writing(path: Path):
    try:
        yield
    except OSError as exc:
        raise InstallFailed(path, exc) from exc


class CopilotInstaller:
    """Provision the starter kit layout for GitHub Copilot agents.

    Every step after the conflict check either overwrites with identical
    content or copies only when absent, so an interrupted run is completed
    by running again. Nothing in the target is ever deleted.
    """

    name = "copilot"

    def __init__(
        self,
        source: Path,
        confirm: Confirm,
        manifest: Manifest | None = None,
        script: Path | None = None,
    ):
        self.source = source
        self.confirm = confirm
        self.manifest = manifest or default_manifest()
        self.script = script

    def get_target_dir(self, project_root: Path | None = None) -> Path:
        target = Path(project_root) if project_root is not None else Path.cwd()
        if not target.is_dir():
            raise DirectoryNotFound(target)
        return target.resolve()

    def install(self, project_root: Path | None = None) -> InstallReport:
        _step(1, "Validating target directory...")
        target = self.get_target_dir(project_root)
        logger.info("Installing to: %s", target)
        report = InstallReport(target=target)

        _step(2, "Running safety checks...")
        self.check_conflicts(target)

        _step(3, "Creating directory structure...")
        self.scaffold(target)

        _step(4, "Installing agent configuration files...")
        self.copy_always(target, report)

        _step(5, "Installing example skills...")
        self.copy_best_effort(target, report)

        _step(6, "Installing documentation...")
        self.copy_if_absent(target, report)

        _step(7, "Checking project backlog...")
        self.seed_backlog(target, report)

        _step(8, "Setting permissions...")
        self.normalize_permissions()

        return report

    def check_conflicts(self, target: Path) -> None:
        for mapping in self._of_kind(ArtifactKind.INSTRUCTIONS, INSTRUCTIONS_PATH):
            if mapping.destination_path(target).is_file():
                logger.warning("Found existing %s", mapping.destination)
                if not self.confirm(PromptId.OVERWRITE_INSTRUCTIONS):
                    raise UserCancelled()

        if is_non_empty_dir(target / SKILLS_DIR):
            logger.warning("Found existing %s/ directory with content", SKILLS_DIR)
            if not self.confirm(PromptId.MERGE_SKILLS):
                raise UserCancelled()

        logger.info("Safety checks passed")

    def scaffold(self, target: Path) -> None:
        for directory in self.manifest.directories:
            path = target / directory
            with _writing(path):
                path.mkdir(parents=True, exist_ok=True)
        logger.info("Directory structure created")

    def copy_always(self, target: Path, report: InstallReport) -> None:
        for mapping in self.manifest.mappings(CopyPolicy.ALWAYS):
            if mapping.glob:
                self._copy_matching(mapping, target, report)
                continue

            source = mapping.source_path(self.source)
            if not source.is_file():
                if mapping.required:
                    raise SourceMissing(mapping.source)
                logger.warning("Source file not found: %s", mapping.source)
                continue

            destination = mapping.destination_path(target)
            with _writing(destination):
                copy_file(source, destination)
            report.add(mapping.destination, mapping.kind, ArtifactAction.INSTALLED)
            logger.info("Installed: %s", mapping.destination)

    def _copy_matching(
        self, mapping: FileMapping, target: Path, report: InstallReport
    ) -> None:
        source_dir = mapping.source_path(self.source)
        matches = (
            sorted(p for p in source_dir.glob(mapping.glob) if p.is_file())
            if source_dir.is_dir()
            else []
        )
        if not matches:
            if mapping.required:
                raise SourceMissing(f"{mapping.source}/{mapping.glob}")
            logger.warning("No %s files found in %s", mapping.kind.value, mapping.source)
            return

        for path in matches:
            destination = (PurePosixPath(mapping.destination) / path.name).as_posix()
            destination_path = target / destination
            with _writing(destination_path):
                copy_file(path, destination_path)
            report.add(destination, mapping.kind, ArtifactAction.INSTALLED)
            logger.info("Installed: %s", destination)

    def copy_best_effort(self, target: Path, report: InstallReport) -> None:
        for mapping in self.manifest.mappings(CopyPolicy.BEST_EFFORT):
            source = mapping.source_path(self.source)
            destination = mapping.destination_path(target)

            if source.is_file():
                try:
                    copy_file(source, destination)
                except OSError as exc:
                    failure = BestEffortCopyFailure(source, exc)
                    logger.warning("%s", failure)
                    report.add(
                        mapping.destination,
                        mapping.kind,
                        ArtifactAction.FAILED,
                        str(failure),
                    )
                else:
                    report.add(mapping.destination, mapping.kind, ArtifactAction.INSTALLED)
                continue

            if not source.is_dir():
                logger.warning("No %s found to install", mapping.source)
                report.add(
                    mapping.destination,
                    mapping.kind,
                    ArtifactAction.SKIPPED,
                    "not in source bundle",
                )
                continue

            result = copy_tree(source, destination)
            for outcome in result.failed:
                logger.warning("%s", outcome.error)
            if mapping.kind == ArtifactKind.EXAMPLES:
                report.examples = result

            detail = f"{len(result.succeeded)} files"
            if result.failed:
                detail += f", {len(result.failed)} failed"
            action = ArtifactAction.INSTALLED if result.ok else ArtifactAction.FAILED
            report.add(f"{mapping.destination}/", mapping.kind, action, detail)
            logger.info("Installed %s to %s/", mapping.source, mapping.destination)

    def copy_if_absent(self, target: Path, report: InstallReport) -> None:
        for mapping in self.manifest.mappings(CopyPolicy.IF_ABSENT):
            source = mapping.source_path(self.source)
            if not source.is_file():
                if mapping.required:
                    raise SourceMissing(mapping.source)
                logger.debug("%s is not in the source bundle", mapping.source)
                continue

            destination = mapping.destination_path(target)
            with _writing(destination):
                status = copy_if_absent(source, destination)
            if status == CopyStatus.SKIPPED:
                logger.warning("Skipped: %s (already exists)", mapping.destination)
                report.add(
                    mapping.destination,
                    mapping.kind,
                    ArtifactAction.SKIPPED,
                    "already exists",
                )
            else:
                logger.info("Installed: %s", mapping.destination)
                report.add(mapping.destination, mapping.kind, ArtifactAction.INSTALLED)

    def seed_backlog(self, target: Path, report: InstallReport) -> None:
        reported = {a.path for a in report.artifacts}
        for mapping in self._of_kind(ArtifactKind.BACKLOG, BACKLOG_PATH):
            path = mapping.destination_path(target)
            if path.exists():
                if mapping.destination not in reported:
                    report.add(
                        mapping.destination,
                        mapping.kind,
                        ArtifactAction.SKIPPED,
                        "already exists",
                    )
                continue

            with _writing(path):
                write_default_backlog(path)
            report.add(
                mapping.destination, mapping.kind, ArtifactAction.CREATED, "initial backlog"
            )
            logger.info("Created initial backlog: %s", mapping.destination)

    def normalize_permissions(self) -> None:
        if self.script is None:
            return
        try:
            make_executable(self.script)
        except PermissionChangeFailure as exc:
            logger.debug("%s", exc)
            return
        logger.info("Script permissions updated")

    def _of_kind(self, kind: ArtifactKind, fallback: str) -> list[FileMapping]:
        mappings = [m for m in self.manifest.files if m.kind == kind]
        if mappings:
            return mappings
        return [
            FileMapping(
                kind=kind,
                source=fallback,
                destination=fallback,
            )
        ]
