"""Command-line entry point: ``agentkit [target-directory]``."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from pydantic import ValidationError

from agentkit.config import get_settings
from agentkit.errors import InstallerError, InvalidSettings
from agentkit.installers import CopilotInstaller
from agentkit.logging import setup_logging
from agentkit.manifest import resolve_manifest
from agentkit.prompts import AlwaysConfirm, Confirm, TerminalConfirm
from agentkit.report import render_summary

logger = logging.getLogger(__name__)

BANNER = """\
╔══════════════════════════════════════════════════════════╗
║        Agent Starter Kit Bootstrap Installer             ║
╚══════════════════════════════════════════════════════════╝"""


def build_parser():
    p = argparse.ArgumentParser(
        prog="agentkit",
        description="Install the Agent Starter Kit into a project directory.",
    )
    p.add_argument(
        "target",
        nargs="?",
        default=None,
        help="Directory to install into (default: current directory)",
    )
    p.add_argument("--source", type=Path, default=None, help="Source bundle to install from")
    p.add_argument(
        "--yes", "-y", action="store_true", help="Answer yes to every confirmation prompt"
    )
    p.add_argument("--verbose", "-v", action="store_true", help="Show debug output")
    p.add_argument("--no-color", action="store_true", help="Disable coloured output")
    return p


def _installer_script() -> Path | None:
    # only the console script is ours to chmod
    script = Path(sys.argv[0]) if sys.argv and sys.argv[0] else None
    if script is None or not script.name.startswith("agentkit") or not script.is_file():
        return None
    return script.resolve()


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = get_settings()
    except ValidationError as exc:
        error = InvalidSettings(exc)
        setup_logging("INFO", color=False)
        logger.error("%s", error)
        return error.exit_code

    color = (
        not (args.no_color or settings.NO_COLOR or os.environ.get("NO_COLOR"))
        and sys.stdout.isatty()
    )
    setup_logging("DEBUG" if args.verbose else settings.LOG_LEVEL, color=color)
    print(BANNER)

    source = args.source if args.source is not None else settings.bundle_dir
    confirm: Confirm = AlwaysConfirm(True) if args.yes else TerminalConfirm()
    target = Path(args.target) if args.target else None

    try:
        installer = CopilotInstaller(
            source,
            confirm,
            manifest=resolve_manifest(source),
            script=_installer_script(),
        )
        report = installer.install(target)
    except InstallerError as exc:
        logger.error("%s", exc)
        return exc.exit_code
    except KeyboardInterrupt:
        logger.error("Installation interrupted")
        return 130

    print()
    print(render_summary(report))
    return 0
