"""Installer configuration, read from ``AGENTKIT_*`` environment variables
(or a ``.env`` file). Command-line flags take precedence."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings

BUNDLE_DIR = Path(__file__).resolve().parent / "bundle"


class AgentKitSettings(BaseSettings):
    SOURCE_DIR: Optional[Path] = Field(
        default=None,
        description="Source bundle to install from (defaults to the bundled kit)",
    )
    LOG_LEVEL: str = Field(default="INFO")
    NO_COLOR: bool = Field(
        default=False,
        description="Disable ANSI colours in progress output",
    )

    model_config = {
        "env_prefix": "AGENTKIT_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore",
    }

    @property
    def bundle_dir(self) -> Path:
        return self.SOURCE_DIR if self.SOURCE_DIR is not None else BUNDLE_DIR


def get_settings() -> AgentKitSettings:
    return AgentKitSettings()
