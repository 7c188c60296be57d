from __future__ import annotations

from enum import Enum


class ArtifactKind(str, Enum):
    INSTRUCTIONS = "instructions"
    AGENT = "agent"
    SKILL_TEMPLATE = "skill_template"
    EXAMPLES = "examples"
    DOC = "doc"
    BACKLOG = "backlog"


class CopyPolicy(str, Enum):
    ALWAYS = "always"
    BEST_EFFORT = "best_effort"
    IF_ABSENT = "if_absent"


class CopyStatus(str, Enum):
    SUCCEEDED = "succeeded"
    SKIPPED = "skipped"
    FAILED = "failed"


class PromptId(str, Enum):
    OVERWRITE_INSTRUCTIONS = "overwrite_instructions"
    MERGE_SKILLS = "merge_skills"
