"""The project backlog document (``docs/ISSUES.md``).

The installer seeds a backlog when the target has none. The layout is
parsed by downstream tooling, so ``render_backlog`` and ``parse_backlog``
must stay inverse of each other.
"""

from __future__ import annotations

import re
from pathlib import Path

from pydantic import BaseModel, Field

_FIELDS = ("status", "agent", "priority", "description")

_TITLE = re.compile(r"^# (?P<title>.+)$")
_STATUS = re.compile(r"^## Status: (?P<status>.*)$")
_SECTION = re.compile(r"^## (?P<name>.+)$")
_TASK = re.compile(r"^\d+\. \*\*\[(?P<task_id>[^\]]+)\]\*\* (?P<title>.*)$")
_FIELD = re.compile(r"^\s+- \*\*(?P<name>[A-Za-z]+)\*\*: (?P<value>.*)$")
_ITEM = re.compile(r"^- (?P<item>.*)$")


class BacklogTask(BaseModel):
    task_id: str
    title: str
    status: str = "Todo"
    agent: str = ""
    priority: str = ""
    description: str = ""


class BacklogDocument(BaseModel):
    title: str = "Project Backlog"
    status: str = ""
    active_sprint: list[str] = Field(default_factory=list)
    backlog: list[BacklogTask] = Field(default_factory=list)
    completed: list[str] = Field(default_factory=list)


DEFAULT_BACKLOG = BacklogDocument(
    status="Ready to Start",
    active_sprint=["No active tasks yet"],
    backlog=[
        BacklogTask(
            task_id="TASK-001",
            title="Set up project-specific agents",
            agent="Orchestrator",
            priority="High",
            description=(
                "Customize the placeholder agents in `.github/copilot-instructions.md`"
            ),
        ),
        BacklogTask(
            task_id="TASK-002",
            title="Define quality standards",
            agent="QA Lead",
            priority="High",
            description="Create `docs/skills/quality-standards/SKILL.md`",
        ),
        BacklogTask(
            task_id="TASK-003",
            title="Document first project skill",
            agent="Orchestrator",
            priority="Medium",
            description="Create your first domain-specific skill",
        ),
    ],
    completed=["Agent Starter Kit installed successfully! 🎉"],
)


def render_backlog(document: BacklogDocument) -> str:
    lines = [
        f"# {document.title}",
        "",
        f"## Status: {document.status}",
        "",
        "## Active Sprint",
    ]
    lines += [f"- {item}" for item in document.active_sprint]
    lines += ["", "## Backlog"]
    for number, task in enumerate(document.backlog, start=1):
        lines.append(f"{number}. **[{task.task_id}]** {task.title}")
        for name in _FIELDS:
            lines.append(f"   - **{name.capitalize()}**: {getattr(task, name)}")
        lines.append("")
    if not document.backlog:
        lines.append("")
    lines.append("## Completed")
    lines += [f"- {item}" for item in document.completed]
    return "\n".join(lines) + "\n"


def parse_backlog(text: str) -> BacklogDocument:
    document = BacklogDocument()
    section = None
    task: dict[str, str] | None = None

    def flush() -> None:
        nonlocal task
        if task is not None:
            document.backlog.append(BacklogTask(**task))
            task = None

    for line in text.splitlines():
        if not line.strip():
            continue
        if match := _STATUS.match(line):
            flush()
            document.status = match["status"].strip()
            section = None
        elif match := _SECTION.match(line):
            flush()
            section = match["name"].strip().lower()
        elif match := _TITLE.match(line):
            document.title = match["title"].strip()
        elif section == "backlog" and (match := _TASK.match(line)):
            flush()
            task = {"task_id": match["task_id"], "title": match["title"].strip()}
        elif section == "backlog" and task is not None and (match := _FIELD.match(line)):
            name = match["name"].lower()
            if name in _FIELDS:
                task[name] = match["value"].strip()
        elif match := _ITEM.match(line):
            if section == "active sprint":
                document.active_sprint.append(match["item"].strip())
            elif section == "completed":
                document.completed.append(match["item"].strip())
    flush()
    return document


def write_default_backlog(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_backlog(DEFAULT_BACKLOG), encoding="utf-8")
    return path
