from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable

from agentkit.types import PromptId

PROMPT_TEXT = {
    PromptId.OVERWRITE_INSTRUCTIONS: "Do you want to overwrite it? (y/N): ",
    PromptId.MERGE_SKILLS: "Do you want to merge with existing skills? (y/N): ",
}

_YES = {"y", "yes"}


@runtime_checkable
class Confirm(Protocol):
    def __call__(self, prompt: PromptId) -> bool: ...


class TerminalConfirm:
    """Ask on the terminal. Anything but an explicit yes means no."""

    def __init__(self, input_func: Callable[[str], str] | None = None):
        self._input = input_func if input_func is not None else input

    def __call__(self, prompt: PromptId) -> bool:
        try:
            reply = self._input(PROMPT_TEXT[prompt])
        except EOFError:
            return False
        return reply.strip().lower() in _YES


class AlwaysConfirm:
    def __init__(self, answer: bool = True):
        self.answer = answer
        self.asked: list[PromptId] = []

    def __call__(self, prompt: PromptId) -> bool:
        self.asked.append(prompt)
        return self.answer
