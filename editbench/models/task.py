"""Edit task domain model."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from editbench.models.provider import LLMMessage

TASK_PROMPT_TEMPLATE = (
    "I need you to help refactor my {path} file. {instruction} "
    "Please use the text editor tool to view and modify the file."
)


class TaskState(str, Enum):
    RUNNING = "running"
    COMPLETE = "complete"
    ABORTED = "aborted"
    ROUND_LIMIT_EXCEEDED = "round_limit_exceeded"

    @property
    def is_terminal(self) -> bool:
        return self != TaskState.RUNNING


def build_task_prompt(path: str, instruction: str) -> str:
    """Build the opening user turn for an edit task."""
    return TASK_PROMPT_TEMPLATE.format(path=path, instruction=instruction.strip())


@dataclass(frozen=True)
class TaskOutcome:
    """Result of one dispatch loop run."""

    state: TaskState
    rounds: int = 0
    final_text: str = ""
    transcript: tuple[LLMMessage, ...] = ()
    usage: dict = field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        return self.state == TaskState.COMPLETE
