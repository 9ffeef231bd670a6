"""Tests for edit task models."""

from editbench.models.task import TaskOutcome, TaskState, build_task_prompt


class TestTaskState:
    def test_running_is_not_terminal(self):
        assert not TaskState.RUNNING.is_terminal

    def test_terminal_states(self):
        assert TaskState.COMPLETE.is_terminal
        assert TaskState.ABORTED.is_terminal
        assert TaskState.ROUND_LIMIT_EXCEEDED.is_terminal


class TestBuildTaskPrompt:
    def test_embeds_path_and_instruction(self):
        prompt = build_task_prompt("src/app.py", "Extract helpers.")
        assert prompt == (
            "I need you to help refactor my src/app.py file. Extract helpers. "
            "Please use the text editor tool to view and modify the file."
        )


class TestTaskOutcome:
    def test_succeeded(self):
        assert TaskOutcome(state=TaskState.COMPLETE).succeeded
        assert not TaskOutcome(state=TaskState.ABORTED).succeeded

    def test_defaults(self):
        outcome = TaskOutcome(state=TaskState.ABORTED)
        assert outcome.rounds == 0
        assert outcome.transcript == ()
