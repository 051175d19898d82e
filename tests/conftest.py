"""Shared fixtures: a manually advanced clock for delayed tasks."""

import pytest


class _FakeTask:
    def __init__(self, due: float, callback) -> None:
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """TaskScheduler whose time only moves when the test calls advance()."""

    def __init__(self) -> None:
        self.now = 0.0
        self.tasks: list[_FakeTask] = []

    def call_later(self, delay, callback):
        task = _FakeTask(self.now + delay, callback)
        self.tasks.append(task)
        return task

    @property
    def pending(self) -> list[_FakeTask]:
        return [t for t in self.tasks if not t.cancelled]

    def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while True:
            due = [t for t in self.pending if t.due <= target]
            if not due:
                break
            task = min(due, key=lambda t: t.due)
            self.tasks.remove(task)
            self.now = task.due
            task.callback()
        self.now = target


@pytest.fixture
def fake_scheduler():
    return FakeScheduler()
