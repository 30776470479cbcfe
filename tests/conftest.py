"""Shared fixtures: a fake dispatcher that records every dispatch."""

import pytest

from shell_procedure import ExecResult


class FakeDispatcher:
    """Records (command, args) pairs and echoes them back as output."""

    def __init__(self):
        self.calls: list[tuple[str, list[str]]] = []
        self.failures: dict[str, ExecResult] = {}

    def fail_on(self, command: str, stderr: str = "boom\n", exit_code: int = 1) -> None:
        self.failures[command] = ExecResult(stdout="", stderr=stderr, exit_code=exit_code)

    async def execute(self, command: str, args: list[str]) -> ExecResult:
        self.calls.append((command, list(args)))
        if command in self.failures:
            return self.failures[command]
        return ExecResult(stdout=" ".join([command, *args]) + "\n", stderr="", exit_code=0)


@pytest.fixture
def dispatcher():
    return FakeDispatcher()
