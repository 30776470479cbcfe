"""Core types for shell-procedure.

This module defines the interfaces shared by the host command table, the
procedure recorder and the replay machinery.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Protocol


@dataclass
class ExecResult:
    """Result of executing a command or a script line."""

    stdout: str = ""
    stderr: str = ""
    exit_code: int = 0

    @property
    def ok(self) -> bool:
        """True when the command succeeded."""
        return self.exit_code == 0


@dataclass
class ExecutionLimits:
    """Execution limits to bound replayed work."""

    max_loop_iterations: int = 10000
    """Maximum iterations of a single for loop."""

    max_call_depth: int = 100
    """Maximum nesting of procedure invocations (procedures may call themselves)."""

    max_procedure_instructions: int = 10000
    """Maximum number of lines recorded into one procedure."""


@dataclass
class OutputBuffer:
    """Output sink collecting replayed commands' output in the order produced."""

    stdout: str = ""
    stderr: str = ""

    def append(self, result: ExecResult) -> None:
        """Append a command's output unmodified."""
        self.stdout += result.stdout
        self.stderr += result.stderr

    def to_result(self, exit_code: int = 0) -> ExecResult:
        return ExecResult(stdout=self.stdout, stderr=self.stderr, exit_code=exit_code)


@dataclass
class CommandContext:
    """Context provided to host commands."""

    limits: ExecutionLimits = field(default_factory=ExecutionLimits)
    """Execution limits."""

    get_registered_commands: Callable[[], list[str]] | None = None
    """Names of every command the table can dispatch."""


class Command(Protocol):
    """Protocol for host commands."""

    name: str

    async def execute(self, args: list[str], ctx: CommandContext) -> ExecResult:
        """Execute the command with the given arguments."""
        ...


class CommandDispatcher(Protocol):
    """The capability replay depends on: run one concrete command.

    A result with a non-zero exit code is a failure; the result itself is
    the cause.
    """

    async def execute(self, command: str, args: list[str]) -> ExecResult:
        ...
