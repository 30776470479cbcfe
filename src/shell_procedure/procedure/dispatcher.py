"""Command table: the dispatcher used for replay and for idle lines.

Lookup order is builtins, then registered procedures (invoked by bare
name), then host commands.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..errors import ExecutionLimitError, ProcedureError, ProcedureSyntaxError
from ..types import Command, CommandContext, ExecResult, ExecutionLimits, OutputBuffer
from .builtins import BUILTINS, RECORDING_COMMANDS
from .types import ProcedureContext, ProcedureRegistry

logger = logging.getLogger(__name__)


def error_result(command: str, error: ProcedureError) -> ExecResult:
    """Render a procedure error as a failed result, keeping partial output."""
    return ExecResult(
        stdout=error.stdout,
        stderr=f"{error.stderr}{command}: {error}\n",
        exit_code=error.exit_code,
    )


class CommandTable:
    """Dispatch a command name and argument list to its handler."""

    def __init__(
        self,
        commands: dict[str, Command],
        registry: ProcedureRegistry,
        limits: Optional[ExecutionLimits] = None,
    ):
        self.commands = commands
        self.registry = registry
        self.limits = limits or ExecutionLimits()
        self.context: Optional[ProcedureContext] = None

    def names(self) -> list[str]:
        """Every name this table can dispatch."""
        return sorted(set(BUILTINS) | set(self.registry) | set(self.commands))

    async def call(self, command: str, args: list[str]) -> ExecResult:
        """Run a command, letting procedure errors propagate."""
        if command in BUILTINS:
            if self.context is None:
                raise RuntimeError("command table is not attached to a procedure context")
            return await BUILTINS[command](self.context, args)

        if command in self.registry:
            if self.context is None:
                raise RuntimeError("command table is not attached to a procedure context")
            output = OutputBuffer()
            try:
                await self.context.invoker.invoke(command, args, output)
            except ProcedureError as e:
                e.stdout = output.stdout + e.stdout
                e.stderr = output.stderr + e.stderr
                raise
            return output.to_result()

        if command in self.commands:
            ctx = CommandContext(limits=self.limits, get_registered_commands=self.names)
            return await self.commands[command].execute(args, ctx)

        return ExecResult(stdout="", stderr=f"{command}: command not found\n", exit_code=127)

    async def execute(self, command: str, args: list[str]) -> ExecResult:
        """Run a command for replay. Procedure errors become failed results.

        Recording commands are refused: a replay never opens or closes a
        procedure definition.
        """
        try:
            if command in RECORDING_COMMANDS:
                raise ProcedureSyntaxError("procedure definitions cannot be nested")
            return await self.call(command, args)
        except ExecutionLimitError:
            raise
        except ProcedureError as e:
            logger.debug("%s failed during replay: %s", command, e)
            return error_result(command, e)
