"""True and false command implementations.

Usage: true
       false

Exit with a status of 0 (true) or 1 (false).
"""

from ...types import CommandContext, ExecResult


class TrueCommand:
    """The true command."""

    name = "true"

    async def execute(self, args: list[str], ctx: CommandContext) -> ExecResult:
        return ExecResult(stdout="", stderr="", exit_code=0)


class FalseCommand:
    """The false command."""

    name = "false"

    async def execute(self, args: list[str], ctx: CommandContext) -> ExecResult:
        return ExecResult(stdout="", stderr="", exit_code=1)
