"""Echo command implementation.

Usage: echo [-n] [arg ...]

Print arguments separated by spaces.

Options:
  -n    Do not output the trailing newline
"""

from ...types import CommandContext, ExecResult


class EchoCommand:
    """The echo command."""

    name = "echo"

    async def execute(self, args: list[str], ctx: CommandContext) -> ExecResult:
        """Execute the echo command."""
        newline = True
        while args and args[0] == "-n":
            newline = False
            args = args[1:]
        text = " ".join(args)
        return ExecResult(stdout=text + ("\n" if newline else ""), stderr="", exit_code=0)


class SayCommand(EchoCommand):
    """say: alias of echo."""

    name = "say"
