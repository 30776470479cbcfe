"""For loop builtin.

Usage: for <var> <from> <to> [<step>] <command...> [; <command...>]

Runs the body once per value from <from> to <to> inclusive. Words equal to
<var> are replaced by the current value. A descending range needs a
negative step; a range that is empty for the given step runs nothing.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..types import ProcedureContext
    from ...types import ExecResult

from ...errors import ProcedureError


async def handle_for(ctx: "ProcedureContext", args: list[str]) -> "ExecResult":
    """Execute the for builtin."""
    from ...types import OutputBuffer

    output = OutputBuffer()
    try:
        await ctx.loops.run(args, output)
    except ProcedureError as e:
        e.stdout = output.stdout + e.stdout
        e.stderr = output.stderr + e.stderr
        raise
    return output.to_result()
