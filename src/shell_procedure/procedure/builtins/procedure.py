"""Procedure builtins: begin-procedure, continue-procedure, end-procedure,
run-procedure, procedures.

Usage:
  begin-procedure <name> [<param> ...]
  continue-procedure <command> [<arg> ...]
  end-procedure
  run-procedure <name> [<arg> ...]
  procedures [<name>]
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..types import ProcedureContext
    from ...types import ExecResult

from ...errors import ProcedureError, ProcedureSyntaxError


def _result(stdout: str, stderr: str, exit_code: int) -> "ExecResult":
    """Create an ExecResult."""
    from ...types import ExecResult
    return ExecResult(stdout=stdout, stderr=stderr, exit_code=exit_code)


async def handle_begin_procedure(ctx: "ProcedureContext", args: list[str]) -> "ExecResult":
    """Execute the begin-procedure builtin.

    Opens a procedure; every following line is recorded until end-procedure.
    Parameters may be separated by spaces or commas.
    """
    if not args:
        raise ProcedureSyntaxError("missing procedure name")
    ctx.recorder.begin(args[0], args[1:])
    return _result("", "", 0)


async def handle_continue_procedure(ctx: "ProcedureContext", args: list[str]) -> "ExecResult":
    """Execute the continue-procedure builtin - record one line explicitly."""
    ctx.recorder.continue_(args)
    return _result("", "", 0)


async def handle_end_procedure(ctx: "ProcedureContext", args: list[str]) -> "ExecResult":
    """Execute the end-procedure builtin. Trailing words are ignored."""
    ctx.recorder.end()
    return _result("", "", 0)


async def handle_run_procedure(ctx: "ProcedureContext", args: list[str]) -> "ExecResult":
    """Execute the run-procedure builtin."""
    from ...types import OutputBuffer

    if not args:
        raise ProcedureSyntaxError("missing procedure name")
    output = OutputBuffer()
    try:
        await ctx.invoker.invoke(args[0], args[1:], output)
    except ProcedureError as e:
        e.stdout = output.stdout + e.stdout
        e.stderr = output.stderr + e.stderr
        raise
    return output.to_result()


async def handle_procedures(ctx: "ProcedureContext", args: list[str]) -> "ExecResult":
    """Execute the procedures builtin.

    Without arguments, list every procedure's signature. With names, print
    each procedure's recorded body.
    """
    if not args:
        lines = [ctx.registry[name].signature(name) for name in sorted(ctx.registry)]
        return _result("".join(f"{line}\n" for line in lines), "", 0)

    stdout = ""
    for name in args:
        procedure = ctx.registry.lookup(name)
        stdout += f"begin-procedure {procedure.signature(name)}\n"
        for instruction in procedure.instructions:
            stdout += f"  {instruction.format()}\n"
        stdout += "end-procedure\n"
    return _result(stdout, "", 0)
