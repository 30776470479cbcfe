"""Help builtin.

Usage: help [name ...]
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..types import ProcedureContext
    from ...types import ExecResult

USAGE = {
    "begin-procedure": (
        "begin-procedure <name> [<param> ...]",
        "Start recording procedure <name>. Following lines are stored, not run.",
    ),
    "continue-procedure": (
        "continue-procedure <command> [<arg> ...]",
        "Record one line into the open procedure.",
    ),
    "end-procedure": (
        "end-procedure",
        "Finish recording and register the procedure.",
    ),
    "run-procedure": (
        "run-procedure <name> [<arg> ...]",
        "Run a procedure with one value per parameter. <name> <arg> ... also works.",
    ),
    "for": (
        "for <var> <from> <to> [<step>] <command...> [; <command...>]",
        "Run the commands once per value, replacing <var> in their arguments.",
    ),
    "procedures": (
        "procedures [<name> ...]",
        "List procedures, or print the body of the named ones.",
    ),
    "help": (
        "help [<name> ...]",
        "Show usage of shell builtins.",
    ),
}

ALIASES = {
    "proc": "begin-procedure",
    "->": "continue-procedure",
    "endproc": "end-procedure",
}


def _result(stdout: str, stderr: str, exit_code: int) -> "ExecResult":
    from ...types import ExecResult
    return ExecResult(stdout=stdout, stderr=stderr, exit_code=exit_code)


async def handle_help(ctx: "ProcedureContext", args: list[str]) -> "ExecResult":
    """Execute the help builtin."""
    if not args:
        width = max(len(usage) for usage, _ in USAGE.values())
        stdout = "".join(
            f"{usage.ljust(width)}  {summary}\n" for usage, summary in USAGE.values()
        )
        return _result(stdout, "", 0)

    stdout = ""
    stderr = ""
    for name in args:
        entry = USAGE.get(ALIASES.get(name, name))
        if entry is None:
            stderr += f"help: no help topics match '{name}'\n"
            continue
        usage, summary = entry
        stdout += f"{usage}\n    {summary}\n"
    return _result(stdout, stderr, 1 if stderr else 0)
