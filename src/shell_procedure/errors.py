"""Errors raised by the procedure recorder, invoker and loop expander.

Every error carries an ``exit_code`` so that the shell facade can render it
as a failed ``ExecResult``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .types import ExecResult


class ProcedureError(Exception):
    """Base class for all procedure errors.

    ``stdout``/``stderr`` hold output produced before the failure.
    """

    exit_code = 1
    stdout = ""
    stderr = ""


class ProcedureSyntaxError(ProcedureError):
    """A command line that cannot be parsed (bad names, quoting, missing parts)."""

    exit_code = 2


class AlreadyRecordingError(ProcedureError):
    """begin-procedure while another procedure is being recorded."""

    def __init__(self, recording: str, requested: Optional[str] = None):
        self.recording = recording
        self.requested = requested
        message = f"already recording procedure '{recording}'"
        if requested:
            message += f", cannot begin '{requested}'"
        super().__init__(message)


class NotRecordingError(ProcedureError):
    """continue-procedure or end-procedure with no procedure open."""

    def __init__(self, command: str):
        self.command = command
        super().__init__("no procedure is being recorded")


class DuplicateParameterError(ProcedureError):
    """The same formal parameter declared twice."""

    def __init__(self, procedure: str, parameter: str):
        self.procedure = procedure
        self.parameter = parameter
        super().__init__(
            f"procedure '{procedure}': duplicate parameter '{parameter}'"
        )


class UnknownProcedureError(ProcedureError):
    """Invocation of a name that is not in the registry."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"unknown procedure '{name}'")


class ArityMismatchError(ProcedureError):
    """Actual argument count differs from the declared parameter count."""

    def __init__(self, procedure: str, expected: int, given: int):
        self.procedure = procedure
        self.expected = expected
        self.given = given
        super().__init__(
            f"procedure '{procedure}' takes {expected} argument(s), {given} given"
        )


class MalformedRangeError(ProcedureError):
    """A for loop bound or step that is not a usable integer."""

    def __init__(self, token: str, reason: str = "not an integer"):
        self.token = token
        self.reason = reason
        super().__init__(f"'{token}': {reason}")


class InstructionFailedError(ProcedureError):
    """A dispatched command failed during replay.

    ``position`` is 1-based: the instruction index for a procedure, the
    iteration ordinal for a loop.
    """

    def __init__(
        self,
        position: int,
        command: str,
        args: list[str],
        cause: "ExecResult",
        value: Optional[int] = None,
    ):
        self.position = position
        self.command = command
        self.args = list(args)
        self.cause = cause
        self.value = value
        self.exit_code = cause.exit_code or 1
        where = f"iteration {position} ({value})" if value is not None else f"instruction {position}"
        detail = cause.stderr.strip() or f"exit code {cause.exit_code}"
        super().__init__(f"{where}: {' '.join([command, *args])}: {detail}")


class ExecutionLimitError(ProcedureError):
    """A configured execution limit was exceeded. Aborts the whole line."""

    exit_code = 126

    def __init__(self, message: str, limit_type: str):
        self.limit_type = limit_type
        super().__init__(message)
