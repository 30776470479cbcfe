"""shell-procedure: recordable, parameterized procedures and for loops for a
line-oriented command shell."""

from .errors import (
    AlreadyRecordingError,
    ArityMismatchError,
    DuplicateParameterError,
    ExecutionLimitError,
    InstructionFailedError,
    MalformedRangeError,
    NotRecordingError,
    ProcedureError,
    ProcedureSyntaxError,
    UnknownProcedureError,
)
from .procedure import (
    CommandTable,
    Instruction,
    Invoker,
    LoopExpander,
    Procedure,
    ProcedureRegistry,
    Recorder,
)
from .shell import Shell
from .types import (
    Command,
    CommandContext,
    CommandDispatcher,
    ExecResult,
    ExecutionLimits,
    OutputBuffer,
)

__all__ = [
    "AlreadyRecordingError",
    "ArityMismatchError",
    "Command",
    "CommandContext",
    "CommandDispatcher",
    "CommandTable",
    "DuplicateParameterError",
    "ExecResult",
    "ExecutionLimitError",
    "ExecutionLimits",
    "Instruction",
    "InstructionFailedError",
    "Invoker",
    "LoopExpander",
    "MalformedRangeError",
    "NotRecordingError",
    "OutputBuffer",
    "Procedure",
    "ProcedureError",
    "ProcedureRegistry",
    "ProcedureSyntaxError",
    "Recorder",
    "Shell",
    "UnknownProcedureError",
]
