"""Procedure recording and replay for shell-procedure."""

from .dispatcher import CommandTable
from .invoker import Invoker
from .loop import LoopExpander, parse_loop
from .recorder import Recorder
from .types import (
    Idle,
    Instruction,
    LoopSpec,
    Procedure,
    ProcedureContext,
    ProcedureRegistry,
    RecorderState,
    Recording,
)

__all__ = [
    "CommandTable",
    "Idle",
    "Instruction",
    "Invoker",
    "LoopExpander",
    "LoopSpec",
    "Procedure",
    "ProcedureContext",
    "ProcedureRegistry",
    "Recorder",
    "RecorderState",
    "Recording",
    "parse_loop",
]
