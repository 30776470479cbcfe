"""Procedure recording state machine.

The recorder is either ``Idle`` or ``Recording`` one procedure. Nested
definitions are rejected: what is typed while recording is stored, not run.
A failing line leaves the state exactly as it was.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from ..errors import (
    AlreadyRecordingError,
    DuplicateParameterError,
    ExecutionLimitError,
    NotRecordingError,
    ProcedureSyntaxError,
)
from ..types import ExecutionLimits
from .lexer import is_valid_name, split_params
from .types import Idle, Instruction, Procedure, ProcedureRegistry, RecorderState, Recording

logger = logging.getLogger(__name__)


class Recorder:
    """Records typed lines into procedures and files them in the registry."""

    def __init__(
        self,
        registry: ProcedureRegistry,
        limits: Optional[ExecutionLimits] = None,
        reserved: Iterable[str] = (),
        recording_commands: Iterable[str] = (),
    ):
        self.registry = registry
        self.limits = limits or ExecutionLimits()
        self.reserved = frozenset(reserved)
        self.recording_commands = frozenset(recording_commands)
        self.state: RecorderState = Idle()

    @property
    def recording(self) -> bool:
        return isinstance(self.state, Recording)

    def begin(self, name: str, param_words: list[str]) -> None:
        """Open procedure ``name`` with the given formal parameters."""
        if isinstance(self.state, Recording):
            raise AlreadyRecordingError(self.state.name, name)
        if not name:
            raise ProcedureSyntaxError("missing procedure name")
        if not is_valid_name(name):
            raise ProcedureSyntaxError(f"'{name}': not a valid procedure name")
        if name in self.reserved:
            raise ProcedureSyntaxError(f"'{name}': is a shell builtin")

        params = split_params(param_words)
        seen: set[str] = set()
        for param in params:
            if not is_valid_name(param):
                raise ProcedureSyntaxError(
                    f"'{param}': not a valid parameter name"
                )
            if param in seen:
                raise DuplicateParameterError(name, param)
            seen.add(param)

        self.state = Recording(name=name, params=tuple(params))
        logger.debug("recording procedure %s(%s)", name, ", ".join(params))

    def continue_(self, words: list[str], command: str = "continue-procedure") -> Instruction:
        """Append one command line to the open procedure.

        ``words`` is the line split into words, command name first. Words
        equal to a formal parameter name become parameter slots.
        """
        if not isinstance(self.state, Recording):
            raise NotRecordingError(command)
        if not words:
            raise ProcedureSyntaxError("missing command")
        if words[0] in self.recording_commands:
            raise ProcedureSyntaxError(
                f"'{words[0]}': procedure definitions cannot be nested"
            )
        if len(self.state.instructions) >= self.limits.max_procedure_instructions:
            raise ExecutionLimitError(
                f"procedure '{self.state.name}': too many instructions "
                f"({self.limits.max_procedure_instructions})",
                "procedure_instructions",
            )

        inner, args = words[0], words[1:]
        positions = {param: index for index, param in enumerate(self.state.params)}
        slots = tuple(
            (arg_index, positions[arg])
            for arg_index, arg in enumerate(args)
            if arg in positions
        )
        instruction = Instruction(command=inner, args=tuple(args), param_slots=slots)
        self.state.instructions.append(instruction)
        return instruction

    def end(self, command: str = "end-procedure") -> tuple[str, Procedure]:
        """Close the open procedure and register it under its name."""
        if not isinstance(self.state, Recording):
            raise NotRecordingError(command)
        name, procedure = self.state.name, self.state.close()
        self.registry.define(name, procedure)
        self.state = Idle()
        logger.debug(
            "procedure %s defined with %d instruction(s)", name, len(procedure.instructions)
        )
        return name, procedure

    def abort(self) -> None:
        """Drop the procedure being recorded, if any."""
        if isinstance(self.state, Recording):
            logger.debug("recording of %s abandoned", self.state.name)
        self.state = Idle()
