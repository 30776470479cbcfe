"""Procedure data model.

Instructions and procedures are frozen once recorded; replay never mutates
them. The recorder's state is an explicit sum type: ``Idle`` or
``Recording``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional, Union

from ..errors import UnknownProcedureError

if TYPE_CHECKING:
    from ..types import CommandDispatcher, ExecutionLimits
    from .invoker import Invoker
    from .loop import LoopExpander
    from .recorder import Recorder

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Instruction:
    """One recorded command line."""

    command: str
    args: tuple[str, ...] = ()
    param_slots: tuple[tuple[int, int], ...] = ()
    """(arg_index, param_index) pairs overwritten at invocation time."""

    def substitute(self, actuals: list[str] | tuple[str, ...]) -> list[str]:
        """Return the concrete argument list for the given actual values."""
        concrete = list(self.args)
        for arg_index, param_index in self.param_slots:
            concrete[arg_index] = actuals[param_index]
        return concrete

    def format(self) -> str:
        return " ".join([self.command, *self.args])


@dataclass(frozen=True)
class Procedure:
    """A closed, parameterized sequence of instructions."""

    params: tuple[str, ...] = ()
    instructions: tuple[Instruction, ...] = ()

    def __post_init__(self):
        for instruction in self.instructions:
            for arg_index, param_index in instruction.param_slots:
                if param_index >= len(self.params) or arg_index >= len(instruction.args):
                    raise ValueError(
                        f"parameter slot ({arg_index}, {param_index}) out of range "
                        f"in '{instruction.format()}'"
                    )

    @property
    def arity(self) -> int:
        return len(self.params)

    def signature(self, name: str) -> str:
        return " ".join([name, *self.params])


class ProcedureRegistry(dict):
    """Dict of procedure name to Procedure.

    Lives as long as the shell session. Defining a name that already exists
    replaces it (last definition wins).
    """

    def define(self, name: str, procedure: Procedure) -> None:
        if name in self:
            logger.warning("procedure %r redefined", name)
        self[name] = procedure

    def lookup(self, name: str) -> Procedure:
        """Get a procedure or raise UnknownProcedureError."""
        try:
            return self[name]
        except KeyError:
            raise UnknownProcedureError(name) from None


@dataclass(frozen=True)
class Idle:
    """No procedure is open."""


@dataclass
class Recording:
    """A procedure is open and lines are appended to it."""

    name: str
    params: tuple[str, ...]
    instructions: list[Instruction] = field(default_factory=list)

    def close(self) -> Procedure:
        return Procedure(params=self.params, instructions=tuple(self.instructions))


RecorderState = Union[Idle, Recording]


@dataclass(frozen=True)
class LoopSpec:
    """A parsed for loop. Transient, never stored."""

    var_name: str
    start: int
    stop: int
    step: int = 1
    body: tuple[Instruction, ...] = ()
    """Inline commands. Empty when ``procedure`` is set."""

    procedure: Optional[str] = None
    """Name of a registered procedure used as the body."""

    def values(self):
        """Yield the loop values; an empty range yields nothing."""
        value = self.start
        if self.step > 0:
            while value <= self.stop:
                yield value
                value += self.step
        else:
            while value >= self.stop:
                yield value
                value += self.step


@dataclass
class ProcedureContext:
    """Context provided to procedure builtins."""

    recorder: "Recorder"
    registry: ProcedureRegistry
    invoker: "Invoker"
    loops: "LoopExpander"
    dispatcher: "CommandDispatcher"
    limits: "ExecutionLimits"
