"""For loop expansion.

Usage: for <var> <from> <to> [<step>] <command...> [; <command...>]

The body is either inline commands, where argument words equal to the loop
variable are replaced by the current value, or the bare name of a
registered one-parameter procedure, which is invoked once per value.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from ..errors import (
    ArityMismatchError,
    ExecutionLimitError,
    InstructionFailedError,
    MalformedRangeError,
    ProcedureSyntaxError,
)
from ..types import CommandDispatcher, ExecutionLimits, OutputBuffer
from .invoker import Invoker
from .lexer import is_valid_name, split_commands
from .types import Instruction, LoopSpec, ProcedureRegistry

logger = logging.getLogger(__name__)

USAGE = "for <var> <from> <to> [<step>] <command...>"

INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


def _is_int(token: str) -> bool:
    return INTEGER_PATTERN.fullmatch(token) is not None


def _parse_int(token: str) -> int:
    if not _is_int(token):
        raise MalformedRangeError(token)
    return int(token)


def parse_loop(words: list[str], registry: Optional[ProcedureRegistry] = None) -> LoopSpec:
    """Parse for-loop arguments into a LoopSpec.

    The fourth word is a step when it is an integer. A single bare word
    naming a registered procedure makes that procedure the body.
    """
    if len(words) < 3:
        raise ProcedureSyntaxError(f"usage: {USAGE}")
    var_name = words[0]
    if not is_valid_name(var_name):
        raise ProcedureSyntaxError(f"'{var_name}': not a valid identifier")
    start = _parse_int(words[1])
    stop = _parse_int(words[2])

    rest = words[3:]
    step = 1
    if rest and _is_int(rest[0]):
        step = int(rest[0])
        if step == 0:
            raise MalformedRangeError(rest[0], "step must be nonzero")
        rest = rest[1:]

    commands = split_commands(rest)
    if not commands:
        raise ProcedureSyntaxError(f"missing loop body; usage: {USAGE}")

    if registry is not None and len(commands) == 1 and len(commands[0]) == 1:
        if commands[0][0] in registry:
            return LoopSpec(var_name, start, stop, step, procedure=commands[0][0])

    body = tuple(
        Instruction(
            command=command[0],
            args=tuple(command[1:]),
            param_slots=tuple(
                (index, 0) for index, arg in enumerate(command[1:]) if arg == var_name
            ),
        )
        for command in commands
    )
    return LoopSpec(var_name, start, stop, step, body=body)


class LoopExpander:
    """Unrolls for loops against a dispatcher."""

    def __init__(
        self,
        registry: ProcedureRegistry,
        invoker: Invoker,
        dispatcher: CommandDispatcher,
        limits: Optional[ExecutionLimits] = None,
    ):
        self.registry = registry
        self.invoker = invoker
        self.dispatcher = dispatcher
        self.limits = limits or ExecutionLimits()

    async def run(self, words: list[str], output: OutputBuffer) -> int:
        """Parse and execute a for loop. Returns the number of iterations run."""
        spec = parse_loop(words, self.registry)
        return await self.expand(spec, output)

    async def expand(self, spec: LoopSpec, output: OutputBuffer) -> int:
        procedure = None
        if spec.procedure is not None:
            procedure = self.registry.lookup(spec.procedure)
            if procedure.arity != 1:
                raise ArityMismatchError(spec.procedure, procedure.arity, 1)

        logger.debug(
            "for %s in %d..%d step %d", spec.var_name, spec.start, spec.stop, spec.step
        )
        iterations = 0
        for value in spec.values():
            iterations += 1
            if iterations > self.limits.max_loop_iterations:
                raise ExecutionLimitError(
                    f"too many iterations ({self.limits.max_loop_iterations})",
                    "iterations",
                )
            actuals = [str(value)]

            if procedure is not None:
                try:
                    await self.invoker.replay(spec.procedure, procedure, actuals, output)
                except InstructionFailedError as e:
                    raise InstructionFailedError(
                        iterations, e.command, e.args, e.cause, value=value
                    ) from e
                continue

            for instruction in spec.body:
                args = instruction.substitute(actuals)
                result = await self.dispatcher.execute(instruction.command, args)
                if not result.ok:
                    output.stdout += result.stdout
                    raise InstructionFailedError(
                        iterations, instruction.command, args, result, value=value
                    )
                output.append(result)
        return iterations
