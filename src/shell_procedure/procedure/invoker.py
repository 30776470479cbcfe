"""Procedure invocation.

Substitutes actual values into each recorded instruction and hands the
concrete commands to the dispatcher one at a time, in recorded order. The
first failure stops the replay; nothing is rolled back.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..errors import ArityMismatchError, ExecutionLimitError, InstructionFailedError
from ..types import CommandDispatcher, ExecutionLimits, OutputBuffer
from .types import Procedure, ProcedureRegistry

logger = logging.getLogger(__name__)


class Invoker:
    """Replays registered procedures against a dispatcher."""

    def __init__(
        self,
        registry: ProcedureRegistry,
        dispatcher: CommandDispatcher,
        limits: Optional[ExecutionLimits] = None,
    ):
        self.registry = registry
        self.dispatcher = dispatcher
        self.limits = limits or ExecutionLimits()
        self.call_depth = 0

    async def invoke(self, name: str, actuals: list[str], output: OutputBuffer) -> None:
        """Run procedure ``name`` with ``actuals`` bound to its parameters.

        Raises:
            UnknownProcedureError: no procedure of that name.
            ArityMismatchError: wrong number of actual values. Nothing is dispatched.
            InstructionFailedError: a dispatched command failed.
        """
        procedure = self.registry.lookup(name)
        if len(actuals) != procedure.arity:
            raise ArityMismatchError(name, procedure.arity, len(actuals))
        logger.debug("invoking %s with %r", name, actuals)
        await self.replay(name, procedure, actuals, output)

    async def replay(
        self,
        name: str,
        procedure: Procedure,
        actuals: list[str],
        output: OutputBuffer,
    ) -> None:
        """Dispatch every instruction of an already arity-checked procedure."""
        self.call_depth += 1
        try:
            if self.call_depth > self.limits.max_call_depth:
                raise ExecutionLimitError(
                    f"{name}: procedure call depth exceeded ({self.limits.max_call_depth})",
                    "call_depth",
                )
            for position, instruction in enumerate(procedure.instructions, start=1):
                args = instruction.substitute(actuals)
                result = await self.dispatcher.execute(instruction.command, args)
                if not result.ok:
                    output.stdout += result.stdout
                    raise InstructionFailedError(position, instruction.command, args, result)
                output.append(result)
        finally:
            self.call_depth -= 1
