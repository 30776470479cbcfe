"""Main Shell class - the primary API for shell-procedure.

Example usage:
    from shell_procedure import Shell

    # Synchronous usage (for REPL, scripts)
    shell = Shell()
    shell.run("begin-procedure greet name")
    shell.run("say hello name")
    shell.run("end-procedure")
    result = shell.run("run-procedure greet World")
    print(result.stdout)  # "hello World\\n"

    # Async usage (for async applications)
    shell = Shell()
    result = await shell.exec("for i 1 3 echo i")
    print(result.stdout)  # "1\\n2\\n3\\n"

    # With execution limits
    shell = Shell(limits=ExecutionLimits(max_loop_iterations=1000))
"""

import asyncio
import logging
from typing import Optional

import nest_asyncio  # type: ignore[import-untyped]

from .commands import create_command_registry
from .errors import ProcedureError
from .procedure import (
    CommandTable,
    Invoker,
    LoopExpander,
    ProcedureContext,
    ProcedureRegistry,
    Recorder,
)
from .procedure.builtins import (
    BEGIN_COMMANDS,
    BUILTINS,
    CONTINUE_COMMANDS,
    END_COMMANDS,
    RECORDING_COMMANDS,
)
from .procedure.dispatcher import error_result
from .procedure.lexer import split_line
from .types import Command, ExecResult, ExecutionLimits

logger = logging.getLogger(__name__)


class Shell:
    """Line-oriented command shell with recordable procedures and for loops.

    One line is handled at a time. While a procedure is being recorded,
    every line except end-procedure is stored instead of run. Not safe for
    concurrent sessions: a host sharing one Shell between sessions must
    serialize calls to exec().
    """

    def __init__(
        self,
        *,
        commands: Optional[dict[str, Command]] = None,
        limits: Optional[ExecutionLimits] = None,
    ):
        """Initialize the shell.

        Args:
            commands: Host command registry. If not provided, uses built-in commands.
            limits: Execution limits for replay.
        """
        self._commands = commands if commands is not None else create_command_registry()
        self._limits = limits or ExecutionLimits()
        self._registry = ProcedureRegistry()
        self._table = CommandTable(self._commands, self._registry, self._limits)
        self._recorder = Recorder(
            self._registry,
            self._limits,
            reserved=BUILTINS,
            recording_commands=RECORDING_COMMANDS,
        )
        self._invoker = Invoker(self._registry, self._table, self._limits)
        self._loops = LoopExpander(self._registry, self._invoker, self._table, self._limits)
        self._table.context = ProcedureContext(
            recorder=self._recorder,
            registry=self._registry,
            invoker=self._invoker,
            loops=self._loops,
            dispatcher=self._table,
            limits=self._limits,
        )

    @property
    def procedures(self) -> ProcedureRegistry:
        """Get the procedure registry."""
        return self._registry

    @property
    def recording(self) -> bool:
        """True while a procedure is being recorded."""
        return self._recorder.recording

    @property
    def recorder(self) -> Recorder:
        return self._recorder

    @property
    def dispatcher(self) -> CommandTable:
        return self._table

    async def exec(self, script: str) -> ExecResult:
        """Execute a script one line at a time.

        Stops at the first line that fails.

        Args:
            script: One or more lines of shell input.

        Returns:
            ExecResult with the accumulated stdout and stderr and the exit
            code of the last line executed.
        """
        stdout = ""
        stderr = ""
        exit_code = 0
        for line in script.splitlines():
            result = await self._exec_line(line)
            stdout += result.stdout
            stderr += result.stderr
            exit_code = result.exit_code
            if exit_code != 0:
                break
        return ExecResult(stdout=stdout, stderr=stderr, exit_code=exit_code)

    async def _exec_line(self, line: str) -> ExecResult:
        text = line.strip()
        if not text or text.startswith("#"):
            return ExecResult()
        name = text.split(None, 1)[0]
        try:
            command, args = split_line(text)
            name = command
            if self._recorder.recording:
                return self._record(command, args)
            return await self._table.call(command, args)
        except ProcedureError as e:
            logger.debug("%s: %s", name, e)
            return error_result(name, e)

    def _record(self, command: str, args: list[str]) -> ExecResult:
        """Route a line typed while recording."""
        if command in END_COMMANDS:
            self._recorder.end(command)
        elif command in BEGIN_COMMANDS:
            self._recorder.begin(args[0] if args else "", args[1:])
        elif command in CONTINUE_COMMANDS:
            self._recorder.continue_(args, command)
        else:
            self._recorder.continue_([command, *args])
        return ExecResult()

    def run(self, script: str) -> ExecResult:
        """Execute a script synchronously.

        This is a convenience wrapper around exec() that works in any context,
        including Jupyter notebooks and async frameworks.

        Example:
            >>> shell = Shell()
            >>> result = shell.run("for i 1 2 echo i")
            >>> print(result.stdout)
            1
            2
        """
        try:
            asyncio.get_running_loop()
            # Already inside an event loop (Jupyter, async framework, etc.)
            nest_asyncio.apply()
        except RuntimeError:
            pass
        return asyncio.run(self.exec(script))

    def reset(self) -> None:
        """Drop every procedure and stop any recording in progress."""
        self._recorder.abort()
        self._registry.clear()
