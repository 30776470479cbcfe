"""Host commands shipped with shell-procedure."""

from ..types import Command
from .echo import EchoCommand, SayCommand
from .status import FalseCommand, TrueCommand


def create_command_registry() -> dict[str, Command]:
    """Create the default registry of host commands."""
    commands: list[Command] = [EchoCommand(), SayCommand(), TrueCommand(), FalseCommand()]
    return {command.name: command for command in commands}


__all__ = ["create_command_registry"]
