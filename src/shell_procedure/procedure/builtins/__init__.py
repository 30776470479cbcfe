"""Shell builtins for recording and replaying procedures.

Builtins receive the ProcedureContext so they can reach the recorder, the
registry and the replay machinery.
"""

from .help import ALIASES, USAGE, handle_help
from .loop import handle_for
from .procedure import (
    handle_begin_procedure,
    handle_continue_procedure,
    handle_end_procedure,
    handle_procedures,
    handle_run_procedure,
)

BUILTINS = {
    "begin-procedure": handle_begin_procedure,
    "continue-procedure": handle_continue_procedure,
    "end-procedure": handle_end_procedure,
    "run-procedure": handle_run_procedure,
    "for": handle_for,
    "procedures": handle_procedures,
    "help": handle_help,
}

for _alias, _name in ALIASES.items():
    BUILTINS[_alias] = BUILTINS[_name]

BEGIN_COMMANDS = frozenset(["begin-procedure", "proc"])
CONTINUE_COMMANDS = frozenset(["continue-procedure", "->"])
END_COMMANDS = frozenset(["end-procedure", "endproc"])
RECORDING_COMMANDS = BEGIN_COMMANDS | CONTINUE_COMMANDS | END_COMMANDS

__all__ = [
    "ALIASES",
    "BEGIN_COMMANDS",
    "BUILTINS",
    "CONTINUE_COMMANDS",
    "END_COMMANDS",
    "RECORDING_COMMANDS",
    "USAGE",
]
