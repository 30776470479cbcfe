"""Tokenizing of shell lines and procedure parameter lists."""

from __future__ import annotations

import re
import shlex

from ..errors import ProcedureSyntaxError

NAME_PATTERN = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_-]*$")

SEPARATOR = ";"


def is_valid_name(name: str) -> bool:
    """Check if name is usable as a procedure, parameter or loop variable."""
    return bool(NAME_PATTERN.match(name))


def tokenize(text: str) -> list[str]:
    """Split a line into words. Quotes group words and ``;`` is its own token."""
    lexer = shlex.shlex(text, posix=True, punctuation_chars=SEPARATOR)
    lexer.whitespace_split = True
    lexer.commenters = ""
    try:
        return list(lexer)
    except ValueError as e:
        raise ProcedureSyntaxError(f"{e}: {text.strip()}") from None


def split_line(text: str) -> tuple[str, list[str]]:
    """Split a line into its command name and argument words."""
    words = tokenize(text)
    if not words:
        return "", []
    return words[0], words[1:]


def split_params(words: list[str]) -> list[str]:
    """Split parameter words on commas, dropping empty pieces."""
    params = []
    for word in words:
        params.extend(piece for piece in word.split(",") if piece)
    return params


def split_commands(words: list[str]) -> list[list[str]]:
    """Split words into commands on ``;`` tokens. Empty commands are dropped."""
    commands: list[list[str]] = []
    current: list[str] = []
    for word in words:
        if word == SEPARATOR:
            if current:
                commands.append(current)
            current = []
        else:
            current.append(word)
    if current:
        commands.append(current)
    return commands
