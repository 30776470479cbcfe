"""Tests for line tokenizing."""

import pytest

from shell_procedure import ProcedureSyntaxError
from shell_procedure.procedure.lexer import (
    is_valid_name,
    split_commands,
    split_line,
    split_params,
    tokenize,
)


class TestTokenize:
    def test_whitespace(self):
        assert tokenize("  say   hello\tworld ") == ["say", "hello", "world"]

    def test_quotes_group_words(self):
        assert tokenize("say 'hello world' \"a b\"") == ["say", "hello world", "a b"]

    def test_semicolon_is_own_token(self):
        assert tokenize("echo i; echo j") == ["echo", "i", ";", "echo", "j"]

    def test_hash_is_literal(self):
        assert tokenize("say #1") == ["say", "#1"]

    def test_unbalanced_quote(self):
        with pytest.raises(ProcedureSyntaxError):
            tokenize("say 'oops")

    def test_split_line(self):
        assert split_line("run-procedure greet World") == ("run-procedure", ["greet", "World"])
        assert split_line("   ") == ("", [])


class TestHelpers:
    def test_split_params(self):
        assert split_params(["a,b", "c", ",", "d,"]) == ["a", "b", "c", "d"]

    def test_split_commands(self):
        assert split_commands(["a", "1", ";", ";", "b"]) == [["a", "1"], ["b"]]

    @pytest.mark.parametrize("name", ["x", "_x", "move-to", "p2"])
    def test_valid_names(self, name):
        assert is_valid_name(name)

    @pytest.mark.parametrize("name", ["", "2p", "-x", "a b", "a.b"])
    def test_invalid_names(self, name):
        assert not is_valid_name(name)
