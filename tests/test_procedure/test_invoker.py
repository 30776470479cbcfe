"""Tests for procedure invocation."""

import pytest

from shell_procedure import (
    ArityMismatchError,
    ExecutionLimitError,
    ExecutionLimits,
    Instruction,
    InstructionFailedError,
    Invoker,
    OutputBuffer,
    Procedure,
    ProcedureRegistry,
    Recorder,
    UnknownProcedureError,
)


def _define(registry, name, params, *lines):
    recorder = Recorder(registry)
    recorder.begin(name, params)
    for line in lines:
        recorder.continue_(line.split())
    recorder.end()


class TestSubstitute:
    """Test the pure substitution step."""

    def test_no_slots(self):
        instruction = Instruction("say", ("a", "b"))
        assert instruction.substitute(["x"]) == ["a", "b"]

    def test_slots_overwritten(self):
        instruction = Instruction("move", ("y", "to", "x"), ((0, 1), (2, 0)))
        assert instruction.substitute(["10", "20"]) == ["20", "to", "10"]

    def test_substitute_leaves_instruction_untouched(self):
        instruction = Instruction("say", ("name",), ((0, 0),))
        instruction.substitute(["World"])
        assert instruction.args == ("name",)

    def test_out_of_range_slot_rejected(self):
        with pytest.raises(ValueError):
            Procedure(params=("a",), instructions=(Instruction("x", ("a",), ((0, 1),)),))


class TestInvoke:
    """Test replay against a fake dispatcher."""

    @pytest.mark.asyncio
    async def test_greet(self, dispatcher):
        registry = ProcedureRegistry()
        _define(registry, "greet", ["name"], "say hello name")
        output = OutputBuffer()
        await Invoker(registry, dispatcher).invoke("greet", ["World"], output)
        assert dispatcher.calls == [("say", ["hello", "World"])]
        assert output.stdout == "say hello World\n"

    @pytest.mark.asyncio
    async def test_instructions_dispatched_in_order(self, dispatcher):
        registry = ProcedureRegistry()
        _define(registry, "seq", ["a", "b"], "one a", "two b a", "three")
        await Invoker(registry, dispatcher).invoke("seq", ["1", "2"], OutputBuffer())
        assert dispatcher.calls == [
            ("one", ["1"]),
            ("two", ["2", "1"]),
            ("three", []),
        ]

    @pytest.mark.asyncio
    async def test_value_with_spaces_kept_whole(self, dispatcher):
        registry = ProcedureRegistry()
        _define(registry, "p", ["v"], "set v")
        await Invoker(registry, dispatcher).invoke("p", ["two words"], OutputBuffer())
        assert dispatcher.calls == [("set", ["two words"])]

    @pytest.mark.asyncio
    async def test_unknown_procedure(self, dispatcher):
        with pytest.raises(UnknownProcedureError) as exc:
            await Invoker(ProcedureRegistry(), dispatcher).invoke("nope", [], OutputBuffer())
        assert exc.value.name == "nope"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("actuals", [[], ["a"], ["a", "b", "c"]])
    async def test_arity_mismatch_dispatches_nothing(self, dispatcher, actuals):
        registry = ProcedureRegistry()
        _define(registry, "pair", ["x", "y"], "say x y")
        with pytest.raises(ArityMismatchError) as exc:
            await Invoker(registry, dispatcher).invoke("pair", actuals, OutputBuffer())
        assert exc.value.expected == 2
        assert exc.value.given == len(actuals)
        assert dispatcher.calls == []

    @pytest.mark.asyncio
    async def test_idempotent(self, dispatcher):
        """Invoking twice performs the same dispatches twice."""
        registry = ProcedureRegistry()
        _define(registry, "p", ["v"], "a v", "b v")
        invoker = Invoker(registry, dispatcher)
        await invoker.invoke("p", ["7"], OutputBuffer())
        first = list(dispatcher.calls)
        await invoker.invoke("p", ["7"], OutputBuffer())
        assert dispatcher.calls[len(first):] == first
        assert len(dispatcher.calls) == 4


class TestFailure:
    """Test failure propagation."""

    @pytest.mark.asyncio
    async def test_stops_at_failing_instruction(self, dispatcher):
        registry = ProcedureRegistry()
        _define(registry, "p", [], "first", "second x", "third")
        dispatcher.fail_on("second", stderr="second: broken\n", exit_code=3)
        output = OutputBuffer()
        with pytest.raises(InstructionFailedError) as exc:
            await Invoker(registry, dispatcher).invoke("p", [], output)
        assert exc.value.position == 2
        assert exc.value.command == "second"
        assert exc.value.args == ["x"]
        assert exc.value.cause.stderr == "second: broken\n"
        assert exc.value.exit_code == 3
        assert [c for c, _ in dispatcher.calls] == ["first", "second"]
        assert output.stdout == "first\n"

    @pytest.mark.asyncio
    async def test_registry_untouched_after_failure(self, dispatcher):
        registry = ProcedureRegistry()
        _define(registry, "p", ["v"], "bad v")
        before = registry["p"]
        dispatcher.fail_on("bad")
        with pytest.raises(InstructionFailedError):
            await Invoker(registry, dispatcher).invoke("p", ["1"], OutputBuffer())
        assert registry["p"] is before
        assert registry["p"].instructions[0].args == ("v",)


class TestCallDepth:
    """Test the call depth limit."""

    @pytest.mark.asyncio
    async def test_depth_limit(self):
        registry = ProcedureRegistry()
        _define(registry, "loop", [], "loop")

        class Reentrant:
            def __init__(self):
                self.invoker = None

            async def execute(self, command, args):
                output = OutputBuffer()
                await self.invoker.invoke(command, args, output)
                return output.to_result()

        reentrant = Reentrant()
        invoker = Invoker(registry, reentrant, ExecutionLimits(max_call_depth=5))
        reentrant.invoker = invoker
        with pytest.raises(ExecutionLimitError) as exc:
            await invoker.invoke("loop", [], OutputBuffer())
        assert exc.value.limit_type == "call_depth"
        assert invoker.call_depth == 0
