"""
Loops and signal propagation through blocks, loops and call frames.
"""

import pytest

from qahlvm.errors import ControlFlowError, TypeMismatch
from qahlvm.object import BREAK, CONTINUE, NORMAL, Integer, ReturnValue
from qahlvm.qahl_ast import (
    Assign, BooleanLiteral, Break, CallExpression, Conditional, Continue,
    FnCall, InfixExpression, IntegerLiteral, Loop, Return, VarRef, WhileLoop
)
from qahlvm.registry import NativeFunction


def _i(value):
    return IntegerLiteral(value)


def _inc(name):
    return Assign(name, InfixExpression(VarRef(name), "+", _i(1)))


def _eq(name, value):
    return InfixExpression(VarRef(name), "==", _i(value))


def _lt(name, value):
    return InfixExpression(VarRef(name), "<", _i(value))


@pytest.mark.parametrize("k", [1, 2, 5, 17])
def test_loop_breaks_after_exactly_k_iterations(executor, k):
    executor.run([Assign("i", _i(0))])
    signal = executor.execute(Loop([
        _inc("i"),
        Conditional([(_eq("i", k), [Break()])]),
    ]))

    assert signal is NORMAL
    assert executor.environment.get("i") == Integer(k)
    assert executor.stats["loop_iterations"] == k


def test_break_skips_rest_of_body(executor, recorder):
    executor.run([
        Loop([
            FnCall("record", [_i(1)]),
            Break(),
            FnCall("record", [_i(2)]),
        ])
    ])
    assert recorder == [[Integer(1)]]


def test_continue_starts_next_iteration(executor):
    # counts only odd values of i below 10
    executor.run([
        Assign("i", _i(0)),
        Assign("odd", _i(0)),
        WhileLoop(_lt("i", 10), [
            _inc("i"),
            Conditional([(InfixExpression(InfixExpression(VarRef("i"), "%", _i(2)), "==", _i(0)), [Continue()])]),
            _inc("odd"),
        ]),
    ])
    assert executor.environment.get("odd") == Integer(5)


def test_while_false_on_entry_runs_zero_times(executor, recorder):
    signal = executor.execute(WhileLoop(BooleanLiteral(False), [FnCall("record", [])]))
    assert signal is NORMAL
    assert recorder == []
    assert executor.stats["loop_iterations"] == 0


def test_while_counts_up(executor):
    executor.run([
        Assign("i", _i(0)),
        WhileLoop(_lt("i", 4), [_inc("i")]),
    ])
    assert executor.environment.get("i") == Integer(4)
    assert executor.stats["loop_iterations"] == 4


def test_while_condition_must_be_boolean(executor):
    with pytest.raises(TypeMismatch):
        executor.run([WhileLoop(_i(1), [])])


def test_break_inside_nested_conditional_reaches_loop(executor):
    executor.run([
        Assign("i", _i(0)),
        Loop([
            _inc("i"),
            Conditional(
                [(_lt("i", 3), [])],
                [Conditional([(BooleanLiteral(True), [Break()])])],
            ),
        ]),
    ])
    assert executor.environment.get("i") == Integer(3)


def test_break_only_leaves_innermost_loop(executor):
    executor.run([
        Assign("outer", _i(0)),
        Assign("inner", _i(0)),
        WhileLoop(_lt("outer", 3), [
            _inc("outer"),
            Loop([_inc("inner"), Break()]),
        ]),
    ])
    assert executor.environment.get("outer") == Integer(3)
    assert executor.environment.get("inner") == Integer(3)


def test_block_returns_first_signal(executor, recorder):
    signal = executor.execute_block([
        FnCall("record", [_i(1)]),
        Continue(),
        FnCall("record", [_i(2)]),
    ])
    assert signal is CONTINUE
    assert recorder == [[Integer(1)]]
    assert executor.execute_block([Break()]) is BREAK
    assert executor.execute_block([]) is NORMAL


def test_return_propagates_out_of_loop_unchanged(executor):
    executor.run([Assign("i", _i(0))])
    signal = executor.execute(Loop([
        _inc("i"),
        Conditional([(_eq("i", 2), [Return(VarRef("i"))])]),
    ]))
    assert signal == ReturnValue(Integer(2))


def test_return_inside_loop_terminates_call(executor, recorder):
    body = [
        Assign("i", _i(0)),
        Loop([
            _inc("i"),
            Conditional([(_eq("i", 3), [Return(InfixExpression(VarRef("i"), "*", _i(10)))])]),
            FnCall("record", [VarRef("i")]),
        ]),
        FnCall("record", [_i(-1)]),
    ]

    def _search(ex, args):
        return ex.run_block_as_call(body)

    executor.register_function(NativeFunction("search", 0, False, _search))
    executor.run([Assign("result", CallExpression("search", []))])

    assert executor.environment.get("result") == Integer(30)
    # iterations 1 and 2 recorded, nothing after the return
    assert recorder == [[Integer(1)], [Integer(2)]]
    assert "search" in executor.functions


def test_call_frame_without_return_yields_none(executor):
    assert executor.run_block_as_call([Assign("x", _i(1))]) is None


def test_break_escaping_call_frame_is_fatal(executor):
    def _leaky(ex, args):
        return ex.run_block_as_call([Break()])

    executor.register_function(NativeFunction("leaky", 0, False, _leaky))
    with pytest.raises(ControlFlowError, match="Break outside of loop"):
        executor.run([FnCall("leaky", [])])
    # checkout released on the error path
    assert "leaky" in executor.functions


def test_loop_can_run_native_calls_repeatedly(executor, recorder):
    executor.run([
        Assign("i", _i(0)),
        WhileLoop(_lt("i", 3), [FnCall("record", [VarRef("i")]), _inc("i")]),
    ])
    assert recorder == [[Integer(0)], [Integer(1)], [Integer(2)]]
    assert executor.stats["native_calls"] == 3
