"""Pytest coverage for expression evaluation."""

import pytest

from qahlvm.errors import (
    FunctionNotFound, InvalidReference, InvalidReturn, QahlZeroDivisionError,
    TypeMismatch, VariableNotFound
)
from qahlvm.object import Array, Boolean, Float, Integer, ObjectRef, String
from qahlvm.qahl_ast import (
    ArrayLiteral, BooleanLiteral, CallExpression, FloatLiteral, GetMember,
    InfixExpression, IntegerLiteral, ObjectLiteral, PrefixExpression,
    StringLiteral, VarRef
)
from qahlvm.registry import NativeFunction


def _infix(left, op, right):
    return InfixExpression(left, op, right)


def _i(value):
    return IntegerLiteral(value)


def _f(value):
    return FloatLiteral(value)


def _s(value):
    return StringLiteral(value)


_CASES = [
    (_infix(_i(2), "+", _i(3)), Integer(5)),
    (_infix(_i(2), "-", _i(3)), Integer(-1)),
    (_infix(_i(4), "*", _i(3)), Integer(12)),
    (_infix(_i(7), "/", _i(2)), Integer(3)),
    (_infix(_i(-7), "/", _i(2)), Integer(-3)),
    (_infix(_i(-7), "%", _i(2)), Integer(-1)),
    (_infix(_i(7), "%", _i(-2)), Integer(1)),
    (_infix(_i(2), "**", _i(10)), Integer(1024)),
    (_infix(_f(1.5), "+", _f(2.0)), Float(3.5)),
    (_infix(_f(5.0), "/", _f(2.0)), Float(2.5)),
    (_infix(_s("ab"), "+", _s("cd")), String("abcd")),
    (_infix(_i(1), "==", _i(1)), Boolean(True)),
    (_infix(_s("a"), "!=", _s("b")), Boolean(True)),
    (_infix(_i(3), ">", _i(2)), Boolean(True)),
    (_infix(_i(3), "<=", _i(2)), Boolean(False)),
    (_infix(_s("apple"), "<", _s("banana")), Boolean(True)),
    (_infix(BooleanLiteral(True), "and", BooleanLiteral(False)), Boolean(False)),
    (_infix(BooleanLiteral(True), "or", BooleanLiteral(False)), Boolean(True)),
    (PrefixExpression("!", BooleanLiteral(False)), Boolean(True)),
    (PrefixExpression("-", _i(4)), Integer(-4)),
]


@pytest.mark.parametrize("expr, expected", _CASES, ids=[repr(c[0]) for c in _CASES])
def test_operators(executor, expr, expected):
    assert executor.evaluate(expr) == expected


def test_literals(executor):
    assert executor.evaluate(_i(1)) == Integer(1)
    assert executor.evaluate(BooleanLiteral(True)) == Boolean(True)
    assert executor.evaluate(ArrayLiteral([_i(1), _s("x")])) == Array([Integer(1), String("x")])
    assert executor.evaluate(ObjectLiteral(_i(16))) == ObjectRef(16)


def test_values_of_different_kinds_are_not_equal():
    assert Integer(1) != Boolean(True)
    assert Integer(1) != Float(1.0)


def test_mismatched_operands_fail(executor):
    with pytest.raises(TypeMismatch):
        executor.evaluate(_infix(_i(1), "+", _f(1.0)))
    with pytest.raises(TypeMismatch):
        executor.evaluate(_infix(_s("a"), "-", _s("b")))
    with pytest.raises(TypeMismatch):
        executor.evaluate(_infix(_i(1), "and", BooleanLiteral(True)))


def test_division_by_zero(executor):
    with pytest.raises(QahlZeroDivisionError):
        executor.evaluate(_infix(_i(1), "/", _i(0)))
    with pytest.raises(QahlZeroDivisionError):
        executor.evaluate(_infix(_f(1.0), "%", _f(0.0)))


@pytest.mark.parametrize("base, exponent", [(-8.0, 0.5), (1e308, 2.0)])
def test_float_power_without_real_result(executor, base, exponent):
    with pytest.raises(TypeMismatch, match="Float power"):
        executor.evaluate(_infix(_f(base), "**", _f(exponent)))


def test_float_power(executor):
    assert executor.evaluate(_infix(_f(9.0), "**", _f(0.5))) == Float(3.0)
    assert executor.evaluate(_infix(_f(-2.0), "**", _f(3.0))) == Float(-8.0)


def test_variable_reads(executor):
    executor.environment.assign("x", Integer(10))
    assert executor.evaluate(_infix(VarRef("x"), "*", _i(2))) == Integer(20)
    with pytest.raises(VariableNotFound):
        executor.evaluate(VarRef("y"))


def test_member_reads_through_every_reference_shape(executor):
    executor.heap.create(3, [("hp", Integer(12))])
    executor.environment.assign("hero", ObjectRef(3))

    assert executor.evaluate(GetMember(_i(3), "hp")) == Integer(12)
    assert executor.evaluate(GetMember(ObjectLiteral(_i(3)), "hp")) == Integer(12)
    assert executor.evaluate(GetMember(_s("hero"), "hp")) == Integer(12)
    assert executor.evaluate(GetMember(VarRef("hero"), "hp")) == Integer(12)


def test_member_read_from_non_object_variable(executor):
    executor.environment.assign("n", Integer(3))
    with pytest.raises(InvalidReference):
        executor.evaluate(GetMember(_s("n"), "hp"))
    with pytest.raises(InvalidReference):
        executor.evaluate(GetMember(BooleanLiteral(True), "hp"))


def test_call_expression_returns_value(executor):
    def _double(ex, args):
        return Integer(ex.evaluate(args[0]).value * 2)

    executor.register_function(NativeFunction("double", 1, False, _double))
    assert executor.evaluate(CallExpression("double", [_i(21)])) == Integer(42)


def test_call_expression_without_value_fails(executor):
    executor.register_function(NativeFunction("nothing", 0, False, lambda ex, args: None))
    with pytest.raises(InvalidReturn):
        executor.evaluate(CallExpression("nothing", []))


def test_call_expression_unknown_function(executor):
    with pytest.raises(FunctionNotFound):
        executor.evaluate(CallExpression("missing", []))


def test_inspect_rendering():
    assert Boolean(True).inspect() == "true"
    assert ObjectRef(1).inspect() == "Object <0x000001>"
    assert Array([String("a"), Integer(1), Array([])]).inspect() == '["a", 1, []]'
