# src/qahlvm/executor/expressions.py
import math

from ..errors import InvalidReturn, QahlZeroDivisionError, TypeMismatch
from ..object import Array, Boolean, Float, Integer, ObjectRef, String, native_bool
from .utils import debug_log, expect_boolean, expect_integer, resolve_address


def _trunc_div(left, right):
    quotient = abs(left) // abs(right)
    return quotient if (left >= 0) == (right >= 0) else -quotient


def _arith(operator, left, right):
    if operator == "+":
        return left + right
    if operator == "-":
        return left - right
    if operator == "*":
        return left * right
    raise AssertionError(operator)


_COMPARISONS = {
    "==": lambda l, r: l == r,
    "!=": lambda l, r: l != r,
    ">": lambda l, r: l > r,
    ">=": lambda l, r: l >= r,
    "<": lambda l, r: l < r,
    "<=": lambda l, r: l <= r,
}


class ExpressionEvaluatorMixin:
    """Pure value computation. Reads variables and heap fields, writes nothing."""

    def eval_integer_literal(self, node):
        return Integer(node.value)

    def eval_float_literal(self, node):
        return Float(node.value)

    def eval_boolean_literal(self, node):
        return native_bool(node.value)

    def eval_string_literal(self, node):
        return String(node.value)

    def eval_array_literal(self, node):
        return Array([self.evaluate(el) for el in node.elements])

    def eval_object_literal(self, node):
        address = expect_integer(self.evaluate(node.address), "object address")
        return ObjectRef(address)

    def eval_var_ref(self, node):
        return self.environment.get(node.name).clone()

    def eval_get_member(self, node):
        address = resolve_address(self.evaluate(node.target), self.environment)
        return self.heap.get_field(address, node.field).clone()

    def eval_call_expression(self, node):
        result = self.call_function(node.name, node.arguments)
        if result is None:
            raise InvalidReturn(f"Function {node.name} returned no value")
        return result

    def eval_prefix_expression(self, node):
        right = self.evaluate(node.right)
        if node.operator in ("!", "not"):
            return native_bool(not expect_boolean(right, "operand of not"))
        if node.operator == "-" and isinstance(right, (Integer, Float)):
            return type(right)(-right.value)
        raise TypeMismatch(f"Unknown operator: {node.operator}{right.type()}")

    def eval_infix_expression(self, node):
        operator = node.operator
        left = self.evaluate(node.left)
        right = self.evaluate(node.right)
        debug_log("  InfixExpression", f"{left!r} {operator} {right!r}", config=self.config)

        if operator in ("and", "or", "&&", "||"):
            l = expect_boolean(left, f"left operand of {operator}")
            r = expect_boolean(right, f"right operand of {operator}")
            return native_bool(l and r if operator in ("and", "&&") else l or r)

        if type(left) is not type(right):
            raise TypeMismatch(
                f"Type mismatch: {left.type()} {operator} {right.type()}"
            )

        if operator in _COMPARISONS:
            return self._eval_comparison(operator, left, right)

        if isinstance(left, Integer):
            return self._eval_integer_infix(operator, left.value, right.value)
        if isinstance(left, Float):
            return self._eval_float_infix(operator, left.value, right.value)
        if isinstance(left, String) and operator == "+":
            return String(left.value + right.value)

        raise TypeMismatch(f"Unknown operator: {left.type()} {operator} {right.type()}")

    def _eval_comparison(self, operator, left, right):
        if operator in ("==", "!="):
            if isinstance(left, (Integer, Float, String, Boolean)):
                return native_bool(_COMPARISONS[operator](left.value, right.value))
        elif isinstance(left, (Integer, Float, String)):
            return native_bool(_COMPARISONS[operator](left.value, right.value))
        raise TypeMismatch(f"Cannot compare {left.type()} {operator} {right.type()}")

    def _eval_integer_infix(self, operator, left, right):
        if operator in ("+", "-", "*"):
            return Integer(_arith(operator, left, right))
        if operator == "/":
            if right == 0:
                raise QahlZeroDivisionError("Integer division by zero")
            return Integer(_trunc_div(left, right))
        if operator == "%":
            if right == 0:
                raise QahlZeroDivisionError("Integer modulo by zero")
            return Integer(left - right * _trunc_div(left, right))
        if operator == "**":
            if right < 0:
                raise TypeMismatch("Integer power needs a non-negative exponent")
            return Integer(left ** right)
        raise TypeMismatch(f"Unknown operator: INTEGER {operator} INTEGER")

    def _eval_float_infix(self, operator, left, right):
        if operator in ("+", "-", "*"):
            return Float(_arith(operator, left, right))
        if operator == "/":
            if right == 0:
                raise QahlZeroDivisionError("Float division by zero")
            return Float(left / right)
        if operator == "%":
            if right == 0:
                raise QahlZeroDivisionError("Float modulo by zero")
            return Float(math.fmod(left, right))
        if operator == "**":
            try:
                return Float(math.pow(left, right))
            except (OverflowError, ValueError) as e:
                raise TypeMismatch(f"Float power {left} ** {right} failed: {e}") from e
        raise TypeMismatch(f"Unknown operator: FLOAT {operator} FLOAT")
