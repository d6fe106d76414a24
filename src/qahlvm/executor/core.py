# src/qahlvm/executor/core.py
import logging
import sys

from .. import qahl_ast
from ..config import config as default_config
from ..environment import Environment
from ..errors import ControlFlowError, QahlError
from ..memory import GcApproach, ObjectHeap
from ..object import NORMAL, ReturnValue
from ..registry import FunctionRegistry
from .expressions import ExpressionEvaluatorMixin
from .functions import FunctionCallMixin
from .loops import LoopRunnerMixin
from .statements import StatementExecutorMixin
from .utils import debug_log

logger = logging.getLogger(__name__)

_STATEMENTS = {
    qahl_ast.Assign: "exec_assign",
    qahl_ast.Unassign: "exec_unassign",
    qahl_ast.CreateObject: "exec_create_object",
    qahl_ast.DeleteObject: "exec_delete_object",
    qahl_ast.SetMember: "exec_set_member",
    qahl_ast.Conditional: "exec_conditional",
    qahl_ast.Loop: "exec_loop",
    qahl_ast.WhileLoop: "exec_while_loop",
    qahl_ast.FnCall: "exec_fn_call",
    qahl_ast.Break: "exec_break",
    qahl_ast.Continue: "exec_continue",
    qahl_ast.Return: "exec_return",
    qahl_ast.For: "exec_for",
    qahl_ast.FnDef: "exec_fn_def",
}

_EXPRESSIONS = {
    qahl_ast.IntegerLiteral: "eval_integer_literal",
    qahl_ast.FloatLiteral: "eval_float_literal",
    qahl_ast.BooleanLiteral: "eval_boolean_literal",
    qahl_ast.StringLiteral: "eval_string_literal",
    qahl_ast.ArrayLiteral: "eval_array_literal",
    qahl_ast.ObjectLiteral: "eval_object_literal",
    qahl_ast.VarRef: "eval_var_ref",
    qahl_ast.GetMember: "eval_get_member",
    qahl_ast.CallExpression: "eval_call_expression",
    qahl_ast.PrefixExpression: "eval_prefix_expression",
    qahl_ast.InfixExpression: "eval_infix_expression",
}

_ESCAPES = {
    "break": "Break outside of loop",
    "continue": "Continue outside of loop",
    "return": "Return outside of function",
}


class Executor(ExpressionEvaluatorMixin, StatementExecutorMixin, LoopRunnerMixin, FunctionCallMixin):
    """Runtime context plus statement dispatcher.

    Owns one environment, one heap and one function registry. Native
    functions receive the executor itself and may use all three.
    """

    def __init__(self, gc_approach=None, config=None, functions=(), stdout=None, stdin=None):
        self.config = config or default_config
        self.gc_approach = self.config.gc_approach if gc_approach is None else gc_approach
        if isinstance(self.gc_approach, str):
            self.gc_approach = GcApproach.parse(self.gc_approach)

        self.environment = Environment()
        self.heap = ObjectHeap(strict=self.config.strict_counts)
        self.functions = FunctionRegistry()
        self.functions.register_all(functions)

        self.stdout = stdout if stdout is not None else sys.stdout
        self.stdin = stdin if stdin is not None else sys.stdin

        self.created_globals = set()
        self.stats = {
            "executed_statements": 0,
            "loop_iterations": 0,
            "native_calls": 0,
            "max_statements_in_block": 0,
        }

    @classmethod
    def with_builtins(cls, **kwargs):
        from ..builtins import builtin_functions
        functions = kwargs.pop("functions", ())
        executor = cls(**kwargs)
        # host functions override builtins of the same name
        executor.add_native_functions(builtin_functions())
        executor.add_native_functions(functions)
        return executor

    # ---- Host API -----------------------------------------------------------------

    def register_function(self, function, param_count=None, variadic=False, fn=None):
        return self.functions.register(function, param_count, variadic, fn)

    def add_native_functions(self, functions):
        self.functions.register_all(functions)

    def run(self, statements):
        """Execute a top-level program and return the globals it created."""
        if isinstance(statements, qahl_ast.Program):
            statements = statements.statements

        self.created_globals = set()
        debug_log("run", f"Processing {len(statements)} statements", config=self.config)

        signal = self.execute_block(statements)
        if signal is not NORMAL:
            raise ControlFlowError(_ESCAPES[signal.kind])

        self.collect()
        if self.config.report_leaks:
            self.report_leaks()
        return set(self.created_globals)

    def collect(self):
        return self.heap.collect(self.gc_approach, self)

    def report_leaks(self):
        leaks = self.heap.leaks()
        if leaks:
            logger.warning("%d objects still allocated after run", len(leaks))
        for address, obj in leaks:
            logger.warning("Object %s: %r", address, obj)
        return leaks

    # ---- Dispatch -----------------------------------------------------------------

    def execute(self, node):
        handler = _STATEMENTS.get(type(node))
        if handler is None:
            raise QahlError(f"Unknown statement type: {type(node).__name__}")

        self.stats["executed_statements"] += 1
        debug_log("execute", type(node).__name__, config=self.config)
        return getattr(self, handler)(node)

    def evaluate(self, node):
        handler = _EXPRESSIONS.get(type(node))
        if handler is None:
            raise QahlError(f"Unknown expression type: {type(node).__name__}")
        return getattr(self, handler)(node)


# Global Entry Point
def run(program, functions=(), gc_approach=None, config=None, builtins=False):
    if builtins:
        executor = Executor.with_builtins(functions=functions, gc_approach=gc_approach, config=config)
    else:
        executor = Executor(functions=functions, gc_approach=gc_approach, config=config)
    executor.run(program)
    return executor
