# src/qahlvm/executor/statements.py
from ..errors import UnsupportedFeature
from ..object import BREAK, CONTINUE, NORMAL, ReturnValue
from .utils import debug_log, expect_boolean, expect_integer, resolve_address


class StatementExecutorMixin:
    """Handles variable, heap and conditional statements.

    Every handler returns a control signal; only Break, Continue and Return
    produce anything other than NORMAL.
    """

    def execute_block(self, statements):
        self.stats["max_statements_in_block"] = max(
            self.stats["max_statements_in_block"], len(statements)
        )

        for stmt in statements:
            signal = self.execute(stmt)
            if signal is not NORMAL:
                debug_log("  Block interrupted", signal, config=self.config)
                return signal
        return NORMAL

    # === VARIABLES ===

    def exec_assign(self, node):
        debug_log("exec_assign", node.name, config=self.config)

        value = self.evaluate(node.value)
        if self.environment.assign(node.name, value):
            self.created_globals.add(node.name)
        return NORMAL

    def exec_unassign(self, node):
        debug_log("exec_unassign", node.name, config=self.config)

        value = self.environment.unassign(node.name)
        self.heap.decrement(value)
        return NORMAL

    # === OBJECTS ===

    def exec_create_object(self, node):
        address = expect_integer(self.evaluate(node.address), "object address")
        fields = [(name, self.evaluate(expr)) for name, expr in node.fields]
        self.heap.create(address, fields)
        return NORMAL

    def exec_delete_object(self, node):
        address = expect_integer(self.evaluate(node.address), "object address")
        self.heap.delete(address)
        return NORMAL

    def exec_set_member(self, node):
        address = resolve_address(self.evaluate(node.target), self.environment)
        value = self.evaluate(node.value)
        self.heap.set_field(address, node.field, value)
        return NORMAL

    # === CONTROL FLOW ===

    def exec_conditional(self, node):
        for condition, block in node.branches:
            if expect_boolean(self.evaluate(condition), "condition"):
                return self.execute_block(block)

        if node.else_block:
            return self.execute_block(node.else_block)
        return NORMAL

    def exec_break(self, node):
        return BREAK

    def exec_continue(self, node):
        return CONTINUE

    def exec_return(self, node):
        value = self.evaluate(node.value) if node.value is not None else None
        return ReturnValue(value)

    def exec_fn_call(self, node):
        self.call_function(node.name, node.arguments)
        return NORMAL

    # === UNSUPPORTED ===

    def exec_for(self, node):
        raise UnsupportedFeature("For loop")

    def exec_fn_def(self, node):
        raise UnsupportedFeature(f"Function definition ({node.name})")
