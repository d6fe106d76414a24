# src/qahlvm/executor/functions.py
from ..errors import ControlFlowError
from ..object import NORMAL, ReturnValue
from .utils import debug_log


class FunctionCallMixin:
    """Native function invocation and call frames."""

    def call_function(self, name, args):
        debug_log("call_function", f"{name} with {len(args)} args", config=self.config)

        # checkout raises FunctionNotFound / ArityMismatch and restores the
        # entry on every exit path
        with self.functions.checkout(name, len(args)) as function:
            self.stats["native_calls"] += 1
            return function.call(self, args)

    def run_block_as_call(self, block):
        """Run statements as the body of a call frame.

        Lets a native function use AST statements as its body: Return ends
        the frame with its value, falling off the end yields None.
        """
        signal = self.execute_block(block)
        if isinstance(signal, ReturnValue):
            return signal.value
        if signal is not NORMAL:
            raise ControlFlowError(f"{signal.kind.capitalize()} outside of loop")
        return None
