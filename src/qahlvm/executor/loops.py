# src/qahlvm/executor/loops.py
from ..object import BREAK, CONTINUE, NORMAL
from .utils import debug_log, expect_boolean


class LoopRunnerMixin:
    """Consumes Break and Continue; lets Return through untouched."""

    def run_loop(self, body):
        # No implicit exit: without a Break this never returns.
        while True:
            signal = self._run_iteration(body)
            if signal is BREAK:
                return NORMAL
            if signal is not None:
                return signal

    def run_while(self, condition, body):
        while expect_boolean(self.evaluate(condition), "while condition"):
            signal = self._run_iteration(body)
            if signal is BREAK:
                return NORMAL
            if signal is not None:
                return signal
        return NORMAL

    def _run_iteration(self, body):
        """Run the body once; None means keep looping."""
        self.stats["loop_iterations"] += 1
        signal = self.execute_block(body)
        if signal is NORMAL or signal is CONTINUE:
            return None
        debug_log("  Loop exit", signal, config=self.config)
        return signal

    def exec_loop(self, node):
        return self.run_loop(node.body)

    def exec_while_loop(self, node):
        return self.run_while(node.condition, node.body)
