"""
Native function registry.

A function is checked out of the registry while it runs, so it cannot see or
call itself through the registry during its own call. Recursive self-calls are
not supported; a function that tries one gets FunctionNotFound.
"""

import logging
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterable, List, Optional

from .errors import ArityMismatch, FunctionBusy, FunctionNotFound

logger = logging.getLogger(__name__)


class NativeFunction:
    """Host routine exposed to programs by name.

    `fn(executor, args)` receives the executor and the unevaluated argument
    expressions; it evaluates them itself with `executor.evaluate`.
    """

    def __init__(self, name: str, param_count: int, variadic: bool, fn: Callable):
        self.name = name
        self.param_count = param_count
        self.variadic = variadic
        self.fn = fn

    def call(self, executor, args: List[Any]):
        return self.fn(executor, args)

    def accepts(self, count: int) -> bool:
        return self.variadic or count == self.param_count

    def inspect(self):
        return f"<native function: {self.name}>"

    def __repr__(self):
        return (
            f"NativeFunction(name={self.name}, param_count={self.param_count}, "
            f"variadic={self.variadic})"
        )


class _Entry:
    __slots__ = ("function", "checked_out")

    def __init__(self, function):
        self.function = function
        self.checked_out = False


class FunctionRegistry:
    def __init__(self):
        self._entries: Dict[str, _Entry] = {}

    def __contains__(self, name):
        entry = self._entries.get(name)
        return entry is not None and not entry.checked_out

    def __len__(self):
        return len(self._entries)

    def names(self):
        return sorted(self._entries)

    def register(self, function, param_count: Optional[int] = None,
                 variadic: bool = False, fn: Optional[Callable] = None):
        """Install a function, replacing any previous one with the same name.

        Accepts either a ready NativeFunction or `(name, param_count,
        variadic, fn)`.
        """
        if isinstance(function, str):
            if param_count is None or fn is None:
                raise TypeError("register(name, ...) needs param_count and fn")
            function = NativeFunction(function, param_count, variadic, fn)

        entry = self._entries.get(function.name)
        if entry is not None and entry.checked_out:
            raise FunctionBusy(function.name, "replace")
        self._entries[function.name] = _Entry(function)
        logger.debug("registered %r", function)
        return function

    def register_all(self, functions: Iterable):
        for function in functions:
            self.register(function)

    def unregister(self, name: str):
        entry = self._entries.get(name)
        if entry is None:
            raise FunctionNotFound(name)
        if entry.checked_out:
            raise FunctionBusy(name, "remove")
        del self._entries[name]

    def lookup(self, name: str):
        entry = self._entries.get(name)
        if entry is None or entry.checked_out:
            raise FunctionNotFound(name)
        return entry.function

    def is_checked_out(self, name: str) -> bool:
        entry = self._entries.get(name)
        return entry is not None and entry.checked_out

    @contextmanager
    def checkout(self, name: str, arg_count: int):
        """Hold exclusive use of `name` for the duration of one call"""
        function = self.lookup(name)
        if not function.accepts(arg_count):
            raise ArityMismatch(name, function.param_count, arg_count)

        entry = self._entries[name]
        entry.checked_out = True
        try:
            yield function
        finally:
            entry.checked_out = False
