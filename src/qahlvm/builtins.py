# src/qahlvm/builtins.py
"""Standard native functions a host can opt into."""

from .object import String
from .registry import NativeFunction


def _write(executor, args):
    parts = [executor.evaluate(arg).inspect() for arg in args]
    executor.stdout.write(" ".join(parts))


def builtin_print(executor, args):
    _write(executor, args)
    return None


def builtin_println(executor, args):
    _write(executor, args)
    executor.stdout.write("\n")
    return None


def builtin_input(executor, args):
    line = executor.stdin.readline()
    if line.endswith("\n"):
        line = line[:-1]
    return String(line)


def builtin_input_print(executor, args):
    _write(executor, args)
    executor.stdout.flush()
    return builtin_input(executor, [])


def builtin_functions():
    return [
        NativeFunction("print", 0, True, builtin_print),
        NativeFunction("println", 0, True, builtin_println),
        NativeFunction("input", 0, False, builtin_input),
        NativeFunction("input_print", 0, True, builtin_input_print),
    ]
