"""
Pytest configuration for qahlvm tests.
"""
import sys
import os

import pytest

# Ensure `import qahlvm` works from a plain checkout (src/ on sys.path)
_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
_SRC_DIR = os.path.join(_ROOT, 'src')

if _SRC_DIR not in sys.path:
    sys.path.insert(0, _SRC_DIR)

from qahlvm.config import Config
from qahlvm.executor import Executor
from qahlvm.registry import NativeFunction


@pytest.fixture
def config():
    return Config(report_leaks=False)


@pytest.fixture
def executor(config):
    return Executor(config=config)


@pytest.fixture
def recorder(executor):
    """Registers a variadic `record` function and returns what it saw."""
    calls = []

    def _record(ex, args):
        calls.append([ex.evaluate(arg) for arg in args])
        return None

    executor.register_function(NativeFunction("record", 0, True, _record))
    return calls
