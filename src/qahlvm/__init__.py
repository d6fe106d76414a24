# src/qahlvm/__init__.py
__version__ = "0.1.0"

from .errors import (
    QahlError, UsageError, VariableNotFound, ObjectExists, ObjectNotFound,
    FieldNotFound, FunctionNotFound, FunctionBusy, ArityMismatch, InvalidReference,
    ControlFlowError, InvalidReturn, TypeMismatch, QahlZeroDivisionError,
    UnsupportedFeature, HeapCorruption, AstLoadError
)
from .object import (
    Value, Integer, Float, Boolean, String, Array, ObjectRef,
    NORMAL, BREAK, CONTINUE, ReturnValue
)
from .environment import Environment
from .memory import ObjectHeap, Object, GcApproach
from .registry import FunctionRegistry, NativeFunction
from .config import Config
from .executor import Executor, run
from .builtins import builtin_functions
from .loader import load_program, load_file, loads, dump, dumps

__all__ = [
    'QahlError', 'UsageError', 'VariableNotFound', 'ObjectExists', 'ObjectNotFound',
    'FieldNotFound', 'FunctionNotFound', 'FunctionBusy', 'ArityMismatch', 'InvalidReference',
    'ControlFlowError', 'InvalidReturn', 'TypeMismatch', 'QahlZeroDivisionError',
    'UnsupportedFeature', 'HeapCorruption', 'AstLoadError',
    'Value', 'Integer', 'Float', 'Boolean', 'String', 'Array', 'ObjectRef',
    'NORMAL', 'BREAK', 'CONTINUE', 'ReturnValue',
    'Environment', 'ObjectHeap', 'Object', 'GcApproach',
    'FunctionRegistry', 'NativeFunction', 'Config',
    'Executor', 'run', 'builtin_functions',
    'load_program', 'load_file', 'loads', 'dump', 'dumps',
]
