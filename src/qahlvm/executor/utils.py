# src/qahlvm/executor/utils.py
import logging

from ..config import config as qahl_config
from ..errors import InvalidReference, TypeMismatch
from ..object import Boolean, Integer, ObjectRef, String

logger = logging.getLogger("qahlvm.executor")

_LEVELS = {"debug": logging.DEBUG, "info": logging.INFO, "warning": logging.WARNING}


def debug_log(message, data=None, level="debug", config=None):
    """Conditional trace logging that respects the active configuration."""
    cfg = config or qahl_config
    if not cfg.should_log(level):
        return

    if data is not None:
        logger.log(_LEVELS.get(level, logging.DEBUG), "%s: %s", message, data)
    else:
        logger.log(_LEVELS.get(level, logging.DEBUG), "%s", message)


def expect_integer(value, what):
    if not isinstance(value, Integer):
        raise TypeMismatch(f"Expected integer for {what}, got {_kind(value)}")
    return value.value


def expect_boolean(value, what):
    if not isinstance(value, Boolean):
        raise TypeMismatch(f"Expected boolean for {what}, got {_kind(value)}")
    return value.value


def resolve_address(value, environment):
    """Turn an evaluated object reference into a heap address.

    Accepted shapes: an integer address, an object reference, or a string
    naming a global variable that holds an object reference.
    """
    if isinstance(value, Integer):
        return value.value
    if isinstance(value, ObjectRef):
        return value.value
    if isinstance(value, String):
        bound = environment.get(value.value)
        if not isinstance(bound, ObjectRef):
            raise InvalidReference(
                f"Variable {value.value} does not hold an object reference ({_kind(bound)})"
            )
        return bound.value
    raise InvalidReference(f"Cannot resolve an object from {_kind(value)}")


def _kind(value):
    kind = getattr(value, "type", None)
    return kind() if callable(kind) else type(value).__name__
