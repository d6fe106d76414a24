"""
Error taxonomy for the qahl executor.

Every error is fatal: it aborts the current run. There is no recovery or
partial-result mode, the host is expected to have validated the tree first.
"""


class QahlError(Exception):
    """Base class for everything the executor raises"""
    pass


class UsageError(QahlError):
    """The program used the runtime in a way it does not allow"""
    pass


class VariableNotFound(UsageError):
    def __init__(self, name):
        super().__init__(f"Variable {name} does not exist")
        self.name = name


class ObjectExists(UsageError):
    def __init__(self, address):
        super().__init__(f"Object already exists at {address}, deallocate first")
        self.address = address


class ObjectNotFound(UsageError):
    def __init__(self, address):
        super().__init__(f"No object at address {address}")
        self.address = address


class FieldNotFound(UsageError):
    def __init__(self, address, field):
        super().__init__(f"Object {address} has no field {field}")
        self.address = address
        self.field = field


class FunctionNotFound(UsageError):
    def __init__(self, name):
        super().__init__(f"Function {name} does not exist")
        self.name = name


class ArityMismatch(UsageError):
    def __init__(self, name, expected, given):
        super().__init__(f"Function {name} takes {expected} arguments, {given} given")
        self.name = name
        self.expected = expected
        self.given = given


class FunctionBusy(UsageError):
    def __init__(self, name, action):
        super().__init__(f"Cannot {action} function {name} while it is running")
        self.name = name


class InvalidReference(UsageError):
    """An object reference did not resolve to a heap address"""
    pass


class ControlFlowError(UsageError):
    """Break, Continue or Return escaped every construct that consumes it"""
    pass


class InvalidReturn(UsageError):
    """A function used as an expression produced no value"""
    pass


class TypeMismatch(QahlError):
    pass


class QahlZeroDivisionError(TypeMismatch):
    pass


class UnsupportedFeature(QahlError):
    def __init__(self, feature):
        super().__init__(f"{feature} is not implemented")
        self.feature = feature


class HeapCorruption(QahlError):
    """Use-count bookkeeping went out of balance"""
    pass


class AstLoadError(QahlError):
    pass
