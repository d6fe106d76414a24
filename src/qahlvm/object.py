# object.py

class Value:
    def inspect(self):
        raise NotImplementedError("Subclasses must implement this method")

    def clone(self):
        return self

    def __eq__(self, other):
        return type(self) is type(other) and self.value == other.value

    def __hash__(self):
        return hash((type(self).__name__, self.value))

    def __repr__(self):
        return f"{self.__class__.__name__}({self.value!r})"

class Integer(Value):
    def __init__(self, value): self.value = value
    def inspect(self): return str(self.value)
    def type(self): return "INTEGER"

class Float(Value):
    def __init__(self, value): self.value = value
    def inspect(self): return str(self.value)
    def type(self): return "FLOAT"

class Boolean(Value):
    def __init__(self, value): self.value = value
    def inspect(self): return "true" if self.value else "false"
    def type(self): return "BOOLEAN"

class String(Value):
    def __init__(self, value): self.value = value
    def inspect(self): return self.value
    def type(self): return "STRING"
    def __str__(self): return self.value

class ObjectRef(Value):
    """Logical pointer to a heap address. Does not own the object."""
    def __init__(self, value): self.value = value
    def inspect(self): return f"Object <{self.value:#08x}>"
    def type(self): return "OBJECT"

class Array(Value):
    def __init__(self, elements): self.elements = elements

    def inspect(self):
        return "[" + ", ".join(_element_repr(el) for el in self.elements) + "]"

    def type(self): return "ARRAY"

    def clone(self):
        return Array([el.clone() for el in self.elements])

    def __eq__(self, other):
        return isinstance(other, Array) and self.elements == other.elements

    def __hash__(self):
        return hash(("Array", tuple(self.elements)))

    def __repr__(self):
        return f"Array({self.elements!r})"


def _element_repr(value):
    # strings are quoted inside arrays, bare at top level
    if isinstance(value, String):
        return f'"{value.value}"'
    return value.inspect()


TRUE, FALSE = Boolean(True), Boolean(False)


def native_bool(value):
    return TRUE if value else FALSE


# === Control signals ===

class Signal:
    def __init__(self, kind): self.kind = kind
    def __repr__(self): return f"Signal({self.kind})"

NORMAL = Signal("normal")
BREAK = Signal("break")
CONTINUE = Signal("continue")

class ReturnValue(Signal):
    def __init__(self, value):
        super().__init__("return")
        self.value = value

    def inspect(self):
        return self.value.inspect() if self.value is not None else "null"

    def __eq__(self, other):
        return isinstance(other, ReturnValue) and self.value == other.value

    def __hash__(self):
        return hash(("return", self.value))

    def __repr__(self):
        return f"ReturnValue({self.value!r})"
