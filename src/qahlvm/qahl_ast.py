# src/qahlvm/qahl_ast.py

# Base classes
class Node:
    def __repr__(self):
        return f"{self.__class__.__name__}()"

    def __str__(self):
        return self.__repr__()

class Statement(Node): pass
class Expression(Node): pass

class Program(Node):
    def __init__(self, statements=None):
        self.statements = list(statements or [])

    def __repr__(self):
        return f"Program(statements={len(self.statements)})"

# Statement Nodes
class Assign(Statement):
    def __init__(self, name, value):
        self.name = name; self.value = value

    def __repr__(self):
        return f"Assign(name={self.name}, value={self.value})"

class Unassign(Statement):
    def __init__(self, name):
        self.name = name

    def __repr__(self):
        return f"Unassign(name={self.name})"

class SetMember(Statement):
    """Write one field of a heap object.

    `target` evaluates to an integer address, an object reference, or a
    string naming a variable bound to an object reference.
    """
    def __init__(self, target, field, value):
        self.target = target
        self.field = field
        self.value = value

    def __repr__(self):
        return f"SetMember(target={self.target}, field={self.field}, value={self.value})"

class CreateObject(Statement):
    def __init__(self, address, fields):
        self.address = address
        self.fields = list(fields)  # (name, Expression) pairs, evaluated in order

    def __repr__(self):
        return f"CreateObject(address={self.address}, fields={len(self.fields)})"

class DeleteObject(Statement):
    def __init__(self, address):
        self.address = address

    def __repr__(self):
        return f"DeleteObject(address={self.address})"

class Conditional(Statement):
    def __init__(self, branches, else_block=None):
        self.branches = list(branches)  # (condition, [Statement]) pairs
        self.else_block = else_block

    def __repr__(self):
        has_else = bool(self.else_block)
        return f"Conditional(branches={len(self.branches)}, else={has_else})"

class Loop(Statement):
    def __init__(self, body):
        self.body = list(body)

    def __repr__(self):
        return f"Loop(body={len(self.body)})"

class WhileLoop(Statement):
    def __init__(self, condition, body):
        self.condition = condition
        self.body = list(body)

    def __repr__(self):
        return f"WhileLoop(condition={self.condition}, body={len(self.body)})"

class For(Statement):
    def __init__(self, variable, iterable, body):
        self.variable = variable; self.iterable = iterable; self.body = list(body)

    def __repr__(self):
        return f"For(variable={self.variable}, iterable={self.iterable})"

class Break(Statement): pass
class Continue(Statement): pass

class FnDef(Statement):
    def __init__(self, name, parameters, body):
        self.name = name
        self.parameters = list(parameters)
        self.body = list(body)

    def __repr__(self):
        return f"FnDef(name={self.name}, parameters={len(self.parameters)})"

class Return(Statement):
    def __init__(self, value):
        self.value = value

    def __repr__(self):
        return f"Return(value={self.value})"

class FnCall(Statement):
    def __init__(self, name, arguments):
        self.name = name
        self.arguments = list(arguments)

    def __repr__(self):
        return f"FnCall(name={self.name}, arguments={len(self.arguments)})"

# Expression Nodes
class IntegerLiteral(Expression):
    def __init__(self, value):
        self.value = value

    def __repr__(self):
        return f"IntegerLiteral({self.value})"

class FloatLiteral(Expression):
    def __init__(self, value):
        self.value = value

    def __repr__(self):
        return f"FloatLiteral({self.value})"

class BooleanLiteral(Expression):
    def __init__(self, value):
        self.value = value

    def __repr__(self):
        return f"BooleanLiteral({self.value})"

class StringLiteral(Expression):
    def __init__(self, value):
        self.value = value

    def __repr__(self):
        return f"StringLiteral('{self.value}')"

    def __str__(self):
        return self.value

class ArrayLiteral(Expression):
    def __init__(self, elements):
        self.elements = list(elements)

    def __repr__(self):
        return f"ArrayLiteral(elements={len(self.elements)})"

class ObjectLiteral(Expression):
    """Reference to the object at an address; the address must be an integer"""
    def __init__(self, address):
        self.address = address

    def __repr__(self):
        return f"ObjectLiteral(address={self.address})"

class VarRef(Expression):
    def __init__(self, name):
        self.name = name

    def __repr__(self):
        return f"VarRef('{self.name}')"

    def __str__(self):
        return self.name

class GetMember(Expression):
    def __init__(self, target, field):
        self.target = target
        self.field = field

    def __repr__(self):
        return f"GetMember(target={self.target}, field={self.field})"

class CallExpression(Expression):
    def __init__(self, name, arguments):
        self.name = name
        self.arguments = list(arguments)

    def __repr__(self):
        return f"CallExpression(name={self.name}, arguments={len(self.arguments)})"

class PrefixExpression(Expression):
    def __init__(self, operator, right):
        self.operator = operator; self.right = right

    def __repr__(self):
        return f"PrefixExpression(operator='{self.operator}', right={self.right})"

class InfixExpression(Expression):
    def __init__(self, left, operator, right):
        self.left = left; self.operator = operator; self.right = right

    def __repr__(self):
        return f"InfixExpression(left={self.left}, operator='{self.operator}', right={self.right})"
