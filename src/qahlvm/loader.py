"""Load programs from JSON-compatible dicts and dump them back.

Every node is an object whose "_type" names the AST class; the remaining keys
are the constructor fields, for example:

    {"_type": "Assign", "name": "x", "value": {"_type": "IntegerLiteral", "value": 1}}
"""

import json
from pathlib import Path

from . import qahl_ast
from .errors import AstLoadError

# field kinds
EXPR, OPT_EXPR, STMTS, OPT_STMTS, EXPRS = "expr", "opt_expr", "stmts", "opt_stmts", "exprs"
STR, STRS, FIELDS, BRANCHES = "str", "strs", "fields", "branches"
INT, FLOAT, BOOL = "int", "float", "bool"

SCHEMA = {
    # statements
    "Assign": (qahl_ast.Assign, [("name", STR), ("value", EXPR)]),
    "Unassign": (qahl_ast.Unassign, [("name", STR)]),
    "SetMember": (qahl_ast.SetMember, [("target", EXPR), ("field", STR), ("value", EXPR)]),
    "CreateObject": (qahl_ast.CreateObject, [("address", EXPR), ("fields", FIELDS)]),
    "DeleteObject": (qahl_ast.DeleteObject, [("address", EXPR)]),
    "Conditional": (qahl_ast.Conditional, [("branches", BRANCHES), ("else_block", OPT_STMTS)]),
    "Loop": (qahl_ast.Loop, [("body", STMTS)]),
    "WhileLoop": (qahl_ast.WhileLoop, [("condition", EXPR), ("body", STMTS)]),
    "For": (qahl_ast.For, [("variable", STR), ("iterable", EXPR), ("body", STMTS)]),
    "Break": (qahl_ast.Break, []),
    "Continue": (qahl_ast.Continue, []),
    "FnDef": (qahl_ast.FnDef, [("name", STR), ("parameters", STRS), ("body", STMTS)]),
    "Return": (qahl_ast.Return, [("value", OPT_EXPR)]),
    "FnCall": (qahl_ast.FnCall, [("name", STR), ("arguments", EXPRS)]),
    # expressions
    "IntegerLiteral": (qahl_ast.IntegerLiteral, [("value", INT)]),
    "FloatLiteral": (qahl_ast.FloatLiteral, [("value", FLOAT)]),
    "BooleanLiteral": (qahl_ast.BooleanLiteral, [("value", BOOL)]),
    "StringLiteral": (qahl_ast.StringLiteral, [("value", STR)]),
    "ArrayLiteral": (qahl_ast.ArrayLiteral, [("elements", EXPRS)]),
    "ObjectLiteral": (qahl_ast.ObjectLiteral, [("address", EXPR)]),
    "VarRef": (qahl_ast.VarRef, [("name", STR)]),
    "GetMember": (qahl_ast.GetMember, [("target", EXPR), ("field", STR)]),
    "CallExpression": (qahl_ast.CallExpression, [("name", STR), ("arguments", EXPRS)]),
    "PrefixExpression": (qahl_ast.PrefixExpression, [("operator", STR), ("right", EXPR)]),
    "InfixExpression": (qahl_ast.InfixExpression, [("left", EXPR), ("operator", STR), ("right", EXPR)]),
}

_CLASS_NAMES = {cls: name for name, (cls, _) in SCHEMA.items()}


def load_program(data):
    """Build a Program from a statement list or a {"_type": "Program"} dict"""
    if isinstance(data, dict):
        if data.get("_type") != "Program":
            raise AstLoadError(f"Expected Program at top level, got {data.get('_type')!r}")
        data = data.get("statements")
    return qahl_ast.Program(_load_list(data, qahl_ast.Statement, "statements"))


def loads(text):
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise AstLoadError(f"Invalid JSON: {e}") from e
    return load_program(data)


def load_file(path):
    return loads(Path(path).read_text(encoding="utf-8"))


def load_node(data, expected=qahl_ast.Node):
    if not isinstance(data, dict) or "_type" not in data:
        raise AstLoadError(f"Expected a node object with '_type', got {data!r}")

    type_name = data["_type"]
    try:
        cls, fields = SCHEMA[type_name]
    except KeyError:
        raise AstLoadError(f"Unknown node type: {type_name!r}") from None

    if not issubclass(cls, expected):
        raise AstLoadError(f"{type_name} is not a {expected.__name__}")

    kwargs = {}
    for name, kind in fields:
        if name not in data:
            if kind in (OPT_EXPR, OPT_STMTS):
                kwargs[name] = None
                continue
            raise AstLoadError(f"{type_name} is missing field '{name}'")
        kwargs[name] = _load_field(type_name, name, kind, data[name])
    return cls(**kwargs)


def _load_field(type_name, name, kind, raw):
    where = f"{type_name}.{name}"
    if kind == EXPR:
        return load_node(raw, qahl_ast.Expression)
    if kind == OPT_EXPR:
        return None if raw is None else load_node(raw, qahl_ast.Expression)
    if kind == STMTS:
        return _load_list(raw, qahl_ast.Statement, where)
    if kind == OPT_STMTS:
        return None if raw is None else _load_list(raw, qahl_ast.Statement, where)
    if kind == EXPRS:
        return _load_list(raw, qahl_ast.Expression, where)
    if kind == STR:
        return _check(raw, str, where)
    if kind == STRS:
        return [_check(item, str, where) for item in _check(raw, list, where)]
    if kind == INT:
        if isinstance(raw, bool):
            raise AstLoadError(f"{where} must be int, got bool")
        return _check(raw, int, where)
    if kind == FLOAT:
        if isinstance(raw, bool):
            raise AstLoadError(f"{where} must be float, got bool")
        return float(_check(raw, (int, float), where))
    if kind == BOOL:
        return _check(raw, bool, where)
    if kind == FIELDS:
        if isinstance(raw, dict):
            pairs = list(raw.items())
        else:
            pairs = [_pair(item, where) for item in _check(raw, list, where)]
        return [(_check(k, str, where), load_node(v, qahl_ast.Expression)) for k, v in pairs]
    if kind == BRANCHES:
        branches = []
        for item in _check(raw, list, where):
            condition, block = _pair(item, where)
            branches.append((
                load_node(condition, qahl_ast.Expression),
                _load_list(block, qahl_ast.Statement, where),
            ))
        return branches
    raise AssertionError(kind)


def _load_list(raw, expected, where):
    return [load_node(item, expected) for item in _check(raw, list, where)]


def _pair(item, where):
    if not isinstance(item, (list, tuple)) or len(item) != 2:
        raise AstLoadError(f"{where} entries must be [key, value] pairs, got {item!r}")
    return item[0], item[1]


def _check(raw, types, where):
    if not isinstance(raw, types):
        raise AstLoadError(f"{where} has wrong type: {type(raw).__name__}")
    return raw


# === Dumping ===

def dump(node):
    """Inverse of load_node / load_program"""
    if isinstance(node, qahl_ast.Program):
        return {"_type": "Program", "statements": [dump(s) for s in node.statements]}

    type_name = _CLASS_NAMES.get(type(node))
    if type_name is None:
        raise AstLoadError(f"Cannot dump {type(node).__name__}")

    out = {"_type": type_name}
    for name, kind in SCHEMA[type_name][1]:
        out[name] = _dump_field(kind, getattr(node, name))
    return out


def _dump_field(kind, value):
    if value is None:
        return None
    if kind in (EXPR, OPT_EXPR):
        return dump(value)
    if kind in (STMTS, OPT_STMTS, EXPRS):
        return [dump(item) for item in value]
    if kind == STRS:
        return list(value)
    if kind == FIELDS:
        return [[name, dump(expr)] for name, expr in value]
    if kind == BRANCHES:
        return [[dump(cond), [dump(s) for s in block]] for cond, block in value]
    return value


def dumps(node, indent=2):
    return json.dumps(dump(node), indent=indent)
