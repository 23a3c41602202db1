"""Reads template nodes from their JSON serialization (san ANode format)."""

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping

from pyssr.compiler.ast_nodes import (
    Accessor,
    ArrayExpr,
    BinaryExpr,
    BoolLiteral,
    CallExpr,
    Directive,
    ElementNode,
    Expr,
    Interp,
    Node,
    NullLiteral,
    NumberLiteral,
    ObjectExpr,
    Property,
    StringLiteral,
    TertiaryExpr,
    TextExpr,
    TextNode,
    UnaryExpr,
)
from pyssr.compiler.exceptions import ANodeFormatError

# Expression type codes
STRING = 1
NUMBER = 2
BOOL = 3
ACCESSOR = 4
INTERP = 5
CALL = 6
TEXT = 7
BINARY = 8
UNARY = 9
TERTIARY = 10
OBJECT = 11
ARRAY = 12
NULL = 13

# Operators are stored as the sum of their character codes
BINARY_OPERATORS = {
    43: "+",
    45: "-",
    42: "*",
    47: "/",
    37: "%",
    60: "<",
    62: ">",
    121: "<=",
    123: ">=",
    122: "==",
    94: "!=",
    183: "===",
    155: "!==",
    76: "&&",
    248: "||",
}

UNARY_OPERATORS = {
    33: "!",
    45: "-",
}

DIRECTIVES = ("bind", "html", "if", "elif", "else", "for")

logger = logging.getLogger(__name__)


def load_anode_file(path: Path) -> Node:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return load_anode(data)


def load_anode(data: Any, path: str = "$") -> Node:
    """Build a Node from its decoded JSON form."""
    if not isinstance(data, Mapping):
        raise ANodeFormatError("node must be an object", path)

    if "textExpr" in data:
        return TextNode(text_expr=load_expr(data["textExpr"], f"{path}.textExpr"))

    props = [
        _load_prop(p, f"{path}.props[{i}]") for i, p in enumerate(data.get("props") or [])
    ]

    directives: Dict[str, Directive] = {}
    for name, raw in (data.get("directives") or {}).items():
        dir_path = f"{path}.directives.{name}"
        if name not in DIRECTIVES:
            # Event and ref directives only matter on the client
            logger.debug("Skipping directive %r at %s", name, dir_path)
            continue
        if name == "else":
            directives[name] = Directive(value=BoolLiteral(True))
            continue
        directives[name] = _load_directive(raw, dir_path)

    children: List[Node] = [
        load_anode(child, f"{path}.children[{i}]")
        for i, child in enumerate(data.get("children") or [])
    ]

    elses = [
        _load_else(branch, f"{path}.elses[{i}]") for i, branch in enumerate(data.get("elses") or [])
    ]
    if elses and "if" not in directives:
        raise ANodeFormatError("'elses' without an 'if' directive", path)

    return ElementNode(
        tag_name=data.get("tagName") or None,
        props=props,
        directives=directives,
        children=children,
        elses=elses,
    )


def _load_else(data: Any, path: str) -> ElementNode:
    node = load_anode(data, path)
    if not isinstance(node, ElementNode) or not (
        "elif" in node.directives or "else" in node.directives
    ):
        raise ANodeFormatError("else branch needs an 'elif' or 'else' directive", path)
    return node


def _load_prop(data: Any, path: str) -> Property:
    if not isinstance(data, Mapping) or "name" not in data or "expr" not in data:
        raise ANodeFormatError("property needs 'name' and 'expr'", path)
    return Property(
        name=data["name"],
        expr=load_expr(data["expr"], f"{path}.expr"),
        x=bool(data.get("x")),
    )


def _load_directive(data: Any, path: str) -> Directive:
    if not isinstance(data, Mapping) or "value" not in data:
        raise ANodeFormatError("directive needs 'value'", path)
    return Directive(
        value=load_expr(data["value"], f"{path}.value"),
        item=data.get("item"),
        index=data.get("index"),
    )


def load_expr(data: Any, path: str = "$") -> Expr:
    if not isinstance(data, Mapping) or "type" not in data:
        raise ANodeFormatError("expression must be an object with a 'type'", path)

    loader = _EXPR_LOADERS.get(data["type"])
    if loader is None:
        raise ANodeFormatError(f"unknown expression type {data['type']!r}", path)
    try:
        return loader(data, path)
    except KeyError as e:
        raise ANodeFormatError(f"missing field {e.args[0]!r}", path) from e
    except ValueError as e:
        raise ANodeFormatError(f"wrong number of operands: {e}", path) from e


def _segs(data: Mapping[str, Any], path: str, key: str = "segs") -> List[Expr]:
    return [load_expr(s, f"{path}.{key}[{i}]") for i, s in enumerate(data[key])]


def _call_name(data: Any, path: str) -> str:
    # Call names are accessors like ``{type: 4, paths: [{type: 1, value: 'raw'}]}``
    name = load_expr(data, path)
    if isinstance(name, StringLiteral):
        return name.value
    if isinstance(name, Accessor) and all(isinstance(p, StringLiteral) for p in name.paths):
        return ".".join(p.value for p in name.paths)  # type: ignore[union-attr]
    raise ANodeFormatError("call name must be a static path", path)


def _load_call(data: Mapping[str, Any], path: str) -> CallExpr:
    return CallExpr(
        name=_call_name(data["name"], f"{path}.name"),
        args=tuple(_segs(data, path, "args")) if data.get("args") else (),
    )


def _load_interp(data: Mapping[str, Any], path: str) -> Interp:
    filters = [
        _load_call(f, f"{path}.filters[{i}]") for i, f in enumerate(data.get("filters") or [])
    ]
    return Interp(
        expr=load_expr(data["expr"], f"{path}.expr"),
        filters=tuple(filters),
        original=bool(data.get("original")),
    )


def _load_binary(data: Mapping[str, Any], path: str) -> BinaryExpr:
    op = BINARY_OPERATORS.get(data["operator"])
    if op is None:
        raise ANodeFormatError(f"unknown binary operator {data['operator']!r}", path)
    left, right = _segs(data, path)
    return BinaryExpr(op=op, left=left, right=right)


def _load_unary(data: Mapping[str, Any], path: str) -> UnaryExpr:
    op = UNARY_OPERATORS.get(data["operator"])
    if op is None:
        raise ANodeFormatError(f"unknown unary operator {data['operator']!r}", path)
    return UnaryExpr(op=op, operand=load_expr(data["expr"], f"{path}.expr"))


def _load_tertiary(data: Mapping[str, Any], path: str) -> TertiaryExpr:
    test, body, orelse = _segs(data, path)
    return TertiaryExpr(test=test, body=body, orelse=orelse)


def _load_object(data: Mapping[str, Any], path: str) -> ObjectExpr:
    items = []
    for i, item in enumerate(data["items"]):
        item_path = f"{path}.items[{i}]"
        if item.get("spread"):
            raise ANodeFormatError("object spread is not supported", item_path)
        items.append(
            (load_expr(item["name"], f"{item_path}.name"), load_expr(item["expr"], f"{item_path}.expr"))
        )
    return ObjectExpr(items=tuple(items))


def _load_array(data: Mapping[str, Any], path: str) -> ArrayExpr:
    items = []
    for i, item in enumerate(data["items"]):
        item_path = f"{path}.items[{i}]"
        if item.get("spread"):
            raise ANodeFormatError("array spread is not supported", item_path)
        items.append(load_expr(item["expr"], f"{item_path}.expr"))
    return ArrayExpr(items=tuple(items))


_EXPR_LOADERS: Dict[int, Callable[[Mapping[str, Any], str], Expr]] = {
    STRING: lambda d, p: StringLiteral(value=d["value"]),
    NUMBER: lambda d, p: NumberLiteral(value=d["value"]),
    BOOL: lambda d, p: BoolLiteral(value=bool(d["value"])),
    ACCESSOR: lambda d, p: Accessor(paths=tuple(_segs(d, p, "paths"))),
    INTERP: _load_interp,
    CALL: _load_call,
    TEXT: lambda d, p: TextExpr(segments=tuple(_segs(d, p))),
    BINARY: _load_binary,
    UNARY: _load_unary,
    TERTIARY: _load_tertiary,
    OBJECT: _load_object,
    ARRAY: _load_array,
    NULL: lambda d, p: NullLiteral(),
}
