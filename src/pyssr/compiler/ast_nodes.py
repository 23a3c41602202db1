"""AST node definitions for parsed templates."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union


@dataclass(frozen=True)
class BoolLiteral:
    value: bool


@dataclass(frozen=True)
class StringLiteral:
    value: str


@dataclass(frozen=True)
class NumberLiteral:
    value: Union[int, float]


@dataclass(frozen=True)
class NullLiteral:
    pass


@dataclass(frozen=True)
class Accessor:
    """Data path like ``user.name`` or ``list[index]``.

    Each path item is an expression; plain segments are StringLiteral or
    NumberLiteral, computed segments are any other expression.
    """

    paths: Tuple["Expr", ...]


@dataclass(frozen=True)
class Interp:
    """Interpolation ``{{ expr | filter(arg) }}``."""

    expr: "Expr"
    filters: Tuple["CallExpr", ...] = ()
    original: bool = False

    @property
    def is_raw(self) -> bool:
        return any(f.name == "raw" for f in self.filters)


@dataclass(frozen=True)
class TextExpr:
    """Text mixing static strings and interpolations."""

    segments: Tuple["Expr", ...]


@dataclass(frozen=True)
class BinaryExpr:
    op: str
    left: "Expr"
    right: "Expr"


@dataclass(frozen=True)
class UnaryExpr:
    op: str
    operand: "Expr"


@dataclass(frozen=True)
class TertiaryExpr:
    test: "Expr"
    body: "Expr"
    orelse: "Expr"


@dataclass(frozen=True)
class ArrayExpr:
    items: Tuple["Expr", ...]


@dataclass(frozen=True)
class ObjectExpr:
    items: Tuple[Tuple["Expr", "Expr"], ...]


@dataclass(frozen=True)
class CallExpr:
    name: str
    args: Tuple["Expr", ...] = ()


Expr = Union[
    BoolLiteral,
    StringLiteral,
    NumberLiteral,
    NullLiteral,
    Accessor,
    Interp,
    TextExpr,
    BinaryExpr,
    UnaryExpr,
    TertiaryExpr,
    ArrayExpr,
    ObjectExpr,
    CallExpr,
]


def is_literal(expr: Expr) -> bool:
    """True if expr is known at compile time (bool, string or number)."""
    return isinstance(expr, (BoolLiteral, StringLiteral, NumberLiteral))


def literal_value(expr: Expr) -> Any:
    """Value of a literal expression, None for anything dynamic."""
    if isinstance(expr, (BoolLiteral, StringLiteral, NumberLiteral)):
        return expr.value
    return None


@dataclass(frozen=True)
class Property:
    """Element attribute: name plus its bound expression.

    ``x`` is set by the parser when the value must be HTML escaped at runtime.
    """

    name: str
    expr: Expr
    x: bool = False


@dataclass(frozen=True)
class Directive:
    value: Expr
    # Loop variable names, only used by the ``for`` directive
    item: Optional[str] = None
    index: Optional[str] = None


@dataclass(frozen=True)
class TextNode:
    text_expr: Expr


@dataclass(frozen=True)
class ElementNode:
    """Element node. ``tag_name`` is None for a dynamic tag resolved at runtime."""

    tag_name: Optional[str] = None
    props: List[Property] = field(default_factory=list)
    directives: Dict[str, Directive] = field(default_factory=dict)
    children: List["Node"] = field(default_factory=list)
    # elif/else siblings of an ``if`` element, in source order
    elses: List["ElementNode"] = field(default_factory=list)

    def get_prop(self, name: str) -> Optional[Property]:
        """Last property with the given name."""
        found = None
        for prop in self.props:
            if prop.name == name:
                found = prop
        return found


Node = Union[ElementNode, TextNode]
