"""Compiles template expressions into Python expression source."""

import ast
from typing import Dict, List, Optional, Type

from pyssr.compiler.ast_nodes import (
    Accessor,
    ArrayExpr,
    BinaryExpr,
    BoolLiteral,
    CallExpr,
    Expr,
    Interp,
    NullLiteral,
    NumberLiteral,
    ObjectExpr,
    StringLiteral,
    TertiaryExpr,
    TextExpr,
    UnaryExpr,
)
from pyssr.compiler.exceptions import PySSRCompileError
from pyssr.config import CompilerOptions


ESCAPE = "escape"
PLAIN = "plain"

_COMPARE_OPS: Dict[str, Type[ast.cmpop]] = {
    "==": ast.Eq,
    "===": ast.Eq,
    "!=": ast.NotEq,
    "!==": ast.NotEq,
    "<": ast.Lt,
    ">": ast.Gt,
    "<=": ast.LtE,
    ">=": ast.GtE,
}

_ARITH_OPS: Dict[str, Type[ast.operator]] = {
    "-": ast.Sub,
    "*": ast.Mult,
    "/": ast.Div,
    "%": ast.Mod,
}


def _call(name: str, args: List[ast.expr]) -> ast.Call:
    return ast.Call(func=ast.Name(id=name, ctx=ast.Load()), args=args, keywords=[])


class ExprCompiler:
    """Turns an Expr into Python source evaluated inside a render function.

    In ``escape`` mode interpolations are HTML escaped (unless piped through
    ``raw``); in ``plain`` mode values are left untouched.
    """

    def __init__(self, options: Optional[CompilerOptions] = None) -> None:
        self.options = options or CompilerOptions()

    def compile(self, expr: Expr, mode: str = ESCAPE) -> str:
        return ast.unparse(self.compile_ast(expr, mode))

    def compile_ast(self, expr: Expr, mode: str = ESCAPE) -> ast.expr:
        if isinstance(expr, (BoolLiteral, StringLiteral, NumberLiteral)):
            return ast.Constant(value=expr.value)
        if isinstance(expr, NullLiteral):
            return ast.Constant(value=None)
        if isinstance(expr, Accessor):
            return self._accessor(expr)
        if isinstance(expr, Interp):
            return self._interp(expr, mode)
        if isinstance(expr, TextExpr):
            return self._text(expr, mode)
        if isinstance(expr, BinaryExpr):
            return self._binary(expr)
        if isinstance(expr, UnaryExpr):
            return self._unary(expr)
        if isinstance(expr, TertiaryExpr):
            return ast.IfExp(
                test=self.compile_ast(expr.test, PLAIN),
                body=self.compile_ast(expr.body, PLAIN),
                orelse=self.compile_ast(expr.orelse, PLAIN),
            )
        if isinstance(expr, ArrayExpr):
            return ast.List(
                elts=[self.compile_ast(item, PLAIN) for item in expr.items],
                ctx=ast.Load(),
            )
        if isinstance(expr, ObjectExpr):
            return ast.Dict(
                keys=[self.compile_ast(k, PLAIN) for k, _ in expr.items],
                values=[self.compile_ast(v, PLAIN) for _, v in expr.items],
            )
        if isinstance(expr, CallExpr):
            return ast.Call(
                func=self._ctx_lookup("methods", expr.name),
                args=[self.compile_ast(a, PLAIN) for a in expr.args],
                keywords=[],
            )
        raise PySSRCompileError(f"Unsupported expression: {type(expr).__name__}")

    def _data(self) -> ast.expr:
        return ast.parse(self.options.data_var, mode="eval").body

    def _ctx_lookup(self, attr: str, key: str) -> ast.expr:
        # ctx.<attr>['<key>']
        return ast.Subscript(
            value=ast.Attribute(
                value=ast.Name(id=self.options.ctx_var, ctx=ast.Load()),
                attr=attr,
                ctx=ast.Load(),
            ),
            slice=ast.Constant(value=key),
            ctx=ast.Load(),
        )

    def _accessor(self, expr: Accessor) -> ast.expr:
        args = [self._data()]
        args.extend(self.compile_ast(p, PLAIN) for p in expr.paths)
        return _call("get_path", args)

    def _interp(self, expr: Interp, mode: str) -> ast.expr:
        value = self.compile_ast(expr.expr, PLAIN)
        for f in expr.filters:
            if f.name == "raw":
                continue
            value = ast.Call(
                func=self._ctx_lookup("filters", f.name),
                args=[value] + [self.compile_ast(a, PLAIN) for a in f.args],
                keywords=[],
            )
        if mode == ESCAPE and not expr.is_raw:
            return _call("escape_html", [value])
        return value

    def _text(self, expr: TextExpr, mode: str) -> ast.expr:
        parts: List[ast.expr] = []
        for seg in expr.segments:
            if isinstance(seg, StringLiteral):
                parts.append(ast.Constant(value=seg.value))
                continue
            value = self.compile_ast(seg, mode)
            if isinstance(seg, Interp) and mode == ESCAPE and not seg.is_raw:
                parts.append(value)
            else:
                parts.append(_call("to_str", [value]))

        if not parts:
            return ast.Constant(value="")
        if len(parts) == 1:
            return parts[0]
        return ast.Call(
            func=ast.Attribute(value=ast.Constant(value=""), attr="join", ctx=ast.Load()),
            args=[ast.Tuple(elts=parts, ctx=ast.Load())],
            keywords=[],
        )

    def _binary(self, expr: BinaryExpr) -> ast.expr:
        left = self.compile_ast(expr.left, PLAIN)
        right = self.compile_ast(expr.right, PLAIN)
        op = expr.op
        if op == "+":
            return _call("js_add", [left, right])
        if op == "&&":
            return ast.BoolOp(op=ast.And(), values=[left, right])
        if op == "||":
            return ast.BoolOp(op=ast.Or(), values=[left, right])
        if op in _COMPARE_OPS:
            return ast.Compare(left=left, ops=[_COMPARE_OPS[op]()], comparators=[right])
        if op in _ARITH_OPS:
            return ast.BinOp(left=left, op=_ARITH_OPS[op](), right=right)
        raise PySSRCompileError(f"Unsupported binary operator: {op}")

    def _unary(self, expr: UnaryExpr) -> ast.expr:
        operand = self.compile_ast(expr.operand, PLAIN)
        if expr.op == "!":
            return ast.UnaryOp(op=ast.Not(), operand=operand)
        if expr.op == "-":
            return ast.UnaryOp(op=ast.USub(), operand=operand)
        raise PySSRCompileError(f"Unsupported unary operator: {expr.op}")
