"""Accumulates render statements as Python AST."""

import ast
from typing import Callable, List, Optional, Sequence, Tuple

from pyssr.config import CompilerOptions

BlockFn = Callable[[], None]


class Emitter:
    """Collects ``parts.append(...)`` calls and control blocks in emission order.

    Adjacent HTML literals are merged into a single append so that static
    markup compiles to as few statements as possible.
    """

    def __init__(self, options: Optional[CompilerOptions] = None) -> None:
        self.options = options or CompilerOptions()
        self.body: List[ast.stmt] = []
        self._blocks: List[List[ast.stmt]] = [self.body]

    @property
    def current(self) -> List[ast.stmt]:
        return self._blocks[-1]

    def _append_call(self, value: ast.expr) -> ast.Expr:
        return ast.Expr(
            value=ast.Call(
                func=ast.Attribute(
                    value=ast.Name(id=self.options.parts_var, ctx=ast.Load()),
                    attr="append",
                    ctx=ast.Load(),
                ),
                args=[value],
                keywords=[],
            )
        )

    def _literal_of(self, stmt: ast.stmt) -> Optional[ast.Constant]:
        """The string constant of ``parts.append('...')``, if stmt is one."""
        if not isinstance(stmt, ast.Expr) or not isinstance(stmt.value, ast.Call):
            return None
        call = stmt.value
        func = call.func
        if (
            isinstance(func, ast.Attribute)
            and func.attr == "append"
            and isinstance(func.value, ast.Name)
            and func.value.id == self.options.parts_var
            and len(call.args) == 1
            and isinstance(call.args[0], ast.Constant)
            and isinstance(call.args[0].value, str)
        ):
            return call.args[0]
        return None

    def write_html_literal(self, html: str) -> None:
        if not html:
            return
        if self.current:
            last = self._literal_of(self.current[-1])
            if last is not None:
                last.value = last.value + html
                return
        self.current.append(self._append_call(ast.Constant(value=html)))

    def write_html_expression(self, code: str) -> None:
        """Append the string value of a Python expression at runtime."""
        self.current.append(self._append_call(parse_expr(code)))

    def write_line(self, code: str) -> None:
        self.current.extend(ast.parse(code).body)

    def _block(self, fn: BlockFn) -> List[ast.stmt]:
        block: List[ast.stmt] = []
        self._blocks.append(block)
        try:
            fn()
        finally:
            self._blocks.pop()
        return block or [ast.Pass()]

    def write_if(self, condition: str, fn: BlockFn) -> None:
        self.current.append(
            ast.If(test=parse_expr(condition), body=self._block(fn), orelse=[])
        )

    def write_if_chain(self, branches: Sequence[Tuple[Optional[str], BlockFn]]) -> None:
        """if/elif/else over ``(condition, fn)`` pairs; a None condition is the else."""
        head: Optional[ast.If] = None
        chain: Optional[ast.If] = None
        for condition, fn in branches:
            if condition is None:
                if chain is None:
                    self.current.extend(self._block(fn))
                    return
                chain.orelse = self._block(fn)
                break
            branch = ast.If(test=parse_expr(condition), body=self._block(fn), orelse=[])
            if chain is None:
                head = branch
            else:
                chain.orelse = [branch]
            chain = branch
        if head is not None:
            self.current.append(head)

    def write_foreach(self, target: str, iterable: str, fn: BlockFn) -> None:
        """``for <target> in <iterable>:`` around the statements written by fn."""
        loop_target = parse_expr(target)
        _set_store(loop_target)
        self.current.append(
            ast.For(
                target=loop_target,
                iter=parse_expr(iterable),
                body=self._block(fn),
                orelse=[],
            )
        )

    def write_switch(
        self,
        subject: str,
        cases: Sequence[Tuple[Sequence[str], BlockFn]],
        default: Optional[BlockFn] = None,
    ) -> None:
        """Branch on ``subject``; each case lists the value expressions it matches.

        Compiles to an if/elif/else chain, cases do not fall through.
        """
        chain: Optional[ast.If] = None
        head: Optional[ast.If] = None
        for values, fn in cases:
            if len(values) == 1:
                test = parse_expr(f"{subject} == {values[0]}")
            else:
                test = parse_expr(f"{subject} in ({', '.join(values)},)")
            branch = ast.If(test=test, body=self._block(fn), orelse=[])
            if chain is None:
                head = branch
            else:
                chain.orelse = [branch]
            chain = branch

        if chain is None or head is None:
            if default is not None:
                self.current.extend(self._block(default))
            return
        if default is not None:
            chain.orelse = self._block(default)
        self.current.append(head)

    def full_text(self) -> str:
        module = ast.Module(body=self.body, type_ignores=[])
        ast.fix_missing_locations(module)
        return ast.unparse(module) + "\n"


def parse_expr(code: str) -> ast.expr:
    """Parse a single Python expression."""
    return ast.parse(code.strip(), mode="eval").body


def _set_store(target: ast.expr) -> None:
    if isinstance(target, (ast.Name, ast.Attribute, ast.Subscript)):
        target.ctx = ast.Store()
    elif isinstance(target, (ast.Tuple, ast.List)):
        target.ctx = ast.Store()
        for elt in target.elts:
            _set_store(elt)
