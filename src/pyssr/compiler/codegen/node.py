"""Dispatches template nodes to the matching compiler."""

import dataclasses
import logging
from typing import Callable, List, Optional, Tuple

from pyssr.compiler.ast_nodes import (
    ElementNode,
    Interp,
    Node,
    StringLiteral,
    TextExpr,
    TextNode,
)
from pyssr.compiler.codegen.element import ElementCompiler
from pyssr.compiler.codegen.emitter import Emitter
from pyssr.compiler.codegen.expr import PLAIN, ExprCompiler
from pyssr.compiler.exceptions import PySSRCompileError
from pyssr.config import CompilerOptions

logger = logging.getLogger(__name__)


class NodeCompiler:
    """Compiles a node tree into the statements of one emitter."""

    def __init__(
        self,
        emitter: Optional[Emitter] = None,
        options: Optional[CompilerOptions] = None,
    ) -> None:
        self.options = options or (emitter.options if emitter else CompilerOptions())
        self.emitter = emitter if emitter is not None else Emitter(self.options)
        self.expr = ExprCompiler(self.options)
        self.element_compiler = ElementCompiler(self, self.expr, self.emitter, self.options)
        self._loop_counter = 0

    def compile(self, node: Node) -> None:
        if isinstance(node, TextNode):
            self._compile_text(node)
        elif isinstance(node, ElementNode):
            self._compile_element(node)
        else:
            raise PySSRCompileError(f"Unsupported node type: {type(node).__name__}")

    def _compile_text(self, node: TextNode) -> None:
        text_expr = node.text_expr
        if isinstance(text_expr, StringLiteral):
            self.emitter.write_html_literal(text_expr.value)
        elif isinstance(text_expr, TextExpr) and all(
            isinstance(seg, StringLiteral) for seg in text_expr.segments
        ):
            self.emitter.write_html_literal(
                "".join(seg.value for seg in text_expr.segments)  # type: ignore[union-attr]
            )
        elif isinstance(text_expr, TextExpr) or (
            isinstance(text_expr, Interp) and not text_expr.is_raw
        ):
            self.emitter.write_html_expression(self.expr.compile(text_expr))
        elif isinstance(text_expr, Interp):
            self.emitter.write_html_expression(
                f"output({self.expr.compile(text_expr, PLAIN)}, False)"
            )
        else:
            self.emitter.write_html_expression(
                f"output({self.expr.compile(text_expr, PLAIN)}, True)"
            )

    def _compile_element(self, node: ElementNode) -> None:
        # for wraps if, as in the client renderer
        for_directive = node.directives.get("for")
        if for_directive:
            self._compile_for(node)
            return

        if_directive = node.directives.get("if")
        if if_directive:
            self._compile_if(node)
            return

        logger.debug("Compiling element <%s>", node.tag_name or "{tag_name}")
        self.element_compiler.tag_start(node)
        self.element_compiler.inner(node)
        self.element_compiler.tag_end(node)

    def _compile_if(self, node: ElementNode) -> None:
        branches: List[Tuple[Optional[str], Callable[[], None]]] = []
        for branch in [node] + list(node.elses):
            directives = branch.directives
            if "if" in directives:
                condition: Optional[str] = self.expr.compile(directives["if"].value, PLAIN)
            elif "elif" in directives:
                condition = self.expr.compile(directives["elif"].value, PLAIN)
            else:
                condition = None
            rest = {k: v for k, v in directives.items() if k not in ("if", "elif", "else")}
            inner_node = dataclasses.replace(branch, directives=rest, elses=[])
            branches.append((condition, self._element_block(inner_node)))
            if condition is None:
                break
        self.emitter.write_if_chain(branches)

    def _element_block(self, node: ElementNode) -> Callable[[], None]:
        return lambda: self._compile_element(node)

    def _compile_for(self, node: ElementNode) -> None:
        for_directive = node.directives["for"]
        rest = {k: v for k, v in node.directives.items() if k != "for"}
        inner_node = dataclasses.replace(node, directives=rest)

        self._loop_counter += 1
        n = self._loop_counter
        ctx = self.options.ctx_var
        outer_ctx = f"_ctx_{n}"
        index_var = f"_index_{n}"
        item_var = f"_item_{n}"

        scope = []
        if for_directive.item:
            scope.append(f"{for_directive.item!r}: {item_var}")
        if for_directive.index:
            scope.append(f"{for_directive.index!r}: {index_var}")

        def body() -> None:
            self.emitter.write_line(f"{ctx} = {outer_ctx}.child({{{', '.join(scope)}}})")
            self._compile_element(inner_node)

        iterable = self.expr.compile(for_directive.value, PLAIN)
        self.emitter.write_line(f"{outer_ctx} = {ctx}")
        self.emitter.write_foreach(
            f"{index_var}, {item_var}", f"enumerate(({iterable}) or [])", body
        )
        self.emitter.write_line(f"{ctx} = {outer_ctx}")
