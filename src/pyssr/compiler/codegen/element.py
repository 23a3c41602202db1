"""Element compilation: opening tag, attributes, content and closing tag."""

from typing import TYPE_CHECKING, Dict, Optional

from pyssr.compiler.ast_nodes import (
    Accessor,
    Directive,
    ElementNode,
    Property,
    is_literal,
    literal_value,
)
from pyssr.compiler.codegen.emitter import Emitter
from pyssr.compiler.codegen.expr import PLAIN, ExprCompiler
from pyssr.config import CompilerOptions
from pyssr.runtime.filters import attr_filter, bool_attr_filter

if TYPE_CHECKING:
    from pyssr.compiler.codegen.node import NodeCompiler

# HTML void elements that don't have closing tags
AUTO_CLOSE_TAGS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "keygen",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)

BOOL_ATTRS = ("readonly", "disabled", "multiple")


class ElementCompiler:
    """Compiles an element node into emitter calls.

    The node may be a component root or any element reached while compiling
    children. Literal attribute values are escaped and written at compile
    time; everything else is deferred to the runtime filters.
    """

    def __init__(
        self,
        node_compiler: Optional["NodeCompiler"],
        expr: ExprCompiler,
        emitter: Optional[Emitter] = None,
        options: Optional[CompilerOptions] = None,
    ) -> None:
        self.node_compiler = node_compiler
        self.expr = expr
        self.emitter = emitter if emitter is not None else Emitter(options)
        self.options = options or self.emitter.options

    def tag_start(self, node: ElementNode) -> None:
        emitter = self.emitter
        tag_name = node.tag_name

        if tag_name:
            emitter.write_html_literal("<" + tag_name)
        else:
            emitter.write_html_literal("<")
            emitter.write_html_expression(f"output({self.options.tag_name_var}, False)")

        props_index: Dict[str, Property] = {}
        for prop in node.props:
            props_index[prop.name] = prop
        for prop in node.props:
            self.compile_property(tag_name, prop, props_index)

        bind = node.directives.get("bind")
        if bind:
            self.compile_bind_properties(bind)
        emitter.write_html_literal(">")

    def tag_end(self, node: ElementNode) -> None:
        emitter = self.emitter
        tag_name = node.tag_name

        if tag_name:
            if tag_name not in AUTO_CLOSE_TAGS:
                emitter.write_html_literal(f"</{tag_name}>")
            if tag_name == "select":
                emitter.write_line(f"{self.options.select_value_var} = None")
            if tag_name == "option":
                emitter.write_line(f"{self.options.option_value_var} = None")
        else:
            emitter.write_html_literal("</")
            emitter.write_html_expression(f"output({self.options.tag_name_var}, False)")
            emitter.write_html_literal(">")

    def inner(self, node: ElementNode) -> None:
        """Element content: textarea value, raw html, or the children."""
        if node.tag_name == "textarea":
            value_prop = node.get_prop("value")
            if value_prop:
                self.emitter.write_html_expression(
                    f"output({self.expr.compile(value_prop.expr)}, True)"
                )
            return

        html = node.directives.get("html")
        if html:
            self.emitter.write_html_expression(
                f"output({self.expr.compile(html.value, PLAIN)}, False)"
            )
            return

        assert self.node_compiler is not None, "children need a node compiler"
        for child in node.children:
            self.node_compiler.compile(child)

    def compile_property(
        self,
        tag_name: Optional[str],
        prop: Property,
        props_index: Dict[str, Property],
    ) -> None:
        """Write one attribute.

        Literal values (bool, string, number) are filtered and escaped now;
        expressions are written as runtime filter calls.
        """
        emitter = self.emitter
        select_value = self.options.select_value_var
        option_value = self.options.option_value_var

        if prop.name == "slot":
            return
        if prop.name == "value":
            if tag_name == "textarea":
                return
            if tag_name == "select":
                val = self.expr.compile(prop.expr)
                emitter.write_line(f"{select_value} = ({val}) if ({val}) else ''")
                return
            if tag_name == "option":
                emitter.write_line(f"{option_value} = {self.expr.compile(prop.expr)}")
                emitter.write_if(
                    f"{option_value} is not None",
                    lambda: emitter.write_html_expression(
                        f"' value=\"' + escape_html({option_value}) + '\"'"
                    ),
                )
                emitter.write_if(
                    f"loose_equal({option_value}, {select_value})",
                    lambda: emitter.write_html_literal(" selected"),
                )
                return

        if prop.name in BOOL_ATTRS:
            if is_literal(prop.expr):
                if bool_attr_filter(prop.name, literal_value(prop.expr)):
                    emitter.write_html_literal(f" {prop.name}")
            else:
                emitter.write_html_expression(
                    f"bool_attr_filter({prop.name!r}, {self.expr.compile(prop.expr)})"
                )
            return

        value_prop = props_index.get("value")
        type_prop = props_index.get("type")
        if prop.name == "checked" and tag_name == "input" and value_prop and type_prop:
            input_type = literal_value(type_prop.expr) if is_literal(type_prop.expr) else None
            checked = self.expr.compile(prop.expr)
            value = self.expr.compile(value_prop.expr)
            if input_type == "checkbox":
                emitter.write_if(
                    f"contains({checked}, {value})",
                    lambda: emitter.write_html_literal(" checked"),
                )
                return
            if input_type == "radio":
                emitter.write_if(
                    f"strict_equal({checked}, {value})",
                    lambda: emitter.write_html_literal(" checked"),
                )
                return

        need_escape = bool(prop.x) or isinstance(prop.expr, Accessor)
        if is_literal(prop.expr):
            emitter.write_html_literal(attr_filter(prop.name, literal_value(prop.expr), True))
        else:
            emitter.write_html_expression(
                f"attr_filter({prop.name!r}, {self.expr.compile(prop.expr)}, {need_escape})"
            )

    def compile_bind_properties(self, bind: Directive) -> None:
        """Spread a runtime mapping onto the element's attributes."""
        emitter = self.emitter
        parts = self.options.parts_var
        bind_obj = self.options.bind_obj_var

        emitter.write_line(f"{bind_obj} = {self.expr.compile(bind.value, PLAIN)}")
        emitter.write_foreach(
            "key, value",
            f"{bind_obj}.items()",
            lambda: emitter.write_switch(
                "key",
                [
                    (
                        [repr(name) for name in BOOL_ATTRS + ("checked",)],
                        lambda: emitter.write_line(
                            f"{parts}.append(bool_attr_filter(key, value))"
                        ),
                    )
                ],
                default=lambda: emitter.write_line(
                    f"{parts}.append(attr_filter(key, value, True))"
                ),
            ),
        )
