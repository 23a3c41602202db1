"""Compiler configuration."""

from dataclasses import dataclass


@dataclass
class CompilerOptions:
    """Names used by the generated render function.

    The defaults are what the runtime helpers and tests expect; override them
    only when embedding the generated body into a custom function.
    """

    parts_var: str = "parts"
    tag_name_var: str = "tag_name"
    select_value_var: str = "select_value"
    option_value_var: str = "option_value"
    bind_obj_var: str = "bind_obj"
    data_var: str = "ctx.data"
    ctx_var: str = "ctx"
    function_name: str = "render"
    helpers_module: str = "pyssr.runtime.filters"
