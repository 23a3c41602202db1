"""Render function code generation."""

import ast
import logging
from typing import List, Optional

from pyssr.compiler.ast_nodes import Node
from pyssr.compiler.codegen.emitter import Emitter
from pyssr.compiler.codegen.node import NodeCompiler
from pyssr.config import CompilerOptions
from pyssr.runtime.filters import __all__ as HELPER_NAMES

logger = logging.getLogger(__name__)


class RenderCodegen:
    """Generates a module defining ``render(ctx, tag_name=None) -> str``."""

    def __init__(self, options: Optional[CompilerOptions] = None) -> None:
        self.options = options or CompilerOptions()

    def generate(self, node: Node) -> ast.Module:
        opts = self.options
        emitter = Emitter(opts)
        NodeCompiler(emitter, opts).compile(node)

        # def render(ctx, tag_name=None): ...
        func = ast.parse(
            f"def {opts.function_name}({opts.ctx_var}, {opts.tag_name_var}=None):\n"
            f"    {opts.parts_var} = []\n"
            f"    {opts.select_value_var} = None\n"
            f"    {opts.option_value_var} = None\n"
        ).body[0]
        assert isinstance(func, ast.FunctionDef)

        body: List[ast.stmt] = list(func.body)
        body.extend(emitter.body)
        body.extend(ast.parse(f"return ''.join({opts.parts_var})").body)
        func.body = body

        helpers_import = ast.ImportFrom(
            module=opts.helpers_module,
            names=[ast.alias(name=name, asname=None) for name in HELPER_NAMES],
            level=0,
        )
        module = ast.Module(body=[helpers_import, func], type_ignores=[])
        ast.fix_missing_locations(module)
        logger.debug("Generated %s() with %d statements", opts.function_name, len(body))
        return module

    def generate_source(self, node: Node) -> str:
        return ast.unparse(self.generate(node)) + "\n"
