"""Template loader - compiles and executes render functions."""

import hashlib
import logging
import sys
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional

from pyssr.compiler.anode import load_anode_file
from pyssr.compiler.ast_nodes import Node
from pyssr.compiler.codegen.render import RenderCodegen
from pyssr.config import CompilerOptions
from pyssr.runtime.context import Context

logger = logging.getLogger(__name__)

RenderFunction = Callable[..., str]


class TemplateLoader:
    """Compiles template nodes into render functions, caching by structure."""

    def __init__(self, options: Optional[CompilerOptions] = None) -> None:
        self.options = options or CompilerOptions()
        self.codegen = RenderCodegen(self.options)
        self._cache: Dict[str, RenderFunction] = {}

    def load(self, node: Node, use_cache: bool = True) -> RenderFunction:
        """Compile a node into its render function."""
        key = hashlib.md5(repr(node).encode("utf-8")).hexdigest()
        if use_cache and key in self._cache:
            logger.debug("Render function cache hit: %s", key)
            return self._cache[key]

        module_ast = self.codegen.generate(node)
        code = compile(module_ast, f"<pyssr:{key[:8]}>", "exec")
        module = type(sys)("pyssr_template")
        exec(code, module.__dict__)

        render_fn: RenderFunction = getattr(module, self.options.function_name)
        self._cache[key] = render_fn
        logger.debug("Compiled render function %s", key)
        return render_fn

    def load_file(self, path: Path, use_cache: bool = True) -> RenderFunction:
        return self.load(load_anode_file(path), use_cache=use_cache)

    def render(
        self,
        node: Node,
        data: Optional[Mapping[str, Any]] = None,
        tag_name: Optional[str] = None,
        filters: Optional[Dict[str, Callable[..., Any]]] = None,
        methods: Optional[Dict[str, Callable[..., Any]]] = None,
    ) -> str:
        """Compile (or reuse) and run the render function for node."""
        render_fn = self.load(node)
        return render_fn(Context(data, filters, methods), tag_name)

    def clear_cache(self) -> None:
        self._cache.clear()
