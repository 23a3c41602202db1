try:
    from ._version import __version__
except ImportError:
    from importlib.metadata import version, PackageNotFoundError

    try:
        __version__ = version("pyssr")
    except PackageNotFoundError:
        __version__ = "unknown"

from pyssr.compiler.codegen.element import ElementCompiler
from pyssr.compiler.codegen.emitter import Emitter
from pyssr.compiler.codegen.expr import ExprCompiler
from pyssr.compiler.codegen.node import NodeCompiler
from pyssr.compiler.codegen.render import RenderCodegen
from pyssr.compiler.exceptions import ANodeFormatError, PySSRCompileError
from pyssr.config import CompilerOptions
from pyssr.runtime.context import Context
from pyssr.runtime.loader import TemplateLoader

__all__ = [
    "ElementCompiler",
    "Emitter",
    "ExprCompiler",
    "NodeCompiler",
    "RenderCodegen",
    "TemplateLoader",
    "Context",
    "CompilerOptions",
    "PySSRCompileError",
    "ANodeFormatError",
]
