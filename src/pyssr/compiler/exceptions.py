"""Compiler exceptions."""

from typing import Optional


class PySSRCompileError(Exception):
    """Raised when a template node cannot be compiled."""

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        self.message = message
        self.path = path
        super().__init__(self.format())

    def format(self) -> str:
        if self.path:
            return f"{self.path}: {self.message}"
        return self.message


class ANodeFormatError(PySSRCompileError):
    """Serialized template node has an unknown shape."""
