"""Data context passed to generated render functions."""

from collections import ChainMap
from typing import Any, Callable, Dict, Mapping, Optional


class Context:
    """Template data plus the filters and methods expressions may call."""

    def __init__(
        self,
        data: Optional[Mapping[str, Any]] = None,
        filters: Optional[Dict[str, Callable[..., Any]]] = None,
        methods: Optional[Dict[str, Callable[..., Any]]] = None,
    ) -> None:
        self.data: Mapping[str, Any] = data if data is not None else {}
        self.filters = filters or {}
        self.methods = methods or {}

    def child(self, scope: Dict[str, Any]) -> "Context":
        """New context whose data shadows this one with ``scope``."""
        return Context(ChainMap(scope, self.data), self.filters, self.methods)
