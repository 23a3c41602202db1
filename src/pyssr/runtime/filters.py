"""Runtime helpers called by generated render functions.

The attribute filters are also evaluated by the compiler for literal
properties, so their output must not depend on anything but the arguments.
"""

from collections.abc import Mapping, Sequence
from typing import Any

__all__ = [
    "escape_html",
    "to_str",
    "output",
    "attr_filter",
    "bool_attr_filter",
    "contains",
    "strict_equal",
    "loose_equal",
    "get_path",
    "js_add",
]


def escape_html(value: Any) -> str:
    """Escape HTML special characters to prevent XSS.

    Escapes: & < > " '

    Args:
        value: Any value to escape (converted with ``to_str`` first)

    Returns:
        HTML-escaped string safe for embedding in HTML content
    """
    s = to_str(value)
    return (
        s.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#39;")
    )


def to_str(value: Any) -> str:
    """Convert a template value to text the way the client renderer does."""
    if value is None:
        return ""
    if value is True:
        return "true"
    if value is False:
        return "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def output(value: Any, need_escape: bool) -> str:
    if need_escape:
        return escape_html(value)
    return to_str(value)


def attr_filter(name: str, value: Any, need_escape: bool) -> str:
    """Render ``name="value"`` with a leading space.

    None and False drop the attribute, True renders the bare name.
    """
    if value is None or value is False:
        return ""
    if value is True:
        return f" {name}"
    return f' {name}="{output(value, need_escape)}"'


def bool_attr_filter(name: str, value: Any) -> str:
    """Render a boolean attribute like ``disabled``.

    Returns `` name`` when the attribute is on and an empty string otherwise,
    so the result can be tested for truth or appended as is.
    """
    if value and value != "false":
        return f" {name}"
    return ""


def contains(collection: Any, value: Any) -> bool:
    """Membership test used for checkbox groups.

    A single bound value (string or scalar) is compared for equality.
    """
    if collection is None:
        return False
    if isinstance(collection, (list, tuple, set, frozenset, Mapping)):
        return value in collection
    return strict_equal(collection, value)


def strict_equal(left: Any, right: Any) -> bool:
    """``===``: bools never equal numbers."""
    if isinstance(left, bool) != isinstance(right, bool):
        return False
    return left == right


def loose_equal(left: Any, right: Any) -> bool:
    """``==`` between option and select values, compared as text."""
    return to_str(left) == to_str(right)


def get_path(obj: Any, *keys: Any) -> Any:
    """Walk ``obj`` along keys, returning None for any missing step."""
    for key in keys:
        if obj is None:
            return None
        if isinstance(obj, Mapping):
            obj = obj.get(key)
        elif isinstance(obj, Sequence) and not isinstance(obj, str):
            if key == "length":
                obj = len(obj)
            elif isinstance(key, int) and -len(obj) <= key < len(obj):
                obj = obj[key]
            else:
                return None
        elif isinstance(key, str):
            obj = getattr(obj, key, None)
        else:
            return None
    return obj


def js_add(left: Any, right: Any) -> Any:
    """``+`` operator: string concatenation if either side is text."""
    if isinstance(left, str) or isinstance(right, str):
        return to_str(left) + to_str(right)
    return (left or 0) + (right or 0)
