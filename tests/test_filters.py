import pytest

from pyssr.runtime.filters import (
    attr_filter,
    bool_attr_filter,
    contains,
    escape_html,
    get_path,
    js_add,
    loose_equal,
    output,
    strict_equal,
    to_str,
)


def test_escape_html():
    assert escape_html("<a href=\"x\">Tom & 'Jerry'</a>") == (
        "&lt;a href=&quot;x&quot;&gt;Tom &amp; &#39;Jerry&#39;&lt;/a&gt;"
    )
    assert escape_html(None) == ""
    assert escape_html(3) == "3"


@pytest.mark.parametrize(
    "value,expected",
    [(None, ""), (True, "true"), (False, "false"), (2.0, "2"), (2.5, "2.5"), ("s", "s")],
)
def test_to_str(value, expected):
    assert to_str(value) == expected


def test_output():
    assert output("<b>", True) == "&lt;b&gt;"
    assert output("<b>", False) == "<b>"


def test_attr_filter():
    assert attr_filter("title", "a&b", True) == ' title="a&amp;b"'
    assert attr_filter("title", "a&b", False) == ' title="a&b"'
    assert attr_filter("title", "", True) == ' title=""'
    assert attr_filter("tabindex", 0, True) == ' tabindex="0"'
    assert attr_filter("checked", True, True) == " checked"
    assert attr_filter("checked", False, True) == ""
    assert attr_filter("title", None, True) == ""


@pytest.mark.parametrize(
    "value,expected",
    [
        (True, " disabled"),
        ("disabled", " disabled"),
        (1, " disabled"),
        (False, ""),
        ("false", ""),
        ("", ""),
        (0, ""),
        (None, ""),
    ],
)
def test_bool_attr_filter(value, expected):
    assert bool_attr_filter("disabled", value) == expected


def test_contains():
    assert contains(["a", "b"], "a")
    assert not contains(["a", "b"], "c")
    assert contains({"a"}, "a")
    assert contains({"a": 1}, "a")
    assert not contains(None, "a")
    # a single bound value is compared whole, never searched as a substring
    assert contains("a", "a")
    assert not contains("abc", "b")
    assert contains(5, 5)
    assert not contains(True, 1)


@pytest.mark.parametrize(
    "left,right,expected",
    [
        ("a", "a", True),
        (1, 1.0, True),
        (True, True, True),
        (True, 1, False),
        (0, False, False),
        ("1", 1, False),
        (None, None, True),
    ],
)
def test_strict_equal(left, right, expected):
    assert strict_equal(left, right) is expected


@pytest.mark.parametrize(
    "left,right,expected",
    [
        ("1", 1, True),
        ("1.5", 1.5, True),
        ("true", True, True),
        (None, "", True),
        (None, None, True),
        ("a", "b", False),
        ("0", None, False),
    ],
)
def test_loose_equal(left, right, expected):
    assert loose_equal(left, right) is expected


def test_get_path():
    data = {"user": {"tags": ["x", "y"], "name": "Ann"}}
    assert get_path(data, "user", "name") == "Ann"
    assert get_path(data, "user", "tags", 1) == "y"
    assert get_path(data, "user", "tags", "length") == 2
    assert get_path(data, "user", "tags", 5) is None
    assert get_path(data, "missing", "name") is None

    class Obj:
        attr = "v"

    assert get_path({"o": Obj()}, "o", "attr") == "v"
    assert get_path({"o": Obj()}, "o", "nope") is None


def test_js_add():
    assert js_add(1, 2) == 3
    assert js_add("a", 1) == "a1"
    assert js_add(1, "px") == "1px"
    assert js_add(None, "x") == "x"
