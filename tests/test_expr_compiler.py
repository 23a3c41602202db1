import unittest

from pyssr.compiler.ast_nodes import (
    Accessor,
    ArrayExpr,
    BinaryExpr,
    BoolLiteral,
    CallExpr,
    Interp,
    NullLiteral,
    NumberLiteral,
    ObjectExpr,
    StringLiteral,
    TertiaryExpr,
    TextExpr,
    UnaryExpr,
    is_literal,
    literal_value,
)
from pyssr.compiler.codegen.expr import PLAIN, ExprCompiler
from pyssr.compiler.exceptions import PySSRCompileError
from pyssr.config import CompilerOptions


def acc(*names: str) -> Accessor:
    return Accessor(paths=tuple(StringLiteral(n) for n in names))


class TestExprCompiler(unittest.TestCase):
    def setUp(self) -> None:
        self.compiler = ExprCompiler()

    def test_literals(self) -> None:
        self.assertEqual(self.compiler.compile(BoolLiteral(True)), "True")
        self.assertEqual(self.compiler.compile(StringLiteral("a'b")), '"a\'b"')
        self.assertEqual(self.compiler.compile(NumberLiteral(1.5)), "1.5")
        self.assertEqual(self.compiler.compile(NullLiteral()), "None")

    def test_accessor(self) -> None:
        expr = Accessor(paths=(StringLiteral("list"), acc("index")))
        self.assertEqual(
            self.compiler.compile(expr),
            "get_path(ctx.data, 'list', get_path(ctx.data, 'index'))",
        )

    def test_accessor_uses_configured_data(self) -> None:
        compiler = ExprCompiler(CompilerOptions(data_var="scope"))
        self.assertEqual(compiler.compile(acc("a")), "get_path(scope, 'a')")

    def test_interp_escape_and_plain(self) -> None:
        expr = Interp(acc("a"), filters=(CallExpr("trim", (NumberLiteral(2),)),))
        self.assertEqual(
            self.compiler.compile(expr),
            "escape_html(ctx.filters['trim'](get_path(ctx.data, 'a'), 2))",
        )
        self.assertEqual(
            self.compiler.compile(expr, PLAIN),
            "ctx.filters['trim'](get_path(ctx.data, 'a'), 2)",
        )

    def test_raw_interp(self) -> None:
        expr = Interp(acc("a"), filters=(CallExpr("raw"),))
        self.assertEqual(self.compiler.compile(expr), "get_path(ctx.data, 'a')")

    def test_text(self) -> None:
        expr = TextExpr((StringLiteral("a-"), Interp(acc("b"))))
        self.assertEqual(
            self.compiler.compile(expr),
            "''.join(('a-', escape_html(get_path(ctx.data, 'b'))))",
        )
        self.assertEqual(
            self.compiler.compile(expr, PLAIN),
            "''.join(('a-', to_str(get_path(ctx.data, 'b'))))",
        )

    def test_binary_and_unary(self) -> None:
        self.assertEqual(
            self.compiler.compile(BinaryExpr("||", acc("a"), acc("b"))),
            "get_path(ctx.data, 'a') or get_path(ctx.data, 'b')",
        )
        self.assertEqual(
            self.compiler.compile(UnaryExpr("!", acc("b"))),
            "not get_path(ctx.data, 'b')",
        )
        self.assertEqual(
            self.compiler.compile(BinaryExpr("===", acc("a"), NumberLiteral(1))),
            "get_path(ctx.data, 'a') == 1",
        )
        self.assertEqual(
            self.compiler.compile(BinaryExpr("*", NumberLiteral(2), UnaryExpr("-", acc("n")))),
            "2 * -get_path(ctx.data, 'n')",
        )

    def test_tertiary_array_object_call(self) -> None:
        self.assertEqual(
            self.compiler.compile(TertiaryExpr(acc("a"), StringLiteral("y"), StringLiteral("n"))),
            "'y' if get_path(ctx.data, 'a') else 'n'",
        )
        self.assertEqual(
            self.compiler.compile(ArrayExpr((NumberLiteral(1), acc("b")))),
            "[1, get_path(ctx.data, 'b')]",
        )
        self.assertEqual(
            self.compiler.compile(ObjectExpr(((StringLiteral("k"), BoolLiteral(False)),))),
            "{'k': False}",
        )
        self.assertEqual(
            self.compiler.compile(CallExpr("fmt", (acc("x"),))),
            "ctx.methods['fmt'](get_path(ctx.data, 'x'))",
        )

    def test_unknown_operator(self) -> None:
        with self.assertRaises(PySSRCompileError):
            self.compiler.compile(BinaryExpr("**", NumberLiteral(1), NumberLiteral(2)))

    def test_unknown_expression(self) -> None:
        with self.assertRaises(PySSRCompileError):
            self.compiler.compile(object())  # type: ignore[arg-type]


class TestLiteralClassification(unittest.TestCase):
    def test_is_literal(self) -> None:
        self.assertTrue(is_literal(BoolLiteral(False)))
        self.assertTrue(is_literal(StringLiteral("")))
        self.assertTrue(is_literal(NumberLiteral(0)))
        self.assertFalse(is_literal(NullLiteral()))
        self.assertFalse(is_literal(acc("a")))
        self.assertFalse(is_literal(Interp(StringLiteral("a"))))
        self.assertFalse(is_literal(TextExpr((StringLiteral("a"),))))

    def test_literal_value(self) -> None:
        self.assertEqual(literal_value(StringLiteral("x")), "x")
        self.assertIsNone(literal_value(acc("x")))


if __name__ == "__main__":
    unittest.main()
