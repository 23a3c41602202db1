import ast
import unittest

from pyssr.compiler.codegen.emitter import Emitter
from pyssr.config import CompilerOptions


class TestEmitter(unittest.TestCase):
    def setUp(self) -> None:
        self.emitter = Emitter()

    def test_adjacent_literals_are_merged(self) -> None:
        self.emitter.write_html_literal("<a")
        self.emitter.write_html_literal("")
        self.emitter.write_html_literal(">")
        self.assertEqual(self.emitter.full_text(), "parts.append('<a>')\n")

    def test_expression_breaks_literal_run(self) -> None:
        self.emitter.write_html_literal("<")
        self.emitter.write_html_expression("tag_name")
        self.emitter.write_html_literal(">")
        self.assertEqual(len(self.emitter.body), 3)

    def test_literals_do_not_merge_into_blocks(self) -> None:
        self.emitter.write_html_literal("a")
        self.emitter.write_if("x", lambda: self.emitter.write_html_literal("b"))
        self.emitter.write_html_literal("c")
        self.assertEqual(
            self.emitter.full_text(),
            "parts.append('a')\nif x:\n    parts.append('b')\nparts.append('c')\n",
        )

    def test_empty_block_gets_pass(self) -> None:
        self.emitter.write_if("x", lambda: None)
        self.assertEqual(self.emitter.full_text(), "if x:\n    pass\n")

    def test_foreach(self) -> None:
        self.emitter.write_foreach(
            "k, v", "d.items()", lambda: self.emitter.write_html_expression("k")
        )
        self.assertEqual(
            self.emitter.full_text(), "for k, v in d.items():\n    parts.append(k)\n"
        )
        loop = self.emitter.body[0]
        assert isinstance(loop, ast.For)
        self.assertIsInstance(loop.target.ctx, ast.Store)

    def test_switch(self) -> None:
        e = self.emitter
        e.write_switch(
            "key",
            [
                (["'a'"], lambda: e.write_line("x = 1")),
                (["'b'", "'c'"], lambda: e.write_line("x = 2")),
            ],
            default=lambda: e.write_line("x = 3"),
        )
        self.assertEqual(
            e.full_text(),
            "if key == 'a':\n    x = 1\n"
            "elif key in ('b', 'c'):\n    x = 2\n"
            "else:\n    x = 3\n",
        )

    def test_if_chain(self) -> None:
        e = self.emitter
        e.write_if_chain(
            [
                ("a", lambda: e.write_line("x = 1")),
                ("b", lambda: e.write_line("x = 2")),
                (None, lambda: e.write_line("x = 3")),
            ]
        )
        self.assertEqual(
            e.full_text(),
            "if a:\n    x = 1\nelif b:\n    x = 2\nelse:\n    x = 3\n",
        )

    def test_if_chain_without_else(self) -> None:
        e = self.emitter
        e.write_if_chain([("a", lambda: None)])
        self.assertEqual(e.full_text(), "if a:\n    pass\n")

    def test_switch_with_only_default(self) -> None:
        e = self.emitter
        e.write_switch("key", [], default=lambda: e.write_line("x = 3"))
        self.assertEqual(e.full_text(), "x = 3\n")

    def test_custom_parts_var(self) -> None:
        emitter = Emitter(CompilerOptions(parts_var="out"))
        emitter.write_html_literal("<p")
        emitter.write_html_literal(">")
        self.assertEqual(emitter.full_text(), "out.append('<p>')\n")

    def test_generated_code_compiles(self) -> None:
        self.emitter.write_html_literal("<b>")
        self.emitter.write_line("y = 1")
        module = ast.Module(body=self.emitter.body, type_ignores=[])
        ast.fix_missing_locations(module)
        compile(module, "<test>", "exec")


if __name__ == "__main__":
    unittest.main()
