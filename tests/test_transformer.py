"""Tests for SourceTransformer and the visibility rewriters."""
from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

import support  # noqa: F401  (puts src/ on sys.path)
from support import write

from filemerge.core.errors import ReadError
from filemerge.core.models import RewriteMode
from filemerge.languages import JAVA, KOTLIN
from filemerge.processing.transformer import SourceTransformer, split_lines
from filemerge.processing.visibility import CLikeLineScanner, rewrite_prefix


# --------------------------------------------------------------------------- #
#  1. Visibility rewrite table                                                #
# --------------------------------------------------------------------------- #
class VisibilityRewriteTests(unittest.TestCase):
    def _rw(self, line: str) -> str:
        return rewrite_prefix(line, JAVA.visibility_rewrites)

    def test_public_final_class(self) -> None:
        self.assertEqual(self._rw("public final class Foo {"), "final class Foo {")

    def test_public_interface(self) -> None:
        self.assertEqual(self._rw("public interface Bar {"), "interface Bar {")

    def test_unqualified_class_passes_through(self) -> None:
        self.assertEqual(self._rw("class Baz {"), "class Baz {")

    def test_remaining_java_declarations(self) -> None:
        self.assertEqual(self._rw("public class A {"), "class A {")
        self.assertEqual(self._rw("public abstract class B {"), "abstract class B {")
        self.assertEqual(self._rw("public enum C {"), "enum C {")
        self.assertEqual(self._rw("public record D(int x) {"), "record D(int x) {")

    def test_only_the_leading_prefix_is_replaced(self) -> None:
        line = 'public class A { String s = "public class"; }'
        self.assertEqual(self._rw(line), 'class A { String s = "public class"; }')

    def test_indented_members_are_untouched(self) -> None:
        self.assertEqual(self._rw("    public class Inner {"), "    public class Inner {")
        self.assertEqual(self._rw("public static void main(String[] a) {"),
                         "public static void main(String[] a) {")


# --------------------------------------------------------------------------- #
#  2. Transformation of whole files                                           #
# --------------------------------------------------------------------------- #
class TransformTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        self.tx = SourceTransformer(JAVA)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_package_and_imports_are_extracted(self) -> None:
        fp = write(self.root / "A.java", """
            package com.example.game;
            import java.util.List;
            import static java.lang.Math.max;

            public class A {
                List<Integer> xs;
            }
        """)
        cf = self.tx.transform(fp)
        self.assertEqual(cf.declared_package, "com.example.game")
        self.assertEqual(cf.imports, ("import java.util.List;", "import static java.lang.Math.max;"))
        self.assertEqual(cf.content, "\nclass A {\n    List<Integer> xs;\n}\n")
        self.assertNotIn("package", cf.content)
        self.assertNotIn("import", cf.content)

    def test_file_without_package(self) -> None:
        fp = write(self.root / "B.java", "class B {}\n")
        cf = self.tx.transform(fp)
        self.assertEqual(cf.declared_package, "")
        self.assertEqual(cf.imports, ())
        self.assertEqual(cf.content, "class B {}\n")

    def test_duplicate_imports_within_a_file_collapse(self) -> None:
        fp = write(self.root / "C.java", """
            import a.b.C;
            import a.b.C;
            class C {}
        """)
        self.assertEqual(self.tx.transform(fp).imports, ("import a.b.C;",))

    def test_import_lines_are_kept_verbatim(self) -> None:
        fp = write(self.root / "F.java", "import a.b.C;\n  import a.b.C;\nimport a.b.C; \nclass F {}\n")
        self.assertEqual(
            self.tx.transform(fp).imports,
            ("import a.b.C;", "  import a.b.C;", "import a.b.C; "),
        )

    def test_transform_is_idempotent(self) -> None:
        fp = write(self.root / "D.java", """
            package p;
            import x.Y;
            public final class D {}
        """)
        first = self.tx.transform(fp)
        second = self.tx.transform(fp)
        self.assertEqual(first, second)

    def test_imports_are_rebuilt_on_every_read(self) -> None:
        fp = write(self.root / "E.java", "import old.Thing;\nclass E {}\n")
        self.assertEqual(self.tx.transform(fp).imports, ("import old.Thing;",))
        write(fp, "import fresh.Thing;\nclass E {}\n")
        self.assertEqual(self.tx.transform(fp).imports, ("import fresh.Thing;",))

    def test_newlines_are_normalized(self) -> None:
        fp = self.root / "F.java"
        fp.write_bytes(b"package p;\r\npublic class F {\r\n}\r\nclass G {}")
        cf = self.tx.transform(fp)
        self.assertEqual(cf.content, "class F {\n}\nclass G {}\n")
        self.assertEqual(cf.declared_package, "p")

    def test_missing_file_raises_read_error(self) -> None:
        with self.assertRaises(ReadError) as ctx:
            self.tx.transform(self.root / "Nope.java")
        self.assertEqual(ctx.exception.path, self.root / "Nope.java")

    def test_directory_raises_read_error(self) -> None:
        d = self.root / "Dir.java"
        d.mkdir()
        with self.assertRaises(ReadError):
            self.tx.transform(d)

    def test_kotlin_package_has_no_terminator(self) -> None:
        tx = SourceTransformer(KOTLIN)
        fp = write(self.root / "K.kt", """
            package com.example
            import kotlin.math.max
            class K
        """)
        cf = tx.transform(fp)
        self.assertEqual(cf.declared_package, "com.example")
        self.assertEqual(cf.imports, ("import kotlin.math.max",))
        self.assertEqual(cf.content, "class K\n")

    def test_split_lines_handles_lone_carriage_returns(self) -> None:
        self.assertEqual(split_lines("a\rb\r\nc\n"), ["a", "b", "c"])
        self.assertEqual(split_lines(""), [])
        self.assertEqual(split_lines("\n"), [""])


# --------------------------------------------------------------------------- #
#  3. Tokenized rewrite mode                                                  #
# --------------------------------------------------------------------------- #
class TokenizedModeTests(unittest.TestCase):
    SOURCE = (
        "/*\n"
        "public class Fake {}\n"
        "import not.an.Import;\n"
        "*/\n"
        "public class Real {\n"
        '    String doc = """\n'
        "public interface AlsoFake {}\n"
        '""";\n'
        "}\n"
    )

    def test_prefix_mode_rewrites_everywhere(self) -> None:
        cf = SourceTransformer(JAVA).transform_text(Path("X.java"), self.SOURCE)
        self.assertIn("\nclass Fake {}\n", cf.content)
        self.assertIn("\ninterface AlsoFake {}\n", cf.content)
        self.assertEqual(cf.imports, ("import not.an.Import;",))

    def test_tokenized_mode_skips_comments_and_text_blocks(self) -> None:
        tx = SourceTransformer(JAVA, rewrite_mode=RewriteMode.TOKENIZED)
        cf = tx.transform_text(Path("X.java"), self.SOURCE)
        self.assertIn("\npublic class Fake {}\n", cf.content)
        self.assertIn("\nimport not.an.Import;\n", cf.content)
        self.assertIn("\npublic interface AlsoFake {}\n", cf.content)
        self.assertIn("\nclass Real {\n", cf.content)
        self.assertEqual(cf.imports, ())

    def test_scanner_state_across_lines(self) -> None:
        sc = CLikeLineScanner()
        sc.feed('String s = "/* not a comment";')
        self.assertTrue(sc.at_code)
        sc.feed("int x; // trailing /* ignored")
        self.assertTrue(sc.at_code)
        sc.feed("int y; /* open")
        self.assertFalse(sc.at_code)
        sc.feed("still */ int z;")
        self.assertTrue(sc.at_code)
        sc.feed("char q = '\"'; /* */")
        self.assertTrue(sc.at_code)


if __name__ == "__main__":
    unittest.main()
