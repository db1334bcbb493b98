"""Tests for the string literal substitution visitor."""

import logging

import pytest

from sbdice.substitution.visitor import LiteralRestorer, LiteralVisitor
from sbdice.syntax import (
    Other,
    StringLiteral,
    TemplateStatic,
    iter_string_literals,
    parse_source,
)


def _dice(source: str, language: str = "typescript") -> tuple[list[str], list[str]]:
    """Run the visitor; return (placeholders in tree order, originals)."""
    tree = parse_source(source, language)
    visitor = LiteralVisitor()
    visitor.visit(tree.root)
    placeholders = [lit.value for lit in iter_string_literals(tree.root)]
    return placeholders, visitor.originals


class TestClassification:
    """Which nodes count as plain string literals."""

    def test_literal_expressions_in_source_order(self) -> None:
        placeholders, originals = _dice('const a = "hello";\nconst b = \'world\';\n')
        assert placeholders == ["0", "1"]
        assert originals == ["hello", "world"]

    def test_template_static_text_is_not_substituted(self) -> None:
        placeholders, originals = _dice("const t = `static text ${x} more`;\n")
        assert placeholders == []
        assert originals == []

    def test_string_inside_template_interpolation_is_substituted(self) -> None:
        _, originals = _dice("const t = `a ${'inner'} b`;\n")
        assert originals == ["inner"]

    def test_import_and_require_specifiers(self) -> None:
        source = (
            'import { a } from "./a";\n'
            "import './side-effect.css';\n"
            "const b = require('b');\n"
            "const c = import('./dynamic');\n"
        )
        _, originals = _dice(source)
        assert originals == ["./a", "./side-effect.css", "b", "./dynamic"]

    def test_object_keys_and_values(self) -> None:
        _, originals = _dice('const o = { "key": "value", plain: "v2", [\'computed\']: 1 };\n')
        assert originals == ["key", "value", "v2", "computed"]

    def test_decorator_arguments(self) -> None:
        source = "@Component({ selector: 'app-root' })\nclass AppComponent {}\n"
        _, originals = _dice(source)
        assert originals == ["app-root"]

    def test_literal_types_count_but_predefined_string_type_does_not(self) -> None:
        source = 'type Method = "GET" | "POST";\nlet s: string = "x";\n'
        _, originals = _dice(source)
        assert originals == ["GET", "POST", "x"]

    def test_nested_call_arguments_and_arrays(self) -> None:
        source = 'log(fmt("a", ["b", ["c"]]), "d");\n'
        _, originals = _dice(source)
        assert originals == ["a", "b", "c", "d"]

    def test_repeated_values_are_not_deduplicated(self) -> None:
        placeholders, originals = _dice('f("same", "same", "same");\n')
        assert placeholders == ["0", "1", "2"]
        assert originals == ["same", "same", "same"]

    def test_jsx_attribute_and_expression_strings(self) -> None:
        source = 'const el = <div className="box">{"text"} plain</div>;\n'
        _, originals = _dice(source, language="tsx")
        assert originals == ["box", "text"]

    def test_no_literals(self) -> None:
        placeholders, originals = _dice("const x = 1 + 2;\nfunction f() { return x; }\n")
        assert placeholders == []
        assert originals == []


class TestSubstitution:
    """Placeholder assignment and record keeping."""

    def test_decoded_value_is_recorded(self) -> None:
        _, originals = _dice(r'const s = "tab\there \u00e9";' + "\n")
        assert originals == ["tab\there é"]

    def test_raw_text_is_cleared(self) -> None:
        tree = parse_source("const s = 'x';\n", "typescript")
        LiteralVisitor().visit(tree.root)
        literal = next(iter_string_literals(tree.root))
        assert literal.value == "0"
        assert literal.raw is None

    def test_undecodable_literal_falls_back_to_empty_string(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.WARNING, logger="sbdice")
        source = 'const a = "ok";\nconst b = "\\uD800";\nconst c = "after";\n'
        placeholders, originals = _dice(source)
        assert placeholders == ["0", "1", "2"]
        assert originals == ["ok", "", "after"]
        assert "Undecodable string literal at line 2" in caplog.text

    def test_literal_without_value_falls_back_to_empty_string(self) -> None:
        broken = StringLiteral(value=None, raw=None, start_byte=0, end_byte=0)
        root = Other(kind="program", start_byte=0, end_byte=0, children=[broken])
        visitor = LiteralVisitor()
        visitor.visit(root)
        assert visitor.originals == [""]
        assert broken.value == "0"

    def test_counter_matches_record(self, sample_typescript_source: str) -> None:
        tree = parse_source(sample_typescript_source, "typescript")
        visitor = LiteralVisitor()
        visitor.visit(tree.root)
        assert visitor.counter == len(visitor.originals) == 9

    def test_template_static_node_is_never_touched(self) -> None:
        static = TemplateStatic(start_byte=1, end_byte=4)
        literal = StringLiteral(value="in", raw='"in"', start_byte=6, end_byte=10)
        template = Other(kind="template_string", start_byte=0, end_byte=12, children=[static, literal])
        visitor = LiteralVisitor()
        visitor.visit(template)
        assert visitor.originals == ["in"]
        assert static == TemplateStatic(start_byte=1, end_byte=4)

    def test_tree_shape_is_unchanged(self, sample_typescript_source: str) -> None:
        def shape(node):
            if isinstance(node, Other):
                return (node.kind, [shape(child) for child in node.children])
            return type(node).__name__

        tree = parse_source(sample_typescript_source, "typescript")
        before = shape(tree.root)
        LiteralVisitor().visit(tree.root)
        assert shape(tree.root) == before

    def test_separate_visitors_are_independent(self) -> None:
        first, _ = _dice('f("a", "b");\n')
        second, _ = _dice('g("c");\n')
        assert first == ["0", "1"]
        assert second == ["0"]


class TestLiteralRestorer:
    """Tests for putting originals back."""

    def test_restores_known_placeholders(self) -> None:
        tree = parse_source('f("0", "1");\n', "typescript")
        restorer = LiteralRestorer({"0": "alpha", "1": "beta"})
        restorer.visit(tree.root)
        assert [lit.value for lit in iter_string_literals(tree.root)] == ["alpha", "beta"]
        assert restorer.restored == 2
        assert restorer.unknown == []
        assert restorer.unused == []

    def test_reports_unknown_and_unused(self) -> None:
        tree = parse_source('f("0", "zzz");\n', "typescript")
        restorer = LiteralRestorer({"0": "a", "1": "b", "2": "c"})
        restorer.visit(tree.root)
        assert restorer.unknown == ["zzz"]
        assert restorer.unused == ["1", "2"]
