"""
Tests for Narration End to End

Parses Rust snippets and checks the narrated lines.
"""

import pytest

from rustnarrator.ast.sink import ListSink
from rustnarrator.exceptions import ParseError, SourceReadError
from rustnarrator.narrator import narrate_file, narrate_source


class TestScenarios:
    """Reference scenarios."""

    def test_local_binding(self, narrate):
        assert narrate("fn f() { let x = 1; }") == [
            "Entering f function",
            "Declared a local variable: x",
        ]

    def test_method_call(self, narrate):
        assert narrate("fn f() { a.b(1, 2); }") == [
            "Entering f function",
            "Calling method b on object: a",
            "With argument: Literal: 1",
            "With argument: Literal: 2",
        ]

    def test_module_is_not_descended(self, narrate):
        assert narrate("mod m { fn hidden() { let x = 1; } }") == ["Adding m as a module"]
        assert narrate("mod m {}") == ["Adding m as a module"]

    def test_match(self, narrate):
        assert narrate("fn f() { match x { _ => 1, } }") == [
            "Entering f function",
            "Match expression for: x",
            "Case _ => Literal: 1",
        ]

    def test_unparsable_source_emits_nothing(self):
        sink = ListSink()
        with pytest.raises(ParseError):
            narrate_source("fn f() { let x = 1; }\nfn g() {", sink)
        assert sink.lines == []


class TestExpressionNarration:
    """Narration of individual expression kinds."""

    def test_assignment(self, narrate):
        assert narrate("fn f() { x = y; }")[1:] == [
            "Assigning to variable: x",
            "The value being assigned: y",
        ]

    def test_function_call_with_path(self, narrate):
        assert narrate("fn f() { std::mem::drop(v); }")[1:] == [
            "Function call: Found a path: std::mem::drop",
            "With argument: v",
        ]

    def test_binary_operation(self, narrate):
        assert narrate("fn f() { a + b; }")[1:] == ["Binary operation: a + b"]

    def test_compound_assignment(self, narrate):
        assert narrate("fn f() { n -= 1; }")[1:] == ["Binary operation: n -= Literal: 1"]

    def test_trailing_expression(self, narrate):
        assert narrate("fn f() -> bool { a == b }")[1:] == ["Binary operation: a == b"]

    def test_macro(self, narrate):
        assert narrate("fn f() { let v = vec![1, 2]; v.push(vec![3]); }")[1:] == [
            "Declared a local variable: v",
            "Calling method push on object: v",
            'With argument: Macro call to vec with tokens: ["3"]',
        ]

    def test_statement_macro(self, narrate):
        assert narrate('fn f() { println!("hi"); }')[1:] == [
            'Macro call to println with tokens: ["\\"hi\\""]',
        ]

    def test_block_expression(self, narrate):
        assert narrate("fn f() { { let y = 2; } }") == [
            "Entering f function",
            "Declared a local variable: y",
        ]

    def test_for_loop_body_before_header(self, narrate):
        assert narrate("fn f() { for i in items { show(i); } }") == [
            "Entering f function",
            "Function call: show",
            "With argument: i",
            "For loop with pattern i in expression items with body",
        ]

    def test_match_patterns(self, narrate):
        source = """
fn f() {
    match value {
        0 | 1 => small,
        2..=9 => medium,
        Point { x: 0, y } => axis,
        (a, _) => a,
        &r => r,
        Ordering::Less => less,
        Some(inner) => inner,
    }
}
"""
        assert narrate(source)[1:] == [
            "Match expression for: value",
            "Case 0 | 1 => small",
            "Case Literal: 2..Literal: 9 => medium",
            "Case Point { x: 0, y @ y } => axis",
            "Case (a, _) => a",
            "Case &r => r",
            "Case Ordering::Less => less",
            "Case  => inner",
        ]

    def test_match_arm_with_block_body(self, narrate):
        source = "fn f() { match x { _ => { let z = 1; } } }"
        assert narrate(source)[1:] == [
            "Declared a local variable: z",
            "Match expression for: x",
            "Case _ => ",
        ]

    def test_unrecognized_expression(self, narrate):
        assert narrate("fn f() { return x; }")[1:] == [
            "Other expression: return_expression(return x)",
        ]


class TestStatementNarration:
    """Narration of statements and nested items."""

    def test_destructuring_let_is_silent(self, narrate):
        assert narrate("fn f() { let (a, b) = pair; }") == ["Entering f function"]

    def test_let_mut(self, narrate):
        assert narrate("fn f() { let mut n = 0; }")[1:] == ["Declared a local variable: n"]

    def test_typed_let(self, narrate):
        assert narrate("fn f() { let x: i32 = 1; }")[1:] == ["Declared a local variable: x"]

    def test_nested_function(self, narrate):
        assert narrate("fn outer() { fn inner() { let x = 1; } inner(); }") == [
            "Entering outer function",
            "Entering inner function",
            "Declared a local variable: x",
            "Function call: inner",
        ]

    def test_nested_module(self, narrate):
        assert narrate("fn f() { mod m {} }") == ["Entering f function", "Adding m as a module"]

    def test_other_items_are_silent(self, narrate):
        source = "use std::io;\nstruct S;\nimpl S { fn method(&self) {} }\nfn f() { struct Local; }"
        assert narrate(source) == ["Entering f function"]

    def test_comments_are_ignored(self, narrate):
        assert narrate("// c\nfn f() {\n    // inner\n    let x = 1; /* trailing */\n}") == [
            "Entering f function",
            "Declared a local variable: x",
        ]

    def test_empty_file(self, narrate):
        assert narrate("") == []


class TestNarrateFile:
    """Narration of files on disk."""

    def test_sample_file(self, sample_rust_file):
        sink = ListSink()
        count = narrate_file(str(sample_rust_file), sink)
        assert sink.lines == [
            "Adding util as a module",
            "Entering main function",
            "Declared a local variable: total",
            "Declared a local variable: items",
            "Binary operation: total += item",
            "For loop with pattern item in expression items with body",
            "Function call: report",
            "With argument: total",
            'With argument: Literal: "done"',
            "Entering report function",
            "Match expression for: value",
            'Case 0 => Macro call to println with tokens: ["\\"nothing\\""]',
            "Case Literal: 1..Literal: 9 => Calling method len on object: label",
            "Case _ => value",
        ]
        assert count == len(sink.lines)

    def test_narration_is_repeatable(self, sample_rust_file):
        first, second = ListSink(), ListSink()
        narrate_file(str(sample_rust_file), first)
        narrate_file(str(sample_rust_file), second)
        assert first.lines == second.lines

    def test_broken_file_emits_nothing(self, broken_rust_file):
        sink = ListSink()
        with pytest.raises(ParseError):
            narrate_file(str(broken_rust_file), sink)
        assert sink.lines == []

    def test_config_size_limit(self, sample_rust_file):
        with pytest.raises(SourceReadError):
            narrate_file(str(sample_rust_file), ListSink(), {"max_file_size": 8})
