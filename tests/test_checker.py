"""Tests for signature resolution and type inference."""

from collections.abc import Callable

import pytest

from funcscope.analysis.classifier import Position, classify
from funcscope.exceptions import SignatureResolutionError
from funcscope.parsing import ASTEngine
from funcscope.project.checker import TypeChecker, union_of
from funcscope.project.program import Program, SourceFile


def _signature(program: Program, name: str, file_index: int = 0) -> str:
    """Render the signature of the top-level construct called *name*."""
    source_file = program.source_files[file_index]
    checker = program.get_type_checker()
    for statement in source_file.ast.root_node.named_children:
        match = classify(statement, source_file.ast, Position.TOP_LEVEL)
        if match is not None and match.name == name:
            signature = checker.get_signature_from_declaration(match.node, source_file)
            assert signature is not None
            return checker.signature_to_string(signature)
    raise AssertionError(f"{name} not found")


class TestWrittenTypes:
    """Test rendering of annotated signatures."""

    @pytest.mark.parametrize(
        "source, expected",
        [
            ("function f(a: number, b: string): boolean { return true; }", "(a: number, b: string): boolean"),
            ("function f(a?: number) {}", "(a?: number): void"),
            ("function f(...values: number[]): void {}", "(...values: number[]): void"),
            ("function f<T>(items: T[]): T | undefined { return items[0]; }", "<T>(items: T[]): T | undefined"),
            (
                "function f(opts: {a: number, b?:   string}): void {}",
                "(opts: { a: number; b?: string; }): void",
            ),
            ("function f(cb: (x: number) => void): void {}", "(cb: (x: number) => void): void"),
            ("function f(x: Map<string,  number>): void {}", "(x: Map<string, number>): void"),
        ],
    )
    def test_annotations(self, make_program: Callable[..., Program], source: str, expected: str) -> None:
        """Test written parameter and return types are normalised."""
        program = make_program({"mod.ts": source})

        assert _signature(program, "f") == expected


class TestInference:
    """Test types inferred from defaults, bodies and returns."""

    @pytest.mark.parametrize(
        "source, expected",
        [
            ("function f() {}", "(): void"),
            ("function f(x) { return x; }", "(x: any): any"),
            ("function f(a = 1, b = 'x') { return a; }", "(a?: number, b?: string): number"),
            ("function f(a = 1, b: string) {}", "(a: number, b: string): void"),
            ("function f(...rest) {}", "(...rest: any[]): void"),
            ("const f = (y: number) => y * 2;", "(y: number): number"),
            ("const f = x => x;", "(x: any): any"),
            ("const f = (s: string) => s + 1;", "(s: string): string"),
            ("const f = (n: number) => n > 0;", "(n: number): boolean"),
            ("const f = (n: number) => n > 0 ? 'pos' : 0;", "(n: number): string | number"),
            ("const f = () => [1, 2];", "(): number[]"),
            ("const f = () => [1, 'a'];", "(): (number | string)[]"),
            ("const f = () => ({ a: 1, b: 'x' });", "(): { a: number; b: string; }"),
            ("const f = () => new Map<string, number>();", "(): Map<string, number>"),
            ("const f = (v: unknown) => v as string;", "(v: unknown): string"),
            ("const f = () => `t`;", "(): string"),
            ("const f = function () { return null; };", "(): null"),
            ("async function f() { return 1; }", "(): Promise<number>"),
            ("const f = async () => { await g(); };\nasync function g() {}", "(): Promise<void>"),
            ("function* f() { yield 1; }", "(): Generator<any, any, any>"),
            ("function f(x: number) { if (x) return; return x; }", "(x: number): number | undefined"),
            ("function f(flag: boolean) { if (flag) { return 1; } return 'one'; }", "(flag: boolean): number | string"),
            ("function f(x: boolean) { if (x) { return 1; } }", "(x: boolean): number | undefined"),
            ("function f(x: boolean) { if (x) { return 1; } else { return 2; } }", "(x: boolean): number"),
            ("function f(x: boolean) { if (x) { return 1; } throw new Error('no'); }", "(x: boolean): number"),
            ("function f() { while (true) { return 1; } }", "(): number"),
            ("function f() { try { return 1; } catch { return 'e'; } }", "(): number | string"),
            ("function f(xs: string[]) { return xs.length; }", "(xs: string[]): number"),
            ("function f() { const inner = () => 'x'; return 1; }", "(): number"),
            ("function f() { return () => 1; }", "(): () => number"),
        ],
    )
    def test_inferred(self, make_program: Callable[..., Program], source: str, expected: str) -> None:
        """Test inferred parameter and return types."""
        program = make_program({"mod.ts": source})

        assert _signature(program, "f") == expected

    def test_call_to_local_function(self, make_program: Callable[..., Program]) -> None:
        """Test a call resolves to the callee's return type."""
        program = make_program({
            "mod.ts": "function base() { return 'id'; }\nexport const f = () => base();",
        })

        assert _signature(program, "f") == "(): string"

    def test_call_to_imported_function(self, make_program: Callable[..., Program]) -> None:
        """Test a call to a function imported from a relative module."""
        program = make_program({
            "a.ts": "export function makeId(): number { return 1; }",
            "b.ts": "import { makeId } from './a';\nexport const f = () => makeId();",
        })

        assert _signature(program, "f", file_index=1) == "(): number"

    def test_recursive_function(self, make_program: Callable[..., Program]) -> None:
        """Test self-recursion terminates with any."""
        program = make_program({"mod.ts": "function f(n: number) { return f(n - 1); }"})

        assert _signature(program, "f") == "(n: number): any"

    def test_javascript_parameters(self, make_program: Callable[..., Program]) -> None:
        """Test JavaScript default and rest parameters."""
        program = make_program({"mod.js": "function f(a, b = 2, ...rest) { return a; }"})

        assert _signature(program, "f") == "(a: any, b?: number, ...rest: any[]): any"


class TestCheckerErrors:
    """Test non-signature nodes and foreign files."""

    def test_non_function_node(self, make_program: Callable[..., Program]) -> None:
        """Test None is returned for nodes that are not function-like."""
        program = make_program({"mod.ts": "const x = 1;"})
        source_file = program.source_files[0]
        node = source_file.ast.root_node.named_children[0]

        assert program.get_type_checker().get_signature_from_declaration(node, source_file) is None

    def test_file_outside_program(self, make_program: Callable[..., Program], engine: ASTEngine, tmp_path) -> None:
        """Test a source file of another program is rejected."""
        program = make_program({"mod.ts": "function f() {}"})
        other_path = tmp_path / "other.ts"
        ast = engine.parse("function g() {}", path=other_path)
        foreign = SourceFile(path=other_path, ast=ast)
        node = ast.root_node.named_children[0]

        with pytest.raises(SignatureResolutionError):
            TypeChecker(program).get_signature_from_declaration(node, foreign)


class TestUnion:
    """Test union construction."""

    def test_deduplicates(self) -> None:
        """Test repeated members are merged in first-seen order."""
        assert union_of(["number", "string", "number"]) == "number | string"

    def test_flattens(self) -> None:
        """Test nested unions are flattened."""
        assert union_of(["number | string", "boolean"]) == "number | string | boolean"

    def test_any_absorbs(self) -> None:
        """Test any swallows the other members."""
        assert union_of(["number", "any"]) == "any"

    def test_function_members_parenthesised(self) -> None:
        """Test function types are wrapped when joined."""
        assert union_of(["() => void", "string"]) == "(() => void) | string"

    def test_generic_arguments_not_split(self) -> None:
        """Test '|' inside brackets does not split."""
        assert union_of(["Map<string, number | string>"]) == "Map<string, number | string>"
