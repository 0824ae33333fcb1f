"""Tests for signature resolution with fallback."""

from collections.abc import Callable
from pathlib import Path
from unittest.mock import MagicMock

from funcscope.analysis.signatures import FallbackSignature, ResolvedSignature, resolve_signature
from funcscope.parsing import ASTEngine
from funcscope.project.program import Program, SourceFile


class TestResolveSignature:
    """Test the two result variants."""

    def test_resolved(self, make_program: Callable[..., Program]) -> None:
        """Test a function declaration resolves through the checker."""
        program = make_program({"mod.ts": "function add(a: number, b: number) { return a + b; }"})
        source_file = program.source_files[0]
        node = source_file.ast.root_node.named_children[0]

        result = resolve_signature(node, source_file, program.get_type_checker())

        assert result == ResolvedSignature(text="(a: number, b: number): number")

    def test_fallback_for_non_function(self, make_program: Callable[..., Program]) -> None:
        """Test nodes without a signature fall back to their source text."""
        program = make_program({"mod.ts": "class Box {}"})
        source_file = program.source_files[0]
        node = source_file.ast.root_node.named_children[0]

        result = resolve_signature(node, source_file, program.get_type_checker())

        assert isinstance(result, FallbackSignature)
        assert result.text == "class Box {}"

    def test_fallback_on_recursion_error(self, make_program: Callable[..., Program]) -> None:
        """Test inference that exhausts the stack falls back instead of raising."""
        program = make_program({"mod.ts": "function deep() { return 1; }"})
        source_file = program.source_files[0]
        node = source_file.ast.root_node.named_children[0]
        checker = MagicMock()
        checker.get_signature_from_declaration.side_effect = RecursionError

        result = resolve_signature(node, source_file, checker)

        assert result == FallbackSignature(text="function deep() { return 1; }", reason="inference too deep")

    def test_fallback_absorbs_resolution_error(
        self, make_program: Callable[..., Program], engine: ASTEngine, tmp_path: Path
    ) -> None:
        """Test a checker error is absorbed into the fallback."""
        program = make_program({"mod.ts": "function f() {}"})
        path = tmp_path / "elsewhere.ts"
        ast = engine.parse("function g(x) {}", path=path)
        foreign = SourceFile(path=path, ast=ast)

        result = resolve_signature(ast.root_node.named_children[0], foreign, program.get_type_checker())

        assert isinstance(result, FallbackSignature)
        assert result.text == "function g(x) {}"
        assert "not part of the program" in result.reason
