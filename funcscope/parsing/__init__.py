"""tree-sitter based parsing for TypeScript and JavaScript sources.

Quick start::

    from funcscope.parsing import ASTEngine

    engine = ASTEngine()
    ast = engine.parse("function greet(name: string) {}")
    print(ast.root_node.type)
"""

from .ast_engine import ASTEngine, ParsedAST, language_for_path

__all__ = [
    "ASTEngine",
    "ParsedAST",
    "language_for_path",
]
