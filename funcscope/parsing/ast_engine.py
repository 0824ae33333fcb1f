"""Parsing engine for TypeScript and JavaScript sources.

Wraps tree-sitter so the rest of funcscope never touches grammars or
parsers directly. Project loading, the type checker and the analysis passes
all work on the ``ParsedAST`` objects produced here.

Usage::

    engine = ASTEngine()
    ast = engine.parse("export const add = (a: number, b: number) => a + b;")
    for node in ast.root_node.named_children:
        print(node.type, ast.get_text(node))
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

import tree_sitter as ts
import tree_sitter_javascript as ts_js
import tree_sitter_typescript as ts_ts

logger = logging.getLogger(__name__)

# Grammar name -> loader returning the raw tree-sitter language pointer
_GRAMMARS: dict[str, Callable[[], object]] = {
    "typescript": ts_ts.language_typescript,
    "tsx": ts_ts.language_tsx,
    "javascript": ts_js.language,
}

_GRAMMAR_BY_SUFFIX: dict[str, str] = {
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "tsx",
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
}


def language_for_path(path: Path | str) -> str:
    """Return the grammar name used to parse *path*.

    ``.d.ts`` files use the TypeScript grammar like any other ``.ts`` file.

    Raises:
        ValueError: If the file extension is not a TS/JS source extension.
    """
    suffix = Path(path).suffix.lower()
    try:
        return _GRAMMAR_BY_SUFFIX[suffix]
    except KeyError:
        raise ValueError(f"Unsupported source file extension: {suffix!r}") from None


class ParsedAST:
    """A parsed source file.

    Attributes:
        tree: The underlying ``tree_sitter.Tree``.
        source_code: Text that was parsed.
        language: Grammar name (``"typescript"``, ``"tsx"`` or ``"javascript"``).
        path: Path of the parsed file, ``None`` for in-memory sources.
    """

    __slots__ = ("tree", "source_code", "language", "path", "_source_bytes")

    def __init__(
        self,
        tree: ts.Tree,
        source_code: str,
        language: str,
        path: Path | None = None,
    ) -> None:
        self.tree = tree
        self.source_code = source_code
        self.language = language
        self.path = path
        # Node offsets are byte offsets into the UTF-8 encoding
        self._source_bytes = source_code.encode("utf-8")

    @property
    def root_node(self) -> ts.Node:
        return self.tree.root_node

    @property
    def has_errors(self) -> bool:
        """``True`` when tree-sitter had to recover from a syntax error."""
        return self.tree.root_node.has_error

    def get_text(self, node: ts.Node) -> str:
        """Return the literal source text of *node*."""
        return self._source_bytes[node.start_byte:node.end_byte].decode("utf-8", errors="replace")


class ASTEngine:
    """Parses TS/JS sources, keeping one ``Parser`` per grammar.

    Parsers are created on first use and reused for the lifetime of the
    engine, so a single engine should be shared while loading a project.

    Example::

        engine = ASTEngine()
        ast = engine.parse_file(Path("src/index.ts"))
        print(ast.language, ast.has_errors)
    """

    def __init__(self) -> None:
        self._parsers: dict[str, ts.Parser] = {}

    def _parser_for(self, language: str) -> ts.Parser:
        parser = self._parsers.get(language)
        if parser is None:
            loader = _GRAMMARS.get(language)
            if loader is None:
                raise ValueError(
                    f"Unsupported language: {language!r}. "
                    f"Supported: {', '.join(sorted(_GRAMMARS))}"
                )
            parser = ts.Parser(language=ts.Language(loader()))
            self._parsers[language] = parser
        return parser

    def parse(
        self,
        source_code: str,
        language: str = "typescript",
        path: Path | None = None,
    ) -> ParsedAST:
        """Parse *source_code* with the *language* grammar.

        tree-sitter always produces a tree; syntax errors show up as
        ``ERROR`` nodes and ``ParsedAST.has_errors``.

        Raises:
            ValueError: If *language* is not supported.
        """
        tree = self._parser_for(language).parse(source_code.encode("utf-8"))
        ast = ParsedAST(tree=tree, source_code=source_code, language=language, path=path)
        if ast.has_errors:
            logger.debug("Parse errors in %s", path or "<memory>")
        return ast

    def parse_file(self, path: Path) -> ParsedAST:
        """Read and parse the file at *path* with the grammar its extension implies.

        Raises:
            ValueError: If the extension is not supported.
            OSError: If the file cannot be read.
            UnicodeDecodeError: If the file is not valid UTF-8.
        """
        language = language_for_path(path)
        source_code = path.read_text(encoding="utf-8")
        return self.parse(source_code, language=language, path=path)
