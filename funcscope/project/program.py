"""The project model: every source file of a tsconfig project, parsed once.

A ``Program`` is built by ``load_program`` and is read-only afterwards. It
owns the parsed files and hands out the ``TypeChecker`` used to resolve
signatures.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from ..exceptions import ConfigNotFoundError, ProjectLoadError
from ..parsing import ASTEngine, ParsedAST
from .tsconfig import find_config_file, parse_config_file

if TYPE_CHECKING:
    from .checker import TypeChecker

logger = logging.getLogger(__name__)

# Tried in order when resolving a relative import specifier
_MODULE_SUFFIXES = (".ts", ".tsx", ".d.ts", ".mts", ".cts", ".js", ".jsx", ".mjs", ".cjs")

# ESM-style TypeScript imports name the emitted file: "./types.js" -> types.ts
_EMITTED_TO_SOURCE = {
    ".js": (".ts", ".tsx", ".d.ts"),
    ".jsx": (".tsx",),
    ".mjs": (".mts", ".d.mts"),
    ".cjs": (".cts", ".d.cts"),
}


@dataclass(frozen=True)
class SourceFile:
    """A parsed file belonging to a program."""

    path: Path
    ast: ParsedAST


class Program:
    """Parsed source files of one TypeScript project.

    Attributes:
        root_directory: Directory the program was loaded for.
        config_path: The tsconfig.json the file list came from.
    """

    def __init__(
        self,
        root_directory: Path,
        config_path: Path,
        source_files: list[SourceFile],
    ) -> None:
        self.root_directory = root_directory
        self.config_path = config_path
        self._source_files = tuple(source_files)
        self._by_path = {sf.path: sf for sf in self._source_files}
        self._checker: TypeChecker | None = None

    @property
    def source_files(self) -> tuple[SourceFile, ...]:
        """Source files in enumeration order."""
        return self._source_files

    def get_source_file(self, path: Path | str) -> SourceFile | None:
        return self._by_path.get(Path(path))

    def get_type_checker(self) -> TypeChecker:
        """Return the program's type checker, creating it on first use."""
        if self._checker is None:
            from .checker import TypeChecker

            self._checker = TypeChecker(self)
        return self._checker

    def resolve_module(self, importing_file: Path, specifier: str) -> SourceFile | None:
        """Resolve a relative import *specifier* to a file of this program.

        Bare package specifiers are not resolved and return ``None``.
        """
        if not specifier.startswith("."):
            return None
        target = (importing_file.parent / specifier).resolve()

        candidates: list[Path] = []
        for emitted, sources in _EMITTED_TO_SOURCE.items():
            if target.name.endswith(emitted):
                stem = target.name[: -len(emitted)]
                candidates.extend(target.with_name(stem + s) for s in sources)
        candidates.append(target)
        candidates.extend(target.with_name(target.name + s) for s in _MODULE_SUFFIXES)
        candidates.extend(target / f"index{s}" for s in _MODULE_SUFFIXES)

        for candidate in candidates:
            source_file = self._by_path.get(candidate)
            if source_file is not None:
                return source_file
        return None


def load_program(root_directory: Path | str, engine: ASTEngine | None = None) -> Program:
    """Locate the project configuration for *root_directory* and parse its files.

    Raises:
        ConfigNotFoundError: If no tsconfig.json exists in *root_directory*
            or its ancestors. Raised before any file is read.
        InvalidConfigError: If the configuration is malformed.
        ProjectLoadError: If a listed file cannot be read.
    """
    root = Path(root_directory).resolve()
    config_path = find_config_file(root)
    if config_path is None:
        raise ConfigNotFoundError(root)

    parsed = parse_config_file(config_path)
    engine = engine or ASTEngine()

    source_files: list[SourceFile] = []
    for path in parsed.file_names:
        try:
            ast = engine.parse_file(path)
        except (OSError, UnicodeDecodeError, ValueError) as e:
            raise ProjectLoadError(f"Cannot load source file {path}: {e}", path) from e
        source_files.append(SourceFile(path=path, ast=ast))

    logger.info(
        "Loaded %d source files from %s",
        len(source_files),
        config_path,
    )
    return Program(
        root_directory=root,
        config_path=config_path,
        source_files=source_files,
    )
