"""Shared fixtures for funcscope tests."""

from collections.abc import Callable
from pathlib import Path

import pytest

from funcscope.models import ExtractionOptions
from funcscope.parsing import ASTEngine, language_for_path
from funcscope.project.program import Program, SourceFile

FIXTURES_DIR = Path(__file__).parent / "fixtures"
SAMPLE_PROJECT = (FIXTURES_DIR / "sample-project").resolve()


@pytest.fixture(scope="session")
def engine() -> ASTEngine:
    """A parsing engine shared across the test session."""
    return ASTEngine()


@pytest.fixture
def sample_project() -> Path:
    """Absolute path of the sample TypeScript project."""
    return SAMPLE_PROJECT


@pytest.fixture
def base_options(sample_project: Path) -> ExtractionOptions:
    """Options for the sample project with no filters."""
    return ExtractionOptions(root_directory=sample_project)


@pytest.fixture
def make_program(tmp_path: Path, engine: ASTEngine) -> Callable[..., Program]:
    """Build an in-memory program from ``{relative name: source}``.

    Files are also written to disk so that paths are real.
    """

    def _make(sources: dict[str, str]) -> Program:
        root = tmp_path.resolve()
        files = []
        for name, source in sources.items():
            path = root / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(source, encoding="utf-8")
            ast = engine.parse(source, language=language_for_path(path), path=path)
            files.append(SourceFile(path=path, ast=ast))
        return Program(
            root_directory=root,
            config_path=root / "tsconfig.json",
            source_files=files,
        )

    return _make
