"""Tests for tsconfig discovery, reading and file enumeration."""

import json
from pathlib import Path

import pytest

from funcscope.exceptions import InvalidConfigError, ProjectLoadError
from funcscope.project.tsconfig import (
    find_config_file,
    parse_config_file,
    read_config_file,
    strip_json_comments,
)


def _write(path: Path, content: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def _names(paths: list[Path], root: Path) -> list[str]:
    return [p.relative_to(root.resolve()).as_posix() for p in paths]


class TestFindConfigFile:
    """Test upward tsconfig.json discovery."""

    def test_found_in_directory(self, tmp_path: Path) -> None:
        """Test a config in the start directory is found."""
        config = _write(tmp_path / "tsconfig.json", "{}")

        assert find_config_file(tmp_path) == config.resolve()

    def test_found_in_ancestor(self, tmp_path: Path) -> None:
        """Test a config in a parent directory is found."""
        config = _write(tmp_path / "tsconfig.json", "{}")
        nested = tmp_path / "packages" / "app"
        nested.mkdir(parents=True)

        assert find_config_file(nested) == config.resolve()

    def test_not_found(self, tmp_path: Path) -> None:
        """Test None is returned when no config exists."""
        assert find_config_file(tmp_path) is None


class TestReadConfigFile:
    """Test JSON-with-comments reading."""

    def test_comments_and_trailing_commas(self, tmp_path: Path) -> None:
        """Test that comments and trailing commas are accepted."""
        config = _write(
            tmp_path / "tsconfig.json",
            """{
              // line comment
              "compilerOptions": { /* block */ "strict": true, },
              "include": ["src/**/*",],
            }""",
        )

        data = read_config_file(config)

        assert data == {"compilerOptions": {"strict": True}, "include": ["src/**/*"]}

    def test_comment_markers_inside_strings(self) -> None:
        """Test that // and /* inside strings are preserved."""
        text = '{"a": "http://example.com/*x*/", "b": "c,]"}'

        assert json.loads(strip_json_comments(text)) == {
            "a": "http://example.com/*x*/",
            "b": "c,]",
        }

    def test_malformed_json(self, tmp_path: Path) -> None:
        """Test malformed JSON raises InvalidConfigError."""
        config = _write(tmp_path / "tsconfig.json", '{"include": [}')

        with pytest.raises(InvalidConfigError, match="malformed JSON"):
            read_config_file(config)

    def test_non_object(self, tmp_path: Path) -> None:
        """Test a top-level array is rejected."""
        config = _write(tmp_path / "tsconfig.json", "[]")

        with pytest.raises(InvalidConfigError):
            read_config_file(config)


class TestParseConfigFile:
    """Test expansion of files/include/exclude."""

    def test_default_include(self, tmp_path: Path) -> None:
        """Test every TS file is included, files before subdirectories."""
        _write(tmp_path / "tsconfig.json", "{}")
        _write(tmp_path / "z.ts")
        _write(tmp_path / "a" / "b.ts")
        _write(tmp_path / "a.ts")
        _write(tmp_path / "node_modules" / "dep" / "index.ts")
        _write(tmp_path / "notes.md")

        parsed = parse_config_file(tmp_path / "tsconfig.json")

        assert _names(parsed.file_names, tmp_path) == ["a.ts", "z.ts", "a/b.ts"]

    def test_include_and_exclude(self, tmp_path: Path) -> None:
        """Test include globs and exclude patterns."""
        _write(
            tmp_path / "tsconfig.json",
            '{"include": ["src/**/*"], "exclude": ["src/**/*.test.ts", "src/generated"]}',
        )
        _write(tmp_path / "src" / "main.ts")
        _write(tmp_path / "src" / "main.test.ts")
        _write(tmp_path / "src" / "generated" / "api.ts")
        _write(tmp_path / "scripts" / "build.ts")

        parsed = parse_config_file(tmp_path / "tsconfig.json")

        assert _names(parsed.file_names, tmp_path) == ["src/main.ts"]

    def test_files_come_first(self, tmp_path: Path) -> None:
        """Test explicit files precede included files without duplicates."""
        _write(
            tmp_path / "tsconfig.json",
            '{"files": ["src/z.ts"], "include": ["src"]}',
        )
        _write(tmp_path / "src" / "a.ts")
        _write(tmp_path / "src" / "z.ts")

        parsed = parse_config_file(tmp_path / "tsconfig.json")

        assert _names(parsed.file_names, tmp_path) == ["src/z.ts", "src/a.ts"]

    def test_missing_listed_file(self, tmp_path: Path) -> None:
        """Test a missing entry of "files" raises ProjectLoadError."""
        _write(tmp_path / "tsconfig.json", '{"files": ["missing.ts"]}')

        with pytest.raises(ProjectLoadError, match="missing.ts"):
            parse_config_file(tmp_path / "tsconfig.json")

    def test_allow_js(self, tmp_path: Path) -> None:
        """Test JavaScript files are only included with allowJs."""
        _write(tmp_path / "app.js")
        _write(tmp_path / "lib.ts")

        _write(tmp_path / "tsconfig.json", "{}")
        assert _names(parse_config_file(tmp_path / "tsconfig.json").file_names, tmp_path) == ["lib.ts"]

        _write(tmp_path / "tsconfig.json", '{"compilerOptions": {"allowJs": true}}')
        assert _names(parse_config_file(tmp_path / "tsconfig.json").file_names, tmp_path) == [
            "app.js",
            "lib.ts",
        ]

    def test_declaration_file_shadowed_by_source(self, tmp_path: Path) -> None:
        """Test a .d.ts beside a .ts of the same name is dropped."""
        _write(tmp_path / "tsconfig.json", "{}")
        _write(tmp_path / "api.ts")
        _write(tmp_path / "api.d.ts")
        _write(tmp_path / "globals.d.ts")

        parsed = parse_config_file(tmp_path / "tsconfig.json")

        assert _names(parsed.file_names, tmp_path) == ["api.ts", "globals.d.ts"]

    def test_out_dir_excluded(self, tmp_path: Path) -> None:
        """Test the outDir is excluded when no exclude is given."""
        _write(tmp_path / "tsconfig.json", '{"compilerOptions": {"outDir": "build"}}')
        _write(tmp_path / "index.ts")
        _write(tmp_path / "build" / "index.d.ts")

        parsed = parse_config_file(tmp_path / "tsconfig.json")

        assert _names(parsed.file_names, tmp_path) == ["index.ts"]


class TestExtends:
    """Test "extends" handling."""

    def test_inherits_include_and_options(self, tmp_path: Path) -> None:
        """Test settings inherited from a base config, resolved relative to it."""
        _write(
            tmp_path / "configs" / "base.json",
            '{"compilerOptions": {"strict": true, "target": "ES5"}, "include": ["../src"]}',
        )
        _write(
            tmp_path / "tsconfig.json",
            '{"extends": "./configs/base", "compilerOptions": {"target": "ES2020"}}',
        )
        _write(tmp_path / "src" / "index.ts")
        _write(tmp_path / "other.ts")

        parsed = parse_config_file(tmp_path / "tsconfig.json")

        assert parsed.compiler_options == {"strict": True, "target": "ES2020"}
        assert _names(parsed.file_names, tmp_path) == ["src/index.ts"]

    def test_circular_extends(self, tmp_path: Path) -> None:
        """Test that cycles are reported."""
        _write(tmp_path / "a.json", '{"extends": "./b.json"}')
        _write(tmp_path / "b.json", '{"extends": "./a.json"}')

        with pytest.raises(InvalidConfigError, match="circular"):
            parse_config_file(tmp_path / "a.json")

    def test_missing_base(self, tmp_path: Path) -> None:
        """Test a missing extended config raises InvalidConfigError."""
        _write(tmp_path / "tsconfig.json", '{"extends": "./nope.json"}')

        with pytest.raises(InvalidConfigError, match="not found"):
            parse_config_file(tmp_path / "tsconfig.json")
