"""tsconfig.json discovery, reading and file enumeration.

Implements the parts of the TypeScript compiler's configuration handling
needed to enumerate a project's source files:

- ``find_config_file`` walks from a directory up to the filesystem root.
- ``read_config_file`` reads JSON with comments and trailing commas.
- ``parse_config_file`` follows ``extends`` chains and expands ``files``,
  ``include`` and ``exclude`` into an ordered list of absolute paths.

Limitations:
    Only the options that affect file enumeration are interpreted
    (``allowJs`` and ``outDir``); ``references`` and ``rootDirs`` are ignored.
"""

from __future__ import annotations

import json
import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..constants import (
    DEFAULT_EXCLUDE_PATTERNS,
    DEFAULT_INCLUDE_PATTERNS,
    IMPLICIT_GLOB_EXCLUDES,
    JS_EXTENSIONS,
    MAX_EXTENDS_DEPTH,
    TS_EXTENSIONS,
    TSCONFIG_FILENAME,
)
from ..exceptions import InvalidConfigError, ProjectLoadError

logger = logging.getLogger(__name__)


@dataclass
class ParsedConfig:
    """Result of parsing a tsconfig.json and everything it extends.

    Attributes:
        config_path: Absolute path of the config that was parsed.
        compiler_options: Merged ``compilerOptions``; path-valued options
            are already absolute.
        file_names: Absolute paths of the project's source files, in
            enumeration order.
    """

    config_path: Path
    compiler_options: dict[str, Any] = field(default_factory=dict)
    file_names: list[Path] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------


def find_config_file(search_from: Path | str, file_name: str = TSCONFIG_FILENAME) -> Path | None:
    """Return the nearest *file_name* in *search_from* or one of its ancestors."""
    directory = Path(search_from).resolve()
    for candidate_dir in (directory, *directory.parents):
        candidate = candidate_dir / file_name
        if candidate.is_file():
            return candidate
    return None


# ---------------------------------------------------------------------------
# Reading
# ---------------------------------------------------------------------------


_TRAILING_COMMA = re.compile(r'("(?:[^"\\]|\\.)*")|,(\s*[}\]])')


def strip_json_comments(text: str) -> str:
    """Remove ``//`` and ``/* */`` comments and trailing commas from JSON text.

    String literals are copied through untouched.
    """
    out: list[str] = []
    i = 0
    length = len(text)
    while i < length:
        char = text[i]
        if char == '"':
            start = i
            i += 1
            while i < length and text[i] != '"':
                i += 2 if text[i] == "\\" else 1
            i += 1
            out.append(text[start:i])
            continue
        if text.startswith("//", i):
            newline = text.find("\n", i)
            i = length if newline == -1 else newline
            continue
        if text.startswith("/*", i):
            end = text.find("*/", i + 2)
            i = length if end == -1 else end + 2
            out.append(" ")
            continue
        out.append(char)
        i += 1
    without_comments = "".join(out)
    return _TRAILING_COMMA.sub(lambda m: m.group(1) or m.group(2), without_comments)


def read_config_file(config_path: Path) -> dict[str, Any]:
    """Read *config_path* as JSON with comments.

    Raises:
        InvalidConfigError: If the file cannot be read or is not a JSON object.
    """
    try:
        text = config_path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise InvalidConfigError(f"cannot read configuration: {e}", config_path) from e

    if not text.strip():
        return {}

    try:
        data = json.loads(strip_json_comments(text))
    except json.JSONDecodeError as e:
        raise InvalidConfigError(f"malformed JSON: {e}", config_path) from e

    if not isinstance(data, dict):
        raise InvalidConfigError("top-level value must be an object", config_path)
    return data


# ---------------------------------------------------------------------------
# extends
# ---------------------------------------------------------------------------


@dataclass
class _RawConfig:
    """A config with its enumeration settings tagged by the directory they came from."""

    compiler_options: dict[str, Any] = field(default_factory=dict)
    files: tuple[Path, list[str]] | None = None
    include: tuple[Path, list[str]] | None = None
    exclude: tuple[Path, list[str]] | None = None


_PATH_OPTIONS = ("outDir", "rootDir", "baseUrl", "declarationDir")


def _resolve_extends(spec: str, config_path: Path) -> Path:
    """Resolve an ``extends`` value to a config file path."""
    base_dir = config_path.parent
    if spec.startswith((".", "/")) or os.path.isabs(spec):
        candidate = (base_dir / spec).resolve()
        if candidate.is_file():
            return candidate
        if not candidate.name.endswith(".json"):
            with_suffix = candidate.with_name(candidate.name + ".json")
            if with_suffix.is_file():
                return with_suffix
        raise InvalidConfigError(f"extended config {spec!r} not found", config_path)

    # Package specifier: look it up in node_modules directories upwards
    for directory in (base_dir, *base_dir.parents):
        package_path = directory / "node_modules" / spec
        for candidate in (
            package_path,
            package_path.with_name(package_path.name + ".json"),
            package_path / TSCONFIG_FILENAME,
        ):
            if candidate.is_file():
                return candidate.resolve()
    raise InvalidConfigError(f"extended config {spec!r} not found in node_modules", config_path)


def _string_list(value: Any, key: str, config_path: Path) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise InvalidConfigError(f"{key!r} must be an array of strings", config_path)
    return value


def _load_raw(config_path: Path, chain: tuple[Path, ...]) -> _RawConfig:
    if config_path in chain:
        cycle = " -> ".join(str(p) for p in (*chain, config_path))
        raise InvalidConfigError(f"circular 'extends': {cycle}", config_path)
    if len(chain) >= MAX_EXTENDS_DEPTH:
        raise InvalidConfigError("'extends' chain is too deep", config_path)

    data = read_config_file(config_path)
    chain = (*chain, config_path)
    base_dir = config_path.parent

    merged = _RawConfig()
    extends = data.get("extends")
    if extends is not None:
        specs = [extends] if isinstance(extends, str) else _string_list(extends, "extends", config_path)
        for spec in specs:
            parent = _load_raw(_resolve_extends(spec, config_path), chain)
            merged.compiler_options.update(parent.compiler_options)
            merged.files = parent.files or merged.files
            merged.include = parent.include or merged.include
            merged.exclude = parent.exclude or merged.exclude

    options = data.get("compilerOptions") or {}
    if not isinstance(options, dict):
        raise InvalidConfigError("'compilerOptions' must be an object", config_path)
    for key, value in options.items():
        if key in _PATH_OPTIONS and isinstance(value, str):
            value = str((base_dir / value).resolve())
        merged.compiler_options[key] = value

    for key in ("files", "include", "exclude"):
        if key in data:
            setattr(merged, key, (base_dir, _string_list(data[key], key, config_path)))

    return merged


# ---------------------------------------------------------------------------
# Glob matching
# ---------------------------------------------------------------------------


def _has_wildcard(segment: str) -> bool:
    return "*" in segment or "?" in segment


def _segment_regex(segment: str) -> str:
    parts: list[str] = []
    if segment[:1] in ("*", "?"):
        # Wildcards never match dotfiles
        parts.append(r"(?!\.)")
    for char in segment:
        if char == "*":
            parts.append("[^/]*")
        elif char == "?":
            parts.append("[^/]")
        else:
            parts.append(re.escape(char))
    return "".join(parts)


def _pattern_regex(base_dir: Path, pattern: str, extensions: tuple[str, ...], for_exclude: bool) -> re.Pattern[str]:
    absolute = Path(os.path.normpath(base_dir / pattern)).as_posix()
    segments = absolute.split("/")
    last = segments[-1]
    if not _has_wildcard(last) and not last.endswith(extensions) and not for_exclude:
        # A bare directory name includes everything below it
        segments.extend(["**", "*"])

    implicit = "|".join(re.escape(name) for name in IMPLICIT_GLOB_EXCLUDES)
    regex = ""
    for index, segment in enumerate(segments):
        if segment == "**":
            if for_exclude:
                regex += "(?:[^/]+/)*"
            else:
                regex += rf"(?:(?!(?:{implicit})/)[^/.][^/]*/)*"
            continue
        regex += _segment_regex(segment)
        if index < len(segments) - 1:
            regex += "/"
    # Exclude patterns also match everything below a matched directory
    regex += "(?:/.*)?$" if for_exclude else "$"
    return re.compile("^" + regex)


def _matches_extension(name: str, extensions: tuple[str, ...]) -> bool:
    return name.endswith(extensions)


def _base_name(name: str, extensions: tuple[str, ...]) -> tuple[str, int]:
    """Split *name* into its stem and the priority of its extension."""
    best = -1
    best_len = 0
    for priority, ext in enumerate(extensions):
        if name.endswith(ext) and len(ext) > best_len:
            best, best_len = priority, len(ext)
    return name[: len(name) - best_len], best


def _walk_roots(base_dir: Path, include: list[str], extensions: tuple[str, ...]) -> list[Path]:
    """Directories to walk: the literal prefix of each include pattern, outermost only."""
    roots: set[Path] = set()
    for pattern in include:
        absolute = Path(os.path.normpath(base_dir / pattern))
        literal: list[str] = []
        for segment in absolute.parts:
            if _has_wildcard(segment):
                break
            literal.append(segment)
        root = Path(*literal)
        if len(literal) == len(absolute.parts) and root.name.endswith(extensions):
            root = root.parent
        roots.add(root)
    return sorted(r for r in roots if not any(o != r and r.is_relative_to(o) for o in roots))


def match_files(
    base_dir: Path,
    include: list[str],
    exclude: list[str],
    extensions: tuple[str, ...],
) -> list[Path]:
    """Expand *include*/*exclude* globs under *base_dir*.

    A directory's files are listed before its subdirectories, each sorted by
    name. When two files share a base name, only the one with the
    higher-priority extension (earlier in *extensions*) is kept.
    """
    include_regexes = [_pattern_regex(base_dir, p, extensions, for_exclude=False) for p in include]
    exclude_regexes = [_pattern_regex(base_dir, p, extensions, for_exclude=True) for p in exclude]
    if not include_regexes:
        return []
    allow_hidden = any("/." in Path(os.path.normpath(base_dir / p)).as_posix() for p in include)

    def excluded(path: str) -> bool:
        return any(regex.match(path) for regex in exclude_regexes)

    results: list[Path] = []
    pending = list(reversed(_walk_roots(base_dir, include, extensions)))
    while pending:
        directory = pending.pop()
        try:
            entries = sorted(os.scandir(directory), key=lambda e: e.name)
        except OSError as e:
            logger.debug("Skipping unreadable directory %s: %s", directory, e)
            continue

        chosen: dict[str, tuple[int, Path]] = {}
        order: list[str] = []
        subdirs: list[Path] = []
        for entry in entries:
            path = Path(entry.path)
            posix = path.as_posix()
            if entry.is_dir():
                if (entry.name.startswith(".") and not allow_hidden) or excluded(posix):
                    continue
                subdirs.append(path)
                continue
            if not _matches_extension(entry.name, extensions):
                continue
            if excluded(posix) or not any(regex.match(posix) for regex in include_regexes):
                continue
            stem, priority = _base_name(entry.name, extensions)
            if stem not in chosen:
                order.append(stem)
                chosen[stem] = (priority, path)
            elif priority < chosen[stem][0]:
                chosen[stem] = (priority, path)

        results.extend(chosen[stem][1] for stem in order)
        # Stack: push in reverse so subdirectories are visited in sorted order
        pending.extend(reversed(subdirs))
    return results


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def parse_config_file(config_path: Path) -> ParsedConfig:
    """Parse *config_path* (following ``extends``) into a ``ParsedConfig``.

    Raises:
        InvalidConfigError: If any config in the chain is malformed.
        ProjectLoadError: If a path listed under ``files`` does not exist.
    """
    config_path = config_path.resolve()
    raw = _load_raw(config_path, chain=())
    options = raw.compiler_options

    extensions = TS_EXTENSIONS + (JS_EXTENSIONS if options.get("allowJs") else ())

    file_names: list[Path] = []
    seen: set[Path] = set()

    if raw.files is not None:
        files_dir, files = raw.files
        for name in files:
            path = (files_dir / name).resolve()
            if not path.is_file():
                raise ProjectLoadError(f"File '{path}' not found (listed in {config_path})", path)
            if path not in seen:
                seen.add(path)
                file_names.append(path)

    if raw.include is not None:
        include_dir, include = raw.include
    elif raw.files is None:
        include_dir, include = config_path.parent, list(DEFAULT_INCLUDE_PATTERNS)
    else:
        include_dir, include = config_path.parent, []

    if raw.exclude is not None:
        exclude_dir, exclude = raw.exclude
    else:
        exclude_dir, exclude = config_path.parent, list(DEFAULT_EXCLUDE_PATTERNS)
        out_dir = options.get("outDir")
        if isinstance(out_dir, str):
            exclude.append(out_dir)

    if include:
        # Exclude patterns are relative to their own config; make them absolute
        absolute_excludes = [Path(os.path.normpath(exclude_dir / p)).as_posix() for p in exclude]
        for path in match_files(include_dir, include, absolute_excludes, extensions):
            if path not in seen:
                seen.add(path)
                file_names.append(path)

    if not file_names:
        logger.warning("No inputs were found in config file %s", config_path)

    return ParsedConfig(config_path=config_path, compiler_options=options, file_names=file_names)
