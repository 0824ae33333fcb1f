"""Pydantic models for function inventory results.

This module defines the records produced by the analyzer, the diagnostics
attached to them afterwards, and the options that drive an extraction run.
Records are frozen: augmenting one (for example with lint diagnostics)
returns an updated copy.
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class FunctionKind(str, Enum):
    """Syntactic shape of a discovered function-like construct."""

    DECLARATION = "Declaration"
    METHOD = "Method"
    ARROW_EXPRESSION = "ArrowExpression"
    FUNCTION_EXPRESSION = "FunctionExpression"


class LintMode(str, Enum):
    """Which ESLint messages are attached to records."""

    NONE = "none"
    WARN = "warn"
    ALL = "all"


class _RecordModel(BaseModel):
    """Shared configuration: immutable, camelCase aliases on output."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class TypeDeclaration(_RecordModel):
    """A top-level interface or type alias declaration.

    Attributes:
        name: Declared name.
        text: Full source text of the declaration, modifiers included.
    """

    name: str
    text: str


class Diagnostic(_RecordModel):
    """A single ESLint message.

    Attributes:
        rule_id: ESLint rule that produced the message; ``None`` for
            parser errors.
        message: Human-readable message.
        line: 1-based line number.
        severity: ``"warn"`` or ``"error"``.
    """

    rule_id: str | None = None
    message: str
    line: int = 0
    severity: Literal["warn", "error"]


class DiagnosticReport(_RecordModel):
    """Diagnostics attached to a record for one lint mode."""

    mode: LintMode
    problems: tuple[Diagnostic, ...] = ()


class FunctionRecord(_RecordModel):
    """One discovered function-like construct.

    Attributes:
        name: Identifier of the construct.
        kind: Syntactic kind, see ``FunctionKind``.
        file_path: Absolute path of the containing file.
        signature: Canonical signature from the type checker, or the
            construct's source text when no signature could be produced.
        documentation: Attached doc comment text, ``None`` when there is none.
        interfaces: Every top-level interface declared in the same file.
        type_aliases: Every top-level type alias declared in the same file.
        subconstructs: Nested constructs in traversal order. ``None`` when
            recursive discovery was not requested, possibly empty otherwise.
        diagnostics: Lint results, attached by ``funcscope.lint``.

    Invariants:
        - Records from the same file carry equal ``interfaces`` and
          ``type_aliases``.
        - ``documentation`` is never the empty string.
    """

    name: str
    kind: FunctionKind
    file_path: str
    signature: str
    documentation: str | None = None
    interfaces: tuple[TypeDeclaration, ...] = ()
    type_aliases: tuple[TypeDeclaration, ...] = ()
    subconstructs: tuple[FunctionRecord, ...] | None = None
    diagnostics: DiagnosticReport | None = None

    @field_validator("documentation")
    @classmethod
    def _empty_documentation_is_absent(cls, value: str | None) -> str | None:
        return value or None

    @property
    def subconstruct_names(self) -> list[str]:
        """Names of the nested constructs, empty when there are none."""
        return [sub.name for sub in self.subconstructs or ()]

    def with_diagnostics(self, report: DiagnosticReport) -> FunctionRecord:
        """Return a new record carrying *report* (immutable update)."""
        return self.model_copy(update={"diagnostics": report})

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a JSON-ready dict using camelCase keys.

        ``subconstructs`` and ``documentation`` are left out when absent so
        that "recursion disabled" and "none found" stay distinguishable.
        """
        data: dict[str, Any] = {
            "name": self.name,
            "kind": self.kind.value,
            "filePath": self.file_path,
            "signature": self.signature,
        }
        if self.documentation is not None:
            data["documentation"] = self.documentation
        data["interfaces"] = [d.model_dump(by_alias=True) for d in self.interfaces]
        data["typeAliases"] = [d.model_dump(by_alias=True) for d in self.type_aliases]
        if self.subconstructs is not None:
            data["subconstructs"] = [sub.to_dict() for sub in self.subconstructs]
        if self.diagnostics is not None:
            data["diagnostics"] = self.diagnostics.model_dump(by_alias=True, mode="json")
        return data


class ExtractionOptions(BaseModel):
    """Options for one extraction run.

    Attributes:
        root_directory: Directory whose files are analysed; the tsconfig.json
            is looked up from here.
        file_filter: Keep only files whose absolute path ends with this suffix.
        name_filter: Keep only constructs with exactly this name.
        recursive: Discover nested constructs into ``subconstructs``.
        lint_mode: Which ESLint messages to attach.
    """

    root_directory: Path = Field(default_factory=Path.cwd)
    file_filter: str | None = None
    name_filter: str | None = None
    recursive: bool = False
    lint_mode: LintMode = LintMode.NONE

    @field_validator("root_directory")
    @classmethod
    def _absolute_root(cls, value: Path) -> Path:
        return value.expanduser().resolve()

    @field_validator("file_filter")
    @classmethod
    def _normalise_file_filter(cls, value: str | None) -> str | None:
        if not value:
            return None
        return os.path.normpath(value)

    @field_validator("name_filter")
    @classmethod
    def _empty_name_filter_is_unset(cls, value: str | None) -> str | None:
        return value or None


FunctionRecord.model_rebuild()
