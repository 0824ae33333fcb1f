"""Text and JSON rendering of function records."""

from __future__ import annotations

import json
import os
from pathlib import Path

from .constants import DECLARATION_TEXT_MAX_LENGTH
from .models import FunctionRecord, TypeDeclaration

NO_FUNCTIONS_MESSAGE = "No functions found."


def _relative(file_path: str, base_dir: Path | str) -> str:
    try:
        relative = os.path.relpath(file_path, base_dir)
    except ValueError:
        return file_path
    return relative if relative != "." else file_path


def _indent(text: str, prefix: str = "  ") -> str:
    return "\n".join(prefix + line for line in text.split("\n"))


def truncate(text: str, max_length: int = DECLARATION_TEXT_MAX_LENGTH) -> str:
    return text[:max_length] + " ..." if len(text) > max_length else text


def _declaration_block(title: str, declarations: tuple[TypeDeclaration, ...]) -> str:
    if not declarations:
        return f"{title}: -"
    lines = [f"- {d.name}: {truncate(d.text)}" for d in declarations]
    return f"{title}:\n" + "\n".join(lines)


def format_record(record: FunctionRecord, base_dir: Path | str) -> str:
    """Render one record as a block of ``Label: value`` lines."""
    lines = [
        f"Function: {record.name}",
        f"File: {_relative(record.file_path, base_dir)}",
        f"Kind: {record.kind.value}",
        f"Signature: {record.signature}",
    ]

    if record.documentation:
        lines.append("Documentation:\n" + _indent(record.documentation))
    else:
        lines.append("Documentation: -")

    lines.append(_declaration_block("Interfaces", record.interfaces))
    lines.append(_declaration_block("Type aliases", record.type_aliases))

    if record.subconstructs:
        subs = [f"- {s.name} ({_relative(s.file_path, base_dir)})" for s in record.subconstructs]
        lines.append("Subconstructs:\n" + "\n".join(subs))
    else:
        lines.append("Subconstructs: -")

    report = record.diagnostics
    if report is not None and report.problems:
        problems = [
            f"- [{p.severity}] {p.rule_id or 'unknown'} @{p.line}: {p.message}"
            for p in report.problems
        ]
        lines.append(f"Diagnostics ({report.mode.value}):\n" + "\n".join(problems))
    else:
        lines.append(f"Diagnostics: {report.mode.value if report is not None else 'none'}")

    return "\n".join(lines)


def format_text(records: list[FunctionRecord], base_dir: Path | str) -> str:
    """Render *records* as human-readable text, one blank-line separated block each."""
    if not records:
        return NO_FUNCTIONS_MESSAGE
    return "\n\n".join(format_record(record, base_dir) for record in records)


def format_json(records: list[FunctionRecord], indent: int | None = 2) -> str:
    """Serialise *records* to a JSON array with camelCase keys."""
    return json.dumps([record.to_dict() for record in records], indent=indent)
