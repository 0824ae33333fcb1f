"""ESLint diagnostics for function records.

ESLint runs once per call over the distinct set of files the records come
from; its JSON report is attached to each record as a ``DiagnosticReport``.
"""

from __future__ import annotations

import json
import logging
import shlex
import subprocess
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from .constants import DEFAULT_LINT_TIMEOUT_SECONDS, ESLINT_COMMAND, ESLINT_OK_EXIT_CODES
from .exceptions import LinterError
from .models import Diagnostic, DiagnosticReport, FunctionRecord, LintMode

logger = logging.getLogger(__name__)

_SEVERITY_NAMES = {1: "warn", 2: "error"}


def run_eslint(
    files: Sequence[str],
    cwd: Path | str,
    command: str = ESLINT_COMMAND,
    timeout: int = DEFAULT_LINT_TIMEOUT_SECONDS,
) -> list[dict[str, Any]]:
    """Run ESLint over *files* and return its parsed JSON results.

    Raises:
        LinterError: If ESLint is missing, times out, fails fatally or
            prints something other than a JSON result list.
    """
    cmd = shlex.split(command) + ["--format", "json", *files]
    logger.debug(f"Running {' '.join(cmd)} in {cwd}")

    try:
        result = subprocess.run(
            cmd, capture_output=True, text=True, check=False, timeout=timeout, cwd=str(cwd)
        )
    except FileNotFoundError as e:
        raise LinterError(f"ESLint command not found: {cmd[0]}") from e
    except subprocess.TimeoutExpired as e:
        raise LinterError(f"ESLint timed out after {timeout} seconds") from e

    if result.returncode not in ESLINT_OK_EXIT_CODES:
        raise LinterError(
            f"ESLint failed with exit code {result.returncode}",
            returncode=result.returncode,
            stderr=result.stderr,
        )

    try:
        results = json.loads(result.stdout)
    except json.JSONDecodeError as e:
        raise LinterError("Failed to parse ESLint output", returncode=result.returncode, stderr=result.stderr) from e
    if not isinstance(results, list):
        raise LinterError("Unexpected ESLint output: expected a list of results")
    return results


def _diagnostics(messages: list[dict[str, Any]], mode: LintMode) -> tuple[Diagnostic, ...]:
    problems = []
    for message in messages:
        severity = _SEVERITY_NAMES.get(message.get("severity", 0))
        if severity is None or (mode is LintMode.WARN and severity != "warn"):
            continue
        problems.append(
            Diagnostic(
                rule_id=message.get("ruleId"),
                message=message.get("message", ""),
                line=message.get("line", 0),
                severity=severity,
            )
        )
    return tuple(problems)


def lint_functions(
    records: list[FunctionRecord],
    mode: LintMode | str,
    root_directory: Path | str,
) -> list[FunctionRecord]:
    """Return *records* augmented with ESLint diagnostics for *mode*.

    ``none`` mode and an empty record list return the input unchanged.
    In ``warn`` mode only warnings are kept; ``all`` keeps warnings and
    errors.
    """
    mode = LintMode(mode)
    if mode is LintMode.NONE or not records:
        return records

    files = list(dict.fromkeys(record.file_path for record in records))
    results = run_eslint(files, cwd=root_directory)

    by_file: dict[Path, list[dict[str, Any]]] = {}
    for entry in results:
        file_path = entry.get("filePath")
        if file_path:
            by_file[Path(file_path).resolve()] = entry.get("messages", [])

    logger.info(f"ESLint reported on {len(by_file)} of {len(files)} files")
    return [
        record.with_diagnostics(
            DiagnosticReport(
                mode=mode,
                problems=_diagnostics(by_file.get(Path(record.file_path).resolve(), []), mode),
            )
        )
        for record in records
    ]
