"""Tests for the ESLint diagnostics annotator."""

import json
import subprocess
from unittest.mock import MagicMock, patch

import pytest

from funcscope.exceptions import LinterError
from funcscope.lint import lint_functions, run_eslint
from funcscope.models import FunctionKind, FunctionRecord, LintMode


def _record(name: str, file_path: str) -> FunctionRecord:
    return FunctionRecord(
        name=name,
        kind=FunctionKind.DECLARATION,
        file_path=file_path,
        signature="(): void",
    )


def _completed(stdout: str, returncode: int = 1, stderr: str = "") -> MagicMock:
    result = MagicMock()
    result.stdout = stdout
    result.stderr = stderr
    result.returncode = returncode
    return result


ESLINT_OUTPUT = json.dumps([
    {
        "filePath": "/project/src/a.ts",
        "messages": [
            {"ruleId": "no-unused-vars", "message": "'x' is unused", "line": 3, "severity": 1},
            {"ruleId": "no-undef", "message": "'y' is not defined", "line": 7, "severity": 2},
            {"ruleId": None, "message": "Parsing error", "line": 9, "severity": 2},
        ],
    },
    {"filePath": "/project/src/b.ts", "messages": []},
])


class TestLintFunctions:
    """Test attaching diagnostics to records."""

    def test_none_mode_returns_input(self) -> None:
        """Test none mode does not run ESLint."""
        records = [_record("a", "/project/src/a.ts")]

        with patch("funcscope.lint.subprocess.run") as mock_run:
            result = lint_functions(records, LintMode.NONE, "/project")

        assert result is records
        mock_run.assert_not_called()

    def test_empty_records(self) -> None:
        """Test no ESLint run for an empty record list."""
        with patch("funcscope.lint.subprocess.run") as mock_run:
            assert lint_functions([], LintMode.ALL, "/project") == []

        mock_run.assert_not_called()

    def test_warn_mode_keeps_warnings(self) -> None:
        """Test warn mode keeps severity 1 only."""
        records = [_record("a", "/project/src/a.ts")]

        with patch("funcscope.lint.subprocess.run", return_value=_completed(ESLINT_OUTPUT)):
            (record,) = lint_functions(records, "warn", "/project")

        assert record.diagnostics.mode is LintMode.WARN
        assert [(p.rule_id, p.severity, p.line) for p in record.diagnostics.problems] == [
            ("no-unused-vars", "warn", 3),
        ]

    def test_all_mode_keeps_both(self) -> None:
        """Test all mode tags warnings and errors."""
        records = [_record("a", "/project/src/a.ts"), _record("b", "/project/src/b.ts")]

        with patch("funcscope.lint.subprocess.run", return_value=_completed(ESLINT_OUTPUT)):
            a, b = lint_functions(records, LintMode.ALL, "/project")

        assert [p.severity for p in a.diagnostics.problems] == ["warn", "error", "error"]
        assert a.diagnostics.problems[2].rule_id is None
        assert b.diagnostics.problems == ()

    def test_records_are_not_mutated(self) -> None:
        """Test the input records keep no diagnostics."""
        records = [_record("a", "/project/src/a.ts")]

        with patch("funcscope.lint.subprocess.run", return_value=_completed(ESLINT_OUTPUT)):
            lint_functions(records, LintMode.ALL, "/project")

        assert records[0].diagnostics is None

    def test_files_linted_once(self) -> None:
        """Test each distinct file is passed to ESLint once."""
        records = [_record("a", "/project/src/a.ts"), _record("a2", "/project/src/a.ts")]

        with patch("funcscope.lint.subprocess.run", return_value=_completed("[]", 0)) as mock_run:
            lint_functions(records, LintMode.ALL, "/project")

        cmd = mock_run.call_args[0][0]
        assert cmd.count("/project/src/a.ts") == 1
        assert "--format" in cmd and "json" in cmd
        assert mock_run.call_args.kwargs["cwd"] == "/project"


class TestRunEslint:
    """Test ESLint process failures."""

    def test_fatal_exit_code(self) -> None:
        """Test exit codes other than 0 and 1 raise LinterError."""
        with patch("funcscope.lint.subprocess.run", return_value=_completed("", 2, "config error")):
            with pytest.raises(LinterError) as exc_info:
                run_eslint(["/project/a.ts"], "/project")

        assert exc_info.value.returncode == 2
        assert exc_info.value.stderr == "config error"

    def test_unparsable_output(self) -> None:
        """Test non-JSON output raises LinterError."""
        with patch("funcscope.lint.subprocess.run", return_value=_completed("Oops", 1)):
            with pytest.raises(LinterError, match="parse"):
                run_eslint(["/project/a.ts"], "/project")

    def test_missing_executable(self) -> None:
        """Test a missing command raises LinterError."""
        with patch("funcscope.lint.subprocess.run", side_effect=FileNotFoundError):
            with pytest.raises(LinterError, match="not found"):
                run_eslint(["/project/a.ts"], "/project")

    def test_timeout(self) -> None:
        """Test a timeout raises LinterError."""
        with patch(
            "funcscope.lint.subprocess.run",
            side_effect=subprocess.TimeoutExpired(cmd="eslint", timeout=1),
        ):
            with pytest.raises(LinterError, match="timed out"):
                run_eslint(["/project/a.ts"], "/project", timeout=1)

    def test_custom_command(self) -> None:
        """Test the command string is split into arguments."""
        with patch("funcscope.lint.subprocess.run", return_value=_completed("[]", 0)) as mock_run:
            run_eslint(["a.ts"], "/project", command="node_modules/.bin/eslint --no-eslintrc")

        assert mock_run.call_args[0][0] == [
            "node_modules/.bin/eslint",
            "--no-eslintrc",
            "--format",
            "json",
            "a.ts",
        ]
