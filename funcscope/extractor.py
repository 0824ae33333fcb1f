"""End-to-end extraction: analyse, lint, format."""

from __future__ import annotations

import logging
from typing import Literal

from .analysis import analyze_project
from .formatter import format_json, format_text
from .lint import lint_functions
from .models import ExtractionOptions, FunctionRecord, LintMode

logger = logging.getLogger(__name__)

OutputFormat = Literal["text", "json"]


def extract_records(options: ExtractionOptions) -> list[FunctionRecord]:
    """Analyse the project and attach diagnostics for ``options.lint_mode``."""
    records = analyze_project(options)
    if options.lint_mode is not LintMode.NONE:
        records = lint_functions(records, options.lint_mode, options.root_directory)
    return records


def run_extractor(options: ExtractionOptions, output_format: OutputFormat = "text") -> str:
    """Run the whole pipeline and return the rendered report.

    Errors from project loading and linting propagate unchanged.
    """
    records = extract_records(options)
    if output_format == "json":
        return format_json(records)
    return format_text(records, options.root_directory)
