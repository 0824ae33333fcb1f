"""Project-wide function inventory.

``analyze_project`` is the entry point of the analysis engine: it loads (or
accepts) a ``Program``, walks every in-scope file in enumeration order and
applies the file and name filters. It is all-or-nothing: configuration and
loading errors propagate before any file is visited.
"""

from __future__ import annotations

import logging

from ..models import ExtractionOptions, FunctionRecord
from ..project.program import Program, SourceFile, load_program
from .declarations import collect_declarations
from .walker import WalkContext, walk_top_level

logger = logging.getLogger(__name__)


def is_in_scope(source_file: SourceFile, options: ExtractionOptions) -> bool:
    """Check the root-directory and file-suffix filters for *source_file*."""
    if not source_file.path.is_relative_to(options.root_directory):
        return False
    if options.file_filter and not str(source_file.path).endswith(options.file_filter):
        return False
    return True


def analyze_project(
    options: ExtractionOptions, program: Program | None = None
) -> list[FunctionRecord]:
    """Return a record for every function-like construct in scope.

    Args:
        options: Root directory, filters and recursion flag.
        program: A program already loaded for ``options.root_directory``;
            loaded here when omitted.

    Raises:
        ConfigNotFoundError: If no tsconfig.json governs the root directory.
        InvalidConfigError: If the configuration is malformed.
        ProjectLoadError: If a file listed by the configuration cannot be read.
    """
    if program is None:
        program = load_program(options.root_directory)
    checker = program.get_type_checker()

    records: list[FunctionRecord] = []
    for source_file in program.source_files:
        if not is_in_scope(source_file, options):
            logger.debug("Skipping %s", source_file.path)
            continue

        context = WalkContext(
            checker=checker,
            source_file=source_file,
            declarations=collect_declarations(source_file.ast),
            recursive=options.recursive,
        )
        for record in walk_top_level(context):
            if options.name_filter and record.name != options.name_filter:
                continue
            records.append(record)

    logger.info("Found %d functions under %s", len(records), options.root_directory)
    return records
