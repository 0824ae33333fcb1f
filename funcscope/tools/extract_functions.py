"""
Tool implementation for extracting the function inventory of a project.
"""

import logging

from pydantic import ValidationError

from ..exceptions import FuncscopeError
from ..extractor import run_extractor
from ..models import ExtractionOptions

logger = logging.getLogger(__name__)


async def extract_functions(
    root_directory: str,
    file_filter: str | None = None,
    name_filter: str | None = None,
    recursive: bool = False,
    lint_mode: str = "none",
    output_format: str = "text",
) -> str:
    """
    Extract function-like constructs from a TypeScript/JavaScript project.

    Args:
        root_directory: Project directory; its tsconfig.json is looked up from here
        file_filter: Only include files whose path ends with this suffix
        name_filter: Only include functions with exactly this name
        recursive: Include nested functions as subconstructs
        lint_mode: 'none', 'warn' or 'all'
        output_format: 'text' or 'json'

    Returns:
        The formatted report, or a message starting with 'ERROR:'
    """
    if output_format not in ("text", "json"):
        return f"ERROR: output_format must be 'text' or 'json', got '{output_format}'"

    try:
        options = ExtractionOptions(
            root_directory=root_directory,
            file_filter=file_filter,
            name_filter=name_filter,
            recursive=recursive,
            lint_mode=lint_mode,
        )
    except ValidationError as e:
        return f"ERROR: Invalid options: {e.errors()[0]['msg']}"

    try:
        return run_extractor(options, output_format=output_format)  # type: ignore[arg-type]
    except FuncscopeError as e:
        logger.warning(f"Extraction failed for {root_directory}: {e}")
        return f"ERROR: {e}"
