import logging
import sys
from typing import Annotated, Literal

from fastmcp import FastMCP
from pydantic import Field

from . import __version__
from .constants import MCP_DEFAULT_PORT
from .logging_config import configure_logging
from .tools import extract_functions as _extract_functions

# Configure logging to stderr to avoid interfering with JSON-RPC on stdout
configure_logging()
logger = logging.getLogger("funcscope")

# Initialize FastMCP server
mcp: FastMCP = FastMCP("funcscope-mcp")


@mcp.tool
async def extract_functions(
    root_directory: Annotated[
        str,
        Field(
            description="Absolute path of the TypeScript/JavaScript project; its tsconfig.json is looked up from here"
        ),
    ],
    file_filter: Annotated[
        str | None,
        Field(
            description="Only include files whose path ends with this suffix (e.g., 'src/utils.ts')",
            default=None,
        ),
    ] = None,
    name_filter: Annotated[
        str | None,
        Field(
            description="Only include functions whose name is exactly this string",
            default=None,
        ),
    ] = None,
    recursive: Annotated[
        bool,
        Field(
            description="Also list functions nested inside each function as subconstructs"
        ),
    ] = False,
    lint_mode: Annotated[
        Literal["none", "warn", "all"],
        Field(
            description="Attach ESLint diagnostics: 'none', 'warn' (warnings only) or 'all'"
        ),
    ] = "none",
    output_format: Annotated[
        Literal["text", "json"],
        Field(description="Report format: 'text' or 'json'"),
    ] = "text",
) -> str:
    """List the functions, methods, arrow functions and function expressions of a project.

    USE THIS TOOL WHEN:
    - You need an inventory of functions in a TypeScript or JavaScript codebase
    - You want the resolved signature and JSDoc of a named function
    - You want the interfaces and type aliases declared next to a function

    Each entry reports the function name, kind, file, signature, documentation,
    the file's interfaces and type aliases, and optionally nested functions and
    ESLint diagnostics."""
    logger.info(f"Extracting functions from {root_directory}")
    return await _extract_functions(
        root_directory=root_directory,
        file_filter=file_filter,
        name_filter=name_filter,
        recursive=recursive,
        lint_mode=lint_mode,
        output_format=output_format,
    )


def main() -> None:
    """Run the MCP server with HTTP streaming transport."""
    print(f"funcscope MCP Server v{__version__} (HTTP Streaming)", file=sys.stderr)
    print("=" * 50, file=sys.stderr)

    port = MCP_DEFAULT_PORT

    print(f"Starting HTTP streaming server on port {port}...", file=sys.stderr)
    print(f"HTTP endpoint will be available at: http://localhost:{port}/mcp", file=sys.stderr)

    try:
        # Run as HTTP streaming server
        import asyncio
        asyncio.run(mcp.run_http_async(transport="streamable-http", host="0.0.0.0", port=port))
    except KeyboardInterrupt:
        print("\nShutting down...", file=sys.stderr)
        sys.exit(0)
    except Exception as e:
        print(f"MCP server error: {e}", file=sys.stderr)
        import traceback

        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
