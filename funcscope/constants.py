"""Constants and configuration values for funcscope.

This module centralizes magic numbers and configuration values
that are used across the codebase for easier maintenance.
"""

import os

# =============================================================================
# Project Configuration
# =============================================================================

TSCONFIG_FILENAME = "tsconfig.json"

# Used when a config has neither "files" nor "include"
DEFAULT_INCLUDE_PATTERNS = ("**/*",)

# Used when a config has no "exclude"; outDir is appended when set
DEFAULT_EXCLUDE_PATTERNS = ("node_modules", "bower_components", "jspm_packages")

# Directories "**" never descends into unless named explicitly
IMPLICIT_GLOB_EXCLUDES = ("node_modules", "bower_components", "jspm_packages")

# Source extensions in priority order: when two files share a base name
# only the first extension listed here is kept.
TS_EXTENSIONS = (".ts", ".tsx", ".mts", ".cts", ".d.ts", ".d.mts", ".d.cts")
JS_EXTENSIONS = (".js", ".jsx", ".mjs", ".cjs")

# Upper bound on "extends" chains, cycles are reported separately
MAX_EXTENDS_DEPTH = 32


# =============================================================================
# Linting
# =============================================================================

# Seconds before an ESLint run is abandoned
DEFAULT_LINT_TIMEOUT_SECONDS = int(os.environ.get("FUNCSCOPE_LINT_TIMEOUT", 120))

# Command used to invoke ESLint, split on whitespace
ESLINT_COMMAND = os.environ.get("FUNCSCOPE_ESLINT_COMMAND", "npx --no-install eslint")

# ESLint exits with 1 when it found problems, 2 on fatal errors
ESLINT_OK_EXIT_CODES = (0, 1)


# =============================================================================
# Reporting
# =============================================================================

# Interface and type alias text longer than this is cut in text reports
DECLARATION_TEXT_MAX_LENGTH = 200


# =============================================================================
# Logging / Server
# =============================================================================

LOG_LEVEL = os.environ.get("FUNCSCOPE_LOG_LEVEL", "INFO")

MCP_DEFAULT_PORT = int(os.environ.get("MCP_PORT", 3000))
