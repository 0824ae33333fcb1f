"""Custom exception hierarchy for funcscope.

Library code raises these; only the command line and the MCP server turn
them into user-facing messages.
"""

from __future__ import annotations

from pathlib import Path


class FuncscopeError(Exception):
    """Base exception for all funcscope errors.

    All custom exceptions should inherit from this class to allow
    callers to catch all funcscope-specific errors with a single
    except clause when appropriate.
    """
    pass


# =============================================================================
# Configuration Errors
# =============================================================================

class ConfigurationError(FuncscopeError):
    """Base exception for project configuration errors."""
    pass


class ConfigNotFoundError(ConfigurationError):
    """No tsconfig.json exists in the root directory or any of its ancestors."""

    def __init__(self, root_directory: Path | str):
        super().__init__(f"tsconfig.json not found in {root_directory}")
        self.root_directory = str(root_directory)


class InvalidConfigError(ConfigurationError):
    """Configuration file is malformed or references something unusable."""

    def __init__(self, message: str, config_path: Path | str | None = None):
        if config_path is not None:
            message = f"{config_path}: {message}"
        super().__init__(message)
        self.config_path = str(config_path) if config_path is not None else None


# =============================================================================
# Project Errors
# =============================================================================

class ProjectLoadError(FuncscopeError):
    """A source file listed by the project configuration cannot be loaded."""

    def __init__(self, message: str, path: Path | str | None = None):
        super().__init__(message)
        self.path = str(path) if path is not None else None


# =============================================================================
# Analysis Errors
# =============================================================================

class AnalysisError(FuncscopeError):
    """Base exception for errors raised while analysing syntax trees."""
    pass


class SignatureResolutionError(AnalysisError):
    """The type checker cannot produce a signature for a node.

    Never surfaced to callers of the analyzer: the signature resolver
    absorbs it and falls back to the node's source text.
    """
    pass


# =============================================================================
# Linter Errors
# =============================================================================

class LinterError(FuncscopeError):
    """ESLint could not be run or produced unusable output."""

    def __init__(self, message: str, returncode: int | None = None, stderr: str | None = None):
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


# =============================================================================
# Convenience Aliases for Common Cases
# =============================================================================

ConfigNotFound = ConfigNotFoundError
