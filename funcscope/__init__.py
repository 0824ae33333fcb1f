"""funcscope - function inventory for TypeScript and JavaScript projects."""

__version__ = "0.1.0"

from .analysis import analyze_project
from .exceptions import (
    ConfigNotFound,
    ConfigNotFoundError,
    FuncscopeError,
    InvalidConfigError,
    LinterError,
    ProjectLoadError,
)
from .extractor import run_extractor
from .models import ExtractionOptions, FunctionKind, FunctionRecord, LintMode

__all__ = [
    "__version__",
    "ConfigNotFound",
    "ConfigNotFoundError",
    "ExtractionOptions",
    "FuncscopeError",
    "FunctionKind",
    "FunctionRecord",
    "InvalidConfigError",
    "LintMode",
    "LinterError",
    "ProjectLoadError",
    "analyze_project",
    "run_extractor",
]
