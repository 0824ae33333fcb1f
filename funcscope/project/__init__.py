"""Project model: tsconfig loading, parsed program and type checker."""

from .checker import Signature, TypeChecker
from .program import Program, SourceFile, load_program
from .tsconfig import ParsedConfig, find_config_file, parse_config_file

__all__ = [
    "ParsedConfig",
    "Program",
    "Signature",
    "SourceFile",
    "TypeChecker",
    "find_config_file",
    "load_program",
    "parse_config_file",
]
