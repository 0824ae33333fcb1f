"""Function discovery over a loaded program."""

from .analyzer import analyze_project
from .classifier import Match, Position, classify
from .declarations import FileDeclarations, collect_declarations
from .docs import extract_documentation
from .signatures import FallbackSignature, ResolvedSignature, resolve_signature
from .walker import WalkContext, collect_subconstructs, walk_top_level

__all__ = [
    "FallbackSignature",
    "FileDeclarations",
    "Match",
    "Position",
    "ResolvedSignature",
    "WalkContext",
    "analyze_project",
    "classify",
    "collect_declarations",
    "collect_subconstructs",
    "extract_documentation",
    "resolve_signature",
    "walk_top_level",
]
