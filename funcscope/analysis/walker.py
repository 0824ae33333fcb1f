"""Syntax walks producing ``FunctionRecord`` values.

``walk_top_level`` visits a file's top-level statements and the bodies of
top-level classes. ``collect_subconstructs`` visits everything below one
construct. Both defer every decision to ``classifier.classify``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass

import tree_sitter as ts

from ..models import FunctionRecord
from ..parsing.nodes import named_children
from ..project.checker import TypeChecker
from ..project.program import SourceFile
from .classifier import Match, Position, Shape, class_members, classify, shape_of
from .declarations import FileDeclarations
from .docs import extract_documentation
from .signatures import resolve_signature

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WalkContext:
    """Per-file state shared by every step of a walk."""

    checker: TypeChecker
    source_file: SourceFile
    declarations: FileDeclarations
    recursive: bool = False


def iter_top_level_matches(source_file: SourceFile) -> Iterator[Match]:
    """Yield classified top-level constructs and class methods in source order."""
    ast = source_file.ast
    for statement in named_children(ast.root_node):
        match = classify(statement, ast, Position.TOP_LEVEL)
        if match is not None:
            yield match
            continue
        if shape_of(statement) is Shape.CLASS_DECLARATION:
            for member in class_members(statement):
                match = classify(member, ast, Position.CLASS_BODY)
                if match is not None:
                    yield match


def walk_top_level(context: WalkContext) -> list[FunctionRecord]:
    """Build a record for every top-level construct of the context's file."""
    return [build_record(match, context) for match in iter_top_level_matches(context.source_file)]


def build_record(match: Match, context: WalkContext) -> FunctionRecord:
    source_file = context.source_file
    signature = resolve_signature(match.node, source_file, context.checker)
    record = FunctionRecord(
        name=match.name,
        kind=match.kind,
        file_path=str(source_file.path),
        signature=signature.text,
        documentation=extract_documentation(match.host, source_file.ast),
        interfaces=context.declarations.interfaces,
        type_aliases=context.declarations.type_aliases,
        subconstructs=collect_subconstructs(match.node, context) if context.recursive else None,
    )
    logger.debug("Found %s %s in %s", match.kind.value, match.name, source_file.path)
    return record


def _iter_descendants(root: ts.Node) -> Iterator[ts.Node]:
    """Pre-order traversal of every node below *root*."""
    stack = list(reversed(root.children))
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def collect_subconstructs(root: ts.Node, context: WalkContext) -> tuple[FunctionRecord, ...]:
    """Return records for every construct nested anywhere below *root*.

    *root* itself is never matched. Nested classes are descended into, but
    their members are not methods here: only the function-like constructs
    inside member bodies are reported. Each nested record carries its own
    subconstructs.
    """
    ast = context.source_file.ast
    records: list[FunctionRecord] = []
    for node in _iter_descendants(root):
        match = classify(node, ast, Position.NESTED)
        if match is not None:
            records.append(build_record(match, context))
    return tuple(records)
