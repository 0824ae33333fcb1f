"""Classification of syntax nodes into function-construct kinds.

``classify`` is the single decision point used by both the top-level walk
and recursive subconstruct discovery. It looks only at a node's type tag and
the position it was reached from; no type information is consulted.
"""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple

import tree_sitter as ts

from ..models import FunctionKind
from ..parsing import ParsedAST
from ..parsing.nodes import (
    ANONYMOUS_CLASS_TYPE,
    ARROW_FUNCTION_TYPES,
    CLASS_DECLARATION_TYPES,
    FUNCTION_DECLARATION_TYPES,
    FUNCTION_EXPRESSION_TYPES,
    LOOP_HEADER_TYPES,
    METHOD_TYPES,
    VARIABLE_STATEMENT_TYPES,
    has_keyword,
    named_children,
    unwrap_declaration,
)


class Shape(Enum):
    """Syntactic shapes the classifier recognises."""

    FUNCTION_DECLARATION = "function_declaration"
    CLASS_MEMBER = "class_member"
    VARIABLE_STATEMENT = "variable_statement"
    CLASS_DECLARATION = "class_declaration"


_SHAPES: dict[str, Shape] = {
    **{t: Shape.FUNCTION_DECLARATION for t in FUNCTION_DECLARATION_TYPES},
    **{t: Shape.CLASS_MEMBER for t in METHOD_TYPES},
    **{t: Shape.VARIABLE_STATEMENT for t in VARIABLE_STATEMENT_TYPES},
    **{t: Shape.CLASS_DECLARATION for t in CLASS_DECLARATION_TYPES},
}


class Position(Enum):
    """Where a candidate node was reached from."""

    TOP_LEVEL = "top_level"
    CLASS_BODY = "class_body"
    NESTED = "nested"


class Match(NamedTuple):
    """A classified construct.

    Attributes:
        name: Identifier of the construct.
        kind: Its function kind.
        node: The function-like node itself (for variables, the initializer).
        host: The statement documentation is attached to.
    """

    name: str
    kind: FunctionKind
    node: ts.Node
    host: ts.Node


# Member names that are plain identifiers; private names, strings,
# numbers and computed keys are excluded.
_METHOD_NAME_TYPES = frozenset({"property_identifier", "identifier"})


def _is_default_class(node: ts.Node, declaration: ts.Node) -> bool:
    """`export default class { ... }`: an anonymous class that still declares."""
    return (
        declaration.type == ANONYMOUS_CLASS_TYPE
        and node.type == "export_statement"
        and any(not c.is_named and c.type == "default" for c in node.children)
    )


def shape_of(node: ts.Node) -> Shape | None:
    declaration = unwrap_declaration(node)
    if _is_default_class(node, declaration):
        return Shape.CLASS_DECLARATION
    return _SHAPES.get(declaration.type)


def classify(node: ts.Node, ast: ParsedAST, position: Position) -> Match | None:
    """Classify *node* reached at *position*.

    Returns ``None`` for anything that is not a function-like construct in
    that position.
    """
    declaration = unwrap_declaration(node)
    shape = _SHAPES.get(declaration.type)

    if shape is Shape.FUNCTION_DECLARATION and position is not Position.CLASS_BODY:
        name = declaration.child_by_field_name("name")
        if name is None:
            return None
        return Match(ast.get_text(name), FunctionKind.DECLARATION, declaration, node)

    if shape is Shape.CLASS_MEMBER and position is Position.CLASS_BODY:
        return _classify_method(declaration, ast)

    if shape is Shape.VARIABLE_STATEMENT and position is not Position.CLASS_BODY:
        if _is_loop_header(declaration):
            return None
        return _classify_variable(declaration, ast, host=node)

    return None


def _classify_method(node: ts.Node, ast: ParsedAST) -> Match | None:
    name = node.child_by_field_name("name")
    if name is None or name.type not in _METHOD_NAME_TYPES:
        return None
    text = ast.get_text(name)
    if text == "constructor" or has_keyword(node, "get") or has_keyword(node, "set"):
        return None
    return Match(text, FunctionKind.METHOD, node, node)


def _classify_variable(statement: ts.Node, ast: ParsedAST, host: ts.Node) -> Match | None:
    # Only the first binding of `const a = ..., b = ...` is considered
    declarator = next(
        (c for c in named_children(statement) if c.type == "variable_declarator"), None
    )
    if declarator is None:
        return None
    name = declarator.child_by_field_name("name")
    value = declarator.child_by_field_name("value")
    if name is None or value is None or name.type != "identifier":
        return None

    if value.type in ARROW_FUNCTION_TYPES:
        kind = FunctionKind.ARROW_EXPRESSION
    elif value.type in FUNCTION_EXPRESSION_TYPES:
        kind = FunctionKind.FUNCTION_EXPRESSION
    else:
        return None
    return Match(ast.get_text(name), kind, value, host)


def _is_loop_header(statement: ts.Node) -> bool:
    parent = statement.parent
    if parent is None or parent.type not in LOOP_HEADER_TYPES:
        return False
    return parent.child_by_field_name("body") != statement


def class_members(node: ts.Node) -> list[ts.Node]:
    """Return the body members of a (possibly exported) class declaration."""
    declaration = unwrap_declaration(node)
    if declaration.type not in CLASS_DECLARATION_TYPES and not _is_default_class(node, declaration):
        return []
    body = declaration.child_by_field_name("body")
    if body is None:
        return []
    return [c for c in named_children(body) if c.type != "decorator"]


__all__ = [
    "Match",
    "Position",
    "Shape",
    "class_members",
    "classify",
    "shape_of",
]
