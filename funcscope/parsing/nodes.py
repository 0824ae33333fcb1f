"""Node-type vocabulary and small helpers shared by the analysis passes.

Both the TypeScript and the JavaScript tree-sitter grammars are covered;
older grammar releases named function expressions ``function``, newer ones
``function_expression``, so both spellings appear below.
"""

from __future__ import annotations

from collections.abc import Iterator

import tree_sitter as ts

ARROW_FUNCTION_TYPES = frozenset({"arrow_function"})

FUNCTION_EXPRESSION_TYPES = frozenset({
    "function_expression",
    "function",
    "generator_function",
})

FUNCTION_DECLARATION_TYPES = frozenset({
    "function_declaration",
    "generator_function_declaration",
    # Overload signatures and `declare function`
    "function_signature",
})

METHOD_TYPES = frozenset({
    "method_definition",
    # Overload signatures inside a class body
    "method_signature",
    "abstract_method_signature",
})

FUNCTION_LIKE_TYPES = (
    ARROW_FUNCTION_TYPES
    | FUNCTION_EXPRESSION_TYPES
    | FUNCTION_DECLARATION_TYPES
    | METHOD_TYPES
)

GENERATOR_TYPES = frozenset({"generator_function_declaration", "generator_function"})

BODYLESS_FUNCTION_TYPES = frozenset({
    "function_signature",
    "method_signature",
    "abstract_method_signature",
})

CLASS_DECLARATION_TYPES = frozenset({"class_declaration", "abstract_class_declaration"})

# Class expressions, including `export default class { ... }`
ANONYMOUS_CLASS_TYPE = "class"

CLASS_LIKE_TYPES = CLASS_DECLARATION_TYPES | frozenset({ANONYMOUS_CLASS_TYPE})

VARIABLE_STATEMENT_TYPES = frozenset({"lexical_declaration", "variable_declaration"})

# Statements that wrap a declaration without changing what it declares
WRAPPER_TYPES = frozenset({"export_statement", "ambient_declaration"})

# Loop headers whose declarations are not statements of their own
LOOP_HEADER_TYPES = frozenset({"for_statement", "for_in_statement", "for_of_statement"})

TYPE_ANNOTATION_TYPES = frozenset({
    "type_annotation",
    "opting_type_annotation",
    "omitting_type_annotation",
    "adding_type_annotation",
})

COMMENT_TYPE = "comment"


def named_children(node: ts.Node) -> Iterator[ts.Node]:
    """Yield the named children of *node*, skipping comments."""
    for child in node.named_children:
        if child.type != COMMENT_TYPE:
            yield child


def first_named_child(node: ts.Node) -> ts.Node | None:
    return next(named_children(node), None)


def unwrap_declaration(node: ts.Node) -> ts.Node:
    """Return the declaration inside ``export``/``declare`` wrappers.

    ``export default <expression>`` and bare ``export { ... }`` clauses have
    no declaration; the wrapper itself is returned for those.
    """
    while node.type in WRAPPER_TYPES:
        inner = node.child_by_field_name("declaration")
        if inner is None:
            inner = next(
                (c for c in named_children(node) if c.type not in ("decorator", "export_clause")),
                None,
            )
            if inner is None or inner.type in ("string", "identifier"):
                return node
        node = inner
    return node


def has_keyword(node: ts.Node, keyword: str) -> bool:
    """Check whether a function-like *node* carries *keyword* (``async``, ``*``, ``get``).

    Only the tokens before the parameter list are inspected.
    """
    for child in node.children:
        if child.type in ("formal_parameters", "statement_block", "=>"):
            break
        if not child.is_named and child.type == keyword:
            return True
    return False
