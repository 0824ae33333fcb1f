"""Collection of top-level interface and type alias declarations."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..models import TypeDeclaration
from ..parsing import ParsedAST
from ..parsing.nodes import named_children, unwrap_declaration

logger = logging.getLogger(__name__)

_INTERFACE_TYPES = frozenset({"interface_declaration"})
_TYPE_ALIAS_TYPES = frozenset({"type_alias_declaration"})


@dataclass(frozen=True)
class FileDeclarations:
    """The interface and type alias declarations of one file, in source order."""

    interfaces: tuple[TypeDeclaration, ...] = ()
    type_aliases: tuple[TypeDeclaration, ...] = ()


def collect_declarations(ast: ParsedAST) -> FileDeclarations:
    """Collect the top-level interfaces and type aliases of *ast*.

    The recorded text is the full statement, including ``export`` or
    ``declare`` modifiers.
    """
    interfaces: list[TypeDeclaration] = []
    type_aliases: list[TypeDeclaration] = []

    for statement in named_children(ast.root_node):
        declaration = unwrap_declaration(statement)
        if declaration.type in _INTERFACE_TYPES:
            target = interfaces
        elif declaration.type in _TYPE_ALIAS_TYPES:
            target = type_aliases
        else:
            continue
        name = declaration.child_by_field_name("name")
        if name is None:
            continue
        target.append(TypeDeclaration(name=ast.get_text(name), text=ast.get_text(statement)))

    logger.debug(
        "%s: %d interfaces, %d type aliases",
        ast.path or "<memory>",
        len(interfaces),
        len(type_aliases),
    )
    return FileDeclarations(interfaces=tuple(interfaces), type_aliases=tuple(type_aliases))
