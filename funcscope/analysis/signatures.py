"""Signature resolution with a source-text fallback."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import tree_sitter as ts

from ..exceptions import SignatureResolutionError
from ..project.checker import TypeChecker
from ..project.program import SourceFile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedSignature:
    """A signature rendered by the type checker."""

    text: str


@dataclass(frozen=True)
class FallbackSignature:
    """The construct's source text, used when no signature could be resolved."""

    text: str
    reason: str = ""


SignatureResult = ResolvedSignature | FallbackSignature


def resolve_signature(
    node: ts.Node, source_file: SourceFile, checker: TypeChecker
) -> SignatureResult:
    """Resolve the canonical signature of a function-like *node*.

    Never raises for unresolvable nodes; those produce a ``FallbackSignature``
    carrying the node's literal source text.
    """
    try:
        signature = checker.get_signature_from_declaration(node, source_file)
    except SignatureResolutionError as e:
        logger.debug("Signature fallback at %s:%d: %s", source_file.path, node.start_point.row + 1, e)
        return FallbackSignature(text=source_file.ast.get_text(node), reason=str(e))
    except RecursionError:
        logger.warning("Inference too deep at %s:%d, using source text", source_file.path, node.start_point.row + 1)
        return FallbackSignature(text=source_file.ast.get_text(node), reason="inference too deep")

    if signature is None:
        logger.debug("Signature fallback at %s:%d", source_file.path, node.start_point.row + 1)
        return FallbackSignature(
            text=source_file.ast.get_text(node), reason="no signature for node"
        )
    return ResolvedSignature(text=checker.signature_to_string(signature))
