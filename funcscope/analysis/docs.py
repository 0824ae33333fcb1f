"""Leading documentation comment extraction."""

from __future__ import annotations

import tree_sitter as ts

from ..parsing import ParsedAST
from ..parsing.nodes import COMMENT_TYPE


def _is_doc_block(text: str) -> bool:
    return text.startswith("/**") and text != "/**/"


def _is_trailing(comment: ts.Node) -> bool:
    """A comment on the same line as the end of the preceding statement belongs to it."""
    previous = comment.prev_sibling
    return (
        previous is not None
        and previous.is_named
        and previous.type != COMMENT_TYPE
        and previous.end_point.row == comment.start_point.row
    )


def extract_documentation(host: ts.Node, ast: ParsedAST) -> str | None:
    """Return the ``/** ... */`` blocks attached above *host*, or ``None``.

    Stacked blocks are joined with newlines in source order and the result is
    stripped. Plain comments and decorators between the blocks and *host* do
    not break the chain; any other node does.
    """
    blocks: list[str] = []
    current = host.prev_sibling
    while current is not None:
        if current.type == "decorator":
            current = current.prev_sibling
            continue
        if current.type != COMMENT_TYPE or _is_trailing(current):
            break
        text = ast.get_text(current)
        if _is_doc_block(text):
            blocks.append(text)
        current = current.prev_sibling

    if not blocks:
        return None
    return "\n".join(reversed(blocks)).strip() or None
