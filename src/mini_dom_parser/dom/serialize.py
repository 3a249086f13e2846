"""Serialization of document trees to markup, debug dumps and dictionaries."""

from typing import Any, Dict, List

from .node import AttrMap, Comment, Element, Node, Text, match_node


def _format_attributes(attributes: AttrMap) -> str:
    parts = []
    for name in sorted(attributes):
        value = attributes[name]
        if '"' not in value:
            parts.append(f' {name}="{value}"')
        elif "'" not in value:
            parts.append(f" {name}='{value}'")
        else:
            raise ValueError(
                f"Attribute {name!r} contains both quote characters and cannot be written"
            )
    return "".join(parts)


def to_markup(node: Node) -> str:
    """Render ``node`` and its subtree back to markup.

    Content is written verbatim; no entity encoding is applied.
    """
    parts: List[str] = []
    _write_markup(node, parts)
    return "".join(parts)


def _write_markup(node: Node, parts: List[str]) -> None:
    def write_element(element: Element) -> None:
        data = element.data
        parts.append(f"<{data.tag_name}{_format_attributes(data.attributes)}>")
        for child in node.children:
            _write_markup(child, parts)
        parts.append(f"</{data.tag_name}>")

    match_node(
        node,
        on_text=lambda text: parts.append(text.content),
        on_element=write_element,
        on_comment=lambda comment: parts.append(f"<!--{comment.content}-->"),
    )


def pretty_print(node: Node, indent: int = 2) -> str:
    """Render an indented, one-node-per-line dump of the tree."""
    lines: List[str] = []
    stack = [(node, 0)]
    while stack:
        current, level = stack.pop()
        prefix = " " * (indent * level)
        variant = current.node_type
        if isinstance(variant, Element):
            data = variant.data
            lines.append(f"{prefix}<{data.tag_name}{_format_attributes(data.attributes)}>")
        elif isinstance(variant, Text):
            lines.append(f"{prefix}{variant.content!r}")
        elif isinstance(variant, Comment):
            lines.append(f"{prefix}<!--{variant.content}-->")
        else:
            raise TypeError(f"Unknown node variant: {type(variant).__name__}")
        stack.extend((child, level + 1) for child in reversed(current.children))
    return "\n".join(lines)


def to_dict(node: Node) -> Dict[str, Any]:
    """Convert ``node`` and its subtree to plain dictionaries."""
    result: Dict[str, Any] = match_node(
        node,
        on_text=lambda text: {"type": "text", "content": text.content},
        on_element=lambda element: {
            "type": "element",
            "tag": element.data.tag_name,
            "attributes": dict(element.data.attributes),
        },
        on_comment=lambda comment: {"type": "comment", "content": comment.content},
    )
    if node.children:
        result["children"] = [to_dict(child) for child in node.children]
    return result
