"""Document tree model for mini-dom-parser.

Key Components:
    Node: Immutable tree vertex holding children and a NodeType variant
    Text, Element, Comment: The three NodeType variants
    ElementData: Tag name and attribute mapping of an element
    make_text, make_element, make_comment: Node constructors
    to_markup, to_dict, pretty_print: Tree serialization helpers
"""

from .node import (
    AttrMap,
    Comment,
    Element,
    ElementData,
    Node,
    NodeType,
    Text,
    make_comment,
    make_element,
    make_text,
    match_node,
)
from .serialize import pretty_print, to_dict, to_markup

__all__ = [
    "AttrMap",
    "Comment",
    "Element",
    "ElementData",
    "Node",
    "NodeType",
    "Text",
    "make_comment",
    "make_element",
    "make_text",
    "match_node",
    "pretty_print",
    "to_dict",
    "to_markup",
]
