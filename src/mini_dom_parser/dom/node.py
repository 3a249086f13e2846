"""Immutable document tree produced by the markup parser.

A Node couples an ordered tuple of children with exactly one of three
variants: Text, Element or Comment. Nodes are frozen once built and a parent
exclusively owns its children; there are no back-references.

Key Components:
    Node: A tree vertex with children and a NodeType variant
    Text, Element, Comment: The closed set of NodeType variants
    ElementData: Tag name and attribute mapping of an element
    make_text, make_element, make_comment: The node constructors
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

AttrMap = Mapping[str, str]


@dataclass(frozen=True)
class ElementData:
    """Tag name and attributes of a markup element."""

    tag_name: str
    attributes: AttrMap = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Freeze a private copy so callers cannot mutate the tree through it
        object.__setattr__(
            self, "attributes", MappingProxyType(dict(self.attributes))
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ElementData):
            return NotImplemented
        return (
            self.tag_name == other.tag_name
            and dict(self.attributes) == dict(other.attributes)
        )

    def __hash__(self) -> int:
        return hash((self.tag_name, frozenset(self.attributes.items())))

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Get attribute value with optional default."""
        return self.attributes.get(name, default)

    @property
    def id(self) -> Optional[str]:
        return self.attributes.get("id")

    @property
    def classes(self) -> List[str]:
        """Whitespace-separated values of the ``class`` attribute."""
        return self.attributes.get("class", "").split()


@dataclass(frozen=True)
class Text:
    """A run of character data."""

    content: str


@dataclass(frozen=True)
class Element:
    """A markup element."""

    data: ElementData


@dataclass(frozen=True)
class Comment:
    """The raw body of a comment, between its delimiters."""

    content: str


NodeType = Union[Text, Element, Comment]


@dataclass(frozen=True)
class Node:
    """A single vertex of the document tree."""

    node_type: NodeType
    children: Tuple["Node", ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.node_type, (Text, Element, Comment)):
            raise TypeError(
                f"node_type must be Text, Element or Comment, got {type(self.node_type).__name__}"
            )
        if not isinstance(self.children, tuple):
            object.__setattr__(self, "children", tuple(self.children))

    @property
    def is_text(self) -> bool:
        return isinstance(self.node_type, Text)

    @property
    def is_element(self) -> bool:
        return isinstance(self.node_type, Element)

    @property
    def is_comment(self) -> bool:
        return isinstance(self.node_type, Comment)

    @property
    def tag_name(self) -> Optional[str]:
        """Tag name for element nodes, None otherwise."""
        if isinstance(self.node_type, Element):
            return self.node_type.data.tag_name
        return None

    @property
    def attributes(self) -> AttrMap:
        """Attribute mapping for element nodes, empty otherwise."""
        if isinstance(self.node_type, Element):
            return self.node_type.data.attributes
        return MappingProxyType({})

    @property
    def content(self) -> Optional[str]:
        """Character data of text and comment nodes, None for elements."""
        if isinstance(self.node_type, (Text, Comment)):
            return self.node_type.content
        return None

    def iter(self) -> Iterator["Node"]:
        """Iterate over this node and all descendants in document order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    @property
    def text_content(self) -> str:
        """Concatenation of all Text descendants, in document order."""
        return "".join(
            node.node_type.content for node in self.iter()
            if isinstance(node.node_type, Text)
        )

    def find(self, tag: str) -> Optional["Node"]:
        """Find first descendant element with matching tag name."""
        for node in self.iter():
            if node is not self and node.tag_name == tag:
                return node
        return None

    def find_all(self, tag: str) -> List["Node"]:
        """Find all descendant elements with matching tag name."""
        return [
            node for node in self.iter()
            if node is not self and node.tag_name == tag
        ]

    def get_element_by_id(self, id_value: str) -> Optional["Node"]:
        """Find the first element, this one included, whose ``id`` matches."""
        for node in self.iter():
            if node.is_element and node.attributes.get("id") == id_value:
                return node
        return None

    @property
    def depth(self) -> int:
        """Height of the subtree rooted here; a leaf has depth 0."""
        # Iterative so deep trees do not hit the recursion limit
        deepest = 0
        stack = [(self, 0)]
        while stack:
            node, level = stack.pop()
            deepest = max(deepest, level)
            stack.extend((child, level + 1) for child in node.children)
        return deepest

    def count(self) -> Dict[str, int]:
        """Count nodes of each variant in this subtree."""
        counts = {"text": 0, "element": 0, "comment": 0}
        for node in self.iter():
            counts[match_node(
                node,
                on_text=lambda _: "text",
                on_element=lambda _: "element",
                on_comment=lambda _: "comment",
            )] += 1
        return counts


def match_node(
    node: Node,
    on_text: Callable[[Text], Any],
    on_element: Callable[[Element], Any],
    on_comment: Callable[[Comment], Any],
) -> Any:
    """Dispatch on the variant of ``node``; every variant must be handled."""
    variant = node.node_type
    if isinstance(variant, Text):
        return on_text(variant)
    if isinstance(variant, Element):
        return on_element(variant)
    if isinstance(variant, Comment):
        return on_comment(variant)
    raise TypeError(f"Unknown node variant: {type(variant).__name__}")


def make_text(data: str) -> Node:
    """Create a text node."""
    return Node(Text(data))


def make_element(tag_name: str, attributes: AttrMap, children: Iterable[Node]) -> Node:
    """Create an element node owning ``children``."""
    return Node(Element(ElementData(tag_name, attributes)), tuple(children))


def make_comment(data: str) -> Node:
    """Create a comment node."""
    return Node(Comment(data))
