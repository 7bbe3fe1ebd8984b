#!/usr/bin/env python3
"""
node.py - Traversal, filtering and mutation for a single tree node

Node wraps one lxml node (element, comment, processing instruction or
entity) together with the Document it belongs to. Sibling and ancestor
walks, selector queries and single-node mutation are answered here; every
multi-result operation returns a fresh NodeList.
"""

import copy
from typing import List, Optional

from domwrap import tree
from domwrap.errors import DetachedContextError
from domwrap.logging_helper import get_logger
from domwrap.node_list import NodeList
from domwrap.text import TextFlag, normalize_text
from domwrap.tree import NodeType
from domwrap.xpath import DESCENDANT, SELF, compile_selector, evaluate

logger = get_logger(__name__)


class Node:
    """
    A position in an lxml tree

    Two Node objects are equal when they wrap the same lxml node.

    Args:
        element: lxml node to wrap
        document: Owning Document; selector and XPath queries need one
    """

    __slots__ = ('_element', '_document')

    def __init__(self, element, document=None):
        if element is None:
            raise ValueError("Node needs an lxml node to wrap")
        self._element = element
        self._document = document

    def _wrap(self, element) -> Optional['Node']:
        if element is None:
            return None
        return Node(element, self._document)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        return self._element is other._element

    def __hash__(self) -> int:
        return hash(self._element)

    def __repr__(self) -> str:
        return f"Node({self._element!r})"

    # ========================================================================
    # NODE CONTRACT
    # ========================================================================

    @property
    def element(self):
        """The wrapped lxml node"""
        return self._element

    @property
    def node_type(self) -> NodeType:
        return tree.node_type(self._element)

    @property
    def tag(self) -> Optional[str]:
        """Element tag, None for comments, processing instructions and entities"""
        if self.node_type is NodeType.ELEMENT:
            return self._element.tag
        return None

    @property
    def previous_sibling(self) -> Optional['Node']:
        return self._wrap(self._element.getprevious())

    @property
    def next_sibling(self) -> Optional['Node']:
        return self._wrap(self._element.getnext())

    @property
    def parent_node(self):
        """
        Parent Node, the owning Document for top-level nodes, or None when
        detached
        """
        parent = self._element.getparent()
        if parent is not None:
            return Node(parent, self._document)
        if self._document is not None and self._document.is_top_level(self._element):
            return self._document
        return None

    @property
    def child_nodes(self) -> List['Node']:
        return [Node(child, self._document) for child in self._element]

    @property
    def text_content(self) -> str:
        return tree.text_content(self._element)

    @property
    def owner_document(self):
        return self._document

    # ========================================================================
    # QUERIES
    # ========================================================================

    def document(self):
        """The owning Document"""
        return self._document

    def _require_document(self):
        if self._document is None:
            raise DetachedContextError(f"{self!r} has no owning document")
        return self._document

    def filter(self, selector: str, prefix: str = DESCENDANT) -> NodeList:
        """
        Find nodes matching a CSS selector relative to this node

        Args:
            selector: CSS selector
            prefix: "descendant::" to search below this node, "self::" to
                test this node only

        Returns:
            Matches in document order

        Raises:
            DetachedContextError: node has no owning document
            cssselect.SelectorError: selector cannot be compiled
        """
        document = self._require_document()
        expression = compile_selector(selector, prefix, html=document.is_html)
        return self.filter_xpath(expression)

    def filter_xpath(self, expression: str) -> NodeList:
        """
        Evaluate an XPath expression with this node as context

        Raises:
            DetachedContextError: node has no owning document
            XPathEvaluationError: invalid expression or non node-set result
        """
        document = self._require_document()
        found = evaluate(expression, self._element, document.namespaces)
        return NodeList(Node(element, document) for element in found)

    def is_(self, selector: str) -> bool:
        """True if this node itself matches selector"""
        return self.filter(selector, SELF).count() != 0

    def has(self, selector: str) -> bool:
        """True if a descendant of this node matches selector"""
        return self.filter(selector, DESCENDANT).count() != 0

    # ========================================================================
    # SIBLINGS AND ANCESTORS
    # ========================================================================

    def _siblings(self, preceding: bool, node_type: Optional[NodeType]):
        """
        Iterator over the siblings on one side, nearest first

        Raises:
            ValueError: node_type is not a NodeType or one of its values
        """
        if node_type is not None:
            node_type = NodeType(node_type)
        return (sibling for sibling in self._element.itersiblings(preceding=preceding)
                if node_type is None or tree.node_type(sibling) is node_type)

    def previous(self, node_type: Optional[NodeType] = None) -> Optional['Node']:
        """Nearest preceding sibling, optionally of the given type"""
        return self._wrap(next(self._siblings(True, node_type), None))

    def next(self, node_type: Optional[NodeType] = None) -> Optional['Node']:
        """Nearest following sibling, optionally of the given type"""
        return self._wrap(next(self._siblings(False, node_type), None))

    def previous_all(self, node_type: Optional[NodeType] = None) -> NodeList:
        """All preceding siblings in document order"""
        nodes = NodeList(self._wrap(sibling) for sibling in self._siblings(True, node_type))
        return nodes.reverse()

    def next_all(self, node_type: Optional[NodeType] = None) -> NodeList:
        """All following siblings in document order"""
        return NodeList(self._wrap(sibling) for sibling in self._siblings(False, node_type))

    def siblings(self, node_type: Optional[NodeType] = None) -> NodeList:
        """Every sibling except this node, in document order"""
        return self.previous_all(node_type).merge(self.next_all(node_type))

    def children(self) -> NodeList:
        """
        Snapshot of the direct children

        Later changes to the tree do not change the returned list, so it is
        safe to remove its members while iterating it.
        """
        return NodeList(self.child_nodes)

    def parent(self) -> Optional['Node']:
        """Parent element, None for the document root and detached nodes"""
        parent = self.parent_node
        if parent is None or parent.node_type is NodeType.DOCUMENT:
            return None
        return parent

    # ========================================================================
    # MUTATION
    # ========================================================================

    def remove(self, selector: Optional[str] = None) -> 'Node':
        """
        Detach this node, or the descendants matching selector, from the tree

        A node that is already detached is left as it is.

        Returns:
            self, still usable after removal

        Raises:
            TopLevelNodeError: the node to detach is the document root or a
                comment / PI beside it, which lxml keeps in the document
        """
        if selector is not None:
            nodes = self.filter(selector)
        else:
            nodes = NodeList(self)

        nodes.remove()
        return self

    def replace(self, new_node: 'Node') -> 'Node':
        """
        Put new_node at this node's position

        Does nothing when this node has no parent element.

        Returns:
            self, now detached
        """
        parent = self.parent()
        if parent is not None:
            tree.replace_child(parent.element, new_node.element, self._element)
        return self

    def append(self, nodes) -> 'Node':
        """
        Append a Node, NodeList or iterable of Nodes as last children

        Nodes that already have a parent are moved.
        """
        if not isinstance(nodes, NodeList):
            nodes = NodeList(nodes)

        for node in nodes:
            tree.append_child(self._element, node.element)
        return self

    def clone(self) -> 'Node':
        """Detached deep copy of this node bound to the same document"""
        duplicate = copy.deepcopy(self._element)
        duplicate.tail = None
        return Node(duplicate, self._document)

    def attr(self, name: str, value: Optional[str] = None):
        """
        Get an attribute, or set it when value is given

        Returns:
            Attribute value (None if missing) when reading, self when writing
        """
        if value is None:
            return self._element.get(name)
        self._element.set(name, value)
        return self

    # ========================================================================
    # TEXT
    # ========================================================================

    def text(self, flags: int = TextFlag.DEFAULT) -> str:
        """
        Text content of this node

        Args:
            flags: TextFlag.TRIM and/or TextFlag.NORMALIZE

        Returns:
            Raw text content, or the trimmed / whitespace-collapsed form
        """
        return normalize_text(self.text_content, flags)
