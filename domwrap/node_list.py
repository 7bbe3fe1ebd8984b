#!/usr/bin/env python3
"""
node_list.py - Ordered collection of Node objects

A NodeList is what every multi-result traversal returns. It does not own its
members; they belong to their tree. Every mutating operation first copies the
membership into a local list and works from that copy, so changes to the tree
made along the way cannot shift what is being iterated.
"""

from collections.abc import Iterable
from typing import Callable, List, Optional

from domwrap import tree
from domwrap.errors import TopLevelNodeError
from domwrap.logging_helper import get_logger, trace
from domwrap.text import TextFlag, normalize_text
from domwrap.xpath import DESCENDANT

logger = get_logger(__name__)


class NodeList:
    """
    Ordered, index-addressable set of nodes

    Accepts nothing, a single Node, or any iterable of Nodes. Order is kept
    as given.
    """

    __slots__ = ('_nodes',)

    def __init__(self, nodes=None):
        if nodes is None:
            self._nodes = []
        elif isinstance(nodes, Iterable):
            self._nodes = list(nodes)
        else:
            self._nodes = [nodes]

    # ========================================================================
    # CONTAINER PROTOCOL
    # ========================================================================

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self):
        return iter(tuple(self._nodes))

    def __getitem__(self, index):
        if isinstance(index, slice):
            return NodeList(self._nodes[index])
        return self._nodes[index]

    def __contains__(self, node) -> bool:
        return node in self._nodes

    def __bool__(self) -> bool:
        return bool(self._nodes)

    def __eq__(self, other) -> bool:
        if isinstance(other, NodeList):
            return self._nodes == other._nodes
        if isinstance(other, (list, tuple)):
            return self._nodes == list(other)
        return NotImplemented

    __hash__ = None

    def __repr__(self) -> str:
        return f"NodeList({self._nodes!r})"

    def count(self) -> int:
        """Number of members"""
        return len(self._nodes)

    def index(self, node) -> int:
        return self._nodes.index(node)

    def first(self):
        """First member or None"""
        return self._nodes[0] if self._nodes else None

    def last(self):
        """Last member or None"""
        return self._nodes[-1] if self._nodes else None

    def add(self, node) -> 'NodeList':
        """Append a node to this collection in place"""
        self._nodes.append(node)
        return self

    def extend(self, nodes) -> 'NodeList':
        """Append several nodes to this collection in place"""
        self._nodes.extend(NodeList(nodes)._nodes)
        return self

    def to_list(self) -> List:
        return list(self._nodes)

    # ========================================================================
    # COMBINATION
    # ========================================================================

    def merge(self, other) -> 'NodeList':
        """
        Union keyed by node identity

        Members of this list come first in their order, followed by members
        of other that are not already present, in other's order.
        """
        merged = NodeList(self._nodes)
        _add_unique(merged, set(self._nodes), other)
        return merged

    def reverse(self) -> 'NodeList':
        """New list with the order inverted, this list is left untouched"""
        return NodeList(reversed(self._nodes))

    # ========================================================================
    # SCOPED QUERIES
    # ========================================================================

    def filter(self, selector: str, prefix: str = DESCENDANT) -> 'NodeList':
        """Union of Node.filter over every member"""
        result = NodeList()
        seen = set()
        for node in self:
            _add_unique(result, seen, node.filter(selector, prefix))
        return result

    def filter_xpath(self, expression: str) -> 'NodeList':
        """Union of Node.filter_xpath over every member"""
        result = NodeList()
        seen = set()
        for node in self:
            _add_unique(result, seen, node.filter_xpath(expression))
        return result

    def is_(self, selector: str) -> bool:
        """True if any member itself matches selector"""
        return any(node.is_(selector) for node in self)

    def has(self, selector: str) -> bool:
        """True if any member contains a descendant matching selector"""
        return any(node.has(selector) for node in self)

    def children(self) -> 'NodeList':
        result = NodeList()
        seen = set()
        for node in self:
            _add_unique(result, seen, node.children())
        return result

    def parent(self) -> 'NodeList':
        """Distinct parents of the members, skipping members without one"""
        return self._collect(lambda node: node.parent())

    def next(self, node_type: Optional[tree.NodeType] = None) -> 'NodeList':
        return self._collect(lambda node: node.next(node_type))

    def previous(self, node_type: Optional[tree.NodeType] = None) -> 'NodeList':
        return self._collect(lambda node: node.previous(node_type))

    def text(self, flags: int = TextFlag.DEFAULT) -> str:
        """Text content of all members concatenated, then processed with flags"""
        return normalize_text(''.join(node.text_content for node in self), flags)

    def each(self, callback: Callable) -> 'NodeList':
        """Call callback(node) for every member"""
        for node in self:
            callback(node)
        return self

    def _collect(self, pick: Callable) -> 'NodeList':
        result = NodeList()
        seen = set()
        for node in self:
            found = pick(node)
            if found is not None and found not in seen:
                seen.add(found)
                result.add(found)
        return result

    # ========================================================================
    # BULK MUTATION
    # ========================================================================

    def _outermost(self) -> list:
        """Members in order, minus those with an ancestor in the list"""
        snapshot = list(self._nodes)
        elements = {node.element for node in snapshot}
        targets = []

        for node in snapshot:
            if any(ancestor in elements for ancestor in node.element.iterancestors()):
                trace(logger, "Skipping %r, handled with its ancestor", node)
                continue
            targets.append(node)
        return targets

    def remove(self) -> 'NodeList':
        """
        Detach every member from its tree and empty this list

        A member whose ancestor is also a member leaves the tree together
        with that ancestor and is not detached on its own. Members that are
        already detached are left alone.

        Raises:
            TopLevelNodeError: a member is the document root or a comment /
                PI beside it; lxml cannot unlink those, so nothing is removed
        """
        targets = self._outermost()
        for node in targets:
            parent = node.parent_node
            if parent is not None and parent.node_type is tree.NodeType.DOCUMENT:
                raise TopLevelNodeError(f"Cannot remove top-level node {node!r}")

        removed = 0
        for node in targets:
            if tree.detach(node.element):
                removed += 1

        total = len(self._nodes)
        self._nodes.clear()
        logger.debug("Removed %d of %d nodes", removed, total)
        return self

    def replace(self, new_node) -> 'NodeList':
        """
        Replace every member that has a parent with new_node

        A member whose ancestor is also a member goes away with that ancestor
        and is not replaced itself. The last replaced member receives
        new_node itself, the others receive deep copies. This list is emptied.

        Returns:
            NodeList of the nodes now in the tree in place of the members
        """
        targets = [node for node in self._outermost() if node.parent() is not None]
        inserted = NodeList()

        for position, target in enumerate(targets):
            replacement = new_node if position == len(targets) - 1 else new_node.clone()
            target.replace(replacement)
            inserted.add(replacement)

        self._nodes.clear()
        logger.debug("Replaced %d nodes", len(targets))
        return inserted

    def append(self, nodes) -> 'NodeList':
        """
        Append nodes under every member

        The last member receives the given nodes, the others receive deep
        copies, since a node cannot have two parents.
        """
        nodes = nodes if isinstance(nodes, NodeList) else NodeList(nodes)
        targets = list(self._nodes)

        for position, target in enumerate(targets):
            if position == len(targets) - 1:
                target.append(nodes)
            else:
                target.append(NodeList(node.clone() for node in nodes))

        return self


def _add_unique(result: NodeList, seen: set, nodes) -> None:
    """Add members of nodes to result unless their identity is in seen"""
    for node in NodeList(nodes):
        if node not in seen:
            seen.add(node)
            result.add(node)
