#!/usr/bin/env python3
"""
tree.py - Boundary to the lxml tree engine

Node type mapping, text content and the three mutation primitives used by
Node and NodeList. lxml stores character data as text/tail strings rather
than text nodes, so the primitives keep an element's tail where it was when
the element leaves its position. Surrounding character data stays put, the
way sibling text nodes do in a DOM.
"""

from enum import Enum

from lxml import etree

from domwrap.logging_helper import get_logger, trace

logger = get_logger(__name__)


class NodeType(Enum):
    """Discriminator for the node kinds lxml exposes"""
    ELEMENT = 'element'
    COMMENT = 'comment'
    PROCESSING_INSTRUCTION = 'processing_instruction'
    ENTITY = 'entity'
    DOCUMENT = 'document'


def node_type(element) -> NodeType:
    """Map an lxml node to its NodeType"""
    tag = element.tag
    if tag is etree.Comment:
        return NodeType.COMMENT
    if tag is etree.ProcessingInstruction:
        return NodeType.PROCESSING_INSTRUCTION
    if tag is etree.Entity:
        return NodeType.ENTITY
    return NodeType.ELEMENT


def text_content(element) -> str:
    """
    Return the DOM textContent of an lxml node

    Elements yield their XPath string-value (all descendant character data,
    comments and processing instructions excluded). Comments and processing
    instructions yield their own data.
    """
    if node_type(element) is NodeType.ELEMENT:
        return str(element.xpath('string()'))
    return element.text or ''


def is_ancestor_or_self(candidate, element) -> bool:
    """True if candidate is element or one of its ancestors"""
    if candidate is element:
        return True
    return any(ancestor is candidate for ancestor in element.iterancestors())


def _keep_tail(element) -> None:
    """Hand element's tail to the preceding sibling or to the parent text"""
    tail = element.tail
    element.tail = None
    if not tail:
        return

    previous = element.getprevious()
    if previous is not None:
        previous.tail = (previous.tail or '') + tail
    else:
        parent = element.getparent()
        parent.text = (parent.text or '') + tail


def detach(element) -> bool:
    """
    Remove element from its parent

    Args:
        element: lxml node

    Returns:
        True if the node was detached, False if it had no parent
    """
    parent = element.getparent()
    if parent is None:
        return False

    _keep_tail(element)
    parent.remove(element)
    trace(logger, "Detached %r from %r", element, parent)
    return True


def append_child(parent, child) -> None:
    """
    Append child as the last child of parent, moving it if already placed

    Raises:
        ValueError: child is parent or one of its ancestors
    """
    if is_ancestor_or_self(child, parent):
        raise ValueError(f"Cannot append {child!r} inside itself")

    detach(child)
    parent.append(child)
    trace(logger, "Appended %r to %r", child, parent)


def replace_child(parent, new_child, old_child) -> None:
    """
    Put new_child at old_child's position under parent

    old_child leaves the tree without its tail; new_child takes over that
    tail and, if it was placed elsewhere, is moved.

    Raises:
        ValueError: new_child is parent or one of its ancestors, or
            old_child is not a child of parent
    """
    if new_child is old_child:
        return
    if old_child.getparent() is not parent:
        raise ValueError(f"{old_child!r} is not a child of {parent!r}")
    if is_ancestor_or_self(new_child, parent):
        raise ValueError(f"Cannot place {new_child!r} inside itself")

    detach(new_child)
    new_child.tail = old_child.tail
    old_child.tail = None
    parent.replace(old_child, new_child)
    trace(logger, "Replaced %r with %r", old_child, new_child)
