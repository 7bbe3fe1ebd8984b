#!/usr/bin/env python3
"""
document.py - Owning document context for Node objects

Provides loading from strings and files (XML or HTML), node creation and the
namespace prefixes used when evaluating XPath. Parsing and serialization are
left entirely to lxml.

Dependencies: lxml (pip install lxml)
"""

import os
from typing import Dict, Optional

from lxml import etree

from domwrap import config
from domwrap.errors import DocumentLoadError
from domwrap.logging_helper import get_logger
from domwrap.node import Node
from domwrap.node_list import NodeList
from domwrap.text import TextFlag
from domwrap.tree import NodeType
from domwrap.xpath import DESCENDANT_OR_SELF

logger = get_logger(__name__)


def _xml_parser(encoding: Optional[str] = None):
    return etree.XMLParser(encoding=encoding, huge_tree=config.HUGE_TREE)


def _html_parser():
    return etree.HTMLParser(huge_tree=config.HUGE_TREE)


def _root_namespaces(root) -> Dict[str, str]:
    """Prefixed namespaces declared on the root; XPath has no default namespace"""
    return {prefix: uri for prefix, uri in root.nsmap.items() if prefix}


class Document:
    """
    A loaded tree and the context needed to query it

    Args:
        source: lxml ElementTree or any lxml element of the tree
        namespaces: XPath prefix mapping, defaults to the prefixes declared
            on the root element
        html: Compile selectors with HTML rules
    """

    node_type = NodeType.DOCUMENT

    def __init__(self, source, namespaces: Optional[Dict[str, str]] = None, html: bool = False):
        if isinstance(source, etree._ElementTree):
            self._tree = source
        else:
            self._tree = source.getroottree()

        self.is_html = html
        if namespaces is None:
            namespaces = _root_namespaces(self._tree.getroot())
        self.namespaces = dict(namespaces)

    def __repr__(self) -> str:
        kind = 'html' if self.is_html else 'xml'
        return f"Document({kind}, root={self._tree.getroot().tag!r})"

    # ========================================================================
    # LOADING
    # ========================================================================

    @classmethod
    def from_string(cls, xml_string, namespaces: Optional[Dict[str, str]] = None) -> 'Document':
        """
        Parse an XML document from a string

        Raises:
            DocumentLoadError: empty input or XML syntax error
        """
        if not xml_string or not xml_string.strip():
            raise DocumentLoadError("Empty XML string provided")

        # Text is already decoded; its encoding declaration no longer applies
        encoding = None
        if isinstance(xml_string, str):
            xml_string = xml_string.encode('utf-8')
            encoding = 'utf-8'

        try:
            root = etree.fromstring(xml_string, _xml_parser(encoding))
        except etree.XMLSyntaxError as e:
            logger.debug("XML parsing failed", exc_info=config.is_debug_mode())
            raise DocumentLoadError(f"XML syntax error in string: {e}") from e

        logger.debug("Loaded XML document with root %r", root.tag)
        return cls(root, namespaces=namespaces)

    @classmethod
    def from_html(cls, html_string) -> 'Document':
        """
        Parse an HTML document from a string

        Raises:
            DocumentLoadError: empty input or nothing parseable
        """
        if not html_string or not html_string.strip():
            raise DocumentLoadError("Empty HTML string provided")

        try:
            root = etree.fromstring(html_string, _html_parser())
        except etree.XMLSyntaxError as e:
            raise DocumentLoadError(f"HTML parsing failed: {e}") from e

        if root is None:
            raise DocumentLoadError("HTML string contains no elements")

        logger.debug("Loaded HTML document with root %r", root.tag)
        return cls(root, html=True)

    @classmethod
    def from_file(cls, filename: str, html: bool = False,
                  namespaces: Optional[Dict[str, str]] = None) -> 'Document':
        """
        Parse an XML or HTML file

        Raises:
            DocumentLoadError: missing, unreadable or malformed file
        """
        if not os.path.exists(filename):
            raise DocumentLoadError(f"File not found: {filename}")

        if not os.access(filename, os.R_OK):
            raise DocumentLoadError(f"Cannot read file: {filename}")

        parser = _html_parser() if html else _xml_parser()
        try:
            parsed = etree.parse(filename, parser)
        except etree.XMLSyntaxError as e:
            logger.debug("Parsing %s failed", filename, exc_info=config.is_debug_mode())
            raise DocumentLoadError(f"Syntax error in {filename}: {e}") from e
        except OSError as e:
            raise DocumentLoadError(f"Cannot read file {filename}: {e}") from e

        if parsed.getroot() is None:
            raise DocumentLoadError(f"No elements in {filename}")

        logger.debug("Loaded %s", filename)
        return cls(parsed, namespaces=namespaces, html=html)

    # ========================================================================
    # TREE ACCESS
    # ========================================================================

    @property
    def tree(self):
        """The underlying lxml ElementTree"""
        return self._tree

    @property
    def root(self) -> Node:
        return Node(self._tree.getroot(), self)

    def wrap(self, element) -> Node:
        """Bind an lxml node to this document"""
        return Node(element, self)

    def is_top_level(self, element) -> bool:
        """True for the root element and the comments / PIs next to it"""
        root = self._tree.getroot()
        if element is root:
            return True
        if element.getparent() is not None:
            return False
        return any(sibling is element for sibling in root.itersiblings(preceding=True)) \
            or any(sibling is element for sibling in root.itersiblings())

    def children(self) -> NodeList:
        """Top-level nodes: the root element with surrounding comments and PIs"""
        root = self.root
        return root.previous_all().merge(NodeList(root)).merge(root.next_all())

    # ========================================================================
    # NODE CREATION
    # ========================================================================

    def create_element(self, tag: str, text: Optional[str] = None,
                       attrib: Optional[Dict[str, str]] = None) -> Node:
        """Create a detached element bound to this document"""
        element = etree.Element(tag, attrib or {})
        if text is not None:
            element.text = text
        return Node(element, self)

    def create_comment(self, text: str) -> Node:
        return Node(etree.Comment(text), self)

    def create_processing_instruction(self, target: str, text: Optional[str] = None) -> Node:
        return Node(etree.ProcessingInstruction(target, text), self)

    # ========================================================================
    # QUERIES
    # ========================================================================

    def filter(self, selector: str) -> NodeList:
        """Every node in the document matching selector, root included"""
        return self.root.filter(selector, DESCENDANT_OR_SELF)

    def filter_xpath(self, expression: str) -> NodeList:
        """Evaluate an XPath expression with the root element as context"""
        return self.root.filter_xpath(expression)

    def text(self, flags: int = TextFlag.DEFAULT) -> str:
        return self.root.text(flags)

    def to_string(self, pretty_print: bool = False) -> str:
        """Serialize the whole document"""
        method = 'html' if self.is_html else 'xml'
        return etree.tostring(self._tree, encoding='unicode', method=method,
                              pretty_print=pretty_print)
