"""
domwrap - Chainable traversal, filtering and mutation over lxml trees

    >>> doc = Document.from_string('<ul><li>a</li><li class="x">b</li></ul>')
    >>> doc.filter('li.x').first().previous().text()
    'a'
"""

from domwrap.document import Document
from domwrap.errors import (
    DetachedContextError,
    DocumentLoadError,
    DOMWrapException,
    ExpressionError,
    SelectorError,
    SelectorSyntaxError,
    TopLevelNodeError,
    XPathEvaluationError,
)
from domwrap.logging_helper import get_logger, init_logger
from domwrap.node import Node
from domwrap.node_list import NodeList
from domwrap.text import TextFlag
from domwrap.tree import NodeType
from domwrap.xpath import DESCENDANT, DESCENDANT_OR_SELF, SELF, compile_selector, evaluate

__version__ = "1.0.0"

__all__ = [
    'Document',
    'Node',
    'NodeList',
    'NodeType',
    'TextFlag',
    'compile_selector',
    'evaluate',
    'DESCENDANT',
    'DESCENDANT_OR_SELF',
    'SELF',
    'DOMWrapException',
    'DetachedContextError',
    'DocumentLoadError',
    'TopLevelNodeError',
    'XPathEvaluationError',
    'SelectorError',
    'SelectorSyntaxError',
    'ExpressionError',
    'get_logger',
    'init_logger',
]
