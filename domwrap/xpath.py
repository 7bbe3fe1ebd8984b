#!/usr/bin/env python3
"""
xpath.py - Selector compilation and XPath evaluation

CSS selectors are compiled to XPath 1.0 by cssselect and evaluated by lxml.
The context prefix decides what the selector is matched against:
"descendant::" matches below the context node, "self::" matches the context
node itself.

Dependencies: lxml, cssselect
"""

from typing import Dict, List, Optional

from cssselect import GenericTranslator, HTMLTranslator
from lxml import etree

from domwrap.errors import XPathEvaluationError
from domwrap.logging_helper import get_logger, trace

logger = get_logger(__name__)

DESCENDANT = 'descendant::'
DESCENDANT_OR_SELF = 'descendant-or-self::'
SELF = 'self::'

_TRANSLATORS = {
    False: GenericTranslator(),
    True: HTMLTranslator(),
}


def compile_selector(selector: str, prefix: str = DESCENDANT, html: bool = False) -> str:
    """
    Translate a CSS selector into an XPath expression

    Args:
        selector: CSS selector, e.g. "ul > li.item"
        prefix: XPath axis prefix applied to every selector in a group
        html: Use HTML rules (case-insensitive names, :checked, ...)

    Returns:
        XPath expression string

    Raises:
        cssselect.SelectorSyntaxError: malformed selector
        cssselect.ExpressionError: selector cannot be expressed in XPath
    """
    expression = _TRANSLATORS[bool(html)].css_to_xpath(selector, prefix=prefix)
    trace(logger, "Compiled selector %r with prefix %r -> %s", selector, prefix, expression)
    return expression


def evaluate(expression: str, context, namespaces: Optional[Dict[str, str]] = None) -> List:
    """
    Execute an XPath expression against an lxml node

    Args:
        expression: XPath 1.0 expression
        context: lxml node used as context node
        namespaces: Prefix to URI mapping for the expression

    Returns:
        Matching lxml nodes in document order. Attribute values and text
        strings in the node-set are skipped.

    Raises:
        XPathEvaluationError: invalid expression or a result that is not a node-set
    """
    try:
        result = context.xpath(expression, namespaces=namespaces)
    except etree.XPathError as e:
        raise XPathEvaluationError(expression, str(e)) from e

    if not isinstance(result, list):
        raise XPathEvaluationError(
            expression, f"expected a node-set, got {type(result).__name__}"
        )

    nodes = [item for item in result if isinstance(item, etree._Element)]
    if len(nodes) != len(result):
        logger.debug("Skipped %d non-node results of %s", len(result) - len(nodes), expression)

    trace(logger, "Evaluated %s -> %d nodes", expression, len(nodes))
    return nodes
