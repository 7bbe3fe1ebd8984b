#!/usr/bin/env python3
"""
errors.py - Exception hierarchy for domwrap

Selector errors come straight from cssselect and are re-exported here so
callers can catch everything from one module.
"""

from cssselect import ExpressionError, SelectorError, SelectorSyntaxError

__all__ = [
    'DOMWrapException',
    'DetachedContextError',
    'XPathEvaluationError',
    'DocumentLoadError',
    'TopLevelNodeError',
    'SelectorError',
    'SelectorSyntaxError',
    'ExpressionError',
]


class DOMWrapException(Exception):
    """Base exception for domwrap operations"""
    pass


class DetachedContextError(DOMWrapException):
    """Selector or XPath query on a node that has no owning document"""
    pass


class XPathEvaluationError(DOMWrapException):
    """XPath expression rejected by lxml or not yielding a node-set"""

    def __init__(self, expression: str, reason: str):
        super().__init__(f"Invalid XPath expression '{expression}': {reason}")
        self.expression = expression
        self.reason = reason


class DocumentLoadError(DOMWrapException):
    """XML/HTML document could not be loaded"""
    pass


class TopLevelNodeError(DOMWrapException):
    """Removal of the root element or a comment / PI beside it"""
    pass
