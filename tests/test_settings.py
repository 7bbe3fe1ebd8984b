"""Configuration, logging and selector compilation."""

import io
import logging

import pytest

from domwrap import DESCENDANT, SELF, Document, compile_selector, config, logging_helper


def test_defaults(reset_config):
    for name in ('DOMWRAP_DEBUG', 'DOMWRAP_LOG_LEVEL', 'DOMWRAP_HUGE_TREE'):
        reset_config.delenv(name, raising=False)

    settings = config.reload()
    assert settings == {'debug': 0, 'log_level': 'WARNING', 'huge_tree': False}
    assert not config.is_debug_mode()


def test_environment_overrides(reset_config):
    reset_config.setenv('DOMWRAP_DEBUG', '1')
    reset_config.setenv('DOMWRAP_LOG_LEVEL', 'info')
    reset_config.setenv('DOMWRAP_HUGE_TREE', '1')

    settings = config.reload()
    assert settings == {'debug': 1, 'log_level': 'INFO', 'huge_tree': True}
    assert config.is_debug_mode()


def test_bad_integer_falls_back(reset_config):
    reset_config.setenv('DOMWRAP_DEBUG', 'yes')
    assert config.reload()['debug'] == 0


@pytest.mark.parametrize('name, expected', [
    ('TRACE', 5),
    ('debug', logging.DEBUG),
    ('WARN', logging.WARNING),
    ('FATAL', logging.CRITICAL),
    ('nonsense', logging.WARNING),
    (15, 15),
])
def test_resolve_level(name, expected):
    assert logging_helper.resolve_level(name) == expected


def test_resolve_level_follows_debug_switch(reset_config):
    reset_config.setenv('DOMWRAP_DEBUG', '1')
    config.reload()
    assert logging_helper.resolve_level(None) == logging.DEBUG


def test_get_logger_names():
    assert logging_helper.get_logger().name == 'domwrap'
    assert logging_helper.get_logger('domwrap.node').name == 'domwrap.node'
    assert logging_helper.get_logger('custom').name == 'domwrap.custom'


def test_operations_are_logged(captured_log):
    doc = Document.from_string('<r><a/><a/></r>')
    doc.filter('a').remove()

    output = captured_log.getvalue()
    assert '|DEBUG|domwrap.document|Loaded XML document' in output
    assert '|DEBUG|domwrap.node_list|Removed 2 of 2 nodes' in output
    assert '|TRACE|domwrap.xpath|Compiled selector' in output


def test_init_logger_replaces_handler(captured_log):
    py_logger = logging_helper.init_logger(level='INFO', stream=captured_log)
    ours = [h for h in py_logger.handlers if isinstance(h, logging.StreamHandler)]
    assert len(ours) == 1
    assert py_logger.level == logging.INFO


def test_init_logger_keeps_handlers_per_category(captured_log):
    extra = logging_helper.init_logger('domwrap.extra', level='INFO', stream=io.StringIO())
    extra_handler = logging_helper.HANDLERS['domwrap.extra']
    try:
        py_logger = logging_helper.init_logger(level='TRACE', stream=captured_log)
        ours = [h for h in py_logger.handlers if isinstance(h, logging.StreamHandler)]
        assert len(ours) == 1
        assert extra_handler in extra.handlers
    finally:
        logging_helper.cleanup_logger('domwrap.extra')
        extra.setLevel(logging.NOTSET)

    assert extra_handler not in extra.handlers
    assert 'domwrap.extra' not in logging_helper.HANDLERS


def test_compile_selector_prefixes():
    assert compile_selector('li', DESCENDANT) == 'descendant::li'
    assert compile_selector('li', SELF) == 'self::li'
    assert compile_selector('a, b', SELF) == 'self::a | self::b'
