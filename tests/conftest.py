"""Shared fixtures for the domwrap test suite."""

import io
import logging

import pytest

from domwrap import Document, config, logging_helper

SAMPLE_XML = """<?xml-stylesheet href="style.css"?><root>
  <!-- lead -->
  <ul id="list">
    <li id="a">one</li>
    <!-- note -->
    <li id="b" class="item">two <b>bold</b></li>
    <li id="c" class="item">three</li>
    <?marker data?>
    <li id="d">four</li>
  </ul>
  <p id="para">text <span class="item">inner</span></p>
</root>"""


@pytest.fixture
def doc():
    """Sample document with elements, comments and processing instructions"""
    return Document.from_string(SAMPLE_XML)


@pytest.fixture
def by_id(doc):
    """Look up an element of the sample document by its id attribute"""
    def find(node_id):
        return doc.filter(f'#{node_id}').first()
    return find


@pytest.fixture
def reset_config(monkeypatch):
    """Re-read settings from a clean environment after the test"""
    yield monkeypatch
    monkeypatch.undo()
    config.reload()


@pytest.fixture
def captured_log(reset_config):
    """Route the domwrap logger into a string buffer"""
    stream = io.StringIO()
    logging_helper.init_logger(level='TRACE', stream=stream)
    yield stream

    logging_helper.cleanup_logger()
    logging.getLogger(logging_helper.ROOT_CATEGORY).setLevel(logging.NOTSET)
