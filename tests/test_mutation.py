"""Single-node remove, replace and append."""

import pytest

from domwrap import Document, NodeList, NodeType, TopLevelNodeError


def compact(xml):
    return Document.from_string(xml)


def test_remove_detaches_and_returns_self(doc, by_id):
    li = by_id('b')
    assert li.remove() is li

    assert li.parent() is None
    assert li.text() == 'two bold'
    assert [node.attr('id') for node in by_id('list').children() if node.node_type is NodeType.ELEMENT] == ['a', 'c', 'd']
    assert doc.filter('#b').count() == 0


def test_remove_keeps_surrounding_text():
    doc = compact('<p>x<b>1</b>y<i>2</i>z</p>')
    doc.filter('b').first().remove()
    assert doc.to_string() == '<p>xy<i>2</i>z</p>'

    doc.filter('i').first().remove()
    assert doc.to_string() == '<p>xyz</p>'


def test_remove_with_selector(by_id):
    ul = by_id('list')
    assert ul.remove('.item') is ul
    assert ul.filter('li').count() == 2
    assert ul.parent() is not None


def test_remove_detached_node_is_harmless(doc):
    node = doc.create_element('loose')
    assert node.remove() is node


def test_remove_top_level_comment_raises():
    doc = compact('<!--c--><r><a/></r>')
    comment = doc.children().first()
    assert comment.node_type is NodeType.COMMENT

    with pytest.raises(TopLevelNodeError):
        comment.remove()
    assert doc.children().count() == 2


def test_remove_root_raises(doc):
    with pytest.raises(TopLevelNodeError):
        doc.root.remove()
    assert doc.root.tag == 'root'


def test_remove_with_top_level_member_removes_nothing():
    doc = compact('<!--c--><r><a/></r>')
    a = doc.filter('a').first()

    with pytest.raises(TopLevelNodeError):
        NodeList([a, doc.children().first()]).remove()
    assert a.parent() == doc.root


def test_remove_while_iterating_children(by_id):
    ul = by_id('list')
    for child in ul.children():
        child.remove()
    assert ul.children().count() == 0


def test_replace_keeps_position_and_text():
    doc = compact('<p>x<b>1</b>y</p>')
    old = doc.filter('b').first()
    new = doc.create_element('i', '2')

    assert old.replace(new) is old
    assert doc.to_string() == '<p>x<i>2</i>y</p>'
    assert old.parent() is None
    assert new.parent() == doc.root


def test_replace_moves_existing_node():
    doc = compact('<r><a/>t<b/>u</r>')
    a = doc.filter('a').first()
    b = doc.filter('b').first()

    a.replace(b)
    assert doc.to_string() == '<r><b/>tu</r>'


def test_replace_without_parent_is_noop(doc, by_id):
    loose = doc.create_element('loose')
    li = by_id('a')

    assert loose.replace(li) is loose
    assert li.parent() == by_id('list')
    assert doc.root.replace(loose) is doc.root
    assert loose.parent() is None


def test_append_single_node(doc, by_id):
    ul = by_id('list')
    item = doc.create_element('li', 'five', {'id': 'e'})

    assert ul.append(item) is ul
    assert ul.children().last() == item
    assert item.parent() == ul


def test_append_moves_node():
    doc = compact('<r><a><x/></a><b/></r>')
    x = doc.filter('x').first()
    b = doc.filter('b').first()

    b.append(x)
    assert x.parent() == b
    assert doc.filter('a').first().children().count() == 0
    assert doc.to_string() == '<r><a/><b><x/></b></r>'


def test_append_keeps_given_order():
    doc = compact('<r><s/></r>')
    target = doc.filter('s').first()
    items = [doc.create_element(tag) for tag in ('one', 'two', 'three')]

    target.append(items)
    assert [child.tag for child in target.children()] == ['one', 'two', 'three']

    target.append(NodeList(reversed(items)))
    assert [child.tag for child in target.children()] == ['three', 'two', 'one']


def test_append_ancestor_into_descendant_fails():
    doc = compact('<r><a><b/></a></r>')
    a = doc.filter('a').first()
    b = doc.filter('b').first()

    with pytest.raises(ValueError):
        b.append(a)
    assert b.parent() == a
    assert a.parent() == doc.root


def test_clone_is_detached_copy(by_id):
    li = by_id('b')
    duplicate = li.clone()

    assert duplicate != li
    assert duplicate.parent() is None
    assert duplicate.text() == li.text()
    assert duplicate.document() is li.document()
    assert duplicate.element.tail is None


def test_attr_get_and_set(by_id):
    li = by_id('a')
    assert li.attr('id') == 'a'
    assert li.attr('missing') is None
    assert li.attr('data-x', '1') is li
    assert li.attr('data-x') == '1'
