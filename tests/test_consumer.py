from __future__ import annotations

import pytest

from markupdiff import DiffConfig, ParsedModel, TokenType, parse, stringify


def _values(model: ParsedModel) -> list[str]:
    return [t.value for t in model.tokens]


def _space_offsets(model: ParsedModel) -> list[int]:
    return [t.offset for t in model.tokens if t.type is TokenType.SPACE]


def test_extracts_tags_and_content():
    xml = '<div>Lorem <span class="text"><em>ipsum</em>, dolor sit</span> amet.</div>'
    m = parse(xml)
    assert m.content == 'Lorem ipsum, dolor sit amet.'
    assert _values(m) == ['<div>', '<span class="text">', '<em>', '</em>',
                          '</span>', '</div>']
    assert stringify(m) == xml


@pytest.mark.parametrize('xml, tokens, offsets', [
    ('<a><b> \t foo\n bar</b></a>',
     ['<a>', '<b>', ' \t ', '\n ', '</b>', '</a>'], [0, 1]),
    ('<a>\t\t<b>foo</b>\n\nbar</a>',
     ['<a>', '\t\t', '<b>', '</b>', '\n\n', '</a>'], [0, 1]),
    ('<a>  <b>  foo </b>bar  </a>',
     ['<a>', '  ', '<b>', '  ', '</b>', '  ', '</a>'], [0, 0, 0]),
    ('<a>  <b>  foo </b> bar  </a>',
     ['<a>', '  ', '<b>', '  ', '</b>', ' ', '  ', '</a>'], [0, 0, 0, 0]),
])
def test_normalizes_whitespace(xml, tokens, offsets):
    m = parse(xml)
    assert m.content == 'foo bar'
    assert _values(m) == tokens
    assert _space_offsets(m) == offsets
    assert stringify(m) == xml


def test_token_locations_are_content_positions():
    m = parse('<p>foo <b>bar</b></p>')
    assert [(t.value, t.location) for t in m.tokens] == [
        ('<p>', 0), ('<b>', 4), ('</b>', 7), ('</p>', 7)]


def test_locations_never_decrease():
    m = parse('<doc>\n  <p>one\n two</p>\n  <p> three </p>\n</doc>\n')
    locations = [t.location for t in m.tokens]
    assert locations == sorted(locations)
    assert not m.content.endswith(' ')
    assert stringify(m) == '<doc>\n  <p>one\n two</p>\n  <p> three </p>\n</doc>\n'


def test_trailing_plain_space_is_retracted():
    m = parse('<p>foo </p> ')
    assert m.content == 'foo'
    assert stringify(m) == '<p>foo </p> '


def test_without_normalization_content_is_raw_text():
    xml = '<a>  <b>foo\n</b> bar</a>'
    m = parse(xml, DiffConfig(normalize_space=False))
    assert m.content == '  foo\n bar'
    assert not [t for t in m.tokens if t.type is TokenType.SPACE]
    assert stringify(m) == xml


def test_block_elements_are_separated_in_word_patches_mode():
    xml = '<div>aaa</div><div>bbb</div>'
    m = parse(xml, DiffConfig(word_patches=True))
    assert m.content == 'aaa bbb'
    assert stringify(m) == xml

    m = parse(xml)
    assert m.content == 'aaabbb'


def test_inline_elements_are_not_separated():
    m = parse('<p><b>foo</b><i>bar</i></p>', DiffConfig(word_patches=True))
    assert m.content == 'foobar'


def test_block_separator_merges_with_following_whitespace():
    xml = '<p>aaa</p>\n  <p>bbb</p>'
    m = parse(xml, DiffConfig(word_patches=True))
    assert m.content == 'aaa bbb'
    spaces = [t for t in m.tokens if t.type is TokenType.SPACE]
    assert [(t.value, t.offset) for t in spaces] == [('\n  ', 1)]
    assert stringify(m) == xml


def test_comments_and_doctype_are_tokens():
    html = '<!DOCTYPE html><!-- note --><p>a</p>'
    m = parse(html)
    assert m.content == 'a'
    assert [t.type for t in m.tokens] == [
        TokenType.DOCTYPE, TokenType.COMMENT, TokenType.OPEN, TokenType.CLOSE]
    assert stringify(m) == html


def test_comments_stay_in_content_without_all_tokens():
    m = parse('<p>a<!--x-->b</p>', DiffConfig(all_tokens=False))
    assert m.content == 'a<!--x-->b'
    assert stringify(m) == '<p>a<!--x-->b</p>'


def test_base_range():
    text = 'xx<p>a  b</p>yy'
    m = parse(text, DiffConfig(base_start=2, base_end=13))
    assert m.content == 'a b'
    assert stringify(m) == '<p>a  b</p>'


def test_empty_document():
    m = parse('')
    assert m.content == ''
    assert m.tokens == []
    assert stringify(m) == ''


@pytest.mark.parametrize('xml', [
    '<p>a</b>c</p>',
    '<ul><li>a<li>b</ul>',
    '<p>unclosed <b>bold',
    '<a title="x>y">t</a>',
    '<r>\r\n <x/> \r\n</r>',
])
def test_round_trip_of_irregular_markup(xml):
    assert stringify(parse(xml)) == xml
