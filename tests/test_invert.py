from __future__ import annotations

import pytest

from markupdiff import DiffConfig, diff, diff_documents, parse


@pytest.mark.parametrize("a, b, expected", [
    ("111 222 <em>333</em> 555", "111 555",
     "111 <del>222 <em>333</em> </del>555"),
    ("111 555", "111 222 <em>333</em> 555",
     "111 <ins>222 333 </ins>555"),
    ("<p>foo1 baz</p>", "<p>bar1 baz</p>",
     "<p><del>foo</del><ins>bar</ins>1 baz</p>"),
    ("<p>111</p>", "<p>111</p>", "<p>111</p>"),
])
def test_inverted_diff(a, b, expected):
    assert diff_documents(a, b, invert=True) == expected


def test_inverted_diff_keeps_preserved_tags():
    assert diff_documents("111 555", "111 222 <em>333</em> 555",
                          invert=True, preserve_tags=["em"]) == \
        "111 <ins>222 <em>333</em> </ins>555"


def test_natural_and_inverted_hosts():
    a, b = "111 555", "111 222 <em>333</em> 555"
    assert diff_documents(a, b) == "111 <ins>222 <em>333</em> </ins>555"
    model = diff(parse(a), parse(b), DiffConfig(invert=True))
    assert model.content == "111 555"


def test_inverted_replace():
    assert diff_documents("<p>foo1 baz</p>", "<p>bar1 baz</p>", invert=True,
                          replace_threshold=0.4) == \
        "<p><del>foo1 baz</del><ins>bar1 baz</ins></p>"


@pytest.mark.parametrize("a, b, expected", [
    ("<p>foo</p>", "<p>bar</p>", "<p><del>foo</del><ins>bar</ins></p>"),
    ("<p>foo</p><p>x</p>", "<p>bar</p><p>x</p>",
     "<p><del>foo</del><ins>bar</ins></p><p>x</p>"),
    ("<p><b>foo</b></p>", "<p><b>bar</b></p>",
     "<p><b><del>foo</del><ins>bar</ins></b></p>"),
])
def test_inverted_replacement_stays_in_its_element(a, b, expected):
    assert diff_documents(a, b, invert=True) == expected
    assert diff_documents(a, b) == expected


def test_inverted_delete_of_whole_element():
    assert diff_documents("<p>foo</p><p>x</p>", "<p>x</p>", invert=True) == \
        "<del><p>foo</p></del><p>x</p>"
