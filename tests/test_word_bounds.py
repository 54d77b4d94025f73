from __future__ import annotations

from markupdiff import update_word_bounds
from markupdiff.word_bounds import is_word_delimiter


def _apply(diffs: list[tuple], sign: int) -> str:
    return ''.join(text for op, text in diffs if op in (0, sign))


def test_whole_words():
    diffs = [(0, 'E'), (-1, 'xperimental'), (1, 'stablished'), (0, ' design')]
    assert update_word_bounds(diffs) == [
        (-1, 'Experimental'), (1, 'Established'), (0, ' design')]


def test_accepts_lists():
    assert update_word_bounds([[0, 'E'], [-1, 'x'], [1, 'y']]) == [
        (-1, 'Ex'), (1, 'Ey')]


def test_merges_edits_inside_words():
    diffs = [
        (0, 'the Committee on '),
        (-1, 'Commer'), (1, 'Scien'),
        (0, 'ce, S'),
        (-1, 'cien'), (1, 'pa'),
        (0, 'ce, and T'),
        (-1, 'ransportation of the S'),
        (1, 'echnology of the House of Repres'),
        (0, 'en'), (1, 't'), (0, 'at'), (-1, 'e'), (1, 'ives'),
    ]
    result = update_word_bounds(diffs)
    assert result == [
        (0, 'the Committee on '),
        (-1, 'Commerce'), (1, 'Science'),
        (0, ', '),
        (-1, 'Science'), (1, 'Space'),
        (0, ', and '),
        (-1, 'Transportation of the Senate'),
        (1, 'Technology of the House of Representatives'),
    ]
    assert _apply(result, -1) == _apply(diffs, -1)
    assert _apply(result, 1) == _apply(diffs, 1)


def test_numbers_are_not_split():
    diffs = [(0, 'Price is 1,2'), (-1, '4'), (1, '5'), (0, '9,29'),
             (-1, '2'), (1, '8'), (0, '.0')]
    assert update_word_bounds(diffs) == [
        (0, 'Price is '), (-1, '1,249,292.0'), (1, '1,259,298.0')]


def test_lone_edit_inside_word():
    diffs = [(0, 'fundamental objective'), (1, 's'), (0, ' of NASA')]
    assert update_word_bounds(diffs) == [
        (0, 'fundamental '), (-1, 'objective'), (1, 'objectives'),
        (0, ' of NASA')]


def test_whole_word_edits_are_kept():
    diffs = [(0, '111 '), (1, '222 '), (0, '555')]
    assert update_word_bounds(diffs) == diffs
    diffs = [(0, 'foo '), (-1, 'bar'), (1, 'baz'), (0, ' qux')]
    assert update_word_bounds(diffs) == diffs


def test_input_is_not_modified():
    diffs = [(0, 'ab'), (-1, 'c'), (1, 'd'), (0, 'ef gh')]
    copy = list(diffs)
    assert update_word_bounds(diffs) == [
        (-1, 'abcef'), (1, 'abdef'), (0, ' gh')]
    assert diffs == copy


def test_word_delimiters():
    assert is_word_delimiter(' ')
    assert is_word_delimiter('—')
    assert is_word_delimiter('«')
    assert not is_word_delimiter('a')
    assert is_word_delimiter(',', '1', 'a')
    assert not is_word_delimiter(',', '1', '2')
    assert not is_word_delimiter('.', '28', '0')
    assert is_word_delimiter('.', '2a', '0')
