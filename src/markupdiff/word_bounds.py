# -*- coding: utf-8 -*-
"""
Widening of character diff operations to whole words.

The char diff engine happily splits a word: ``Experimental`` against
``Established`` gives ``E`` unchanged plus ``xperimental`` replaced with
``stablished``. :func:`update_word_bounds` moves the edges of such edits out
to the nearest word delimiters::

    >>> update_word_bounds([(0, u'E'), (-1, u'xperimental'),
    ...                     (1, u'stablished'), (0, u' design')])
    [(-1, 'Experimental'), (1, 'Established'), (0, ' design')]
"""
from .config import NUMERIC_SEPARATORS, WORD_DELIMITERS

DIFF_DELETE = -1
DIFF_INSERT = 1
DIFF_EQUAL = 0


def _all_digits(chars):
    return bool(chars) and all(ch.isdigit() for ch in chars)


def is_word_delimiter(ch, before=u'', after=u''):
    """
    True if `ch` ends a word. `before` and `after` hold the neighbour
    characters (one per alternative text); a ``.`` or ``,`` between digits
    is part of a number.
    """
    if ch not in WORD_DELIMITERS:
        return False
    if ch in NUMERIC_SEPARATORS and _all_digits(before) and _all_digits(after):
        return False
    return True


def _heads(*texts):
    return u''.join(t[0] for t in texts if t)


def _tails(*texts):
    return u''.join(t[-1] for t in texts if t)


def _start_inside_word(prefix, deleted, inserted):
    """The edit starts between two word characters."""
    if not prefix:
        return False
    before = prefix[-2] if len(prefix) > 1 else u''
    if is_word_delimiter(prefix[-1], before, _heads(deleted, inserted)):
        return False
    for text in (deleted, inserted):
        if text:
            after = text[1] if len(text) > 1 else u''
            if not is_word_delimiter(text[0], prefix[-1], after):
                return True
    return False


def _end_inside_word(deleted, inserted, suffix, following=u''):
    """The edit ends between two word characters."""
    if not suffix:
        return False
    after = suffix[1] if len(suffix) > 1 else following[:1]
    if is_word_delimiter(suffix[0], _tails(deleted, inserted), after):
        return False
    for text in (deleted, inserted):
        if text:
            before = text[-2] if len(text) > 1 else u''
            if not is_word_delimiter(text[-1], before, suffix[0]):
                return True
    return False


def find_start_bound(prefix, deleted, inserted):
    """
    Index in `prefix` where the word touching its end starts.
    """
    heads = _heads(deleted, inserted)
    i = len(prefix) - 1
    while i >= 0:
        before = prefix[i - 1] if i > 0 else u''
        after = prefix[i + 1] if i + 1 < len(prefix) else heads
        if is_word_delimiter(prefix[i], before, after):
            break
        i -= 1
    return i + 1


def find_word_bound(text, deleted=u'', inserted=u'', following=u''):
    """
    Index of the first word delimiter in `text`, or -1. `deleted` and
    `inserted` are the edits `text` follows.
    """
    tails = _tails(deleted, inserted)
    for i, ch in enumerate(text):
        before = text[i - 1] if i > 0 else tails
        after = text[i + 1] if i + 1 < len(text) else following[:1]
        if is_word_delimiter(ch, before, after):
            return i
    return -1


def update_word_bounds(diffs):
    """
    Return a copy of `diffs` where every edit that starts or ends inside a
    word is widened to the word bounds. Consecutive edits merged by the
    widening become a single delete/insert pair.
    """
    diffs = [(op, text) for op, text in diffs]
    result = []
    i = 0
    while i < len(diffs):
        op, text = diffs[i]
        if op == DIFF_EQUAL:
            if text:
                result.append((op, text))
            i += 1
            continue

        deleted = []
        inserted = []
        j = i
        while j < len(diffs) and diffs[j][0] != DIFF_EQUAL:
            if diffs[j][0] == DIFF_DELETE:
                deleted.append(diffs[j][1])
            else:
                inserted.append(diffs[j][1])
            j += 1
        deleted = u''.join(deleted)
        inserted = u''.join(inserted)

        prefix = result[-1][1] if result and result[-1][0] == DIFF_EQUAL else u''
        suffix = diffs[j][1] if j < len(diffs) else u''
        following = diffs[j + 1][1] if j + 1 < len(diffs) else u''
        starts_inside = _start_inside_word(prefix, deleted, inserted)
        ends_inside = _end_inside_word(deleted, inserted, suffix, following)

        if not (deleted and inserted) and not (starts_inside or ends_inside):
            # a whole word added or removed
            result.extend(diffs[i:j])
            i = j
            continue

        if starts_inside:
            bound = find_start_bound(prefix, deleted, inserted)
            moved = prefix[bound:]
            deleted = moved + deleted
            inserted = moved + inserted
            result.pop()
            if bound:
                result.append((DIFF_EQUAL, prefix[:bound]))

        # absorb the rest of the word, with any edits inside it
        while j < len(diffs):
            op, text = diffs[j]
            if op == DIFF_DELETE:
                deleted += text
            elif op == DIFF_INSERT:
                inserted += text
            else:
                following = diffs[j + 1][1] if j + 1 < len(diffs) else u''
                if not _end_inside_word(deleted, inserted, text, following):
                    break
                bound = find_word_bound(text, deleted, inserted, following)
                if bound == -1:
                    deleted += text
                    inserted += text
                else:
                    deleted += text[:bound]
                    inserted += text[:bound]
                    diffs[j] = (op, text[bound:])
                    break
            j += 1

        if deleted:
            result.append((DIFF_DELETE, deleted))
        if inserted:
            result.append((DIFF_INSERT, inserted))
        i = j
    return result
