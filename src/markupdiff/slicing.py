# -*- coding: utf-8 -*-
"""
Extraction of content ranges out of a parsed document.

:func:`slice_model` cuts a range of the document keeping its markup, with
wrap marks placed so that wrapping every marked run in some tag keeps the
document well nested::

    >>> from markupdiff.consumer import parse
    >>> doc = parse(u'<div>aaa <a>foo <b>bar</b> baz</a> bbb</div>')
    >>> print(slice_model(doc, 2, 10).render('ins'))
    <ins>a </ins><a><ins>foo </ins><b><ins>ba</ins>

:func:`fragment` rebuilds a range as a standalone piece of markup, used to
show removed content inside the other document.
"""
from collections import namedtuple

from .config import DiffConfig
from .tokens import Token, TokenType
from .utils import get_element_stack, is_ignore_token, pop_element

OPEN = 1
CLOSE = -1

SliceMark = namedtuple('SliceMark', ['op', 'location'])


class SliceResult(object):
    """
    Extracted range: a list of content strings, source tokens and
    :class:`SliceMark` items, plus the half-open `range` of source token
    indexes it covers.
    """

    def __init__(self, tokens, range=None):
        self.tokens = tokens
        self.range = range

    def __repr__(self):
        return '<SliceResult %r %r>' % (self.range, self.render('_'))

    def __str__(self):
        return self.render()

    def render(self, tag=None):
        parts = []
        for item in self.tokens:
            if isinstance(item, SliceMark):
                if tag:
                    parts.append(_mark_value(item, tag))
            elif isinstance(item, Token):
                parts.append(item.value)
            else:
                parts.append(item)
        return u''.join(parts)

    def to_tokens(self, tag=None, type=TokenType.DIFF):
        """
        Source tokens of the slice with marks turned into `tag` tokens.
        Text is dropped: it stays in the content of the receiving model.
        """
        result = []
        for item in self.tokens:
            if isinstance(item, SliceMark):
                if tag:
                    result.append(Token(tag, type, item.location,
                                        _mark_value(item, tag)))
            elif isinstance(item, Token):
                result.append(item)
        return result

    def to_diff_token(self, tag, location, type=TokenType.DIFF, text=None):
        """The whole slice as a single token holding its rendered markup."""
        return Token(tag, type, location, self.render(tag), text=text)


def _mark_value(mark, tag):
    if mark.op == OPEN:
        return u'<%s>' % tag
    return u'</%s>' % tag


def find_token_start(tokens, position, hint=0):
    """
    Index of the first token at or after `position`. Closing tags exactly at
    `position` end something before the range and are skipped.
    """
    i = hint
    while i < len(tokens):
        token = tokens[i]
        if token.location == position and token.type in (
                TokenType.CLOSE, TokenType.SELF_CLOSE):
            i += 1
            continue
        if token.location >= position:
            break
        i += 1
    return i


def _slice_range(doc, start, end, hint=0, whole_elements=True):
    tokens = doc.tokens
    first = find_token_start(tokens, start, hint)
    stack = []
    i = first
    while i < len(tokens):
        token = tokens[i]
        if token.location > end:
            break
        if token.location == end:
            # an open tag on the edge would start an empty element and an
            # unmatched close belongs to the enclosing range
            if token.type is TokenType.OPEN:
                break
            if token.type is TokenType.CLOSE and (
                    not stack or stack[-1].name != token.name
                    or (not whole_elements and stack[-1].location == start)):
                break
        if token.type is TokenType.OPEN:
            stack.append(token)
        elif token.type is TokenType.CLOSE:
            pop_element(stack, token.name)
        i += 1
    last = i

    # elements opened right at the start and left open stay outside
    while first < last and stack:
        token = tokens[first]
        if (token.location == start and token.type is TokenType.OPEN
                and stack[0] is token):
            stack.pop(0)
            first += 1
        else:
            break

    while last > first:
        token = tokens[last - 1]
        if token.location == end and token.type in (
                TokenType.SELF_CLOSE, TokenType.SPACE):
            last -= 1
        else:
            break
    return first, last


def slice_model(doc, start, end, hint=0, whole_elements=True):
    """
    Slice content range ``[start, end)`` of `doc`, marking where wrap tags
    go. `hint` is the index of the first token that may be part of the
    slice, letting callers walk a document left to right.

    Without `whole_elements`, an element spanning exactly ``[start, end)``
    stays outside the slice and only its content is taken.
    """
    first, last = _slice_range(doc, start, end, hint, whole_elements)
    content = doc.content
    items = [SliceMark(OPEN, start)]
    stack = []
    offset = start

    for token in doc.tokens[first:last]:
        if token.location > offset:
            items.append(content[offset:token.location])
            offset = token.location
        if token.type is TokenType.OPEN:
            stack.append((token, len(items)))
            items.append(token)
        elif token.type is TokenType.CLOSE:
            for i in range(len(stack) - 1, -1, -1):
                if stack[i][0].name == token.name:
                    del stack[i:]
                    items.append(token)
                    break
            else:
                # close of an element opened before the slice
                items.append(SliceMark(CLOSE, token.location))
                items.append(token)
                items.append(SliceMark(OPEN, token.location))
        else:
            items.append(token)
            if token.type is TokenType.SPACE and token.offset:
                offset = max(offset, token.location + token.offset)

    if end > offset:
        items.append(content[offset:end])

    last_item = items[-1]
    if isinstance(last_item, SliceMark) and last_item.op == OPEN:
        items.pop()
    else:
        items.append(SliceMark(CLOSE, end))

    if stack:
        # elements left open: wrap tags close before them and reopen inside
        unclosed = dict((index, token) for token, index in stack)
        rebuilt = []
        for index, item in enumerate(items):
            if index in unclosed:
                rebuilt.append(SliceMark(CLOSE, item.location))
                rebuilt.append(item)
                rebuilt.append(SliceMark(OPEN, item.location))
            else:
                rebuilt.append(item)
        items = rebuilt

    return SliceResult(optimize(items), (first, last))


def _is_empty(item):
    if isinstance(item, SliceMark):
        return False
    if isinstance(item, Token):
        return not item.value
    return not item


def optimize(items):
    """
    Drop empty wraps: an open mark followed by a close mark with nothing
    rendered in between (zero-width block separators render nothing).
    """
    result = []
    i = 0
    while i < len(items):
        item = items[i]
        if isinstance(item, SliceMark) and item.op == OPEN:
            j = i + 1
            while j < len(items) and _is_empty(items[j]):
                j += 1
            following = items[j] if j < len(items) else None
            if isinstance(following, SliceMark) and following.op == CLOSE:
                result.extend(items[i + 1:j])
                i = j + 1
                continue
        result.append(item)
        i += 1
    return result


def fragment(doc, start, end, tags=None, receiver_stack=None, config=None):
    """
    Rebuild content range ``[start, end)`` of `doc` as standalone markup.

    Only tags listed in `tags` are kept; with no tags the fragment is plain
    text. Elements already open in `receiver_stack` (the elements open where
    the fragment will be placed) are not reopened.
    """
    config = config or DiffConfig()
    allowed = frozenset(name.lower() for name in (tags or ()))
    content = doc.content
    tokens = doc.tokens

    def is_allowed(token):
        return token.name.lower() in allowed

    initial, index = get_element_stack(tokens, start)
    first = index
    common = 0
    if receiver_stack:
        names = [t.name for t in receiver_stack]
        while (common < len(initial) and common < len(names)
               and initial[common].name == names[common]):
            common += 1

    parts = []
    # [token, emitted] pairs
    stack = []
    for i, token in enumerate(initial):
        emitted = i >= common and is_allowed(token)
        if emitted:
            parts.append(token.value)
        stack.append([token, emitted])

    offset = start
    while index < len(tokens):
        token = tokens[index]
        if token.location > end:
            break
        if token.location == end and not (
                token.type is TokenType.CLOSE and stack
                and stack[-1][0].name == token.name):
            break
        index += 1
        if token.location > offset:
            parts.append(content[offset:token.location])
            offset = token.location

        if token.type is TokenType.OPEN:
            emitted = is_allowed(token)
            if emitted:
                parts.append(token.value)
            stack.append([token, emitted])
        elif token.type is TokenType.CLOSE:
            match = None
            for i in range(len(stack) - 1, -1, -1):
                if stack[i][0].name == token.name:
                    match = i
                    break
            if match is None:
                continue
            inner = stack[match + 1:]
            matched = stack[match]
            del stack[match:]
            for inner_token, emitted in reversed(inner):
                if emitted:
                    parts.append(u'</%s>' % inner_token.name)
            if matched[1]:
                parts.append(token.value)
        elif token.type is TokenType.SELF_CLOSE:
            if is_allowed(token):
                parts.append(token.value)
        elif token.type is TokenType.SPACE:
            parts.append(token.value)
            if token.offset:
                offset = max(offset, token.location + token.offset)
        elif token.type is TokenType.COMMENT:
            if not is_ignore_token(token, config):
                parts.append(token.value)
        else:
            parts.append(token.value)

    if end > offset:
        parts.append(content[offset:end])

    for token, emitted in reversed(stack):
        if emitted:
            parts.append(u'</%s>' % token.name)

    return SliceResult([SliceMark(OPEN, start), u''.join(parts),
                        SliceMark(CLOSE, end)], (first, index))
