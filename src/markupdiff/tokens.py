# -*- coding: utf-8 -*-
"""
Token model shared by the parser, the slicer and the differ.

A parsed document is the pair ``(tokens, content)``: `content` is the text of
the document with every markup construct removed, and each token records the
raw markup and the position in `content` where it was found. Rendering the
tokens back into the content gives the original document.
"""
import enum


class TokenType(enum.Enum):
    OPEN = 'open'
    CLOSE = 'close'
    SELF_CLOSE = 'self-close'
    COMMENT = 'comment'
    CDATA = 'cdata'
    PROCESSING_INSTRUCTION = 'processing-instruction'
    DOCTYPE = 'doctype'
    # produced by the consumer and the differ, never by the scanner
    SPACE = 'space'
    INSERT = 'insert'
    DELETE = 'delete'
    DIFF = 'diff'
    CUSTOM = 'custom'


TAG_TYPES = frozenset([TokenType.OPEN, TokenType.CLOSE, TokenType.SELF_CLOSE])


class Token(object):
    """
    A piece of raw markup anchored at `location` in the document content.

    `offset` is the number of content characters this token stands for
    (only whitespace tokens use it: a normalized run ``'\\n  '`` renders its
    raw value and replaces the single ``' '`` it left in the content).
    `text` keeps the unmarked fragment on diff tokens.
    """

    __slots__ = ('name', 'type', 'location', 'value', 'offset', 'text')

    def __init__(self, name, type, location, value, offset=None, text=None):
        self.name = name
        self.type = type
        self.location = location
        self.value = value
        self.offset = offset
        self.text = text

    def __repr__(self):
        extra = ''
        if self.offset:
            extra = ', offset=%d' % self.offset
        return 'Token(%r, %s, %d, %r%s)' % (self.name, self.type.name,
                                           self.location, self.value, extra)

    def copy(self, **changes):
        token = Token(self.name, self.type, self.location, self.value,
                      self.offset, self.text)
        for key, value in changes.items():
            setattr(token, key, value)
        return token


class ParsedModel(object):

    def __init__(self, tokens, content):
        self.tokens = tokens
        self.content = content

    def __repr__(self):
        return '<%s %d tokens, %r>' % (type(self).__name__, len(self.tokens),
                                       self.content[:40])

    def render(self):
        return stringify(self)


class DiffModel(ParsedModel):
    """Result of a diff: the marked document plus a similarity in [0, 1]."""

    def __init__(self, tokens, content, similarity=1.0):
        ParsedModel.__init__(self, tokens, content)
        self.similarity = similarity


def stringify(model):
    """
    Render a model back to markup by splicing each token value into the
    content at its location.

    >>> stringify(ParsedModel([Token('b', TokenType.OPEN, 0, '<b>'),
    ...                        Token('b', TokenType.CLOSE, 3, '</b>')], 'foo!'))
    '<b>foo</b>!'
    """
    content = model.content
    parts = []
    offset = 0
    for token in model.tokens:
        if token.location > offset:
            parts.append(content[offset:token.location])
        parts.append(token.value)
        offset = max(offset, token.location + (token.offset or 0))
    parts.append(content[offset:])
    return u''.join(parts)
