# -*- coding: utf-8 -*-
"""
Builds a :class:`ParsedModel` out of the constructs reported by the scanner.

Text between constructs goes to the content. With `normalize_space` every
whitespace run is collapsed to a single space in the content and the raw run
is kept as a ``SPACE`` token, so rendering the tokens gives back the exact
source::

    >>> model = parse(u'<a><b> \\t foo\\n bar</b></a>')
    >>> model.content
    'foo bar'
    >>> model.render() == u'<a><b> \\t foo\\n bar</b></a>'
    True
"""
import logging

from .config import DiffConfig, _space_re, make_config
from .scanner import scan
from .tokens import ParsedModel, Token, TokenType

log = logging.getLogger(__name__)

SPACE_NAME = u'#space'


class MarkupConsumer(object):

    def __init__(self, text, config=None):
        self.text = text
        self.config = config or DiffConfig()
        self.tokens = []
        self.content = []
        self._length = 0
        self._cursor = self.config.base_start or 0
        self._has_content = False

    # -- content -------------------------------------------------------

    def _append_content(self, text):
        if text:
            self.content.append(text)
            self._length += len(text)

    def _last_char(self):
        for chunk in reversed(self.content):
            if chunk:
                return chunk[-1]
        return u''

    def _add_token(self, name, type, value, offset=None):
        token = Token(name, type, self._length, value, offset)
        self.tokens.append(token)
        return token

    def _flush(self, end):
        fragment = self.text[self._cursor:end]
        self._cursor = end
        if not fragment:
            return
        if self.config.normalize_space:
            self._normalize(fragment)
        else:
            self._append_content(fragment)

    def _normalize(self, fragment):
        prev = 0
        found_space = False
        for m in _space_re.finditer(fragment):
            found_space = True
            if m.start() > prev:
                self._has_content = True
            run = m.group()
            if run != u' ' or (m.start() == 0 and not self._has_content):
                self._append_content(fragment[prev:m.start()])
                last = self.tokens[-1] if self.tokens else None
                if (m.start() == 0 and last is not None
                        and last.type is TokenType.SPACE and last.value == u''
                        and last.location + (last.offset or 0) == self._length):
                    # a block separator already stands for this run
                    last.value = run
                elif self._has_content:
                    self._add_token(SPACE_NAME, TokenType.SPACE, run, 1)
                    self._append_content(u' ')
                else:
                    self._add_token(SPACE_NAME, TokenType.SPACE, run, 0)
                prev = m.end()
                self._has_content = prev < len(fragment)
            else:
                self._has_content = m.end() < len(fragment)
        if fragment and not found_space:
            self._has_content = True
        self._append_content(fragment[prev:])

    # -- scanner callback ------------------------------------------------

    def consume(self, name, type, start, end):
        self._flush(start)
        self._add_token(name, type, self.text[start:end])
        self._cursor = end
        config = self.config
        if (config.word_patches and config.normalize_space
                and type in (TokenType.CLOSE, TokenType.SELF_CLOSE)
                and not config.is_inline(name)
                and self._length and self._last_char() != u' '):
            # separate the words of adjacent blocks: <p>a</p><p>b</p>
            self._add_token(SPACE_NAME, TokenType.SPACE, u'', 1)
            self._append_content(u' ')
            self._has_content = False

    def finalize(self, end=None):
        if end is None:
            end = len(self.text)
        self._flush(end)
        content = u''.join(self.content)
        if self.config.normalize_space and content.endswith(u' '):
            self._retract_trailing_space(len(content) - 1)
            content = content[:-1]
        return ParsedModel(self.tokens, content)

    def _retract_trailing_space(self, location):
        # the content never ends with a space: the raw run, if any, is
        # rendered by its token
        owner = None
        index = len(self.tokens)
        for i, token in enumerate(self.tokens):
            if token.location > location:
                if index == len(self.tokens):
                    index = i
                token.location -= 1
            elif (token.location == location and owner is None
                    and token.type is TokenType.SPACE and token.offset):
                owner = token
        if owner is not None:
            owner.offset = 0
            if owner.value == u'':
                self.tokens.remove(owner)
            return
        self.tokens.insert(index, Token(SPACE_NAME, TokenType.SPACE,
                                        location, u' ', 0))


def parse(text, config=None):
    """Parse `text` into a :class:`ParsedModel`."""
    config = make_config(config)
    consumer = MarkupConsumer(text, config)
    end = config.base_end
    scan(text, consumer.consume, config, config.base_start or 0, end)
    model = consumer.finalize(end)
    log.debug('parsed %d tokens, %d content chars', len(model.tokens),
              len(model.content))
    return model
