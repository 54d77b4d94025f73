# -*- coding: utf-8 -*-
"""
Clases principales para combinar dos documentos en un diff de markup.
"""
import logging

from .config import DiffConfig, make_config
from .consumer import parse
from .slicing import fragment, slice_model
from .text_differ import (
    DIFF_DELETE, DIFF_EQUAL, DIFF_INSERT, diff_text, replace_ops,
    should_replace, change_ratio, similarity,
)
from .tokens import DiffModel, TokenType, stringify
from .utils import (
    get_element_stack, is_inline_element, is_tag_token, is_whitespace, last,
    pop_element,
)

log = logging.getLogger(__name__)


def diff(from_doc, to_doc, config=None):
    """Diff two parsed documents. Returns a :class:`DiffModel`."""
    differ = DocumentDiffer(from_doc, to_doc, config=make_config(config))
    return differ.process()


def diff_documents(from_text, to_text, config=None, **options):
    """Renders the diff between two markup documents."""
    config = make_config(config, **options)
    model = diff(parse(from_text, config), parse(to_text, config), config)
    return stringify(model)


class DocumentDiffer(object):
    """Weaves the char diff of two documents back into their markup.

The markup of one document, the host, is kept and patched: ranges only
present in the host are sliced out of it and wrapped in place, ranges only
present in the other document are rebuilt from it with :func:`fragment`
and dropped in as a single token. Normally the host is the `to` document
and deletes come from `from`; with ``invert`` it is the other way round.
"""

    def __init__(self, from_doc, to_doc, config=None):
        self.config = config or DiffConfig()
        self.from_doc = from_doc
        self.to_doc = to_doc
        if self.config.invert:
            self.host, self.foreign = from_doc, to_doc
            self.host_op, self.host_tag = DIFF_DELETE, u'del'
            self.foreign_tag, self.foreign_type = u'ins', TokenType.INSERT
        else:
            self.host, self.foreign = to_doc, from_doc
            self.host_op, self.host_tag = DIFF_INSERT, u'ins'
            self.foreign_tag, self.foreign_type = u'del', TokenType.DELETE
        self._result = None
        self._stack = []
        self._offset = 0
        self._foreign_offset = 0
        self._pos = 0
        self.similarity = 1.0

    def append(self, token):
        self._result.append(token)
        if token.type is TokenType.OPEN:
            self._stack.append(token)
        elif token.type is TokenType.CLOSE:
            pop_element(self._stack, token.name)

    def move_tokens(self, end):
        """Copy host tokens up to index `end` to the result."""
        tokens = self.host.tokens
        while self._pos < end:
            self.append(tokens[self._pos])
            self._pos += 1

    def get_ops(self):
        config = self.config
        ops = diff_text(self.from_doc.content, self.to_doc.content, config)
        self.similarity = similarity(ops)
        if should_replace(ops, config.replace_threshold):
            log.debug('replacing whole content, change ratio %.3f > %s',
                      change_ratio(ops), config.replace_threshold)
            ops = replace_ops(self.from_doc.content, self.to_doc.content)
        return ops

    def suppress_whitespace(self, text):
        """
        A space the host already rendered as a whitespace token (the block
        separator of ``<p>a</p><p>b</p>``) must stay out of the patch.
        """
        prev = None
        for token in reversed(self._result):
            if token.type is not self.foreign_type:
                prev = token
                break
        return (prev is not None and prev.type is TokenType.SPACE
                and bool(prev.offset) and prev.location == self._offset
                and text.startswith(u' '))

    def unchanged(self, text):
        self._offset += len(text)
        self._foreign_offset += len(text)
        tokens = self.host.tokens
        foreign_stack = None
        while self._pos < len(tokens):
            token = tokens[self._pos]
            if token.location > self._offset:
                break
            if (token.location == self._offset
                    and token.type is TokenType.SPACE and token.offset
                    and not self._after_block_tag(self._offset)):
                # the space belongs to the next change
                break
            if token.location == self._offset and token.type is TokenType.OPEN:
                # `aa <div>bb cc</div>` and `aa bb <div>cc</div>` give the same
                # content: the tag goes here only when it is open at the same
                # point of the other document
                if foreign_stack is None:
                    foreign_stack = get_element_stack(self.foreign.tokens,
                                                      self._foreign_offset).stack
                if not any(t.name == token.name for t in foreign_stack):
                    break
            self.append(token)
            self._pos += 1

    def _after_block_tag(self, location):
        prev = last(self._result)
        return (prev is not None and is_tag_token(prev)
                and prev.location == location
                and not is_inline_element(prev, self.config))

    def host_change(self, text, paired=False):
        if self.suppress_whitespace(text):
            self._offset += 1
            text = text[1:]
        if text:
            start, end = self._offset, self._offset + len(text)
            # an element holding exactly the replaced text stays around
            # both sides of the replacement
            chunk = slice_model(self.host, start, end, self._pos,
                                whole_elements=not paired)
            self.move_tokens(chunk.range[0])
            self._pos = chunk.range[1]
            tag = self.host_tag
            if self.skip_host_change(text, start):
                tag = None
            for token in chunk.to_tokens(tag):
                self.append(token)
        self._offset += len(text)

    def skip_host_change(self, text, location):
        """Whitespace right after a block tag is formatting, not a change."""
        if not (self.config.compact and is_whitespace(text)):
            return False
        return self._after_block_tag(location)

    def foreign_change(self, text):
        location = self._offset
        if self.suppress_whitespace(text):
            location += 1
            self._foreign_offset += 1
            text = text[1:]
        if text and not self.skip_foreign_change(text, location):
            start = self._foreign_offset
            tokens = self.host.tokens
            # the patch goes after open tags and insignificant whitespace
            # sitting at its location
            while self._pos < len(tokens):
                token = tokens[self._pos]
                if token.location < location or (
                        token.location == location and (
                            token.type is TokenType.OPEN or (
                                token.type is TokenType.SPACE
                                and not token.offset))):
                    self.append(token)
                    self._pos += 1
                else:
                    break
            chunk = fragment(self.foreign, start, start + len(text),
                             tags=self.config.preserve_tags,
                             receiver_stack=self._stack, config=self.config)
            self.append(chunk.to_diff_token(self.foreign_tag, location,
                                            self.foreign_type, text))
        self._foreign_offset += len(text)

    def skip_foreign_change(self, text, location):
        """Removed whitespace next to whitespace the host keeps is noise."""
        if not (self.config.compact and is_whitespace(text)):
            return False
        content = self.host.content
        return (is_whitespace(content[location - 1:location])
                or is_whitespace(content[location:location + 1]))

    def process(self):
        self._result = []
        del self._stack[:]
        self._offset = self._foreign_offset = self._pos = 0
        ops = self.get_ops()
        for i, (op, text) in enumerate(ops):
            if not text:
                continue
            if op == DIFF_EQUAL:
                self.unchanged(text)
            elif op == self.host_op:
                following = ops[i + 1][0] if i + 1 < len(ops) else DIFF_EQUAL
                self.host_change(text, following not in (DIFF_EQUAL,
                                                         self.host_op))
            else:
                self.foreign_change(text)
        self.move_tokens(len(self.host.tokens))
        log.debug('merged %d operations into %d tokens, similarity %.3f',
                  len(ops), len(self._result), self.similarity)
        return DiffModel(self._result, self.host.content, self.similarity)
