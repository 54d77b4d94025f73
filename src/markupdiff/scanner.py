# -*- coding: utf-8 -*-
"""
Markup scanner.

Walks a document with Genshi's HTML event stream and reports every markup
construct as ``(name, type, start, end)`` with absolute character offsets in
the scanned text. Genshi only gives us the position where each construct
starts, so the end of each construct is found lexically, and tag names are
taken from the raw source to keep their original case.
"""
import logging
import re
from io import StringIO

from genshi.core import START, END, COMMENT, PI, DOCTYPE
from genshi.input import HTMLParser, ParseError

from .config import DiffConfig
from .tokens import TokenType

log = logging.getLogger(__name__)

_tag_name_re = re.compile(r'</?([^\s/>]+)')
_tag_end_re = re.compile(r'''(?:[^>"']|"[^"]*"|'[^']*')*>''')
_comment_end_re = re.compile(r'--!?>')
# Constructs the event stream may leave out (CDATA sections, end tags that
# close nothing, declarations) are picked up from the text between reported
# constructs.
_gap_markup_re = re.compile(
    r"<!\[CDATA\[.*?\]\]>|</[A-Za-z][^\s/>]*\s*>|<!--.*?--!?>"
    r"|<![A-Za-z][^>]*>|<\?[^>]*>", re.S)

COMMENT_NAME = u'#comment'
CDATA_NAME = u'#cdata'
PI_NAME = u'#pi'
DOCTYPE_NAME = u'#doctype'


class ScanError(ValueError):
    """The markup could not be tokenized."""


class XMLEventParser(HTMLParser):
    """HTML event parser without void elements: every tag must be closed."""
    _EMPTY_ELEMS = frozenset()


def _line_starts(text):
    starts = [0]
    pos = text.find('\n')
    while pos != -1:
        starts.append(pos + 1)
        pos = text.find('\n', pos + 1)
    return starts


def _find_tag_end(source, start):
    m = _tag_end_re.match(source, start + 1)
    if m is not None:
        return m.end()
    pos = source.find('>', start)
    return len(source) if pos == -1 else pos + 1


def _find_end(source, start, marker='>'):
    pos = source.find(marker, start)
    return len(source) if pos == -1 else pos + len(marker)


def _tag_name(source, start):
    m = _tag_name_re.match(source, start)
    return m.group(1) if m else u''


def _special_item(source, start, end=None):
    """Classify a non-tag construct starting at `start`."""
    if source.startswith(u'<![CDATA[', start):
        if end is None:
            end = _find_end(source, start, u']]>')
        return CDATA_NAME, TokenType.CDATA, start, end
    if source.startswith(u'<!--', start):
        if end is None:
            m = _comment_end_re.search(source, start + 4)
            end = m.end() if m else len(source)
        return COMMENT_NAME, TokenType.COMMENT, start, end
    if end is None:
        end = _find_end(source, start)
    if source.startswith(u'<?', start):
        return PI_NAME, TokenType.PROCESSING_INSTRUCTION, start, end
    if source[start + 2:start + 9].upper() == u'DOCTYPE':
        return DOCTYPE_NAME, TokenType.DOCTYPE, start, end
    # bogus comments: <!foo>, </ 3>
    return COMMENT_NAME, TokenType.COMMENT, start, end


def iter_markup(text, config=None, start=0, end=None):
    """
    Yield ``(name, type, start, end)`` for every markup construct of
    ``text[start:end]``, in document order.

    Comments, CDATA sections, processing instructions and doctypes are only
    reported when `config.all_tokens` is set; otherwise they stay part of
    the content.
    """
    config = config or DiffConfig()
    if end is None:
        end = len(text)
    source = text[start:end]
    parser_class = XMLEventParser if config.xml else HTMLParser
    try:
        events = list(parser_class(StringIO(source)))
    except ParseError as e:
        raise ScanError(str(e)) from e
    line_starts = _line_starts(source)

    def offset_of(pos):
        lineno, column = pos[1], pos[2]
        return line_starts[lineno - 1] + column

    def scan_gap(gap_start, gap_end):
        for m in _gap_markup_re.finditer(source, gap_start, gap_end):
            if m.group().startswith('</'):
                yield (_tag_name(source, m.start()), TokenType.CLOSE,
                       m.start(), m.end())
            elif config.all_tokens:
                yield _special_item(source, m.start(), m.end())

    cursor = 0
    i = 0
    while i < len(events):
        kind, data, pos = events[i]
        i += 1
        if kind not in (START, END, COMMENT, PI, DOCTYPE):
            continue
        offset = offset_of(pos)
        if offset < cursor:
            continue
        if kind is START:
            construct_end = _find_tag_end(source, offset)
            type = TokenType.OPEN
            if (i < len(events) and events[i][0] is END
                    and offset_of(events[i][2]) == offset):
                type = TokenType.SELF_CLOSE
                i += 1
            item = (_tag_name(source, offset), type, offset, construct_end)
        elif kind is END:
            # implied end tags are reported where the parser noticed them
            if not source.startswith('</', offset):
                continue
            item = (_tag_name(source, offset), TokenType.CLOSE, offset,
                    _find_tag_end(source, offset))
        elif kind is COMMENT:
            item = _special_item(source, offset)
        elif kind is PI:
            item = (PI_NAME, TokenType.PROCESSING_INSTRUCTION, offset,
                    _find_end(source, offset))
        else:
            item = (DOCTYPE_NAME, TokenType.DOCTYPE, offset,
                    _find_end(source, offset))
        for gap_item in scan_gap(cursor, offset):
            yield gap_item[0], gap_item[1], start + gap_item[2], start + gap_item[3]
        cursor = item[3]
        if item[1] in (TokenType.OPEN, TokenType.CLOSE, TokenType.SELF_CLOSE) \
                or config.all_tokens:
            yield item[0], item[1], start + item[2], start + item[3]
    for gap_item in scan_gap(cursor, len(source)):
        yield gap_item[0], gap_item[1], start + gap_item[2], start + gap_item[3]


def scan(text, on_token, config=None, start=0, end=None):
    """Call ``on_token(name, type, start, end)`` for each markup construct."""
    count = 0
    for name, type, token_start, token_end in iter_markup(text, config,
                                                          start, end):
        on_token(name, type, token_start, token_end)
        count += 1
    log.debug('scanned %d markup constructs', count)
    return count
