# -*- coding: utf-8 -*-
"""
    markupdiff
    ~~~~~~~~~~

    Diffs XML and HTML documents.  The result is the new document with the
    changes marked with ``<ins>`` and ``<del>`` tags, nested so that the
    markup stays valid.  Examples:

    >>> from markupdiff import diff_documents

    >>> print(diff_documents('<p>111</p>', '<p>222 111</p>'))
    <p><ins>222 </ins>111</p>

    >>> print(diff_documents('111 222 <em>333</em> 555', '111 555'))
    111 <del>222 333 </del>555

    >>> print(diff_documents('111 <span>222 <em>333</em></span> 555',
    ...                      '111 555', preserve_tags=['em']))
    111 <del>222 <em>333</em> </del>555

    >>> print(diff_documents('<p>foo1 baz</p>', '<p>bar1 baz</p>',
    ...                      replace_threshold=0.4))
    <p><del>foo1 baz</del><ins>bar1 baz</ins></p>

    Parsing keeps the source intact:

    >>> from markupdiff import parse, stringify
    >>> model = parse('<a><b> \\t foo\\n bar</b></a>')
    >>> model.content
    'foo bar'
    >>> stringify(model) == '<a><b> \\t foo\\n bar</b></a>'
    True
"""
from .config import DiffConfig
from .tokens import Token, TokenType, ParsedModel, DiffModel, stringify
from .consumer import MarkupConsumer, parse
from .slicing import SliceResult, slice_model, fragment
from .word_bounds import update_word_bounds
from .differ import DocumentDiffer, diff, diff_documents

__all__ = [
    'diff_documents',
    'diff',
    'parse',
    'stringify',
    'DiffConfig',
    'DocumentDiffer',
    'MarkupConsumer',
    'ParsedModel',
    'DiffModel',
    'Token',
    'TokenType',
    'SliceResult',
    'slice_model',
    'fragment',
    'update_word_bounds',
]
