# -*- coding: utf-8 -*-
"""
Funciones utilitarias para markupdiff.
"""
from collections import namedtuple

from .config import _whitespace_only_re
from .tokens import TAG_TYPES, TokenType

ElementStack = namedtuple('ElementStack', ['stack', 'start'])


def last(items, default=None):
    return items[-1] if items else default


def is_whitespace(text):
    """True si el texto no es vacío y solo contiene espacios."""
    return bool(text) and _whitespace_only_re.match(text) is not None


def is_tag_token(token):
    return token.type in TAG_TYPES


def is_inline_element(token, config):
    """Inline tags and diff markers don't break words or lines."""
    if token.type is TokenType.DIFF:
        return True
    return config.is_inline(token.name)


def is_ignore_token(token, config):
    """El comentario de control nunca se copia a un fragmento."""
    if token.type is not TokenType.COMMENT or not config.ignore_comment:
        return False
    body = token.value
    if body.startswith(u'<!--'):
        body = body[4:]
    if body.endswith(u'-->'):
        body = body[:-3]
    return body.strip() == config.ignore_comment


def pop_element(stack, name):
    """
    Pop `stack` down to the innermost open token called `name`. Returns the
    popped tokens, innermost first, or an empty list when nothing matches.
    """
    for i in range(len(stack) - 1, -1, -1):
        if stack[i].name == name:
            popped = stack[i:]
            del stack[i:]
            popped.reverse()
            return popped
    return []


def get_element_stack(tokens, position, start=0, stack=None):
    """
    Compute the elements open at content `position`, scanning from token
    index `start` with an initial `stack`.

    Returns ``(stack, start)`` where `start` is the index of the first token
    not consumed, so the scan can be resumed for a later position. Scanning
    stops before tokens past `position` and before a whitespace token that
    owns the character at `position`.
    """
    stack = list(stack or ())
    index = start
    while index < len(tokens):
        token = tokens[index]
        if token.location > position:
            break
        if (token.type is TokenType.SPACE and token.offset
                and token.location == position):
            break
        if token.type is TokenType.OPEN:
            stack.append(token)
        elif token.type is TokenType.CLOSE:
            pop_element(stack, token.name)
        index += 1
    return ElementStack(stack, index)
