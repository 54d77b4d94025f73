# -*- coding: utf-8 -*-
"""
Configuración y constantes para markupdiff.
"""
import re

# Expresiones regulares (exportadas para uso en otros módulos)
_space_re = re.compile(r'\s+', re.U)
_whitespace_only_re = re.compile(r'^\s+$', re.U)

# Tags treated as inline when deciding whether a closing tag separates words
# and whether whitespace next to a tag is noise.
INLINE_ELEMENTS = (
    'a', 'abbr', 'acronym', 'applet', 'b', 'basefont', 'bdo',
    'big', 'br', 'button', 'cite', 'code', 'del', 'dfn', 'em', 'font', 'i',
    'iframe', 'img', 'input', 'ins', 'kbd', 'label', 'map', 'object', 'q',
    's', 'samp', 'select', 'small', 'span', 'strike', 'strong', 'sub', 'sup',
    'textarea', 'tt', 'u', 'var',
)

# Characters that end a word for word-bound expansion. Not locale-sensitive.
WORD_DELIMITERS = frozenset(
    u'.,…/\\!?:;()[]{}<>"\'«»“”‘’'
    u'-–—\n\r\t  '
)

# Delimiters that stay inside a word when both neighbours are digits: 1,249,292.0
NUMERIC_SEPARATORS = frozenset(u'.,')


class DiffConfig(object):
    """
    Options for parsing and diffing markup documents.

    Defaults live on the class. Keyword arguments override them when the
    instance is created; after that the instance can't be changed, use
    :meth:`replace` to derive a new one::

        >>> config = DiffConfig(word_patches=True)
        >>> config.replace(invert=True).invert
        True
    """

    # Normalize whitespace when extracting content from markup
    normalize_space = True
    # Reduce noise by dropping meaningless whitespace patches
    compact = True
    # Widen patches to whole words and separate block elements with a space
    word_patches = False
    # Apply patches to the `from` document instead of the `to` document
    invert = False
    # Ratio of changed to unchanged text above which both documents are
    # considered unrelated and marked as replaced. 0 disables it.
    replace_threshold = 0
    # Tags of the removed fragment kept when it is rebuilt inside <del>
    preserve_tags = ()
    inline_elements = INLINE_ELEMENTS
    # Region of the source text that is parsed
    base_start = 0
    base_end = None

    # Scanner options
    all_tokens = True
    xml = False

    # Comments with this body are never copied into rebuilt fragments
    ignore_comment = u'diff:ignore'

    # Character diff engine (diff-match-patch)
    semantic_cleanup = True
    diff_timeout = 1.0
    diff_edit_cost = 4
    match_threshold = 0.5
    match_distance = 1000
    patch_delete_threshold = 0.5
    patch_margin = 4
    match_max_bits = 32

    _options = (
        'normalize_space', 'compact', 'word_patches', 'invert',
        'replace_threshold', 'preserve_tags', 'inline_elements',
        'base_start', 'base_end', 'all_tokens', 'xml', 'ignore_comment',
        'semantic_cleanup', 'diff_timeout', 'diff_edit_cost',
        'match_threshold', 'match_distance', 'patch_delete_threshold',
        'patch_margin', 'match_max_bits',
    )

    def __init__(self, **options):
        for name, value in options.items():
            if name not in self._options:
                raise TypeError('Unknown diff option: %r' % (name,))
            if isinstance(value, (list, set, frozenset)):
                value = tuple(value)
            object.__setattr__(self, name, value)
        object.__setattr__(self, '_inline_names', frozenset(
            n.lower() for n in self.inline_elements))
        object.__setattr__(self, '_preserve_names', frozenset(
            n.lower() for n in self.preserve_tags))

    def __setattr__(self, name, value):
        raise AttributeError('DiffConfig is immutable, use replace(%s=...)' % name)

    def __delattr__(self, name):
        raise AttributeError('DiffConfig is immutable')

    def __repr__(self):
        changed = ['%s=%r' % (k, v) for k, v in sorted(self.as_dict().items())
                   if v != getattr(DiffConfig, k)]
        return 'DiffConfig(%s)' % ', '.join(changed)

    def __eq__(self, other):
        if not isinstance(other, DiffConfig):
            return NotImplemented
        return self.as_dict() == other.as_dict()

    def __ne__(self, other):
        rv = self.__eq__(other)
        return rv if rv is NotImplemented else not rv

    def __hash__(self):
        return hash(tuple(sorted(self.as_dict().items())))

    def as_dict(self):
        return dict((name, getattr(self, name)) for name in self._options)

    def replace(self, **changes):
        """Return a copy of this config with `changes` applied."""
        options = self.as_dict()
        options.update(changes)
        return type(self)(**options)

    def is_inline(self, name):
        return (name or u'').lower() in self._inline_names

    def is_preserved(self, name):
        return (name or u'').lower() in self._preserve_names


def make_config(config=None, **options):
    """
    Normaliza los argumentos de configuración: acepta un `DiffConfig`, un dict
    de opciones o solo keywords.
    """
    if config is None:
        return DiffConfig(**options)
    if isinstance(config, dict):
        merged = dict(config)
        merged.update(options)
        return DiffConfig(**merged)
    if options:
        return config.replace(**options)
    return config
