from __future__ import annotations

import pytest

from markupdiff import DiffConfig
from markupdiff.config import INLINE_ELEMENTS, make_config


def test_defaults():
    config = DiffConfig()
    assert config.normalize_space is True
    assert config.compact is True
    assert config.word_patches is False
    assert config.invert is False
    assert config.replace_threshold == 0
    assert config.preserve_tags == ()
    assert config.inline_elements == INLINE_ELEMENTS
    assert config.base_start == 0
    assert config.base_end is None


def test_is_immutable():
    config = DiffConfig()
    with pytest.raises(AttributeError):
        config.invert = True
    with pytest.raises(AttributeError):
        del config.compact


def test_unknown_option():
    with pytest.raises(TypeError):
        DiffConfig(word_patch=True)
    with pytest.raises(TypeError):
        DiffConfig(replace=1)


def test_replace():
    config = DiffConfig(word_patches=True)
    inverted = config.replace(invert=True)
    assert inverted.invert and inverted.word_patches
    assert not config.invert
    assert inverted != config
    assert inverted == DiffConfig(word_patches=True, invert=True)
    assert hash(inverted) == hash(DiffConfig(word_patches=True, invert=True))


def test_lists_are_frozen():
    tags = ["em"]
    config = DiffConfig(preserve_tags=tags)
    tags.append("span")
    assert config.preserve_tags == ("em",)
    assert config.is_preserved("EM")
    assert not config.is_preserved("span")


def test_inline_names_ignore_case():
    config = DiffConfig()
    assert config.is_inline("B")
    assert not config.is_inline("div")
    assert not config.is_inline(None)


def test_make_config():
    assert make_config() == DiffConfig()
    assert make_config({"invert": True}).invert
    assert make_config(DiffConfig(compact=False), invert=True) == \
        DiffConfig(compact=False, invert=True)
    config = DiffConfig()
    assert make_config(config) is config


def test_repr_lists_changed_options():
    assert repr(DiffConfig(invert=True)) == "DiffConfig(invert=True)"
