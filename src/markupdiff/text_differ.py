# -*- coding: utf-8 -*-
"""
Character level diff of document contents, on top of diff-match-patch.
"""
import logging

from diff_match_patch import diff_match_patch

from .config import DiffConfig
from .word_bounds import update_word_bounds

log = logging.getLogger(__name__)

DIFF_DELETE = diff_match_patch.DIFF_DELETE
DIFF_INSERT = diff_match_patch.DIFF_INSERT
DIFF_EQUAL = diff_match_patch.DIFF_EQUAL


def make_engine(config):
    """diff-match-patch instance tuned with the options of `config`."""
    dmp = diff_match_patch()
    dmp.Diff_Timeout = config.diff_timeout
    dmp.Diff_EditCost = config.diff_edit_cost
    dmp.Match_Threshold = config.match_threshold
    dmp.Match_Distance = config.match_distance
    dmp.Patch_DeleteThreshold = config.patch_delete_threshold
    dmp.Patch_Margin = config.patch_margin
    dmp.Match_MaxBits = config.match_max_bits
    return dmp


def diff_text(a, b, config=None):
    """
    Diff two content strings. Returns a list of ``(op, text)`` tuples with
    `op` one of ``DIFF_DELETE``, ``DIFF_INSERT``, ``DIFF_EQUAL``.
    """
    config = config or DiffConfig()
    dmp = make_engine(config)
    diffs = dmp.diff_main(a, b)
    if config.semantic_cleanup:
        dmp.diff_cleanupSemantic(diffs)
    diffs = [(op, text) for op, text in diffs]
    if config.word_patches:
        diffs = update_word_bounds(diffs)
    log.debug('char diff: %d operations', len(diffs))
    return diffs


def change_ratio(diffs):
    """
    Ratio of changed to unchanged characters. A delete followed by an insert
    counts as one change of the longer length.
    """
    changed = 0
    unchanged = 0
    deleted = inserted = 0
    for op, text in diffs:
        if op == DIFF_EQUAL:
            changed += max(deleted, inserted)
            deleted = inserted = 0
            unchanged += len(text)
        elif op == DIFF_DELETE:
            deleted += len(text)
        else:
            inserted += len(text)
    changed += max(deleted, inserted)
    if not unchanged:
        return float('inf') if changed else 0.0
    return float(changed) / unchanged


def should_replace(diffs, threshold):
    """True if the contents are too different to be diffed in detail."""
    if not threshold:
        return False
    return change_ratio(diffs) > threshold


def replace_ops(a, b):
    """Operations marking `a` replaced with `b` as a whole."""
    ops = []
    if a:
        ops.append((DIFF_DELETE, a))
    if b:
        ops.append((DIFF_INSERT, b))
    return ops


def similarity(diffs):
    """
    Share of matched characters: ``matched / (matched + inserted + deleted)``.
    """
    matched = inserted = deleted = 0
    for op, text in diffs:
        if op == DIFF_EQUAL:
            matched += len(text)
        elif op == DIFF_DELETE:
            deleted += len(text)
        else:
            inserted += len(text)
    total = matched + inserted + deleted
    if not total:
        return 1.0
    return float(matched) / total
