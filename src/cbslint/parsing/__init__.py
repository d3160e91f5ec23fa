"""
CBS parsing components.

This package provides the nested-brace walking primitives, the brace
tokenizer that finds balanced tags, and the decomposer that splits a tag
into command name and raw parameters.
"""

from cbslint.parsing.braces import (
    BraceKind,
    find_matching_close,
    find_top_level,
    find_top_level_colon,
    is_single_tag,
    iter_brace_tokens,
    mask_nested_tags,
    split_top_level,
)
from cbslint.parsing.decomposer import CallingConvention, ParsedTag, decompose
from cbslint.parsing.tokenizer import TagSpan, iter_all_spans, tokenize

__all__ = [
    "BraceKind",
    "CallingConvention",
    "ParsedTag",
    "TagSpan",
    "decompose",
    "find_matching_close",
    "find_top_level",
    "find_top_level_colon",
    "is_single_tag",
    "iter_all_spans",
    "iter_brace_tokens",
    "mask_nested_tags",
    "split_top_level",
    "tokenize",
]
