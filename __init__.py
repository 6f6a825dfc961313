from .suffix_tree_package import (
    SuffixTree, construct, contains_substring,
    all_suffixes, to_debug_string,
    SuffixTreeProcessor,
    InvalidInputError, SuffixTreeInvariantError
)

__all__ = [
    'SuffixTree', 'construct', 'contains_substring',
    'all_suffixes', 'to_debug_string',
    'SuffixTreeProcessor',
    'InvalidInputError', 'SuffixTreeInvariantError'
]
