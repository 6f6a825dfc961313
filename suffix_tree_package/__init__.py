'''Initialize the suffix_tree_package, exposing online suffix tree construction and queries.'''

from .exceptions import (
    SuffixTreeError, InvalidInputError,
    SuffixTreeInvariantError, BuildCancelledError
)
from .python_backend.symbol_store import DEFAULT_TERMINATOR, END_OF_SEQUENCE
from .python_backend.suffix_tree import (
    SuffixTree, construct, contains_substring,
    all_suffixes, to_debug_string
)
from .suffix_tree_wrapper import SuffixTreeProcessor

__version__ = "0.1.0"

__all__ = [
    'SuffixTree', 'construct', 'contains_substring',
    'all_suffixes', 'to_debug_string',
    'SuffixTreeProcessor',
    'DEFAULT_TERMINATOR', 'END_OF_SEQUENCE',
    'SuffixTreeError', 'InvalidInputError',
    'SuffixTreeInvariantError', 'BuildCancelledError'
]
