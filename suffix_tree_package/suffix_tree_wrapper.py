'''Batch interface over the suffix tree backend.

This module provides `SuffixTreeProcessor`, which builds one suffix tree per
input string and answers questions about the whole batch, returning numpy
arrays so the results drop straight into numerical code.

Each build is an inherently sequential state machine, so trees are built one
after the other. Finished trees are read-only, which makes it safe to query
them from several threads at once; pattern lookups are spread over a thread
pool of `n_threads` workers.
'''
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Hashable, Iterable, List, Optional, Sequence

import numpy as np

from .python_backend.suffix_tree import SuffixTree

log = logging.getLogger(__name__)


class SuffixTreeProcessor:
    '''Processes lists of sequences with one suffix tree per sequence.

    Attributes:
        n_threads (int): Number of worker threads used for batch queries.
                         Defaults to the number of CPU cores available.
        terminator: Terminator passed to every tree (None for the default).
    '''
    def __init__(self, n_threads: Optional[int] = None, terminator: Optional[Hashable] = None):
        """Initializes the SuffixTreeProcessor.

        Args:
            n_threads: Number of threads for batch queries. If None, defaults to
                       the number of CPU cores detected by os.cpu_count().
            terminator: Terminator symbol for the trees. Defaults to the
                        backend default (`"$"` for strings).

        Raises:
            ValueError: If n_threads is not a positive integer.
        """
        self.n_threads = n_threads if n_threads is not None else os.cpu_count()
        if self.n_threads is None:  # Fallback if os.cpu_count() returns None
            self.n_threads = 1
        if self.n_threads < 1:
            raise ValueError("n_threads must be a positive integer.")
        self.terminator = terminator

    def build_trees(self, strings: Iterable[Sequence]) -> List[SuffixTree]:
        """Builds a suffix tree for every input.

        Raises:
            InvalidInputError: If any input is empty or contains the terminator.
        """
        trees = [SuffixTree(s, terminator=self.terminator) for s in strings]
        log.debug("Built %d suffix trees", len(trees))
        return trees

    def process_strings(self, strings: List[Sequence], patterns: Iterable) -> np.ndarray:
        '''Checks every pattern against every string.

        Args:
            strings: The sequences to index.
            patterns: The substrings to look for.

        Returns:
            A boolean numpy array of shape (len(strings), len(patterns)) where
            entry [i, j] tells whether patterns[j] occurs in strings[i].
        '''
        patterns = list(patterns)
        if not strings:
            return np.zeros((0, len(patterns)), dtype=bool)

        trees = self.build_trees(strings)
        results = np.zeros((len(trees), len(patterns)), dtype=bool)
        if not patterns:
            return results

        with ThreadPoolExecutor(max_workers=self.n_threads) as pool:
            for row, found in enumerate(pool.map(lambda tree: tree.contains_batch(patterns), trees)):
                results[row] = found
        return results

    def node_counts(self, strings: List[Sequence]) -> np.ndarray:
        '''Returns the number of explicit nodes in each string's suffix tree.

        A suffix tree over n symbols (plus terminator) never has more than
        2(n + 1) nodes, which makes this a cheap sanity measure over a corpus.
        '''
        if not strings:
            return np.array([], dtype=np.int64)
        return np.array([tree.node_count for tree in self.build_trees(strings)], dtype=np.int64)


# --- Example Usage ---
if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    print("Running SuffixTreeProcessor example...")

    test_strings = ["banana", "abcabxabcd", "aaaa", "bookkeeper"]
    test_patterns = ["ana", "abc", "aa", "kee", "xyz"]

    processor = SuffixTreeProcessor(n_threads=4)
    matrix = processor.process_strings(test_strings, test_patterns)
    for s, row in zip(test_strings, matrix):
        found = [p for p, hit in zip(test_patterns, row) if hit]
        print(f"'{s}': {found}")

    print("\nNode counts:")
    for s, count in zip(test_strings, processor.node_counts(test_strings)):
        print(f"'{s}': {count} nodes (bound {2 * (len(s) + 1)})")
