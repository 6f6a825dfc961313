'''Exhaustive correctness test over all short binary strings.

For every length L up to a small maximum, builds the suffix tree of each of
the 2^L binary strings and checks:

1.  **Suffixes**: `all_suffixes` equals {s[i:]} and the tree passes
    `check_invariants()`.
2.  **Substrings**: every binary pattern of length 1..L+1 is found exactly
    when it occurs in the string.
3.  **Size**: the number of explicit nodes per string, collected with
    `SuffixTreeProcessor.node_counts`, stays within 2(L + 1) and the number of
    leaves is always L + 1.

Under pytest it runs up to L=8. Run as a script to sweep further:

Usage:
    python test_exhaustive.py [max_L]
'''
import sys
import os
import time
import numpy as np

# --- Path Setup ---
_project_root_dir = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if _project_root_dir not in sys.path:
    sys.path.insert(0, _project_root_dir)

from suffix_tree_package import SuffixTree, SuffixTreeProcessor

def int_to_binary_string(number: int, L: int) -> str:
    """Converts an integer to its L-bit binary string representation.

    Args:
        number: The integer to convert.
        L: The desired length of the binary string (padded with leading zeros if needed).

    Returns:
        The L-bit binary string.
    """
    return format(number, f'0{L}b')

def all_binary_strings(L: int) -> list:
    return [int_to_binary_string(i, L) for i in range(1 << L)]

def check_length(L: int) -> int:
    """Checks every binary string of length L. Returns the number of strings checked."""
    strings = all_binary_strings(L)
    patterns = [p for k in range(1, L + 2) for p in all_binary_strings(k)]

    for s in strings:
        tree = SuffixTree(s)
        tree.check_invariants()
        assert tree.all_suffixes() == {s[i:] for i in range(L)}, f"Suffix mismatch for '{s}'"
        assert tree.leaf_count == L + 1

        found = tree.contains_batch(patterns)
        expected = np.array([p in s for p in patterns], dtype=bool)
        mismatches = np.flatnonzero(found != expected)
        assert mismatches.size == 0, \
            f"'{s}': wrong answers for {[patterns[i] for i in mismatches]}"

    node_counts = SuffixTreeProcessor(n_threads=1).node_counts(strings)
    assert node_counts.shape == (len(strings),)
    assert node_counts.max() <= 2 * (L + 1)
    # All zeros: a chain of L - 1 internal nodes, L + 1 leaves and the root.
    assert node_counts[0] == 2 * (L + 1) - 1
    return len(strings)

def test_exhaustive_short_binary_strings():
    for L in range(1, 9):
        check_length(L)

def test_processor_matrix_matches_naive_search():
    strings = all_binary_strings(6)
    patterns = all_binary_strings(3) + ["0000000", "1", "0"]
    matrix = SuffixTreeProcessor(n_threads=4).process_strings(strings, patterns)
    expected = np.array([[p in s for p in patterns] for s in strings], dtype=bool)
    assert matrix.shape == (64, len(patterns))
    assert np.array_equal(matrix, expected)

def run_exhaustive_test(max_L: int = 12):
    print(f"--- Suffix Tree Exhaustive Correctness Test up to L={max_L} ---")
    if max_L > 14:
        print(f"Warning: L={max_L} is > 14. This test builds 2^{max_L+1} trees and may be very slow.", file=sys.stderr)

    for L in range(1, max_L + 1):
        start_time = time.perf_counter()
        try:
            checked = check_length(L)
        except AssertionError as e:
            print(f"  L={L}: FAILED. {e}")
            sys.exit(1)
        elapsed = time.perf_counter() - start_time
        print(f"  L={L}: {checked:,} strings OK in {elapsed:.3f}s")
    print("All exhaustive checks passed.")

if __name__ == "__main__":
    max_L = 12
    if len(sys.argv) > 1:
        try:
            max_L = int(sys.argv[1])
        except ValueError:
            print("Usage: python test_exhaustive.py [max_L]")
            sys.exit(1)
    run_exhaustive_test(max_L)
