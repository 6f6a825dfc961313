'''Exception types raised by the suffix tree package.

Two very different kinds of failure exist:

- `InvalidInputError`: the caller handed us something we cannot build a tree
  over (empty sequence, terminator already present in the input, ...). These
  are detected once, when the symbol store is created, and are recoverable.
- `SuffixTreeInvariantError`: the extension engine or one of its tables found
  itself in a state the algorithm says is impossible (missing edge during
  canonization, missing suffix link, active point past the consumed input).
  This is a bug, not a run-time condition, and the build is abandoned.
'''


class SuffixTreeError(Exception):
    """Base class for every error raised by this package."""


class InvalidInputError(SuffixTreeError, ValueError):
    """The input sequence (or terminator) cannot be used to build a suffix tree."""


class SuffixTreeInvariantError(SuffixTreeError, AssertionError):
    """An internal consistency check failed while building or verifying a tree."""


class BuildCancelledError(SuffixTreeError, RuntimeError):
    """Construction was stopped by the caller's cancellation check."""
