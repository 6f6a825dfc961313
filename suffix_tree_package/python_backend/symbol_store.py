'''Symbol store for the suffix tree builder.

The store owns an immutable copy of the input sequence with one reserved
terminator symbol appended. Every edge of the tree refers to a range of
positions in this store instead of copying symbols around, so the store is the
only place where symbols actually live.

Two flavours of input are supported:

- `str`: symbols are single characters, the default terminator is `"$"` and
  every slice handed back to callers is a `str`.
- any other sequence of hashable symbols (tuples of tokens, lists of ints, ...):
  the default terminator is the `END_OF_SEQUENCE` sentinel, which cannot occur
  in user data, and slices are handed back as tuples.

All input validation for the whole package happens here, once, before the
extension engine sees a single symbol.
'''
from collections.abc import Sequence
from typing import Hashable, Optional

from ..exceptions import InvalidInputError

DEFAULT_TERMINATOR = "$"


class _EndOfSequence:
    """Sentinel terminator for non-text inputs. Equal only to itself."""
    __slots__ = ()

    def __repr__(self) -> str:
        return "END_OF_SEQUENCE"


END_OF_SEQUENCE = _EndOfSequence()


class SymbolStore:
    """Immutable input symbols followed by a single terminator.

    Attributes:
        terminator: The reserved symbol appended after the input.
        is_text (bool): True when the input was a `str`.
    """
    __slots__ = ('_symbols', 'terminator', 'is_text')

    def __init__(self, sequence: Sequence, terminator: Optional[Hashable] = None):
        """Validates `sequence` and stores it with the terminator appended.

        Args:
            sequence: The input. Must be a non-empty `str` or sequence of
                      hashable symbols.
            terminator: Symbol to append. Defaults to `"$"` for text and to
                        `END_OF_SEQUENCE` otherwise.

        Raises:
            InvalidInputError: If the input is empty, not a sequence, contains
                               unhashable symbols, or already contains the
                               terminator; or if a text terminator is not a
                               single character.
        """
        if isinstance(sequence, str):
            self.is_text = True
            if terminator is None:
                terminator = DEFAULT_TERMINATOR
            if not isinstance(terminator, str) or len(terminator) != 1:
                raise InvalidInputError(
                    f"Terminator for text input must be a single character, got {terminator!r}.")
        elif isinstance(sequence, Sequence):
            self.is_text = False
            if terminator is None:
                terminator = END_OF_SEQUENCE
            try:
                hash(terminator)
            except TypeError as e:
                raise InvalidInputError(f"Terminator {terminator!r} is not hashable.") from e
        else:
            raise InvalidInputError(
                f"Input must be a str or a sequence of symbols, got {type(sequence).__name__}.")

        if len(sequence) == 0:
            raise InvalidInputError("Cannot build a suffix tree over an empty sequence.")

        if self.is_text:
            if terminator in sequence:
                raise InvalidInputError(
                    f"Terminator {terminator!r} occurs in the input at index {sequence.index(terminator)}.")
            self._symbols = sequence + terminator
        else:
            symbols = tuple(sequence)
            for index, symbol in enumerate(symbols):
                try:
                    hash(symbol)
                except TypeError as e:
                    raise InvalidInputError(
                        f"Symbol {symbol!r} at index {index} is not hashable.") from e
                if symbol == terminator:
                    raise InvalidInputError(
                        f"Terminator {terminator!r} occurs in the input at index {index}.")
            self._symbols = symbols + (terminator,)

        self.terminator = terminator

    def __len__(self) -> int:
        """Number of stored symbols, terminator included."""
        return len(self._symbols)

    def __getitem__(self, index: int):
        return self._symbols[index]

    def __repr__(self) -> str:
        return f"SymbolStore({self.text!r}, terminator={self.terminator!r})"

    @property
    def symbols(self):
        """The stored symbols, terminator included (`str` or `tuple`)."""
        return self._symbols

    @property
    def last_index(self) -> int:
        """Position of the terminator, i.e. the last valid symbol position."""
        return len(self._symbols) - 1

    @property
    def text(self):
        """The original input, without the terminator."""
        return self._symbols[:-1]

    def empty(self):
        """An empty value of the store's flavour (`""` or `()`)."""
        return "" if self.is_text else ()

    def segment(self, first_index: int, last_index: int):
        """Returns the symbols at positions `first_index..last_index` (inclusive)."""
        return self._symbols[first_index:last_index + 1]

    def coerce(self, query):
        """Returns `query` in the store's flavour so it can be compared to segments."""
        if self.is_text:
            return query if isinstance(query, str) else "".join(query)
        return tuple(query)

    def contains_terminator(self, query) -> bool:
        return self.terminator in query

    def strip_terminator(self, label):
        """Removes a trailing terminator from a label read off the tree."""
        if label and label[-1] == self.terminator:
            return label[:-1]
        return label
