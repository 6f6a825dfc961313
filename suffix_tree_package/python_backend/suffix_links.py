'''Suffix link table.

Maps an explicit internal node spelling `xA` (x a single symbol) to the node
spelling `A`. The root never has a link: the extension engine falls back to
shrinking the active range from the front instead.
'''
from typing import Dict, Iterator, Optional, Tuple

from ..exceptions import SuffixTreeInvariantError
from .edge_table import ROOT


class SuffixLinkTable:
    """Sparse `node -> node` mapping of suffix links."""

    def __init__(self):
        self._links: Dict[int, int] = {}

    def get(self, node: int) -> Optional[int]:
        """Returns the link target of `node`, or None while it is not known yet."""
        return self._links.get(node)

    def require(self, node: int) -> int:
        """Returns the link target of `node`, which the caller relies on existing.

        Raises:
            SuffixTreeInvariantError: If `node` has no suffix link.
        """
        try:
            return self._links[node]
        except KeyError:
            raise SuffixTreeInvariantError(
                f"Node {node} has no suffix link but one is required to continue.") from None

    def set(self, node: int, target: int) -> None:
        if node == ROOT:
            raise SuffixTreeInvariantError("The root node cannot carry a suffix link.")
        self._links[node] = target

    def __contains__(self, node: int) -> bool:
        return node in self._links

    def __len__(self) -> int:
        return len(self._links)

    def items(self) -> Iterator[Tuple[int, int]]:
        return iter(self._links.items())
