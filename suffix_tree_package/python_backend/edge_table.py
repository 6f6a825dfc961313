'''Edge table: the transition function of the suffix tree.

Nodes are plain integers handed out by the table itself (`ROOT` is 0, every new
node gets the next number and none is ever freed). The table maps a
`(node, first symbol)` pair to the single outgoing `Edge` of that node whose
label starts with that symbol. Storage is one small dict per node, kept in a
list indexed by node id, so lookups are ordinary hash lookups whatever the
input length.

Edge labels are ranges of positions in the `SymbolStore`. Leaf edges are
"open": their `last_index` is the `OPEN` marker and they implicitly end at the
builder's current end, which is how every leaf grows by one symbol per phase
without being touched.
'''
from typing import Dict, Iterator, List, Optional

from ..exceptions import SuffixTreeInvariantError
from .symbol_store import SymbolStore

ROOT = 0
OPEN = float('inf')  # last_index of leaf edges, resolved against the current end


class Edge:
    """An edge of the suffix tree.

    The label of the edge is `store[first_index..last_index]` (inclusive). For
    open (leaf) edges `last_index` is `OPEN` and the label runs up to whatever
    `current_end` the reader resolves it against.

    Attributes:
        start_node (int): Node the edge leaves from.
        end_node (int): Node the edge leads to.
        first_index (int): Store position of the first label symbol.
        last_index (int | float): Store position of the last label symbol, or `OPEN`.
    """
    __slots__ = ('start_node', 'end_node', 'first_index', 'last_index')

    def __init__(self, start_node: int, end_node: int, first_index: int, last_index: float = OPEN):
        self.start_node = start_node
        self.end_node = end_node
        self.first_index = first_index
        self.last_index = last_index

    @property
    def is_open(self) -> bool:
        return self.last_index == OPEN

    def resolved_last(self, current_end: int) -> int:
        """Last label position, with `OPEN` replaced by `current_end`."""
        return current_end if self.last_index == OPEN else int(self.last_index)

    def span(self, current_end: int) -> int:
        """`last - first` of the label: one less than its length."""
        return self.resolved_last(current_end) - self.first_index

    def length(self, current_end: int) -> int:
        """Number of symbols on the edge label when the text ends at `current_end`."""
        return max(self.span(current_end) + 1, 0)

    def __repr__(self) -> str:
        last = "OPEN" if self.is_open else self.last_index
        return (f"Edge(start_node={self.start_node}, end_node={self.end_node}, "
                f"first_index={self.first_index}, last_index={last})")


class EdgeTable:
    """Arena of nodes and their outgoing edges.

    Attributes:
        store (SymbolStore): The symbols edge ranges refer to.
    """

    def __init__(self, store: SymbolStore):
        self.store = store
        self._children: List[Dict[object, Edge]] = [{}]  # index 0 is the root
        self._edge_count = 0

    def new_node(self) -> int:
        """Allocates a fresh node id with no outgoing edges."""
        self._children.append({})
        return len(self._children) - 1

    @property
    def node_count(self) -> int:
        return len(self._children)

    @property
    def edge_count(self) -> int:
        return self._edge_count

    def _check_node(self, node: int) -> None:
        if not 0 <= node < len(self._children):
            raise SuffixTreeInvariantError(f"Node {node} was never allocated.")

    def find(self, node: int, symbol) -> Optional[Edge]:
        """Returns the edge leaving `node` whose label starts with `symbol`, if any."""
        return self._children[node].get(symbol)

    def require(self, node: int, symbol) -> Edge:
        """Like `find`, for lookups the build algorithm guarantees to succeed."""
        edge = self._children[node].get(symbol)
        if edge is None:
            raise SuffixTreeInvariantError(
                f"Expected an edge from node {node} starting with {symbol!r}, found none.")
        return edge

    def insert(self, edge: Edge) -> None:
        """Adds `edge` under `(edge.start_node, first symbol of its label)`.

        Raises:
            SuffixTreeInvariantError: If that slot is already taken or a node is unknown.
        """
        self._check_node(edge.start_node)
        self._check_node(edge.end_node)
        key = self.store[edge.first_index]
        children = self._children[edge.start_node]
        if key in children:
            raise SuffixTreeInvariantError(
                f"Node {edge.start_node} already has an edge starting with {key!r}: {children[key]!r}")
        children[key] = edge
        self._edge_count += 1

    def remove(self, edge: Edge) -> None:
        """Removes `edge` from the table. The edge must currently be stored."""
        key = self.store[edge.first_index]
        children = self._children[edge.start_node]
        if children.get(key) is not edge:
            raise SuffixTreeInvariantError(f"Cannot remove {edge!r}: not in the edge table.")
        del children[key]
        self._edge_count -= 1

    def split(self, edge: Edge, symbol_count: int) -> int:
        """Splits `edge` after its first `symbol_count` symbols.

        Edge `(s, e, a, b)` becomes `(s, m, a, a+k-1)` followed by the remainder
        `(m, e, a+k, b)`, where `m` is a new explicit node and `k` is
        `symbol_count`. The remainder keeps its `OPEN` end if it had one.

        Returns:
            The new intermediate node `m`.
        """
        if symbol_count < 1 or (not edge.is_open and symbol_count > edge.span(0)):
            raise SuffixTreeInvariantError(
                f"Cannot split {edge!r} after {symbol_count} symbols.")
        self.remove(edge)
        middle = self.new_node()
        self.insert(Edge(edge.start_node, middle, edge.first_index, edge.first_index + symbol_count - 1))
        # The original edge object is reused as the remainder.
        edge.start_node = middle
        edge.first_index += symbol_count
        self.insert(edge)
        return middle

    def edges_from(self, node: int) -> Iterator[Edge]:
        """Iterates the outgoing edges of `node` in insertion order."""
        return iter(self._children[node].values())

    def out_degree(self, node: int) -> int:
        return len(self._children[node])

    def is_leaf(self, node: int) -> bool:
        return not self._children[node]

    def __iter__(self) -> Iterator[Edge]:
        """Iterates every edge in the table, grouped by start node."""
        for children in self._children:
            yield from children.values()

    def __len__(self) -> int:
        return self._edge_count
