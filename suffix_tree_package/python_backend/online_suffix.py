'''Pure Python implementation of online suffix tree construction (Ukkonen's algorithm).

This module provides the `ExtensionEngine`, which grows a suffix tree one symbol
at a time, together with the small state objects it threads through every
phase (`ActivePoint`, `BuilderState`).

The tree itself is not made of node objects pointing at each other. Nodes are
integers; the structure lives in two flat tables:

- `EdgeTable`: `(node, first symbol) -> Edge`, the transition function.
- `SuffixLinkTable`: `node -> node`, used to jump from the insertion point of
  one suffix to the insertion point of the next one without re-walking from
  the root.

Per phase (one new symbol at position `i`) the engine:

1. moves the shared current end to `i`, which lengthens every open leaf edge
   at once (Rule 1, no work);
2. repeatedly inserts the new symbol below the active point, creating a leaf
   (Rule 2, splitting an edge first when the active point is mid-edge), wiring
   suffix links between consecutive branching points and moving the active
   point to the next shorter suffix;
3. stops as soon as the symbol is already present below the active point
   (Rule 3), links the last branching point, and pushes the active range one
   symbol further.

Canonization keeps the active point expressed from the deepest explicit node
by skipping whole edges (skip/count); it is what keeps the total work linear.

Classes:
    ActivePoint: Current insertion position (node plus implicit range).
    BuilderState: Active point, current end and pending suffix-link source.
    ExtensionEngine: Applies the extension rules for each symbol.
'''
import logging
from typing import Callable, Optional

from ..exceptions import BuildCancelledError, SuffixTreeInvariantError
from .edge_table import ROOT, Edge, EdgeTable
from .suffix_links import SuffixLinkTable
from .symbol_store import SymbolStore

log = logging.getLogger(__name__)

CANCEL_CHECK_INTERVAL = 1024  # symbols between two calls of the cancellation check


class ActivePoint:
    """Where the next extension happens.

    The active point is `node` followed by the symbols
    `store[first_index..last_index]`. When that range is empty
    (`first_index > last_index`) the point sits exactly on `node` (explicit);
    otherwise it sits partway along the edge leaving `node` with the symbol at
    `first_index` (implicit).
    """
    __slots__ = ('node', 'first_index', 'last_index')

    def __init__(self, node: int = ROOT, first_index: int = 0, last_index: int = -1):
        self.node = node
        self.first_index = first_index
        self.last_index = last_index

    @property
    def is_explicit(self) -> bool:
        return self.first_index > self.last_index

    def __repr__(self) -> str:
        return (f"ActivePoint(node={self.node}, first_index={self.first_index}, "
                f"last_index={self.last_index})")


class BuilderState:
    """Mutable build state carried from one phase to the next.

    Attributes:
        active (ActivePoint): The active point.
        current_end (int): Position of the last symbol consumed; every open
                           leaf edge ends here. -1 before the first phase.
        last_created_node (int | None): Branching point created or used by the
                                        previous extension of the current phase,
                                        still waiting for its suffix link.
    """
    __slots__ = ('active', 'current_end', 'last_created_node')

    def __init__(self):
        self.active = ActivePoint()
        self.current_end = -1
        self.last_created_node: Optional[int] = None

    def __repr__(self) -> str:
        return (f"BuilderState(active={self.active!r}, current_end={self.current_end}, "
                f"last_created_node={self.last_created_node})")


class ExtensionEngine:
    """Grows a suffix tree over a `SymbolStore`, one symbol per `extend` call.

    The engine owns nothing global: the tables and the state are passed in (or
    created fresh), so a single phase can be driven and inspected in isolation.

    Attributes:
        store (SymbolStore): The symbols being indexed.
        edges (EdgeTable): Nodes and edges built so far.
        links (SuffixLinkTable): Suffix links built so far.
        state (BuilderState): Active point, current end and pending link source.
    """

    def __init__(self, store: SymbolStore, edges: Optional[EdgeTable] = None,
                 links: Optional[SuffixLinkTable] = None, state: Optional[BuilderState] = None):
        self.store = store
        self.edges = edges if edges is not None else EdgeTable(store)
        self.links = links if links is not None else SuffixLinkTable()
        self.state = state if state is not None else BuilderState()

    def run(self, cancel_check: Optional[Callable[[], bool]] = None) -> None:
        """Feeds every remaining symbol of the store, terminator included.

        Args:
            cancel_check: Optional callable polled every `CANCEL_CHECK_INTERVAL`
                          symbols; returning True abandons the build.

        Raises:
            BuildCancelledError: If `cancel_check` asked to stop.
            SuffixTreeInvariantError: If the engine detects an internal inconsistency.
        """
        for index in range(self.state.current_end + 1, len(self.store)):
            if cancel_check is not None and index % CANCEL_CHECK_INTERVAL == 0 and cancel_check():
                raise BuildCancelledError(
                    f"Suffix tree construction cancelled after {index} of {len(self.store)} symbols.")
            self.extend(index)

    def extend(self, index: int) -> int:
        """Runs one phase: adds the symbol at `index` to every suffix in the tree.

        Symbols must be fed in order, starting at 0.

        Args:
            index: Store position of the symbol to add.

        Returns:
            The number of leaves created in this phase (Rule 2 applications).
        """
        state = self.state
        active = state.active
        store = self.store
        edges = self.edges
        trace = log.isEnabledFor(logging.DEBUG)

        if index != state.current_end + 1 or index > store.last_index:
            raise SuffixTreeInvariantError(
                f"Symbol {index} fed out of order (current end is {state.current_end}, "
                f"store ends at {store.last_index}).")
        if active.last_index != state.current_end:
            raise SuffixTreeInvariantError(
                f"{active!r} does not end at the consumed input (current end {state.current_end}).")

        state.current_end = index  # Rule 1: all open leaf edges now end at `index`
        state.last_created_node = None
        symbol = store[index]
        new_leaves = 0

        while True:
            branch_node = active.node
            if active.is_explicit:
                if edges.find(active.node, symbol) is not None:
                    break  # Rule 3: already below the active node
            else:
                edge = edges.require(active.node, store[active.first_index])
                span = active.last_index - active.first_index
                if store[edge.first_index + span + 1] == symbol:
                    break  # Rule 3: already present mid-edge
                if trace:
                    log.debug("Splitting edge %r after %d symbols", edge, span + 1)
                branch_node = edges.split(edge, span + 1)

            # Rule 2: new open leaf below the branching point.
            leaf = Edge(branch_node, edges.new_node(), index)
            edges.insert(leaf)
            new_leaves += 1
            if trace:
                log.debug("Created edge to new leaf: %r", leaf)

            if state.last_created_node is not None:
                self._link(state.last_created_node, branch_node, trace)
            state.last_created_node = branch_node if branch_node != ROOT else None

            if active.node == ROOT:
                if trace:
                    log.debug("Can't follow suffix link from the root, shrinking the active range")
                active.first_index += 1
            else:
                target = self.links.require(active.node)
                if trace:
                    log.debug("Following suffix link from node %d to node %d", active.node, target)
                active.node = target
            self.canonize()

        if state.last_created_node is not None:
            self._link(state.last_created_node, active.node, trace)
            state.last_created_node = None

        active.last_index += 1  # the endpoint the next phase starts from
        self.canonize()
        return new_leaves

    def _link(self, node: int, target: int, trace: bool) -> None:
        if trace:
            log.debug("Creating suffix link from node %d to node %d", node, target)
        self.links.set(node, target)

    def canonize(self) -> None:
        """Moves the active point to the deepest explicit node on its path.

        Whole edges are skipped by comparing their length to the remaining
        active range; symbols along them are never compared.
        """
        active = self.state.active
        if active.is_explicit:
            return
        current_end = self.state.current_end
        if active.last_index > current_end or active.first_index < 0:
            raise SuffixTreeInvariantError(
                f"{active!r} refers to symbols outside the consumed input (current end {current_end}).")

        edge = self.edges.require(active.node, self.store[active.first_index])
        span = edge.span(current_end)
        while span <= active.last_index - active.first_index:
            active.first_index += span + 1
            active.node = edge.end_node
            if active.is_explicit:
                break
            edge = self.edges.require(active.node, self.store[active.first_index])
            span = edge.span(current_end)
