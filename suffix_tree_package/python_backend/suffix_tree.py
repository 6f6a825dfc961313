'''Suffix tree built online with Ukkonen's algorithm, and its read operations.

`SuffixTree` builds the full tree for a sequence (plus a terminator) when it is
created and is read-only afterwards, so several threads may query one tree at
the same time. Building is done by the `ExtensionEngine` from
`online_suffix`; this module only holds the finished tables and walks them.

Features:
- Substring search: `contains_substring` walks edges from the root and accepts
  queries that end in the middle of an edge.
- Suffix enumeration: `iter_suffixes` / `all_suffixes` walk the structural
  tree (never the suffix links) with an explicit stack.
- Diagnostics: an edge table dump (`to_debug_string`), a text rendering
  (`render`, `display`), a full invariant check (`check_invariants`) and an
  optional Graphviz export (`display_graphviz`, needs the `graphviz` library).

The module-level functions `construct`, `contains_substring`, `all_suffixes`
and `to_debug_string` are thin functional spellings of the same operations.
'''
import logging
from typing import Callable, Hashable, Iterable, Iterator, List, Optional, Sequence, Set

import numpy as np

from ..exceptions import SuffixTreeInvariantError
from .edge_table import ROOT, Edge, EdgeTable
from .online_suffix import ExtensionEngine
from .suffix_links import SuffixLinkTable
from .symbol_store import SymbolStore

log = logging.getLogger(__name__)


class SuffixTree:
    """A suffix tree over one sequence.

    Attributes:
        store (SymbolStore): Input symbols followed by the terminator.
        edges (EdgeTable): Nodes and edges of the finished tree.
        links (SuffixLinkTable): Suffix links of the finished tree.
    """

    def __init__(self, sequence: Sequence, terminator: Optional[Hashable] = None,
                 cancel_check: Optional[Callable[[], bool]] = None):
        """Builds the suffix tree of `sequence`.

        Args:
            sequence: A non-empty `str`, or a sequence of hashable symbols.
            terminator: Symbol appended to the input; must not occur in it.
                        Defaults to `"$"` for text and `END_OF_SEQUENCE` otherwise.
            cancel_check: Optional callable polled during the build; when it
                          returns True the build stops with `BuildCancelledError`.

        Raises:
            InvalidInputError: If the input or the terminator is unusable.
            BuildCancelledError: If `cancel_check` asked to stop.
        """
        self.store = SymbolStore(sequence, terminator)
        engine = ExtensionEngine(self.store)
        engine.run(cancel_check)
        self.edges: EdgeTable = engine.edges
        self.links: SuffixLinkTable = engine.links
        self._end = engine.state.current_end
        log.info("Built suffix tree over %d symbols: %d nodes, %d edges, %d suffix links",
                 len(self.store), self.edges.node_count, self.edges.edge_count, len(self.links))

    @property
    def text(self):
        """The indexed input, without the terminator."""
        return self.store.text

    @property
    def terminator(self):
        return self.store.terminator

    @property
    def node_count(self) -> int:
        return self.edges.node_count

    @property
    def edge_count(self) -> int:
        return self.edges.edge_count

    @property
    def leaf_count(self) -> int:
        return sum(1 for node in range(1, self.edges.node_count) if self.edges.is_leaf(node))

    def __len__(self) -> int:
        return len(self.store) - 1

    def __contains__(self, query) -> bool:
        return self.contains_substring(query)

    def __repr__(self) -> str:
        return f"SuffixTree({self.text!r}, nodes={self.node_count}, edges={self.edge_count})"

    def _label(self, edge: Edge):
        return self.store.segment(edge.first_index, edge.resolved_last(self._end))

    def contains_substring(self, query) -> bool:
        """Checks whether `query` occurs in the indexed sequence.

        Args:
            query: The symbols to look for (a `str` for text trees, any
                   sequence of symbols otherwise).

        Returns:
            True if `query` is a substring of the input. The empty query is
            always found; a query containing the terminator never is.
        """
        query = self.store.coerce(query)
        if not query:
            return True
        if self.store.contains_terminator(query):
            return False

        node = ROOT
        position = 0
        while position < len(query):
            edge = self.edges.find(node, query[position])
            if edge is None:
                return False
            label = self._label(edge)
            chunk = query[position:position + len(label)]
            if label[:len(chunk)] != chunk:
                return False
            position += len(chunk)
            node = edge.end_node
        return True

    def contains_batch(self, patterns: Iterable) -> np.ndarray:
        """Runs `contains_substring` for every pattern.

        Returns:
            A boolean numpy array, one entry per pattern.
        """
        return np.array([self.contains_substring(p) for p in patterns], dtype=bool)

    def iter_suffixes(self, include_empty: bool = False) -> Iterator:
        """Yields every suffix of the input, terminator stripped.

        Each call returns a fresh generator. Suffix links are never followed.

        Args:
            include_empty: Also yield the empty suffix (the leaf holding only
                           the terminator). Defaults to False.
        """
        store = self.store
        stack = [(ROOT, store.empty())]
        while stack:
            node, prefix = stack.pop()
            for edge in self.edges.edges_from(node):
                path = prefix + self._label(edge)
                if self.edges.is_leaf(edge.end_node):
                    suffix = store.strip_terminator(path)
                    if suffix or include_empty:
                        yield suffix
                else:
                    stack.append((edge.end_node, path))

    def all_suffixes(self, include_empty: bool = False) -> Set:
        """Returns the set of suffixes of the input (see `iter_suffixes`)."""
        return set(self.iter_suffixes(include_empty))

    def _format(self, label) -> str:
        if self.store.is_text:
            return label
        return " ".join(str(symbol) for symbol in label)

    def _ordered_edges(self, node: int) -> List[Edge]:
        edges = list(self.edges.edges_from(node))
        try:
            return sorted(edges, key=lambda e: self.store[e.first_index])
        except TypeError:
            # Symbols without an ordering keep insertion order.
            return edges

    def to_debug_string(self) -> str:
        """Dumps the edge table: one row per edge, plus the suffix link of its end node."""
        rows = ["Start\tEnd\tSuf\tFirst\tLast\tString"]
        for edge in sorted(self.edges, key=lambda e: (e.start_node, e.end_node)):
            link = self.links.get(edge.end_node)
            rows.append(f"{edge.start_node}\t{edge.end_node}\t{-1 if link is None else link}\t"
                        f"{edge.first_index}\t{edge.resolved_last(self._end)}\t"
                        f"{self._format(self._label(edge))}")
        return "\n".join(rows)

    def render(self) -> str:
        """Returns a box-drawing rendering of the tree, children in symbol order."""
        lines = [f"Suffix Tree of {self.text!r} (Root):"]
        stack = []

        def push_children(node, prefix):
            children = self._ordered_edges(node)
            for i in reversed(range(len(children))):
                stack.append((children[i], prefix, i == len(children) - 1))

        push_children(ROOT, "")
        while stack:
            edge, prefix, is_last_child = stack.pop()
            connector = "└── " if is_last_child else "├── "
            link = self.links.get(edge.end_node)
            link_info = f" (SL->{link})" if link is not None else ""
            lines.append(f"{prefix}{connector}'{self._format(self._label(edge))}' "
                         f"(to node {edge.end_node}{link_info})")
            push_children(edge.end_node, prefix + ("    " if is_last_child else "│   "))
        return "\n".join(lines)

    def display(self) -> None:
        """Prints `render()` for debugging."""
        print(self.render())

    def __str__(self) -> str:
        suffixes = list(self.iter_suffixes())
        try:
            suffixes.sort()
        except TypeError:
            pass  # unorderable symbols: keep traversal order
        lines = [f"Suffixes of {self.text!r}"]
        lines.extend(self._format(s) for s in suffixes)
        return "\n".join(lines)

    def display_graphviz(self, view_now: bool = False):
        """Builds a Graphviz Digraph of the tree, suffix links drawn dashed.

        Requires the optional `graphviz` Python library.

        Args:
            view_now (bool): Render and open the graph immediately. Defaults to False.

        Returns:
            graphviz.Digraph, or None if the `graphviz` library is not installed.
        """
        try:
            import graphviz
        except ImportError:
            log.warning("Graphviz library not found. Install it to use display_graphviz: pip install graphviz")
            return None

        dot = graphviz.Digraph(comment='Suffix Tree')
        dot.attr(rankdir='TB')
        dot.node(str(ROOT), "R")
        for edge in self.edges:
            dot.node(str(edge.end_node), "")
            dot.edge(str(edge.start_node), str(edge.end_node), label=self._format(self._label(edge)))
        for node, target in self.links.items():
            dot.edge(str(node), str(target), style='dashed', arrowhead='empty', color='grey')

        if view_now:
            try:
                dot.view()
            except graphviz.ExecutableNotFound as e:
                log.warning("Could not view graph, Graphviz executables are missing: %s", e)
        return dot

    def check_invariants(self) -> None:
        """Verifies the finished tree from scratch.

        Checks that every root-to-leaf path spells a distinct suffix (terminator
        included), that there is one leaf per stored symbol, that every internal
        node other than the root branches at least twice and that its suffix
        link leads to the node spelling the same string minus its first symbol.

        Raises:
            SuffixTreeInvariantError: On the first violation found.
        """
        store = self.store
        edges = self.edges
        paths = {ROOT: store.empty()}
        leaves = 0
        stack = [ROOT]
        while stack:
            node = stack.pop()
            if node != ROOT and edges.out_degree(node) < 2:
                raise SuffixTreeInvariantError(f"Internal node {node} has fewer than two children.")
            for edge in edges.edges_from(node):
                if edge.end_node in paths:
                    raise SuffixTreeInvariantError(f"Node {edge.end_node} is reachable twice.")
                label = self._label(edge)
                if not label:
                    raise SuffixTreeInvariantError(f"{edge!r} has an empty label.")
                path = paths[node] + label
                paths[edge.end_node] = path
                if edges.is_leaf(edge.end_node):
                    leaves += 1
                    if path != store.symbols[len(store) - len(path):]:
                        raise SuffixTreeInvariantError(
                            f"Path to leaf {edge.end_node} does not spell a suffix: {path!r}")
                else:
                    stack.append(edge.end_node)

        if leaves != len(store):
            raise SuffixTreeInvariantError(f"Expected {len(store)} leaves, found {leaves}.")
        if len(paths) != edges.node_count:
            raise SuffixTreeInvariantError(
                f"{edges.node_count - len(paths)} allocated nodes are unreachable from the root.")

        for node, path in paths.items():
            if node == ROOT or edges.is_leaf(node):
                continue
            target = self.links.get(node)
            if target is None:
                raise SuffixTreeInvariantError(f"Internal node {node} has no suffix link.")
            if paths.get(target) != path[1:]:
                raise SuffixTreeInvariantError(
                    f"Suffix link {node} -> {target} does not drop exactly the first symbol.")


def construct(sequence: Sequence, terminator: Optional[Hashable] = None,
              cancel_check: Optional[Callable[[], bool]] = None) -> SuffixTree:
    """Builds a `SuffixTree` over `sequence`. See `SuffixTree.__init__`."""
    return SuffixTree(sequence, terminator=terminator, cancel_check=cancel_check)


def contains_substring(tree: SuffixTree, query) -> bool:
    return tree.contains_substring(query)


def all_suffixes(tree: SuffixTree, include_empty: bool = False) -> Set:
    return tree.all_suffixes(include_empty)


def to_debug_string(tree: SuffixTree) -> str:
    return tree.to_debug_string()


# Example usage:
if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    print("--- SuffixTree (Python) Example ---")
    tree = construct("banana")
    tree.display()
    print(tree.to_debug_string())
    print(tree)

    for pattern in ["nan", "ana", "banana", "nx", "a$", ""]:
        print(f"Pattern '{pattern}': {'Found' if tree.contains_substring(pattern) else 'Not Found'}")

    tokens = construct(["the", "cat", "sat", "on", "the", "mat"])
    print(f"\nToken tree: {tokens!r}")
    print(f"('the', 'cat') found: {tokens.contains_substring(('the', 'cat'))}")
    print(f"('the', 'mat') found: {tokens.contains_substring(('the', 'mat'))}")
