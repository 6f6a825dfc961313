'''Tests for the public suffix tree API: construction, queries and diagnostics.'''
import logging
import sys
import os

_project_root_dir = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if _project_root_dir not in sys.path:
    sys.path.insert(0, _project_root_dir)

import numpy as np
import pytest

from suffix_tree_package import (
    SuffixTree, construct, contains_substring, all_suffixes, to_debug_string,
    InvalidInputError, BuildCancelledError, END_OF_SEQUENCE
)


def test_banana():
    tree = construct("banana")
    assert all_suffixes(tree, include_empty=True) == {"banana", "anana", "nana", "ana", "na", "a", ""}
    assert all_suffixes(tree) == {"banana", "anana", "nana", "ana", "na", "a"}
    assert contains_substring(tree, "nan")
    assert not contains_substring(tree, "nx")
    tree.check_invariants()


def test_abcabxabcd():
    tree = construct("abcabxabcd")
    assert contains_substring(tree, "abc")
    assert contains_substring(tree, "abcabxabcd")
    assert contains_substring(tree, "bxa")
    assert not contains_substring(tree, "xyz")
    assert not contains_substring(tree, "abcabxabcdd")
    tree.check_invariants()


def test_repeated_symbol_only_grows_leaves():
    tree = construct("aaaa")
    suffixes = all_suffixes(tree, include_empty=True)
    assert suffixes == {"aaaa", "aaa", "aa", "a", ""}
    assert len(suffixes) == 5
    # a -> {a -> {a -> {a$, $}, $}, $} plus the root's '$' leaf
    assert tree.leaf_count == 5
    assert tree.node_count == 9
    tree.check_invariants()


def test_bookkeeper():
    tree = SuffixTree("bookkeeper")
    assert tree.contains_substring("bookkeeper")
    assert not tree.contains_substring("booker")
    assert tree.contains_substring("kkee")
    assert not tree.contains_substring("bookkeeperZ")
    assert tree.contains_substring("bookke")


def test_single_symbol():
    tree = construct("a")
    assert all_suffixes(tree) == {"a"}
    assert all_suffixes(tree, include_empty=True) == {"a", ""}
    assert tree.contains_substring("a")
    assert not tree.contains_substring("aa")
    assert len(tree) == 1


def test_empty_input_is_rejected():
    with pytest.raises(InvalidInputError):
        construct("")
    with pytest.raises(InvalidInputError):
        construct([])


def test_terminator_collision_is_rejected():
    with pytest.raises(InvalidInputError):
        construct("banana$")
    with pytest.raises(InvalidInputError):
        construct("banana", terminator="n")


def test_invalid_input_is_a_value_error():
    with pytest.raises(ValueError):
        construct("")
    with pytest.raises(InvalidInputError):
        construct("abc", terminator="##")
    with pytest.raises(InvalidInputError):
        construct({"a", "b"})
    with pytest.raises(InvalidInputError):
        construct([["a"], ["b"]])


def test_custom_terminator():
    tree = construct("price: $5", terminator="\0")
    assert tree.terminator == "\0"
    assert tree.contains_substring("$5")
    assert all_suffixes(tree) == {"price: $5"[i:] for i in range(9)}
    assert not tree.contains_substring("5\0")


def test_empty_query_and_terminator_query():
    tree = construct("banana")
    assert tree.contains_substring("")
    assert not tree.contains_substring("a$")
    assert not tree.contains_substring("$")


def test_suffixes_sorted_match_suffix_array_order():
    string = "aasfaasdsadasdfasdasdasdasfdasfassdfas"
    tree = construct(string)
    expected = sorted(string[i:] for i in range(len(string)))
    assert sorted(tree.all_suffixes()) == expected
    assert len(tree.all_suffixes()) == len(string)


def test_iter_suffixes_is_lazy_and_restartable():
    tree = construct("mississippi")
    first = tree.iter_suffixes()
    assert next(first) in {"mississippi"[i:] for i in range(11)}
    assert sorted(tree.iter_suffixes()) == sorted("mississippi"[i:] for i in range(11))
    assert sorted(tree.iter_suffixes()) == sorted("mississippi"[i:] for i in range(11))


def test_queries_are_idempotent():
    tree = construct("mississippi")
    before = to_debug_string(tree)
    results = [tree.contains_substring(p) for p in ["ssi", "ippi", "sis", "pip"]]
    suffixes = tree.all_suffixes()
    assert [tree.contains_substring(p) for p in ["ssi", "ippi", "sis", "pip"]] == results
    assert tree.all_suffixes() == suffixes
    assert to_debug_string(tree) == before
    assert results == [True, True, True, False]


def test_token_sequences():
    words = ["the", "cat", "sat", "on", "the", "mat"]
    tree = construct(words)
    assert tree.terminator is END_OF_SEQUENCE
    assert tree.text == tuple(words)
    assert tree.contains_substring(("the", "cat"))
    assert tree.contains_substring(["on", "the", "mat"])
    assert not tree.contains_substring(("the", "sat"))
    assert tree.all_suffixes() == {tuple(words[i:]) for i in range(len(words))}
    tree.check_invariants()


def test_integer_sequences():
    values = [3, 1, 4, 1, 5, 9, 2, 6, 5, 3, 5]
    tree = construct(values, terminator=-1)
    assert tree.contains_substring([1, 5, 9])
    assert not tree.contains_substring([1, 4, 4])
    assert not tree.contains_substring([5, -1])
    assert tree.all_suffixes() == {tuple(values[i:]) for i in range(len(values))}
    with pytest.raises(InvalidInputError):
        construct([1, 2, -1], terminator=-1)


def test_contains_batch_returns_numpy():
    tree = construct("banana")
    found = tree.contains_batch(["ban", "nab", "ana", ""])
    assert isinstance(found, np.ndarray)
    assert found.dtype == bool
    assert found.tolist() == [True, False, True, True]
    assert "nan" in tree
    assert "nab" not in tree


def test_debug_string_lists_every_edge():
    tree = construct("banana")
    rows = to_debug_string(tree).splitlines()
    assert rows[0] == "Start\tEnd\tSuf\tFirst\tLast\tString"
    assert len(rows) == tree.edge_count + 1
    labels = {row.split("\t")[-1] for row in rows[1:]}
    assert "banana$" in labels
    assert "$" in labels


def test_render_and_str():
    tree = construct("abab")
    rendered = tree.render()
    assert rendered.splitlines()[0] == "Suffix Tree of 'abab' (Root):"
    assert "'ab'" in rendered
    assert "SL->" in rendered
    assert str(tree).splitlines() == ["Suffixes of 'abab'", "ab", "abab", "b", "bab"]


def test_display_prints_rendering(capsys):
    tree = construct("abab")
    tree.display()
    assert capsys.readouterr().out.strip() == tree.render()


def test_build_logs_summary(caplog):
    with caplog.at_level(logging.DEBUG, logger="suffix_tree_package"):
        construct("abcab")
    messages = [record.getMessage() for record in caplog.records]
    assert any(m.startswith("Built suffix tree over 6 symbols") for m in messages)
    assert any(m.startswith("Created edge to new leaf") for m in messages)
    assert any(m.startswith("Splitting edge") for m in messages)


def test_cancellation():
    with pytest.raises(BuildCancelledError):
        construct("abc" * 2000, cancel_check=lambda: True)

    calls = []
    def never_cancel():
        calls.append(1)
        return False

    tree = construct("abc" * 2000, cancel_check=never_cancel)
    assert tree.contains_substring("cabca")
    assert len(calls) >= 5


def test_display_graphviz():
    graphviz = pytest.importorskip("graphviz")
    tree = construct("banana")
    dot = tree.display_graphviz()
    assert isinstance(dot, graphviz.Digraph)
    assert "dashed" in dot.source
