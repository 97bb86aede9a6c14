from esynth.fragment_graph import SimpleFragmentGraph


def test_empty_graph():
    graph = SimpleFragmentGraph()
    assert len(graph) == 0
    assert str(graph) == "(#0): "


def test_copy_and_append_keeps_order_and_original():
    graph = SimpleFragmentGraph()
    g1 = graph.copy_and_append(5)
    g2 = g1.copy_and_append(2)
    g3 = g2.copy_and_append(7)
    assert g3.edges == (2, 5, 7)
    assert len(g1) == 1
    assert len(graph) == 0


def test_str_format():
    graph = SimpleFragmentGraph().copy_and_append(3).copy_and_append(1)
    assert str(graph) == "(#2): 1 3 "


def test_isomorphic_regardless_of_insertion_order():
    a = SimpleFragmentGraph().copy_and_append(1).copy_and_append(4).copy_and_append(2)
    b = SimpleFragmentGraph().copy_and_append(4).copy_and_append(2).copy_and_append(1)
    assert a.is_isomorphic_to(b)
    assert b.is_isomorphic_to(a)


def test_not_isomorphic_different_sizes():
    a = SimpleFragmentGraph([1, 2])
    b = SimpleFragmentGraph([1, 2, 3])
    assert not a.is_isomorphic_to(b)


def test_not_isomorphic_different_edges():
    a = SimpleFragmentGraph([1, 2])
    b = SimpleFragmentGraph([1, 3])
    assert not a.is_isomorphic_to(b)


def test_duplicate_edges_kept():
    graph = SimpleFragmentGraph([2]).copy_and_append(2)
    assert graph.edges == (2, 2)