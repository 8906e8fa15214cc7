import numpy as np
import pytest

from backprop import (
    leaf, use_tape, backward, descend, reset_gradients, topological_order, zero_gradients,
    grad, grads, grads_list, value, render, graph_summary, print_graph_summary,
)


def test_shared_node_accumulates_both_paths():
    a, b = leaf(3.0), leaf(4.0)
    e = a * b
    d = e + a
    backward(d)
    assert a.gradient == 5.0
    assert b.gradient == 3.0


def test_same_node_on_both_sides():
    a = leaf(3.0)
    s = a + a
    backward(s)
    assert a.gradient == 2.0

    sq = a * a
    backward(sq)
    assert a.gradient == 6.0


def test_diamond_shaped_graph():
    # f = (a*2) * (a+1); df/da = 4a + 2
    a = leaf(1.5)
    left = a * 2
    right = a + 1
    f = left * right
    backward(f)
    assert a.gradient == pytest.approx(4 * 1.5 + 2)


def test_neuron_example():
    x1, x2 = leaf(2.0, "x1"), leaf(0.0, "x2")
    w1, w2 = leaf(-3.0, "w1"), leaf(1.0, "w2")
    b = leaf(6.8813735870195432, "b")
    n = x1 * w1 + x2 * w2 + b
    o = n.tanh()
    assert o.value == pytest.approx(0.7071067811865476)

    backward(o)
    assert x1.gradient == pytest.approx(-1.5)
    assert w1.gradient == pytest.approx(1.0)
    assert x2.gradient == pytest.approx(0.5)
    assert w2.gradient == pytest.approx(0.0)
    assert b.gradient == pytest.approx(0.5)


def test_backward_is_idempotent():
    a, b = leaf(3.0), leaf(-2.0)
    loss = ((a * b + a).tanh() - b) ** 2
    backward(loss)
    first = [n.gradient for n in topological_order(loss)]
    backward(loss)
    second = [n.gradient for n in topological_order(loss)]
    assert first == second


def test_backward_only_touches_reachable_nodes():
    a, b = leaf(1.0), leaf(2.0)
    unrelated = a * 10
    s = a + b
    backward(unrelated)
    backward(s)
    assert unrelated.gradient == 1.0
    assert a.gradient == 1.0


def test_topological_order_places_each_node_once_after_its_operands():
    a, b = leaf(3.0), leaf(4.0)
    e = a * b
    d = e + a
    order = topological_order(d)
    assert order[-1] is d
    assert len(order) == len({id(n) for n in order}) == 4
    position = {id(n): i for i, n in enumerate(order)}
    for node in order:
        for operand in node.operands:
            assert position[id(operand)] < position[id(node)]


def test_deep_chain_does_not_recurse():
    x = leaf(0.5)
    y = x
    for _ in range(5000):
        y = y + 0.0
    backward(y)
    assert x.gradient == 1.0


def test_reset_and_zero_gradients():
    with use_tape():
        a = leaf(2.0)
        y = a * a
        backward(y)
        assert a.gradient == 4.0
        reset_gradients(y)
        assert a.gradient == 0.0 and y.gradient == 0.0

        backward(y)
        zero_gradients()
        assert a.gradient == 0.0 and y.gradient == 0.0


def test_descend():
    w = leaf(0.5)
    y = w * 4
    backward(y)
    descend(w, 0.1)
    assert w.value == pytest.approx(0.5 - 0.1 * 4)
    assert w.gradient == 4.0
    assert y.value == 2.0


def test_descend_propagates_nan():
    w = leaf(1.0)
    w.gradient = float("nan")
    descend(w, 0.1)
    assert np.isnan(w.value)


def test_grad_helpers():
    assert grad(lambda x: x ** 3, 2.0) == pytest.approx(12.0)
    result = grads(lambda v: v["x"] * v["y"] + v["x"], {"x": 2.0, "y": 5.0})
    assert list(result) == ["x", "y"]
    assert result["x"] == pytest.approx(6.0)
    assert result["y"] == pytest.approx(2.0)
    assert grads_list(lambda xs: xs[0] * xs[0] + 3 * xs[1], [2.0, 4.0]) == pytest.approx([4.0, 3.0])
    assert grad(lambda x: 7.0, 1.0) == 0.0
    assert value(leaf(1.25)) == 1.25
    assert value(3) == 3


def test_render_walks_the_subgraph():
    a, b = leaf(3.0, "a"), leaf(4.0, "b")
    d = a * b + a
    backward(d)
    lines = render(d).splitlines()
    assert lines[0] == d.display()
    assert lines[1] == "\t" + d.operands[0].display()
    assert lines[2] == "\t\t" + a.display()
    assert sum(line.strip() == a.display() for line in lines) == 2


def test_graph_summary(capsys):
    with use_tape() as tape:
        a, b = leaf(3.0), leaf(4.0)
        e = a * b
        d = e + a
        summary = graph_summary(tape)
        printed = print_graph_summary(tape, detailed=True)
    assert summary == printed
    assert summary["nodes"] == 4
    assert summary["edges"] == 4
    assert summary["max_fan_out"] == 2
    assert summary["operations"] == {"leaf": 2, "multiply": 1, "add": 1}
    assert "COMPUTATION GRAPH SUMMARY" in capsys.readouterr().out
    assert graph_summary(type(tape)()) == {}


def test_detailed_listing_uses_indices_of_the_printed_tape(capsys):
    w = leaf(0.5)
    with use_tape() as tape:
        x = leaf(2.0)
        y = w * x
        print_graph_summary(tape, detailed=True)
    out = capsys.readouterr().out
    assert "Node   0: leaf         <- []" in out
    assert "Node   1: multiply     <- [external, Node0]" in out
