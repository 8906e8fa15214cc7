import logging

import numpy as np
import pytest

from backprop import (
    leaf, backward, Neuron, Layer, MLP, TrainConfig, build_model, train,
    mean_squared_error, rand_inputs, rand_outputs,
)


def test_neuron_apply_builds_weighted_sum():
    n = Neuron(2, activation="tanh", rng=np.random.default_rng(0))
    n.weights[0].value, n.weights[1].value, n.bias.value = -3.0, 1.0, 6.8813735870195432
    out = n.apply([2.0, 0.0])
    assert out.value == pytest.approx(0.7071067811865476)

    backward(out)
    w1, w2 = n.weights
    assert w1.gradient == pytest.approx(1.0)
    assert w2.gradient == pytest.approx(0.0)
    assert n.bias.gradient == pytest.approx(0.5)


def test_neuron_broadcasts_scalar_input():
    n = Neuron(3, activation="relu", rng=np.random.default_rng(1))
    expected = sum(w.value for w in n.weights) * 0.5 + n.bias.value
    assert n.apply(0.5).value == pytest.approx(max(expected, 0.0))


def test_neuron_rejects_wrong_input_count():
    n = Neuron(3)
    with pytest.raises(ValueError):
        n.apply([1.0, 2.0])


def test_unknown_activation():
    with pytest.raises(ValueError):
        Neuron(2, activation="softplus")


def test_parameters_are_initialised_in_range():
    net = MLP(3, [4, 4, 1], rng=np.random.default_rng(7))
    params = net.parameters()
    assert len(params) == (3 + 1) * 4 + (4 + 1) * 4 + (4 + 1) * 1
    assert all(-1.0 <= p.value < 1.0 for p in params)
    assert all(p.gradient == 0 for p in params)


def test_layer_and_mlp_shapes():
    rng = np.random.default_rng(3)
    layer = Layer(2, 5, activation="sigmoid", rng=rng)
    outs = layer.apply([0.1, -0.2])
    assert len(outs) == 5
    assert all(0.0 < o.value < 1.0 for o in outs)

    net = MLP(2, [3, 2], activation="tanh", rng=rng)
    assert len(net.layers) == 2
    assert len(net.apply([0.1, 0.2])) == 2
    assert len(str(net).split("\n\n")) == 2
    assert len(net.inspect().splitlines()) == 3 + 1 + 2


def test_mean_squared_error():
    p = [leaf(1.0), leaf(3.0)]
    loss = mean_squared_error([0.0, 1.0], p)
    assert loss.value == pytest.approx((1.0 + 4.0) / 2)
    backward(loss)
    assert p[0].gradient == pytest.approx(1.0)
    assert p[1].gradient == pytest.approx(2.0)

    with pytest.raises(ValueError):
        mean_squared_error([1.0], p)
    with pytest.raises(ValueError):
        mean_squared_error([], [])


def test_descend_moves_every_parameter():
    net = MLP(2, [2, 1], activation="tanh", rng=np.random.default_rng(5))
    loss = mean_squared_error([1.0], [net.apply([0.3, -0.4])[0]])
    backward(loss)
    before = [(p.value, p.gradient) for p in net.parameters()]
    net.descend(0.5)
    for p, (v, g) in zip(net.parameters(), before):
        assert p.value == pytest.approx(v - 0.5 * g)


def test_random_data_helpers():
    rng = np.random.default_rng(11)
    xs = rand_inputs(4, 10, rng=rng)
    ys = rand_outputs(10, rng=rng)
    assert len(xs) == 10 and all(len(row) == 4 for row in xs)
    assert all(-1.0 <= x < 1.0 for row in xs for x in row)
    assert len(ys) == 10 and all(0.0 <= y.value < 1.0 for y in ys)


@pytest.mark.parametrize("kwargs", [
    {"step_size": 0.0},
    {"iterations": -1},
    {"log_every": 0},
    {"structure": []},
    {"structure": [4, 0]},
    {"activation": "softplus"},
])
def test_train_config_validation(kwargs):
    with pytest.raises(ValueError):
        TrainConfig(**kwargs)


def test_training_reduces_loss(caplog):
    config = TrainConfig(structure=[4, 1], activation="tanh", step_size=0.05,
                         iterations=60, log_every=20, seed=42)
    rng = np.random.default_rng(0)
    inputs = rand_inputs(3, 4, rng=rng)
    targets = [0.5, -0.5, 0.25, -0.25]
    model = build_model(3, config)

    with caplog.at_level(logging.INFO, logger="backprop.train"):
        history = train(model, inputs, targets, config)

    assert history.shape == (60,)
    assert history[-1] < history[0]
    assert sum(r.getMessage().startswith("iteration ") for r in caplog.records) == 3


def test_build_model_is_seeded():
    config = TrainConfig(seed=9)
    a = [p.value for p in build_model(4, config).parameters()]
    b = [p.value for p in build_model(4, config).parameters()]
    assert a == b


def test_train_rejects_mismatched_data():
    config = TrainConfig(iterations=1)
    with pytest.raises(ValueError):
        train(build_model(2, config), [[0.0, 1.0]], [1.0, 0.0], config)
