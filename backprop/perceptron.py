"""
Multilayer perceptron built on backprop Values.

Neuron -> Layer -> MLP. Every weight and bias is a leaf Value, so a forward
pass records the whole network on the active tape and a single backward()
from the loss reaches every parameter.
"""

from __future__ import annotations
import numbers
import numpy as np
from typing import Callable, Dict, List, Optional, Sequence, Union

from .core.var import Value
from .core.engine import descend
from .ops import add, multiply, power, subtract, tanh, sigmoid, relu

# available activation functions for Values
ACTIVATIONS: Dict[str, Callable[[Value], Value]] = {
    "tanh": tanh,
    "sigmoid": sigmoid,
    "relu": relu,
}

Inputs = Union[float, Value, Sequence[Union[float, Value]]]


def _activation(name: str) -> Callable[[Value], Value]:
    fn = ACTIVATIONS.get(name)
    if fn is None:
        raise ValueError(
            f"Unknown activation {name!r}. "
            f"Available: {', '.join(sorted(ACTIVATIONS))}"
        )
    return fn


def _rng(rng: Optional[np.random.Generator]) -> np.random.Generator:
    return rng if rng is not None else np.random.default_rng()


class Neuron:
    """activation(sum(w_i * x_i) + b) with weights and bias drawn from [-1, 1)."""

    def __init__(self, input_count: int, activation: str = "relu",
                 rng: Optional[np.random.Generator] = None):
        rng = _rng(rng)
        self.activation = activation
        self._fn = _activation(activation)
        self.weights = [Value(w) for w in rng.uniform(-1.0, 1.0, input_count)]
        self.bias = Value(rng.uniform(-1.0, 1.0))

    def apply(self, x: Inputs = 0) -> Value:
        # a single number feeds every input
        if isinstance(x, (numbers.Real, Value)):
            x = [x] * len(self.weights)
        if len(x) != len(self.weights):
            raise ValueError(f"expected {len(self.weights)} inputs, got {len(x)}")
        total = Value(0)
        for w, xi in zip(self.weights, x):
            total = add(total, multiply(w, xi))
        return self._fn(add(total, self.bias))

    def descend(self, step_size: float) -> "Neuron":
        for p in self.parameters():
            descend(p, step_size)
        return self

    def parameters(self) -> List[Value]:
        return self.weights + [self.bias]

    def __str__(self):
        return "N(%s)\t(%s %s)" % (", ".join(str(w) for w in self.weights), self.bias, self.activation)

    def inspect(self) -> str:
        """Tab-separated value|gradient pairs, weights then bias."""
        fmt = "% .3f|% .3f"
        return "\t".join(fmt % (p.value, p.gradient) for p in self.parameters())


class Layer:
    def __init__(self, input_count: int, output_count: int, activation: str = "relu",
                 rng: Optional[np.random.Generator] = None):
        rng = _rng(rng)
        self.neurons = [Neuron(input_count, activation=activation, rng=rng)
                        for _ in range(output_count)]

    def apply(self, x: Inputs = 0) -> List[Value]:
        return [n.apply(x) for n in self.neurons]

    def descend(self, step_size: float) -> "Layer":
        for n in self.neurons:
            n.descend(step_size)
        return self

    def parameters(self) -> List[Value]:
        return [p for n in self.neurons for p in n.parameters()]

    def __str__(self):
        return "\n".join(str(n) for n in self.neurons)

    def inspect(self) -> str:
        return "\n".join(n.inspect() for n in self.neurons)


class MLP:
    """
    Ordered layers, each consuming the previous layer's outputs.

    MLP(3, [4, 4, 1]) has 3 inputs, two hidden layers of 4 and one output.
    """

    def __init__(self, input_count: int, output_counts: Sequence[int], activation: str = "relu",
                 rng: Optional[np.random.Generator] = None):
        rng = _rng(rng)
        sizes = [input_count, *output_counts]
        self.layers = [Layer(sizes[i], sizes[i + 1], activation=activation, rng=rng)
                       for i in range(len(output_counts))]

    def apply(self, x: Inputs = 0) -> List[Value]:
        for layer in self.layers:
            x = layer.apply(x)
        return x

    def descend(self, step_size: float) -> "MLP":
        for layer in self.layers:
            layer.descend(step_size)
        return self

    def parameters(self) -> List[Value]:
        return [p for layer in self.layers for p in layer.parameters()]

    def __str__(self):
        return "\n\n".join(str(layer) for layer in self.layers)

    def inspect(self) -> str:
        return "\n\n".join(layer.inspect() for layer in self.layers)


def mean_squared_error(targets: Sequence[Union[float, Value]],
                       predictions: Sequence[Value]) -> Value:
    """Mean of (prediction - target)^2, recorded as part of the graph."""
    if len(targets) != len(predictions):
        raise ValueError(
            f"targets and predictions differ in length: {len(targets)} vs {len(predictions)}"
        )
    if not predictions:
        raise ValueError("mean_squared_error needs at least one prediction")
    total = Value(0)
    for t, p in zip(targets, predictions):
        total = add(total, power(subtract(p, t), 2))
    return multiply(total, Value(1.0 / len(predictions)))


def rand_inputs(num_inputs: int, num_examples: int, low: float = -1.0, high: float = 1.0,
                rng: Optional[np.random.Generator] = None) -> List[List[float]]:
    """`num_examples` input rows of `num_inputs` uniform floats."""
    rows = _rng(rng).uniform(low, high, (num_examples, num_inputs))
    return rows.tolist()


def rand_outputs(num_examples: int, low: float = 0.0, high: float = 1.0,
                 rng: Optional[np.random.Generator] = None) -> List[Value]:
    """`num_examples` uniform target leaves."""
    return [Value(y, label=f"y{i}") for i, y in enumerate(_rng(rng).uniform(low, high, num_examples))]
