"""
backprop: scalar reverse-mode automatic differentiation.

Usage:
    from backprop import leaf, backward

    x1, w1, b = leaf(2.0, "x1"), leaf(-3.0, "w1"), leaf(6.88, "b")
    o = (x1 * w1 + b).tanh()
    backward(o)
    w1.gradient   # d(o)/d(w1)
"""

from .core.node import Op
from .core.errors import BackPropError, MalformedNode, UnsupportedOperandKind
from .core.var import Value, leaf
from .core.tape import Tape, use_tape
from .core.engine import backward, descend, reset_gradients, topological_order, zero_gradients
from .core.seeds import grad, grads, grads_list, value
from .core.graph_utils import render, graph_summary, print_graph_summary
from .ops import add, subtract, multiply, divide, neg, power, exp, tanh, relu, sigmoid
from .perceptron import Neuron, Layer, MLP, mean_squared_error, rand_inputs, rand_outputs
from .config import TrainConfig
from .train import build_model, train

__version__ = "0.1.0"

__all__ = [
    # Core
    'Op', 'Value', 'leaf', 'Tape', 'use_tape',
    'BackPropError', 'MalformedNode', 'UnsupportedOperandKind',
    # Engine
    'backward', 'descend', 'reset_gradients', 'topological_order', 'zero_gradients',
    'grad', 'grads', 'grads_list', 'value',
    'render', 'graph_summary', 'print_graph_summary',
    # Operators
    'add', 'subtract', 'multiply', 'divide', 'neg', 'power',
    'exp', 'tanh', 'relu', 'sigmoid',
    # Perceptron
    'Neuron', 'Layer', 'MLP', 'mean_squared_error', 'rand_inputs', 'rand_outputs',
    'TrainConfig', 'build_model', 'train',
]
