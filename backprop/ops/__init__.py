# backprop/ops/__init__.py

# Ensure operator overloading is available
from . import arithmetic
from . import transcendental
from . import special

# Convenience re-exports so users can do: from backprop.ops import multiply, tanh, ...
from .arithmetic import add, subtract, multiply, divide, neg, power
from .transcendental import exp, tanh
from .special import relu, sigmoid

__all__ = [
    "add", "subtract", "multiply", "divide", "neg", "power",
    "exp", "tanh",
    "relu", "sigmoid",
]
