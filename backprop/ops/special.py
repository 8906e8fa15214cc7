# backprop/ops/special.py
from ..core.var import Value
from ..core.node import Op
from .arithmetic import _as_value, add, multiply, power
from .transcendental import exp

def relu(x):
    """Rectified linear unit: x if x > 0 else 0 (gradient 0 at x == 0)."""
    x = _as_value(x)
    val = x.value if x.value > 0 else 0.0
    return Value(val, op=Op.RELU, operands=(x,))

def sigmoid(x):
    """
    1 / (1 + e^-x), composed from primitives:
        power(add(exp(multiply(x, -1)), 1), -1)
    so the gradient falls out of the chain rule.
    """
    return power(add(exp(multiply(x, Value(-1))), Value(1)), -1)
