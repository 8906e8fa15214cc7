# backprop/core/__init__.py

"""
Core public API for the backprop package.

Exports:
    Value          : The differentiable scalar node.
    leaf           : Wrap a raw number as a leaf node.
    Op             : Operation tags.
    global_tape    : The active arena (None outside use_tape()).
    use_tape       : Context manager to temporarily switch the active tape.
    backward       : Reset, seed and run one reverse pass from a root.
    descend        : One gradient-descent update of a node's value.
    zero_gradients : Reset all gradients on the active tape to zero.
    grad           : Convenience: derivative of a one-argument function.
    value          : Convenience: extract the primal value from a Value.
"""

from .node import Op
from .errors import BackPropError, MalformedNode, UnsupportedOperandKind
from .var import Value, leaf
from .tape import Tape, global_tape, use_tape
from .engine import backward, descend, reset_gradients, topological_order, zero_gradients
from .seeds import grad, grads, grads_list, value

__all__ = [
    "Op",
    "BackPropError", "MalformedNode", "UnsupportedOperandKind",
    "Value", "leaf",
    "Tape", "global_tape", "use_tape",
    "backward", "descend", "reset_gradients", "topological_order", "zero_gradients",
    "grad", "grads", "grads_list", "value",
]
