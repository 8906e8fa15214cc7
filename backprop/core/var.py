# backprop/core/var.py
from __future__ import annotations
import numbers
import numpy as np
from typing import Optional, Sequence

from .node import Op, ARITY
from .errors import MalformedNode
from . import tape as tape_mod  # Use module access for use_tape() compatibility


class Value:
    """
    A scalar node of the computation graph.

    Attributes
    ----------
    value : np.float64
        Forward (primal) result. Fixed at construction; only parameter leaves
        are nudged afterwards, by `descend`.
    gradient : float
        Accumulator for d(root)/d(self) from the last backward pass.
    op : Op
        Primitive that produced this node (`Op.LEAF` for inputs/constants).
    operands : tuple of Value
        Inputs of `op`, exactly `ARITY[op]` of them.
    label : str
        Optional debug name; no computational effect.
    exponent : Optional[float]
        Constant exponent of a POWER node, None otherwise.
    """

    def __init__(self, value, label: str = "", op: Optional[Op] = None,
                 operands: Sequence[Value] = (), exponent=None):
        if not isinstance(value, numbers.Real):
            raise TypeError(
                f"Value only accepts real numbers, but got {type(value)}"
            )
        operands = tuple(operands)
        if op is not None and not isinstance(op, Op):
            raise MalformedNode(f"op must be an Op member, got {op!r}")
        if op is None or op is Op.LEAF:
            if operands:
                raise MalformedNode(f"{len(operands)} operand(s) given without an op")
            op = Op.LEAF
        elif not operands:
            raise MalformedNode(f"op {op.value!r} has no operands")
        elif len(operands) != ARITY[op]:
            raise MalformedNode(
                f"op {op.value!r} takes {ARITY[op]} operand(s), got {len(operands)}"
            )
        if op is Op.POWER:
            if isinstance(exponent, Value) or not isinstance(exponent, numbers.Real):
                raise MalformedNode(f"power node needs a real constant exponent, got {exponent!r}")
        elif exponent is not None:
            raise MalformedNode(f"op {op.value!r} takes no exponent")

        self.value = np.float64(value)
        self.gradient = 0.0
        self.op = op
        self.operands = operands
        self.label = label
        self.exponent = exponent
        tape = tape_mod.global_tape
        self._tape_idx = tape.push_node(self) if tape is not None else None

    @property
    def is_leaf(self) -> bool:
        return self.op is Op.LEAF

    def __str__(self):
        if self.label:
            return f"{self.label}={self.value:.3f}"
        return f"{self.value:.3f}"

    def display(self) -> str:
        """One line: name, value, gradient and, for non-leaves, op(operands)."""
        name = self.label or ("Value" if self.is_leaf else self.op.value)
        text = f"{name}({self.value:.3f} gradient={self.gradient:.3f}"
        if not self.is_leaf:
            args = ", ".join(str(o) for o in self.operands)
            if self.op is Op.POWER:
                args += f", {self.exponent:g}"
            text += f" {self.op.value}({args})"
        return text + ")"

    def __repr__(self):
        return self.display()

    # Operator overloading for arithmetic operations
    def __add__(self, other):
        from ..ops.arithmetic import add
        return add(self, other)

    def __radd__(self, other):
        from ..ops.arithmetic import add
        return add(other, self)

    def __sub__(self, other):
        from ..ops.arithmetic import subtract
        return subtract(self, other)

    def __rsub__(self, other):
        from ..ops.arithmetic import subtract
        return subtract(other, self)

    def __mul__(self, other):
        from ..ops.arithmetic import multiply
        return multiply(self, other)

    def __rmul__(self, other):
        from ..ops.arithmetic import multiply
        return multiply(other, self)

    def __truediv__(self, other):
        from ..ops.arithmetic import divide
        return divide(self, other)

    def __rtruediv__(self, other):
        from ..ops.arithmetic import divide
        return divide(other, self)

    def __neg__(self):
        from ..ops.arithmetic import neg
        return neg(self)

    def __pow__(self, other):
        from ..ops.arithmetic import power
        return power(self, other)

    def __rpow__(self, other):
        from ..ops.arithmetic import power
        return power(other, self)  # always rejected: exponent is a node

    # Activations
    def exp(self):
        from ..ops.transcendental import exp
        return exp(self)

    def tanh(self):
        from ..ops.transcendental import tanh
        return tanh(self)

    def relu(self):
        from ..ops.special import relu
        return relu(self)

    def sigmoid(self):
        from ..ops.special import sigmoid
        return sigmoid(self)

    # Backward propagation
    def backward(self):
        from .engine import backward
        return backward(self)

    def descend(self, step: float):
        from .engine import descend
        return descend(self, step)


def leaf(x, label: str = "") -> Value:
    """Wrap a raw number as a leaf node with zero gradient."""
    return Value(x, label=label)
