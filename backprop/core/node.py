# backprop/core/node.py
from enum import Enum
from typing import Dict


class Op(Enum):
    """
    Tag identifying the differentiable primitive that produced a node.

    Derived operators (subtract, divide, sigmoid, neg) have no tag of their
    own: they are composed from the primitives below, so their gradients come
    out of the chain rule instead of a separate formula.
    """
    LEAF = "leaf"
    ADD = "add"
    MULTIPLY = "multiply"
    POWER = "power"
    EXP = "exp"
    TANH = "tanh"
    RELU = "relu"


# operand count required by each op
ARITY: Dict[Op, int] = {
    Op.LEAF: 0,
    Op.ADD: 2,
    Op.MULTIPLY: 2,
    Op.POWER: 1,   # the exponent is a plain constant, not an operand
    Op.EXP: 1,
    Op.TANH: 1,
    Op.RELU: 1,
}
