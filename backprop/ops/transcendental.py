# backprop/ops/transcendental.py
import numpy as np
from ..core.var import Value
from ..core.node import Op
from .arithmetic import _as_value

def exp(x):
    x = _as_value(x)
    with np.errstate(over="ignore"):
        ex = np.exp(x.value)
    return Value(ex, op=Op.EXP, operands=(x,))

def tanh(x):
    x = _as_value(x)
    return Value(np.tanh(x.value), op=Op.TANH, operands=(x,))
