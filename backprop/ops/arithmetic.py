# backprop/ops/arithmetic.py
import numbers
import numpy as np
from ..core.var import Value
from ..core.node import Op
from ..core.errors import UnsupportedOperandKind

def _as_value(x):
    """Ensure x is a Value; otherwise wrap it as a fresh leaf."""
    return x if isinstance(x, Value) else Value(x)

def _binary(x, y, f, tag):
    """
    Generic binary primitive:
      - boxes raw numbers on either side
      - computes out.value = f(x.value, y.value) eagerly
      - records (x, y) as operands; the gradient rule is looked up by `tag`
    """
    x = _as_value(x)
    y = _as_value(y)
    with np.errstate(divide="ignore", over="ignore", invalid="ignore"):
        val = f(x.value, y.value)
    return Value(val, op=tag, operands=(x, y))

def add(x, y):      return _binary(x, y, lambda a, b: a + b, Op.ADD)
def multiply(x, y): return _binary(x, y, lambda a, b: a * b, Op.MULTIPLY)

def power(x, n):
    """
    Power with a constant real exponent:
      out.value = x.value ** n

    Only the base is differentiable. A Value (or anything non-real) as the
    exponent raises UnsupportedOperandKind.
    """
    if isinstance(n, Value) or not isinstance(n, numbers.Real):
        raise UnsupportedOperandKind(
            f"power exponent must be a real constant, got {type(n).__name__}"
        )
    x = _as_value(x)
    with np.errstate(divide="ignore", over="ignore", invalid="ignore"):
        val = x.value ** n
    return Value(val, op=Op.POWER, operands=(x,), exponent=n)

# Secondary operations defined in terms of primary

def neg(x):
    return multiply(x, Value(-1))

def subtract(x, y):
    # x + y * -1
    return add(x, multiply(y, Value(-1)))

def divide(x, y):
    # x * y ** -1; a zero divisor yields inf/nan, never an exception
    return multiply(x, power(y, -1))
