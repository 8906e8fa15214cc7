# backprop/core/seeds.py

#-----------------------------------------------------------------------------
# We "plant" a seed (dy/dy = 1) at the scalar output and let gradients grow
# backwards through the graph.
#-----------------------------------------------------------------------------
from __future__ import annotations
from typing import Any, Callable, Dict, Iterable, List

from .var import Value
from .tape import use_tape
from .engine import backward


def value(x: Any) -> Any:
    """Return the numeric value of a Value; pass through plain numbers unchanged."""
    return x.value if isinstance(x, Value) else x


def _ensure_value(v: Any, *, label: str) -> Value:
    """Wrap a plain number as a leaf if needed; otherwise return the Value itself."""
    return v if isinstance(v, Value) else Value(v, label=label)


# ----------------------------- single-input grad ----------------------------- #
def grad(f: Callable[[Value], Value], x0: float) -> float:
    """
    Derivative of y = f(x) at x0 (single input).
    Runs one backward pass within a fresh, isolated tape.
    """
    with use_tape():
        x = _ensure_value(x0, label="x")
        y = _ensure_value(f(x), label="y")
        backward(y)
        return x.gradient


# ----------------------------- multi-input grads ----------------------------- #
def grads(f: Callable[[Dict[str, Value]], Value],
          inputs: Dict[str, float]) -> Dict[str, float]:
    """
    Gradient of y = f(vars) w.r.t. ALL inputs (dict form).
    Performs ONE backward pass to obtain all dy/dvar simultaneously.

    Parameters
    ----------
    f       : function taking a dict {name: Value} and returning a Value
    inputs  : dict {name: number}

    Returns
    -------
    dict {name: float}  # gradients in the same key order as `inputs`
    """
    with use_tape():
        xs: Dict[str, Value] = {k: _ensure_value(v, label=k) for k, v in inputs.items()}
        y = _ensure_value(f(xs), label="y")
        backward(y)
        return {k: xs[k].gradient for k in inputs.keys()}


def grads_list(f: Callable[[List[Value]], Value],
               x0_list: Iterable[float]) -> List[float]:
    """
    Same as grads(), but the inputs are provided as a list and the result is a list
    of partials in the same order.

    Example
    -------
    f = lambda xs: xs[0]*xs[0] + 3*xs[1]
    grads_list(f, [2.0, 4.0]) -> [4.0, 3.0]
    """
    with use_tape():
        xs: List[Value] = [_ensure_value(v, label=f"x{i}") for i, v in enumerate(x0_list)]
        y = _ensure_value(f(xs), label="y")
        backward(y)
        return [x.gradient for x in xs]
