# backprop/core/engine.py
from __future__ import annotations
import logging
import numpy as np
from typing import Callable, Dict, List

from . import tape as tape_mod
from .node import Op
from .var import Value

logger = logging.getLogger(__name__)


# ---------------- Local-gradient rules ---------------- #
# Each rule reads the node's own accumulated gradient `g` and the values of
# the stored operands, and adds its contribution into the operands.

def _add_rule(node: Value):
    a, b = node.operands
    g = node.gradient
    a.gradient += g
    b.gradient += g

def _multiply_rule(node: Value):
    a, b = node.operands
    g = node.gradient
    a.gradient += g * b.value
    b.gradient += g * a.value

def _power_rule(node: Value):
    (a,) = node.operands
    n = node.exponent
    a.gradient += node.gradient * (n * a.value ** (n - 1))

def _exp_rule(node: Value):
    (a,) = node.operands
    a.gradient += node.gradient * node.value

def _tanh_rule(node: Value):
    (a,) = node.operands
    a.gradient += node.gradient * (1.0 - node.value ** 2)

def _relu_rule(node: Value):
    (a,) = node.operands
    a.gradient += node.gradient * (1.0 if a.value > 0 else 0.0)

LOCAL_GRADIENT: Dict[Op, Callable[[Value], None]] = {
    Op.ADD: _add_rule,
    Op.MULTIPLY: _multiply_rule,
    Op.POWER: _power_rule,
    Op.EXP: _exp_rule,
    Op.TANH: _tanh_rule,
    Op.RELU: _relu_rule,
}


# ---------------- Traversal ---------------- #

def topological_order(root: Value) -> List[Value]:
    """
    Depth-first post-order of every node reachable from `root`.

    Operands are visited (in order) before the node that consumes them, and
    each node is placed exactly once, the first time it is reached. `root`
    is the last element, so iterating the result backwards visits every
    consumer of a node before the node itself.
    """
    order: List[Value] = []
    visited = set()
    stack = [(root, False)]
    while stack:
        node, expanded = stack.pop()
        if expanded:
            order.append(node)
            continue
        if id(node) in visited:
            continue
        visited.add(id(node))
        stack.append((node, True))
        # reversed so the first operand is popped (and finished) first
        for operand in reversed(node.operands):
            if id(operand) not in visited:
                stack.append((operand, False))
    return order

def reset_gradients(root: Value) -> List[Value]:
    """Zero the gradient of every node reachable from `root`, once each."""
    order = topological_order(root)
    for node in order:
        node.gradient = 0.0
    return order

def backward(root: Value) -> Value:
    """
    Run a full reverse pass from `root`:
        1) reset every reachable gradient to 0
        2) seed root.gradient = 1
        3) apply each node's local-gradient rule once, consumers first

    Calling it twice on an unchanged graph gives identical gradients.
    """
    order = reset_gradients(root)
    root.gradient = 1.0
    logger.debug("backward: %d reachable nodes", len(order))

    with np.errstate(divide="ignore", over="ignore", invalid="ignore"):
        for node in reversed(order):
            rule = LOCAL_GRADIENT.get(node.op)
            if rule is not None:  # leaves terminate propagation
                rule(node)
    return root

def zero_gradients():
    """
    Set the gradient of every node on the active tape to zero
    (no-op outside `use_tape()`).
    Unlike `reset_gradients`, this does not need a root.
    """
    tape = tape_mod.global_tape
    if tape is None:
        return
    for node in tape.nodes:
        node.gradient = 0.0

def descend(node: Value, step: float) -> Value:
    """
    One gradient-descent update: node.value -= step * node.gradient.
    Leaves the gradient and the graph untouched.
    """
    with np.errstate(over="ignore", invalid="ignore"):
        node.value = np.float64(node.value - step * node.gradient)
    return node
