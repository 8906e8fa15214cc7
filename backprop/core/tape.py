# backprop/core/tape.py
from __future__ import annotations
from typing import Iterator, List, Optional
from contextlib import contextmanager


class Tape:
    """
    Append-only arena: records every node in construction order.

    A node's position on the tape is stable for the tape's lifetime and is
    stored back on the node as `_tape_idx`. Since operands always exist before
    their consumers, tape order is itself a valid forward order.
    """
    def __init__(self):
        self.nodes: List = []

    def reset(self):
        self.nodes.clear()

    def push_node(self, node) -> int:
        """Append `node` and return its index on this tape."""
        self.nodes.append(node)
        return len(self.nodes) - 1

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator:
        return iter(self.nodes)

# Active tape; None means nodes are not recorded anywhere
global_tape: Optional[Tape] = None

@contextmanager
def use_tape(tape: Optional[Tape] = None):
    """
    Context manager to record onto a fresh (or given) tape:
        with use_tape():
            ... build computation ...
            backward(y)
    Outside such a block nothing is recorded, so a graph is freed as soon
    as the caller drops its references.
    """
    from . import tape as _tape_mod  # local import to avoid cycles
    prev = _tape_mod.global_tape
    try:
        _tape_mod.global_tape = tape if tape is not None else Tape()
        yield _tape_mod.global_tape
    finally:
        _tape_mod.global_tape = prev
