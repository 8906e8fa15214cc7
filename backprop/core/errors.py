# backprop/core/errors.py


class BackPropError(Exception):
    """Base class for graph-construction errors raised by backprop."""


class MalformedNode(BackPropError, ValueError):
    """Operands without an op tag, an op tag without operands, or wrong arity."""


class UnsupportedOperandKind(BackPropError, TypeError):
    """A differentiable node (or a non-number) was given where only a constant is allowed."""
