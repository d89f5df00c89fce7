import logging
import numbers

import numpy as np

from scalargrad.ops import Op, forward, local_grads

logger = logging.getLogger(__name__)


class Scalar:
    """A scalar node in a dynamically built computation graph.

    Every arithmetic operation on a Scalar returns a new Scalar holding the
    forward value and references to its operands, so the graph reachable from
    any node can later be walked backwards by `backward`.
    """

    def __init__(self, data, children=(), op=None, exponent=None):
        children = tuple(children)
        if op is None and children:
            raise ValueError("a Scalar with operands needs the op that produced it")
        if op is not None and len(children) != op.arity:
            raise ValueError(f"{op} takes {op.arity} operand(s), got {len(children)}")
        self.data = data
        self.grad = 0.0
        self.prev = children
        self.label = None
        self._op = op
        self._exponent = exponent

    @property
    def data(self):
        return self._data

    @data.setter
    def data(self, value):
        if not isinstance(value, numbers.Real):
            raise TypeError(f"Scalar data must be a real number, got {type(value).__name__}")
        self._data = np.float64(value)

    @property
    def op(self):
        return self._op

    @property
    def exponent(self):
        return self._exponent

    @property
    def backward_rule(self):
        return self._backward if self.prev else None

    def __repr__(self):
        name = f"{self.label}: " if self.label else ""
        return f"Scalar({name}data={self.data}, grad={self.grad})"

    def _backward(self):
        if self._op.arity == 2:
            lhs, rhs = self.prev
            args = (lhs.data, rhs.data)
        else:
            args = (self.prev[0].data, self._exponent)
        for operand, local in zip(self.prev, local_grads(self._op, self.data, *args)):
            operand.grad += local * self.grad

    @staticmethod
    def _binary(op, lhs, rhs):
        return Scalar(forward(op, lhs.data, rhs.data), (lhs, rhs), op)

    @staticmethod
    def _unary(op, x, exponent=None):
        return Scalar(forward(op, x.data, exponent), (x,), op, exponent)

    def __add__(self, other):
        other = _wrap(other)
        if other is None:
            return NotImplemented
        return Scalar._binary(Op.ADD, self, other)

    def __radd__(self, other):
        other = _wrap(other)
        if other is None:
            return NotImplemented
        return Scalar._binary(Op.ADD, other, self)

    def __sub__(self, other):
        other = _wrap(other)
        if other is None:
            return NotImplemented
        return Scalar._binary(Op.SUB, self, other)

    def __rsub__(self, other):
        other = _wrap(other)
        if other is None:
            return NotImplemented
        return Scalar._binary(Op.SUB, other, self)

    def __mul__(self, other):
        other = _wrap(other)
        if other is None:
            return NotImplemented
        return Scalar._binary(Op.MUL, self, other)

    def __rmul__(self, other):
        other = _wrap(other)
        if other is None:
            return NotImplemented
        return Scalar._binary(Op.MUL, other, self)

    def __truediv__(self, other):
        other = _wrap(other)
        if other is None:
            return NotImplemented
        return Scalar._binary(Op.DIV, self, other)

    def __rtruediv__(self, other):
        other = _wrap(other)
        if other is None:
            return NotImplemented
        return Scalar._binary(Op.DIV, other, self)

    def __neg__(self):
        return Scalar._unary(Op.NEG, self)

    def __pow__(self, exponent):
        # exponents are constants, not graph nodes
        if isinstance(exponent, Scalar) or not isinstance(exponent, numbers.Real):
            raise TypeError(f"exponent must be an int or float, got {type(exponent).__name__}")
        return Scalar._unary(Op.POW, self, exponent)

    def tanh(self):
        return Scalar._unary(Op.TANH, self)

    def exp(self):
        return Scalar._unary(Op.EXP, self)

    def backward(self):
        backward(self)


def _wrap(other):
    if isinstance(other, Scalar):
        return other
    if isinstance(other, numbers.Real):
        return Scalar(other)
    return None


def topological_order(root):
    """Return every node reachable from `root`, each after all of its operands.

    Nodes are tracked by identity, so distinct leaves holding equal values are
    kept apart. The walk is iterative to cope with deep graphs.
    """
    topo = []
    visited = {root}
    stack = [(root, iter(root.prev))]
    while stack:
        node, operands = stack[-1]
        for child in operands:
            if child not in visited:
                visited.add(child)
                stack.append((child, iter(child.prev)))
                break
        else:
            stack.pop()
            topo.append(node)
    return topo


def backward(root):
    """Accumulate d(root)/d(node) into `grad` for every ancestor of `root`.

    Gradients are added to whatever each node already holds; call `zero_grad`
    first when reusing nodes across passes.
    """
    topo = topological_order(root)
    logger.debug("backward pass over %d nodes", len(topo))

    root.grad = 1.0
    with np.errstate(all="ignore"):
        for node in reversed(topo):
            rule = node.backward_rule
            if rule is not None:
                rule()


def zero_grad(nodes):
    for node in nodes:
        node.grad = 0.0
