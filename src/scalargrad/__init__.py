from scalargrad.engine import Scalar, backward, topological_order, zero_grad
from scalargrad.ops import Op

__all__ = ["Op", "Scalar", "backward", "topological_order", "zero_grad"]
