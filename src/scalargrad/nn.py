import numpy as np

from scalargrad.engine import Scalar, zero_grad


class Module:

    def zero_grad(self):
        zero_grad(self.parameters())

    def parameters(self):
        return []


class Neuron(Module):

    def __init__(self, nin, nonlin=True, rng=None):
        if nin < 1:
            raise ValueError(f"a neuron needs at least one input, got nin={nin}")
        rng = np.random.default_rng() if rng is None else rng
        self.w = [Scalar(w) for w in rng.uniform(-1.0, 1.0, size=nin)]
        self.b = Scalar(rng.uniform(-1.0, 1.0))
        self.nonlin = nonlin

    def __call__(self, x):
        if len(x) != len(self.w):
            raise ValueError(f"expected {len(self.w)} inputs, got {len(x)}")
        act = self.b
        for wi, xi in zip(self.w, x):
            act = act + wi * xi
        return act.tanh() if self.nonlin else act

    def parameters(self):
        return self.w + [self.b]

    def __repr__(self):
        return f"{'Tanh' if self.nonlin else 'Linear'}Neuron({len(self.w)})"


class Layer(Module):

    def __init__(self, nin, nout, **kwargs):
        if nout < 1:
            raise ValueError(f"a layer needs at least one neuron, got nout={nout}")
        self.neurons = [Neuron(nin, **kwargs) for _ in range(nout)]

    def __call__(self, x):
        return [n(x) for n in self.neurons]

    def parameters(self):
        return [p for n in self.neurons for p in n.parameters()]

    def __repr__(self):
        return f"Layer of [{', '.join(str(n) for n in self.neurons)}]"


class MLP(Module):
    """Fully connected tanh network.

    `MLP(3, [4, 4, 1])` maps 3 inputs through two hidden layers of 4 neurons to
    a single output. Calling it returns the list of output nodes; with
    `linear_output=True` the final layer skips the activation.
    """

    def __init__(self, nin, nouts, linear_output=False, seed=None):
        if not nouts:
            raise ValueError("an MLP needs at least one layer")
        rng = np.random.default_rng(seed)
        sz = [nin] + list(nouts)
        last = len(nouts) - 1
        self.layers = [
            Layer(sz[i], sz[i + 1], nonlin=not (linear_output and i == last), rng=rng)
            for i in range(len(nouts))
        ]

    def __call__(self, x):
        for layer in self.layers:
            x = layer(x)
        return x

    def parameters(self):
        return [p for layer in self.layers for p in layer.parameters()]

    def __repr__(self):
        return f"MLP of [{', '.join(str(layer) for layer in self.layers)}]"
