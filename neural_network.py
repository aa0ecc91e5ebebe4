"""
Feed-forward Neural Network for ForageSim.

A fixed-topology, fully connected network:
  inputs → [hidden layers] → outputs

Every neuron owns one bias and one weight per input. Forward pass:
  out = max(0, W · x + b)      (ReLU, applied on every layer)

Parameters flatten to a single sequence (the chromosome) in this order:
  layer by layer, neuron by neuron, bias first, then that neuron's weights.
"""

import numpy as np
from config import WEIGHT_RANGE


class LayerTopology:
    """Size of one layer of the network."""
    __slots__ = ("neurons",)

    def __init__(self, neurons: int):
        self.neurons = neurons

    def __repr__(self):
        return f"LayerTopology(neurons={self.neurons})"


class Layer:
    """
    One fully connected layer.
      weights: float array of shape (outputs, inputs)
      biases:  float array of shape (outputs,)
    """
    __slots__ = ("weights", "biases")

    def __init__(self, weights: np.ndarray, biases: np.ndarray):
        self.weights = weights
        self.biases  = biases

    @property
    def inputs(self) -> int:
        return self.weights.shape[1]

    @property
    def outputs(self) -> int:
        return self.weights.shape[0]

    def propagate(self, inputs: np.ndarray) -> np.ndarray:
        return np.maximum(0.0, self.weights @ inputs + self.biases)


class Network:
    """
    Stateless forward model: propagate() keeps nothing between calls.
    """

    def __init__(self, layers: list):
        self.layers = layers

    # ──────────────────────────────────────────────────────────────────────────
    # Construction
    # ──────────────────────────────────────────────────────────────────────────

    @staticmethod
    def parameter_count(topology: list) -> int:
        """Total number of weights + biases for a topology."""
        return sum((a.neurons + 1) * b.neurons
                   for a, b in zip(topology, topology[1:]))

    @classmethod
    def random(cls, topology: list, rng) -> "Network":
        """Network with every weight and bias drawn from U[-R, R]."""
        _check_topology(topology)
        params = rng.uniform(-WEIGHT_RANGE, WEIGHT_RANGE,
                             size=cls.parameter_count(topology))
        return cls.from_weights(topology, params)

    @classmethod
    def from_weights(cls, topology: list, weights) -> "Network":
        """
        Rebuild a network from a flat weight sequence (see module docstring
        for the ordering). Raises ValueError if the sequence is too short or
        too long for the topology.
        """
        _check_topology(topology)
        flat     = np.fromiter(weights, dtype=np.float64)
        expected = cls.parameter_count(topology)
        if flat.size != expected:
            raise ValueError(
                f"got {flat.size} weights, topology needs {expected}")

        layers = []
        offset = 0
        for a, b in zip(topology, topology[1:]):
            n_in, n_out = a.neurons, b.neurons
            size  = (n_in + 1) * n_out
            block = flat[offset:offset + size].reshape(n_out, n_in + 1)
            layers.append(Layer(block[:, 1:].copy(), block[:, 0].copy()))
            offset += size
        return cls(layers)

    # ──────────────────────────────────────────────────────────────────────────

    def weights(self):
        """Lazily yield every parameter in from_weights() order."""
        for layer in self.layers:
            for bias, row in zip(layer.biases, layer.weights):
                yield float(bias)
                for w in row:
                    yield float(w)

    def propagate(self, inputs) -> np.ndarray:
        x = np.asarray(inputs, dtype=np.float64)
        if x.shape != (self.layers[0].inputs,):
            raise ValueError(
                f"expected {self.layers[0].inputs} inputs, got {x.shape}")
        for layer in self.layers:
            x = layer.propagate(x)
        return x

    def topology(self) -> list:
        sizes = [self.layers[0].inputs] + [l.outputs for l in self.layers]
        return [LayerTopology(n) for n in sizes]

    def summary(self) -> str:
        sizes = " → ".join(str(t.neurons) for t in self.topology())
        return f"Network ({sizes}, {sum(1 for _ in self.weights())} parameters)"


def _check_topology(topology: list):
    if len(topology) < 2:
        raise ValueError("a network needs at least an input and an output layer")
