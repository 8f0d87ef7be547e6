"""
Network Module

This module implements the fully connected feed-forward network that powers
the game-playing agents. The network is a stack of dense layers; each layer
owns a weight matrix whose last column multiplies a constant bias input of 1.

Classes:
    Network: Layered feed-forward neural network
"""

import copy
from typing import Sequence

import numpy as np

from fourai.activations import activations
from fourai.errors      import ConfigurationError

def validate_structure(structure: Sequence[int], activation_names: Sequence[str]) -> None:
    """
    Check that a network structure and its list of activations fit together.

    Parameters:
        structure:        layer widths, input layer first
        activation_names: one activation name per layer transition

    Raises:
        ConfigurationError: if the two do not describe a valid network
    """
    if len(structure) < 2:
        raise ConfigurationError(f"network structure needs at least 2 layers, got {list(structure)}")
    if any(int(width) < 1 for width in structure):
        raise ConfigurationError(f"layer widths must be positive, got {list(structure)}")
    if len(activation_names) != len(structure) - 1:
        raise ConfigurationError(
            f"expected {len(structure) - 1} activations for structure {list(structure)}, "
            f"got {len(activation_names)}")
    for name in activation_names:
        if name not in activations:
            raise ConfigurationError(
                f"unknown activation '{name}', choose from {', '.join(activations)}")

class Network:
    """
    Fully connected feed-forward neural network.

    Layer 'i' maps a vector of structure[i] values to structure[i+1] values:
    the input is extended with a constant 1 (the bias input), multiplied by a
    weight matrix of shape (structure[i+1], structure[i]+1), and passed through
    the layer's activation function. The structure never changes once the
    network has been created.

    Public Attributes:
        structure:        layer widths, input layer first
        activation_names: activation function name of each layer
        weights:          list of weight matrices, one per layer

    Public Properties:
        number_layers:  Number of weight layers
        number_weights: Total number of weights (biases included)

    Public Methods:
        random(structure, activation_names): Create a network with random weights
        forward_pass(inputs):                Process one input vector through the network
        clone():                             Deep copy of this network
    """

    def __init__(self, structure: Sequence[int], activation_names: Sequence[str], weights: Sequence[np.ndarray]):
        """
        Create a network from explicit weight matrices.

        Parameters:
            structure:        layer widths, input layer first
            activation_names: one activation name per layer transition
            weights:          one matrix per layer transition, of shape (structure[i+1], structure[i]+1)
        """
        validate_structure(structure, activation_names)

        self.structure       : list[int]        = [int(width) for width in structure]
        self.activation_names: list[str]        = list(activation_names)
        self.weights         : list[np.ndarray] = [np.array(w, dtype=np.float64) for w in weights]

        if len(self.weights) != len(self.structure) - 1:
            raise ConfigurationError(
                f"expected {len(self.structure) - 1} weight matrices, got {len(self.weights)}")
        for i, w in enumerate(self.weights):
            expected = (self.structure[i + 1], self.structure[i] + 1)
            if w.shape != expected:
                raise ConfigurationError(f"layer {i} weights have shape {w.shape}, expected {expected}")

    @classmethod
    def random(cls, structure: Sequence[int], activation_names: Sequence[str]) -> 'Network':
        """
        Create a network whose weights are drawn independently from U[-1, 1].
        """
        validate_structure(structure, activation_names)
        weights = [np.random.uniform(-1.0, 1.0, size=(structure[i + 1], structure[i] + 1))
                   for i in range(len(structure) - 1)]
        return cls(structure, activation_names, weights)

    @property
    def number_layers(self) -> int:
        return len(self.weights)

    @property
    def number_weights(self) -> int:
        return sum(w.size for w in self.weights)

    def forward_pass(self, inputs: Sequence[float]) -> np.ndarray:
        """
        Perform a forward pass through the network.

        Parameters:
            inputs: vector of structure[0] input values

        Returns:
            1D array of structure[-1] output values
        """
        values = np.asarray(inputs, dtype=np.float64).reshape(-1)
        if values.size != self.structure[0]:
            raise ValueError(f"expected {self.structure[0]} inputs, got {values.size}")

        for w, name in zip(self.weights, self.activation_names):
            values = activations[name](w @ np.append(values, 1.0))
        return values

    def clone(self) -> 'Network':
        return copy.deepcopy(self)

    def __str__(self):
        layers = ' -> '.join(str(width) for width in self.structure)
        return f"Network({layers}; {', '.join(self.activation_names)})"

    def __repr__(self):
        return f"Network(structure={self.structure}, activation_names={self.activation_names})"
