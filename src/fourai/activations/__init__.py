"""
Activations Package

This package provides the activation functions applied after each layer of
the neural networks.

Exported:
    activations: Dictionary mapping activation function names to functions
    Individual activation functions: sigmoid_activation, elu_activation, relu_activation
"""

from fourai.activations.basic_activations import (
    activations,
    sigmoid_activation,
    elu_activation,
    relu_activation
)

__all__ = [
    'activations',
    'sigmoid_activation',
    'elu_activation',
    'relu_activation'
]
