import numpy as np

def sigmoid_activation(z):
    # Clip input to avoid overflow in exp; the result saturates long before ±500
    z = np.clip(z, -500, 500)
    return 1.0 / (1.0 + np.exp(-z))

def elu_activation(z):
    # Only the negative branch goes through exp, so clip from above at 0
    return np.where(z >= 0, z, 0.2 * (np.exp(np.minimum(z, 0.0)) - 1.0))

def relu_activation(z):
    return np.maximum(0.0, z)

activations = {
    "sigmoid": sigmoid_activation,
    "elu"    : elu_activation,
    "relu"   : relu_activation,
    }
