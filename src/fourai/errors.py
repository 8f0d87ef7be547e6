"""
Exceptions raised by fourai.

ConfigurationError is raised before any population exists, when a network
structure or a training configuration is invalid. CheckpointError is raised
when a checkpoint file exists but its content cannot be turned back into a
list of agents.
"""

class ConfigurationError(ValueError):
    pass

class CheckpointError(RuntimeError):
    pass
