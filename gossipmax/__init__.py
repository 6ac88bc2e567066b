"""Simulation of majority-voted subtask computation with gossiped server scores."""

__version__ = "0.1.0"
__all__ = ["messages", "server", "client", "simulation"]