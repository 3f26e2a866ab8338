"""Simulated quantum backend: a threaded host/device model running registered kernels on state-vector registers."""

__version__ = "0.1.0"