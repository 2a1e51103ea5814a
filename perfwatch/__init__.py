"""Models for monitoring CPU, memory, disk, network, GPU and processes."""

__version__ = "0.1.0"