"""Inspect Docker containers and the resource usage of their processes."""

__version__ = "0.1.0"
