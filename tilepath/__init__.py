"""Pathfinding on square, isometric and hexagonal 2D tile maps."""

__version__ = "0.1.0"