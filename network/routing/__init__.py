"""Routing over the road network."""

from .navigator import Navigator, PathStep

__all__ = ["Navigator", "PathStep"]
