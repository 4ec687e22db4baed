"""Geometry resolver plugin."""

from .algo.geometry_resolver import needs_cropping, resolve_geometry
from .schema import CropSpec, Geometry

__all__ = ["CropSpec", "Geometry", "needs_cropping", "resolve_geometry"]
