"""Geometry resolution algorithms."""
