"""Geometry and rasterization of module matrices."""
