"""Mesh writers."""

from .stl import write_stl

__all__ = ["write_stl"]
