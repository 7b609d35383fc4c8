"""Guildhall: clan management for configurable games."""

__version__ = "0.1.0"
