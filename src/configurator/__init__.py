"""Dimension constraint and formula engine for a parametric cabinet configurator."""

__version__ = "0.1.0"
