"""Namespace path-resolution benchmarking: datasets, resolvers, runners and CSV output."""

__version__ = "0.1.0"