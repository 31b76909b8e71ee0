"""Baseline checks and non-baseline syntax diagnostics for web code."""

from ._version import __version__

__all__ = ["__version__"]
