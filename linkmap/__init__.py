"""
linkmap package initializer.
Defines the package version; the CLI lives in :mod:`linkmap.cli`.
"""
__version__ = "0.1.0"
