"""Cookbook cleaner: retire stale cookbook versions from a Chef server."""

__version__ = "0.1.0"
