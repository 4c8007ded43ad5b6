"""Conventional commit parsing, semantic version bumps and changelog rendering."""

__version__ = "0.1.0"