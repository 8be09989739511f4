"""Alias, rewrite and minify stages consumed by a host JavaScript bundler."""

__version__ = "0.1.0"
