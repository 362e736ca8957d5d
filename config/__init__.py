"""Packaged default configuration and vocabulary rule files."""
