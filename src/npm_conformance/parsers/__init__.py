"""Parsers for manifest documents and version strings."""
