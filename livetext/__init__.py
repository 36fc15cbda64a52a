"""LiveText backend: locate rendered page text in project sources and rewrite it."""

__version__ = "0.3.0"
