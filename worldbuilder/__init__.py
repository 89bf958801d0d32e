"""Worldbuilder API: collaborative tabletop-RPG worldbuilding backend."""

__version__ = "0.1.0"
