"""Import, store and search crate documentation sets, with the state of a viewer application."""

__version__ = "0.1.0"