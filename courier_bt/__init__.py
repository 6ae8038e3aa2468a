"""Courier robot delivery driven by a behavior tree."""

__version__ = "0.1.0"
