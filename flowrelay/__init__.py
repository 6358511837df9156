"""Flowrelay: relay between chat users and a dialogue engine."""

__version__ = "0.1.0"
