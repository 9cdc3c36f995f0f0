"""Converters from robot memory, motion and sensor readings to stamped records passed to callbacks."""

__version__ = "0.1.0"