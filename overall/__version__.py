"""Version information for overall."""

__version__ = "0.1.0"
