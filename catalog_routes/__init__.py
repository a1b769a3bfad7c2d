"""Route and slug consistency engine for a statically exported multi-locale catalog."""

__version__ = "0.1.0"
