"""showcase: bounded content listings rendered through per-type views."""

__version__ = "0.1.0"
