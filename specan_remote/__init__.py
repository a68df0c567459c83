"""Web remote control for the spectrum analyzer LED display."""

from .version import __version__

__all__ = ["__version__"]
