"""Version information for neo-loaders."""

__version__ = "0.3.0"
