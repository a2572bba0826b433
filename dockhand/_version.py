"""Version information for dockhand."""

__version__ = "0.1.0"
