"""Life in Weeks timeline service."""

__version__ = "0.1.0"
