"""D'Hondt seat allocation for parliamentary elections."""

__version__ = "0.1.0"
