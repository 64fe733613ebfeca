"""Upload files as GitHub release assets."""

__version__ = "0.1.0"
