"""Admin management API for a MongoDB-backed admin collection."""

__version__ = "1.0.0"
