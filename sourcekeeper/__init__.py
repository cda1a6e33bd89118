"""Source objects, conditions, artifacts and reconciliation helpers."""

__version__ = "0.1.0"