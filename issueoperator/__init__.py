"""Issue resource types, an in-memory issue store and a reconciler that syncs issue labels and state."""

__version__ = "0.0.1"
__all__ = ["controller", "types"]