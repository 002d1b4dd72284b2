"""A falling-block puzzle game with a seven-piece bag, hold slot, hard drop and lock delay."""

__version__ = "0.1.0"
__all__ = ["__version__"]